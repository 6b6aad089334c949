"""Read-only SQLite catalog source and the immutable snapshot built from it."""

from __future__ import annotations

import logging
import sqlite3
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Iterable, Protocol

from comboshop.config import DB_PATH
from comboshop.models import Category, Product

logger = logging.getLogger(__name__)


class CatalogError(RuntimeError):
    """Raised when the catalog source cannot be read."""


class CatalogSource(Protocol):
    def fetch_products(self) -> list[Product]: ...

    def fetch_categories(self) -> list[Category]: ...


@dataclass(frozen=True)
class CatalogSnapshot:
    """Point-in-time view of products and categories for one session."""

    products: tuple[Product, ...] = ()
    categories: tuple[Category, ...] = ()
    _products_by_id: dict[str, Product] = field(default_factory=dict, init=False, repr=False, compare=False)
    _categories_by_id: dict[str, Category] = field(default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "products", tuple(self.products))
        object.__setattr__(self, "categories", tuple(self.categories))
        self._products_by_id.update((p.product_id, p) for p in self.products)
        self._categories_by_id.update((c.category_id, c) for c in self.categories)

    def product_by_id(self, product_id: str) -> Product | None:
        return self._products_by_id.get(product_id)

    def category_by_id(self, category_id: str | None) -> Category | None:
        if category_id is None:
            return None
        return self._categories_by_id.get(category_id)

    def category_name_for(self, product: Product) -> str:
        category = self.category_by_id(product.category_id)
        return category.name if category is not None else ""

    @property
    def is_empty(self) -> bool:
        return not self.products


def _parse_price(raw: object) -> Decimal:
    try:
        return Decimal(str(raw))
    except (InvalidOperation, ValueError):
        logger.warning("catalog price not parseable raw=%r, using 0", raw)
        return Decimal("0")


def _product_from_row(row: sqlite3.Row) -> Product:
    return Product(
        product_id=str(row["id"]),
        name=str(row["name"]),
        sale_price=_parse_price(row["sale_price"]),
        category_id=row["category_id"],
        is_active=bool(row["is_active"]),
        stock=int(row["stock"] or 0),
        combo_eligible=bool(row["combo_eligible"]),
        is_prepared=bool(row["is_prepared"]),
        image_url=row["image_url"],
        description=row["description"],
    )


class SqliteCatalogSource:
    """Catalog queries against a local SQLite file. Never writes."""

    def __init__(self, db_path: str = DB_PATH) -> None:
        self.db_path = db_path

    def _connect(self) -> sqlite3.Connection:
        db_file = Path(self.db_path)
        if not db_file.is_file():
            raise CatalogError(f"Catalog database not found: {db_file}")
        conn = sqlite3.connect(f"file:{db_file}?mode=ro", uri=True)
        conn.row_factory = sqlite3.Row
        return conn

    def fetch_products(self) -> list[Product]:
        sql = """
        SELECT id, name, sale_price, category_id, is_active, stock,
               combo_eligible, is_prepared, image_url, description
        FROM products
        ORDER BY name COLLATE NOCASE
        """
        try:
            conn = self._connect()
            try:
                rows = conn.execute(sql).fetchall()
            finally:
                conn.close()
        except sqlite3.Error as exc:
            raise CatalogError(f"Failed to read products: {exc}") from exc

        products = []
        for row in rows:
            try:
                products.append(_product_from_row(row))
            except (TypeError, ValueError) as exc:
                raise CatalogError(f"Malformed product row id={row['id']!r}: {exc}") from exc
        return products

    def fetch_categories(self) -> list[Category]:
        sql = "SELECT id, name, is_active FROM categories ORDER BY name COLLATE NOCASE"
        try:
            conn = self._connect()
            try:
                rows = conn.execute(sql).fetchall()
            finally:
                conn.close()
        except sqlite3.Error as exc:
            raise CatalogError(f"Failed to read categories: {exc}") from exc

        return [
            Category(category_id=str(row["id"]), name=str(row["name"]), is_active=bool(row["is_active"]))
            for row in rows
        ]


def load_snapshot(source: CatalogSource) -> CatalogSnapshot:
    """Fetch products and categories once and freeze them into a snapshot."""
    categories = source.fetch_categories()
    products = source.fetch_products()
    logger.info("catalog loaded products=%d categories=%d", len(products), len(categories))
    return CatalogSnapshot(products=tuple(products), categories=tuple(categories))


def bootstrap_schema(conn: sqlite3.Connection) -> None:
    """Create catalog schema if it does not already exist."""
    conn.executescript(
        """
        CREATE TABLE IF NOT EXISTS categories (
            id TEXT PRIMARY KEY,
            name TEXT NOT NULL,
            is_active INTEGER NOT NULL DEFAULT 1
        );

        CREATE TABLE IF NOT EXISTS products (
            id TEXT PRIMARY KEY,
            name TEXT NOT NULL,
            sale_price TEXT NOT NULL,
            category_id TEXT,
            is_active INTEGER NOT NULL DEFAULT 1,
            stock INTEGER NOT NULL DEFAULT 0,
            combo_eligible INTEGER NOT NULL DEFAULT 0,
            is_prepared INTEGER NOT NULL DEFAULT 0,
            image_url TEXT,
            description TEXT,
            FOREIGN KEY(category_id) REFERENCES categories(id)
        );

        CREATE INDEX IF NOT EXISTS idx_products_category_id
            ON products(category_id);
        """
    )


def write_catalog(db_path: str, categories: Iterable[Category], products: Iterable[Product]) -> None:
    """Replace the catalog contents of ``db_path`` with the given rows."""
    db_file = Path(db_path)
    db_file.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(db_file)
    try:
        with conn:
            bootstrap_schema(conn)
            conn.execute("DELETE FROM products")
            conn.execute("DELETE FROM categories")
            conn.executemany(
                "INSERT INTO categories (id, name, is_active) VALUES (?, ?, ?)",
                [(c.category_id, c.name, int(c.is_active)) for c in categories],
            )
            conn.executemany(
                """
                INSERT INTO products (
                    id, name, sale_price, category_id, is_active, stock,
                    combo_eligible, is_prepared, image_url, description
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                [
                    (
                        p.product_id,
                        p.name,
                        str(p.sale_price),
                        p.category_id,
                        int(p.is_active),
                        p.stock,
                        int(p.combo_eligible),
                        int(p.is_prepared),
                        p.image_url,
                        p.description,
                    )
                    for p in products
                ],
            )
    finally:
        conn.close()
