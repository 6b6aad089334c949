"""Seed a demo catalog database for local runs."""

from __future__ import annotations

import argparse
from decimal import Decimal

from comboshop.catalog import write_catalog
from comboshop.config import DB_PATH
from comboshop.models import Category, Product

DEMO_CATEGORIES: list[Category] = [
    Category("cat-gin", "Gin"),
    Category("cat-vodka", "Vodka"),
    Category("cat-whisky", "Whisky"),
    Category("cat-cachaca", "Cachaça"),
    Category("cat-energy", "Energéticos"),
    Category("cat-ice", "Gelo"),
    Category("cat-caipirinhas", "Caipirinhas"),
    Category("cat-especiais", "Drinks Especiais"),
    Category("cat-copao", "Copão"),
    Category("cat-beer", "Cervejas"),
]


def _p(
    product_id: str,
    name: str,
    price: str,
    category_id: str,
    stock: int,
    combo: bool = True,
    prepared: bool = False,
) -> Product:
    return Product(
        product_id=product_id,
        name=name,
        sale_price=Decimal(price),
        category_id=category_id,
        stock=stock,
        combo_eligible=combo,
        is_prepared=prepared,
    )


DEMO_PRODUCTS: list[Product] = [
    _p("gin-tanqueray", "Gin Tanqueray 750ml", "129.90", "cat-gin", 6),
    _p("gin-gordons", "Gin Gordon's 750ml", "69.90", "cat-gin", 12),
    _p("vodka-absolut", "Vodka Absolut 1L", "99.90", "cat-vodka", 8),
    _p("vodka-smirnoff", "Vodka Smirnoff 998ml", "44.90", "cat-vodka", 20),
    _p("whisky-jw-red", "Whisky Johnnie Walker Red Label 1L", "119.90", "cat-whisky", 4),
    _p("whisky-old-parr", "Whisky Old Parr 12 anos 1L", "189.90", "cat-whisky", 0),
    _p("cachaca-ypioca", "Cachaça Ypióca Ouro 965ml", "29.90", "cat-cachaca", 15),
    _p("redbull-2l", "Red Bull Energy Drink 2L", "34.90", "cat-energy", 5),
    _p("monster-2l", "Monster Energy 2L", "29.90", "cat-energy", 3),
    _p("redbull-can", "Red Bull Energy Drink Lata 250ml", "8.90", "cat-energy", 48),
    _p("monster-can", "Monster Energy Lata 473ml", "9.90", "cat-energy", 24),
    _p("tnt-can", "TNT Energy Drink Lata 269ml", "5.50", "cat-energy", 3),
    _p("gelo-cubo", "Gelo em Cubo 2kg", "12.00", "cat-ice", 30),
    _p("gelo-saco", "Gelo Saco Grande 10kg", "29.90", "cat-ice", 2),
    _p("gelo-coco", "Gelo de Coco", "4.50", "cat-ice", 40),
    _p("gelo-maracuja", "Gelo de Maracujá", "4.50", "cat-ice", 40),
    _p("gelo-melancia", "Gelo de Melancia", "4.50", "cat-ice", 2),
    _p("gelo-triturado", "Gelo Triturado Premium", "15.00", "cat-ice", 20),
    _p("caipi-limao", "Caipirinha de Limão", "18.00", "cat-caipirinhas", 0, combo=False, prepared=True),
    _p("caipi-morango", "Caipirinha de Morango", "20.00", "cat-caipirinhas", 0, combo=False, prepared=True),
    _p("especial-moscow", "Moscow Mule", "28.00", "cat-especiais", 0, combo=False, prepared=True),
    _p("copao-gin", "Copão de Gin Tropical", "25.00", "cat-copao", 10, combo=False),
    _p("cerveja-heineken", "Cerveja Heineken Long Neck", "7.90", "cat-beer", 60, combo=False),
]


def seed_demo_catalog(db_path: str = DB_PATH) -> None:
    """Write the demo catalog to ``db_path``, replacing existing rows."""
    write_catalog(db_path, DEMO_CATEGORIES, DEMO_PRODUCTS)


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed the comboshop demo catalog.")
    parser.add_argument("--db", default=DB_PATH, help=f"SQLite file to write (default: {DB_PATH})")
    args = parser.parse_args()
    seed_demo_catalog(args.db)
    print(f"Seeded {len(DEMO_PRODUCTS)} products into {args.db}")


if __name__ == "__main__":
    main()
