"""Domain models for comboshop."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


@dataclass(frozen=True)
class Category:
    """A catalog category."""

    category_id: str
    name: str
    is_active: bool = True


@dataclass(frozen=True)
class Product:
    """A catalog product as read from the catalog source."""

    product_id: str
    name: str
    sale_price: Decimal
    category_id: str | None = None
    is_active: bool = True
    stock: int = 0
    combo_eligible: bool = False
    is_prepared: bool = False
    image_url: str | None = None
    description: str | None = None


class RoleClass(Enum):
    """Combo role a product can play, derived from its name and category."""

    SPIRIT = "spirit"
    ENERGY_DRINK_2L = "energy_drink_2l"
    ENERGY_DRINK_PACK = "energy_drink_pack"
    ICE = "ice"


SINGLE_LARGE_BOTTLE = "single_large_bottle"
MULTI_CAN_PACK = "multi_can_pack"
MIN_CAN_PACK_SIZE = 2


@dataclass(frozen=True)
class PackOption:
    """Purchase unit for the energy drink of a combo."""

    kind: str
    size: int = 1

    def __post_init__(self) -> None:
        if self.kind not in {SINGLE_LARGE_BOTTLE, MULTI_CAN_PACK}:
            raise ValueError(f"Unknown pack option kind: {self.kind!r}")
        if self.kind == SINGLE_LARGE_BOTTLE and self.size != 1:
            raise ValueError("A single large bottle always has size 1")
        if self.kind == MULTI_CAN_PACK and self.size < MIN_CAN_PACK_SIZE:
            raise ValueError(f"A can pack needs at least {MIN_CAN_PACK_SIZE} cans")

    @property
    def is_can_pack(self) -> bool:
        return self.kind == MULTI_CAN_PACK

    @classmethod
    def single_large_bottle(cls) -> PackOption:
        return cls(SINGLE_LARGE_BOTTLE, 1)

    @classmethod
    def multi_can_pack(cls, size: int) -> PackOption:
        return cls(MULTI_CAN_PACK, size)


DEFAULT_PACK_OPTION = PackOption.single_large_bottle()


@dataclass(frozen=True)
class ComboLine:
    """A product copied into a combo with its resolved quantity."""

    product: Product
    quantity: int

    def __post_init__(self) -> None:
        if self.quantity <= 0:
            raise ValueError("Combo line quantity must be positive")


@dataclass(frozen=True)
class ComboRecord:
    """An assembled combo. Owned by the cart once handed over."""

    combo_id: str
    created_at: str
    spirit: ComboLine
    energy_drink: ComboLine
    pack_option: PackOption
    ice: tuple[ComboLine, ...]
    discount_percent: int
    original_total: Decimal
    discounted_total: Decimal

    @property
    def discount_amount(self) -> Decimal:
        return self.original_total - self.discounted_total


@dataclass
class ItemLine:
    """A plain product row in the cart."""

    line_id: str
    product: Product
    quantity: int = 1

    @property
    def line_total(self) -> Decimal:
        return self.product.sale_price * self.quantity


@dataclass(frozen=True)
class ComboCartLine:
    """A combo row in the cart. The combo itself is never edited."""

    line_id: str
    combo: ComboRecord

    @property
    def line_total(self) -> Decimal:
        return self.combo.discounted_total


CartLine = ItemLine | ComboCartLine
