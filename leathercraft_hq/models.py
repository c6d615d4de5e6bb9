"""
models.py — Entities mirrored from the backing service.

Records arrive as plain dicts (one per row, tagged with "id"). Parsing is
forgiving: absent or malformed numbers become 0 and missing strings become
"", so a bad row can never take the dashboard down. Validation is strict
and only applies to payloads we are about to write.
"""

import math
from dataclasses import dataclass
from datetime import date as _date
from enum import Enum
from typing import ClassVar

from leathercraft_hq.errors import ValidationError

# ── Collections ──────────────────────────────────────────────────────────────
ORDERS = "orders"
PRODUCTS = "products"
INVENTORY = "inventory"
EXPENSES = "expenses"
COLLECTIONS = (ORDERS, PRODUCTS, INVENTORY, EXPENSES)


class OrderStatus(str, Enum):
    PENDING = "Pending"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"


class ExpenseCategory(str, Enum):
    MATERIALS = "Materials"
    SHIPPING = "Shipping"
    MARKETING = "Marketing"
    TOOLS = "Tools"
    OTHER = "Other"


ORDER_STATUSES = [s.value for s in OrderStatus]
EXPENSE_CATEGORIES = [c.value for c in ExpenseCategory]
MARKETING_PLATFORMS = ["Facebook", "Instagram", "TikTok", "Other"]


# ══════════════════════════════════════════════════════════════════════════════
#  PARSING HELPERS
# ══════════════════════════════════════════════════════════════════════════════

def parse_money(val) -> float:
    """Coerce a stored amount to float; anything unusable counts as 0."""
    if val is None or isinstance(val, bool) or val == "" or val == "--":
        return 0.0
    if isinstance(val, (int, float)):
        num = float(val)
    else:
        text = str(val).replace("MAD", "").replace(",", "").strip()
        try:
            num = float(text)
        except ValueError:
            return 0.0
    if math.isnan(num) or math.isinf(num):
        return 0.0
    return num


def parse_count(val) -> int:
    return int(parse_money(val))


def parse_flag(val) -> bool:
    if isinstance(val, str):
        return val.strip().lower() in ("true", "1", "yes")
    return bool(val)


def _text(val) -> str:
    return "" if val is None else str(val)


def today_iso(today=None) -> str:
    return (today or _date.today()).isoformat()


# ══════════════════════════════════════════════════════════════════════════════
#  ENTITIES
# ══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class OrderItem:
    product_name: str
    qty: int
    price: float

    @property
    def line_total(self) -> float:
        return self.price * self.qty

    @classmethod
    def from_record(cls, record):
        if not isinstance(record, dict):
            return cls("", 0, 0.0)
        return cls(
            product_name=_text(record.get("product_name")),
            qty=parse_count(record.get("qty")),
            price=parse_money(record.get("price")),
        )


@dataclass(frozen=True)
class Order:
    id: str
    customer_name: str = ""
    city: str = ""
    date: str = ""
    items: tuple = ()
    total: float = 0.0
    # Unknown stored statuses are kept verbatim: neither pending nor delivered.
    status: str = OrderStatus.PENDING.value

    @property
    def is_delivered(self) -> bool:
        return self.status == OrderStatus.DELIVERED.value

    @property
    def is_pending(self) -> bool:
        return self.status == OrderStatus.PENDING.value

    @classmethod
    def from_record(cls, record):
        items = record.get("items") or []
        if not isinstance(items, (list, tuple)):
            items = []
        return cls(
            id=_text(record.get("id")),
            customer_name=_text(record.get("customer_name")),
            city=_text(record.get("city")),
            date=_text(record.get("date")),
            items=tuple(OrderItem.from_record(i) for i in items),
            total=parse_money(record.get("total")),
            status=_text(record.get("status")) or OrderStatus.PENDING.value,
        )


@dataclass(frozen=True)
class Product:
    id: str
    name: str = ""
    color: str = ""
    price: float = 0.0

    @property
    def label(self) -> str:
        return f"{self.name} - {self.color}"

    @classmethod
    def from_record(cls, record):
        return cls(
            id=_text(record.get("id")),
            name=_text(record.get("name")),
            color=_text(record.get("color")),
            price=parse_money(record.get("price")),
        )


@dataclass(frozen=True)
class InventoryItem:
    id: str
    name: str = ""
    stock: int = 0
    low_stock_threshold: int = 0

    @property
    def is_low_stock(self) -> bool:
        return self.stock <= self.low_stock_threshold

    @property
    def stock_label(self) -> str:
        return "Low Stock" if self.is_low_stock else "In Stock"

    @classmethod
    def from_record(cls, record):
        return cls(
            id=_text(record.get("id")),
            name=_text(record.get("name")),
            stock=parse_count(record.get("stock")),
            low_stock_threshold=parse_count(record.get("low_stock_threshold")),
        )


# ── Expenses: one variant per category ───────────────────────────────────────

@dataclass(frozen=True)
class Expense:
    id: str
    date: str = ""
    description: str = ""
    amount: float = 0.0
    is_auto: bool = False

    category: ClassVar[str] = ExpenseCategory.OTHER.value

    def to_record(self) -> dict:
        return {
            "date": self.date,
            "category": self.category,
            "description": self.description,
            "amount": self.amount,
            "is_auto": self.is_auto,
        }


@dataclass(frozen=True)
class MaterialsExpense(Expense):
    category: ClassVar[str] = ExpenseCategory.MATERIALS.value


@dataclass(frozen=True)
class ShippingExpense(Expense):
    category: ClassVar[str] = ExpenseCategory.SHIPPING.value


@dataclass(frozen=True)
class MarketingExpense(Expense):
    platform: str = ""
    campaign: str = ""

    category: ClassVar[str] = ExpenseCategory.MARKETING.value

    def to_record(self) -> dict:
        record = super().to_record()
        record["platform"] = self.platform
        record["campaign"] = self.campaign
        return record


@dataclass(frozen=True)
class ToolsExpense(Expense):
    category: ClassVar[str] = ExpenseCategory.TOOLS.value


@dataclass(frozen=True)
class OtherExpense(Expense):
    category: ClassVar[str] = ExpenseCategory.OTHER.value


EXPENSE_TYPES = {
    cls.category: cls
    for cls in (MaterialsExpense, ShippingExpense, MarketingExpense, ToolsExpense, OtherExpense)
}


def expense_from_record(record) -> Expense:
    """Pick the variant from the stored category. Unknown categories become Other."""
    cls = EXPENSE_TYPES.get(_text(record.get("category")), OtherExpense)
    fields = dict(
        id=_text(record.get("id")),
        date=_text(record.get("date")),
        description=_text(record.get("description")),
        amount=parse_money(record.get("amount")),
        is_auto=parse_flag(record.get("is_auto")),
    )
    if cls is MarketingExpense:
        fields["platform"] = _text(record.get("platform"))
        fields["campaign"] = _text(record.get("campaign"))
    return cls(**fields)


PARSERS = {
    ORDERS: Order.from_record,
    PRODUCTS: Product.from_record,
    INVENTORY: InventoryItem.from_record,
    EXPENSES: expense_from_record,
}


def parse_record(collection, record):
    """Turn one stored row into its entity."""
    try:
        parser = PARSERS[collection]
    except KeyError:
        raise ValueError(f"Unknown collection: {collection}") from None
    return parser(record)


# ══════════════════════════════════════════════════════════════════════════════
#  FORM PAYLOADS
# ══════════════════════════════════════════════════════════════════════════════

def build_order_record(customer_name, city, lines, products, existing=None, today=None) -> dict:
    """Build an order payload from (product_id, qty) lines.

    Item names and prices are snapshotted from the product catalogue, so later
    price changes don't rewrite old orders. Status is only set on creation.
    """
    by_id = {p.id: p for p in products}
    items = []
    for product_id, qty in lines:
        product = by_id.get(product_id)
        if product is None:
            continue
        items.append({
            "product_name": product.label,
            "qty": max(parse_count(qty), 1),
            "price": product.price,
        })
    if not items:
        raise ValidationError(ORDERS, "No valid products selected for the order.")

    record = {
        "customer_name": _text(customer_name).strip(),
        "city": _text(city).strip(),
        "items": items,
        "total": round(sum(i["price"] * i["qty"] for i in items), 2),
        "date": existing.date if existing is not None and existing.date else today_iso(today),
    }
    if existing is None:
        record["status"] = OrderStatus.PENDING.value
    return record


def build_product_record(name, color, price) -> dict:
    return {"name": _text(name).strip(), "color": _text(color).strip(), "price": parse_money(price)}


def build_inventory_record(name, stock, low_stock_threshold) -> dict:
    return {
        "name": _text(name).strip(),
        "stock": parse_count(stock),
        "low_stock_threshold": parse_count(low_stock_threshold),
    }


def build_expense_record(category, date, amount, description="", platform="Facebook", campaign="") -> dict:
    """Build an expense payload. Marketing expenses describe themselves from platform + campaign."""
    if category not in EXPENSE_CATEGORIES:
        raise ValidationError(EXPENSES, f"Unknown expense category: {category}")
    record = {
        "date": _text(date) or today_iso(),
        "category": category,
        "amount": parse_money(amount),
        "is_auto": False,
    }
    if category == ExpenseCategory.MARKETING.value:
        platform = platform or MARKETING_PLATFORMS[0]
        record["description"] = f"[{platform}] {_text(campaign).strip()}"
        record["platform"] = platform
        record["campaign"] = _text(campaign).strip()
    else:
        # None clears fields left over from a previous Marketing version of the row
        record["description"] = _text(description).strip()
        record["platform"] = None
        record["campaign"] = None
    return record


# ══════════════════════════════════════════════════════════════════════════════
#  VALIDATION
# ══════════════════════════════════════════════════════════════════════════════

def _number(collection, data, key, integer=False):
    if not isinstance(data, dict) or key not in data:
        raise ValidationError(collection, f"{key} is required")
    val = data[key]
    if isinstance(val, bool) or not isinstance(val, (int, float)):
        raise ValidationError(collection, f"{key} must be a number, got {val!r}")
    if math.isnan(val) or math.isinf(val):
        raise ValidationError(collection, f"{key} must be a finite number")
    if val < 0:
        raise ValidationError(collection, f"{key} can't be negative")
    if integer and int(val) != val:
        raise ValidationError(collection, f"{key} must be a whole number, got {val!r}")
    return val


def validate_record(collection, data, partial=False):
    """Reject payloads that would store an invalid entity."""
    if not isinstance(data, dict):
        raise ValidationError(collection, "Payload must be a mapping of fields")

    if collection == ORDERS:
        if "status" in data and data["status"] not in ORDER_STATUSES:
            raise ValidationError(collection, f"Unknown order status: {data['status']}")
        if "total" in data:
            _number(collection, data, "total")
        if "items" in data:
            items = data["items"]
            if not isinstance(items, (list, tuple)) or not items:
                raise ValidationError(collection, "An order needs at least one item")
            for item in items:
                _number(collection, item, "price")
                if _number(collection, item, "qty", integer=True) < 1:
                    raise ValidationError(collection, "Item quantity must be at least 1")
        elif not partial:
            raise ValidationError(collection, "An order needs at least one item")

    elif collection == PRODUCTS:
        if "price" in data:
            _number(collection, data, "price")

    elif collection == INVENTORY:
        for key in ("stock", "low_stock_threshold"):
            if key in data:
                _number(collection, data, key, integer=True)

    elif collection == EXPENSES:
        if "category" in data and data["category"] not in EXPENSE_CATEGORIES:
            raise ValidationError(collection, f"Unknown expense category: {data['category']}")
        if "amount" in data:
            _number(collection, data, "amount")
        if not partial and "category" not in data:
            raise ValidationError(collection, "An expense needs a category")

    else:
        raise ValueError(f"Unknown collection: {collection}")
