"""
Sales Record Model

Typed, immutable representation of one sales transaction plus the lossy
normalization rules applied when a raw row is turned into a record:

- Integers and decimals that fail to parse become zero
- Dates that fail to parse become the Unix epoch
- Tags are split on commas, trimmed, and empty entries dropped
"""

from dataclasses import dataclass, field, asdict
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterable, Mapping, Optional


EPOCH = datetime(1970, 1, 1)

_DATE_FORMATS = (
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d",
    "%m/%d/%Y",
    "%m/%d/%Y %H:%M:%S",
    "%d-%m-%Y",
)


# =============================================================================
# ENUMERATIONS
# =============================================================================

class CustomerType(str, Enum):
    """Known customer types (records may carry others)"""
    NEW = "New"
    RETURNING = "Returning"
    LOYAL = "Loyal"


class PaymentMethod(str, Enum):
    """Known payment methods"""
    CASH = "Cash"
    CREDIT_CARD = "Credit Card"
    DEBIT_CARD = "Debit Card"
    NET_BANKING = "Net Banking"
    UPI = "UPI"
    WALLET = "Wallet"


class OrderStatus(str, Enum):
    """Known order statuses"""
    COMPLETED = "Completed"
    PENDING = "Pending"
    CANCELLED = "Cancelled"
    RETURNED = "Returned"


class DeliveryType(str, Enum):
    """Known delivery types"""
    STANDARD = "Standard"
    EXPRESS = "Express"
    STORE_PICKUP = "Store Pickup"


# Raw source column -> record attribute
SOURCE_COLUMNS: Dict[str, str] = {
    "Customer ID": "customer_id",
    "Customer Name": "customer_name",
    "Phone Number": "phone_number",
    "Gender": "gender",
    "Age": "age",
    "Customer Region": "customer_region",
    "Customer Type": "customer_type",
    "Product ID": "product_id",
    "Product Name": "product_name",
    "Brand": "brand",
    "Product Category": "product_category",
    "Tags": "tags",
    "Quantity": "quantity",
    "Price per Unit": "price_per_unit",
    "Discount Percentage": "discount_percentage",
    "Total Amount": "total_amount",
    "Final Amount": "final_amount",
    "Date": "date",
    "Payment Method": "payment_method",
    "Order Status": "order_status",
    "Delivery Type": "delivery_type",
    "Store ID": "store_id",
    "Store Location": "store_location",
    "Salesperson ID": "salesperson_id",
    "Employee Name": "employee_name",
}


# =============================================================================
# NORMALIZATION
# =============================================================================

def parse_int(value: Any, default: int = 0) -> int:
    """Parse an integer, accepting a decimal's integer part; default on failure."""
    if value is None:
        return default
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value == value else default
    text = str(value).strip()
    if not text:
        return default
    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        return default
    if number != number or number in (float("inf"), float("-inf")):
        return default
    return int(number)


def parse_float(value: Any, default: float = 0.0) -> float:
    """Parse a decimal; default on failure or non-finite input."""
    if value is None:
        return default
    try:
        number = float(str(value).strip()) if not isinstance(value, (int, float)) else float(value)
    except ValueError:
        return default
    if number != number or number in (float("inf"), float("-inf")):
        return default
    return number


def _as_naive_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment
    return moment.astimezone(timezone.utc).replace(tzinfo=None)


def parse_datetime(value: Any, default: Optional[datetime] = EPOCH) -> Optional[datetime]:
    """Parse a date or date-time; naive result, default on failure."""
    if value is None:
        return default
    if isinstance(value, datetime):
        return _as_naive_utc(value)
    text = str(value).strip()
    if not text:
        return default
    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
        return _as_naive_utc(parsed)
    except ValueError:
        pass
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return default


def split_tags(value: Any) -> FrozenSet[str]:
    """Normalize a comma-joined tag string (or iterable) to trimmed tags."""
    if value is None:
        return frozenset()
    parts: Iterable[Any] = value.split(",") if isinstance(value, str) else value
    return frozenset(tag for tag in (str(p).strip() for p in parts) if tag)


def _text(value: Any) -> str:
    return "" if value is None else str(value).strip()


# =============================================================================
# RECORD
# =============================================================================

@dataclass(frozen=True)
class SalesRecord:
    """One sales transaction"""

    # Identifiers
    customer_id: str = ""
    product_id: str = ""
    store_id: str = ""
    salesperson_id: str = ""

    # Customer
    customer_name: str = ""
    phone_number: str = ""
    gender: str = ""
    age: int = 0
    customer_region: str = ""
    customer_type: str = ""

    # Product
    product_name: str = ""
    brand: str = ""
    product_category: str = ""
    tags: FrozenSet[str] = field(default_factory=frozenset)

    # Transaction
    quantity: int = 0
    price_per_unit: float = 0.0
    discount_percentage: float = 0.0
    total_amount: float = 0.0
    final_amount: float = 0.0
    date: datetime = EPOCH
    payment_method: str = ""
    order_status: str = ""
    delivery_type: str = ""

    # Store
    store_location: str = ""
    employee_name: str = ""

    @classmethod
    def from_source_row(cls, row: Mapping[str, Any]) -> "SalesRecord":
        """
        Build a record from a raw row keyed by source column names.

        Missing or unparseable values are normalized rather than rejected.
        """
        values = {attr: row.get(column) for column, attr in SOURCE_COLUMNS.items()}
        return cls(
            customer_id=_text(values["customer_id"]),
            product_id=_text(values["product_id"]),
            store_id=_text(values["store_id"]),
            salesperson_id=_text(values["salesperson_id"]),
            customer_name=_text(values["customer_name"]),
            phone_number=_text(values["phone_number"]),
            gender=_text(values["gender"]),
            age=max(0, parse_int(values["age"])),
            customer_region=_text(values["customer_region"]),
            customer_type=_text(values["customer_type"]),
            product_name=_text(values["product_name"]),
            brand=_text(values["brand"]),
            product_category=_text(values["product_category"]),
            tags=split_tags(values["tags"]),
            quantity=max(0, parse_int(values["quantity"])),
            price_per_unit=parse_float(values["price_per_unit"]),
            discount_percentage=parse_float(values["discount_percentage"]),
            total_amount=parse_float(values["total_amount"]),
            final_amount=parse_float(values["final_amount"]),
            date=parse_datetime(values["date"]),
            payment_method=_text(values["payment_method"]),
            order_status=_text(values["order_status"]),
            delivery_type=_text(values["delivery_type"]),
            store_location=_text(values["store_location"]),
            employee_name=_text(values["employee_name"]),
        )

    def to_source_row(self) -> Dict[str, Any]:
        """Render back to source column names (tags comma-joined, sorted)."""
        data = asdict(self)
        data["tags"] = ",".join(sorted(self.tags))
        data["date"] = self.date.isoformat(sep=" ")
        return {column: data[attr] for column, attr in SOURCE_COLUMNS.items()}

    @property
    def month(self) -> str:
        """Calendar month bucket, YYYY-MM"""
        return self.date.strftime("%Y-%m")
