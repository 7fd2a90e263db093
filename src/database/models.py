"""
Database Models

Relational storage for the sales dataset when the database backend is
selected. One row per transaction, mirroring the source CSV layout; tags are
stored comma-joined as in the source.
"""

from datetime import datetime
from typing import Any, Dict

from sqlalchemy import DateTime, Float, Index, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from src.engine.records import SalesRecord, split_tags


class Base(DeclarativeBase):
    """Base class for all database models"""
    pass


class SaleRow(Base):
    """
    Sales Transaction Table

    Rows are read back in primary-key order, which is the load order the
    query engine treats as the natural ordering.
    """
    __tablename__ = "sales"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # Identifiers
    customer_id: Mapped[str] = mapped_column(String(50), default="")
    product_id: Mapped[str] = mapped_column(String(50), default="")
    store_id: Mapped[str] = mapped_column(String(50), default="")
    salesperson_id: Mapped[str] = mapped_column(String(50), default="")

    # Customer
    customer_name: Mapped[str] = mapped_column(String(200), default="")
    phone_number: Mapped[str] = mapped_column(String(50), default="")
    gender: Mapped[str] = mapped_column(String(20), default="")
    age: Mapped[int] = mapped_column(Integer, default=0)
    customer_region: Mapped[str] = mapped_column(String(100), default="")
    customer_type: Mapped[str] = mapped_column(String(50), default="")

    # Product
    product_name: Mapped[str] = mapped_column(String(200), default="")
    brand: Mapped[str] = mapped_column(String(100), default="")
    product_category: Mapped[str] = mapped_column(String(100), default="")
    tags: Mapped[str] = mapped_column(Text, default="")

    # Transaction
    quantity: Mapped[int] = mapped_column(Integer, default=0)
    price_per_unit: Mapped[float] = mapped_column(Float, default=0.0)
    discount_percentage: Mapped[float] = mapped_column(Float, default=0.0)
    total_amount: Mapped[float] = mapped_column(Float, default=0.0)
    final_amount: Mapped[float] = mapped_column(Float, default=0.0)
    date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    payment_method: Mapped[str] = mapped_column(String(50), default="")
    order_status: Mapped[str] = mapped_column(String(50), default="")
    delivery_type: Mapped[str] = mapped_column(String(50), default="")

    # Store
    store_location: Mapped[str] = mapped_column(String(200), default="")
    employee_name: Mapped[str] = mapped_column(String(200), default="")

    __table_args__ = (
        Index("ix_sales_date", "date"),
        Index("ix_sales_region", "customer_region"),
        Index("ix_sales_category", "product_category"),
    )

    @staticmethod
    def values_from_record(record: SalesRecord) -> Dict[str, Any]:
        """Column values for inserting a record"""
        return {
            "customer_id": record.customer_id,
            "product_id": record.product_id,
            "store_id": record.store_id,
            "salesperson_id": record.salesperson_id,
            "customer_name": record.customer_name,
            "phone_number": record.phone_number,
            "gender": record.gender,
            "age": record.age,
            "customer_region": record.customer_region,
            "customer_type": record.customer_type,
            "product_name": record.product_name,
            "brand": record.brand,
            "product_category": record.product_category,
            "tags": ",".join(sorted(record.tags)),
            "quantity": record.quantity,
            "price_per_unit": record.price_per_unit,
            "discount_percentage": record.discount_percentage,
            "total_amount": record.total_amount,
            "final_amount": record.final_amount,
            "date": record.date,
            "payment_method": record.payment_method,
            "order_status": record.order_status,
            "delivery_type": record.delivery_type,
            "store_location": record.store_location,
            "employee_name": record.employee_name,
        }

    def to_record(self) -> SalesRecord:
        """Convert a row to an engine record"""
        return SalesRecord(
            customer_id=self.customer_id or "",
            product_id=self.product_id or "",
            store_id=self.store_id or "",
            salesperson_id=self.salesperson_id or "",
            customer_name=self.customer_name or "",
            phone_number=self.phone_number or "",
            gender=self.gender or "",
            age=max(0, self.age or 0),
            customer_region=self.customer_region or "",
            customer_type=self.customer_type or "",
            product_name=self.product_name or "",
            brand=self.brand or "",
            product_category=self.product_category or "",
            tags=split_tags(self.tags),
            quantity=max(0, self.quantity or 0),
            price_per_unit=self.price_per_unit or 0.0,
            discount_percentage=self.discount_percentage or 0.0,
            total_amount=self.total_amount or 0.0,
            final_amount=self.final_amount or 0.0,
            date=self.date,
            payment_method=self.payment_method or "",
            order_status=self.order_status or "",
            delivery_type=self.delivery_type or "",
            store_location=self.store_location or "",
            employee_name=self.employee_name or "",
        )
