"""
Synthetic Data Generator

Generates a realistic retail sales dataset in the source CSV layout for
development, demos, and tests. Includes:
- Customers with demographics, regions, and loyalty types
- A product catalog of brands per category with tag vocabularies
- Transactions with discounts, payment methods, and order statuses
"""

import random
from dataclasses import dataclass
from datetime import datetime, timedelta
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

import numpy as np
import polars as pl
from faker import Faker

from src.engine.records import (
    SOURCE_COLUMNS,
    CustomerType,
    DeliveryType,
    OrderStatus,
    PaymentMethod,
    SalesRecord,
)


# =============================================================================
# CONFIGURATION
# =============================================================================

REGIONS = ["North", "South", "East", "West", "Central"]
GENDERS = [("Female", 0.5), ("Male", 0.5)]

CUSTOMER_TYPES = [
    (CustomerType.NEW, 0.35),
    (CustomerType.RETURNING, 0.40),
    (CustomerType.LOYAL, 0.25),
]

ORDER_STATUSES = [
    (OrderStatus.COMPLETED, 0.75),
    (OrderStatus.PENDING, 0.10),
    (OrderStatus.CANCELLED, 0.08),
    (OrderStatus.RETURNED, 0.07),
]

DELIVERY_TYPES = [
    (DeliveryType.STANDARD, 0.6),
    (DeliveryType.EXPRESS, 0.25),
    (DeliveryType.STORE_PICKUP, 0.15),
]

# category -> (brands, tags, product names, price range)
CATALOG: Dict[str, Tuple[List[str], List[str], List[str], Tuple[float, float]]] = {
    "Electronics": (
        ["TechPulse", "NovaGear", "CyberCore", "VoltEdge"],
        ["wireless", "smart", "portable", "gadgets", "accessories"],
        ["Headphones", "Smartwatch", "Speaker", "Charger", "Keyboard"],
        (20.0, 1500.0),
    ),
    "Clothing": (
        ["UrbanWeave", "StreetLayer", "EliteWear", "ComfortLine"],
        ["cotton", "casual", "formal", "fashion", "unisex"],
        ["T-Shirt", "Jeans", "Jacket", "Sneakers", "Hoodie"],
        (10.0, 300.0),
    ),
    "Beauty": (
        ["GlowEssence", "PureBloom", "SilkSkin", "VelvetTouch"],
        ["organic", "skincare", "makeup", "fragrance-free", "beauty"],
        ["Moisturizer", "Lipstick", "Serum", "Sunscreen", "Foundation"],
        (5.0, 150.0),
    ),
}

DISCOUNTS = [0, 5, 10, 15, 20, 25, 30]


@dataclass
class GeneratorConfig:
    """Generator knobs"""
    n_records: int = 1000
    n_customers: int = 200
    n_stores: int = 10
    n_salespeople: int = 30
    start_date: datetime = datetime(2021, 1, 1)
    end_date: datetime = datetime(2023, 12, 31)
    seed: int = 42


def _weighted(rng: np.random.Generator, options: List[Tuple[object, float]]) -> object:
    values = [value for value, _ in options]
    weights = np.array([weight for _, weight in options], dtype=float)
    return values[int(rng.choice(len(values), p=weights / weights.sum()))]


class SalesDataGenerator:
    """
    Generate synthetic sales transactions.

    Output is deterministic for a given seed.

    Example:
        generator = SalesDataGenerator(GeneratorConfig(n_records=5000))
        df = generator.generate()
        generator.write_csv("data/sales_data.csv")
    """

    def __init__(self, config: Optional[GeneratorConfig] = None):
        self.config = config or GeneratorConfig()
        self.fake = Faker()
        self._reseed()

    def _reseed(self) -> None:
        self.rng = np.random.default_rng(self.config.seed)
        self.random = random.Random(self.config.seed)
        self.fake.seed_instance(self.config.seed)

    def _customers(self) -> List[Dict[str, object]]:
        """Customer pool so repeat purchases share identities"""
        customers = []
        for i in range(self.config.n_customers):
            customers.append({
                "Customer ID": f"CUST-{i + 1:05d}",
                "Customer Name": self.fake.name(),
                "Phone Number": self.fake.numerify("##########"),
                "Gender": _weighted(self.rng, GENDERS),
                "Age": int(self.rng.integers(18, 66)),
                "Customer Region": REGIONS[int(self.rng.integers(0, len(REGIONS)))],
                "Customer Type": _weighted(self.rng, CUSTOMER_TYPES).value,
            })
        return customers

    def _stores(self) -> List[Tuple[str, str]]:
        return [
            (f"ST-{i + 1:03d}", self.fake.city())
            for i in range(self.config.n_stores)
        ]

    def _salespeople(self) -> List[Tuple[str, str]]:
        return [
            (f"EMP-{i + 1:04d}", self.fake.name())
            for i in range(self.config.n_salespeople)
        ]

    def _product(self) -> Dict[str, object]:
        category = self.random.choice(list(CATALOG))
        brands, tags, names, (low, high) = CATALOG[category]
        brand = self.random.choice(brands)
        item = self.random.choice(names)
        n_tags = int(self.rng.integers(1, 4))
        return {
            "Product ID": f"PROD-{category[:3].upper()}-{brands.index(brand) + 1}{names.index(item) + 1:02d}",
            "Product Name": f"{brand} {item}",
            "Brand": brand,
            "Product Category": category,
            "Tags": ",".join(self.random.sample(tags, n_tags)),
            "Price per Unit": round(float(self.rng.uniform(low, high)), 2),
        }

    def _timestamp(self) -> datetime:
        span = (self.config.end_date - self.config.start_date).total_seconds()
        return self.config.start_date + timedelta(seconds=int(self.rng.uniform(0, span)))

    def generate(self) -> pl.DataFrame:
        """Generate the configured number of transactions"""
        self._reseed()
        customers = self._customers()
        stores = self._stores()
        salespeople = self._salespeople()

        rows = []
        for _ in range(self.config.n_records):
            customer = customers[int(self.rng.integers(0, len(customers)))]
            product = self._product()
            store_id, store_location = stores[int(self.rng.integers(0, len(stores)))]
            salesperson_id, employee_name = salespeople[int(self.rng.integers(0, len(salespeople)))]

            quantity = int(self.rng.integers(1, 11))
            discount = float(self.random.choice(DISCOUNTS))
            total = round(quantity * product["Price per Unit"], 2)
            final = round(total * (1 - discount / 100), 2)

            rows.append({
                **customer,
                **product,
                "Quantity": quantity,
                "Discount Percentage": discount,
                "Total Amount": total,
                "Final Amount": final,
                "Date": self._timestamp().strftime("%Y-%m-%d"),
                "Payment Method": self.random.choice(list(PaymentMethod)).value,
                "Order Status": _weighted(self.rng, ORDER_STATUSES).value,
                "Delivery Type": _weighted(self.rng, DELIVERY_TYPES).value,
                "Store ID": store_id,
                "Store Location": store_location,
                "Salesperson ID": salesperson_id,
                "Employee Name": employee_name,
            })

        return pl.DataFrame(rows).select(list(SOURCE_COLUMNS))

    def generate_records(self) -> List[SalesRecord]:
        """Generate and normalize straight to engine records"""
        return [SalesRecord.from_source_row(row) for row in self.generate().iter_rows(named=True)]

    def write_csv(self, path: Union[str, Path]) -> Path:
        """Generate and save as CSV"""
        output = Path(path)
        output.parent.mkdir(parents=True, exist_ok=True)
        self.generate().write_csv(output)
        return output
