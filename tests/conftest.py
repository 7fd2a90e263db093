"""
Test Suite Configuration
"""
import pytest
from datetime import datetime
from typing import AsyncGenerator, List

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from src.config import Settings
from src.data.generators import GeneratorConfig, SalesDataGenerator
from src.database.models import Base
from src.engine.records import SalesRecord
from src.engine.store import RecordStore


class FakeClock:
    """Manually advanced monotonic clock"""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def build_record(**overrides) -> SalesRecord:
    """Record with sensible defaults; override any field by name"""
    values = dict(
        customer_id="CUST-00001",
        customer_name="Alice Smith",
        phone_number="9876543210",
        gender="Female",
        age=30,
        customer_region="North",
        customer_type="New",
        product_id="PROD-ELE-101",
        product_name="TechPulse Headphones",
        brand="TechPulse",
        product_category="Electronics",
        tags=frozenset({"wireless"}),
        quantity=1,
        price_per_unit=100.0,
        discount_percentage=0.0,
        total_amount=100.0,
        final_amount=100.0,
        date=datetime(2023, 1, 15),
        payment_method="UPI",
        order_status="Completed",
        delivery_type="Standard",
        store_id="ST-001",
        store_location="Springfield",
        salesperson_id="EMP-0001",
        employee_name="Bob Jones",
    )
    values.update(overrides)
    if isinstance(values["tags"], (list, set, tuple)):
        values["tags"] = frozenset(values["tags"])
    return SalesRecord(**values)


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """Create test settings"""
    return Settings(APP_ENV="testing", DEBUG=True)


@pytest.fixture
def make_record():
    """Factory for records with overridable fields"""
    return build_record


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def age_sample() -> List[SalesRecord]:
    """Three customers aged 20, 35 and 70"""
    return [
        build_record(customer_id="C1", customer_name="Young", age=20),
        build_record(customer_id="C2", customer_name="Middle", age=35),
        build_record(customer_id="C3", customer_name="Older", age=70),
    ]


@pytest.fixture(scope="session")
def generated_records() -> List[SalesRecord]:
    """Deterministic synthetic dataset"""
    return SalesDataGenerator(GeneratorConfig(n_records=300, n_customers=60, seed=7)).generate_records()


@pytest.fixture
def generated_store(generated_records) -> RecordStore:
    return RecordStore(generated_records)


@pytest.fixture
def sales_csv(tmp_path):
    """Small generated CSV on disk"""
    generator = SalesDataGenerator(GeneratorConfig(n_records=50, n_customers=20, seed=11))
    return generator.write_csv(tmp_path / "sales_data.csv")


@pytest.fixture
async def session_factory(tmp_path) -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """File-backed SQLite database with the schema created"""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'sales.db'}", echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()
