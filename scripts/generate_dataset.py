"""
Sales Dataset Generator
Writes a synthetic sales_data.csv in the source column layout.

Usage:
    python scripts/generate_dataset.py --records 5000 --output data/sales_data.csv
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.data.generators import GeneratorConfig, SalesDataGenerator  # noqa: E402

DEFAULT_OUTPUT = Path(__file__).parent.parent / "data" / "sales_data.csv"


def main() -> None:
    parser = argparse.ArgumentParser(description="Generate a synthetic sales dataset")
    parser.add_argument("--records", type=int, default=5000, help="Number of transactions (default: 5000)")
    parser.add_argument("--customers", type=int, default=1000, help="Distinct customers (default: 1000)")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    parser.add_argument("--output", type=Path, default=DEFAULT_OUTPUT, help="Output CSV path")
    args = parser.parse_args()

    print(f"📊 Generating {args.records:,} sales records...")
    generator = SalesDataGenerator(GeneratorConfig(
        n_records=args.records,
        n_customers=args.customers,
        seed=args.seed,
    ))
    path = generator.write_csv(args.output)
    print(f"   ✅ {path}: {args.records:,} rows")


if __name__ == "__main__":
    main()
