#!/usr/bin/env python
"""
Validate the record store against schema requirements.

Usage:
    python scripts/validate_store.py
    python scripts/validate_store.py --data-dir /path/to/data
"""
import argparse
import sys
from pathlib import Path

# Add package root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from proanaliz.config import config, TABLE_FILES
from proanaliz.data.schema import find_orphans, sanitize_table, validate_schema
from proanaliz.data.store import RecordStore, StoreError
from proanaliz.logging_config import setup_logging


def validate_table(store: RecordStore, table: str) -> dict:
    """Validate a single table."""
    result = {
        "exists": False,
        "rows": 0,
        "columns": 0,
        "valid": False,
        "missing_required": [],
        "missing_optional": [],
        "errors": [],
        "duplicate_budget_months": 0,
        "df": None,
    }

    if not store.exists(table):
        return result
    result["exists"] = True

    try:
        df = store.list(table)
    except StoreError as e:
        result["errors"].append(f"Failed to load: {e}")
        return result

    result["rows"] = len(df)
    result["columns"] = len(df.columns)

    schema_result = validate_schema(df, table, strict=False)
    result["valid"] = schema_result["is_valid"]
    result["missing_required"] = schema_result["missing_required"]
    result["missing_optional"] = schema_result["missing_optional"]
    if result["valid"]:
        if table == "budgets":
            result["duplicate_budget_months"] = duplicate_budget_months(df)
        result["df"] = sanitize_table(df, table)

    return result


def duplicate_budget_months(budgets) -> int:
    """Budget rows beyond the first for the same team-month."""
    if budgets is None or len(budgets) == 0:
        return 0
    return int(budgets.duplicated(subset=["team_id", "year", "month"]).sum())


def main():
    parser = argparse.ArgumentParser(description="Validate the record store")
    parser.add_argument(
        "--data-dir",
        type=str,
        default=None,
        help="Override data directory"
    )

    args = parser.parse_args()
    setup_logging()

    if args.data_dir:
        store_dir = Path(args.data_dir) / "store"
    else:
        store_dir = config.store_dir

    store = RecordStore(store_dir)

    print("=" * 60)
    print("Record Store Validation")
    print("=" * 60)
    print(f"Store directory: {store_dir}")
    print()

    all_valid = True
    frames = {}
    budget_duplicates = 0

    for table, filename in TABLE_FILES.items():
        print(f"Validating: {table}")
        print("-" * 40)

        result = validate_table(store, table)

        if result["exists"]:
            print(f"  ✓ Found: {filename}")
            print(f"    Rows: {result['rows']:,}")
            print(f"    Columns: {result['columns']}")

            if result["valid"]:
                print("  ✓ Schema valid")
                frames[table] = result["df"]
                budget_duplicates += result["duplicate_budget_months"]
            else:
                print("  ✗ Schema invalid")
                print(f"    Missing required: {result['missing_required']}")
                all_valid = False

            if result["missing_optional"]:
                print(f"    Missing optional: {result['missing_optional']}")
        else:
            # An empty store is valid; tables are created on first write.
            print("  - Not created yet")

        for error in result["errors"]:
            print(f"  ✗ {error}")
            all_valid = False

        print()

    print("Referential checks")
    print("-" * 40)
    if all(t in frames for t in ("entries", "budgets", "teams", "projects")):
        orphans = find_orphans(frames["entries"], frames["budgets"], frames["teams"], frames["projects"])
        for key, count in orphans.items():
            marker = "✓" if count == 0 else "!"
            print(f"  {marker} {key}: {count:,}")
        duplicates = budget_duplicates
        marker = "✓" if duplicates == 0 else "!"
        print(f"  {marker} duplicate_budget_months: {duplicates:,}")
    else:
        print("  - Skipped (not every table is available)")
    print()

    print("=" * 60)
    if all_valid:
        print("✓ Store is valid")
        return 0
    print("✗ Store has errors")
    return 1


if __name__ == "__main__":
    sys.exit(main())
