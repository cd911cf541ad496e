"""Create the workforce database, apply schema.sql and optionally load demo data.

Examples:
    python scripts/init_db.py
    APP_ENV=production python scripts/init_db.py
    python scripts/init_db.py --seed
"""

from __future__ import annotations

import argparse
import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.workforce.workforce.database.bootstrap import apply_schema, apply_sql_file, list_tables

SQL_DIR = REPO_ROOT / "database"


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Initialise the attendance and payroll database")
    parser.add_argument(
        "--seed",
        action="store_true",
        help="also load database/seed.sql (demo tenant, shift and two workers)",
    )
    return parser.parse_args(argv)


def main(argv=None) -> None:
    args = parse_args(argv)
    settings = importlib.import_module(get_settings_module())
    logging.basicConfig(level=getattr(settings, "LOG_LEVEL", "INFO"))
    db_config = dict(settings.DB_CONFIG)
    target = f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"

    apply_schema(db_config, schema_path=SQL_DIR / "schema.sql")
    if args.seed:
        apply_sql_file(db_config, sql_path=SQL_DIR / "seed.sql")

    tables = list_tables(db_config)
    print(f"OK: {target} ready ({len(tables)} tables{', demo data loaded' if args.seed else ''})")


if __name__ == "__main__":
    main()
