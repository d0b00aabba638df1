from __future__ import annotations

import importlib
import sys
from pathlib import Path

SRC_DIR = Path(__file__).resolve().parents[1] / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from dotenv import load_dotenv

from waka_transport.database.bootstrap import apply_schema, list_tables
from waka_transport.database.connection import DBConfig
from waka_transport.settings import get_settings_module


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    apply_schema(db_config)
    tables = list_tables(db_config)
    print(f"OK: schema applied to {DBConfig.from_dict(db_config).describe()} ({', '.join(sorted(tables))})")


if __name__ == "__main__":
    main()
