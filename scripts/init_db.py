from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.student_attendance.student_attendance.database.bootstrap import apply_schema
from src.student_attendance.student_attendance.database.connection import DBConfig


def main() -> None:
    load_dotenv(override=False)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    settings = importlib.import_module(get_settings_module())
    config = DBConfig.from_dict(dict(settings.DB_CONFIG))

    count = apply_schema(config, schema_path=REPO_ROOT / "database" / "schema.sql")
    logging.getLogger("init_db").info(
        "Schema ready on %s@%s:%s/%s (%d statements)", config.user, config.host, config.port, config.database, count
    )


if __name__ == "__main__":
    main()
