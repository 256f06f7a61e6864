from __future__ import annotations

from dotenv import load_dotenv

from attendance_kiosk.database.bootstrap import apply_schema, list_tables
from attendance_kiosk.database.connection import DBConfig, DatabaseConnection
from attendance_kiosk.main import load_settings


def main() -> None:
    load_dotenv(override=False)
    settings = load_settings()
    conn = DatabaseConnection.get_instance(DBConfig(path=str(settings["DB_PATH"])))

    apply_schema(conn)
    tables = list_tables(conn)
    print(f"OK: Applied schema.sql -> {conn.path} (tables={len(tables)})")


if __name__ == "__main__":
    main()
