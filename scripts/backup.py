"""Backup the SQLite database.

Uses the sqlite3 online backup API, so it is safe while the kiosk is running.
"""

from __future__ import annotations

import sqlite3
from datetime import datetime
from pathlib import Path

from dotenv import load_dotenv

from attendance_kiosk.main import load_settings


def main() -> None:
    load_dotenv(override=False)
    settings = load_settings()
    db_path = Path(str(settings["DB_PATH"]))
    if not db_path.exists():
        raise SystemExit(f"Database not found: {db_path}")

    out_dir = Path(__file__).resolve().parents[1] / "backups"
    out_dir.mkdir(parents=True, exist_ok=True)

    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    out_file = out_dir / f"attendance_{ts}.db"

    src = sqlite3.connect(str(db_path))
    dst = sqlite3.connect(str(out_file))
    try:
        src.backup(dst)
    finally:
        dst.close()
        src.close()
    print(f"OK: Backup created: {out_file}")


if __name__ == "__main__":
    main()
