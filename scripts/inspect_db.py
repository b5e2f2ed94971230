from __future__ import annotations

import os
import sqlite3
from pathlib import Path

from dotenv import load_dotenv

_REPO_ROOT = Path(__file__).resolve().parents[1]
load_dotenv(_REPO_ROOT / ".env", override=False)


def main() -> None:
    db_path = os.getenv("SQLITE_PATH", "documents.db")
    conn = sqlite3.connect(db_path)
    try:
        print("DB:", db_path)
        print("Tables:")
        for row in conn.execute(
            "SELECT name FROM sqlite_master WHERE type='table' ORDER BY name"
        ):
            print("-", row[0])

        print("\nDocuments per company:")
        for row in conn.execute(
            """
            SELECT company_id,
                   SUM(CASE WHEN type = 'folder' THEN 1 ELSE 0 END),
                   SUM(CASE WHEN type = 'file' THEN 1 ELSE 0 END),
                   COALESCE(SUM(file_size_bytes), 0)
            FROM portfolio_documents
            GROUP BY company_id
            ORDER BY company_id
            """
        ):
            print(f"{row[0]}: {row[1]} folder(s), {row[2]} file(s), {row[3]} bytes")

        print("\nOrphaned rows (parent missing):")
        for row in conn.execute(
            """
            SELECT child.id, child.company_id, child.name, child.parent_id
            FROM portfolio_documents AS child
            LEFT JOIN portfolio_documents AS parent
                ON parent.id = child.parent_id AND parent.company_id = child.company_id
            WHERE child.parent_id IS NOT NULL AND parent.id IS NULL
            LIMIT 20
            """
        ):
            print(row)
    finally:
        conn.close()


if __name__ == "__main__":
    main()
