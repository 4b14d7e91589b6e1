from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

_REPO_ROOT = Path(__file__).resolve().parents[1]
load_dotenv(_REPO_ROOT / ".env", override=False)

from formatos.adapters.sqlite_key_value import SQLiteKeyValueStore


def main() -> None:
    db_path = os.getenv("SQLITE_PATH", "./formatos.db")
    store = SQLiteKeyValueStore(db_path)
    print("DB:", db_path)
    print("Stored keys:")
    for key, value, updated_at in store.items():
        print(f"- {key} = {value!r} (updated {updated_at})")


if __name__ == "__main__":
    main()
