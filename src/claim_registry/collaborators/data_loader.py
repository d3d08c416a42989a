"""Load the mock collaborator database.

MOCK_DB_PATH env or default data/mock_db.json for policies and incidents.
"""

import json
import os
from pathlib import Path
from typing import Any

_DEFAULT_DB = {
    "policies": {},
    "incidents": {},
}


def _project_data_dir() -> Path:
    return Path(__file__).resolve().parent.parent.parent.parent / "data"


def _resolve_db_path() -> Path:
    path = os.environ.get("MOCK_DB_PATH")
    if path:
        return Path(path)
    return _project_data_dir() / "mock_db.json"


def load_mock_db() -> dict[str, Any]:
    """Load mock database from JSON file or return default in-memory structure."""
    path = _resolve_db_path()
    if path.exists():
        try:
            with open(path, encoding="utf-8") as f:
                return json.load(f)
        except (json.JSONDecodeError, OSError):
            pass
    return {key: value.copy() for key, value in _DEFAULT_DB.items()}
