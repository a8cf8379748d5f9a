from __future__ import annotations

from pathlib import Path

# Resolved project root (parent of the infra package).
PROJECT_ROOT = Path(__file__).resolve().parent.parent

# Common storage locations.
STORAGE_DIR = PROJECT_ROOT / "storage"
SCENARIO_STORAGE_DIR = STORAGE_DIR / "scenarios"
LOG_STORAGE_DIR = STORAGE_DIR / "logs"
