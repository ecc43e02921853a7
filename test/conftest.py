import sys
from pathlib import Path

import pytest


# Ensure the project `src` directory is on sys.path so tests can import
# modules like `extract`, `features`, `ruby`, etc.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = PROJECT_ROOT / "src"
FIXTURE_DIR = Path(__file__).resolve().parent / "fixtures"

if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))


@pytest.fixture
def fixture_dir() -> Path:
    return FIXTURE_DIR
