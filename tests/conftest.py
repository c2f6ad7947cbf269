import sys
from pathlib import Path

import pytest

from sqlconst.core.config import Settings
from sqlconst.diagnostics import LoggingDiagnostics

FIXTURES_DIR = Path(__file__).parent / "fixtures"

if str(FIXTURES_DIR) not in sys.path:
    sys.path.insert(0, str(FIXTURES_DIR))


@pytest.fixture
def settings():
    return Settings(source_root=str(FIXTURES_DIR), workers=2)


@pytest.fixture
def diagnostics():
    return LoggingDiagnostics()
