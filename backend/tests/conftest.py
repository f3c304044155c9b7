import sys
from pathlib import Path

import pytest

# Ensure the backend package root is on sys.path for direct pytest runs
BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))


@pytest.fixture(autouse=True)
def default_locale(monkeypatch):
    """Pin the primary locale so fallback names don't depend on the shell env."""
    from settings import settings

    monkeypatch.setattr(settings, "LOCATION_LOCALE", "id")
