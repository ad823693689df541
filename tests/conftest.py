"""
Pytest fixtures for health log tests.
"""
import sys
from datetime import date
from pathlib import Path

import pytest
import pytest_asyncio

# Ensure src/ is on sys.path so tests can import the packages directly.
ROOT = Path(__file__).resolve().parent.parent
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from factory import ServiceFactory  # noqa: E402
from infrastructure.config import Settings  # noqa: E402

# Fixed "today" so future-date checks do not depend on the wall clock.
TODAY = date(2024, 1, 2)


@pytest.fixture
def settings(tmp_path):
    """Settings pointing at a throwaway database and export folder."""
    return Settings(
        db_path=str(tmp_path / "health.db"),
        export_dir=tmp_path / "reports",
        default_display_name="Guest",
    )


@pytest_asyncio.fixture
async def factory(settings):
    """An initialized ServiceFactory, closed after the test."""
    f = ServiceFactory(settings)
    await f.initialize()
    yield f
    await f.close()


@pytest.fixture
def store(factory):
    return factory.create_record_store()


@pytest.fixture
def today():
    return lambda: TODAY
