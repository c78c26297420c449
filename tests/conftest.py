"""
Pytest configuration and shared fixtures for testing.

Provides reusable test fixtures:
- pay_rules: Packaged pay rules (DOLE rate matrix, 22:00-06:00 window)
- brackets: Packaged 2024 contribution tables and TRAIN tax brackets
- test_db: In-memory SQLite session for payroll run tests
- make_shift: Factory for naive (Manila wall clock) shifts
"""

import datetime
import sys
from pathlib import Path

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# ruff: noqa: E402
from cafepay.core.models import Shift
from cafepay.core.storage import clear_storage_cache, get_default_deduction_brackets, get_default_pay_rules
from cafepay.database.database import Base, create_tables


@pytest.fixture(scope="function")
def pay_rules():
    """Default pay rules loaded from cafepay/data/pay_rules.json."""
    return get_default_pay_rules()


@pytest.fixture(scope="function")
def brackets():
    """Default deduction table loaded from cafepay/data/deduction_brackets.json."""
    return list(get_default_deduction_brackets())


@pytest.fixture(scope="function", autouse=True)
def reset_storage_cache():
    """Keep cached defaults from leaking between tests that load custom files."""
    yield
    clear_storage_cache()


@pytest.fixture(scope="function")
def test_db():
    """
    Create an in-memory SQLite database for testing.

    This fixture creates a fresh database for each test function,
    ensuring test isolation. The database is destroyed after each test.

    Yields:
        SQLAlchemy Session: Database session for test use
    """
    engine = create_engine("sqlite:///:memory:", connect_args={"check_same_thread": False})
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    create_tables(engine)

    db = TestingSessionLocal()

    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def make_shift():
    """
    Factory for shifts on a given day.

    Usage:
        make_shift(datetime.date(2025, 1, 6), "09:00", "17:00")

    An end time at or before the start time is placed on the next day.
    """

    def _make(day: datetime.date, start: str, end: str, **kwargs) -> Shift:
        start_dt = datetime.datetime.combine(day, datetime.time.fromisoformat(start))
        end_dt = datetime.datetime.combine(day, datetime.time.fromisoformat(end))
        if end_dt <= start_dt:
            end_dt += datetime.timedelta(days=1)
        return Shift(start_time=start_dt, end_time=end_dt, **kwargs)

    return _make
