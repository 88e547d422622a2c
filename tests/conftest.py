"""Shared pytest fixtures for cashflow tests."""

import os
import tempfile
from datetime import date

import pytest

from cashflow.database.factories import create_sqlite_database
from cashflow.domain.dashboard import DashboardService
from cashflow.domain.ledger import LedgerService
from cashflow.domain.template import TemplateService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def today():
    """Fixed reference date so results never depend on the system clock."""
    return date(2025, 3, 3)


@pytest.fixture
def ledger_service(temp_db):
    """Create a LedgerService with a temporary database."""
    return LedgerService(temp_db)


@pytest.fixture
def template_service(temp_db):
    """Create a TemplateService with a temporary database."""
    return TemplateService(temp_db)


@pytest.fixture
def dashboard_service(temp_db):
    """Create a DashboardService with a temporary database."""
    return DashboardService(temp_db)


@pytest.fixture
def org_id(ledger_service):
    """Create the default organization and return its ID."""
    return ledger_service.ensure_organization("Test Org")


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
