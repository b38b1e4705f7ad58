"""
Pytest configuration for the pet catalog tests.
"""
import pytest

from pet_catalog.app.core.config import settings
from pet_catalog.app.core.db import init_db
from pet_catalog.app.services.change_notifier import ChangeNotifier
from pet_catalog.app.services.pet_provider import PetProvider


@pytest.fixture(autouse=True)
def test_db(tmp_path, monkeypatch):
    """Point every test at a fresh database file with an empty pets table."""
    db_path = tmp_path / "pets_test.db"
    monkeypatch.setattr(settings, "database_url", str(db_path))
    init_db()
    yield db_path


@pytest.fixture
def notifier():
    return ChangeNotifier()


@pytest.fixture
def provider(notifier):
    """Gateway with its own notifier so observers never leak between tests."""
    return PetProvider(notifier=notifier)


@pytest.fixture
def toto():
    """Sample pet values"""
    return {"name": "Toto", "breed": "Terrier", "gender": 1, "weight": 7}
