"""Shared test fixtures for the web test suite."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from catalog.store import ProductStore
from web.app import create_app
from web.mailer import EmailJSSettings


@pytest.fixture
def repo_root():
    """Return the project root."""
    return Path(__file__).resolve().parents[2]


@pytest.fixture
def store(repo_root):
    """Product store loaded from the shipped product file."""
    return ProductStore.from_json(str(repo_root / "data" / "products.json"))


@pytest.fixture
def email_settings():
    """EmailJS settings with every required key present."""
    return EmailJSSettings(service_id="service_test", template_id="template_test", public_key="public_test")


@pytest.fixture
def log_file(tmp_path, monkeypatch):
    """Redirect site event logging to a temporary file."""
    path = tmp_path / "site_events.jsonl"
    monkeypatch.setattr("web.logging_utils.LOG_FILE", path)
    return path


@pytest.fixture
def app(store, email_settings, log_file):
    """Flask app wired to the shipped catalog and test email settings."""
    flask_app = create_app(store=store, email_settings=email_settings)
    flask_app.config["TESTING"] = True
    return flask_app


@pytest.fixture
def client(app):
    """Create Flask test client."""
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture
def ok_response():
    """A successful EmailJS HTTP response."""
    response = MagicMock()
    response.status_code = 200
    response.text = "OK"
    response.raise_for_status.return_value = None
    return response


@pytest.fixture
def valid_form():
    """A contact form submission that passes validation."""
    return {
        "company_name": "Acme Health",
        "contact_person": "Sam Doe",
        "email": "sam@acme.example",
        "phone": "+44 20 7946 0958",
        "country": "United Kingdom",
        "requirements": "Need 10,000 packs of Albendazole 400 mg for tender.",
        "inquiry_type": "general",
        "preferred_contact": "email",
    }
