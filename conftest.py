"""
Shared pytest fixtures for the Bridge Docs test suite.
"""
import os
import sys

import pytest

_PROJECT_ROOT = os.path.dirname(os.path.abspath(__file__))
if _PROJECT_ROOT not in sys.path:
    sys.path.insert(0, _PROJECT_ROOT)

from bridgedocs.core.documents import Quote, Invoice, LineItem  # noqa: E402

ACCESS_CODE = "zxcvbnm"


# ── Isolation ─────────────────────────────────────────────────────────────────

@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """No real logo, no real config file, default access code."""
    import bridgedocs.core.config as config
    monkeypatch.setattr(config, "CONFIG_PATH", str(tmp_path / "missing_config.json"))
    monkeypatch.setenv("LOGO_SOURCE", str(tmp_path / "missing_logo.png"))
    monkeypatch.delenv("APP_ACCESS_CODE", raising=False)
    return tmp_path


# ── Flask test client ─────────────────────────────────────────────────────────

@pytest.fixture
def app():
    from app import create_app
    return create_app({"TESTING": True, "SECRET_KEY": "test"})


@pytest.fixture
def client(app):
    """Client whose session already carries the access flag."""
    with app.test_client() as c:
        with c.session_transaction() as sess:
            sess["app_authenticated"] = "true"
        yield c


@pytest.fixture
def anon_client(app):
    """Client that has not passed the access gate."""
    with app.test_client() as c:
        yield c


# ── Sample data factories ─────────────────────────────────────────────────────

@pytest.fixture
def sample_items():
    return [
        LineItem(item_id="a1", description="Certified translation (ES>EN)", quantity=2, unit_price=50),
        LineItem(item_id="b2", description="Notarization", quantity=1, unit_price=30),
    ]


@pytest.fixture
def sample_quote(sample_items):
    return Quote(
        number="QUO-1001",
        date="2026-03-02",
        valid_until="2026-04-01",
        client_name="Acme Legal LLP",
        client_email="billing@acmelegal.com",
        client_address="12 Court St\nSuite 400\nBoston, MA 02108",
        items=sample_items,
        notes="",
        tax_enabled=True,
        tax_rate=10,
        tax_label="Tax",
    )


@pytest.fixture
def sample_invoice(sample_items):
    return Invoice(
        number="INV-2001",
        date="2026-03-02",
        due_date="2026-04-01",
        status="pending",
        client_name="Acme Legal LLP",
        client_email="billing@acmelegal.com",
        client_address="12 Court St\nBoston, MA 02108",
        items=sample_items,
        tax_enabled=True,
        tax_rate=10,
        tax_label="Sales Tax",
    )


def editor_form(doc, action="update", **overrides):
    """Form fields as the editor page would submit them."""
    form = {
        "action": action,
        "number": doc.number,
        "date": doc.date,
        doc.secondary_date_field: doc.secondary_date,
        "client_name": doc.client_name,
        "client_email": doc.client_email,
        "client_address": doc.client_address,
        "notes": doc.notes,
        "tax_rate": str(doc.tax_rate),
        "tax_label": doc.tax_label,
    }
    if doc.tax_enabled:
        form["tax_enabled"] = "on"
    if doc.doc_type == "invoice":
        form["status"] = doc.status
    for i, item in enumerate(doc.items):
        form[f"items-{i}-id"] = item.id
        form[f"items-{i}-description"] = item.description
        form[f"items-{i}-quantity"] = str(item.quantity)
        form[f"items-{i}-unit_price"] = str(item.unit_price)
    form.update(overrides)
    return form


@pytest.fixture
def form_for():
    return editor_form
