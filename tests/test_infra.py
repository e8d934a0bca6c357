"""Tests for app infrastructure: paths, config file, logging, locale, startup checks."""

import json
import logging
import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))


# ─── Paths ──────────────────────────────────────────────────────────────────

class TestPaths:
    def test_layout(self):
        from bridgedocs.core.paths import PROJECT_ROOT, ASSETS_DIR, DEFAULT_LOGO_PATH
        assert os.path.isfile(os.path.join(PROJECT_ROOT, "app.py"))
        assert ASSETS_DIR.startswith(PROJECT_ROOT)
        assert DEFAULT_LOGO_PATH.endswith(os.path.join("assets", "logo.png"))

    def test_validate_structure(self):
        from bridgedocs.core.paths import validate_paths
        result = validate_paths()
        assert set(result) == {"ok", "errors", "warnings", "resolved"}
        assert "DATA_DIR" in result["resolved"]
        assert result["ok"] is True

    def test_data_dir_exists(self):
        from bridgedocs.core.paths import DATA_DIR
        assert os.path.isdir(DATA_DIR)


# ─── Config ─────────────────────────────────────────────────────────────────

class TestConfig:
    def test_builtins_without_file(self):
        from bridgedocs.core.config import load_config, COMPANY, DEFAULTS
        cfg = load_config()
        assert cfg["company"] == COMPANY
        assert cfg["defaults"] == DEFAULTS

    def test_file_overrides(self, tmp_path):
        from bridgedocs.core.config import load_config, COMPANY
        path = tmp_path / "cfg.json"
        path.write_text(json.dumps({
            "company": {"phone": "+1 555 0100"},
            "defaults": {"tax_rate": 8.25, "validity_days": 14},
        }))
        cfg = load_config(str(path))
        assert cfg["company"]["phone"] == "+1 555 0100"
        assert cfg["company"]["name"] == COMPANY["name"]
        assert cfg["defaults"]["tax_rate"] == 8.25
        assert cfg["defaults"]["validity_days"] == 14
        assert cfg["defaults"]["due_days"] == 30

    def test_builtins_not_mutated(self, tmp_path):
        from bridgedocs.core.config import load_config, COMPANY
        path = tmp_path / "cfg.json"
        path.write_text(json.dumps({"company": {"name": "Changed"}}))
        load_config(str(path))
        assert COMPANY["name"] == "JH Bridge Translation"

    def test_bad_json_falls_back(self, tmp_path, caplog):
        from bridgedocs.core.config import load_config, DEFAULTS
        path = tmp_path / "cfg.json"
        path.write_text("{not json")
        with caplog.at_level(logging.WARNING, logger="bridgedocs.config"):
            cfg = load_config(str(path))
        assert cfg["defaults"] == DEFAULTS
        assert "unreadable" in caplog.text

    def test_non_dict_section_ignored(self, tmp_path):
        from bridgedocs.core.config import load_config, COMPANY
        path = tmp_path / "cfg.json"
        path.write_text(json.dumps({"company": "nope"}))
        assert load_config(str(path))["company"] == COMPANY

    def test_access_code_env(self, monkeypatch):
        from bridgedocs.core.config import get_access_code, DEFAULT_ACCESS_CODE
        assert get_access_code() == DEFAULT_ACCESS_CODE
        monkeypatch.setenv("APP_ACCESS_CODE", "other")
        assert get_access_code() == "other"

    def test_logo_source_env(self, monkeypatch):
        from bridgedocs.core.config import get_logo_source
        monkeypatch.setenv("LOGO_SOURCE", "https://cdn.example.com/logo.png")
        assert get_logo_source() == "https://cdn.example.com/logo.png"
        monkeypatch.delenv("LOGO_SOURCE")
        assert get_logo_source().endswith("logo.png")


# ─── Logging ────────────────────────────────────────────────────────────────

@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for h in root.handlers:
        if h not in handlers:
            h.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestLogging:
    def test_json_formatter_extras(self):
        from logging_config import JSONFormatter
        record = logging.LogRecord("bridgedocs.pdf", logging.INFO, __file__, 1,
                                   "generated %s", ("quote-1.pdf",), None)
        record.doc_type = "quote"
        record.total = 143.0
        entry = json.loads(JSONFormatter().format(record))
        assert entry["msg"] == "generated quote-1.pdf"
        assert entry["level"] == "INFO"
        assert entry["doc_type"] == "quote"
        assert entry["total"] == 143.0
        assert "route" not in entry

    def test_human_formatter(self):
        from logging_config import HumanFormatter
        record = logging.LogRecord("bridgedocs", logging.WARNING, __file__, 1, "careful", (), None)
        line = HumanFormatter().format(record)
        assert "[W] bridgedocs: careful" in line

    def test_setup_writes_log_file(self, tmp_path, monkeypatch, restore_root_logger):
        import logging_config
        monkeypatch.setattr(logging_config, "LOG_DIR", str(tmp_path / "logs"))
        logging_config.setup_logging(level="DEBUG", json_logs=True)
        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 2
        logging.getLogger("bridgedocs.test").info("hello")
        for h in root.handlers:
            h.flush()
        with open(tmp_path / "logs" / "bridgedocs.log") as f:
            lines = [json.loads(line) for line in f if line.strip()]
        assert any(e["msg"] == "hello" for e in lines)

    def test_level_from_env(self, tmp_path, monkeypatch, restore_root_logger):
        import logging_config
        monkeypatch.setattr(logging_config, "LOG_DIR", str(tmp_path / "logs"))
        monkeypatch.setenv("LOG_LEVEL", "warning")
        logging_config.setup_logging(json_logs=False)
        assert logging.getLogger().level == logging.WARNING

    def test_export_record_carries_document_fields(self, sample_invoice, caplog):
        from logging_config import JSONFormatter
        from bridgedocs.forms.pdf_renderer import export_document
        with caplog.at_level(logging.INFO, logger="bridgedocs.pdf"):
            assert export_document(sample_invoice) is not None
        record = next(r for r in caplog.records if "PDF generated" in r.getMessage())
        entry = json.loads(JSONFormatter().format(record))
        assert entry["doc_type"] == "invoice"
        assert entry["number"] == "INV-2001"
        assert entry["items"] == 2
        assert entry["total"] == pytest.approx(143.0)
        assert "duration_ms" in entry

    def test_export_failure_record_carries_document_fields(self, sample_quote, caplog, monkeypatch):
        from logging_config import JSONFormatter
        from bridgedocs.forms import pdf_renderer

        def broken(*a, **kw):
            raise RuntimeError("no canvas")
        monkeypatch.setattr(pdf_renderer, "render_pdf", broken)
        with caplog.at_level(logging.ERROR, logger="bridgedocs.pdf"):
            assert pdf_renderer.export_document(sample_quote) is None
        entry = json.loads(JSONFormatter().format(caplog.records[-1]))
        assert entry["level"] == "ERROR"
        assert entry["doc_type"] == "quote"
        assert entry["number"] == "QUO-1001"
        assert "no canvas" in entry["exception"]


# ─── Locale ─────────────────────────────────────────────────────────────────

class TestLocale:
    def test_create_app_sets_host_time_locale(self, monkeypatch):
        import locale
        from app import create_app
        calls = []
        monkeypatch.setattr(locale, "setlocale", lambda category, value=None: calls.append((category, value)))
        create_app({"TESTING": True, "SECRET_KEY": "test"})
        assert (locale.LC_TIME, "") in calls

    def test_missing_locale_tolerated(self, monkeypatch, caplog):
        import locale
        from app import create_app

        def unavailable(category, value=None):
            raise locale.Error("unsupported locale setting")
        monkeypatch.setattr(locale, "setlocale", unavailable)
        with caplog.at_level(logging.WARNING, logger="bridgedocs"):
            app = create_app({"TESTING": True, "SECRET_KEY": "test"})
        assert app is not None
        assert "Host locale unavailable" in caplog.text

    def test_dates_follow_active_locale(self, app):
        from datetime import date
        from bridgedocs.forms.layout import format_date
        assert format_date("2026-03-02") == date(2026, 3, 2).strftime("%x")


# ─── Startup checks ─────────────────────────────────────────────────────────

class TestStartupChecks:
    def test_structure(self, app):
        from bridgedocs.core.startup_checks import run_startup_checks
        result = run_startup_checks(app)
        assert set(result) == {"passed", "failed", "warnings", "details"}
        assert result["failed"] == 0
        assert result["passed"] >= 2

    def test_default_code_warns(self, app):
        from bridgedocs.core.startup_checks import run_startup_checks
        details = run_startup_checks(app)["details"]
        assert ("WARN", "APP_ACCESS_CODE not set; using the built-in access code") in details

    def test_configured_code_passes(self, app, monkeypatch):
        from bridgedocs.core.startup_checks import run_startup_checks
        monkeypatch.setenv("APP_ACCESS_CODE", "s3cret")
        assert ("PASS", "Access code configured") in run_startup_checks(app)["details"]

    def test_missing_logo_warns(self, app):
        from bridgedocs.core.startup_checks import run_startup_checks
        details = run_startup_checks(app)["details"]
        assert any(level == "WARN" and "text header" in msg for level, msg in details)

    def test_routes_counted(self, app):
        from bridgedocs.core.startup_checks import run_startup_checks
        details = run_startup_checks(app)["details"]
        assert any(msg.startswith("Flask routes registered:") for _, msg in details)
