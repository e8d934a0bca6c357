#!/usr/bin/env python3
"""
Bridge Docs Application Entry Point
Creates the Flask app and registers the dashboard Blueprint.

For gunicorn: gunicorn "app:create_app()"
"""

import os
import time
import locale
import logging
from datetime import timedelta

from flask import Flask, request

from logging_config import setup_logging

log = logging.getLogger("bridgedocs")


def create_app(config=None):
    """Application factory."""
    app = Flask(__name__)
    app.secret_key = os.environ.get("SECRET_KEY", "bridgedocs-2026")
    app.permanent_session_lifetime = timedelta(days=365)
    if config:
        app.config.update(config)
    if not app.config.get("TESTING"):
        setup_logging()

    # PDF dates use the host short date format (%x)
    try:
        locale.setlocale(locale.LC_TIME, "")
    except locale.Error as e:
        log.warning("Host locale unavailable, dates use the C locale: %s", e)

    from bridgedocs.api.dashboard import bp
    app.register_blueprint(bp)

    from bridgedocs.core.security import init_security
    init_security(app)

    # ── Request-level structured logging ────────────────────────────────────
    @app.before_request
    def _log_request_start():
        request._start_time = time.time()

    @app.after_request
    def _log_request_end(response):
        if hasattr(request, "_start_time") and not request.path.startswith("/static"):
            duration_ms = round((time.time() - request._start_time) * 1000, 1)
            log.info("%s %s -> %d (%.0fms)",
                     request.method, request.path, response.status_code, duration_ms,
                     extra={"route": request.path, "method": request.method,
                            "status": response.status_code, "duration_ms": duration_ms})
        return response

    # ── Runtime self-test ─────────────────────────────────────────────────────
    try:
        from bridgedocs.core.startup_checks import run_startup_checks
        with app.app_context():
            checks = run_startup_checks(app)
            if checks["failed"] > 0:
                log.error("STARTUP: %d checks FAILED, review logs", checks["failed"])
    except Exception as e:
        log.warning("Startup checks skipped: %s", e)

    return app


def main():
    port = int(os.environ.get("PORT", 5000))
    create_app().run(host="0.0.0.0", port=port, debug=False)


if __name__ == "__main__":
    main()
