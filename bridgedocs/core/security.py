"""
Access Gate + Security Headers
==============================

Access Gate:
- One shared access code guards every view (APP_ACCESS_CODE env)
- The "authenticated" flag lives in a SessionStore (Flask session in the
  app, MemoryStore in tests) under key app_authenticated = "true"
- Exact, case-sensitive match; no lockout, no rate limiting

The code ships with the app and the flag is a plain boolean, so this is
access obfuscation, not authentication.

Security Headers:
- nosniff / frame / referrer / no-store on every response
"""

import secrets
import logging
import functools

from flask import session, request, render_template_string

from bridgedocs.core.config import get_access_code

log = logging.getLogger("bridgedocs.security")

AUTH_FLAG_KEY = "app_authenticated"
INVALID_CODE_MESSAGE = "Invalid access code. Please try again."

LOADING = "loading"
UNAUTHENTICATED = "unauthenticated"
AUTHENTICATED = "authenticated"


# ═══════════════════════════════════════════════════════════════════════════════
# Flag storage
# ═══════════════════════════════════════════════════════════════════════════════

class SessionStore:
    """get/set/clear for the persisted flag."""

    def get(self, key: str):
        raise NotImplementedError

    def set(self, key: str, value: str):
        raise NotImplementedError

    def clear(self, key: str):
        raise NotImplementedError


class FlaskSessionStore(SessionStore):
    """Backed by the signed Flask session cookie of the current request."""

    def get(self, key):
        return session.get(key)

    def set(self, key, value):
        session[key] = value
        session.permanent = True

    def clear(self, key):
        session.pop(key, None)


class MemoryStore(SessionStore):

    def __init__(self, initial=None):
        self.data = dict(initial or {})

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value):
        self.data[key] = value

    def clear(self, key):
        self.data.pop(key, None)


# ═══════════════════════════════════════════════════════════════════════════════
# Gate
# ═══════════════════════════════════════════════════════════════════════════════

class AccessGate:
    """loading → unauthenticated ⇄ authenticated."""

    def __init__(self, store: SessionStore, access_code: str = ""):
        self.store = store
        self.access_code = access_code or get_access_code()
        self.state = LOADING
        self.error = ""
        self.code_input = ""

    @property
    def is_authenticated(self) -> bool:
        return self.state == AUTHENTICATED

    def load(self) -> str:
        """Mount-time check of the persisted flag."""
        if self.store.get(AUTH_FLAG_KEY) == "true":
            self.state = AUTHENTICATED
        else:
            self.state = UNAUTHENTICATED
        return self.state

    def submit(self, code: str) -> bool:
        self.error = ""
        self.code_input = code or ""
        if secrets.compare_digest(self.code_input.encode(), self.access_code.encode()):
            self.state = AUTHENTICATED
            self.store.set(AUTH_FLAG_KEY, "true")
            return True
        self.error = INVALID_CODE_MESSAGE
        self.code_input = ""
        self.state = UNAUTHENTICATED
        return False

    def logout(self):
        self.store.clear(AUTH_FLAG_KEY)
        self.state = UNAUTHENTICATED
        self.code_input = ""
        self.error = ""


def current_gate() -> AccessGate:
    gate = AccessGate(FlaskSessionStore())
    gate.load()
    return gate


def render_gate(gate: AccessGate, next_url: str = "/"):
    from bridgedocs.api.templates import GATE_HTML
    return render_template_string(GATE_HTML, gate=gate, next_url=next_url), 200


def gate_required(f):
    """Render the access form in place of the view until the gate is open."""
    @functools.wraps(f)
    def decorated(*args, **kwargs):
        gate = current_gate()
        if not gate.is_authenticated:
            return render_gate(gate, next_url=request.path)
        return f(*args, **kwargs)
    return decorated


# ═══════════════════════════════════════════════════════════════════════════════
# Security Headers Middleware
# ═══════════════════════════════════════════════════════════════════════════════

def add_security_headers(response):
    """Add security headers to every response."""
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "SAMEORIGIN"
    response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
    if not response.headers.get("Cache-Control"):
        response.headers["Cache-Control"] = "no-store"
    return response


def init_security(app):
    """Initialize security middleware on the Flask app."""
    app.after_request(add_security_headers)
    log.info("Security middleware initialized: access gate, security headers")
