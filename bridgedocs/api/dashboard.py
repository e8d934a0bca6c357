"""
Bridge Docs Dashboard
Home, quote editor and invoice editor behind the access gate.

Editor state is never stored server-side: every POST carries the whole
document, is rebuilt with from_form(), has one action applied, and is
rendered back (or exported as a PDF download).
"""
import io
import logging

from flask import (Blueprint, request, redirect, url_for, render_template_string,
                   send_file)

from bridgedocs.core.config import load_config
from bridgedocs.core.documents import DOCUMENT_TYPES, INVOICE_STATUSES
from bridgedocs.core.security import current_gate, gate_required, render_gate
from bridgedocs.forms.layout import format_money, format_rate
from bridgedocs.forms.pdf_renderer import export_document
from bridgedocs.api.templates import PAGE_TOP, PAGE_BOTTOM, PAGE_HOME, PAGE_EDITOR

log = logging.getLogger("bridgedocs.dashboard")

bp = Blueprint("dashboard", __name__)


def render(content, page_title="Quote & Invoice Generator", **kw):
    html = PAGE_TOP + content + PAGE_BOTTOM
    return render_template_string(html, company=load_config()["company"],
                                  page_title=page_title, **kw)


def _safe_next(url: str) -> str:
    if not url or not url.startswith("/") or url.startswith("//"):
        return "/"
    return url


# ═══════════════════════════════════════════════════════════════════════
# Access gate
# ═══════════════════════════════════════════════════════════════════════

@bp.route("/access", methods=["POST"])
def access():
    gate = current_gate()
    next_url = _safe_next(request.form.get("next", "/"))
    if gate.submit(request.form.get("access_code", "")):
        return redirect(next_url)
    return render_gate(gate, next_url=next_url)


@bp.route("/logout", methods=["GET", "POST"])
def logout():
    current_gate().logout()
    return redirect(url_for("dashboard.home"))


# ═══════════════════════════════════════════════════════════════════════
# Views
# ═══════════════════════════════════════════════════════════════════════

@bp.route("/")
@gate_required
def home():
    return render(PAGE_HOME)


def _render_editor(doc):
    return render(PAGE_EDITOR, page_title=f"Create {doc.title.title()}", doc=doc,
                  statuses=INVOICE_STATUSES, money=format_money, rate=format_rate)


def _editor(doc_type):
    cls = DOCUMENT_TYPES[doc_type]
    if request.method == "GET":
        return _render_editor(cls.new(defaults=load_config()["defaults"]))

    doc = cls.from_form(request.form)
    action = request.form.get("action", "update")

    if action == "add_item":
        doc.add_item()
    elif action.startswith("remove_item:"):
        doc.remove_item(action.split(":", 1)[1])
    elif action == "export":
        result = export_document(doc)
        if result:
            filename, pdf = result
            return send_file(io.BytesIO(pdf), mimetype="application/pdf",
                             as_attachment=True, download_name=filename)
        # failure already logged; editor goes back to idle

    return _render_editor(doc)


@bp.route("/quote", methods=["GET", "POST"])
@gate_required
def quote_editor():
    return _editor("quote")


@bp.route("/invoice", methods=["GET", "POST"])
@gate_required
def invoice_editor():
    return _editor("invoice")
