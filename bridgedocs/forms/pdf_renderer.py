"""
Bridge Docs PDF Renderer
========================
Draws layout instructions onto a single A4 reportlab canvas and returns
the PDF bytes. Same template for quotes and invoices; see layout.py.

Usage:
    from bridgedocs.forms.pdf_renderer import export_document
    result = export_document(invoice)   # (filename, pdf_bytes) or None
"""

import io
import os
import time
import logging
from typing import Optional

import requests
from reportlab.lib.pagesizes import A4
from reportlab.lib.colors import HexColor
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from bridgedocs.core.config import get_logo_source, load_config
from bridgedocs.forms.layout import Band, Text, Rule, Logo, build_layout

log = logging.getLogger("bridgedocs.pdf")

PAGE_W, PAGE_H = A4  # 595.27 x 841.89
LOGO_TIMEOUT = 5


# ═══════════════════════════════════════════════════════════════
# Logo
# ═══════════════════════════════════════════════════════════════

def load_logo(source: str):
    """Load the header logo from a file path or http(s) URL.

    Returns an ImageReader, or None on any failure (missing file, network
    error, bad image data). Never raises.
    """
    if not source:
        return None
    try:
        if source.startswith(("http://", "https://")):
            resp = requests.get(source, timeout=LOGO_TIMEOUT)
            resp.raise_for_status()
            data = resp.content
        else:
            if not os.path.exists(source):
                log.info("No logo at %s, using text header", source)
                return None
            with open(source, "rb") as f:
                data = f.read()
        img = ImageReader(io.BytesIO(data))
        img.getSize()  # force decode so bad data fails here
        return img
    except Exception as e:
        log.warning("Logo load failed (%s): %s", source, e)
        return None


# ═══════════════════════════════════════════════════════════════
# Canvas backend
# ═══════════════════════════════════════════════════════════════

class PdfCanvasBackend:
    """Executes layout instructions against a reportlab canvas."""

    def __init__(self, c):
        self.c = c
        self._handlers = {
            Band: self.band,
            Text: self.text,
            Rule: self.rule,
            Logo: self.logo,
        }

    @staticmethod
    def _y(top_mm):
        # layout y = mm from top; reportlab y = points from bottom
        return PAGE_H - top_mm * mm

    def draw(self, ops):
        for op in ops:
            self._handlers[type(op)](op)

    def band(self, op):
        self.c.setFillColor(HexColor(op.color))
        self.c.rect(op.x * mm, self._y(op.y + op.h), op.w * mm, op.h * mm, fill=1, stroke=0)

    def text(self, op):
        self.c.setFont(op.font, op.size)
        self.c.setFillColor(HexColor(op.color))
        s = str(op.text) if op.text else ""
        if op.align == "right":
            self.c.drawRightString(op.x * mm, self._y(op.y), s)
        elif op.align == "center":
            self.c.drawCentredString(op.x * mm, self._y(op.y), s)
        else:
            self.c.drawString(op.x * mm, self._y(op.y), s)

    def rule(self, op):
        self.c.setStrokeColor(HexColor(op.color))
        self.c.setLineWidth(op.width)
        self.c.line(op.x1 * mm, self._y(op.y1), op.x2 * mm, self._y(op.y2))

    def logo(self, op):
        try:
            self.c.drawImage(op.image, op.x * mm, self._y(op.y + op.h),
                             width=op.w * mm, height=op.h * mm,
                             preserveAspectRatio=True, mask="auto")
        except Exception as e:
            log.warning("Logo draw failed, using text header: %s", e)
            self.text(op.fallback)


# ═══════════════════════════════════════════════════════════════
# Entry points
# ═══════════════════════════════════════════════════════════════

def export_filename(doc) -> str:
    number = (doc.number or "").replace("/", "-").replace("\\", "-")
    return f"{doc.doc_type}-{number}.pdf"


def render_pdf(doc, logo_source: Optional[str] = None, company: Optional[dict] = None) -> bytes:
    """Render a finalized Quote/Invoice to PDF bytes."""
    company = company or load_config()["company"]
    logo = load_logo(get_logo_source() if logo_source is None else logo_source)

    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=A4)
    c.setTitle(f"{doc.title.title()} {doc.number}")
    c.setAuthor(company["name"])
    PdfCanvasBackend(c).draw(build_layout(doc, logo=logo, company=company))
    c.showPage()
    c.save()
    return buf.getvalue()


def export_document(doc, **kwargs):
    """Render for download. Returns (filename, pdf_bytes), or None on failure.

    Any failure is logged here and not raised; the editor simply returns
    to its idle state.
    """
    t0 = time.time()
    ctx = {"doc_type": doc.doc_type, "number": doc.number,
           "items": len(doc.items), "total": doc.total}
    try:
        pdf = render_pdf(doc, **kwargs)
    except Exception:
        log.exception("PDF generation failed for %s %s", doc.doc_type, doc.number, extra=ctx)
        return None
    filename = export_filename(doc)
    duration_ms = round((time.time() - t0) * 1000, 1)
    log.info("%s PDF generated: %s (%d items, %d bytes, %.0fms)",
             doc.title.title(), filename, len(doc.items), len(pdf), duration_ms,
             extra=dict(ctx, duration_ms=duration_ms))
    return filename, pdf
