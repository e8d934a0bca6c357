"""
Quote / Invoice page layout
===========================
Turns a finalized document into a flat list of draw instructions. Nothing
here touches a canvas; pdf_renderer.PdfCanvasBackend consumes the list.

Coordinates are millimetres from the TOP-LEFT of an A4 page (210 x 297),
text y is the baseline. There is no pagination: long item tables or notes
run off the bottom of the page.
"""

from collections import namedtuple
from datetime import date
from typing import Optional

from reportlab.lib.units import mm
from reportlab.lib.utils import simpleSplit

from bridgedocs.core.config import load_config

PAGE_W_MM = 210
PAGE_H_MM = 297
CONTENT_X = 20
CONTENT_W = 170

# ── Brand colors ──
COLORS = {
    "primary":    "#2D3748",   # dark navy
    "secondary":  "#22C55E",   # bright green
    "accent":     "#3B82F6",   # blue
    "text":       "#1F2937",
    "light_gray": "#F3F4F6",
    "medium_gray": "#9CA3AF",
    "white":      "#FFFFFF",
    "alt_row":    "#FAFAFA",
}

STATUS_COLORS = {
    "paid":    COLORS["secondary"],
    "overdue": "#EF4444",
    "pending": "#F59E0B",
}

FONT = "Helvetica"
FONT_BOLD = "Helvetica-Bold"
FONT_ITALIC = "Helvetica-Oblique"

ROW_STEP = 10
ADDRESS_STEP = 5
NOTE_SIZE = 10
NOTE_LEADING = NOTE_SIZE * 1.15 / mm   # 1.15 line height, in mm

# ── Instructions ──
Band = namedtuple("Band", "x y w h color")
Text = namedtuple("Text", "x y text font size color align",
                  defaults=(FONT, 10, COLORS["text"], "left"))
Rule = namedtuple("Rule", "x1 y1 x2 y2 color width", defaults=(COLORS["medium_gray"], 0.3))
Logo = namedtuple("Logo", "x y w h image fallback")


def format_money(value) -> str:
    return f"${float(value):.2f}"


def format_date(value: str) -> str:
    """Short date in the host locale; unparsable input is returned unchanged."""
    try:
        return date.fromisoformat((value or "")[:10]).strftime("%x")
    except ValueError:
        return value or ""


def format_rate(rate) -> str:
    return f"{float(rate):g}"


def status_badge_color(status: str) -> str:
    return STATUS_COLORS.get(status, STATUS_COLORS["pending"])


def wrap_text(text: str, width_mm: float = CONTENT_W, font: str = FONT,
              size: float = NOTE_SIZE) -> list:
    return simpleSplit(text, font, size, width_mm * mm)


def build_layout(doc, logo=None, company: Optional[dict] = None) -> list:
    """Draw instructions for a Quote or Invoice.

    Args:
        doc: finalized DocumentState (totals already recomputed)
        logo: loaded image for the header, or None for the text fallback
        company: company block override (default: load_config()["company"])
    """
    company = company or load_config()["company"]
    is_invoice = doc.doc_type == "invoice"
    ops = []

    # 1. Header band, logo / company name, title, tagline
    name_fallback = Text(20, 25, company["name"], FONT_BOLD, 16, COLORS["white"])
    ops.append(Band(0, 0, PAGE_W_MM, 45, COLORS["primary"]))
    if logo is not None:
        ops.append(Logo(15, 8, 50, 25, logo, name_fallback))
    else:
        ops.append(name_fallback)
    ops.append(Text(165 if is_invoice else 170, 20, doc.title, FONT_BOLD, 16, COLORS["white"]))
    for i, line in enumerate(company.get("tagline", [])[:2]):
        ops.append(Text(70, 15 + i * 5, line, FONT_ITALIC, 8, COLORS["white"]))

    # 2. FROM block + details block
    ops.append(Text(20, 60, "FROM:", FONT_BOLD, 12))
    from_lines = [
        company["legal_name"],
        company["address"],
        f"Phone: {company['phone']}",
        f"Email: {company['email']}",
        f"Website: {company['web']}",
    ]
    for i, line in enumerate(from_lines):
        ops.append(Text(20, 68 + i * 5, line))

    details_title = "Invoice Details" if is_invoice else "Quote Details"
    number_label = "Invoice #" if is_invoice else "Quote #"
    ops.append(Text(120, 60, details_title, FONT_BOLD, 12))
    ops.append(Text(120, 68, f"{number_label}: {doc.number}"))
    ops.append(Text(120, 73, f"Date: {format_date(doc.date)}"))
    ops.append(Text(120, 78, f"{doc.secondary_date_label}: {format_date(doc.secondary_date)}"))
    if is_invoice:
        ops.append(Band(120, 82, 30, 6, status_badge_color(doc.status)))
        ops.append(Text(125, 86, (doc.status or "").upper(), FONT_BOLD, 8, COLORS["white"]))

    # 3. TO block
    ops.append(Text(20, 105, "TO:", FONT_BOLD, 12))
    ops.append(Text(20, 113, doc.client_name))
    ops.append(Text(20, 118, doc.client_email))
    y = 123
    for line in (doc.client_address or "").split("\n"):
        ops.append(Text(20, y, line.rstrip("\r")))
        y += ADDRESS_STEP

    # 4. Item table
    table_y = max(y + 10, 140)
    ops.append(Band(CONTENT_X, table_y, CONTENT_W, 8, COLORS["light_gray"]))
    for x, label in ((25, "Description"), (120, "Qty"), (140, "Unit Price"), (170, "Amount")):
        ops.append(Text(x, table_y + 5, label, FONT_BOLD, 10))
    ops.append(Rule(CONTENT_X, table_y + 8, CONTENT_X + CONTENT_W, table_y + 8))

    y = table_y + 15
    for idx, item in enumerate(doc.items):
        if idx % 2 == 1:
            ops.append(Band(CONTENT_X, y - 3, CONTENT_W, 8, COLORS["alt_row"]))
        ops.append(Text(25, y, item.description))
        ops.append(Text(125, y, str(item.quantity)))
        ops.append(Text(145, y, format_money(item.unit_price)))
        ops.append(Text(175, y, format_money(item.amount)))
        y += ROW_STEP

    # 5. Totals
    totals_y = y + 10
    ops.append(Rule(135, totals_y - 6, CONTENT_X + CONTENT_W, totals_y - 6))
    ops.append(Text(140, totals_y, "Subtotal:"))
    ops.append(Text(175, totals_y, format_money(doc.subtotal)))
    tax_y = totals_y
    if doc.tax_enabled:
        tax_y += 8
        ops.append(Text(140, tax_y, f"{doc.tax_label} ({format_rate(doc.tax_rate)}%):"))
        ops.append(Text(175, tax_y, format_money(doc.tax)))

    total_y = tax_y + 8
    ops.append(Band(135, total_y - 5, 55, 10, COLORS["accent"] if is_invoice else COLORS["secondary"]))
    ops.append(Text(140, total_y, "Total:", FONT_BOLD, 12, COLORS["white"]))
    ops.append(Text(175, total_y, format_money(doc.total), FONT_BOLD, 12, COLORS["white"]))

    # 6. Payment instructions (invoice only)
    notes_y = total_y + 20
    if is_invoice:
        ops.append(Text(20, total_y + 20, "Payment Information:", FONT_BOLD, 12))
        for i, line in enumerate(payment_instructions(company)):
            ops.append(Text(20, total_y + 28 + i * 5, line))
        notes_y = total_y + 55

    # 7. Notes
    if doc.notes:
        ops.append(Text(20, notes_y, "Additional Notes:" if is_invoice else "Notes:", FONT_BOLD, 12))
        for i, line in enumerate(wrap_text(doc.notes)):
            ops.append(Text(20, notes_y + 8 + i * NOTE_LEADING, line, FONT, NOTE_SIZE))

    # 8. Footer band
    footer_y = 280
    ops.append(Band(0, footer_y, PAGE_W_MM, 17, COLORS["primary"]))
    ops.append(Text(20, footer_y + 10, f"Thank you for choosing {company['name']}!",
                    FONT, 10, COLORS["white"]))
    ops.append(Text(120, footer_y + 10, company["slogan"], FONT, 10, COLORS["white"]))
    return ops


def payment_instructions(company: dict) -> list:
    return [
        "Please remit payment within 30 days of invoice date.",
        "Wire Transfer: Contact us for banking details",
        f"PayPal: {company['email']}",
        f"Check: Make payable to {company['name']}",
    ]
