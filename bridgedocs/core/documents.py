"""
Quote & Invoice document state.

A document owns an ordered list of line items and a tax configuration.
Totals (subtotal, tax, total) are derived: every mutating operation ends
with an explicit recompute(), and nothing else writes them.

Usage:
    from bridgedocs.core.documents import Quote
    q = Quote.new()
    item = q.items[0]
    q.update_item(item.id, "quantity", "2")
    q.update_item(item.id, "unit_price", "50")
    q.total  # 110.0 with the default 10% tax
"""

import re
import math
import time
import uuid
import logging
from datetime import date, timedelta
from typing import Optional

from bridgedocs.core.config import DEFAULTS

log = logging.getLogger("bridgedocs.documents")

EDITABLE_FIELDS = ("description", "quantity", "unit_price")
INVOICE_STATUSES = ("pending", "paid", "overdue")

_LEADING_NUMBER = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_LEADING_INT = re.compile(r"^\s*[+-]?\d+")

# Upper bounds keep every amount, subtotal and tax finite.
MAX_QUANTITY = 10 ** 9
MAX_PRICE = 1e12


# ═══════════════════════════════════════════════════════════════════════
# Numeric input policy
# ═══════════════════════════════════════════════════════════════════════
# Malformed quantity/price text is coerced to 0 instead of rejecting the
# edit. Leading numeric text is honoured ("12.50 USD" -> 12.5, "3 pcs" -> 3).
# Negative, non-finite and out-of-range values also become 0.

def parse_price(value) -> float:
    """Parse a unit price or tax rate; anything unusable becomes 0.0."""
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        try:
            num = float(value)
        except OverflowError:
            return 0.0
    else:
        m = _LEADING_NUMBER.match(str(value or ""))
        if not m:
            return 0.0
        num = float(m.group(0))
    if not math.isfinite(num) or num < 0 or num > MAX_PRICE:
        return 0.0
    return num


def parse_quantity(value) -> int:
    """Parse a quantity as a whole number; anything unusable becomes 0."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, float):
        if not math.isfinite(value):
            return 0
        num = int(value)
    elif isinstance(value, int):
        num = value
    else:
        m = _LEADING_INT.match(str(value or ""))
        if not m:
            return 0
        try:
            num = int(m.group(0))
        except ValueError:  # beyond the int string conversion limit
            return 0
    return num if 0 < num <= MAX_QUANTITY else 0


def new_item_id() -> str:
    return uuid.uuid4().hex[:12]


# ═══════════════════════════════════════════════════════════════════════
# Line items
# ═══════════════════════════════════════════════════════════════════════

class LineItem:
    """One billable row. amount is read-only and follows quantity × unit_price."""

    def __init__(self, item_id: str = "", description: str = "",
                 quantity=1, unit_price=0.0):
        self.id = item_id or new_item_id()
        self.description = description or ""
        self._quantity = parse_quantity(quantity)
        self._unit_price = parse_price(unit_price)
        self._amount = 0.0
        self._recompute_amount()

    def _recompute_amount(self):
        self._amount = self._quantity * self._unit_price

    @property
    def quantity(self) -> int:
        return self._quantity

    @quantity.setter
    def quantity(self, value):
        self._quantity = parse_quantity(value)
        self._recompute_amount()

    @property
    def unit_price(self) -> float:
        return self._unit_price

    @unit_price.setter
    def unit_price(self, value):
        self._unit_price = parse_price(value)
        self._recompute_amount()

    @property
    def amount(self) -> float:
        return self._amount

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "description": self.description,
            "quantity": self.quantity,
            "unit_price": self.unit_price,
            "amount": self.amount,
        }

    def __repr__(self):
        return f"LineItem({self.id!r}, qty={self.quantity}, price={self.unit_price})"


# ═══════════════════════════════════════════════════════════════════════
# Documents
# ═══════════════════════════════════════════════════════════════════════

class DocumentState:
    """Shared state and ledger operations for quotes and invoices."""

    doc_type = ""
    title = ""
    number_prefix = ""
    secondary_date_field = ""
    secondary_date_label = ""

    def __init__(self, number: str = "", date: str = "", client_name: str = "",
                 client_email: str = "", client_address: str = "",
                 items: Optional[list] = None, notes: str = "",
                 tax_enabled: bool = True, tax_rate=10, tax_label: str = "Tax"):
        self.number = number
        self.date = date
        self.client_name = client_name
        self.client_email = client_email
        self.client_address = client_address
        self.items = list(items) if items else [LineItem()]
        self.notes = notes
        self.tax_enabled = bool(tax_enabled)
        self.tax_rate = parse_price(tax_rate)
        self.tax_label = tax_label
        self.subtotal = 0.0
        self.tax = 0.0
        self.total = 0.0
        self.recompute()

    # ── Construction ─────────────────────────────────────────────────────

    @classmethod
    def new(cls, defaults: Optional[dict] = None, today: Optional[date] = None):
        """Blank document as the editor opens it: one empty item, today's date."""
        d = dict(DEFAULTS)
        d.update(defaults or {})
        today = today or date.today()
        doc = cls(
            number=f"{cls.number_prefix}-{int(time.time() * 1000)}",
            date=today.isoformat(),
            tax_enabled=d["tax_enabled"],
            tax_rate=d["tax_rate"],
            tax_label=d["tax_label"],
        )
        doc.secondary_date = (today + timedelta(days=int(cls._secondary_days(d)))).isoformat()
        return doc

    @classmethod
    def _secondary_days(cls, defaults: dict) -> int:
        raise NotImplementedError

    @classmethod
    def from_form(cls, form):
        """Rebuild a document from submitted editor fields.

        Item fields arrive as items-<n>-<field>. Each one goes through
        update_item() so the numeric input policy applies.
        """
        doc = cls(
            number=form.get("number", ""),
            date=form.get("date", ""),
            client_name=form.get("client_name", ""),
            client_email=form.get("client_email", ""),
            client_address=form.get("client_address", ""),
            notes=form.get("notes", ""),
            tax_enabled=form.get("tax_enabled", "") in ("on", "true", "1"),
            tax_rate=form.get("tax_rate", 0),
            tax_label=form.get("tax_label", "") or DEFAULTS["tax_label"],
        )
        doc.secondary_date = form.get(cls.secondary_date_field, "")
        doc._apply_extra_form_fields(form)

        rows = {}
        for key in form.keys():
            m = re.match(r"^items-(\d+)-(id|description|quantity|unit_price)$", key)
            if m:
                rows.setdefault(int(m.group(1)), {})[m.group(2)] = form.get(key)

        if rows:
            doc.items = []
            for idx in sorted(rows):
                row = rows[idx]
                item = LineItem(item_id=row.get("id", ""))
                if any(existing.id == item.id for existing in doc.items):
                    item.id = new_item_id()
                doc.items.append(item)
                for field in EDITABLE_FIELDS:
                    if field in row:
                        doc.update_item(item.id, field, row[field])
        doc.recompute()
        return doc

    def _apply_extra_form_fields(self, form):
        pass

    # ── Secondary date (valid_until / due_date) ─────────────────────────

    @property
    def secondary_date(self) -> str:
        return getattr(self, self.secondary_date_field, "")

    @secondary_date.setter
    def secondary_date(self, value: str):
        setattr(self, self.secondary_date_field, value or "")

    # ── Ledger operations ───────────────────────────────────────────────

    def find_item(self, item_id: str) -> Optional[LineItem]:
        for item in self.items:
            if item.id == item_id:
                return item
        return None

    def add_item(self) -> LineItem:
        item = LineItem()
        self.items.append(item)
        self.recompute()
        return item

    def remove_item(self, item_id: str) -> bool:
        """Remove an item. A document always keeps at least one line item."""
        if len(self.items) <= 1:
            log.debug("Refusing to remove last item from %s %s", self.doc_type, self.number)
            return False
        item = self.find_item(item_id)
        if item is None:
            return False
        self.items.remove(item)
        self.recompute()
        return True

    def update_item(self, item_id: str, field: str, value) -> Optional[LineItem]:
        """Set one editable field on an item; quantity/price edits refresh its amount."""
        if field not in EDITABLE_FIELDS:
            raise ValueError(f"Line item field '{field}' is not editable")
        item = self.find_item(item_id)
        if item is None:
            return None
        if field == "description":
            item.description = "" if value is None else str(value)
        else:
            setattr(item, field, value)
        self.recompute()
        return item

    def set_tax(self, enabled: Optional[bool] = None, rate=None, label: Optional[str] = None):
        if enabled is not None:
            self.tax_enabled = bool(enabled)
        if rate is not None:
            self.tax_rate = parse_price(rate)
        if label is not None:
            self.tax_label = label
        self.recompute()

    def recompute(self):
        """Derive subtotal, tax and total from the items and tax config."""
        self.subtotal = sum(item.amount for item in self.items)
        self.tax = self.subtotal * self.tax_rate / 100 if self.tax_enabled else 0.0
        self.total = self.subtotal + self.tax

    # ── Export ───────────────────────────────────────────────────────────

    def to_dict(self) -> dict:
        return {
            "doc_type": self.doc_type,
            "number": self.number,
            "date": self.date,
            self.secondary_date_field: self.secondary_date,
            "client_name": self.client_name,
            "client_email": self.client_email,
            "client_address": self.client_address,
            "items": [item.to_dict() for item in self.items],
            "notes": self.notes,
            "tax_enabled": self.tax_enabled,
            "tax_rate": self.tax_rate,
            "tax_label": self.tax_label,
            "subtotal": self.subtotal,
            "tax": self.tax,
            "total": self.total,
        }


class Quote(DocumentState):
    doc_type = "quote"
    title = "QUOTE"
    number_prefix = "QUO"
    secondary_date_field = "valid_until"
    secondary_date_label = "Valid Until"

    def __init__(self, *args, valid_until: str = "", **kwargs):
        self.valid_until = valid_until
        super().__init__(*args, **kwargs)

    @classmethod
    def _secondary_days(cls, defaults: dict) -> int:
        return defaults["validity_days"]


class Invoice(DocumentState):
    doc_type = "invoice"
    title = "INVOICE"
    number_prefix = "INV"
    secondary_date_field = "due_date"
    secondary_date_label = "Due Date"

    def __init__(self, *args, due_date: str = "", status: str = "pending", **kwargs):
        self.due_date = due_date
        self.status = status
        super().__init__(*args, **kwargs)

    @classmethod
    def _secondary_days(cls, defaults: dict) -> int:
        return defaults["due_days"]

    def _apply_extra_form_fields(self, form):
        status = (form.get("status", "") or "").strip().lower()
        self.status = status if status in INVOICE_STATUSES else "pending"

    def to_dict(self) -> dict:
        d = super().to_dict()
        d["status"] = self.status
        return d


DOCUMENT_TYPES = {"quote": Quote, "invoice": Invoice}
