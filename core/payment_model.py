"""Editable six-part monthly payment breakdown.

``PaymentModel`` owns the line item values for one analysis session.  Defaults
come from :class:`~core.models.LoanTerms`; afterwards each item is replaced
only by an explicit edit, and every committed change is pushed to a single
observer as a complete :class:`~core.models.MonthlyPayment` snapshot.

Edits follow a two-state machine.  ``begin_edit`` moves one item into
``EDITING`` with pending text, ``confirm`` commits it if the text parses and
``cancel`` discards it.  Only one item can be in ``EDITING`` at a time.
"""
from __future__ import annotations

import logging
import math
from enum import Enum
from typing import Callable, Dict, Optional

from core.calculators import default_line_items
from core.models import LoanTerms, MonthlyPayment
from core.presets import LINE_ITEM_KEYS

logger = logging.getLogger(__name__)

PaymentObserver = Callable[[MonthlyPayment], None]


class EditState(str, Enum):
    COMMITTED = "committed"
    EDITING = "editing"


class InvalidEditValue(ValueError):
    """Raised when edit text does not parse to a finite number."""


def parse_edit_value(raw) -> float:
    """Parse user edit text such as ``"1,250"`` or ``"$90"`` into a float."""

    if isinstance(raw, bool):
        raise InvalidEditValue(f"Not a number: {raw!r}")
    if isinstance(raw, (int, float)):
        value = float(raw)
    else:
        text = str(raw if raw is not None else "").strip().replace(",", "")
        if text.startswith("$"):
            text = text[1:].strip()
        if not text:
            raise InvalidEditValue("Empty value")
        try:
            value = float(text)
        except ValueError as exc:
            raise InvalidEditValue(f"Not a number: {raw!r}") from exc
    if not math.isfinite(value):
        raise InvalidEditValue(f"Not a finite number: {raw!r}")
    return value


def _check_key(key: str) -> None:
    if key not in LINE_ITEM_KEYS:
        raise KeyError(f"Unknown line item: {key}")


class PaymentModel:
    def __init__(
        self,
        terms: Optional[LoanTerms] = None,
        observer: Optional[PaymentObserver] = None,
    ) -> None:
        self._values: Dict[str, float] = {key: 0.0 for key in LINE_ITEM_KEYS}
        self._observer = observer
        self._editing_key: Optional[str] = None
        self._pending_text = ""
        self.terms: Optional[LoanTerms] = None
        if terms is not None:
            self.initialize(terms)

    def subscribe(self, observer: Optional[PaymentObserver]) -> None:
        """Register the single observer, replacing any previous one."""
        self._observer = observer

    def initialize(self, terms: LoanTerms) -> MonthlyPayment:
        """Reset every line item to the defaults derived from ``terms``."""
        self.terms = terms
        self._values = default_line_items(
            terms.purchase_price,
            terms.down_payment,
            terms.annual_interest_rate_pct,
            terms.property_tax_rate_annual,
            terms.base_utilities_estimate,
        )
        self._editing_key = None
        self._pending_text = ""
        logger.debug("Payment model initialized for loan amount %.2f", terms.loan_amount)
        snapshot = self.get_snapshot()
        self._notify(snapshot)
        return snapshot

    def get_snapshot(self) -> MonthlyPayment:
        return MonthlyPayment(**self._values)

    def value(self, key: str) -> float:
        _check_key(key)
        return self._values[key]

    def set_line_item(self, key: str, new_value) -> MonthlyPayment:
        """Replace one line item; malformed input leaves everything unchanged."""
        _check_key(key)
        if self._commit(key, new_value) and key == self._editing_key:
            # pending text would otherwise still show the replaced value
            self.cancel()
        return self.get_snapshot()

    # -- edit state machine ------------------------------------------------

    @property
    def state(self) -> EditState:
        return EditState.EDITING if self._editing_key is not None else EditState.COMMITTED

    @property
    def editing_key(self) -> Optional[str]:
        return self._editing_key

    @property
    def pending_text(self) -> str:
        return self._pending_text

    def begin_edit(self, key: str) -> None:
        _check_key(key)
        if self._editing_key is not None and self._editing_key != key:
            self.cancel()
        self._editing_key = key
        self._pending_text = f"{self._values[key]:.0f}"

    def update_pending(self, text: str) -> None:
        if self._editing_key is None:
            return
        self._pending_text = "" if text is None else str(text)

    def confirm(self) -> bool:
        """Commit the pending text; invalid text keeps the edit open."""
        if self._editing_key is None:
            return False
        if not self._commit(self._editing_key, self._pending_text):
            return False
        self._editing_key = None
        self._pending_text = ""
        return True

    def cancel(self) -> None:
        self._editing_key = None
        self._pending_text = ""

    # -- internals ---------------------------------------------------------

    def _commit(self, key: str, raw) -> bool:
        try:
            value = parse_edit_value(raw)
        except InvalidEditValue as exc:
            logger.warning("Rejected edit for %s: %s", key, exc)
            return False
        self._values[key] = value
        self._notify(self.get_snapshot())
        return True

    def _notify(self, snapshot: MonthlyPayment) -> None:
        if self._observer is not None:
            self._observer(snapshot)
