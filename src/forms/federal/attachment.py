"""Shared base for forms filed with Form 1040."""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING

from calculator.decimal_math import sum_fields
from forms.form_node import Attachment, TaxpayerHeader
from models.taxpayer import PersonRole

if TYPE_CHECKING:
    from forms.federal.form_1040 import Form1040


class F1040Attachment(TaxpayerHeader, Attachment):
    """
    An attachment to Form 1040.

    Sibling values are read through `self.f1040.data` (e.g.
    `self.f1040.data.schedule_c.l31()`), which hands back the shared instance
    whether or not the sibling is attached. Attachments never import each other.
    """

    @property
    def f1040(self) -> "Form1040":
        return self.root  # type: ignore[return-value]

    def wages_for(self, role: PersonRole) -> Decimal:
        return sum_fields(w2.wages for w2 in self.return_input.w2s if w2.owner == role)
