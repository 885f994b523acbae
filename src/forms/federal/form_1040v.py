"""Form 1040-V - Payment Voucher."""

from __future__ import annotations

from decimal import Decimal

from forms.federal.attachment import F1040Attachment
from forms.lines import LineKind, line


class Form1040V(F1040Attachment):
    tag = "f1040v"
    sequence_index = 0

    FIELDS = ("ssn", "spouse_ssn", "amount_paid", "names", "address")

    @line(LineKind.BOOLEAN)
    def is_needed(self) -> bool:
        return self.amount_paid() > 0

    @line(LineKind.TEXT)
    def spouse_ssn(self) -> str:
        return self.f1040.spouse_ssn()

    @line
    def amount_paid(self) -> Decimal:
        """Amount you owe from Form 1040 line 37"""
        return self.f1040.l37()

    @line(LineKind.TEXT)
    def address(self) -> str:
        address = self.return_input.taxpayer.address
        city_line = " ".join(part for part in (address.state, address.zip_code) if part)
        if address.city:
            city_line = f"{address.city}, {city_line}" if city_line else address.city
        return "\n".join(part for part in (address.street, city_line) if part)
