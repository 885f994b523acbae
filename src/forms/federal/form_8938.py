"""
Form 8938 - Statement of Specified Foreign Financial Assets.

Asset values are not collected, so the form is never attached; it stays
in the catalog so its tag and position are reserved in the output order.
"""

from __future__ import annotations

from forms.federal.attachment import F1040Attachment
from forms.lines import LineKind, line


class Form8938(F1040Attachment):
    tag = "f8938"
    sequence_index = 170

    FIELDS = ("names", "ssn")

    @line(LineKind.BOOLEAN)
    def is_needed(self) -> bool:
        return False
