"""Schedule EIC (Form 1040) - Earned Income Credit qualifying child information."""

from __future__ import annotations

from decimal import Decimal
from typing import List

from forms.federal.attachment import F1040Attachment
from forms.lines import LineKind, line
from models.taxpayer import Dependent


class ScheduleEIC(F1040Attachment):
    tag = "f1040seic"
    sequence_index = 43

    FIELDS = (
        "names", "ssn",
        "child_1_name", "child_2_name", "child_3_name",
        "qualifying_children",
    )

    @line(LineKind.BOOLEAN)
    def is_needed(self) -> bool:
        return self.qualifying_children() > 0 and self.f1040.l27() > 0

    def _children(self) -> List[Dependent]:
        dependents = self.return_input.taxpayer.dependents
        return [d for d in dependents if d.qualifies_for_eic(self.tax_year)][:3]

    def _child_name(self, index: int) -> str:
        children = self._children()
        return children[index].full_name if index < len(children) else ""

    @line(LineKind.TEXT)
    def child_1_name(self) -> str:
        return self._child_name(0)

    @line(LineKind.TEXT)
    def child_2_name(self) -> str:
        return self._child_name(1)

    @line(LineKind.TEXT)
    def child_3_name(self) -> str:
        return self._child_name(2)

    @line(LineKind.NUMBER)
    def qualifying_children(self) -> Decimal:
        return self.f1040.eic_qualifying_children()
