"""
Tests for field serialization and layout validation.

Rounding happens here and nowhere else: two lines of 0.4 sum to 0.8 and
serialize as 0, 0 and 1.
"""

import dataclasses
from datetime import date
from decimal import Decimal

import pytest

from forms.errors import FieldLayoutError
from forms.fields import render_value, serialize_fields, validate_layout
from forms.form_node import RootForm
from forms.lines import EvaluationPass, LineKind, line
from return_builders import make_return


class RoundingRoot(RootForm):
    tag = "rounding"
    sequence_index = 0

    FIELDS = ("part_a", "part_b", "total", "label", "ratio", "count", "signed_on", "flag")
    FIELDS_BY_YEAR = {2024: ("total", "part_a")}

    @line
    def part_a(self):
        return Decimal("0.4")

    @line
    def part_b(self):
        return Decimal("0.4")

    @line
    def total(self):
        return self.part_a() + self.part_b()

    @line(LineKind.TEXT)
    def label(self):
        return None

    @line(LineKind.RATE)
    def ratio(self):
        return Decimal("0.125")

    @line(LineKind.NUMBER)
    def count(self):
        return 2

    @line(LineKind.DATE)
    def signed_on(self):
        return date(2026, 4, 15)

    @line(LineKind.BOOLEAN)
    def flag(self):
        return True

    @line
    def not_in_layout(self):
        return Decimal("7")


class BadNames(RootForm):
    tag = "badnames"
    FIELDS = ("missing_line",)


class Duplicates(RootForm):
    tag = "dupes"
    FIELDS = ("is_needed", "is_needed")

    @line
    def l1(self):
        return 1


@pytest.fixture
def layout_config(config):
    return dataclasses.replace(config, field_positions={"rounding": 8, "badnames": 1, "dupes": 2})


@pytest.fixture
def form(layout_config):
    return RoundingRoot(make_return(), layout_config, evaluation_pass=EvaluationPass(), catalog=(RoundingRoot,))


class TestSerializeFields:
    """serialize_fields flattens lines into ordered output values."""

    def test_positions_follow_layout(self, form):
        fields = serialize_fields(form)
        assert [f.line for f in fields] == list(RoundingRoot.FIELDS)
        assert [f.position for f in fields] == list(range(len(RoundingRoot.FIELDS)))
        assert all(f.tag == "rounding" for f in fields)

    def test_currency_rounds_only_on_output(self, form):
        """0.4 + 0.4 is carried as 0.8 and only the output is rounded."""
        values = {f.line: f.value for f in serialize_fields(form)}
        assert values["part_a"] == 0
        assert values["part_b"] == 0
        assert values["total"] == 1
        assert form.total() == Decimal("0.8")

    def test_other_kinds(self, form):
        values = {f.line: f.value for f in serialize_fields(form)}
        assert values["label"] == ""
        assert values["ratio"] == 0.125
        assert values["count"] == 2
        assert isinstance(values["count"], int)
        assert values["signed_on"] == "2026-04-15"
        assert values["flag"] is True

    def test_lines_outside_layout_are_not_serialized(self, form):
        assert "not_in_layout" not in [f.line for f in form.fields()]

    def test_year_specific_layout(self, layout_config):
        config_2024 = dataclasses.replace(layout_config, tax_year=2024)
        form_2024 = RoundingRoot(make_return(tax_year=2024), config_2024, catalog=(RoundingRoot,))
        assert [f.line for f in serialize_fields(form_2024)] == ["total", "part_a"]


class TestRenderValue:

    def test_currency_half_up(self):
        assert render_value(Decimal("2.5"), LineKind.CURRENCY) == 3
        assert render_value(Decimal("-2.5"), LineKind.CURRENCY) == -3
        assert render_value(None, LineKind.CURRENCY) == 0

    def test_fractional_number(self):
        assert render_value(Decimal("1.5"), LineKind.NUMBER) == 1.5

    def test_missing_date(self):
        assert render_value(None, LineKind.DATE) == ""


class TestValidateLayout:
    """Layouts must name real lines once each and match the year's positions."""

    def test_valid_layout(self, layout_config):
        validate_layout(RoundingRoot, layout_config)

    def test_count_mismatch(self, layout_config):
        config = dataclasses.replace(layout_config, field_positions={"rounding": 9})
        with pytest.raises(FieldLayoutError, match="8 fields but the 2025 form has 9 positions"):
            validate_layout(RoundingRoot, config)

    def test_missing_position_count(self, config):
        with pytest.raises(FieldLayoutError, match="no fillable position count"):
            validate_layout(RoundingRoot, config)

    def test_unknown_line_name(self, layout_config):
        with pytest.raises(FieldLayoutError, match="missing_line"):
            validate_layout(BadNames, layout_config)

    def test_duplicate_line(self, layout_config):
        with pytest.raises(FieldLayoutError, match="more than once"):
            validate_layout(Duplicates, layout_config)
