"""Tests for Schedule B - Interest and Ordinary Dividends."""

from decimal import Decimal

from forms.federal import ScheduleB
from forms.registry import FormRegistry
from models import Form1099Div, Form1099Int
from return_builders import make_return


def _registry(settings, **kwargs):
    return FormRegistry(make_return(**kwargs), settings=settings)


class TestScheduleB:

    def test_totals_over_threshold(self, settings):
        registry = _registry(
            settings,
            interest_1099s=(
                Form1099Int(payer="First Bank", interest=1000.0),
                Form1099Int(payer="Credit Union", interest=800.0),
            ),
            dividend_1099s=(Form1099Div(payer="Index Fund", ordinary_dividends=1200.0),),
        )
        schedule = registry.root.form(ScheduleB)
        assert schedule.interest_payers() == "First Bank; Credit Union"
        assert schedule.l2() == Decimal("1800")
        assert schedule.l4() == Decimal("1800")
        assert schedule.l6() == Decimal("1200")
        assert schedule.is_needed() is True
        assert registry.root.l2b() == Decimal("1800")
        assert registry.root.l3b() == Decimal("1200")

    def test_below_threshold_still_flows_to_1040(self, settings):
        registry = _registry(settings, interest_1099s=(Form1099Int(payer="First Bank", interest=1000.0),))
        assert registry.root.form(ScheduleB).is_needed() is False
        assert registry.root.schedule_b is None
        assert registry.root.l2b() == Decimal("1000")

    def test_foreign_account_forces_attachment(self, settings):
        registry = _registry(settings, foreign_account=True)
        schedule = registry.root.form(ScheduleB)
        assert schedule.l7a() is True
        assert schedule.is_needed() is True
