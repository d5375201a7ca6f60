from __future__ import annotations

from decimal import Decimal
import unittest

from pair_analytics.domain.services.percent_change import (
    get_percent_change,
    get_two_day_percent_change,
)


class TwoDayPercentChangeTests(unittest.TestCase):
    def test_previous_amount_uses_two_days_ago_when_available(self):
        current, change = get_two_day_percent_change(Decimal("1500"), Decimal("1000"), Decimal("800"))

        # current day = 500, previous day = 200
        self.assertEqual(current, Decimal("500"))
        self.assertEqual(change, Decimal("150"))

    def test_missing_two_days_ago_treats_previous_day_as_started_from_zero(self):
        current, change = get_two_day_percent_change(Decimal("1500"), Decimal("1000"), None)

        self.assertEqual(current, Decimal("500"))
        self.assertEqual(change, Decimal("-50"))

    def test_zero_two_days_ago_behaves_like_missing(self):
        self.assertEqual(
            get_two_day_percent_change(Decimal("1500"), Decimal("1000"), Decimal("0")),
            get_two_day_percent_change(Decimal("1500"), Decimal("1000"), None),
        )

    def test_zero_previous_amount_yields_zero_percent(self):
        current, change = get_two_day_percent_change(Decimal("1200"), Decimal("1000"), Decimal("1000"))

        self.assertEqual(current, Decimal("200"))
        self.assertEqual(change, Decimal("0"))

    def test_all_missing_history(self):
        current, change = get_two_day_percent_change(Decimal("42"), None, None)

        self.assertEqual(current, Decimal("42"))
        self.assertEqual(change, Decimal("0"))

    def test_negative_change(self):
        _, change = get_two_day_percent_change(Decimal("1100"), Decimal("1000"), Decimal("600"))

        self.assertEqual(change, Decimal("-75"))


class PercentChangeTests(unittest.TestCase):
    def test_percent_change(self):
        self.assertEqual(get_percent_change(Decimal("150"), Decimal("100")), Decimal("50"))

    def test_missing_or_zero_base_is_zero(self):
        self.assertEqual(get_percent_change(Decimal("150"), None), Decimal("0"))
        self.assertEqual(get_percent_change(Decimal("150"), Decimal("0")), Decimal("0"))


if __name__ == "__main__":
    unittest.main()
