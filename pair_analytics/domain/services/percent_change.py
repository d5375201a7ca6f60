from __future__ import annotations

from decimal import Decimal

_ZERO = Decimal("0")
_HUNDRED = Decimal("100")


def _dec_or_zero(value: Decimal | None) -> Decimal:
    return value if value is not None else _ZERO


def get_percent_change(value_now: Decimal | None, value_before: Decimal | None) -> Decimal:
    if value_before is None or value_before == 0:
        return _ZERO
    return (_dec_or_zero(value_now) - value_before) / value_before * _HUNDRED


def get_two_day_percent_change(
    value_now: Decimal | None,
    value_one_day_ago: Decimal | None,
    value_two_days_ago: Decimal | None,
) -> tuple[Decimal, Decimal]:
    """Return the amount accrued over the last day and its change against the day before.

    Values are cumulative totals. Without a two-days-ago value the previous
    day is assumed to have started from zero.
    """
    now = _dec_or_zero(value_now)
    one_day_ago = _dec_or_zero(value_one_day_ago)
    two_days_ago = _dec_or_zero(value_two_days_ago)

    current_amount = now - one_day_ago
    if two_days_ago != 0:
        previous_amount = one_day_ago - two_days_ago
    else:
        previous_amount = one_day_ago

    if previous_amount == 0:
        return current_amount, _ZERO
    return current_amount, (current_amount - previous_amount) / previous_amount * _HUNDRED
