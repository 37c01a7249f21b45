import pytest
from fractions import Fraction

from settlement_audit.core import TimeWindow
from settlement_audit.core.exc import AmountDomainError
from settlement_audit.interpolation import LinearTimeInterpolator, present_amount


def _continuous(start: int, end: int, window: TimeWindow) -> Fraction:
    t = window.current_time + (window.ascending_buffer if end > start else 0)
    t = min(max(t, window.start_time), window.end_time)
    elapsed = t - window.start_time
    return Fraction(start * (window.duration - elapsed) + end * elapsed, window.duration)


def test_no_window_returns_start_amount():
    assert present_amount(100, 100, None, True) == 100
    assert present_amount(100, 100, None, False) == 100


def test_exact_midpoint_both_sides_agree():
    w = TimeWindow(0, 10, 3)
    print("[interp] 100->200 at t=3/10 -> 130")
    assert present_amount(100, 200, w, True) == 130
    assert present_amount(100, 200, w, False) == 130


@pytest.mark.parametrize(
    "start,end,cons,offer",
    [
        (100, 200, 134, 133),   # ascending: 400/3
        (200, 100, 167, 166),   # descending: 500/3
    ],
)
def test_inexact_values_round_by_side(start, end, cons, offer):
    w = TimeWindow(0, 3, 1)
    assert present_amount(start, end, w, True) == cons
    assert present_amount(start, end, w, False) == offer


def test_current_time_is_clamped_to_window():
    before = TimeWindow(10, 20, 0)
    after = TimeWindow(10, 20, 999)
    assert present_amount(100, 200, before, True) == 100
    assert present_amount(100, 200, after, True) == 200
    assert present_amount(200, 100, after, False) == 100


def test_zero_duration_window_uses_end_amount():
    w = TimeWindow(5, 5, 5)
    assert present_amount(100, 200, w, True) == 200


def test_ascending_buffer_only_applies_to_rising_items():
    w = TimeWindow(0, 10, 3, ascending_buffer=2)
    assert present_amount(100, 200, w, True) == 150
    assert present_amount(200, 100, w, False) == 170


def test_rounding_never_favours_payer_or_offerer():
    print("[interp-safety] sweep windows; consideration >= exact >= offer")
    for duration in (1, 3, 7, 86_400):
        for step in range(0, duration + 1, max(1, duration // 9)):
            w = TimeWindow(1_000, 1_000 + duration, 1_000 + step)
            for start, end in ((10 ** 18, 3 * 10 ** 17), (7, 13), (0, 5), (5, 0)):
                exact = _continuous(start, end, w)
                assert present_amount(start, end, w, True) >= exact
                assert present_amount(start, end, w, False) <= exact
                assert present_amount(start, end, w, True) - present_amount(start, end, w, False) <= 1


def test_negative_amounts_rejected():
    with pytest.raises(AmountDomainError):
        present_amount(-1, 10, None, True)


def test_linear_interpolator_delegates():
    w = TimeWindow(0, 3, 1)
    assert LinearTimeInterpolator().present_amount(100, 200, w, True) == 134
