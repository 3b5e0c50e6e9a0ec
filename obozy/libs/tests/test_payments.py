from decimal import Decimal

from obozy.libs.payments import (COMPLETED, PARTIAL, PENDING, format_amount,
                                 payment_state)


def test_format_amount_drops_trailing_zeros():
    assert format_amount(Decimal("400.00")) == "400"
    assert format_amount(Decimal("399.50")) == "399.5"
    assert format_amount(None) == "0"


def test_nothing_paid_is_pending():
    state = payment_state(Decimal("0"), Decimal("1000"))
    assert state.status == PENDING
    assert state.text == "Oczekujące"
    assert state.remaining == Decimal("1000")


def test_part_paid_shows_both_amounts():
    state = payment_state(Decimal("400"), Decimal("1000.00"))
    assert state.status == PARTIAL
    assert state.text == "Częściowo (400 / 1000 PLN)"
    assert state.remaining == Decimal("600")


def test_paid_in_full_or_more_is_completed():
    assert payment_state(Decimal("1000"), Decimal("1000")).status == COMPLETED
    overpaid = payment_state(Decimal("1200"), Decimal("1000"))
    assert overpaid.status == COMPLETED
    assert overpaid.text == "Opłacone"
