from collections import namedtuple
from decimal import Decimal

PENDING = "pending"
PARTIAL = "partial"
COMPLETED = "completed"

PaymentState = namedtuple("PaymentState", ["status", "text", "paid", "remaining"])


def format_amount(amount):
    """Render an amount the way it's shown in the panel: 400, 399.5"""
    amount = Decimal(amount or 0)
    if amount == amount.to_integral_value():
        return str(amount.quantize(Decimal(1)))
    return str(amount.normalize())


def payment_state(paid_amount, price):
    paid = Decimal(paid_amount or 0)
    price = Decimal(price)
    remaining = price - paid
    if paid == 0:
        return PaymentState(PENDING, "Oczekujące", paid, remaining)
    if paid >= price:
        return PaymentState(COMPLETED, "Opłacone", paid, remaining)
    text = f"Częściowo ({format_amount(paid)} / {format_amount(price)} PLN)"
    return PaymentState(PARTIAL, text, paid, remaining)
