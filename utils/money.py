from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

CENTS = Decimal("0.01")
# subscriptions.amount is DECIMAL(12,2)
MAX_AMOUNT = Decimal("10000000000")


def round_money(value) -> Decimal:
    return Decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP)


def parse_money(value) -> Decimal:
    if value is None:
        raise ValueError("missing money value")

    is_negative = False
    if isinstance(value, (int, Decimal)):
        normalized = value
    elif isinstance(value, float):
        normalized = str(value)
    else:
        normalized = str(value).strip()
        if not normalized:
            raise ValueError("empty money value")

        is_negative = normalized.startswith("(") and normalized.endswith(")")
        normalized = normalized.replace("$", "").replace(",", "")

        if is_negative:
            normalized = normalized[1:-1]

    try:
        amount = round_money(normalized)
    except InvalidOperation as exc:
        raise ValueError("invalid money value") from exc

    if not amount.is_finite():
        raise ValueError("invalid money value")

    return -amount if is_negative else amount
