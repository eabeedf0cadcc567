from decimal import Decimal
from typing import Union

NATIVE_DECIMALS = 12


def to_base_units(amount: Union[int, float, str, Decimal], decimals: int = NATIVE_DECIMALS) -> int:
    """
    Convert a human-facing token amount into integer base units.

    Fractional digits beyond ``decimals`` are truncated, never rounded. The
    scaling is done on the integer coefficient, so no decimal context
    precision or exponent limit applies.

    Args:
        amount: Amount in native tokens (for example, 0.1 WND)
        decimals: Fixed decimal precision of the network

    Returns:
        Amount in base units
    """
    if not isinstance(amount, Decimal):
        # str() keeps 0.1 as "0.1" instead of its binary expansion
        amount = Decimal(str(amount))

    if not amount.is_finite():
        raise ValueError(f"Amount must be finite: {amount}")

    sign, digits, exponent = amount.as_tuple()
    shift = exponent + decimals

    if shift < 0 and -shift > len(digits):
        return 0

    # Building from the tuple with exponent 0 is exact
    coefficient = int(Decimal((0, digits, 0)))

    if shift >= 0:
        value = coefficient * 10 ** shift
    else:
        value = coefficient // 10 ** -shift

    return -value if sign else value
