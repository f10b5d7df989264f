"""
Unit Conversion
Converts human-readable decimal amounts into the chain's smallest unit (wei)
"""

from decimal import Decimal, InvalidOperation
from typing import Union
from web3 import Web3


ETHER_DECIMALS = 18

UINT256_MAX = 2 ** 256 - 1
UINT256_DIGITS = len(str(UINT256_MAX))


def parse_units(value: Union[str, int, Decimal], decimals: int) -> int:
    """
    Convert a decimal amount into integer base units

    Floats are rejected because they cannot represent amounts like 0.001
    exactly.

    Args:
        value: Amount as a decimal string, int or Decimal (e.g. "0.001")
        decimals: Number of decimals of the unit (18 for ether)

    Returns:
        Amount in base units

    Raises:
        ValueError: If the amount is malformed, negative or too precise
    """
    if isinstance(value, (bool, float)):
        raise ValueError(f"Amount must be a decimal string, got {type(value).__name__}")

    if isinstance(decimals, bool) or not isinstance(decimals, int) or decimals < 0:
        raise ValueError(f"Invalid decimals: {decimals!r}")

    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValueError(f"Invalid amount: {value!r}")

    if not amount.is_finite():
        raise ValueError(f"Invalid amount: {value!r}")

    if amount < 0:
        raise ValueError(f"Amount must not be negative: {value!r}")

    # integer arithmetic on the digits; Decimal ops would round at context precision
    _, digits, exponent = amount.as_tuple()
    significand = int(''.join(map(str, digits)) or '0')
    shift = exponent + decimals

    if significand == 0:
        return 0

    if len(str(significand)) + shift > UINT256_DIGITS:
        raise ValueError(f"Amount {value!r} does not fit in uint256")

    if shift >= 0:
        result = significand * 10 ** shift
    else:
        if -shift >= len(str(significand)) or significand % 10 ** -shift:
            raise ValueError(f"Amount {value!r} has more than {decimals} decimal places")

        result = significand // 10 ** -shift

    if result > UINT256_MAX:
        raise ValueError(f"Amount {value!r} does not fit in uint256")

    return result


def parse_ether(value: Union[str, int, Decimal]) -> int:
    """Convert an ether amount (e.g. "0.001") into wei"""
    # Web3.to_wei truncates sub-wei fractions silently, so parse exactly here
    return parse_units(value, ETHER_DECIMALS)


def format_ether(wei: int) -> Decimal:
    """Convert wei into ether for display"""
    return Decimal(Web3.from_wei(wei, 'ether'))
