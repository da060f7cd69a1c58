"""
Arbitrary-base digit decoding.

This module converts a digit string written in a base between 2 and 36 into
its integer value, using standard positional numeral semantics:

  decode(d_{n-1} ... d_1 d_0, base) = sum_i d_i * base^i

Digits map case-insensitively:
  '0'-'9' -> 0-9
  'a'-'z' / 'A'-'Z' -> 10-35

Values are limited to the signed 64-bit range; anything larger raises
DecodeOverflowError instead of wrapping around.
"""

# Supported radix range
MIN_BASE = 2
MAX_BASE = 36

# Largest value a decoded sample may take (signed 64-bit)
INT64_MAX = 2**63 - 1


class DecodeError(ValueError):
    """Base class for all digit-decoding failures."""
    pass


class UnsupportedBaseError(DecodeError):
    """Raised when the base is outside [MIN_BASE, MAX_BASE]."""

    def __init__(self, base):
        self.base = base
        super().__init__(
            f"Unsupported base {base!r}: must be an integer in [{MIN_BASE}, {MAX_BASE}]"
        )


class InvalidDigitError(DecodeError):
    """
    Raised when a digit string cannot be decoded in its base.

    Attributes:
        char: offending character, or None for an empty digit string
        base: base the string was decoded in
    """

    def __init__(self, message: str, char: str | None = None, base: int | None = None):
        self.char = char
        self.base = base
        super().__init__(message)


class DecodeOverflowError(DecodeError, OverflowError):
    """Raised when the decoded value exceeds INT64_MAX."""

    def __init__(self, digits: str, base: int):
        self.digits = digits
        self.base = base
        super().__init__(
            f"Value {digits!r} in base {base} exceeds the 64-bit signed range"
        )


def digit_value(char: str) -> int:
    """
    Map a single digit character to its numeric value.

    Args:
        char: one character

    Returns:
        Value in [0, 35]

    Raises:
        InvalidDigitError: if char is not an ASCII digit or letter
    """
    if "0" <= char <= "9":
        return ord(char) - ord("0")
    if "a" <= char <= "z":
        return ord(char) - ord("a") + 10
    if "A" <= char <= "Z":
        return ord(char) - ord("A") + 10
    raise InvalidDigitError(f"Invalid character in base conversion: {char!r}", char=char)


def decode(digits: str, base: int) -> int:
    """
    Decode a digit string in the given base to an integer.

    Args:
        digits: non-empty digit string, e.g. "a1b2"
        base: radix in [2, 36]

    Returns:
        Decoded non-negative integer, at most INT64_MAX

    Raises:
        UnsupportedBaseError: base is not an int in [2, 36]
        InvalidDigitError: empty string, unmappable character, or a digit >= base
        DecodeOverflowError: value does not fit in 63 bits

    Example:
        >>> decode("111", 2)
        7
        >>> decode("a1b2", 16)
        41394
    """
    # bool is an int subclass; a flag is never a radix
    if not isinstance(base, int) or isinstance(base, bool):
        raise UnsupportedBaseError(base)
    if base < MIN_BASE or base > MAX_BASE:
        raise UnsupportedBaseError(base)

    if not digits:
        raise InvalidDigitError("No digits to decode: empty string", base=base)

    result = 0
    place = 1

    # Rightmost digit has place value base^0
    for char in reversed(digits):
        value = digit_value(char)
        if value >= base:
            raise InvalidDigitError(
                f"Digit {char!r} (value {value}) is invalid for base {base}",
                char=char,
                base=base,
            )

        result += value * place
        if result > INT64_MAX:
            raise DecodeOverflowError(digits, base)
        place *= base

    return result


if __name__ == "__main__":
    print("Testing decoding.py with reference values...")
    print("=" * 70)

    for digits, base, expected in [("111", 2, 7), ("213", 4, 39), ("a1b2", 16, 41394)]:
        got = decode(digits, base)
        print(f"  {digits!r} (base {base}) = {got}")
        assert got == expected, f"Expected {expected}, got {got}"

    print("✓ decoding.py self-test passed.")
