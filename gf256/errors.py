"""
Exceptions raised by the GF(256) and Reed-Solomon modules.

Every failure here is a precondition violation by the caller (a bad
field polynomial, a zero divisor, a wrongly sized check buffer), so
none of them is retryable. They all derive from ValueError so callers
that already catch ValueError around encoder setup keep working.
"""


class GF256Error(ValueError):
    """Base class for all gf256 errors."""


class InvalidFieldPolynomial(GF256Error):
    """Field polynomial is not an 8-bit polynomial in [0x100, 0x200)."""


class ReduciblePolynomial(GF256Error):
    """Field polynomial does not generate all 255 non-zero elements."""


class DivideByZeroPolynomial(GF256Error, ZeroDivisionError):
    """Polynomial division by the zero polynomial."""


class MismatchedCheckLength(GF256Error):
    """Check buffer length differs from the encoder's check byte count."""
