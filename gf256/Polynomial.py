"""
Polynomial Algebra over GF(2^8)

Polynomials are uint8 numpy arrays of coefficients in ascending degree
order: p[i] is the coefficient of x^i. The empty array is the zero
polynomial and [1] is the identity.

A normalized polynomial has no trailing (high-degree) zero coefficients.
add() and divide() return normalized results; multiply() returns the
full-length convolution and is normalized only if both inputs are.
"""

import numpy as np
from typing import Sequence, Tuple, Union

from .GaloisField import GaloisField
from .errors import DivideByZeroPolynomial

PolyLike = Union[bytes, bytearray, Sequence[int], np.ndarray]


def as_poly(p: PolyLike) -> np.ndarray:
    """
    Convert coefficients to a uint8 array (ascending degree).

    Raises:
        ValueError: If any coefficient is outside [0, 255]
    """
    values = p if isinstance(p, np.ndarray) else np.array(list(p), dtype=np.int64)
    if values.dtype != np.uint8 and values.size:
        low, high = values.min(), values.max()
        if low < 0 or high > 255:
            raise ValueError(f"Coefficients must be in [0, 255], got range [{low}, {high}]")
    return values.astype(np.uint8, copy=False)


def _constant(values) -> np.ndarray:
    p = np.array(values, dtype=np.uint8)
    p.flags.writeable = False
    return p


class PolynomialRing:
    """
    Polynomial operations over a given GaloisField.

    Example:
        >>> ring = PolynomialRing(GaloisField(0x11D))
        >>> q, r = ring.divide([3, 0, 1], [1, 1])
        >>> ring.render(ring.add(ring.multiply(q, [1, 1]), r))
        'x^2 + 3 x^0'
    """

    ZERO = _constant([])
    ONE = _constant([1])

    def __init__(self, gf: GaloisField):
        self.gf = gf

    @staticmethod
    def normalize(p: PolyLike) -> np.ndarray:
        """Strip trailing zero (high-degree) coefficients; returns a view of p."""
        p = as_poly(p)
        nonzero = np.flatnonzero(p)
        if len(nonzero) == 0:
            return p[:0]
        return p[:nonzero[-1] + 1]

    @staticmethod
    def degree(p: PolyLike) -> int:
        """Degree of p, or -1 for the zero polynomial."""
        return len(PolynomialRing.normalize(p)) - 1

    @staticmethod
    def equal(x: PolyLike, y: PolyLike) -> bool:
        """Compare two polynomials after normalization."""
        return np.array_equal(PolynomialRing.normalize(x), PolynomialRing.normalize(y))

    @staticmethod
    def add(x: PolyLike, y: PolyLike) -> np.ndarray:
        """
        Add two polynomials.

        Coefficient-wise XOR over the longer operand, then normalized.
        add(x, x) is the zero polynomial.
        """
        x = as_poly(x)
        y = as_poly(y)
        if len(x) < len(y):
            x, y = y, x

        z = x.copy()
        z[:len(y)] ^= y
        return PolynomialRing.normalize(z)

    # Subtraction is same as addition in GF(2^n)
    subtract = add

    @staticmethod
    def monomial(coefficient: int, degree: int) -> np.ndarray:
        """Single-term polynomial coefficient * x^degree."""
        p = np.zeros(degree + 1, dtype=np.uint8)
        p[degree] = coefficient
        return p

    def multiply(self, x: PolyLike, y: PolyLike) -> np.ndarray:
        """
        Multiply two polynomials.

        Args:
            x: First polynomial
            y: Second polynomial

        Returns:
            Product of length len(x) + len(y) - 1, or the zero
            polynomial if either operand is empty
        """
        x = as_poly(x)
        y = as_poly(y)
        if len(x) == 0 or len(y) == 0:
            return self.ZERO.copy()

        z = np.zeros(len(x) + len(y) - 1, dtype=np.uint8)
        for i, xi in enumerate(x):
            if xi == 0:
                continue
            z[i:i + len(y)] ^= self.gf.scale(y, int(xi))

        return z

    def divide(self, x: PolyLike, y: PolyLike) -> Tuple[np.ndarray, np.ndarray]:
        """
        Polynomial long division.

        Each step cancels the remainder's leading coefficient with a
        monomial multiple of y, so the remainder's degree strictly drops.

        Args:
            x: Dividend
            y: Divisor

        Returns:
            Tuple of (quotient, remainder) with
            x == quotient * y + remainder and deg(remainder) < deg(y)

        Raises:
            DivideByZeroPolynomial: If y normalizes to the zero polynomial
        """
        y = self.normalize(y)
        if len(y) == 0:
            raise DivideByZeroPolynomial("Polynomial division by zero")

        q = self.ZERO.copy()
        r = self.normalize(x)
        inv = self.gf.inverse(int(y[-1]))

        while len(r) >= len(y):
            term = self.monomial(self.gf.multiply(int(r[-1]), inv), len(r) - len(y))
            q = self.add(q, term)
            r = self.add(r, self.multiply(term, y))

        # r may still be a view of the dividend
        return q, r.copy()

    def evaluate(self, p: PolyLike, x: int) -> int:
        """Evaluate p (ascending degree) at the field element x."""
        return self.gf.poly_eval(as_poly(p)[::-1], x)

    @staticmethod
    def render(p: PolyLike) -> str:
        """
        Human-readable form, highest degree first.

        Zero coefficients are omitted, as is a coefficient of 1:
        [3, 0, 1] renders as 'x^2 + 3 x^0'.
        """
        terms = []
        p = as_poly(p)
        for i in range(len(p) - 1, -1, -1):
            v = int(p[i])
            if v == 0:
                continue
            if v == 1:
                terms.append(f"x^{i}")
            else:
                terms.append(f"{v} x^{i}")
        return " + ".join(terms)
