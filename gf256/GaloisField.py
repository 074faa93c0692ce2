"""
Galois Field GF(2^8) Arithmetic

Reed-Solomon codes operate over finite fields (Galois fields).
A GF(2^8) instance is defined by a degree-8 primitive polynomial; QR Code
and DVB use p(x) = x^8 + x^4 + x^3 + x^2 + 1 (0x11D), Data Matrix uses
p(x) = x^8 + x^5 + x^3 + x^2 + 1 (0x12D).

In GF(2^8):
- Addition is XOR
- Multiplication uses the primitive polynomial for reduction
- Each non-zero element can be represented as α^i for generator α = 2

The field has 256 elements: {0, 1, α, α^2, ..., α^254}
where α^255 = 1 (cyclic).
"""

import logging
from functools import reduce

import numpy as np
from typing import Dict, Tuple

from .errors import InvalidFieldPolynomial, ReduciblePolynomial

logger = logging.getLogger(__name__)


class GaloisField:
    """
    Galois Field GF(2^8) built from a primitive polynomial.

    The polynomial is given as an integer with bit 8 set, e.g. 0x11D for
    x^8 + x^4 + x^3 + x^2 + 1. Tables are built once and never modified,
    so one instance can be shared freely between encoders and threads.

    Attributes:
        polynomial: The primitive polynomial defining the field
        exp_table: Maps power -> element (α^i), 510 entries (stored twice)
        log_table: Maps element -> power (log_table[0] is unused)

    Example:
        >>> gf = GaloisField(0x11D)
        >>> product = gf.multiply(0x53, 0xCA)
        >>> assert gf.multiply(product, gf.inverse(0xCA)) == 0x53
    """

    # x^8 + x^4 + x^3 + x^2 + 1
    DEFAULT_POLY = 0x11D

    # Primitive element (generator)
    PRIMITIVE = 0x02

    # Order of the multiplicative group
    ORDER = 255

    def __init__(self, polynomial: int = DEFAULT_POLY):
        """
        Initialize lookup tables for fast arithmetic.

        Args:
            polynomial: Primitive polynomial in [0x100, 0x200)

        Raises:
            InvalidFieldPolynomial: If polynomial is not of degree 8
            ReduciblePolynomial: If α = 2 does not generate the field
        """
        if not 0x100 <= polynomial < 0x200:
            raise InvalidFieldPolynomial(
                f"Invalid field polynomial: 0x{polynomial:X} (must be in [0x100, 0x200))")

        self.polynomial = polynomial
        self.exp_table, self.log_table = self._build_tables()
        logger.debug("Built GF(256) tables for polynomial 0x%X", polynomial)

    def _build_tables(self) -> Tuple[np.ndarray, np.ndarray]:
        """
        Build exponent and logarithm lookup tables.

        exp_table[i] = exp_table[i + 255] = α^i mod p(x)
        log_table[n] = i where α^i = n

        Returns:
            Tuple of (exp_table, log_table)
        """
        exp_table = np.zeros(2 * self.ORDER, dtype=np.uint8)
        log_table = np.zeros(256, dtype=np.uint8)

        x = 1
        for i in range(self.ORDER):
            # Powers of α must visit all 255 non-zero elements exactly once
            if i != 0 and (x == 0 or x == 1 or log_table[x] != 0):
                raise ReduciblePolynomial(
                    f"Reducible polynomial: 0x{self.polynomial:X} "
                    f"(powers of α repeat after {i} steps, expected {self.ORDER})")

            exp_table[i] = x
            exp_table[i + self.ORDER] = x
            log_table[x] = i

            # Multiply by primitive element (α = 0x02)
            x <<= 1
            if x & 0x100:
                x ^= self.polynomial

        exp_table.flags.writeable = False
        log_table.flags.writeable = False

        return exp_table, log_table

    def __repr__(self) -> str:
        return f"GaloisField(0x{self.polynomial:X})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, GaloisField):
            return NotImplemented
        return self.polynomial == other.polynomial

    def __hash__(self) -> int:
        return hash(self.polynomial)

    def add(self, a: int, b: int) -> int:
        """
        Add two field elements.

        In GF(2^n), addition is XOR.

        Args:
            a: First operand (0-255)
            b: Second operand (0-255)

        Returns:
            Sum a + b in GF(2^8)
        """
        return a ^ b

    # Subtraction is same as addition in GF(2^n)
    subtract = add

    def multiply(self, a: int, b: int) -> int:
        """
        Multiply two field elements.

        Uses log/exp tables: a * b = exp(log(a) + log(b)). The sum of two
        logs is at most 508, which the doubled exp table covers without
        a modulo.

        Args:
            a: First operand (0-255)
            b: Second operand (0-255)

        Returns:
            Product a * b in GF(2^8)
        """
        if a == 0 or b == 0:
            return 0

        return int(self.exp_table[int(self.log_table[a]) + int(self.log_table[b])])

    def multiply_slow(self, a: int, b: int) -> int:
        """
        Carry-less multiply with reduction, no tables.

        Scans b from its top bit down, doubling the running product
        (reduced by the field polynomial) and adding a for each set bit.
        Used to cross-check the table-driven multiply.
        """
        product = 0
        for bit in range(7, -1, -1):
            product <<= 1
            if product & 0x100:
                product ^= self.polynomial
            if (b >> bit) & 1:
                product ^= a
        return product

    def divide(self, a: int, b: int) -> int:
        """
        Divide two field elements.

        a / b = exp(log(a) - log(b))

        Raises:
            ZeroDivisionError: If b is zero
        """
        if b == 0:
            raise ZeroDivisionError("Division by zero in GF(2^8)")
        if a == 0:
            return 0

        log_diff = int(self.log_table[a]) - int(self.log_table[b])
        return int(self.exp_table[log_diff % self.ORDER])

    def inverse(self, a: int) -> int:
        """
        Find multiplicative inverse of field element.

        inverse(a) = exp(255 - log(a))

        Zero has no inverse; inverse(0) returns the sentinel 0.

        Args:
            a: Field element (0-255)

        Returns:
            Inverse such that a * inverse(a) = 1, or 0 for a == 0
        """
        if a == 0:
            return 0

        return int(self.exp_table[self.ORDER - int(self.log_table[a])])

    def power(self, a: int, n: int) -> int:
        """Raise a to the integer power n (negative n inverts); 0^0 is 1."""
        if n == 0:
            return 1
        if a == 0:
            return 0
        return self.exp(self.log(a) * n % self.ORDER)

    def exp(self, e: int) -> int:
        """
        Get α^e (exponent lookup).

        Args:
            e: Power; negative powers return the sentinel 0

        Returns:
            α^e in GF(2^8), or 0 if e < 0
        """
        if e < 0:
            return 0
        return int(self.exp_table[e % self.ORDER])

    def log(self, a: int) -> int:
        """
        Get i where α^i = a (logarithm lookup).

        Args:
            a: Field element (0-255)

        Returns:
            Power i in [0, 255), or -1 for a == 0 (no logarithm exists)
        """
        if a == 0:
            return -1
        return int(self.log_table[a])

    def scale(self, poly: np.ndarray, c: int) -> np.ndarray:
        """
        Multiply every coefficient of poly by the scalar c.

        Args:
            poly: Coefficients (any order)
            c: Field element

        Returns:
            New uint8 array of the same length
        """
        poly = np.asarray(poly, dtype=np.uint8)
        result = np.zeros(len(poly), dtype=np.uint8)
        if c == 0:
            return result

        nonzero = poly != 0
        logs = self.log_table[poly[nonzero]].astype(np.intp)
        result[nonzero] = self.exp_table[logs + int(self.log_table[c])]
        return result

    def poly_eval(self, poly: np.ndarray, x: int) -> int:
        """
        Evaluate poly at x by Horner's rule.

        Coefficients run highest degree first, matching codeword byte order.
        """
        return reduce(lambda acc, coef: self.multiply(acc, x) ^ int(coef), poly, 0)


# Shared instances, keyed by polynomial
_fields: Dict[int, GaloisField] = {}


def get_gf(polynomial: int = GaloisField.DEFAULT_POLY) -> GaloisField:
    """Get shared GaloisField instance for a primitive polynomial."""
    gf = _fields.get(polynomial)
    if gf is None:
        gf = GaloisField(polynomial)
        _fields[polynomial] = gf
    return gf
