"""
Reed-Solomon Generator Polynomial and Reference Encoding

The generator of degree e is

    g(x) = (x - α^0)(x - α^1)...(x - α^(e-1))

and the check bytes of a message m(x) are the remainder of
m(x) * x^e divided by g(x). ec_bytes() computes exactly that with
explicit polynomial division; it rebuilds the generator on every call
and serves as the reference for the table-driven ReedSolomon encoder.
"""

import numpy as np
from typing import MutableSequence, Union

from .GaloisField import GaloisField
from .Polynomial import PolynomialRing, PolyLike, as_poly

CheckBuffer = Union[bytearray, memoryview, np.ndarray, MutableSequence[int]]


def generator_polynomial(gf: GaloisField, degree: int) -> np.ndarray:
    """
    Build generator polynomial of the given degree.

    Args:
        gf: Field to build over
        degree: Number of check symbols

    Returns:
        Coefficients of g(x) (low to high degree); monic, and no
        coefficient is zero since its roots are distinct and non-zero
    """
    ring = PolynomialRing(gf)
    g = ring.ONE.copy()

    for i in range(degree):
        # (x - α^i) == [α^i, 1] in ascending order
        g = ring.multiply(g, [gf.exp(i), 1])

    return g


def write_check(check: CheckBuffer, values: np.ndarray) -> None:
    """Copy computed check bytes into a caller-supplied buffer in place."""
    if isinstance(check, np.ndarray):
        check[:] = values
    else:
        check[:] = values.tobytes()


def ec_bytes(gf: GaloisField, data: PolyLike, check: CheckBuffer) -> None:
    """
    Compute Reed-Solomon check bytes by polynomial division.

    data is read as a polynomial with the highest degree first, as the
    bytes of a codeword are laid out. The remainder is written back
    highest degree first into check, which determines the number of
    check bytes.

    Args:
        gf: Field to compute over
        data: Message bytes
        check: Mutable buffer receiving len(check) check bytes
    """
    n = len(check)
    if n == 0:
        return

    ring = PolynomialRing(gf)
    p = ring.normalize(as_poly(data)[::-1])
    p = ring.multiply(p, ring.monomial(1, n))

    _, r = ring.divide(p, generator_polynomial(gf, n))

    result = np.zeros(n, dtype=np.uint8)
    result[n - len(r):] = r[::-1]
    write_check(check, result)
