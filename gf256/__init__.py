"""
PyGF256 - GF(256) Arithmetic and Reed-Solomon Check Byte Encoding

Finite-field arithmetic over GF(2^8) and a Reed-Solomon encoder that
produces the error-correction bytes appended to data blocks by 2D
barcode symbol encoders. Decoding is not provided.

Modules:
    - GaloisField: GF(2^8) tables and scalar arithmetic
    - Polynomial: Polynomial algebra over a field
    - Generator: Generator polynomials and reference check bytes
    - ReedSolomon: Table-driven check byte encoder
    - errors: Exception hierarchy
"""

__version__ = "0.1.0"
__author__ = "PyGF256 Contributors"

# Primitive polynomials used by common symbologies
POLYNOMIALS = {
    'QR': 0x11D,          # x^8 + x^4 + x^3 + x^2 + 1
    'DVB': 0x11D,
    'DATAMATRIX': 0x12D,  # x^8 + x^5 + x^3 + x^2 + 1
    'AZTEC_8': 0x12D,
    'CCSDS': 0x187,       # x^8 + x^7 + x^2 + x + 1
}

# Import main classes for convenience
from .errors import (
    GF256Error,
    InvalidFieldPolynomial,
    ReduciblePolynomial,
    DivideByZeroPolynomial,
    MismatchedCheckLength,
)
from .GaloisField import GaloisField, get_gf
from .Polynomial import PolynomialRing
from .Generator import generator_polynomial, ec_bytes
from .ReedSolomon import ReedSolomon

__all__ = [
    # Constants
    'POLYNOMIALS',

    # Field and polynomials
    'GaloisField', 'get_gf', 'PolynomialRing',

    # Encoding
    'generator_polynomial', 'ec_bytes', 'ReedSolomon',

    # Errors
    'GF256Error', 'InvalidFieldPolynomial', 'ReduciblePolynomial',
    'DivideByZeroPolynomial', 'MismatchedCheckLength',
]
