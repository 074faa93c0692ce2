"""
Reed-Solomon Check Byte Encoder

Computes the check bytes of a systematic Reed-Solomon code over GF(2^8),
as used by 2D barcode symbols (QR Code, Data Matrix, Aztec):

- Input: k data bytes (codeword order, highest degree first)
- Output: c check bytes, the remainder of data(x) * x^c mod g(x)
- Generator polynomial: g(x) = (x - α^0)(x - α^1)...(x - α^(c-1))

The encoder converts the generator to logarithms once and then runs a
single pass over the data per call, equivalent to the explicit division
in Generator.ec_bytes() but without building quotient polynomials.
"""

import logging

import numpy as np

from .GaloisField import GaloisField
from .Generator import CheckBuffer, ec_bytes, generator_polynomial, write_check
from .Polynomial import PolyLike, as_poly
from .errors import MismatchedCheckLength

logger = logging.getLogger(__name__)


class ReedSolomon:
    """
    Reed-Solomon encoder for a fixed number of check bytes.

    Construction builds the generator polynomial once; encode() can then
    be called repeatedly with data of any length. encode() reuses an
    internal scratch buffer that grows to the longest codeword seen, so a
    single instance must not be used from several threads at once. Give
    each thread its own encoder (construction is cheap) instead.

    Attributes:
        gf: Field the code is defined over
        check_count: Number of check bytes produced per call
        generator: Generator polynomial coefficients (low to high degree)

    Example:
        >>> rs = ReedSolomon(GaloisField(0x11D), 10)
        >>> check = bytearray(10)
        >>> rs.encode(b'\\x10\\x20\\x0c\\x56', check)
    """

    def __init__(self, gf: GaloisField, check_count: int, use_fast: bool = True):
        """
        Initialize Reed-Solomon encoder.

        Args:
            gf: Field to encode over
            check_count: Number of check bytes per call
            use_fast: Use the table-driven single pass (True) or the
                      reference polynomial division (False)
        """
        if check_count < 0:
            raise ValueError(f"Check byte count must be >= 0, got {check_count}")

        self.gf = gf
        self.check_count = check_count
        self.use_fast = use_fast

        self.generator = generator_polynomial(gf, check_count)
        self._lgen = self._build_log_generator()

        # Grows on demand, never shrinks
        self._scratch = np.zeros(0, dtype=np.uint8)

        logger.debug("ReedSolomon encoder: %d check bytes over %r", check_count, gf)

    def _build_log_generator(self) -> np.ndarray:
        """
        Convert the generator to logarithms, highest degree first.

        Returns:
            log(g_c), log(g_(c-1)), ..., log(g_0) as an index array
        """
        gen = self.generator[::-1]
        if np.any(gen == 0):
            raise RuntimeError(
                f"Generator polynomial of degree {self.check_count} has a zero coefficient")

        return self.gf.log_table[gen].astype(np.intp)

    def encode(self, data: PolyLike, check: CheckBuffer) -> None:
        """
        Compute check bytes for data into check.

        Args:
            data: Message bytes (left unmodified)
            check: Mutable buffer of exactly check_count bytes

        Raises:
            MismatchedCheckLength: If len(check) != check_count
        """
        if len(check) != self.check_count:
            raise MismatchedCheckLength(
                f"Check buffer must be {self.check_count} bytes, got {len(check)}")
        if self.check_count == 0:
            return

        if self.use_fast:
            self._encode_fast(as_poly(data), check)
        else:
            ec_bytes(self.gf, data, check)

    def _encode_fast(self, message: np.ndarray, check: CheckBuffer) -> None:
        """
        Single-pass encoding using log-domain generator.

        For each data position the leading term is cancelled by
        subtracting (XOR) a multiple of g(x) aligned at that position;
        after the last data byte only the remainder is left in the
        trailing check_count positions.

        Args:
            message: Message bytes as numpy array
            check: Output buffer
        """
        k = len(message)
        n = k + self.check_count

        if len(self._scratch) < n:
            self._scratch = np.zeros(n, dtype=np.uint8)

        p = self._scratch[:n]
        p[:k] = message
        p[k:] = 0

        exp_table = self.gf.exp_table
        log_table = self.gf.log_table
        lgen = self._lgen
        width = len(lgen)

        # log of 1 / g_c
        linv = self.gf.ORDER - int(lgen[0])

        for i in range(k):
            coef = p[i]
            if coef == 0:
                continue

            # m = p[i] / g_c, kept as a log
            lm = int(log_table[coef]) + linv
            if lm >= self.gf.ORDER:
                lm -= self.gf.ORDER

            # lm + lgen <= 508, inside the doubled exp table
            p[i:i + width] ^= exp_table[lm + lgen]

        write_check(check, p[k:])

    def append(self, data: PolyLike) -> bytes:
        """
        Encode data and return the systematic codeword.

        Args:
            data: Message bytes

        Returns:
            data followed by check_count check bytes
        """
        message = as_poly(data)
        check = bytearray(self.check_count)
        self.encode(message, check)
        return message.tobytes() + bytes(check)

    def verify(self, codeword: PolyLike) -> bool:
        """
        Check if codeword is valid (all syndromes are zero).

        S_i = codeword(α^i) for i = 0 to check_count - 1

        Args:
            codeword: Data followed by check bytes

        Returns:
            True if the codeword is divisible by the generator
        """
        codeword = as_poly(codeword)
        return all(
            self.gf.poly_eval(codeword, self.gf.exp(i)) == 0
            for i in range(self.check_count)
        )
