"""
Tests for Reed-Solomon generator polynomials and check byte encoding.
"""

import logging

import pytest
import numpy as np
from gf256.GaloisField import GaloisField
from gf256.Generator import generator_polynomial, ec_bytes
from gf256.Polynomial import PolynomialRing
from gf256.ReedSolomon import ReedSolomon
from gf256.errors import MismatchedCheckLength

# Byte-mode QR Code 1-M data codewords and their 10 reference check bytes
QR_DATA = bytes([
    0x40, 0xd2, 0x75, 0x47, 0x76, 0x17, 0x32, 0x06,
    0x27, 0x26, 0x96, 0xc6, 0xc6, 0x96, 0x70, 0xec,
])
QR_CHECK = bytes([0xbc, 0x2a, 0x90, 0x13, 0x6b, 0xaf, 0xef, 0xfd, 0x4b, 0xe0])

# Same data with only 8 check bytes (a different generator, not a prefix)
QR_CHECK_8 = bytes([0xe8, 0x74, 0x14, 0x7d, 0x70, 0xc2, 0xc2, 0xed])


@pytest.fixture(scope="module")
def gf():
    return GaloisField(0x11D)


class TestGenerator:
    """Test generator polynomial synthesis."""

    def test_degree_zero(self, gf):
        """Test that degree 0 gives the identity."""
        assert generator_polynomial(gf, 0).tolist() == [1]

    def test_degree_one(self, gf):
        """Test g(x) = x + 1."""
        assert generator_polynomial(gf, 1).tolist() == [1, 1]

    def test_known_degree_seven(self, gf):
        """Test against the QR Code generator for 7 check bytes."""
        # Published as exponents of α, highest degree first:
        # x^7 + α^87 x^6 + α^229 x^5 + α^146 x^4 + α^149 x^3 + α^238 x^2 + α^102 x + α^21
        exponents = [0, 87, 229, 146, 149, 238, 102, 21]
        expected = [gf.exp(e) for e in reversed(exponents)]

        assert generator_polynomial(gf, 7).tolist() == expected

    @pytest.mark.parametrize("degree", [2, 10, 16, 30])
    def test_roots(self, gf, degree):
        """Test that g(x) has roots at α^0, ..., α^(degree-1)."""
        ring = PolynomialRing(gf)
        g = generator_polynomial(gf, degree)

        assert len(g) == degree + 1
        assert g[-1] == 1
        assert np.all(g != 0)
        for i in range(degree):
            assert ring.evaluate(g, gf.exp(i)) == 0


class TestReferenceEncoding:
    """Test check bytes computed by polynomial division."""

    def test_known_vector(self, gf):
        """Test the QR Code conformance vector."""
        check = bytearray(len(QR_CHECK))
        ec_bytes(gf, QR_DATA, check)

        assert bytes(check) == QR_CHECK

    def test_known_vector_eight(self, gf):
        """Test 8 check bytes over the same data."""
        check = bytearray(8)
        ec_bytes(gf, QR_DATA, check)

        assert bytes(check) == QR_CHECK_8

    def test_zero_length(self, gf):
        """Test that no check bytes is a no-op."""
        check = bytearray()
        ec_bytes(gf, QR_DATA, check)

        assert check == bytearray()

    def test_overwrites_buffer(self, gf):
        """Test that stale bytes in the check buffer are replaced."""
        check = bytearray(b'\xff' * 8)
        ec_bytes(gf, bytes(16), check)

        assert check == bytearray(8)

    def test_numpy_buffer(self, gf):
        """Test writing into a numpy check buffer."""
        check = np.zeros(len(QR_CHECK), dtype=np.uint8)
        ec_bytes(gf, np.frombuffer(QR_DATA, dtype=np.uint8), check)

        assert check.tobytes() == QR_CHECK


class TestReedSolomon:
    """Test the table-driven encoder."""

    def test_known_vector(self, gf):
        """Test the QR Code conformance vector."""
        rs = ReedSolomon(gf, 10)
        check = bytearray(10)

        rs.encode(QR_DATA, check)

        assert bytes(check) == QR_CHECK

    def test_known_vector_eight(self, gf):
        """Test 8 check bytes over the same data."""
        rs = ReedSolomon(gf, 8)
        check = bytearray(8)

        rs.encode(QR_DATA, check)

        assert bytes(check) == QR_CHECK_8
        assert bytes(check) != QR_CHECK[:8]

    def test_append(self, gf):
        """Test systematic codeword output."""
        rs = ReedSolomon(gf, 10)

        codeword = rs.append(QR_DATA)

        assert len(codeword) == 26
        assert codeword[:16] == QR_DATA
        assert codeword[16:] == QR_CHECK
        assert rs.verify(codeword)

    def test_verify_invalid(self, gf):
        """Test validity check on corrupted codeword."""
        rs = ReedSolomon(gf, 10)

        codeword = bytearray(rs.append(QR_DATA))
        codeword[3] ^= 0x01

        assert not rs.verify(bytes(codeword))

    def test_data_unmodified(self, gf):
        """Test that encoding leaves the data buffer intact."""
        rs = ReedSolomon(gf, 8)
        data = bytearray(QR_DATA)
        array = np.frombuffer(QR_DATA, dtype=np.uint8).copy()

        rs.encode(data, bytearray(8))
        rs.encode(array, bytearray(8))

        assert data == bytearray(QR_DATA)
        assert array.tobytes() == QR_DATA

    @pytest.mark.parametrize("poly", [0x11D, 0x12D])
    @pytest.mark.parametrize("count", [1, 2, 7, 10, 16, 30])
    def test_fast_vs_reference(self, poly, count):
        """Compare the single-pass encoder with polynomial division."""
        gf = GaloisField(poly)
        rs = ReedSolomon(gf, count)
        rng = np.random.default_rng(count)

        for length in [0, 1, 2, 5, 16, 44, 100]:
            data = rng.integers(0, 256, size=length).astype(np.uint8).tobytes()
            fast = bytearray(count)
            reference = bytearray(count)

            rs.encode(data, fast)
            ec_bytes(gf, data, reference)

            assert fast == reference

    def test_leading_zeros(self, gf):
        """Test data starting with zero bytes."""
        rs = ReedSolomon(gf, 10)
        data = bytes(5) + QR_DATA
        fast = bytearray(10)
        reference = bytearray(10)

        rs.encode(data, fast)
        ec_bytes(gf, data, reference)

        assert fast == reference

    def test_slow_vs_fast_encode(self, gf):
        """Compare use_fast=True and use_fast=False encoders."""
        rs_fast = ReedSolomon(gf, 16, use_fast=True)
        rs_slow = ReedSolomon(gf, 16, use_fast=False)

        message = bytes([i % 256 for i in range(188)])

        assert rs_fast.append(message) == rs_slow.append(message)

    def test_scratch_reuse(self, gf):
        """Test that a longer earlier call does not leak into a shorter one."""
        rs = ReedSolomon(gf, 12)
        rng = np.random.default_rng(7)
        messages = [rng.integers(0, 256, size=n).astype(np.uint8).tobytes()
                    for n in (20, 150, 3, 60)]

        first = []
        for message in messages:
            check = bytearray(12)
            rs.encode(message, check)
            first.append(bytes(check))

        for message, expected in zip(reversed(messages), reversed(first)):
            check = bytearray(12)
            rs.encode(message, check)
            assert bytes(check) == expected

    def test_zero_check_count(self, gf):
        """Test that no check bytes is a no-op."""
        rs = ReedSolomon(gf, 0)
        data = bytearray(QR_DATA)
        check = bytearray()

        rs.encode(data, check)

        assert data == bytearray(QR_DATA)
        assert check == bytearray()
        assert rs.append(QR_DATA) == QR_DATA

    @pytest.mark.parametrize("length", [0, 7, 9])
    def test_mismatched_check_length(self, gf, length):
        """Test that a wrongly sized check buffer is rejected."""
        rs = ReedSolomon(gf, 8)

        with pytest.raises(MismatchedCheckLength):
            rs.encode(QR_DATA, bytearray(length))

    def test_mismatched_check_length_reference(self, gf):
        """Test that the reference path also checks the buffer length."""
        rs = ReedSolomon(gf, 8, use_fast=False)

        with pytest.raises(MismatchedCheckLength):
            rs.encode(QR_DATA, bytearray(4))

    def test_negative_check_count(self, gf):
        """Test that a negative check count is rejected."""
        with pytest.raises(ValueError):
            ReedSolomon(gf, -1)

    def test_output_buffers(self, gf):
        """Test the supported check buffer types."""
        rs = ReedSolomon(gf, 10)

        array = np.zeros(10, dtype=np.uint8)
        rs.encode(QR_DATA, array)
        assert array.tobytes() == QR_CHECK

        backing = bytearray(10)
        rs.encode(QR_DATA, memoryview(backing))
        assert bytes(backing) == QR_CHECK

        values = [0] * 10
        rs.encode(list(QR_DATA), values)
        assert bytes(values) == QR_CHECK

    def test_out_of_range_data(self, gf):
        """Test that data values outside a byte are rejected, not wrapped."""
        rs = ReedSolomon(gf, 4)

        with pytest.raises(ValueError):
            rs.encode(np.array([256, 1, 2]), bytearray(4))
        with pytest.raises(ValueError):
            rs.encode([-1, 1, 2], bytearray(4))
        with pytest.raises(ValueError):
            ec_bytes(gf, np.array([0, 300]), bytearray(4))

    def test_wide_integer_array(self, gf):
        """Test that in-range int64 arrays encode like bytes."""
        rs = ReedSolomon(gf, 10)
        check = bytearray(10)

        rs.encode(np.array(list(QR_DATA), dtype=np.int64), check)

        assert bytes(check) == QR_CHECK

    @pytest.mark.parametrize("count", [1, 30, 68])
    def test_ccsds_field(self, count):
        """Test fast/reference agreement over the CCSDS field."""
        gf = GaloisField(0x187)
        rs = ReedSolomon(gf, count)
        data = bytes(range(0, 250, 3))
        fast = bytearray(count)
        reference = bytearray(count)

        rs.encode(data, fast)
        ec_bytes(gf, data, reference)

        assert fast == reference


class TestLogging:
    """Test diagnostic logging."""

    def test_encoder_construction_logged(self, gf, caplog):
        """Test that building an encoder is logged at debug level."""
        caplog.set_level(logging.DEBUG, logger="gf256")

        ReedSolomon(gf, 10)

        assert "10 check bytes" in caplog.text

    def test_per_call_paths_silent(self, gf, caplog):
        """Test that encoding does not log per call."""
        rs = ReedSolomon(gf, 10)
        caplog.set_level(logging.DEBUG, logger="gf256")

        rs.encode(QR_DATA, bytearray(10))
        ec_bytes(gf, QR_DATA, bytearray(10))
        generator_polynomial(gf, 10)

        assert caplog.records == []
