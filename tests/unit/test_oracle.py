"""
Тесты decrypt oracle: cleartext codec и LocalDecryptOracle.
"""

import pytest

from src.core.domain import CallbackSelector, RequestHandle
from src.core.errors import MalformedCleartext
from src.core.math import UINT32_MAX
from src.oracle import WORD_BYTES, LocalDecryptOracle, decode_cleartext, encode_cleartext


class TestCleartextCodec:
    """Fixed-width uint words."""

    def test_encode_layout(self):
        data = encode_cleartext([1, 180])
        assert len(data) == 2 * WORD_BYTES
        assert data[WORD_BYTES - 1] == 1
        assert int.from_bytes(data[WORD_BYTES:], "big") == 180

    def test_decode(self):
        assert decode_cleartext(encode_cleartext([1, 180, 1, 100]), 4) == (1, 180, 1, 100)

    def test_arity_mismatch(self):
        with pytest.raises(MalformedCleartext, match="arity"):
            decode_cleartext(encode_cleartext([1, 2, 3]), 4)

    def test_truncated_word(self):
        with pytest.raises(MalformedCleartext):
            decode_cleartext(b"\x00" * (WORD_BYTES - 1), 1)

    def test_word_above_uint32(self):
        data = (UINT32_MAX + 1).to_bytes(WORD_BYTES, "big")
        with pytest.raises(MalformedCleartext, match="uint32"):
            decode_cleartext(data, 1)

    def test_non_bytes(self):
        with pytest.raises(MalformedCleartext):
            decode_cleartext([1, 2], 2)

    def test_encode_rejects_negative(self):
        with pytest.raises(ValueError):
            encode_cleartext([-1])


class TestLocalDecryptOracle:
    """Reference oracle."""

    @pytest.fixture
    def oracle(self):
        return LocalDecryptOracle(secret_key=b"k" * 32)

    def test_handles_are_opaque_and_unique(self, oracle):
        a = oracle.encrypt_uint32(5)
        b = oracle.encrypt_uint32(5)
        assert a != b
        assert a.token.startswith("ct-")

    def test_fulfill_decrypts_in_order(self, oracle):
        handles = [oracle.encrypt_uint32(v) for v in (1, 180, 1, 100)]
        request = oracle.request_decryption(handles, CallbackSelector.PAIRING)
        delivery = oracle.fulfill(request)
        assert delivery.selector == CallbackSelector.PAIRING
        assert delivery.request_handle == request
        assert decode_cleartext(delivery.cleartext, 4) == (1, 180, 1, 100)
        assert oracle.verify_proof(request, delivery.cleartext, delivery.proof)

    def test_fulfill_is_one_shot(self, oracle):
        request = oracle.request_decryption([oracle.encrypt_uint32(1)], CallbackSelector.DISCLOSURE)
        oracle.fulfill(request)
        with pytest.raises(KeyError):
            oracle.fulfill(request)

    def test_proof_binds_request_and_cleartext(self, oracle):
        request = oracle.request_decryption([oracle.encrypt_uint32(200)], CallbackSelector.DISCLOSURE)
        delivery = oracle.fulfill(request)
        assert not oracle.verify_proof(request, encode_cleartext([300]), delivery.proof)
        assert not oracle.verify_proof(RequestHandle(value="req-other"), delivery.cleartext, delivery.proof)

    def test_other_key_rejects_proof(self, oracle):
        other = LocalDecryptOracle(secret_key=b"x" * 32)
        request = RequestHandle(value="req-1")
        cleartext = encode_cleartext([1])
        assert not oracle.verify_proof(request, cleartext, other.sign(request, cleartext))

    def test_unknown_ciphertext_rejected(self, oracle):
        foreign = LocalDecryptOracle().encrypt_uint32(1)
        with pytest.raises(KeyError):
            oracle.request_decryption([foreign], CallbackSelector.DISCLOSURE)

    def test_pending_requests(self, oracle):
        request = oracle.request_decryption([oracle.encrypt_uint32(1)], CallbackSelector.DISCLOSURE)
        assert oracle.pending_requests() == [request]

    def test_availability(self):
        assert LocalDecryptOracle().is_available()
        assert not LocalDecryptOracle(available=False).is_available()
