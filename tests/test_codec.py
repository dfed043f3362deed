"""
Unit tests for the binary/text codec and its integrity checks.
"""
import base64
import logging

import pytest

from jobcv_engine import codec
from jobcv_engine.errors import DecodingFailure, EncodingFailure
from jobcv_engine.models import EncodedBlob


def _pdf_bytes(size):
    body = bytes((i * 7 + 3) % 256 for i in range(size - 4))
    return b"%PDF" + body


def test_pdf_scenario_round_trip():
    data = _pdf_bytes(10_000)
    text = codec.encode(data)
    assert abs(len(text) * 3 // 4 - 10_000) <= 3
    codec.check_encoded_length(len(data), text)

    decoded = codec.decode(text)
    assert len(decoded) == 10_000
    assert decoded[:4] == b"%PDF"
    assert decoded == data


@pytest.mark.parametrize("size", [1, 2, 3, 8191, 8192, 8193, 3 * 8192 + 1])
def test_chunk_boundaries_match_one_shot_encoding(size):
    """Carrying leftover bytes across chunks gives the same text as encoding at once."""
    data = bytes(range(256)) * (size // 256 + 1)
    data = data[:size]
    text = codec.encode(data)
    assert text == base64.b64encode(data).decode("ascii")
    assert codec.decode(text) == data


def test_encode_is_deterministic():
    data = _pdf_bytes(5000)
    assert codec.encode(data) == codec.encode(data)


def test_iter_encode_yields_per_chunk():
    data = b"x" * (3 * 8192)
    pieces = list(codec.iter_encode(data, chunk_size=8192))
    assert len(pieces) == 3
    assert "".join(pieces) == base64.b64encode(data).decode("ascii")


def test_encode_accepts_bytearray_and_memoryview():
    assert codec.encode(bytearray(b"abc")) == "YWJj"
    assert codec.encode(memoryview(b"abc")) == "YWJj"


def test_encode_rejects_empty_and_non_bytes():
    with pytest.raises(EncodingFailure):
        codec.encode(b"")
    with pytest.raises(EncodingFailure):
        codec.encode("not bytes")


def test_decode_strips_data_url_prefix():
    assert codec.decode("data:application/pdf;base64,JVBERi0=") == b"%PDF-"
    assert codec.decode("JVBE\nRi0=") == b"%PDF-"


@pytest.mark.parametrize("text", ["", "   ", "data:application/pdf;base64,", "abc", "ab$d", "ab=d", "YWJj===="])
def test_decode_rejects_malformed_text(text):
    with pytest.raises(DecodingFailure):
        codec.decode(text)


def test_decode_rejects_non_text():
    with pytest.raises(DecodingFailure):
        codec.decode(b"YWJj")


def test_encoded_length_check():
    codec.check_encoded_length(3, "YWJj")
    with pytest.raises(EncodingFailure):
        codec.check_encoded_length(100, "YWJj")


def test_declared_length_check():
    codec.check_declared_length(3, b"abc")
    with pytest.raises(DecodingFailure) as excinfo:
        codec.check_declared_length(4, b"abc", stage="message hop")
    assert "message hop" in str(excinfo.value)
    assert excinfo.value.remedy == "reupload"


def test_blob_round_trip():
    data = _pdf_bytes(2048)
    blob = codec.encode_blob(data)
    assert blob.original_byte_length == 2048
    assert abs(blob.estimated_byte_length - 2048) <= 3
    assert codec.decode_blob(blob) == data


def test_truncated_blob_is_rejected():
    data = _pdf_bytes(2048)
    blob = codec.encode_blob(data)
    truncated = EncodedBlob(original_byte_length=2048, encoded_text=blob.encoded_text[:-8])
    with pytest.raises(DecodingFailure):
        codec.decode_blob(truncated)


def test_signature_sniffing(caplog):
    with caplog.at_level(logging.WARNING, logger="jobcv_engine.codec"):
        assert codec.sniff_signature(_pdf_bytes(4000))
        assert not caplog.records

        assert not codec.sniff_signature(b"PK\x03\x04rest-of-a-docx")
        assert "does not start with" in caplog.text

        caplog.clear()
        assert codec.sniff_signature(_pdf_bytes(500))
        assert "suspiciously small" in caplog.text


def test_peek_signature():
    text = codec.encode(_pdf_bytes(100))
    assert codec.peek_signature(text) == b"%PDF"
    assert codec.peek_signature("data:application/pdf;base64," + text) == b"%PDF"
    assert codec.peek_signature("%%%%") == b""
