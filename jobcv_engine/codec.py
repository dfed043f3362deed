"""Binary <-> transport-safe text codec for CV files.

Files cross three boundaries as text (storage write, message-passing hop,
multipart submission) and must come out byte-identical. The codec uses the
standard base64 alphabet and works in fixed-size chunks so peak working memory
stays bounded and a cooperative host can yield between chunks (`iter_encode`).

Integrity rules:
- after encoding, ``floor(len(text) * 3 / 4)`` must be within 3 of the byte
  length (padding slack), see `check_encoded_length`;
- after decoding, the byte length must equal the declared length, see
  `check_declared_length`.

A mismatch raises `EncodingFailure` / `DecodingFailure`; callers must not
downgrade either to a warning.

A missing file signature (e.g. ``%PDF``) is only a warning; other formats can
still be valid for some consumers.
"""

from __future__ import annotations

import base64
import binascii
import logging
import re
from typing import Iterator, Union

from .errors import DecodingFailure, EncodingFailure
from .models import EncodedBlob

logger = logging.getLogger(__name__)

BytesLike = Union[bytes, bytearray, memoryview]

CHUNK_SIZE = 8192
LENGTH_TOLERANCE = 3
PDF_SIGNATURE = b"%PDF"
# A real PDF below this size is most likely truncated.
SMALL_PDF_BYTES = 1000

_DATA_URL_RE = re.compile(r"^data:[^;,]*;base64,", re.IGNORECASE)
_WS_RE = re.compile(r"\s+")
_ALPHABET_RE = re.compile(r"^[A-Za-z0-9+/]*={0,2}$")
# Decode step in characters; must stay a multiple of 4.
_TEXT_CHUNK = CHUNK_SIZE // 3 * 4


def _as_view(data: BytesLike) -> memoryview:
    try:
        return memoryview(data).cast("B")
    except TypeError as exc:
        raise EncodingFailure(f"Expected bytes-like content, got {type(data).__name__}") from exc


def iter_encode(data: BytesLike, chunk_size: int = CHUNK_SIZE) -> Iterator[str]:
    """Yield the encoded text piece by piece, one piece per input chunk.

    Leftover bytes (len % 3) are carried into the next chunk so the joined
    output is identical to encoding the whole input at once.
    """
    view = _as_view(data)
    if len(view) == 0:
        raise EncodingFailure("Cannot encode empty content")
    if chunk_size < 3:
        raise EncodingFailure(f"Chunk size must be at least 3 bytes, got {chunk_size}")

    carry = b""
    for start in range(0, len(view), chunk_size):
        block = carry + view[start:start + chunk_size].tobytes()
        cut = len(block) - len(block) % 3
        try:
            piece = base64.b64encode(block[:cut]).decode("ascii")
        except (binascii.Error, ValueError) as exc:
            raise EncodingFailure(f"Failed to encode chunk at byte {start}: {exc}") from exc
        carry = block[cut:]
        if piece:
            yield piece
    if carry:
        yield base64.b64encode(carry).decode("ascii")


def encode(data: BytesLike) -> str:
    """Encode bytes to text. Raises `EncodingFailure` on empty input."""
    text = "".join(iter_encode(data))
    if not text:
        raise EncodingFailure("Encoding produced empty result")
    logger.debug("Encoded %d bytes into %d characters", len(_as_view(data)), len(text))
    return text


def strip_data_url(text: str) -> str:
    """Drop a ``data:<mime>;base64,`` prefix and any whitespace."""
    return _WS_RE.sub("", _DATA_URL_RE.sub("", text.strip(), count=1))


def decode(text: str) -> bytes:
    """Decode text (optionally a data URL) back to bytes.

    Raises:
        DecodingFailure: empty input, characters outside the alphabet, bad
            padding, or a length that is not a multiple of four.
    """
    if not isinstance(text, str):
        raise DecodingFailure(f"Expected text, got {type(text).__name__}")
    clean = strip_data_url(text)
    if not clean:
        raise DecodingFailure("Cannot decode empty text")
    if len(clean) % 4 or not _ALPHABET_RE.match(clean):
        raise DecodingFailure("Text is not valid base64 content")

    out = bytearray()
    for start in range(0, len(clean), _TEXT_CHUNK):
        try:
            out += base64.b64decode(clean[start:start + _TEXT_CHUNK], validate=True)
        except (binascii.Error, ValueError) as exc:
            raise DecodingFailure(f"Failed to decode chunk at character {start}: {exc}") from exc
    logger.debug("Decoded %d characters into %d bytes", len(clean), len(out))
    return bytes(out)


def estimated_length(text: str) -> int:
    return len(text) * 3 // 4


def check_encoded_length(original_byte_length: int, text: str, tolerance: int = LENGTH_TOLERANCE) -> None:
    """Raise `EncodingFailure` when the text length does not fit the byte length."""
    estimate = estimated_length(text)
    if abs(original_byte_length - estimate) > tolerance:
        logger.error(
            "Encoded size mismatch: %d bytes in, %d characters out (~%d bytes)",
            original_byte_length, len(text), estimate,
        )
        raise EncodingFailure(
            f"Encoded text implies {estimate} bytes but the source had {original_byte_length}"
        )


def check_declared_length(declared: int, data: BytesLike, stage: str = "decode") -> None:
    """Raise `DecodingFailure` when received bytes differ from the declared size."""
    actual = len(memoryview(data))
    if actual != declared:
        logger.error("Size mismatch after %s: declared %d bytes, got %d", stage, declared, actual)
        raise DecodingFailure(f"{stage}: expected {declared} bytes, got {actual}")


def encode_blob(data: BytesLike) -> EncodedBlob:
    """Encode and verify; the result is safe to persist or send."""
    text = encode(data)
    size = len(_as_view(data))
    check_encoded_length(size, text)
    logger.info("Encoded %d bytes (%d characters, ratio %.2f)", size, len(text), len(text) / size)
    return EncodedBlob(original_byte_length=size, encoded_text=text)


def decode_blob(blob: EncodedBlob) -> bytes:
    """Decode a stored blob and verify it against its declared length."""
    data = decode(blob.encoded_text)
    check_declared_length(blob.original_byte_length, data)
    return data


def has_signature(data: BytesLike, signature: bytes = PDF_SIGNATURE) -> bool:
    return bytes(memoryview(data)[: len(signature)]) == signature


def sniff_signature(data: BytesLike, signature: bytes = PDF_SIGNATURE) -> bool:
    """Check the leading magic bytes, logging (not raising) on surprises."""
    head = bytes(memoryview(data)[:4])
    if not has_signature(data, signature):
        logger.warning("File does not start with %r (got %s)", signature, head.hex(" "))
        return False
    size = len(memoryview(data))
    if signature == PDF_SIGNATURE and size < SMALL_PDF_BYTES:
        logger.warning("PDF suspiciously small (%d bytes), it may be truncated", size)
    return True


def peek_signature(text: str, length: int = 4) -> bytes:
    """Decode only the leading bytes of encoded text; empty on malformed input."""
    head = strip_data_url(text)[:8]
    try:
        return base64.b64decode(head, validate=True)[:length]
    except (binascii.Error, ValueError):
        return b""
