"""The CV record handed to a key/value store.

The store itself (and its eviction policy, quota, duplicate rules) belongs to
the caller. This module only guarantees that what goes in as bytes comes back
out as the same bytes, checking lengths on both sides of the storage boundary.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import Callable, Optional

from pydantic import BaseModel, ConfigDict, Field

from . import codec
from .models import EncodedBlob
from .utils import utc_now

logger = logging.getLogger(__name__)


class StoredCV(BaseModel):
    """A CV file in its stored (text) form."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str
    size: int = Field(..., ge=1, description="Byte length of the original file.")
    mime_type: str
    uploaded_at: datetime
    last_used: datetime
    content_base64: str = Field(..., repr=False)

    @classmethod
    def from_bytes(
        cls,
        data: bytes,
        name: str,
        mime_type: str,
        clock: Callable[[], datetime] = utc_now,
        cv_id: Optional[str] = None,
    ) -> "StoredCV":
        """Encode `data` and verify it before it is written anywhere."""
        codec.sniff_signature(data)
        blob = codec.encode_blob(data)
        now = clock()
        extra = {"id": cv_id} if cv_id else {}
        record = cls(
            name=name,
            size=blob.original_byte_length,
            mime_type=mime_type,
            uploaded_at=now,
            last_used=now,
            content_base64=blob.encoded_text,
            **extra,
        )
        logger.info("Prepared CV %s for storage (%d bytes)", record.name, record.size)
        return record

    def blob(self) -> EncodedBlob:
        return EncodedBlob(original_byte_length=self.size, encoded_text=self.content_base64)

    def content(self) -> bytes:
        """Decode the stored text and verify it against `size`."""
        data = codec.decode_blob(self.blob())
        codec.sniff_signature(data)
        return data

    def touch(self, clock: Callable[[], datetime] = utc_now) -> "StoredCV":
        """Copy of this record with `last_used` set to now."""
        return self.model_copy(update={"last_used": clock()})
