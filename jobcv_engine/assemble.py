"""Build the request payload for the remote analysis service.

The assembler validates its inputs and stamps a metadata block; it performs no
network call and keeps nothing after returning. Render the result with
`EnrichedSubmission.multipart()`.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional

from .codec import sniff_signature
from .errors import ValidationFailure
from .models import EnrichedSubmission, JobRecord, SubmissionFile, SubmissionMetadata
from .settings import get_settings
from .utils import utc_now

logger = logging.getLogger(__name__)

MAX_FILE_NAME_LEN = 255
EXPECTED_MIME_TYPE = "application/pdf"


class RecordAssembler:
    """Combine a job record and CV file into an `EnrichedSubmission`.

    Arguments left as None take their value from `EngineSettings`
    (`source_tag`, `submission_version`, `max_cv_bytes`).
    """

    def __init__(
        self,
        source_tag: Optional[str] = None,
        version: Optional[str] = None,
        max_file_bytes: Optional[int] = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        settings = get_settings()
        self.source_tag = settings.source_tag if source_tag is None else source_tag
        self.version = settings.submission_version if version is None else version
        self.max_file_bytes = settings.max_cv_bytes if max_file_bytes is None else max_file_bytes
        self._clock = clock

    def assemble(self, job: JobRecord, file_bytes: bytes, file_name: str, mime_type: str) -> EnrichedSubmission:
        """Validate inputs and build the submission.

        Raises:
            ValidationFailure: inadequate job record, empty or oversized file,
                or a missing / overlong file name.
        """
        if job is None or not job.is_adequate():
            raise ValidationFailure("Job record has no title, company, responsibilities or requirements")
        if not file_bytes:
            raise ValidationFailure("CV file content is empty")
        if len(file_bytes) > self.max_file_bytes:
            raise ValidationFailure(
                f"CV file is {len(file_bytes)} bytes, the limit is {self.max_file_bytes} bytes"
            )
        if not file_name or not file_name.strip():
            raise ValidationFailure("CV file name is required")
        if len(file_name) > MAX_FILE_NAME_LEN:
            raise ValidationFailure(f"CV file name is longer than {MAX_FILE_NAME_LEN} characters")

        mime_type = mime_type or "application/octet-stream"
        if mime_type != EXPECTED_MIME_TYPE:
            logger.warning("CV file %s has MIME type %s, expected %s", file_name, mime_type, EXPECTED_MIME_TYPE)
        else:
            sniff_signature(file_bytes)

        submission = EnrichedSubmission(
            job=job,
            file=SubmissionFile(data=bytes(file_bytes), name=file_name, mime_type=mime_type),
            metadata=SubmissionMetadata(extracted_at=self._clock(), source=self.source_tag, version=self.version),
        )
        logger.info(
            "Assembled submission for %r with %s (%d bytes)", job.title, file_name, len(file_bytes)
        )
        return submission


def assemble(job: JobRecord, file_bytes: bytes, file_name: str, mime_type: str) -> EnrichedSubmission:
    """Assemble with the source tag, version and size limit from `EngineSettings`."""
    return RecordAssembler().assemble(job, file_bytes, file_name, mime_type)
