"""Exception taxonomy.

Every failure raised by the engine derives from `JobCVError`. The `remedy`
attribute tells a caller what the user should be offered:

- ``fix-input``: the call was malformed; surface immediately, never retry.
- ``retry``: extraction found nothing usable; a refreshed document may work.
- ``reupload``: file content failed an integrity check; the file must be
  re-acquired from its source, retrying the same bytes reproduces the failure.
"""

from __future__ import annotations

from typing import Optional


class JobCVError(Exception):
    """Base class for engine errors."""

    remedy: str = "fix-input"


class ValidationFailure(JobCVError):
    """Malformed or missing input to a core operation."""

    remedy = "fix-input"


class ExtractionFailure(JobCVError):
    """No strategy produced an adequate job record."""

    remedy = "retry"

    def __init__(self, message: str, last_error: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.last_error = last_error


class EncodingFailure(JobCVError):
    """Binary-to-text conversion failed or did not pass its length check."""

    remedy = "reupload"


class DecodingFailure(JobCVError):
    """Text-to-binary conversion failed or did not pass its length check."""

    remedy = "reupload"
