"""Job posting extraction and CV transport engine.

The package is structured around the two payloads an analysis request needs:
- `classify.py`, `documents.py`, `extractors/` and `coordinator.py` turn a job
  page into a stable `JobRecord` (see `models.py`).
- `codec.py` and `storage.py` move CV bytes through text form and back,
  verifying lengths at every boundary.
- `assemble.py` combines both into the submission for the remote service.
"""

from .assemble import RecordAssembler
from .classify import TextClassifier
from .coordinator import ExtractionCoordinator, default_strategies
from .documents import JobPage
from .errors import DecodingFailure, EncodingFailure, ExtractionFailure, JobCVError, ValidationFailure
from .models import EncodedBlob, EnrichedSubmission, JobDetails, JobRecord, Verdict

__version__ = "1.0.0"

__all__ = [
    "DecodingFailure",
    "EncodedBlob",
    "EncodingFailure",
    "EnrichedSubmission",
    "ExtractionCoordinator",
    "ExtractionFailure",
    "JobCVError",
    "JobDetails",
    "JobPage",
    "JobRecord",
    "RecordAssembler",
    "TextClassifier",
    "ValidationFailure",
    "Verdict",
    "default_strategies",
]
