"""Data models for the engine.

The key idea: whatever page a posting came from, the product owns a *stable*
normalized schema for it (`JobRecord`), and whatever path a CV file took
(storage, message hop, multipart upload) it is described by the same small set
of records.

Wire names are camelCase (``extractedAt``, ``jobType``) because the remote
analysis service consumes them that way; Python code uses snake_case. Dump with
``by_alias=True`` when serializing for the wire.

This file uses Pydantic v2.
"""

from __future__ import annotations

import json
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .utils import isoformat_z


class Verdict(str, Enum):
    """Classification outcome for one text fragment."""

    RESPONSIBILITY = "responsibility"
    REQUIREMENT = "requirement"
    NOISE = "noise"


class _WireModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)


class JobDetails(_WireModel):
    """Page-level metadata. Absent fields are None, never omitted."""

    url: str = ""
    extracted_at: datetime
    salary: Optional[str] = None
    location: Optional[str] = None
    job_type: Optional[str] = None


class JobRecord(_WireModel):
    """A normalized job posting.

    Created by a site extractor and never modified afterwards.
    """

    title: Optional[str] = None
    company: Optional[str] = None
    responsibilities: List[str] = Field(default_factory=list)
    requirements: List[str] = Field(default_factory=list)
    details: JobDetails

    def is_adequate(self) -> bool:
        """True when at least one identifying field or one list entry is present."""
        has_identity = bool((self.title or "").strip() or (self.company or "").strip())
        return has_identity or bool(self.responsibilities or self.requirements)

    def to_payload(self) -> Dict:
        """JSON-ready dict using wire (camelCase) names."""
        return self.model_dump(mode="json", by_alias=True)


class SiteProfile(BaseModel):
    """Locators and identity of one job board, consumed by `SiteSpecificExtractor`."""

    model_config = ConfigDict(frozen=True)

    name: str
    host_keyword: str = Field(..., description="Substring the page URL must contain, e.g. 'jobsdb.com'.")
    path_marker: str = Field(default="/job/", description="Substring marking a posting URL.")
    brand: Optional[str] = Field(default=None, description="Board brand; company candidates containing it are rejected.")

    title_locators: List[str] = Field(default_factory=list)
    company_locators: List[str] = Field(default_factory=list)
    description_locators: List[str] = Field(default_factory=list)
    salary_locators: List[str] = Field(default_factory=list)
    location_locators: List[str] = Field(default_factory=list)
    job_type_locators: List[str] = Field(default_factory=list)


class EncodedBlob(BaseModel):
    """Transport-safe text form of a binary file."""

    model_config = ConfigDict(frozen=True)

    original_byte_length: int = Field(..., ge=1)
    encoded_text: str

    @property
    def estimated_byte_length(self) -> int:
        """Byte length implied by the text length (padding not subtracted)."""
        return len(self.encoded_text) * 3 // 4


class SubmissionFile(BaseModel):
    model_config = ConfigDict(frozen=True)

    data: bytes = Field(..., repr=False)
    name: str
    mime_type: str


class SubmissionMetadata(_WireModel):
    extracted_at: datetime
    source: str
    version: str


class EnrichedSubmission(BaseModel):
    """Everything one analysis request needs.

    Owned by the caller for the duration of a single request; the engine keeps
    no reference to it.
    """

    model_config = ConfigDict(frozen=True)

    job: JobRecord
    file: SubmissionFile
    metadata: SubmissionMetadata

    def job_details_json(self) -> str:
        """The job record plus metadata block, JSON-encoded for the form part."""
        payload = self.job.to_payload()
        payload["metadata"] = self.metadata.model_dump(mode="json", by_alias=True)
        return json.dumps(payload, ensure_ascii=False)

    def multipart(self) -> Tuple[Dict[str, str], Dict[str, Tuple[str, bytes, str]]]:
        """Return ``(data, files)`` for a multipart POST (e.g. ``httpx.post(url, data=..., files=...)``)."""
        data = {
            "jobDetails": self.job_details_json(),
            "timestamp": isoformat_z(self.metadata.extracted_at),
            "source": self.metadata.source,
        }
        files = {"cvFile": (self.file.name, self.file.data, self.file.mime_type)}
        return data, files
