"""Base class for site extractors.

A site extractor turns one `JobPage` into a `JobRecord`. Concrete extractors
differ in how they recognise a page and which locators they try; the list
extraction (responsibilities / requirements) is shared and runs in three
tiers, stopping at the first tier that yields anything:

1. find a heading that names the section ("Responsibilities", "職責", ...) and
   take the list items (or bullet-split paragraphs) that follow it;
2. take every list item in the description container;
3. split the whole description text on bullets, newlines and dashes.

Every candidate is filtered through the `TextClassifier`, de-duplicated on
exact text and capped at `max_items`, keeping discovery order.

Extractors are stateless: the page is passed to every call.
"""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Callable, Iterator, List, Optional, Sequence

from bs4 import Tag

from ..classify import TextClassifier
from ..documents import JobPage, locate, locate_node, node_text, raw_text
from ..errors import ExtractionFailure
from ..models import JobDetails, JobRecord, Verdict
from ..utils import squash_ws, uniq_preserve_order, utc_now

logger = logging.getLogger(__name__)


RESPONSIBILITY_KEYWORDS = [
    "responsibilities", "job responsibilities", "key responsibilities", "duties",
    "what you will do", "what you'll do", "the role",
    "職責", "工作職責", "主要職責", "你將要做", "工作內容",
]

REQUIREMENT_KEYWORDS = [
    "requirements", "job requirements", "qualifications", "skills", "experience",
    "education", "what we are looking for", "what we're looking for", "about you", "must have",
    "要求", "職位要求", "資格", "技能", "經驗", "學歷", "我們尋找", "申請條件",
]

# Trailing UI text that board widgets glue onto the company name.
_COMPANY_SUFFIX_RE = re.compile(
    r"\s*(?:view all jobs|show all|show more|see more|quick apply|save)\b.*$", re.IGNORECASE
)
_BULLET_SPLIT_RE = re.compile(r"[•·\n\r]")
_TEXT_SPLIT_RE = re.compile(r"[\n\r•·\*]+|\s+[-–—]\s+")
_LEADING_DASH_RE = re.compile(r"^[-–—]+\s*")

# Elements that can act as a section heading.
_HEADING_TAGS = ["h1", "h2", "h3", "h4", "h5", "h6", "p", "div", "span", "strong", "b", "dt", "th", "label", "section"]
_HEADING_MAX_LEN = 60
_LABEL_MAX_WORDS = 4
_DIGIT_RE = re.compile(r"\d")


class SiteExtractor(ABC):
    """Abstract base class for a job page extractor."""

    name: str

    max_items = 15
    items_per_section = 20
    title_max_len = 100
    company_min_len = 4
    company_max_len = 100

    responsibility_keywords: Sequence[str] = RESPONSIBILITY_KEYWORDS
    requirement_keywords: Sequence[str] = REQUIREMENT_KEYWORDS

    def __init__(
        self,
        classifier: Optional[TextClassifier] = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.classifier = classifier or TextClassifier()
        self._clock = clock

    # --- locators supplied by subclasses -----------------------------------

    @property
    @abstractmethod
    def title_locators(self) -> Sequence[str]:
        raise NotImplementedError

    @property
    @abstractmethod
    def company_locators(self) -> Sequence[str]:
        raise NotImplementedError

    @property
    @abstractmethod
    def description_locators(self) -> Sequence[str]:
        raise NotImplementedError

    salary_locators: Sequence[str] = ()
    location_locators: Sequence[str] = ()
    job_type_locators: Sequence[str] = ()
    brand: Optional[str] = None

    @abstractmethod
    def is_valid_page(self, page: JobPage) -> bool:
        """Cheap check (no network) that the page looks like a posting this extractor handles."""
        raise NotImplementedError

    # --- fields ------------------------------------------------------------

    def extract_title(self, page: JobPage) -> Optional[str]:
        title = locate(page.root, self.title_locators)
        if title:
            return title
        return self._title_fallback(page)

    def _title_fallback(self, page: JobPage) -> Optional[str]:
        if 1 <= len(page.title) <= self.title_max_len:
            return page.title
        return None

    def extract_company(self, page: JobPage) -> Optional[str]:
        raw = locate(page.root, self.company_locators) or self._company_fallback(page)
        if not raw:
            return None
        return self.clean_company(raw)

    def _company_fallback(self, page: JobPage) -> Optional[str]:
        return None

    def clean_company(self, raw: str) -> Optional[str]:
        """Strip widget suffixes; reject brand names and implausible lengths."""
        company = _COMPANY_SUFFIX_RE.sub("", squash_ws(raw)).strip()
        if self.brand and self.brand.lower() in company.lower():
            logger.debug("Rejected company candidate %r: contains board brand", company)
            return None
        if not (self.company_min_len <= len(company) < self.company_max_len):
            logger.debug("Rejected company candidate %r: length %d", company, len(company))
            return None
        return company

    def description(self, page: JobPage) -> Optional[Tag]:
        return locate_node(page.root, self.description_locators)

    def extract_responsibilities(self, page: JobPage) -> List[str]:
        return self._extract_items(page, Verdict.RESPONSIBILITY, self.responsibility_keywords)

    def extract_requirements(self, page: JobPage) -> List[str]:
        return self._extract_items(page, Verdict.REQUIREMENT, self.requirement_keywords)

    def extract_details(self, page: JobPage) -> JobDetails:
        return JobDetails(
            url=page.url,
            extracted_at=self._clock(),
            salary=locate(page.root, self.salary_locators),
            location=locate(page.root, self.location_locators),
            job_type=locate(page.root, self.job_type_locators),
        )

    def extract_all(self, page: JobPage) -> JobRecord:
        """Extract every field and build the record.

        Raises:
            ExtractionFailure: the record has no title, no company and no list entries.
        """
        record = JobRecord(
            title=self.extract_title(page),
            company=self.extract_company(page),
            responsibilities=self.extract_responsibilities(page),
            requirements=self.extract_requirements(page),
            details=self.extract_details(page),
        )
        if not record.is_adequate():
            raise ExtractionFailure(f"{self.name}: unable to extract meaningful job information from this page")

        logger.info(
            "%s extracted %r at %r (%d responsibilities, %d requirements)",
            self.name, record.title, record.company or "N/A",
            len(record.responsibilities), len(record.requirements),
        )
        return record

    # --- list extraction ---------------------------------------------------

    def _extract_items(self, page: JobPage, verdict: Verdict, keywords: Sequence[str]) -> List[str]:
        container = self.description(page)
        scope = container if container is not None else page.root
        if container is None:
            logger.debug("%s: no description container, searching the whole page", self.name)

        found: List[str] = []
        for nodes in self._sections(scope, keywords):
            found = self.classifier.select(self._list_items(nodes)[: self.items_per_section], verdict)
            if found:
                logger.debug("%s: %s found via section heading", self.name, verdict.value)
                break

        if not found:
            found = self.classifier.select(self._list_items([scope]), verdict)
            if found:
                logger.debug("%s: %s found via description list items", self.name, verdict.value)

        if not found:
            found = self.classifier.select(self._split_text(scope), verdict)
            if found:
                logger.debug("%s: %s found via text split", self.name, verdict.value)

        return uniq_preserve_order(found)[: self.max_items]

    def _is_heading(self, el: Tag, keywords: Sequence[str]) -> bool:
        if el.find(["ul", "ol", "li"]) is not None:
            return False
        text = node_text(el)
        if not text or len(text) > _HEADING_MAX_LEN:
            return False
        lowered = text.lower()
        if not any(kw.lower() in lowered for kw in keywords):
            return False
        if self.classifier.starts_with_action(text):
            return False
        if self.classifier.classify(text) is Verdict.NOISE:
            return True
        # Short labels such as "Required Skills" read as qualifications but name a section.
        return len(text.split()) <= _LABEL_MAX_WORDS and not _DIGIT_RE.search(text)

    def _sections(self, scope: Tag, keywords: Sequence[str]) -> Iterator[List[Tag]]:
        """Yield the sibling nodes that follow each heading naming a section."""
        all_keywords = list(self.responsibility_keywords) + list(self.requirement_keywords)
        for el in scope.find_all(_HEADING_TAGS):
            if not self._is_heading(el, keywords):
                continue
            anchor = el
            nodes = self._following(anchor, all_keywords)
            while not nodes and anchor.parent is not None and anchor.parent is not scope:
                anchor = anchor.parent
                nodes = self._following(anchor, all_keywords)
            if nodes:
                yield nodes

    def _following(self, heading: Tag, stop_keywords: Sequence[str]) -> List[Tag]:
        nodes: List[Tag] = []
        for sib in heading.find_next_siblings(True):
            if sib.name == heading.name and self._is_heading(sib, stop_keywords):
                break
            nodes.append(sib)
        return nodes

    def _list_items(self, nodes: Sequence[Tag]) -> List[str]:
        """List item texts under `nodes`; bullet-split paragraphs when there are no lists."""
        items: List[str] = []
        for node in nodes:
            lis = [node] if node.name == "li" else node.find_all("li")
            for li in lis:
                text = node_text(li)
                if len(text) > 5:
                    items.append(text)

        if not items:
            for node in nodes:
                blocks = [node] if node.name in ("p", "div") else []
                blocks += node.find_all(["p", "div"])
                for block in blocks:
                    for line in _BULLET_SPLIT_RE.split(raw_text(block)):
                        line = squash_ws(line)
                        if len(line) > 5:
                            items.append(line)

        return items

    def _split_text(self, scope: Tag) -> List[str]:
        pieces = []
        for piece in _TEXT_SPLIT_RE.split(raw_text(scope)):
            piece = squash_ws(_LEADING_DASH_RE.sub("", piece.strip()))
            if piece:
                pieces.append(piece)
        return pieces
