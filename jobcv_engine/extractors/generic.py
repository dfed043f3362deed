"""Generic fallback extractor for boards without a profile.

Recognises a posting by URL keywords, a resolvable title, or job vocabulary in
the page text, and probes a broad set of common class/id conventions. It is
meant to run last in the strategy chain.
"""

from __future__ import annotations

import logging
from typing import Optional

from ..documents import JobPage, locate_node, node_text
from .base import SiteExtractor

logger = logging.getLogger(__name__)


JOB_URL_KEYWORDS = [
    "job", "jobs", "career", "careers", "position", "vacancy", "employment",
    "hire", "hiring", "職位", "工作", "招聘",
]

JOB_PAGE_VOCABULARY = [
    "responsibilities", "requirements", "qualifications", "experience",
    "skills", "salary", "benefits",
    "職責", "要求", "資格", "經驗", "技能", "薪資", "福利",
]


class GenericExtractor(SiteExtractor):
    """Best-effort extraction from any page that looks like a job posting."""

    name = "generic"

    title_locators = [
        'h1[data-automation="job-detail-title"]',
        "h1.job-title",
        'h1[class*="title"]',
        'h1[class*="job"]',
        ".job-title h1",
        ".position-title h1",
        "h1:first-of-type",
        "h1",
    ]

    company_locators = [
        '[data-automation="job-detail-company-name"]',
        ".company-name",
        ".employer-name",
        '[class*="company"]',
        '[class*="employer"]',
        "h2:first-of-type",
        "h2",
    ]

    description_locators = [
        '[data-automation="job-detail-description"]',
        ".job-description",
        ".job-details",
        ".position-description",
        '[class*="description"]',
        '[class*="detail"]',
        "main",
        ".content",
        "article",
    ]

    salary_locators = [
        '[data-automation="job-detail-salary"]',
        ".salary", ".compensation", ".pay-range",
        '[class*="salary"]', '[class*="compensation"]',
    ]

    location_locators = [
        '[data-automation="job-detail-location"]',
        ".location", ".job-location", ".address",
        '[class*="location"]', '[class*="address"]',
    ]

    job_type_locators = [
        '[data-automation="job-detail-work-type"]',
        ".job-type", ".employment-type", ".work-type",
        '[class*="job-type"]', '[class*="employment"]',
    ]

    meta_company_locators = ['meta[property*="site_name"]', 'meta[name*="author"]']
    meta_company_max_len = 50

    def is_valid_page(self, page: JobPage) -> bool:
        url = page.url.lower()
        has_url_keyword = any(kw in url for kw in JOB_URL_KEYWORDS)
        has_title = locate_node(page.root, self.title_locators) is not None
        has_vocabulary = self._has_job_vocabulary(page)
        logger.debug(
            "generic page validation: url_keyword=%s title=%s vocabulary=%s",
            has_url_keyword, has_title, has_vocabulary,
        )
        return has_url_keyword or has_title or has_vocabulary

    @staticmethod
    def _has_job_vocabulary(page: JobPage) -> bool:
        text = page.text().lower()
        return any(kw in text for kw in JOB_PAGE_VOCABULARY)

    def _title_fallback(self, page: JobPage) -> Optional[str]:
        title = super()._title_fallback(page)
        if title:
            return title
        for heading in page.root.find_all(["h1", "h2", "h3"]):
            text = node_text(heading)
            if 5 < len(text) < self.title_max_len:
                logger.debug("generic: title recovered from heading %r", text)
                return text
        return None

    def _company_fallback(self, page: JobPage) -> Optional[str]:
        content = page.meta(self.meta_company_locators)
        if content and len(content) < self.meta_company_max_len:
            return content
        return None
