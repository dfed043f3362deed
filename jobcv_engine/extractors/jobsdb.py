"""Site-specific extractor driven by a `SiteProfile`.

`JOBSDB_PROFILE` ships the JobsDB locators (the board marks its fields with
``data-automation="job-detail-*"`` attributes). Other boards with stable
markup get their own profile rather than a new class.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime
from typing import Callable, Optional, Sequence

from ..classify import TextClassifier
from ..documents import JobPage, locate_node
from ..models import SiteProfile
from ..utils import utc_now
from .base import SiteExtractor

logger = logging.getLogger(__name__)


JOBSDB_PROFILE = SiteProfile(
    name="jobsdb",
    host_keyword="jobsdb.com",
    path_marker="/job/",
    brand="jobsdb",
    title_locators=['h1[data-automation="job-detail-title"]'],
    company_locators=['[data-automation="job-detail-company-name"]', '[data-automation="advertiser-name"]'],
    description_locators=['[data-automation="job-detail-description"]', '[data-automation="jobAdDetails"]'],
    salary_locators=['[data-automation="job-detail-salary"]'],
    location_locators=['[data-automation="job-detail-location"]'],
    job_type_locators=['[data-automation="job-detail-work-type"]'],
)


class SiteSpecificExtractor(SiteExtractor):
    """Extract postings from one known job board."""

    def __init__(
        self,
        profile: SiteProfile = JOBSDB_PROFILE,
        classifier: Optional[TextClassifier] = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        if classifier is None and profile.brand:
            classifier = TextClassifier(extra_noise_patterns=[re.escape(profile.brand)])
        super().__init__(classifier=classifier, clock=clock)
        self.profile = profile
        self.name = profile.name
        self.brand = profile.brand

    @property
    def title_locators(self) -> Sequence[str]:
        return self.profile.title_locators

    @property
    def company_locators(self) -> Sequence[str]:
        return self.profile.company_locators

    @property
    def description_locators(self) -> Sequence[str]:
        return self.profile.description_locators

    @property
    def salary_locators(self) -> Sequence[str]:
        return self.profile.salary_locators

    @property
    def location_locators(self) -> Sequence[str]:
        return self.profile.location_locators

    @property
    def job_type_locators(self) -> Sequence[str]:
        return self.profile.job_type_locators

    def is_valid_page(self, page: JobPage) -> bool:
        url = page.url.lower()
        on_site = self.profile.host_keyword.lower() in url
        is_posting = self.profile.path_marker.lower() in url
        has_title = locate_node(page.root, self.title_locators) is not None
        logger.debug(
            "%s page validation: on_site=%s posting=%s title=%s", self.name, on_site, is_posting, has_title
        )
        return on_site and is_posting and has_title
