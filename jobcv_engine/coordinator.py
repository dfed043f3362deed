"""Strategy chain over site extractors.

Extractors are tried in the order given (most specific first, generic last).
The first adequate record wins and no further extractors run. Failures of a
single extractor are logged and demoted to "try the next one"; only when the
chain is exhausted does the caller see an `ExtractionFailure`.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, List, Optional, Sequence, Tuple

from .documents import JobPage
from .errors import ExtractionFailure
from .extractors import GenericExtractor, SiteExtractor, SiteSpecificExtractor
from .models import JobRecord
from .utils import utc_now

logger = logging.getLogger(__name__)


def default_strategies(clock: Callable[[], datetime] = utc_now) -> List[SiteExtractor]:
    """The shipped chain: JobsDB first, generic fallback last."""
    return [SiteSpecificExtractor(clock=clock), GenericExtractor(clock=clock)]


class ExtractionCoordinator:
    """Run extractors in priority order and return the first adequate record."""

    def __init__(self, strategies: Optional[Sequence[SiteExtractor]] = None) -> None:
        self.strategies: Tuple[SiteExtractor, ...] = tuple(
            default_strategies() if strategies is None else strategies
        )

    def is_any_valid(self, page: JobPage) -> bool:
        """True when at least one extractor recognises the page."""
        return any(self._is_valid(s, page) for s in self.strategies)

    def extract(self, page: JobPage) -> JobRecord:
        """Return the first adequate record.

        Raises:
            ExtractionFailure: every extractor was skipped, failed, or produced
                an inadequate record. `last_error` holds the last failure seen.
        """
        _, record = self.extract_with_strategy(page)
        return record

    def extract_with_strategy(self, page: JobPage) -> Tuple[str, JobRecord]:
        """Like `extract`, also returning the name of the winning extractor."""
        last_error: Optional[Exception] = None
        for strategy in self.strategies:
            if not self._is_valid(strategy, page):
                logger.debug("Skipping %s: page not recognised", strategy.name)
                continue
            try:
                record = strategy.extract_all(page)
            except Exception as exc:
                logger.warning("Extractor %s failed: %s", strategy.name, exc)
                last_error = exc
                continue
            if not record.is_adequate():
                last_error = ExtractionFailure(f"{strategy.name} returned an inadequate record")
                logger.warning("%s", last_error)
                continue
            logger.info("Extraction succeeded with %s for %s", strategy.name, page.url or "<no url>")
            return strategy.name, record

        if last_error is None:
            raise ExtractionFailure("No extractor could process this page")
        raise ExtractionFailure(str(last_error), last_error=last_error) from last_error

    @staticmethod
    def _is_valid(strategy: SiteExtractor, page: JobPage) -> bool:
        try:
            return strategy.is_valid_page(page)
        except Exception as exc:
            logger.warning("Page validation in %s failed: %s", strategy.name, exc)
            return False
