"""
Unit tests for the extraction strategy chain.
"""
import pytest

from jobcv_engine.coordinator import ExtractionCoordinator, default_strategies
from jobcv_engine.documents import JobPage
from jobcv_engine.errors import ExtractionFailure
from jobcv_engine.extractors import GenericExtractor, SiteExtractor, SiteSpecificExtractor


class ExplodingExtractor(SiteExtractor):
    """Recognises every page and then fails."""

    name = "exploding"
    title_locators = ["h1"]
    company_locators = []
    description_locators = []

    def __init__(self):
        super().__init__()
        self.calls = 0

    def is_valid_page(self, page):
        return True

    def extract_all(self, page):
        self.calls += 1
        raise RuntimeError("selector engine crashed")


def test_site_specific_wins_on_its_board(jobsdb_page, fixed_clock):
    coordinator = ExtractionCoordinator(default_strategies(clock=fixed_clock))
    name, record = coordinator.extract_with_strategy(jobsdb_page)
    assert name == "jobsdb"
    assert record.company == "Acme Logistics Ltd"


def test_generic_handles_other_boards(fixed_clock):
    html = "<h1>Warehouse Supervisor</h1><ul><li>Supervise the night shift team</li></ul>"
    page = JobPage.from_html(html, url="https://careers.example.com/openings/12")
    name, record = ExtractionCoordinator(default_strategies(clock=fixed_clock)).extract_with_strategy(page)
    assert name == "generic"
    assert record.title == "Warehouse Supervisor"
    assert record.responsibilities == ["Supervise the night shift team"]


def test_first_adequate_result_wins(jobsdb_page, fixed_clock):
    generic = GenericExtractor(clock=fixed_clock)
    exploding = ExplodingExtractor()
    coordinator = ExtractionCoordinator([generic, exploding])
    name, _ = coordinator.extract_with_strategy(jobsdb_page)
    assert name == "generic"
    assert exploding.calls == 0


def test_failing_strategy_falls_through(jobsdb_page, fixed_clock):
    exploding = ExplodingExtractor()
    coordinator = ExtractionCoordinator([exploding, GenericExtractor(clock=fixed_clock)])
    name, record = coordinator.extract_with_strategy(jobsdb_page)
    assert name == "generic"
    assert exploding.calls == 1
    assert record.title == "Backend Engineer"


def test_last_error_is_reported(jobsdb_page):
    with pytest.raises(ExtractionFailure) as excinfo:
        ExtractionCoordinator([ExplodingExtractor()]).extract(jobsdb_page)
    assert isinstance(excinfo.value.last_error, RuntimeError)
    assert excinfo.value.remedy == "retry"


def test_no_recognised_page():
    page = JobPage.from_html("<p>hello</p>", url="https://example.com/x")
    coordinator = ExtractionCoordinator()
    assert not coordinator.is_any_valid(page)
    with pytest.raises(ExtractionFailure) as excinfo:
        coordinator.extract(page)
    assert excinfo.value.last_error is None
    assert "No extractor could process this page" in str(excinfo.value)


def test_empty_posting_fails_every_strategy(fixed_clock):
    page = JobPage.from_html("<p>Hello there</p>", url="https://hk.jobsdb.com/job/1")
    strategies = [SiteSpecificExtractor(clock=fixed_clock), GenericExtractor(clock=fixed_clock)]
    for strategy in strategies:
        with pytest.raises(ExtractionFailure):
            strategy.extract_all(page)
    with pytest.raises(ExtractionFailure) as excinfo:
        ExtractionCoordinator(strategies).extract(page)
    assert isinstance(excinfo.value.last_error, ExtractionFailure)


def test_is_any_valid(jobsdb_page):
    assert ExtractionCoordinator().is_any_valid(jobsdb_page)
    assert not ExtractionCoordinator([]).is_any_valid(jobsdb_page)


def test_repeated_extraction_is_stable(jobsdb_page, fixed_clock):
    coordinator = ExtractionCoordinator(default_strategies(clock=fixed_clock))
    first = coordinator.extract_with_strategy(jobsdb_page)
    second = coordinator.extract_with_strategy(jobsdb_page)
    assert first == second
