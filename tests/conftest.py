"""Shared fixtures: a frozen clock and sample job pages."""
from datetime import datetime, timezone

import pytest

from jobcv_engine.documents import JobPage


FIXED_NOW = datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc)

JOBSDB_HTML = """
<html>
  <head><title>Backend Engineer Job in Hong Kong - JobsDB</title></head>
  <body>
    <nav><a href="/">Sign in</a> <a href="/jobs">View all jobs</a></nav>
    <h1 data-automation="job-detail-title">Backend Engineer</h1>
    <span data-automation="job-detail-company-name">Acme Logistics Ltd View all jobs</span>
    <span data-automation="job-detail-location">Kwun Tong, Kowloon</span>
    <span data-automation="job-detail-salary">HK$40,000 - HK$50,000 per month</span>
    <span data-automation="job-detail-work-type">Full time</span>
    <div data-automation="job-detail-description">
      <p>We are growing our platform team.</p>
      <h3>Responsibilities</h3>
      <ul>
        <li>Develop REST APIs for the shipment tracking platform</li>
        <li>Maintain CI/CD pipelines and deployment tooling</li>
        <li>Collaborate with product owners on the roadmap</li>
      </ul>
      <h3>Requirements</h3>
      <ul>
        <li>Bachelor's degree in Computer Science or related field</li>
        <li>3+ years of experience with Python and SQL</li>
        <li>Proficient in Docker and Kubernetes</li>
      </ul>
      <p>Quick apply</p>
    </div>
  </body>
</html>
"""


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW


@pytest.fixture
def jobsdb_page():
    return JobPage.from_html(JOBSDB_HTML, url="https://hk.jobsdb.com/job/81234567")
