"""Site extractors, most specific first."""

from .base import SiteExtractor
from .generic import GenericExtractor
from .jobsdb import JOBSDB_PROFILE, SiteSpecificExtractor

__all__ = ["SiteExtractor", "SiteSpecificExtractor", "GenericExtractor", "JOBSDB_PROFILE"]
