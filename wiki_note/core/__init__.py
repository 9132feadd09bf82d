"""
Core domain models and business logic.

This package contains data types, heading extraction and the suitability
rule. Nothing here performs I/O.
"""

from .types import AcquisitionConfig, ArticleCandidate, HeadingRecord, parse_exclusion_set
from .headings import extract_headings
from .suitability import is_suitable

__all__ = [
    "AcquisitionConfig",
    "ArticleCandidate",
    "HeadingRecord",
    "parse_exclusion_set",
    "extract_headings",
    "is_suitable",
]
