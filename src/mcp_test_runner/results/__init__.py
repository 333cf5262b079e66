#
# src/mcp_test_runner/results/__init__.py
#
"""
Classification and flattening of runner result trees.
"""

from .entities import Case, Collection, ReportedEntity, classify
from .extractor import count_statuses, extract
from .models import TestCaseResult, TestError

__all__ = [
    "Case",
    "Collection",
    "ReportedEntity",
    "TestCaseResult",
    "TestError",
    "classify",
    "count_statuses",
    "extract",
]

# 🔼⚙️
