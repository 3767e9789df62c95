"""
Core 설정 및 utilities, 커스텀 예외
"""

from rpo_insights.core.config import settings

from rpo_insights.core.exceptions import (
    RPOInsightsException,
    ScenarioUnresolvableException,
    SheetNotFoundException,
    SheetPermissionException,
    SheetFetchException,
)

__all__ = [
    "settings",
    "RPOInsightsException",
    "ScenarioUnresolvableException",
    "SheetNotFoundException",
    "SheetPermissionException",
    "SheetFetchException",
]
