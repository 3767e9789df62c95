"""
Business logic services
"""

from rpo_insights.services.scenario_resolver import ScenarioResolver
from rpo_insights.services.sheet_source_service import SheetSourceService
from rpo_insights.services.fallback_provider import StaticFallbackProvider

__all__ = [
    "ScenarioResolver",
    "SheetSourceService",
    "StaticFallbackProvider",
]
