"""
pydantic models for 요청, 응답 + 도메인 객체
"""


from rpo_insights.models.requests import (
    TabularAnalysisRequest,
    SheetAnalysisRequest,
    ScenarioAnalysisRequest,
)
from rpo_insights.models.responses import (
    TabularReportResponse,
    ScenarioAnalysisResponse,
    ErrorResponse,
)
from rpo_insights.models.domain import (
    ScenarioMetrics,
    DetailedMetrics,
    DropReason,
    ComparisonExtrema,
)

__all__ = [
    "TabularAnalysisRequest",
    "SheetAnalysisRequest",
    "ScenarioAnalysisRequest",
    "TabularReportResponse",
    "ScenarioAnalysisResponse",
    "ErrorResponse",
    "ScenarioMetrics",
    "DetailedMetrics",
    "DropReason",
    "ComparisonExtrema",
]
