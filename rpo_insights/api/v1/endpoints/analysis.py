"""
시나리오 분석 API 엔드포인트
"""

from dataclasses import asdict
from datetime import datetime, timezone
import logging

from fastapi import APIRouter, Depends, HTTPException

from rpo_insights.algorithms.aggregator import build_tabular_report
from rpo_insights.algorithms.comparison import collect_best_flags
from rpo_insights.core.exceptions import (
    ScenarioUnresolvableException,
    SheetNotFoundException,
    SheetPermissionException,
    SheetFetchException,
)
from rpo_insights.models.domain import TabularReport
from rpo_insights.models.requests import (
    TabularAnalysisRequest,
    SheetAnalysisRequest,
    ScenarioAnalysisRequest,
)
from rpo_insights.models.responses import (
    TabularReportResponse,
    ScenarioMetricsResponse,
    ScenarioAnalysisResponse,
    DetailedMetricsResponse,
    ComparisonResponse,
)
from rpo_insights.services.scenario_resolver import (
    ScenarioResolver,
    get_scenario_resolver,
)
from rpo_insights.services.sheet_source_service import (
    SheetSourceService,
    get_sheet_source_service,
)

router = APIRouter()
logger = logging.getLogger(__name__)


def to_report_response(report: TabularReport, **extra) -> TabularReportResponse:
    # 표시용 문자열만 응답에 포함
    return TabularReportResponse(
        fields=report.fields,
        record_count=report.record_count,
        scenarios=[
            ScenarioMetricsResponse(
                id=s.id,
                hub=s.hub,
                total_vehicles=s.total_vehicles,
                total_trips=s.total_trips,
                avg_stops=s.avg_stops_str,
                avg_distance=s.avg_distance_str,
                is_current=s.is_current,
            )
            for s in report.scenarios
        ],
        current_scenario_found=report.current_scenario_found,
        **extra,
    )


@router.post("/tabular", response_model=TabularReportResponse)
async def analyze_tabular(request: TabularAnalysisRequest):
    """
    CSV 원문 집계

    - **csv_text**: header + rows
    - **current_scenario_name**: 맨 앞에 배치할 시나리오
    """
    report = build_tabular_report(request.csv_text, request.current_scenario_name)
    return to_report_response(report)


@router.post("/sheet", response_model=TabularReportResponse)
async def analyze_sheet(
    request: SheetAnalysisRequest,
    sheet_service: SheetSourceService = Depends(get_sheet_source_service),
):
    """
    Google Sheet CSV export 조회 후 집계

    Example:
        POST /v1/analysis/sheet {"sheet_id": "https://docs.google.com/spreadsheets/d/<id>/edit"}
    """
    try:
        report = await sheet_service.load_report(
            request.sheet_id, request.current_scenario_name
        )
    except SheetNotFoundException as e:
        raise HTTPException(status_code=404, detail=e.message)
    except SheetPermissionException as e:
        raise HTTPException(status_code=403, detail=e.message)
    except SheetFetchException as e:
        raise HTTPException(status_code=502, detail=e.message)

    return to_report_response(
        report, last_updated=datetime.now(timezone.utc).isoformat()
    )


@router.post("/scenarios", response_model=ScenarioAnalysisResponse)
async def analyze_scenarios(
    request: ScenarioAnalysisRequest,
    resolver: ScenarioResolver = Depends(get_scenario_resolver),
):
    """
    시나리오 분석 / 비교

    - 1개: 단일 시나리오 분석
    - 2개 이상: 비교 지표(comparison) + 시나리오별 badge 포함
    """
    try:
        result = await resolver.analyze(request.scenario_names)
    except ScenarioUnresolvableException as e:
        logger.warning(f"Unresolvable scenarios: {request.scenario_names}")
        raise HTTPException(status_code=404, detail=e.message)

    return ScenarioAnalysisResponse(
        scenarios=[DetailedMetricsResponse(**asdict(m)) for m in result.scenarios],
        comparison=(
            ComparisonResponse(**asdict(result.comparison))
            if result.comparison
            else None
        ),
        best_flags=collect_best_flags(result.scenarios, result.comparison),
        includes_simulated=result.includes_simulated,
    )
