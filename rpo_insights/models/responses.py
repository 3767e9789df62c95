from typing import Dict, List, Optional
from pydantic import BaseModel, Field

# service 별 응답 구조 정의


class ScenarioMetricsResponse(BaseModel):
    id: str = Field(..., description="시나리오 ID (request_id)")
    hub: str = Field(..., description="hub 코드")
    total_vehicles: int = Field(..., description="차량 수")
    total_trips: int = Field(..., description="trip 수 (차량 수와 동일)")
    avg_stops: str = Field(..., description="차량당 평균 stop 수 (소수 1자리)")
    avg_distance: str = Field(..., description="차량당 평균 거리 km (소수 2자리)")
    is_current: bool = Field(default=False, description="현재 시나리오 여부")


class TabularReportResponse(BaseModel):
    fields: List[str] = Field(default_factory=list, description="CSV header")
    record_count: int = Field(..., description="데이터 행 수")
    scenarios: List[ScenarioMetricsResponse] = Field(default_factory=list)
    current_scenario_found: bool = Field(default=False)
    last_updated: Optional[str] = Field(None, description="조회 시각 (ISO 8601)")


class DropReasonResponse(BaseModel):
    reason: str
    count: int


class DetailedMetricsResponse(BaseModel):
    id: str
    hub: str
    total_trips: int
    avg_distance: float
    avg_distance_str: str
    total_stops: int
    avg_consignments: float
    avg_consignments_str: str
    avg_trip_time_str: str
    total_drops: int
    drop_split: float
    drop_split_str: str
    drop_reasons: List[DropReasonResponse] = Field(default_factory=list)
    is_mock: bool = Field(default=False, description="시뮬레이션 데이터 여부")


class ComparisonResponse(BaseModel):
    min_distance: float
    min_drops: int
    min_trips: int
    max_consignments: float


class ScenarioAnalysisResponse(BaseModel):
    scenarios: List[DetailedMetricsResponse]
    comparison: Optional[ComparisonResponse] = Field(
        None, description="2개 이상 시나리오일 때만 제공"
    )
    best_flags: List[Dict[str, bool]] = Field(
        default_factory=list, description="scenarios와 같은 순서의 badge 목록"
    )
    includes_simulated: bool = Field(default=False)


# 에러 응답
class ErrorResponse(BaseModel):
    error: str = Field(..., description="에러 메시지")
    code: Optional[str] = Field(None, description="에러 코드")
