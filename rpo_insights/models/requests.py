from typing import List, Optional
from pydantic import BaseModel, Field, field_validator

# service별 requests 구조 정의


# CSV 원문 집계 요청
class TabularAnalysisRequest(BaseModel):
    csv_text: str = Field(..., description="CSV 원문 (header + rows)")
    current_scenario_name: Optional[str] = Field(
        None, description="맨 앞에 배치할 현재 시나리오 이름"
    )


# Google Sheet 집계 요청
class SheetAnalysisRequest(BaseModel):
    sheet_id: str = Field(..., min_length=1, description="Sheet ID 또는 전체 URL")
    current_scenario_name: Optional[str] = Field(
        None, description="맨 앞에 배치할 현재 시나리오 이름"
    )


# 시나리오 분석/비교 요청
class ScenarioAnalysisRequest(BaseModel):
    scenario_names: List[str] = Field(
        ..., min_length=1, description="조회할 시나리오 이름 목록"
    )

    @field_validator("scenario_names")
    @classmethod
    def require_non_blank_name(cls, names: List[str]) -> List[str]:
        # 공백만 있는 이름은 조회 대상이 아님 => 전부 공백이면 422
        if not any(name.strip() for name in names):
            raise ValueError("at least one non-blank scenario name is required")
        return names
