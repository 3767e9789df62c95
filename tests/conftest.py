"""
Pytest 설정 및 공통 Fixture
"""

import os
import copy
import pytest

# 테스트 모드 환경 변수 설정 (모듈 임포트 전에 설정해야 함)
os.environ["FALLBACK_DELAY_SECONDS"] = "0"

from rpo_insights.models.domain import DetailedMetrics  # noqa: E402
from rpo_insights.services.fallback_provider import SAMPLE_RESPONSE  # noqa: E402


@pytest.fixture
def sample_csv_text():
    """테스트용 CSV export (시나리오 2개, 차량 3대)"""
    return (
        "hub_code,request_id,vehicle_code,type,travel_distance_km\n"
        "PALAK,IDB1,AW1,delivery,10 km\n"
        "PALAK,IDB1,AW1,depot_start,2\n"
        "PALAK,IDB1,AW2,PICKUP,\"1,000\"\n"
        "\n"
        "DELHI,IDB2,BX1,visit,5.5\n"
        "DELHI,IDB2,,delivery,100\n"
    )


@pytest.fixture
def sample_payload():
    """webhook 정상 응답 (success=true)"""
    payload = copy.deepcopy(SAMPLE_RESPONSE)
    payload["request_id"] = "LIVE1"
    payload["hub_code"] = "MUMBAI"
    payload["summary"]["avg_trip_distance_km"] = 42.126
    payload["summary"]["avg_stops_per_trip"] = 7.26
    payload["drop_breakup"] = [
        {"reason_code": "TIME_WINDOW", "reason_label": "", "dropped_count": 1},
        {"reason_code": "CAPACITY", "reason_label": "Capacity full", "dropped_count": 2},
    ]
    return payload


@pytest.fixture
def make_metrics():
    """DetailedMetrics 생성 헬퍼"""

    def _make(
        id="S1",
        avg_distance=1.0,
        total_drops=0,
        total_trips=1,
        avg_consignments=1.0,
        is_mock=False,
    ):
        return DetailedMetrics(
            id=id,
            hub="HUB",
            total_trips=total_trips,
            avg_distance=avg_distance,
            avg_distance_str=f"{avg_distance:.2f}",
            total_stops=0,
            avg_consignments=avg_consignments,
            avg_consignments_str=f"{avg_consignments:.1f}",
            avg_trip_time_str="0h 0m",
            total_drops=total_drops,
            drop_split=0.0,
            drop_split_str="0.0",
            is_mock=is_mock,
        )

    return _make
