import copy
from typing import Any, Dict, Optional, Protocol


# webhook 연결 실패(CORS, 네트워크) 시 사용하는 예시 응답
SAMPLE_RESPONSE: Dict[str, Any] = {
    "success": True,
    "request_id": "IDBtest3",
    "hub_code": "PALAK",
    "summary": {
        "total_trips": 1,
        "total_distance_km": 0.06,
        "avg_trip_distance_km": 0.06,
        "total_trip_hours": 2.11,
        "avg_trip_hours": 2.11,
        "total_consignments_planned": 13,
        "total_consignments_served": 10,
        "total_consignments_dropped": 3,
        "avg_stops_per_trip": 10,
    },
    "trip_matrix": [
        {
            "vehicle_code": "AW9910",
            "trip_index": 1,
            "num_tasks": 10,
            "distance_km": 0.06,
            "duration_hours": 2.11,
        }
    ],
    "drop_breakup": [
        {
            "reason_code": "WEIGHT_CONSTRAINT_BREACH",
            "reason_label": "Insufficient weight",
            "dropped_count": 3,
            "pct_of_dropped": 100,
            "pct_of_planned": 23.08,
        }
    ],
}


class FallbackProvider(Protocol):
    def get_payload(self, scenario_name: str) -> Dict[str, Any]:
        ...


class StaticFallbackProvider:
    """고정 payload 복사본을 반환하되 request_id는 요청한 시나리오 이름으로 덮어씀"""

    def __init__(self, payload: Optional[Dict[str, Any]] = None):
        self.payload = payload if payload is not None else SAMPLE_RESPONSE

    def get_payload(self, scenario_name: str) -> Dict[str, Any]:
        payload = copy.deepcopy(self.payload)
        payload["request_id"] = scenario_name
        return payload
