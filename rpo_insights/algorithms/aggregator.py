import re
import logging
from typing import Dict, List, Optional, Sequence

from rpo_insights.core.config import (
    FIELD_ALIASES,
    STOP_TYPE_KEYWORDS,
    UNKNOWN_SCENARIO,
    UNKNOWN_HUB,
    DISPLAY_PRECISION,
)
from rpo_insights.models.domain import (
    Record,
    VehicleStat,
    ScenarioMetrics,
    TabularReport,
)
from rpo_insights.algorithms.csv_parser import parse_csv

logger = logging.getLogger(__name__)

_NON_NUMERIC = re.compile(r"[^0-9.\-]+")
_LEADING_FLOAT = re.compile(r"-?(?:\d+(?:\.\d*)?|\.\d+)")


def resolve_field(record: Record, keys: Sequence[str], default: str = "") -> str:
    """후보 key를 순서대로 조회하여 처음으로 값이 있는 항목 반환 (빈 문자열은 없는 것으로 취급)"""
    for key in keys:
        value = record.get(key)
        if value:
            return value
    return default


def parse_distance(raw: str) -> float:
    """'12.5 km' -> 12.5, 숫자가 아니면 0"""
    cleaned = _NON_NUMERIC.sub("", raw or "")
    match = _LEADING_FLOAT.match(cleaned)
    if not match:
        return 0.0
    return float(match.group(0))


def is_stop_type(raw_type: str) -> bool:
    lowered = (raw_type or "").lower()
    return any(keyword in lowered for keyword in STOP_TYPE_KEYWORDS)


def _format_average(value: float, digits: int, count: int) -> str:
    if count == 0:
        return "0"
    return f"{value:.{digits}f}"


def _collect_vehicle_stats(rows: List[Record]) -> Dict[str, VehicleStat]:
    vehicles: Dict[str, VehicleStat] = {}

    for row in rows:
        vehicle_code = resolve_field(row, FIELD_ALIASES["vehicle"])
        if not vehicle_code:
            continue

        stat = vehicles.get(vehicle_code)
        if stat is None:
            stat = vehicles[vehicle_code] = VehicleStat(vehicle_code=vehicle_code)

        stat.distance += parse_distance(
            resolve_field(row, FIELD_ALIASES["distance"], "0")
        )
        if is_stop_type(resolve_field(row, FIELD_ALIASES["type"])):
            stat.stops += 1

    return vehicles


def _build_scenario_metrics(
    scenario_id: str, rows: List[Record], current_scenario_name: Optional[str]
) -> ScenarioMetrics:
    hub_code = resolve_field(rows[0], FIELD_ALIASES["hub"], UNKNOWN_HUB)
    vehicles = _collect_vehicle_stats(rows)

    total_vehicles = len(vehicles)
    total_stops = sum(v.stops for v in vehicles.values())
    total_distance = sum(v.distance for v in vehicles.values())

    avg_stops = total_stops / total_vehicles if total_vehicles else 0.0
    avg_distance = total_distance / total_vehicles if total_vehicles else 0.0

    is_current = bool(current_scenario_name) and (
        scenario_id.lower() == current_scenario_name.lower()
    )

    return ScenarioMetrics(
        id=scenario_id,
        hub=hub_code,
        total_vehicles=total_vehicles,
        # 차량별 trip 수는 CSV에 없음 => 차량 1대당 trip 1개로 단순화
        total_trips=total_vehicles,
        avg_stops=avg_stops,
        avg_stops_str=_format_average(
            avg_stops, DISPLAY_PRECISION["avg_stops"], total_vehicles
        ),
        avg_distance=avg_distance,
        avg_distance_str=_format_average(
            avg_distance, DISPLAY_PRECISION["avg_distance"], total_vehicles
        ),
        is_current=is_current,
    )


def aggregate_scenarios(
    records: List[Record], current_scenario_name: Optional[str] = None
) -> List[ScenarioMetrics]:
    """
    request_id 기준으로 그룹핑 후 시나리오별 지표 계산

    Args:
        records: parse_csv 결과 record 목록
        current_scenario_name: 맨 앞에 배치할 시나리오 이름 (대소문자 무시)

    Returns:
        시나리오별 ScenarioMetrics (현재 시나리오 우선, 나머지는 최초 등장 순서)
    """
    # 1. 시나리오별 그룹핑 (dict 삽입 순서 유지)
    scenarios: Dict[str, List[Record]] = {}
    for record in records:
        scenario_id = resolve_field(record, FIELD_ALIASES["scenario"], UNKNOWN_SCENARIO)
        scenarios.setdefault(scenario_id, []).append(record)

    # 2. 시나리오별 지표 계산
    results = [
        _build_scenario_metrics(scenario_id, rows, current_scenario_name)
        for scenario_id, rows in scenarios.items()
    ]

    # 3. 현재 시나리오만 앞으로 (stable sort)
    results.sort(key=lambda m: not m.is_current)

    logger.info(
        f"Aggregated {len(records)} records into {len(results)} scenarios"
    )
    return results


def build_tabular_report(
    text: str, current_scenario_name: Optional[str] = None
) -> TabularReport:
    table = parse_csv(text)
    scenarios = aggregate_scenarios(table.records, current_scenario_name)

    return TabularReport(
        fields=table.fields,
        record_count=len(table.records),
        scenarios=scenarios,
        current_scenario_found=any(s.is_current for s in scenarios),
    )
