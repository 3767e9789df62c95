import math
import logging
from typing import Any, List, Optional

from rpo_insights.core.config import UNKNOWN_HUB, DISPLAY_PRECISION
from rpo_insights.models.domain import DetailedMetrics, DropReason

logger = logging.getLogger(__name__)


def _number(value: Any) -> float:
    """누락/비숫자/NaN 값은 0"""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


def _count(value: Any) -> int:
    """건수 필드: 소수는 버리지 않고 반올림 (half-up)"""
    return int(math.floor(_number(value) + 0.5))


def format_hours(decimal_hours: Optional[float]) -> str:
    """2.11 -> '2h 7m'"""
    if decimal_hours is None or not math.isfinite(decimal_hours):
        return "0h 0m"
    hours = math.floor(decimal_hours)
    # 반올림은 half-up
    minutes = math.floor((decimal_hours - hours) * 60 + 0.5)
    return f"{hours}h {minutes}m"


def compute_drop_split(dropped: float, planned: float) -> float:
    """dropped / planned * 100, planned는 최소 1"""
    split = dropped / max(planned, 1) * 100
    return min(max(split, 0.0), 100.0)


def extract_drop_reasons(drop_breakup: Any) -> List[DropReason]:
    if not isinstance(drop_breakup, list):
        return []

    reasons = [
        DropReason(
            reason=item.get("reason_label") or item.get("reason_code") or "",
            count=_count(item.get("dropped_count")),
        )
        for item in drop_breakup
        if isinstance(item, dict)
    ]
    # 동률은 입력 순서 유지 (sorted는 stable)
    return sorted(reasons, key=lambda r: r.count, reverse=True)


def normalize_summary(
    payload: Any, scenario_name: str, is_mock: bool = False
) -> Optional[DetailedMetrics]:
    """
    webhook payload -> DetailedMetrics

    summary가 없는 payload는 None 반환 (예외 X)
    """
    if not isinstance(payload, dict):
        logger.warning(f"Payload for {scenario_name} is not an object")
        return None

    summary = payload.get("summary")
    if not isinstance(summary, dict):
        logger.warning(f"Payload for {scenario_name} has no summary")
        return None

    avg_distance = _number(summary.get("avg_trip_distance_km"))
    avg_consignments = _number(summary.get("avg_stops_per_trip"))
    total_drops = _count(summary.get("total_consignments_dropped"))
    drop_split = compute_drop_split(
        total_drops, _number(summary.get("total_consignments_planned"))
    )

    return DetailedMetrics(
        id=str(payload.get("request_id") or scenario_name),
        hub=str(payload.get("hub_code") or UNKNOWN_HUB),
        total_trips=_count(summary.get("total_trips")),
        avg_distance=avg_distance,
        avg_distance_str=f"{avg_distance:.{DISPLAY_PRECISION['avg_distance']}f}",
        total_stops=_count(summary.get("total_consignments_served")),
        avg_consignments=avg_consignments,
        avg_consignments_str=f"{avg_consignments:.{DISPLAY_PRECISION['avg_stops']}f}",
        avg_trip_time_str=format_hours(_number(summary.get("avg_trip_hours"))),
        total_drops=total_drops,
        drop_split=drop_split,
        drop_split_str=f"{drop_split:.{DISPLAY_PRECISION['drop_split']}f}",
        drop_reasons=extract_drop_reasons(payload.get("drop_breakup")),
        is_mock=is_mock,
    )
