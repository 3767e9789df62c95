from typing import Dict, List, Optional

from rpo_insights.models.domain import ComparisonExtrema, DetailedMetrics


def evaluate_comparison(
    metrics: List[DetailedMetrics],
) -> Optional[ComparisonExtrema]:
    """시나리오 간 최적값 계산 (2개 미만이면 비교 의미 없음 => None)"""
    if len(metrics) < 2:
        return None

    return ComparisonExtrema(
        min_distance=min(m.avg_distance for m in metrics),
        min_drops=min(m.total_drops for m in metrics),
        min_trips=min(m.total_trips for m in metrics),
        max_consignments=max(m.avg_consignments for m in metrics),
    )


def collect_best_flags(
    metrics: List[DetailedMetrics], extrema: Optional[ComparisonExtrema]
) -> List[Dict[str, bool]]:
    """시나리오별 badge (metrics와 같은 순서, 동일 ID가 여러 개여도 각각 유지)"""
    if extrema is None:
        return []
    return [extrema.best_flags(m) for m in metrics]
