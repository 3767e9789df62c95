"""
CSV 파싱, 시나리오 집계, webhook 요약 정규화, 시나리오 비교
"""

from rpo_insights.algorithms.csv_parser import parse_csv
from rpo_insights.algorithms.aggregator import (
    aggregate_scenarios,
    build_tabular_report,
    resolve_field,
)
from rpo_insights.algorithms.normalizer import normalize_summary, format_hours
from rpo_insights.algorithms.comparison import evaluate_comparison

__all__ = [
    "parse_csv",
    "aggregate_scenarios",
    "build_tabular_report",
    "resolve_field",
    "normalize_summary",
    "format_hours",
    "evaluate_comparison",
]
