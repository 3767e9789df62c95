from typing import Dict, List, Optional, Union
from dataclasses import dataclass, field

# domain 정의

Record = Dict[str, str]


@dataclass
class ParsedTable:
    fields: List[str] = field(default_factory=list)
    records: List[Record] = field(default_factory=list)


@dataclass
class VehicleStat:
    vehicle_code: str
    distance: float = 0.0
    stops: int = 0


@dataclass
class ScenarioMetrics:
    id: str
    hub: str
    total_vehicles: int
    total_trips: int  # vehicle 1대 = trip 1개로 가정
    avg_stops: float  # 반올림 전 값 (비교용)
    avg_stops_str: str  # 표시용
    avg_distance: float
    avg_distance_str: str
    is_current: bool = False


@dataclass
class TabularReport:
    fields: List[str]
    record_count: int
    scenarios: List[ScenarioMetrics]
    current_scenario_found: bool = False


@dataclass
class DropReason:
    reason: str
    count: int


@dataclass
class DetailedMetrics:
    id: str
    hub: str

    total_trips: int
    avg_distance: float
    avg_distance_str: str
    total_stops: int
    avg_consignments: float
    avg_consignments_str: str
    avg_trip_time_str: str  # "2h 7m"

    total_drops: int
    drop_split: float  # 퍼센트, full precision
    drop_split_str: str
    drop_reasons: List[DropReason] = field(default_factory=list)

    is_mock: bool = False


@dataclass
class ComparisonExtrema:
    min_distance: float
    min_drops: int
    min_trips: int
    max_consignments: float

    def best_flags(self, metrics: DetailedMetrics) -> Dict[str, bool]:
        """반올림 전 값과 정확히 일치하는 지표에 badge 부여 (동률은 모두 표시)"""
        return {
            "lowest_trips": metrics.total_trips == self.min_trips,
            "best_distance": metrics.avg_distance == self.min_distance,
            "highest_stops": metrics.avg_consignments == self.max_consignments,
            "lowest_drops": metrics.total_drops == self.min_drops,
        }


# webhook 호출 결과 => Resolved / Dropped / TransportFailed 세 가지로 구분


@dataclass
class Resolved:
    payload: dict


@dataclass
class Dropped:
    reason: str


@dataclass
class TransportFailed:
    reason: str


FetchOutcome = Union[Resolved, Dropped, TransportFailed]


@dataclass
class BatchResult:
    scenarios: List[DetailedMetrics]
    comparison: Optional[ComparisonExtrema] = None

    @property
    def includes_simulated(self) -> bool:
        return any(m.is_mock for m in self.scenarios)
