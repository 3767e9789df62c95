# webhook 조회 + 시뮬레이션 데이터 fallback

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Iterable, List, Optional

import httpx

from rpo_insights.core.config import settings
from rpo_insights.core.exceptions import ScenarioUnresolvableException
from rpo_insights.models.domain import (
    BatchResult,
    DetailedMetrics,
    Dropped,
    FetchOutcome,
    Resolved,
    TransportFailed,
)
from rpo_insights.algorithms.normalizer import normalize_summary
from rpo_insights.algorithms.comparison import evaluate_comparison
from rpo_insights.services.fallback_provider import (
    FallbackProvider,
    StaticFallbackProvider,
)

logger = logging.getLogger(__name__)


def clean_scenario_names(names: Iterable[str]) -> List[str]:
    """공백 제거, 빈 값 제외, 중복 제거 (입력 순서 유지)"""
    cleaned: List[str] = []
    for name in names:
        name = (name or "").strip()
        if name and name not in cleaned:
            cleaned.append(name)
    return cleaned


class ScenarioResolver:
    """
    시나리오 이름별 RPO webhook 조회

    - 네트워크 오류 / non-2xx / JSON 파싱 실패 => 시뮬레이션 데이터로 대체 (is_mock=True)
    - webhook이 success=false 반환 => 해당 시나리오 제외
    - 배치 내 모든 시나리오가 제외되면 ScenarioUnresolvableException
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        fallback_provider: Optional[FallbackProvider] = None,
        webhook_url: Optional[str] = None,
        fallback_delay: Optional[float] = None,
        timeout: Optional[float] = None,
    ):
        self.client = client
        self.fallback_provider = fallback_provider or StaticFallbackProvider()
        self.webhook_url = webhook_url or settings.RPO_WEBHOOK_URL
        self.fallback_delay = (
            settings.FALLBACK_DELAY_SECONDS if fallback_delay is None else fallback_delay
        )
        self.timeout = settings.HTTP_TIMEOUT_SECONDS if timeout is None else timeout

    @asynccontextmanager
    async def _client_context(self) -> AsyncIterator[httpx.AsyncClient]:
        # 외부에서 주입한 client는 닫지 않음
        if self.client is not None:
            yield self.client
            return

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            yield client

    async def fetch(
        self, scenario_name: str, client: httpx.AsyncClient
    ) -> FetchOutcome:
        try:
            response = await client.post(
                self.webhook_url,
                json={"request_id": scenario_name},
                headers={"Content-Type": "application/json"},
            )
            if not response.is_success:
                return TransportFailed(f"Server returned {response.status_code}")

            body = response.json()

        except httpx.HTTPError as e:
            return TransportFailed(f"{type(e).__name__}: {e}")
        except ValueError as e:
            return TransportFailed(f"Malformed response body: {e}")

        # 배열 응답이면 첫 번째 항목 사용
        if isinstance(body, list):
            if not body:
                return Dropped("Empty response array")
            body = body[0]

        if not isinstance(body, dict):
            return Dropped("Response body is not an object")

        if body.get("success") is False:
            return Dropped("API returned success: false")

        return Resolved(body)

    async def resolve(
        self, scenario_name: str, client: Optional[httpx.AsyncClient] = None
    ) -> Optional[DetailedMetrics]:
        if client is None:
            async with self._client_context() as own_client:
                return await self.resolve(scenario_name, own_client)

        outcome = await self.fetch(scenario_name, client)

        if isinstance(outcome, Resolved):
            return normalize_summary(outcome.payload, scenario_name)

        if isinstance(outcome, Dropped):
            logger.warning(f"Dropping scenario {scenario_name}: {outcome.reason}")
            return None

        if isinstance(outcome, TransportFailed):
            logger.info(
                f"Request failed for {scenario_name} ({outcome.reason}). "
                "Switching to simulation mode."
            )
            if self.fallback_delay > 0:
                await asyncio.sleep(self.fallback_delay)

            payload = self.fallback_provider.get_payload(scenario_name)
            return normalize_summary(payload, scenario_name, is_mock=True)

        raise TypeError(f"Unknown fetch outcome: {outcome!r}")

    async def resolve_batch(self, scenario_names: Iterable[str]) -> List[DetailedMetrics]:
        """
        시나리오별 조회를 동시에 실행하고 모두 끝날 때까지 대기

        Returns:
            요청 순서대로 정렬된 DetailedMetrics (제외된 시나리오는 빠짐)

        Raises:
            ScenarioUnresolvableException: 하나도 조회되지 않았을 때
        """
        requested = list(scenario_names)
        if not requested:
            return []

        names = clean_scenario_names(requested)
        if not names:
            # 이름은 들어왔지만 모두 공백 => 조회할 시나리오 없음
            raise ScenarioUnresolvableException()

        logger.info(f"Resolving {len(names)} scenario(s): {', '.join(names)}")

        async with self._client_context() as client:
            results = await asyncio.gather(
                *(self.resolve(name, client) for name in names),
                return_exceptions=True,
            )

        resolved: List[DetailedMetrics] = []
        for name, result in zip(names, results):
            if isinstance(result, Exception):
                logger.error(
                    f"Unexpected error while resolving {name}: {result}",
                    exc_info=result,
                )
                continue
            if isinstance(result, BaseException):
                raise result
            if result is not None:
                resolved.append(result)

        if not resolved:
            raise ScenarioUnresolvableException()

        mock_count = sum(1 for m in resolved if m.is_mock)
        logger.info(
            f"Resolved {len(resolved)}/{len(names)} scenario(s) "
            f"({mock_count} simulated)"
        )
        return resolved

    async def analyze(self, scenario_names: Iterable[str]) -> BatchResult:
        scenarios = await self.resolve_batch(scenario_names)
        return BatchResult(scenarios=scenarios, comparison=evaluate_comparison(scenarios))


_scenario_resolver: Optional[ScenarioResolver] = None


def get_scenario_resolver() -> ScenarioResolver:
    """scenario resolver 싱글톤 인스턴스 반환"""
    global _scenario_resolver
    if _scenario_resolver is None:
        _scenario_resolver = ScenarioResolver()
    return _scenario_resolver
