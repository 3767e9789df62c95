"""
ScenarioResolver 테스트 (webhook 조회 + 시뮬레이션 fallback)
"""

import json
import pytest
import httpx

from rpo_insights.core.exceptions import ScenarioUnresolvableException
from rpo_insights.models.domain import Dropped, Resolved, TransportFailed
from rpo_insights.services.fallback_provider import StaticFallbackProvider
from rpo_insights.services.scenario_resolver import (
    ScenarioResolver,
    clean_scenario_names,
)

WEBHOOK_URL = "https://rpo.test/webhook/RPO"


def make_resolver(handler, **kwargs):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return ScenarioResolver(
        client=client, webhook_url=WEBHOOK_URL, fallback_delay=0, **kwargs
    )


def requested_name(request: httpx.Request) -> str:
    return json.loads(request.content)["request_id"]


class TestCleanScenarioNames:
    def test_trims_and_deduplicates(self):
        assert clean_scenario_names([" A ", "B", "", "A", "  "]) == ["A", "B"]


class TestFetch:
    """webhook 응답 => Resolved / Dropped / TransportFailed"""

    @pytest.mark.asyncio
    async def test_object_body(self, sample_payload):
        resolver = make_resolver(lambda request: httpx.Response(200, json=sample_payload))

        outcome = await resolver.fetch("LIVE1", resolver.client)

        assert isinstance(outcome, Resolved)
        assert outcome.payload["hub_code"] == "MUMBAI"

    @pytest.mark.asyncio
    async def test_request_body_carries_scenario_name(self, sample_payload):
        seen = []

        def handler(request):
            seen.append((request.method, str(request.url), requested_name(request)))
            return httpx.Response(200, json=sample_payload)

        resolver = make_resolver(handler)
        await resolver.fetch("LIVE1", resolver.client)

        assert seen == [("POST", WEBHOOK_URL, "LIVE1")]

    @pytest.mark.asyncio
    async def test_array_body_uses_first_item(self, sample_payload):
        other = dict(sample_payload, request_id="SECOND")
        resolver = make_resolver(
            lambda request: httpx.Response(200, json=[sample_payload, other])
        )

        outcome = await resolver.fetch("LIVE1", resolver.client)

        assert isinstance(outcome, Resolved)
        assert outcome.payload["request_id"] == "LIVE1"

    @pytest.mark.asyncio
    async def test_empty_array_is_dropped(self):
        resolver = make_resolver(lambda request: httpx.Response(200, json=[]))

        outcome = await resolver.fetch("X", resolver.client)

        assert isinstance(outcome, Dropped)

    @pytest.mark.asyncio
    async def test_success_false_is_dropped(self, sample_payload):
        sample_payload["success"] = False
        resolver = make_resolver(lambda request: httpx.Response(200, json=sample_payload))

        outcome = await resolver.fetch("X", resolver.client)

        assert isinstance(outcome, Dropped)
        assert "success" in outcome.reason

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status_code", [404, 500, 503])
    async def test_non_success_status(self, status_code):
        resolver = make_resolver(lambda request: httpx.Response(status_code))

        outcome = await resolver.fetch("X", resolver.client)

        assert isinstance(outcome, TransportFailed)
        assert str(status_code) in outcome.reason

    @pytest.mark.asyncio
    async def test_malformed_body(self):
        resolver = make_resolver(lambda request: httpx.Response(200, text="<html>"))

        outcome = await resolver.fetch("X", resolver.client)

        assert isinstance(outcome, TransportFailed)

    @pytest.mark.asyncio
    async def test_network_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        resolver = make_resolver(handler)

        outcome = await resolver.fetch("X", resolver.client)

        assert isinstance(outcome, TransportFailed)
        assert "ConnectError" in outcome.reason


class TestResolve:
    @pytest.mark.asyncio
    async def test_live_payload(self, sample_payload):
        resolver = make_resolver(lambda request: httpx.Response(200, json=sample_payload))

        metrics = await resolver.resolve("LIVE1")

        assert metrics.id == "LIVE1"
        assert metrics.hub == "MUMBAI"
        assert metrics.is_mock is False

    @pytest.mark.asyncio
    async def test_transport_failure_falls_back(self):
        resolver = make_resolver(lambda request: httpx.Response(502))

        metrics = await resolver.resolve("X")

        assert metrics.id == "X"
        assert metrics.is_mock is True
        assert metrics.hub == "PALAK"
        assert [(r.reason, r.count) for r in metrics.drop_reasons] == [
            ("Insufficient weight", 3)
        ]

    @pytest.mark.asyncio
    async def test_fallback_provider_is_injectable(self, sample_payload):
        provider = StaticFallbackProvider(sample_payload)
        resolver = make_resolver(
            lambda request: httpx.Response(500), fallback_provider=provider
        )

        metrics = await resolver.resolve("CUSTOM")

        assert metrics.id == "CUSTOM"
        assert metrics.hub == "MUMBAI"
        assert metrics.is_mock is True
        # provider 원본은 변경되지 않음
        assert sample_payload["request_id"] == "LIVE1"

    @pytest.mark.asyncio
    async def test_fallback_ignores_success_flag(self, sample_payload):
        sample_payload["success"] = False
        resolver = make_resolver(
            lambda request: httpx.Response(500),
            fallback_provider=StaticFallbackProvider(sample_payload),
        )

        metrics = await resolver.resolve("X")

        assert metrics is not None
        assert metrics.is_mock is True

    @pytest.mark.asyncio
    async def test_success_false_returns_none(self, sample_payload):
        sample_payload["success"] = False
        resolver = make_resolver(lambda request: httpx.Response(200, json=sample_payload))

        assert await resolver.resolve("X") is None

    @pytest.mark.asyncio
    async def test_payload_without_summary_returns_none(self):
        resolver = make_resolver(
            lambda request: httpx.Response(200, json={"success": True, "request_id": "X"})
        )

        assert await resolver.resolve("X") is None

    @pytest.mark.asyncio
    async def test_fallback_delay(self, mocker):
        sleep = mocker.patch(
            "rpo_insights.services.scenario_resolver.asyncio.sleep",
            new_callable=mocker.AsyncMock,
        )
        client = httpx.AsyncClient(
            transport=httpx.MockTransport(lambda request: httpx.Response(500))
        )
        resolver = ScenarioResolver(client=client, webhook_url=WEBHOOK_URL, fallback_delay=0.6)

        await resolver.resolve("X")

        sleep.assert_awaited_once_with(0.6)


class TestResolveBatch:
    @pytest.mark.asyncio
    async def test_mixed_batch_keeps_request_order(self, sample_payload):
        def handler(request):
            name = requested_name(request)
            if name == "LIVE1":
                return httpx.Response(200, json=sample_payload)
            if name == "BAD":
                return httpx.Response(200, json={"success": False})
            raise httpx.ReadTimeout("timed out", request=request)

        resolver = make_resolver(handler)

        results = await resolver.resolve_batch(["OFFLINE", "BAD", "LIVE1"])

        assert [m.id for m in results] == ["OFFLINE", "LIVE1"]
        assert [m.is_mock for m in results] == [True, False]

    @pytest.mark.asyncio
    async def test_all_transport_failures_give_simulated_batch(self):
        resolver = make_resolver(lambda request: httpx.Response(503))

        results = await resolver.resolve_batch(["A", "B", "C"])

        assert [m.id for m in results] == ["A", "B", "C"]
        assert all(m.is_mock for m in results)

    @pytest.mark.asyncio
    async def test_all_dropped_raises(self):
        resolver = make_resolver(lambda request: httpx.Response(200, json={"success": False}))

        with pytest.raises(ScenarioUnresolvableException) as exc_info:
            await resolver.resolve_batch(["A", "B"])

        assert exc_info.value.code == "SCENARIO_UNRESOLVABLE"

    @pytest.mark.asyncio
    async def test_empty_batch_makes_no_calls(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(200, json={})

        resolver = make_resolver(handler)

        assert await resolver.resolve_batch([]) == []
        assert calls == []

    @pytest.mark.asyncio
    async def test_blank_only_batch_raises(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(200, json={})

        resolver = make_resolver(handler)

        with pytest.raises(ScenarioUnresolvableException):
            await resolver.resolve_batch(["", "  "])
        assert calls == []

    @pytest.mark.asyncio
    async def test_unexpected_error_does_not_abort_siblings(self, sample_payload, mocker):
        resolver = make_resolver(lambda request: httpx.Response(200, json=sample_payload))
        original = resolver.resolve

        async def flaky(name, client=None):
            if name == "BOOM":
                raise RuntimeError("boom")
            return await original(name, client)

        mocker.patch.object(resolver, "resolve", side_effect=flaky)

        results = await resolver.resolve_batch(["BOOM", "LIVE1"])

        assert [m.id for m in results] == ["LIVE1"]

    @pytest.mark.asyncio
    async def test_analyze_adds_comparison(self, sample_payload):
        def handler(request):
            if requested_name(request) == "LIVE1":
                return httpx.Response(200, json=sample_payload)
            return httpx.Response(500)

        resolver = make_resolver(handler)

        result = await resolver.analyze(["LIVE1", "SIM"])

        assert result.includes_simulated is True
        assert result.comparison is not None
        assert result.comparison.min_distance == 0.06
        assert result.comparison.max_consignments == 10

    @pytest.mark.asyncio
    async def test_analyze_single_has_no_comparison(self, sample_payload):
        resolver = make_resolver(lambda request: httpx.Response(200, json=sample_payload))

        result = await resolver.analyze(["LIVE1"])

        assert result.comparison is None
        assert result.includes_simulated is False
