import re
import logging
from typing import Optional

import httpx

from rpo_insights.core.config import settings
from rpo_insights.core.exceptions import (
    SheetNotFoundException,
    SheetPermissionException,
    SheetFetchException,
)
from rpo_insights.models.domain import TabularReport
from rpo_insights.algorithms.aggregator import build_tabular_report

logger = logging.getLogger(__name__)

_SHEET_URL_PATTERN = re.compile(r"/d/([a-zA-Z0-9\-_]+)")


def extract_sheet_id(sheet_ref: str) -> str:
    """전체 URL이 입력되면 /d/<id> 부분만 추출"""
    sheet_ref = (sheet_ref or "").strip()
    match = _SHEET_URL_PATTERN.search(sheet_ref)
    if match:
        return match.group(1)
    return sheet_ref


class SheetSourceService:
    """Google Sheets CSV export 조회 + 시나리오 집계"""

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        export_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.client = client
        self.export_url = export_url or settings.SHEET_EXPORT_URL
        self.timeout = settings.HTTP_TIMEOUT_SECONDS if timeout is None else timeout

    async def _get(self, url: str) -> httpx.Response:
        if self.client is not None:
            return await self.client.get(url, follow_redirects=True)
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await client.get(url, follow_redirects=True)

    async def fetch_csv(self, sheet_ref: str) -> str:
        sheet_id = extract_sheet_id(sheet_ref)
        if not sheet_id:
            raise SheetNotFoundException()

        url = self.export_url.format(sheet_id=sheet_id)
        logger.info(f"Fetching sheet export: {sheet_id}")

        try:
            response = await self._get(url)
        except httpx.HTTPError as e:
            logger.error(f"Sheet request failed for {sheet_id}: {e}")
            raise SheetFetchException()

        if response.status_code == 404:
            raise SheetNotFoundException()
        if response.status_code in (401, 403):
            raise SheetPermissionException()
        if not response.is_success:
            logger.error(f"Sheet export returned {response.status_code} for {sheet_id}")
            raise SheetFetchException()

        return response.text

    async def load_report(
        self, sheet_ref: str, current_scenario_name: Optional[str] = None
    ) -> TabularReport:
        csv_text = await self.fetch_csv(sheet_ref)
        return build_tabular_report(csv_text, current_scenario_name)


_sheet_source_service: Optional[SheetSourceService] = None


def get_sheet_source_service() -> SheetSourceService:
    """sheet source 서비스 싱글톤 인스턴스 반환"""
    global _sheet_source_service
    if _sheet_source_service is None:
        _sheet_source_service = SheetSourceService()
    return _sheet_source_service
