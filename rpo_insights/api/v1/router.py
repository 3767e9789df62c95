"""API v1 main router
모든 엔드포인트를 통합하여 하나의 API 라우터로 제공
"""

from fastapi import APIRouter
from rpo_insights.api.v1.endpoints import analysis

# API v1 main router
api_router = APIRouter()

api_router.include_router(analysis.router, prefix="/analysis", tags=["analysis"])
