"""
RPO Insights Backend - FastAPI Application

배차 최적화(RPO) 실행 결과 분석 및 시나리오 비교
- CSV export 집계 (시나리오/차량 단위)
- webhook 요약 정규화 + 시뮬레이션 fallback
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from rpo_insights.core.config import settings
from rpo_insights.core.exceptions import RPOInsightsException
from rpo_insights.api.v1.router import api_router

# 로깅 설정
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """애플리케이션 생명주기 관리 (상태 저장 X => 로그만 남김)"""
    logger.info("=" * 60)
    logger.info(f"{settings.PROJECT_NAME} 시작 (webhook: {settings.RPO_WEBHOOK_URL})")
    logger.info("=" * 60)

    yield

    logger.info(f"{settings.PROJECT_NAME} 종료")


# FastAPI 애플리케이션 생성
app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description="""
    ## RPO 실행 결과 분석 API

    ### 주요 기능
    - CSV export 시나리오 집계 (차량당 평균 stop/거리)
    - 시나리오 요약 조회 (webhook 실패 시 시뮬레이션 데이터)
    - 다중 시나리오 비교 (최적값 badge)
    """,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

# CORS 설정
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API 라우터 등록
app.include_router(api_router, prefix="/v1")


# ========== Health Check Endpoints ==========


@app.get("/")
async def root():
    """서비스 기본 정보 반환"""
    return {
        "service": settings.PROJECT_NAME,
        "version": settings.VERSION,
        "status": "running",
        "docs": "/docs",
        "endpoints": {
            "tabular": "POST /v1/analysis/tabular",
            "sheet": "POST /v1/analysis/sheet",
            "scenarios": "POST /v1/analysis/scenarios",
        },
    }


@app.get("/health")
async def health_check():
    return {"status": "healthy", "version": settings.VERSION}


# ========== Exception Handlers ==========


@app.exception_handler(RPOInsightsException)
async def rpo_insights_exception_handler(request, exc: RPOInsightsException):
    logger.warning(f"{exc.code}: {exc.message}")
    return JSONResponse(
        status_code=400,
        content={"error": exc.message, "code": exc.code},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    """
    전역 예외 핸들러

    예상치 못한 오류 처리
    """
    logger.error(f"예상치 못한 오류: {exc}", exc_info=True)

    return JSONResponse(
        status_code=500,
        content={
            "message": "서버 내부 오류가 발생했습니다",
            "detail": str(exc) if settings.DEBUG else "Internal Server Error",
        },
    )


# ========== Development Server ==========

if __name__ == "__main__":
    import uvicorn

    logger.info("개발 서버 시작...")

    uvicorn.run(
        "rpo_insights.main:app",
        host="0.0.0.0",
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level="debug" if settings.DEBUG else "info",
        access_log=True,
    )
