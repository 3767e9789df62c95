import os
from dotenv import load_dotenv

load_dotenv()  # 환경변수 읽어오기


class Settings:
    PROJECT_NAME: str = "RPO Insights Backend"
    VERSION: str = "1.0.0"

    DEBUG: bool = os.getenv("DEBUG", "False").lower() == "true"
    PORT: int = int(os.getenv("PORT", 8001))

    # RPO 결과 webhook (시나리오 단위 요약 payload)
    RPO_WEBHOOK_URL: str = os.getenv(
        "RPO_WEBHOOK_URL", "https://wbdemo.shipsy.io/webhook/RPO"
    )
    HTTP_TIMEOUT_SECONDS: float = float(os.getenv("HTTP_TIMEOUT_SECONDS", 30))

    # webhook 실패 시 시뮬레이션 데이터로 전환하기 전 대기 시간 (테스트에서는 0)
    FALLBACK_DELAY_SECONDS: float = float(os.getenv("FALLBACK_DELAY_SECONDS", 0.6))

    # Google Sheets CSV export
    SHEET_EXPORT_URL: str = os.getenv(
        "SHEET_EXPORT_URL",
        "https://docs.google.com/spreadsheets/d/{sheet_id}/export?format=csv",
    )

    # CORS 설정
    ALLOWED_ORIGINS: list[str] = os.getenv(
        "ALLOWED_ORIGINS",
        "http://localhost:3000,http://localhost:5173,http://127.0.0.1:3000",
    ).split(",")


settings = Settings()  # 모듈화


# CSV export 컬럼은 snake_case 또는 Capitalized 형태로 들어옴 => 순서대로 조회
FIELD_ALIASES = {
    "scenario": ["request_id", "Request_Id"],
    "hub": ["hub_code", "Hub_Code"],
    "vehicle": ["vehicle_code", "Vehicle_Code"],
    "distance": ["travel_distance_km", "Travel_Distance_Km"],
    "type": ["type", "Type"],
}

# type 컬럼에 아래 단어가 포함되면 stop으로 집계 (부분 일치)
STOP_TYPE_KEYWORDS = ("delivery", "pickup", "visit")

UNKNOWN_SCENARIO = "Unknown"
UNKNOWN_HUB = "N/A"

# 표시용 소수 자릿수
DISPLAY_PRECISION = {
    "avg_stops": 1,
    "avg_distance": 2,
    "drop_split": 1,
}
