"""
공통 설정 파일
키움 REST API 접속 정보, 수집 대상 종목, 호출 제어 값을 환경 변수(.env)에서 읽어옵니다.
"""
import os
from typing import List

from dotenv import load_dotenv

# .env 파일에서 환경 변수 로드
load_dotenv()


def _split_codes(raw: str) -> List[str]:
    return [code.strip() for code in raw.split(',') if code.strip()]


# --- 키움 REST API 접속 정보 ---
KIWOOM_API_BASE_URL = os.getenv("KIWOOM_API_BASE_URL", "https://api.kiwoom.com")
KIWOOM_API_KEY = os.getenv("KIWOOM_API_KEY", "")
KIWOOM_API_SECRET = os.getenv("KIWOOM_API_SECRET", "")

# 모니터링할 종목 리스트 (예: 삼성전자 005930)
TARGET_STOCK_CODES: List[str] = _split_codes(
    os.getenv("KIWOOM_TARGET_STOCK_CODES", "005930,000660,122630,114800")
)

# --- API 호출 제어 설정 ---
API_CONTROL = {
    "REQUEST_TIMEOUT_SECONDS": float(os.getenv("KIWOOM_REQUEST_TIMEOUT_SECONDS", "10")),  # 호출별 타임아웃
    "MAX_CONCURRENT_REQUESTS": int(os.getenv("KIWOOM_MAX_CONCURRENT_REQUESTS", "8")),  # 동시 요청 상한
}

# --- 엔드포인트 설정 (경로 + api-id 헤더) ---
KIWOOM_ENDPOINTS = {
    "TOKEN": {"path": "/oauth2/token"},
    "STOCK_PRICE": {"path": "/api/dostk/mrkcond", "api_id": "ka10046"},  # 체결강도 추이
    "ORDER_BOOK": {"path": "/api/dostk/mrkcond", "api_id": "ka10004"},  # 주식호가
    "DAILY_CANDLE": {"path": "/api/dostk/chart", "api_id": "ka10081"},  # 주식일봉차트
    "INVESTOR": {"path": "/api/dostk/stkinfo", "api_id": "ka10059"},  # 종목별투자자기관별
    "ACCOUNT": {"path": "/api/dostk/acnt", "api_id": "kt00004"},  # 계좌평가현황
}

# --- 시장 시간대 (수집 시각, 요청 일자, 장 운영 시간 판단에 공통으로 사용) ---
MARKET_TIMEZONE = "Asia/Seoul"

# --- 수집 데이터 보관 기준 ---
DAILY_CANDLE_LOOKBACK_DAYS = 7  # 최근 일주일 일봉만 저장

# --- 로깅 ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
