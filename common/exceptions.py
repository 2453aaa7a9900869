"""
키움 REST API 연동 중 발생하는 예외 정의.

- AuthError: 토큰 발급 실패 (네트워크 오류 또는 access_token 필드 누락)
- FetchError: 시세/차트/투자자 조회 호출 실패 (네트워크 오류, 2xx 이외 응답)
- ParseError: 응답은 받았으나 기대한 구조가 아님
"""
from typing import Any, Optional


class KiwoomApiError(Exception):
    """키움 API 관련 예외의 기반 클래스. 진단을 위해 원본 payload를 함께 보관합니다."""

    def __init__(self, message: str, payload: Optional[Any] = None):
        super().__init__(message)
        self.payload = payload


class AuthError(KiwoomApiError):
    """토큰 발급 실패. 해당 수집 주기 전체가 중단됩니다."""


class FetchError(KiwoomApiError):
    """개별 조회 호출 실패. 해당 종목/데이터 종류만 빈 결과로 처리됩니다."""


class ParseError(KiwoomApiError):
    """응답 구조가 기대와 다를 때 발생합니다."""
