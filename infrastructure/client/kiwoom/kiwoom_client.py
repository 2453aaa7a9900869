from datetime import date
from typing import Any, Dict, Optional

import requests

from common.config import settings
from common.exceptions import AuthError, FetchError
from domain.stock.parser.field_normalizer import format_date
from infrastructure.logging import get_logger

logger = get_logger(__name__)


class KiwoomClient:
    """
    키움증권 REST API 클라이언트.

    - 토큰 발급: form-urlencoded POST, 응답의 access_token 반환
    - 조회: JSON POST + "Authorization: Bearer <token>" + "api-id" 헤더
    모든 호출에는 동일한 타임아웃이 적용됩니다.
    """

    def __init__(
        self,
        base_url: str = settings.KIWOOM_API_BASE_URL,
        api_key: str = settings.KIWOOM_API_KEY,
        api_secret: str = settings.KIWOOM_API_SECRET,
        timeout: float = settings.API_CONTROL["REQUEST_TIMEOUT_SECONDS"],
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip('/')
        self.api_key = api_key
        self.api_secret = api_secret
        self.timeout = timeout
        self.session = session or requests.Session()
        self.endpoints = settings.KIWOOM_ENDPOINTS

    @property
    def has_credentials(self) -> bool:
        return bool(self.api_key and self.api_secret)

    def issue_token(self) -> str:
        """
        OAuth 토큰을 발급받습니다.

        Raises:
            AuthError: 네트워크 오류, 2xx 이외 응답, access_token 필드 누락
        """
        url = self.base_url + self.endpoints["TOKEN"]["path"]
        form_data = {
            'grant_type': 'client_credentials',
            'appkey': self.api_key,
            'appsecret': self.api_secret,
        }
        try:
            response = self.session.post(url, data=form_data, timeout=self.timeout)
        except requests.RequestException as e:
            raise AuthError(f"Token request failed: {e}") from e

        payload = self._json_or_text(response)
        if not response.ok:
            raise AuthError(f"Token endpoint returned status {response.status_code}", payload=payload)

        token = payload.get('access_token') if isinstance(payload, dict) else None
        if not token:
            raise AuthError("access_token not found in token response", payload=payload)
        return token

    def post(self, endpoint: str, token: str, body: Dict[str, Any]) -> Dict[str, Any]:
        """
        api-id 헤더를 사용하는 조회 API를 호출합니다.

        Args:
            endpoint: settings.KIWOOM_ENDPOINTS 의 키 (예: "STOCK_PRICE")
            token: Bearer 토큰
            body: JSON 요청 본문

        Raises:
            FetchError: 네트워크 오류, 2xx 이외 응답, JSON이 아닌 응답
        """
        spec = self.endpoints[endpoint]
        url = self.base_url + spec["path"]
        headers = {
            'Content-Type': 'application/json;charset=UTF-8',
            'Authorization': f'Bearer {token}',
            'api-id': spec["api_id"],
        }
        try:
            response = self.session.post(url, json=body, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            raise FetchError(f"{endpoint} request failed: {e}") from e

        payload = self._json_or_text(response)
        if not response.ok:
            raise FetchError(f"{endpoint} returned status {response.status_code}", payload=payload)
        if not isinstance(payload, dict):
            raise FetchError(f"{endpoint} returned a non-JSON body", payload=payload)

        logger.debug(f"{endpoint} API Response: {payload}")
        return payload

    @staticmethod
    def _json_or_text(response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return response.text

    # --- 종목 시세 조회 ---

    def fetch_stock_price(self, token: str, stock_code: str) -> Dict[str, Any]:
        return self.post("STOCK_PRICE", token, {'stk_cd': stock_code})

    def fetch_order_book(self, token: str, stock_code: str) -> Dict[str, Any]:
        return self.post("ORDER_BOOK", token, {'stk_cd': stock_code})

    def fetch_daily_candle(self, token: str, stock_code: str, base_date: Optional[date] = None) -> Dict[str, Any]:
        body = {
            'stk_cd': stock_code,
            'base_dt': format_date(base_date or date.today()),  # 오늘 날짜 기준
            'upd_stkpc_tp': '0',  # 수정주가구분 (0: 미적용, 1: 적용)
        }
        return self.post("DAILY_CANDLE", token, body)

    def fetch_investor(self, token: str, stock_code: str, base_date: Optional[date] = None) -> Dict[str, Any]:
        body = {
            'dt': format_date(base_date or date.today()),
            'stk_cd': stock_code,
            'amt_qty_tp': '2',  # 1:금액, 2:수량
            'trde_tp': '0',  # 0:순매수
            'unit_tp': '1',  # 1:단주
        }
        return self.post("INVESTOR", token, body)

    # --- 계좌 조회 ---

    def fetch_account(self, token: str) -> Dict[str, Any]:
        body = {
            'qry_tp': '0',  # 0:전체
            'dmst_stex_tp': 'KRX',  # KRX:한국거래소
        }
        return self.post("ACCOUNT", token, body)
