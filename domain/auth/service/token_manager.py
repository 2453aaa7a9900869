"""
키움 OAuth 토큰 캐시.

발급받은 Bearer 토큰 하나를 프로세스 메모리에 보관합니다.
- get_token(): 캐시된 토큰이 있으면 그대로, 없으면 새로 발급
- refresh(): 항상 토큰 엔드포인트를 호출하여 캐시를 교체
만료 시각은 추적하지 않습니다. 토큰으로 호출한 API가 실패하기 전까지는 유효하다고 간주하며,
401 응답에 대해 자동으로 재발급하지 않습니다.
"""
import threading
from typing import Optional

from common.exceptions import AuthError
from infrastructure.client.kiwoom import KiwoomClient
from infrastructure.logging import get_logger

logger = get_logger(__name__)


class TokenManager:

    def __init__(self, client: KiwoomClient):
        self.client = client
        self._token: Optional[str] = None
        self._lock = threading.Lock()

    @property
    def cached_token(self) -> Optional[str]:
        with self._lock:
            return self._token

    def get_token(self) -> str:
        """유효한 토큰을 반환합니다. 토큰이 없으면 새로 발급받습니다."""
        with self._lock:
            if self._token:
                return self._token
            return self._refresh_locked()

    def refresh(self) -> str:
        """
        토큰을 새로 발급받아 캐시를 교체합니다.
        실패 시 AuthError를 던지며 기존 캐시는 그대로 유지됩니다.
        """
        with self._lock:
            return self._refresh_locked()

    def _refresh_locked(self) -> str:
        try:
            token = self.client.issue_token()
        except AuthError as e:
            logger.error(f"Failed to issue OAuth token: {e} | payload={e.payload}")
            raise
        self._token = token
        logger.info("OAuth token issued and cached.")
        return token

    def initialize(self) -> bool:
        """
        시작 시 토큰을 미리 발급받습니다.
        API Key/Secret이 없으면 건너뛰며, 실패해도 예외를 던지지 않습니다.
        """
        if not self.client.has_credentials:
            logger.warning("API Key or Secret is not configured. Skipping token initialization.")
            return False
        try:
            self.refresh()
            logger.info("Successfully initialized OAuth token.")
            return True
        except AuthError:
            logger.error("Failed to initialize OAuth token", exc_info=True)
            return False
