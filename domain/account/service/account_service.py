from typing import Optional

from domain.account.models import AccountInfo
from domain.account.parser import AccountParser
from domain.account.repository import AccountRepository
from domain.auth.service import TokenManager
from infrastructure.client.kiwoom import KiwoomClient
from infrastructure.logging import get_logger

logger = get_logger(__name__)


class AccountService:
    """계좌평가현황을 조회하여 현재 스냅샷으로 저장합니다."""

    def __init__(self, client: KiwoomClient, token_manager: TokenManager,
                 repository: AccountRepository, parser: Optional[AccountParser] = None):
        self.client = client
        self.token_manager = token_manager
        self.repository = repository
        self.parser = parser or AccountParser()

    def fetch_and_save_account_info(self) -> AccountInfo:
        """
        토큰 -> 계좌 조회 -> 파싱 -> 스냅샷 교체.
        실패 시 AuthError / FetchError / ParseError가 호출자에게 전파됩니다.
        """
        token = self.token_manager.get_token()
        response = self.client.fetch_account(token)
        logger.debug(f"Account API Response: {response}")

        account_info = self.parser.parse(response)
        return self.repository.replace_account_info(account_info)

    def get_account_info(self) -> Optional[AccountInfo]:
        return self.repository.get_account_info()
