from abc import ABC, abstractmethod
from typing import Optional

from domain.account.models import AccountInfo


class AccountRepository(ABC):
    """계좌 스냅샷 저장소 계약. 항상 최신 스냅샷 하나만 유지합니다."""

    @abstractmethod
    def replace_account_info(self, account_info: AccountInfo) -> AccountInfo:
        """기존 스냅샷을 모두 삭제하고 새 스냅샷을 저장합니다."""
        pass

    @abstractmethod
    def get_account_info(self) -> Optional[AccountInfo]:
        pass
