from domain.account.service import AccountService
from infrastructure.logging import get_logger

logger = get_logger(__name__)


def account_update_job(service: AccountService):
    """계좌평가현황을 조회하여 현재 스냅샷을 교체합니다."""
    logger.info("JOB START: Account snapshot update...")
    try:
        account_info = service.fetch_and_save_account_info()
        logger.info(
            f"JOB END: Account snapshot updated for '{account_info.account_name}' "
            f"({len(account_info.stock_infos)} holdings)."
        )
    except Exception as e:
        logger.error(f"Account update job failed: {e}", exc_info=True)
