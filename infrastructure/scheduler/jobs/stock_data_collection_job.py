from datetime import datetime
from typing import Optional

import pytz

from domain.stock.service import StockDataService
from infrastructure.logging import get_logger
from infrastructure.scheduler import settings

logger = get_logger(__name__)


def is_market_open(now: datetime) -> bool:
    """평일 09:00 ~ 15:30 사이인지 확인합니다."""
    if now.weekday() >= 5:
        return False
    current = (now.hour, now.minute)
    return settings.MARKET_OPEN <= current <= settings.MARKET_CLOSE


def stock_data_collection_job(service: StockDataService, now: Optional[datetime] = None):
    """
    장중 1분마다 대상 종목의 시세/호가/일봉/투자자 데이터를 수집하는 스케줄링 작업입니다.
    Cron은 15시대 전체에 실행되므로 15:30 이후는 여기서 건너뜁니다.
    """
    now = now or datetime.now(pytz.timezone(settings.TIMEZONE))
    if not is_market_open(now):
        logger.debug(f"Outside market hours ({now:%H:%M}). Skipping stock data collection.")
        return

    logger.info("JOB START: Stock data collection from Kiwoom REST API...")
    try:
        summary = service.collect_stock_data(now.replace(tzinfo=None))
        if summary is None:
            return
        logger.info(f"JOB END: Stock data collection finished. Saved: {summary}")
    except Exception as e:
        logger.error(f"Stock data collection job failed: {e}", exc_info=True)
