import time

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger
import pytz

from domain.account.service import AccountService
from domain.stock.service import StockDataService
from infrastructure.logging import get_logger
from infrastructure.scheduler.jobs import stock_data_collection_job, account_update_job
from infrastructure.scheduler import settings

logger = get_logger(__name__)


def setup_scheduler(stock_data_service: StockDataService, account_service: AccountService):
    """스케줄러를 초기화하고 모든 작업을 등록합니다."""

    scheduler = BackgroundScheduler(timezone=pytz.timezone(settings.TIMEZONE))

    # 작업 1: 장 중 1분 간격 시세 수집 (이전 실행이 끝나지 않았으면 건너뜀)
    scheduler.add_job(
        stock_data_collection_job,
        trigger=CronTrigger(**settings.STOCK_DATA_COLLECTION_JOB['cron']),
        args=[stock_data_service],
        id=settings.STOCK_DATA_COLLECTION_JOB['id'],
        name=settings.STOCK_DATA_COLLECTION_JOB['name'],
        max_instances=1,
        coalesce=True,
    )

    # 작업 2: 계좌 스냅샷 갱신
    scheduler.add_job(
        account_update_job,
        trigger=CronTrigger(**settings.ACCOUNT_UPDATE_JOB['cron']),
        args=[account_service],
        id=settings.ACCOUNT_UPDATE_JOB['id'],
        name=settings.ACCOUNT_UPDATE_JOB['name'],
        max_instances=1,
        coalesce=True,
    )

    return scheduler


def print_scheduled_jobs(scheduler):
    """예약된 모든 작업의 목록과 다음 실행 시간을 출력합니다."""
    logger.info("--- Scheduled Jobs Summary ---")
    for job in scheduler.get_jobs():
        next_run_time = getattr(job, 'next_run_time', None)
        next_run = next_run_time.strftime('%Y-%m-%d %H:%M:%S %Z') if next_run_time else 'N/A'
        logger.info(f"-> Job: '{job.name}' | Trigger: {str(job.trigger)} | Next Run: {next_run}")
    logger.info("----------------------------")


def start_scheduler(scheduler):
    """스케줄러를 시작하고 상태를 출력합니다."""
    try:
        scheduler.start()
        print_scheduled_jobs(scheduler)
        logger.info("Scheduler started. Press Ctrl+C to exit.")
        while True:
            time.sleep(2)
    except (KeyboardInterrupt, SystemExit):
        scheduler.shutdown()
        logger.info("Scheduler shut down successfully.")
