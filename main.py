# --- 공통 로거 설정 ---
from infrastructure.logging import setup_logging, get_logger
from infrastructure.db.db_manager import create_db_and_tables
from infrastructure.db.repository import SQLStockDataRepository, SQLAccountRepository
from infrastructure.client.kiwoom import KiwoomClient
from infrastructure.scheduler.scheduler_manager import setup_scheduler, start_scheduler
from infrastructure.scheduler.jobs import account_update_job
from domain.auth.service import TokenManager
from domain.stock.service import StockDataService
from domain.account.service import AccountService
from common.exceptions import KiwoomApiError
import argparse
import sys

# 애플리케이션 시작 시 로깅 설정
setup_logging()
logger = get_logger(__name__)


def parse_arguments(argv=None):
    """명령행 인수 파싱"""
    parser = argparse.ArgumentParser(description='Kiwoom Stock Data Collector')

    parser.add_argument('--refresh-token',
                        action='store_true',
                        help='OAuth 토큰을 즉시 재발급하고 결과를 출력한 뒤 종료')

    parser.add_argument('--show',
                        metavar='STOCK_CODE',
                        help='저장된 최신 시세와 계좌 스냅샷을 출력한 뒤 종료')

    parser.add_argument('--collect-once',
                        action='store_true',
                        help='수집 주기를 한 번만 실행한 뒤 종료 (장 운영 시간 체크 없음)')

    parser.add_argument('--no-initial-collection',
                        action='store_true',
                        help='시작 시 초기 수집을 건너뜀')

    return parser.parse_args(argv)


def build_services():
    """클라이언트, 토큰 캐시, 저장소, 서비스를 생성하여 연결합니다."""
    client = KiwoomClient()
    token_manager = TokenManager(client)
    stock_data_service = StockDataService(client, token_manager, SQLStockDataRepository())
    account_service = AccountService(client, token_manager, SQLAccountRepository())
    return token_manager, stock_data_service, account_service


def refresh_token(token_manager: TokenManager) -> int:
    """수동 토큰 재발급. 실패 시 원본 오류 메시지를 그대로 출력합니다."""
    try:
        token_manager.refresh()
        print("로그인 성공: 토큰이 발급되었습니다.")
        return 0
    except KiwoomApiError as e:
        print(f"로그인 실패: {e}")
        return 1


def show_stock(stock_code: str, stock_data_service: StockDataService, account_service: AccountService) -> int:
    """최신 시세 스냅샷과 계좌 스냅샷을 출력합니다."""
    latest = stock_data_service.repository.get_latest_price_info(stock_code)
    if latest:
        print(f"[{latest.stock_code}] {latest.time:%Y-%m-%d %H:%M:%S} "
              f"현재가 {abs(latest.current_price):,} ({latest.diff_from_prev_sign}{latest.diff_from_prev:,}, "
              f"{latest.fluctuation_rate:+.2f}%) 체결강도 {latest.volume_power:.2f}")
    else:
        print(f"[{stock_code}] 저장된 시세가 없습니다.")

    account_info = account_service.get_account_info()
    if account_info:
        print(f"계좌: {account_info.account_name} ({account_info.branch_name}) "
              f"예수금 {account_info.deposit:,} / 추정예탁자산 {account_info.estimated_deposit_asset:,}")
        for stock in account_info.stock_infos:
            print(f"  - {stock.stock_code} {stock.stock_name}: {stock.remain_qty:,}주, "
                  f"평가 {stock.eval_amount:,} ({stock.profit_loss_rate:+.2f}%)")
    else:
        print("저장된 계좌 정보가 없습니다.")
    return 0


def main(argv=None):
    """애플리케이션 진입점."""
    args = parse_arguments(argv)

    token_manager, stock_data_service, account_service = build_services()

    if args.refresh_token:
        sys.exit(refresh_token(token_manager))

    if args.show:
        create_db_and_tables()
        sys.exit(show_stock(args.show, stock_data_service, account_service))

    logger.info("========================================")
    logger.info("  Starting Kiwoom Stock Data Collector")
    logger.info("========================================")

    try:
        # 1. 데이터베이스 테이블 확인 및 생성
        logger.info("Step 1: Initializing database...")
        create_db_and_tables()

        # 2. 토큰 초기 발급 (실패해도 다음 수집 주기에서 다시 시도)
        logger.info("Step 2: Initializing OAuth token...")
        token_manager.initialize()

        if args.collect_once:
            stock_data_service.collect_stock_data()
            sys.exit(0)

        # 3. 시작 시 1회 수집 및 계좌 정보 초기화
        if not args.no_initial_collection:
            logger.info("Step 3: Executing initial data collection on startup...")
            stock_data_service.collect_stock_data()
            account_update_job(account_service)

        # 4. 스케줄러 설정 및 시작
        logger.info("Step 4: Setting up and starting the scheduler...")
        scheduler = setup_scheduler(stock_data_service, account_service)
        start_scheduler(scheduler)

    except KeyboardInterrupt:
        logger.info("프로그램이 사용자에 의해 중단되었습니다.")
        sys.exit(0)
    except Exception as e:
        logger.error(f"프로그램 실행 중 오류 발생: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
