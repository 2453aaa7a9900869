"""
종목 시세 수집 서비스 (오케스트레이터)

한 번의 수집 주기:
1. 토큰 확보. 실패하면 주기 전체를 건너뜁니다.
2. 대상 종목 x 4개 데이터 종류(체결 시세, 호가 잔량, 일봉, 투자자 동향)를
   크기가 제한된 스레드 풀에서 동시에 조회합니다.
3. 한 종목의 4개 조회가 모두 끝나면 그 종목의 결과를 저장합니다.

조회/파싱/저장 오류는 종목 및 데이터 종류 단위로 격리됩니다.
이전 주기가 아직 실행 중이면 새 주기는 건너뜁니다.
"""
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Tuple

import pytz

from common.config import settings
from common.exceptions import AuthError, FetchError
from domain.auth.service import TokenManager
from domain.stock.parser import (
    BaseResponseParser, DailyCandleParser, InvestorParser, OrderBookParser, StockPriceParser,
)
from domain.stock.repository import StockDataRepository
from infrastructure.client.kiwoom import KiwoomClient
from infrastructure.logging import get_logger

logger = get_logger(__name__)

PRICE = 'price'
ORDER_BOOK = 'order_book'
DAILY_CANDLE = 'daily_candle'
INVESTOR = 'investor'

DATA_TYPES = (PRICE, ORDER_BOOK, DAILY_CANDLE, INVESTOR)


def market_now() -> datetime:
    """시장 시간대(MARKET_TIMEZONE)의 현재 시각을 naive datetime으로 반환합니다."""
    return datetime.now(pytz.timezone(settings.MARKET_TIMEZONE)).replace(tzinfo=None)


class StockDataService:

    def __init__(
        self,
        client: KiwoomClient,
        token_manager: TokenManager,
        repository: StockDataRepository,
        stock_codes: Optional[List[str]] = None,
        max_workers: Optional[int] = None,
        parsers: Optional[Dict[str, BaseResponseParser]] = None,
    ):
        self.client = client
        self.token_manager = token_manager
        self.repository = repository
        self.stock_codes = list(dict.fromkeys(
            settings.TARGET_STOCK_CODES if stock_codes is None else stock_codes
        ))
        self.max_workers = max_workers or settings.API_CONTROL["MAX_CONCURRENT_REQUESTS"]
        self.parsers: Dict[str, BaseResponseParser] = {
            PRICE: StockPriceParser(),
            ORDER_BOOK: OrderBookParser(),
            DAILY_CANDLE: DailyCandleParser(),
            INVESTOR: InvestorParser(),
        }
        self.parsers.update(parsers or {})
        self._cycle_lock = threading.Lock()

    @property
    def is_running(self) -> bool:
        return self._cycle_lock.locked()

    def collect_stock_data(self, now: Optional[datetime] = None) -> Optional[Dict[str, Dict[str, int]]]:
        """
        수집 주기를 한 번 실행합니다.

        Args:
            now: 시각 복원, 요청 일자, 필터링의 기준 시각 (시장 시간대 기준 naive datetime).
                생략하면 MARKET_TIMEZONE 의 현재 시각을 사용합니다.

        Returns:
            종목별 저장 건수 {'005930': {'price': 1, ...}}.
            이전 주기가 실행 중이라 건너뛴 경우 None.
        """
        if not self._cycle_lock.acquire(blocking=False):
            logger.warning("Previous stock data collection is still running. Skipping this cycle.")
            return None
        try:
            return self._run_cycle(now)
        finally:
            self._cycle_lock.release()

    def _run_cycle(self, now: Optional[datetime]) -> Dict[str, Dict[str, int]]:
        logger.info("Starting scheduled stock data collection...")
        # 호스트 시간대와 무관하게 모든 데이터 종류가 같은 시장 기준 시각을 사용합니다.
        now = now or market_now()

        try:
            token = self.token_manager.get_token()
        except AuthError as e:
            logger.error(f"Token acquisition failed. Skipping collection cycle: {e}")
            return {}

        if not self.stock_codes:
            logger.info("No target stock codes configured. Nothing to collect.")
            return {}

        pending: Dict[str, Dict[str, List[Any]]] = {code: {} for code in self.stock_codes}
        summary: Dict[str, Dict[str, int]] = {}

        with ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix='kiwoom-fetch') as executor:
            futures = {
                executor.submit(self._fetch_and_parse, data_type, token, code, now): (code, data_type)
                for code in self.stock_codes
                for data_type in DATA_TYPES
            }
            for future in as_completed(futures):
                code, data_type = futures[future]
                pending[code][data_type] = future.result()

                if len(pending[code]) == len(DATA_TYPES):
                    summary[code] = self._save_stock_data(code, pending.pop(code))

        logger.info(f"Stock data collection finished for {len(summary)} stocks: {summary}")
        return summary

    def _fetchers(self) -> Dict[str, Tuple[str, Callable[..., Dict[str, Any]]]]:
        return {
            PRICE: ('fetchStockPrice', self.client.fetch_stock_price),
            ORDER_BOOK: ('fetchOrderBook', self.client.fetch_order_book),
            DAILY_CANDLE: ('fetchDailyCandle', self.client.fetch_daily_candle),
            INVESTOR: ('fetchInvestorInfo', self.client.fetch_investor),
        }

    def _fetch_and_parse(self, data_type: str, token: str, stock_code: str, now: datetime) -> List[Any]:
        """조회 + 파싱. 어떤 오류도 밖으로 던지지 않고 빈 리스트로 대체합니다."""
        call_name, fetch = self._fetchers()[data_type]
        logger.info(f"{call_name} CALL for {stock_code}")
        try:
            if data_type in (DAILY_CANDLE, INVESTOR):
                response = fetch(token, stock_code, now.date())
            else:
                response = fetch(token, stock_code)
        except FetchError as e:
            logger.error(f"{data_type} API call failed for {stock_code}: {e} | payload={e.payload}")
            return []
        except Exception as e:
            logger.error(f"Unexpected error during {data_type} call for {stock_code}: {e}", exc_info=True)
            return []

        try:
            return self.parsers[data_type].parse(stock_code, response, now)
        except Exception as e:
            logger.error(f"Unexpected error while parsing {data_type} data for {stock_code}: {e}", exc_info=True)
            return []

    def _save_stock_data(self, stock_code: str, data: Dict[str, List[Any]]) -> Dict[str, int]:
        """한 종목의 조회 결과를 데이터 종류별로 저장합니다. 저장 실패도 종류별로 격리됩니다."""
        saved = {data_type: 0 for data_type in DATA_TYPES}

        price_infos = data.get(PRICE) or []
        if price_infos:
            logger.info(f"Collected {len(price_infos)} data points for {stock_code}")
            saved[PRICE] = self._save(stock_code, PRICE, self.repository.save_price_infos, price_infos)

        order_books = data.get(ORDER_BOOK) or []
        if order_books:
            logger.info(f"Collected order book for {stock_code}: {order_books[0]}")
            saved[ORDER_BOOK] = self._save(stock_code, ORDER_BOOK, self._save_order_books, order_books)

        candles = data.get(DAILY_CANDLE) or []
        if candles:
            logger.info(f"Collected {len(candles)} daily candles for {stock_code}")
            saved[DAILY_CANDLE] = self._save(stock_code, DAILY_CANDLE, self.repository.save_daily_candles, candles)

        investors = data.get(INVESTOR) or []
        if investors:
            logger.info(f"Collected {len(investors)} investor records for {stock_code}")
            saved[INVESTOR] = self._save(stock_code, INVESTOR, self.repository.save_investors, investors)

        return saved

    def _save_order_books(self, order_books: List[Any]) -> int:
        for order_book in order_books:
            self.repository.save_order_book(order_book)
        return len(order_books)

    @staticmethod
    def _save(stock_code: str, data_type: str, save_fn: Callable[[List[Any]], int], records: List[Any]) -> int:
        try:
            return save_fn(records)
        except Exception as e:
            logger.error(f"Error saving {data_type} data for {stock_code}: {e}", exc_info=True)
            return 0
