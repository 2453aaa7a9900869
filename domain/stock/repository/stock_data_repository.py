from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import List, Optional

import pandas as pd

from domain.stock.models import StockDailyCandle, StockInvestor, StockOrderBook, StockPriceInfo


class StockDataRepository(ABC):
    """
    수집한 시세 데이터 저장소에 대한 '계약'(추상 인터페이스).

    저장 규칙:
    - 체결 시세: (종목코드, 시각)이 이미 있으면 저장하지 않음
    - 일봉: (종목코드, 일자)가 이미 있으면 저장하지 않음
    - 호가 잔량 / 투자자 동향: 중복 체크 없이 항상 추가
    """

    # --- 저장 ---

    @abstractmethod
    def save_price_infos(self, price_infos: List[StockPriceInfo]) -> int:
        """신규 체결 시세만 저장하고 저장된 건수를 반환합니다."""
        pass

    @abstractmethod
    def save_order_book(self, order_book: StockOrderBook) -> None:
        pass

    @abstractmethod
    def save_daily_candles(self, candles: List[StockDailyCandle]) -> int:
        """신규 일봉만 저장하고 저장된 건수를 반환합니다."""
        pass

    @abstractmethod
    def save_investors(self, investors: List[StockInvestor]) -> int:
        pass

    # --- 존재 여부 ---

    @abstractmethod
    def exists_price_info(self, stock_code: str, time: datetime) -> bool:
        pass

    @abstractmethod
    def exists_daily_candle(self, stock_code: str, candle_date: date) -> bool:
        pass

    # --- 조회 ---

    @abstractmethod
    def get_stock_codes(self) -> List[str]:
        pass

    @abstractmethod
    def get_latest_price_info(self, stock_code: str) -> Optional[StockPriceInfo]:
        pass

    @abstractmethod
    def get_price_infos(self, stock_code: Optional[str] = None) -> List[StockPriceInfo]:
        pass

    @abstractmethod
    def get_price_series(self, stock_code: str) -> pd.DataFrame:
        pass

    @abstractmethod
    def get_order_books(self, stock_code: Optional[str] = None) -> List[StockOrderBook]:
        pass

    @abstractmethod
    def get_daily_candles(self, stock_code: str) -> List[StockDailyCandle]:
        pass

    @abstractmethod
    def get_investors(self, stock_code: Optional[str] = None) -> List[StockInvestor]:
        pass
