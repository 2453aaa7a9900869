import threading
from contextlib import contextmanager
from dataclasses import asdict, fields
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Type

import pandas as pd
from sqlalchemy.exc import IntegrityError

from domain.stock.models import (
    StockDailyCandle as DomainStockDailyCandle,
    StockInvestor as DomainStockInvestor,
    StockOrderBook as DomainStockOrderBook,
    StockPriceInfo as DomainStockPriceInfo,
)
from domain.stock.repository.stock_data_repository import StockDataRepository
from infrastructure.db.db_manager import get_db
from infrastructure.db.models import (
    StockDailyCandle as DbStockDailyCandle,
    StockInvestor as DbStockInvestor,
    StockOrderBook as DbStockOrderBook,
    StockPriceInfo as DbStockPriceInfo,
)
from infrastructure.logging import get_logger

logger = get_logger(__name__)


def _to_domain(row: Any, domain_cls: Type) -> Any:
    return domain_cls(**{f.name: getattr(row, f.name) for f in fields(domain_cls)})


class SQLStockDataRepository(StockDataRepository):
    """StockDataRepository의 SQLAlchemy 구현체입니다."""

    # 같은 프로세스 안에서 "존재 확인 -> 저장"이 겹치지 않도록 보호합니다.
    _write_lock = threading.Lock()

    def __init__(self, session_factory=None):
        # 세션을 생성자에 주입하는 대신, 각 메소드에서 get_db() 컨텍스트 매니저를 사용합니다.
        self.session_factory = session_factory

    @contextmanager
    def transaction(self):
        """데이터베이스 트랜잭션 컨텍스트를 제공합니다."""
        with get_db(self.session_factory) as session:
            try:
                yield session
                session.commit()
            except Exception:
                session.rollback()
                raise

    def _insert_if_absent(self, model, criteria: Dict[str, Any], values: Dict[str, Any]) -> bool:
        """criteria에 해당하는 행이 없을 때만 저장합니다. 저장했으면 True."""
        with self._write_lock:
            try:
                with self.transaction() as session:
                    if session.query(model.id).filter_by(**criteria).first() is not None:
                        return False
                    session.add(model(**values))
                return True
            except IntegrityError:
                # 다른 프로세스가 먼저 저장한 경우 (유니크 제약)
                logger.debug(f"Unique constraint hit for {model.__tablename__} {criteria}, treated as duplicate.")
                return False

    # --- 저장 ---

    def save_price_infos(self, price_infos: List[DomainStockPriceInfo]) -> int:
        saved = 0
        for info in price_infos:
            criteria = {'stock_code': info.stock_code, 'time': info.time}
            if self._insert_if_absent(DbStockPriceInfo, criteria, asdict(info)):
                saved += 1
            else:
                logger.debug(f"Skipping duplicate StockPriceInfo for {info.stock_code} at {info.time}")
        return saved

    def save_order_book(self, order_book: DomainStockOrderBook) -> None:
        with self.transaction() as session:
            session.add(DbStockOrderBook(**asdict(order_book)))

    def save_daily_candles(self, candles: List[DomainStockDailyCandle]) -> int:
        saved = 0
        for candle in candles:
            criteria = {'stock_code': candle.stock_code, 'date': candle.date}
            if self._insert_if_absent(DbStockDailyCandle, criteria, asdict(candle)):
                saved += 1
            else:
                logger.debug(f"Skipping duplicate StockDailyCandle for {candle.stock_code} at {candle.date}")
        return saved

    def save_investors(self, investors: List[DomainStockInvestor]) -> int:
        """투자자 정보는 수집 시각이 매번 다르므로 중복 체크 없이 저장합니다."""
        if not investors:
            return 0
        with self.transaction() as session:
            session.add_all([DbStockInvestor(**asdict(investor)) for investor in investors])
        return len(investors)

    # --- 존재 여부 ---

    def exists_price_info(self, stock_code: str, time: datetime) -> bool:
        with get_db(self.session_factory) as session:
            return session.query(DbStockPriceInfo.id).filter_by(stock_code=stock_code, time=time).first() is not None

    def exists_daily_candle(self, stock_code: str, candle_date: date) -> bool:
        with get_db(self.session_factory) as session:
            return session.query(DbStockDailyCandle.id).filter_by(stock_code=stock_code, date=candle_date).first() is not None

    # --- 조회 ---

    def get_stock_codes(self) -> List[str]:
        """수집된 종목코드 목록 (중복 제거, 정렬)."""
        with get_db(self.session_factory) as session:
            rows = session.query(DbStockPriceInfo.stock_code).distinct().order_by(DbStockPriceInfo.stock_code).all()
            return [row.stock_code for row in rows]

    def get_latest_price_info(self, stock_code: str) -> Optional[DomainStockPriceInfo]:
        with get_db(self.session_factory) as session:
            row = (
                session.query(DbStockPriceInfo)
                .filter(DbStockPriceInfo.stock_code == stock_code)
                .order_by(DbStockPriceInfo.time.desc())
                .first()
            )
            return _to_domain(row, DomainStockPriceInfo) if row else None

    def get_price_infos(self, stock_code: Optional[str] = None) -> List[DomainStockPriceInfo]:
        """시간 오름차순 시세 목록. stock_code가 없으면 전체 종목."""
        with get_db(self.session_factory) as session:
            query = session.query(DbStockPriceInfo)
            if stock_code:
                query = query.filter(DbStockPriceInfo.stock_code == stock_code)
            rows = query.order_by(DbStockPriceInfo.time.asc()).all()
            return [_to_domain(row, DomainStockPriceInfo) for row in rows]

    def get_price_series(self, stock_code: str) -> pd.DataFrame:
        """종목의 시세 이력을 time 인덱스 DataFrame으로 반환합니다."""
        price_infos = self.get_price_infos(stock_code)
        if not price_infos:
            return pd.DataFrame()
        df = pd.DataFrame([asdict(info) for info in price_infos])
        return df.set_index('time').sort_index()

    def get_order_books(self, stock_code: Optional[str] = None) -> List[DomainStockOrderBook]:
        with get_db(self.session_factory) as session:
            query = session.query(DbStockOrderBook)
            if stock_code:
                query = query.filter(DbStockOrderBook.stock_code == stock_code)
            rows = query.order_by(DbStockOrderBook.time.asc(), DbStockOrderBook.id.asc()).all()
            return [_to_domain(row, DomainStockOrderBook) for row in rows]

    def get_daily_candles(self, stock_code: str) -> List[DomainStockDailyCandle]:
        with get_db(self.session_factory) as session:
            rows = (
                session.query(DbStockDailyCandle)
                .filter(DbStockDailyCandle.stock_code == stock_code)
                .order_by(DbStockDailyCandle.date.asc())
                .all()
            )
            return [_to_domain(row, DomainStockDailyCandle) for row in rows]

    def get_investors(self, stock_code: Optional[str] = None) -> List[DomainStockInvestor]:
        with get_db(self.session_factory) as session:
            query = session.query(DbStockInvestor)
            if stock_code:
                query = query.filter(DbStockInvestor.stock_code == stock_code)
            rows = query.order_by(DbStockInvestor.time.asc(), DbStockInvestor.id.asc()).all()
            return [_to_domain(row, DomainStockInvestor) for row in rows]
