from contextlib import contextmanager
from dataclasses import asdict, fields
from typing import Optional

from domain.account.models import AccountInfo as DomainAccountInfo, AccountStockInfo as DomainAccountStockInfo
from domain.account.repository.account_repository import AccountRepository
from infrastructure.db.db_manager import get_db
from infrastructure.db.models import AccountInfo as DbAccountInfo, AccountStockInfo as DbAccountStockInfo
from infrastructure.logging import get_logger

logger = get_logger(__name__)


class SQLAccountRepository(AccountRepository):
    """AccountRepository의 SQLAlchemy 구현체입니다."""

    def __init__(self, session_factory=None):
        self.session_factory = session_factory

    @contextmanager
    def transaction(self):
        with get_db(self.session_factory) as session:
            try:
                yield session
                session.commit()
            except Exception as e:
                logger.error(f"Transaction failed, rolling back. Error: {e}", exc_info=True)
                session.rollback()
                raise

    def replace_account_info(self, account_info: DomainAccountInfo) -> DomainAccountInfo:
        """delete-all 후 insert를 하나의 트랜잭션으로 수행합니다."""
        values = asdict(account_info)
        stock_values = values.pop('stock_infos')

        with self.transaction() as session:
            session.query(DbAccountStockInfo).delete(synchronize_session=False)
            session.query(DbAccountInfo).delete(synchronize_session=False)

            db_account = DbAccountInfo(**values)
            db_account.stock_infos = [DbAccountStockInfo(**stock) for stock in stock_values]
            session.add(db_account)

        logger.info(f"Account snapshot replaced for '{account_info.account_name}' ({len(stock_values)} holdings).")
        return account_info

    def get_account_info(self) -> Optional[DomainAccountInfo]:
        with get_db(self.session_factory) as session:
            row = session.query(DbAccountInfo).order_by(DbAccountInfo.id.desc()).first()
            if row is None:
                return None
            stock_infos = [
                DomainAccountStockInfo(**{f.name: getattr(stock, f.name) for f in fields(DomainAccountStockInfo)})
                for stock in row.stock_infos
            ]
            values = {f.name: getattr(row, f.name) for f in fields(DomainAccountInfo) if f.name != 'stock_infos'}
            return DomainAccountInfo(stock_infos=stock_infos, **values)
