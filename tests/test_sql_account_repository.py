import pytest

from domain.account.models import AccountInfo, AccountStockInfo
from infrastructure.db.repository import SQLAccountRepository


@pytest.fixture
def repository(session_factory):
    return SQLAccountRepository(session_factory=session_factory)


def _account(name, holdings):
    return AccountInfo(
        account_name=name,
        branch_name='본점',
        deposit=1000000,
        today_profit_rate=1.5,
        stock_infos=[AccountStockInfo(stock_code=code, stock_name=code, remain_qty=qty) for code, qty in holdings],
    )


def test_get_account_info_when_empty(repository):
    assert repository.get_account_info() is None


def test_replace_account_info_stores_snapshot(repository):
    repository.replace_account_info(_account('first', [('005930', 10), ('000660', 5)]))

    stored = repository.get_account_info()

    assert stored.account_name == 'first'
    assert stored.deposit == 1000000
    assert stored.today_profit_rate == pytest.approx(1.5)
    assert [(s.stock_code, s.remain_qty) for s in stored.stock_infos] == [('005930', 10), ('000660', 5)]


def test_replace_account_info_keeps_single_snapshot(repository, session_factory):
    from infrastructure.db.models import AccountInfo as DbAccountInfo, AccountStockInfo as DbAccountStockInfo

    repository.replace_account_info(_account('first', [('005930', 10), ('000660', 5)]))
    repository.replace_account_info(_account('second', [('122630', 3)]))

    stored = repository.get_account_info()
    assert stored.account_name == 'second'
    assert [s.stock_code for s in stored.stock_infos] == ['122630']

    session = session_factory()
    try:
        assert session.query(DbAccountInfo).count() == 1
        assert session.query(DbAccountStockInfo).count() == 1
    finally:
        session.close()
