import os

# 테스트는 항상 SQLite 메모리 DB를 사용합니다 (실제 MySQL 접속 방지).
os.environ["DATABASE_URL"] = "sqlite://"

import logging

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from infrastructure.db.db_manager import create_db_and_tables

# 로깅 메시지가 테스트 결과에 영향을 주지 않도록 설정
logging.basicConfig(level=logging.CRITICAL)


@pytest.fixture
def session_factory():
    """테이블이 생성된 SQLite 메모리 DB 세션 팩토리."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_db_and_tables(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    yield factory
    engine.dispose()
