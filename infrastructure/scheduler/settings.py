"""
APScheduler 작업의 모든 설정을 중앙에서 관리합니다.
Cron 표현식, 작업 ID, 이름 등을 이곳에서 정의합니다.
"""
from common.config.settings import MARKET_TIMEZONE

# --- 타임존 설정 ---
TIMEZONE = MARKET_TIMEZONE

# --- 장 운영 시간 ---
MARKET_OPEN = (9, 0)
MARKET_CLOSE = (15, 30)

# --- 작업별 설정 ---

# 1. 장중 시세 수집 작업 설정 (평일 09:00 ~ 15:59 매분, 15:30 이후는 작업 내부에서 건너뜀)
STOCK_DATA_COLLECTION_JOB = {
    'id': 'stock_data_collection_job',
    'name': 'Stock Data Collection (Every Minute)',
    'cron': {
        'day_of_week': 'mon-fri',
        'hour': '9-15',
        'minute': '*'
    }
}

# 2. 계좌평가현황 갱신 작업 설정
ACCOUNT_UPDATE_JOB = {
    'id': 'account_update_job',
    'name': 'Account Snapshot Update',
    'cron': {
        'day_of_week': 'mon-fri',
        'hour': '8-16',
        'minute': '*/30'
    }
}
