from dataclasses import dataclass
from datetime import date, datetime


@dataclass
class StockInvestor:
    """
    투자자 주체별 순매수 현황.
    time은 수집 시각, date는 응답에 포함된 거래 일자입니다.
    """
    time: datetime
    stock_code: str
    date: date
    current_price: int = 0
    change_from_prev: int = 0
    fluctuation_rate: float = 0.0
    volume: int = 0
    trading_value: int = 0

    individual: int = 0  # 개인
    foreigner: int = 0  # 외국인
    institution: int = 0  # 기관계
    financial_investment: int = 0  # 금융투자
    insurance: int = 0  # 보험
    investment_trust: int = 0  # 투신
    etc_finance: int = 0  # 기타금융
    bank: int = 0  # 은행
    pension_fund: int = 0  # 연기금등
    private_fund: int = 0  # 사모펀드
    nation: int = 0  # 국가
    etc_corp: int = 0  # 기타법인
    foreign_national: int = 0  # 내외국인
