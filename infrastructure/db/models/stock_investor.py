from sqlalchemy import Column, Integer, String, Float, Date, DateTime, BigInteger

from infrastructure.db.db_manager import Base


class StockInvestor(Base):
    """
    종목별 투자자/기관별 순매수(ka10059) 데이터.
    수집 시각(time)이 매번 달라지므로 중복 체크 없이 누적 저장합니다.
    """
    __tablename__ = 'stock_investor'

    id = Column(Integer, primary_key=True, autoincrement=True)
    time = Column(DateTime, nullable=False)  # 수집 시간
    stock_code = Column(String(20), nullable=False, index=True)
    date = Column(Date, nullable=False)  # 일자 (dt)

    current_price = Column(BigInteger, default=0)  # 현재가 (cur_prc)
    change_from_prev = Column(BigInteger, default=0)  # 전일대비 (pred_pre)
    fluctuation_rate = Column(Float, default=0.0)  # 등락율 (flu_rt)
    volume = Column(BigInteger, default=0)  # 누적거래량 (acc_trde_qty)
    trading_value = Column(BigInteger, default=0)  # 누적거래대금 (acc_trde_prica)

    individual = Column(BigInteger, default=0)  # 개인투자자 (ind_invsr)
    foreigner = Column(BigInteger, default=0)  # 외국인투자자 (frgnr_invsr)
    institution = Column(BigInteger, default=0)  # 기관계 (orgn)
    financial_investment = Column(BigInteger, default=0)  # 금융투자 (fnnc_invt)
    insurance = Column(BigInteger, default=0)  # 보험 (insrnc)
    investment_trust = Column(BigInteger, default=0)  # 투신 (invtrt)
    etc_finance = Column(BigInteger, default=0)  # 기타금융 (etc_fnnc)
    bank = Column(BigInteger, default=0)  # 은행 (bank)
    pension_fund = Column(BigInteger, default=0)  # 연기금등 (penfnd_etc)
    private_fund = Column(BigInteger, default=0)  # 사모펀드 (samo_fund)
    nation = Column(BigInteger, default=0)  # 국가 (natn)
    etc_corp = Column(BigInteger, default=0)  # 기타법인 (etc_corp)
    foreign_national = Column(BigInteger, default=0)  # 내외국인 (natfor)
