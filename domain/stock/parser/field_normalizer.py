"""
키움 API 응답 필드 정규화 유틸리티.

키움 REST 응답은 대부분의 숫자를 문자열로 내려주며 부호(+/-), 천 단위 구분자(,),
앞뒤 공백이 섞여 있거나 빈 문자열인 경우가 있습니다.
시각/일자는 "HHmmss" / "yyyyMMdd" 형태의 부분 문자열로만 제공됩니다.

정규화 정책:
- 숫자 파싱 실패는 예외를 던지지 않고 0 / 0.0 으로 대체합니다.
  한 필드가 잘못되었다고 레코드 전체를 버리지 않기 위함입니다.
- 시각/일자 파싱 실패는 현재 시각 / 오늘 날짜로 대체합니다.
- 시각 복원 시 날짜는 응답이 아닌 현재(벽시계) 날짜를 사용합니다.
  자정 직후 수집된 전일 체결 시각은 다음 날짜로 기록될 수 있습니다.
"""
from datetime import date, datetime
from typing import Any, Optional

from infrastructure.logging import get_logger

logger = get_logger(__name__)

_STRIP_CHARS = ('+', ',')


def _clean_numeric(raw: Any) -> Optional[str]:
    if raw is None:
        return None
    text = str(raw)
    for ch in _STRIP_CHARS:
        text = text.replace(ch, '')
    text = text.strip()
    return text or None


def parse_int(raw: Any) -> int:
    """부호/구분자가 섞인 문자열을 정수로 변환합니다. 실패 시 0."""
    text = _clean_numeric(raw)
    if text is None:
        return 0
    try:
        return int(text)
    except ValueError:
        # "1234.0" 처럼 소수점이 붙어 오는 정수 필드
        try:
            return int(float(text))
        except (ValueError, OverflowError):
            return 0


def parse_float(raw: Any) -> float:
    """부호/구분자가 섞인 문자열을 실수로 변환합니다. 실패 시 0.0."""
    text = _clean_numeric(raw)
    if text is None:
        return 0.0
    try:
        return float(text)
    except ValueError:
        return 0.0


def parse_str(raw: Any) -> str:
    if raw is None:
        return ''
    return str(raw).strip()


def reconstruct_time(hhmmss: Any, now: Optional[datetime] = None) -> datetime:
    """
    "HHmmss" 문자열을 현재 날짜와 결합해 datetime으로 복원합니다.

    Args:
        hhmmss: 6자리 시각 문자열 (예: "093015")
        now: 기준 시각. 생략하면 datetime.now()

    Returns:
        datetime: 기준 날짜 + 파싱된 시각. 값이 없거나 형식이 맞지 않으면 기준 시각 그대로.
    """
    now = now or datetime.now()
    text = parse_str(hhmmss)
    if len(text) != 6:
        return now
    try:
        parsed = datetime.strptime(text, '%H%M%S').time()
    except ValueError:
        logger.warning(f"Failed to parse time: {text}")
        return now
    return datetime.combine(now.date(), parsed)


def reconstruct_date(yyyymmdd: Any, today: Optional[date] = None) -> date:
    """
    "yyyyMMdd" 문자열을 date로 변환합니다. 값이 없거나 형식이 맞지 않으면 오늘 날짜.
    """
    today = today or date.today()
    text = parse_str(yyyymmdd)
    if len(text) != 8:
        return today
    try:
        return datetime.strptime(text, '%Y%m%d').date()
    except ValueError:
        logger.warning(f"Failed to parse date: {text}")
        return today


def format_date(value: date) -> str:
    """요청 본문에 사용하는 yyyyMMdd 형식."""
    return value.strftime('%Y%m%d')
