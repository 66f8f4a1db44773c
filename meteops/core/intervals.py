"""
Interval matching for MeteOps.

This module contains pure functions deciding whether an alert
is active on a given calendar day.
"""

from datetime import date, datetime
from .models import Alert


def start_of_day(value: date) -> date:
    """시각 정보를 버리고 달력 날짜만 반환합니다."""
    if isinstance(value, datetime):
        return value.date()
    return value


def is_active_on(alert: Alert, day: date) -> bool:
    """
    경보가 주어진 날짜에 활성 상태인지 판단합니다.

    Args:
        alert: 판단할 경보
        day: 조회 날짜 (시각은 무시)

    Returns:
        from <= day <= to 이면 True, 초안 경보는 항상 False
    """
    if alert.status == "draft":
        return False

    start = start_of_day(alert.event_dates.from_)
    end = start_of_day(alert.event_dates.to) if alert.event_dates.to else start
    # 역전된 기간(to < from)은 어떤 날짜에도 참이 될 수 없음
    return start <= start_of_day(day) <= end
