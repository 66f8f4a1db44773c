"""
Severity resolution for MeteOps.

This module contains pure functions that derive, per region,
the highest severity among the alerts active on a date.
"""

from datetime import date
from typing import Dict, Iterable, List, Optional
from .intervals import is_active_on
from .models import Alert, Severity

# 심각도 순서 정의 (낮음 -> 높음)
SEVERITY_ORDER = {
    "yellow": 0,
    "orange": 1,
    "red": 2,
}


def is_higher(candidate: Severity, current: Optional[Severity]) -> bool:
    """candidate가 current보다 엄격하게 높은지 확인합니다 (current가 없으면 True)."""
    if current is None:
        return True
    return SEVERITY_ORDER[candidate] > SEVERITY_ORDER[current]


def active_alerts_on(alerts: Iterable[Alert], day: date) -> List[Alert]:
    """주어진 날짜에 활성인 경보만 반환합니다."""
    return [a for a in alerts if is_active_on(a, day)]


def resolve_severities(alerts: Iterable[Alert], day: date) -> Dict[str, Severity]:
    """
    지역별 최고 심각도를 계산합니다.

    Args:
        alerts: 경보 목록
        day: 조회 날짜

    Returns:
        지역 ID -> 심각도 매핑. 활성 경보가 없는 지역은 포함되지 않음
    """
    severities: Dict[str, Severity] = {}

    for alert in active_alerts_on(alerts, day):
        for region_id in alert.region_ids:
            if is_higher(alert.severity, severities.get(region_id)):
                severities[region_id] = alert.severity

    return severities
