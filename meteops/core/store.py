"""
In-memory alert store for MeteOps.

This module implements the alert collection keyed by id. The store,
not the caller, owns version and timestamp on update.
"""

import threading
from datetime import datetime
from typing import Callable, Dict, Iterable, List, Optional, Tuple
from .models import ALERT_STATUSES, Alert, AlertStatus
from meteops.observability.logging_setup import get_logger

log = get_logger("meteops.store")


def filter_by_status(records: Iterable[Alert], status: AlertStatus) -> List[Alert]:
    """주어진 상태의 경보만 반환합니다."""
    return [r for r in records if r.status == status]


def group_by_status(records: Iterable[Alert]) -> Dict[str, List[Alert]]:
    """
    경보를 draft/active/expired 그룹으로 나눕니다.

    모든 경보는 정확히 하나의 그룹에 포함됩니다.
    """
    groups: Dict[str, List[Alert]] = {status: [] for status in ALERT_STATUSES}
    for r in records:
        groups[r.status].append(r)
    return groups


class AlertStore:
    """메모리 기반 경보 저장소"""

    def __init__(self,
                 alerts: Optional[Iterable[Alert]] = None,
                 *,
                 clock: Callable[[], datetime] = datetime.now):
        """
        초기화합니다.

        Args:
            alerts: 초기 경보 목록
            clock: 수정 시각 공급자
        """
        self._items: Dict[str, Alert] = {}
        self._clock = clock
        # save의 버전 증가는 읽기-수정-쓰기이므로 잠금 필요
        self._lock = threading.RLock()

        for alert in alerts or ():
            self._items[alert.id] = alert

        log.info(f"AlertStore 초기화: {len(self._items)}건")

    def save(self, alert: Alert) -> Alert:
        """
        경보를 저장합니다.

        새 ID면 그대로 삽입하고, 기존 ID면 교체하면서
        version = 기존 version + 1, last_updated = 현재 시각으로 설정합니다.

        Returns:
            저장된 경보
        """
        stored, _ = self.upsert(alert)
        return stored

    def upsert(self, alert: Alert) -> Tuple[Alert, bool]:
        """save와 같으며, 기존 경보를 교체했는지 여부를 함께 반환합니다."""
        with self._lock:
            existing = self._items.get(alert.id)
            if existing is None:
                stored = alert
                log.info(f"경보 추가 id:{alert.id} version:{alert.version}")
            else:
                stored = alert.model_copy(update={
                    "version": existing.version + 1,
                    "last_updated": self._clock(),
                })
                log.info(f"경보 교체 id:{alert.id} version:{existing.version}->{stored.version}")
            self._items[alert.id] = stored
            return stored, existing is not None

    def delete(self, alert_id: str) -> bool:
        """경보를 삭제합니다. 없는 ID는 무시하고 False를 반환합니다."""
        with self._lock:
            removed = self._items.pop(alert_id, None)
        if removed is None:
            log.debug(f"삭제할 경보 없음 id:{alert_id}")
            return False
        log.info(f"경보 삭제 id:{alert_id}")
        return True

    def get(self, alert_id: str) -> Optional[Alert]:
        return self._items.get(alert_id)

    def all(self) -> List[Alert]:
        with self._lock:
            return list(self._items.values())

    def list_by_country(self, country_id: str) -> List[Alert]:
        """국가에 속한 경보 목록을 반환합니다."""
        return [a for a in self.all() if a.country_id == country_id]

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, alert_id: object) -> bool:
        return alert_id in self._items
