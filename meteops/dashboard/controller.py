"""
Dashboard controller for MeteOps.

This module holds the dashboard's state in one explicit container and
derives the map severities, statistics and alert lists from it on demand
with the pure selectors of the core package.
"""

import functools
import threading
from datetime import date, datetime, timedelta
from typing import Callable, Dict, List, Optional
from pydantic import BaseModel, Field
from meteops.core.errors import AlertValidationError
from meteops.core.intervals import start_of_day
from meteops.core.models import Alert, Country, EventDates, JustificationInput, JustificationResult, Severity, Stats
from meteops.core.severity import active_alerts_on, resolve_severities
from meteops.core.stats import aggregate_stats
from meteops.core.store import AlertStore, group_by_status
from meteops.observability import metrics
from meteops.observability.logging_setup import get_logger
from meteops.ports.justification import JustificationPort
from meteops.ports.reference_data import ReferenceDataPort
from .actions import suggest_justification_action

log = get_logger("meteops.dashboard")


def _locked(method):
    """핸들러를 컨트롤러 잠금 안에서 실행"""
    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        with self._lock:
            return method(self, *args, **kwargs)
    return wrapper


class DashboardState(BaseModel):
    """대시보드 상태"""
    selected_country_id: str
    selected_region_ids: List[str] = Field(default_factory=list)
    selected_alert_id: Optional[str] = None
    is_creating_new: bool = False
    current_date: date


class AlertForm(BaseModel):
    """경보 편집 폼 값"""
    event_type: str = Field(min_length=2)
    severity: Severity = "yellow"
    push_date_time: datetime
    event_date_from: datetime
    event_date_to: Optional[datetime] = None
    justification: str = Field(min_length=10)
    image_url: Optional[str] = None


class DashboardSnapshot(BaseModel):
    """렌더링 계층에 넘기는 파생 상태 묶음"""
    country: Country
    current_date: date
    selected_region_ids: List[str]
    selected_alert: Optional[Alert]
    is_creating_new: bool
    can_select_regions: bool
    alerts_by_status: Dict[str, List[Alert]]
    region_severities: Dict[str, Severity]
    stats: Optional[Stats]


class DashboardController:
    """대시보드 상태 컨테이너와 핸들러"""

    def __init__(self,
                 reference: ReferenceDataPort,
                 store: AlertStore,
                 *,
                 default_country_id: Optional[str] = None,
                 author: str = "MeteOps Lead",
                 today: Optional[date] = None,
                 clock: Callable[[], datetime] = datetime.now):
        """
        초기화합니다.

        Args:
            reference: 참조 데이터 포트
            store: 경보 저장소
            default_country_id: 초기 선택 국가 (없거나 모르는 ID면 첫 번째 국가)
            author: 새로 저장하는 경보의 작성자
            today: 초기 조회 날짜
            clock: 현재 시각 공급자
        """
        self.reference = reference
        self.store = store
        self.author = author
        self._clock = clock
        # HTTP 스레드풀에서 동시에 호출되는 핸들러의 상태 변경 직렬화
        self._lock = threading.RLock()

        countries = reference.countries()
        if not countries:
            raise ValueError("국가 데이터가 비어 있습니다")
        country = reference.find_country(default_country_id) if default_country_id else None
        country = country or countries[0]

        self.state = DashboardState(
            selected_country_id=country.id,
            current_date=start_of_day(today or clock()),
        )
        log.info(f"대시보드 초기화 country:{country.id} date:{self.state.current_date}")

    # ---- 핸들러 ----

    @_locked
    def change_date(self, days: int) -> date:
        """조회 날짜를 days만큼 이동합니다."""
        self.state.current_date = self.state.current_date + timedelta(days=days)
        return self.state.current_date

    @_locked
    def select_country(self, country_id: str) -> bool:
        """국가를 변경하고 선택 상태를 초기화합니다. 모르는 ID는 무시합니다."""
        country = self.reference.find_country(country_id)
        if country is None:
            log.warning(f"알 수 없는 국가 id:{country_id}")
            return False
        self.state.selected_country_id = country.id
        self.state.selected_region_ids = []
        self.state.selected_alert_id = None
        self.state.is_creating_new = False
        return True

    @_locked
    def select_alert(self, alert_id: Optional[str]) -> Optional[Alert]:
        """
        경보를 선택합니다.

        경보의 국가로 전환하고 해당 지역들을 선택합니다.
        None이면 선택과 지역 선택을 해제합니다.
        """
        alert = self.store.get(alert_id) if alert_id else None
        self.state.selected_alert_id = alert.id if alert else None
        if alert is None:
            self.state.selected_region_ids = []
            return None

        country = self.reference.find_country(alert.country_id)
        if country is not None:
            self.state.selected_country_id = country.id
            # 국가에 실제로 존재하는 지역만, 국가의 지역 순서대로
            self.state.selected_region_ids = [r.id for r in country.regions if r.id in alert.region_ids]
        else:
            self.state.selected_region_ids = []
        self.state.is_creating_new = False
        return alert

    @_locked
    def new_alert(self) -> None:
        """새 경보 작성을 시작합니다."""
        self.state.is_creating_new = True
        self.state.selected_alert_id = None
        self.state.selected_region_ids = []

    @_locked
    def toggle_region(self, region_id: str) -> bool:
        """
        지역 선택을 토글합니다.

        작성/편집 중이 아니거나 현재 국가의 지역이 아니면 무시합니다.

        Returns:
            상태가 변경되었는지 여부
        """
        if not self.can_select_regions():
            return False
        if self.country().region(region_id) is None:
            return False

        selected = self.state.selected_region_ids
        if region_id in selected:
            self.state.selected_region_ids = [r for r in selected if r != region_id]
        else:
            self.state.selected_region_ids = selected + [region_id]
        return True

    @_locked
    def save_alert(self, form: AlertForm) -> Alert:
        """
        폼 값과 현재 지역 선택으로 경보를 저장합니다.

        Raises:
            AlertValidationError: 선택된 지역이 없을 때
        """
        if not self.state.selected_region_ids:
            raise AlertValidationError("Please select at least one region on the map.")

        existing = self.selected_alert()
        now = self._clock()
        alert = Alert(
            id=existing.id if existing else self._new_alert_id(now),
            country_id=self.state.selected_country_id,
            region_ids=list(self.state.selected_region_ids),
            severity=form.severity,
            event_type=form.event_type,
            push_date_time=form.push_date_time,
            event_dates=EventDates(from_=form.event_date_from, to=form.event_date_to),
            justification=form.justification,
            image_url=form.image_url or None,
            status=existing.status if existing else "draft",
            author=self.author,
            last_updated=now,
            version=existing.version if existing else 1,
        )

        stored, replaced = self.store.upsert(alert)
        metrics.alerts_saved.labels(operation="update" if replaced else "insert").inc()
        metrics.alert_store_size.set(len(self.store))

        self.state.selected_alert_id = stored.id
        self.state.is_creating_new = False
        return stored

    @_locked
    def delete_alert(self, alert_id: str) -> bool:
        """경보를 삭제하고 선택을 해제합니다."""
        removed = self.store.delete(alert_id)
        if removed:
            metrics.alerts_deleted.inc()
            metrics.alert_store_size.set(len(self.store))
        self.state.selected_alert_id = None
        self.state.is_creating_new = False
        return removed

    async def suggest_justification(self,
                                    port: JustificationPort,
                                    *,
                                    event_type: str,
                                    severity: Severity,
                                    event_date: datetime,
                                    ensemble_forecasts: str) -> JustificationResult:
        """
        선택된 지역에 대한 근거 문구를 제안받습니다.

        Raises:
            AlertValidationError: 선택된 지역이 없을 때
        """
        with self._lock:
            if not self.state.selected_region_ids:
                raise AlertValidationError("Cannot suggest justification without selected regions.")
            country = self.country()
            names = [r.name for r in country.regions if r.id in self.state.selected_region_ids]

        data = JustificationInput(
            regions=names,
            eventDate=event_date.isoformat(),
            eventType=event_type,
            severity=severity,
            ensembleForecasts=ensemble_forecasts,
        )
        return await suggest_justification_action(port, data)

    # ---- 셀렉터 ----

    def country(self) -> Country:
        country = self.reference.find_country(self.state.selected_country_id)
        if country is None:
            raise LookupError(f"선택된 국가를 찾을 수 없습니다: {self.state.selected_country_id}")
        return country

    def selected_alert(self) -> Optional[Alert]:
        if self.state.selected_alert_id is None:
            return None
        return self.store.get(self.state.selected_alert_id)

    def can_select_regions(self) -> bool:
        return self.state.is_creating_new or self.selected_alert() is not None

    def country_alerts(self) -> List[Alert]:
        return self.store.list_by_country(self.state.selected_country_id)

    def alerts_by_status(self) -> Dict[str, List[Alert]]:
        return group_by_status(self.country_alerts())

    def active_alerts_on_date(self) -> List[Alert]:
        return active_alerts_on(self.country_alerts(), self.state.current_date)

    def region_severities(self) -> Dict[str, Severity]:
        with metrics.severity_seconds.time():
            return resolve_severities(self.country_alerts(), self.state.current_date)

    def current_stats(self) -> Optional[Stats]:
        day = self.state.current_date
        with metrics.aggregation_seconds.time():
            return aggregate_stats(
                self.state.selected_region_ids,
                self.state.selected_country_id,
                self.reference.stats_by_region_for_date(day),
                self.reference.national_stats_for_date(day),
            )

    @_locked
    def snapshot(self) -> DashboardSnapshot:
        return DashboardSnapshot(
            country=self.country(),
            current_date=self.state.current_date,
            selected_region_ids=list(self.state.selected_region_ids),
            selected_alert=self.selected_alert(),
            is_creating_new=self.state.is_creating_new,
            can_select_regions=self.can_select_regions(),
            alerts_by_status=self.alerts_by_status(),
            region_severities=self.region_severities(),
            stats=self.current_stats(),
        )

    def _new_alert_id(self, now: datetime) -> str:
        millis = int(now.timestamp() * 1000)
        # 같은 밀리초에 여러 건이 생기면 다음 값 사용
        while f"alert-{millis}" in self.store:
            millis += 1
        return f"alert-{millis}"
