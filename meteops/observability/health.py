"""
HTTP endpoints for MeteOps.

This module implements health, readiness, metrics, and info endpoints
for operational visibility, together with the alert, severity, stats
and AI suggestion endpoints the dashboard front end consumes.
"""

from datetime import date, datetime
from typing import Callable, Optional
from pydantic import BaseModel
from fastapi import Body, FastAPI, HTTPException, Query
from fastapi.responses import JSONResponse, Response
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
import time
from meteops.settings import Settings
from meteops.adapters.genai.client import JustificationClient
from meteops.adapters.mock_data import MockDataSource
from meteops.core.models import Alert, JustificationInput, Severity, SuggestedEditsInput
from meteops.core.severity import resolve_severities
from meteops.core.stats import aggregate_stats
from meteops.core.store import AlertStore, group_by_status
from meteops.core.errors import AlertValidationError
from meteops.dashboard.actions import suggest_justification_action
from meteops.dashboard.controller import AlertForm, DashboardController
from meteops.observability import metrics
from meteops.observability.logging_setup import get_logger
from meteops.ports.reference_data import ReferenceDataPort

log = get_logger("meteops.http")

class SuggestRequest(BaseModel):
    """대시보드 근거 문구 제안 요청 (폼의 현재 값)"""
    event_type: str
    severity: Severity = "yellow"
    event_date_from: datetime

def _dump(model) -> dict:
    return model.model_dump(mode="json", by_alias=True)

def create_app(settings: Settings,
               *,
               reference: Optional[ReferenceDataPort] = None,
               store: Optional[AlertStore] = None,
               justification_factory: Optional[Callable] = None) -> FastAPI:
    """
    FastAPI 애플리케이션을 생성합니다.

    Args:
        settings: 애플리케이션 설정
        reference: 참조 데이터 포트 (None이면 MockDataSource)
        store: 경보 저장소 (None이면 참조 데이터의 초기 경보로 생성)
        justification_factory: AI 클라이언트 팩토리 (async 컨텍스트 매니저 반환)
    """
    app = FastAPI(
        title=settings.observability.service_name,
        version=settings.observability.build_version,
        description="MeteOps Weather Alert Dashboard Service"
    )

    reference = reference or MockDataSource()
    store = store if store is not None else AlertStore(reference.initial_alerts())
    metrics.alert_store_size.set(len(store))

    def _default_factory():
        return JustificationClient(
            settings.genai.base_url,
            settings.genai.api_key,
            settings.genai.model,
            settings.genai.timeout_sec,
        )

    make_client = justification_factory or _default_factory

    controller = DashboardController(
        reference,
        store,
        default_country_id=settings.dashboard.default_country_id,
        author=settings.dashboard.author,
    )

    app.state.reference = reference
    app.state.store = store
    app.state.controller = controller

    start_time = time.time()

    def _require_country(country_id: str):
        country = reference.find_country(country_id)
        if country is None:
            raise HTTPException(status_code=404, detail=f"Unknown country: {country_id}")
        return country

    @app.get("/health")
    async def health():
        """헬스 체크 엔드포인트"""
        return JSONResponse({
            "status": "ok",
            "service": settings.observability.service_name,
            "timestamp": time.time()
        })

    @app.get("/ready")
    async def ready():
        """레디니스 체크 엔드포인트"""
        return JSONResponse({
            "status": "ready",
            "service": settings.observability.service_name,
            "alerts": len(store),
            "timestamp": time.time()
        })

    @app.get("/metrics")
    async def prometheus_metrics():
        """Prometheus 메트릭 엔드포인트"""
        if not settings.observability.metrics_enabled:
            raise HTTPException(status_code=503, detail="Metrics disabled")

        metrics.uptime_seconds.set(time.time() - start_time)
        return Response(
            generate_latest(),
            media_type=CONTENT_TYPE_LATEST
        )

    @app.get("/info")
    async def info():
        """서비스 정보 엔드포인트"""
        uptime = time.time() - start_time
        return JSONResponse({
            "service": settings.observability.service_name,
            "version": settings.observability.build_version,
            "build_date": settings.observability.build_date,
            "uptime_seconds": int(uptime),
            "metrics_enabled": settings.observability.metrics_enabled,
            "log_level": settings.observability.log_level,
            "genai_model": settings.genai.model
        })

    @app.get("/countries")
    def countries():
        """국가와 지역 목록"""
        return JSONResponse([_dump(c) for c in reference.countries()])

    @app.get("/providers")
    def providers():
        """예보 제공자 목록"""
        return JSONResponse([_dump(p) for p in reference.providers()])

    @app.get("/alerts")
    def list_alerts(country_id: str = Query(..., alias="countryId")):
        """국가별 경보를 상태별로 묶어 반환합니다."""
        _require_country(country_id)
        groups = group_by_status(store.list_by_country(country_id))
        return JSONResponse({status: [_dump(a) for a in items] for status, items in groups.items()})

    @app.get("/alerts/{alert_id}")
    def get_alert(alert_id: str):
        alert = store.get(alert_id)
        if alert is None:
            raise HTTPException(status_code=404, detail=f"Unknown alert: {alert_id}")
        return JSONResponse(_dump(alert))

    @app.post("/alerts")
    def save_alert(alert: Alert):
        """경보 저장 (신규 삽입 또는 교체)"""
        stored, existed = store.upsert(alert)
        metrics.alerts_saved.labels(operation="update" if existed else "insert").inc()
        metrics.alert_store_size.set(len(store))
        return JSONResponse(_dump(stored), status_code=200 if existed else 201)

    @app.delete("/alerts/{alert_id}", status_code=204)
    def delete_alert(alert_id: str):
        """경보 삭제 (없는 ID는 무시)"""
        if store.delete(alert_id):
            metrics.alerts_deleted.inc()
            metrics.alert_store_size.set(len(store))
        return Response(status_code=204)

    @app.get("/severities")
    def severities(country_id: str = Query(..., alias="countryId"),
                   day: Optional[date] = Query(None, alias="date")):
        """날짜 기준 지역별 최고 심각도"""
        _require_country(country_id)
        with metrics.severity_seconds.time():
            result = resolve_severities(store.list_by_country(country_id), day or datetime.now().date())
        return JSONResponse(result)

    @app.get("/stats")
    def stats(country_id: str = Query(..., alias="countryId"),
              day: Optional[date] = Query(None, alias="date"),
              region_ids: str = Query("", alias="regionIds")):
        """선택 지역(쉼표 구분) 또는 전국 통계. 데이터가 없으면 null"""
        day = day or datetime.now().date()
        country = reference.find_country(country_id)
        if country is None:
            return JSONResponse(None)
        # 선택은 집합: 중복 제거, 입력 순서 유지
        selected = list(dict.fromkeys(r for r in (s.strip() for s in region_ids.split(",")) if r))
        foreign = [r for r in selected if country.region(r) is None]
        if foreign:
            raise HTTPException(status_code=422, detail=f"Regions not in {country_id}: {', '.join(foreign)}")
        with metrics.aggregation_seconds.time():
            result = aggregate_stats(
                selected,
                country_id,
                reference.stats_by_region_for_date(day),
                reference.national_stats_for_date(day),
            )
        if result is None:
            return JSONResponse(None)
        return JSONResponse({provider: _dump(bucket) for provider, bucket in result.items()})

    @app.post("/justification/suggest")
    async def suggest_justification(data: JustificationInput):
        """AI 근거 문구 제안 (실패는 success=false로 반환)"""
        if not data.regions:
            raise HTTPException(status_code=422, detail="Cannot suggest justification without selected regions.")
        async with make_client() as client:
            result = await suggest_justification_action(client, data)
        return JSONResponse(result.model_dump())

    @app.post("/justification/edits")
    async def suggested_edits(data: SuggestedEditsInput = Body(...)):
        """갱신된 예보 기반 수정 제안"""
        try:
            async with make_client() as client:
                result = await client.highlight_suggested_edits(data)
        except Exception as e:
            log.error(f"수정 제안 실패 error:{e}")
            metrics.justification_requests.labels(kind="edits", outcome="error").inc()
            raise HTTPException(status_code=502, detail="Failed to suggest edits.")
        metrics.justification_requests.labels(kind="edits", outcome="ok").inc()
        return JSONResponse(result.model_dump())

    # ---- 단일 운영자 대시보드 세션 ----

    def _snapshot_response():
        return JSONResponse(_dump(controller.snapshot()))

    @app.get("/dashboard")
    def dashboard_snapshot():
        """현재 대시보드 상태와 파생 데이터"""
        return _snapshot_response()

    @app.post("/dashboard/date")
    def dashboard_change_date(days: int = Query(...)):
        controller.change_date(days)
        return _snapshot_response()

    @app.post("/dashboard/country/{country_id}")
    def dashboard_select_country(country_id: str):
        if not controller.select_country(country_id):
            raise HTTPException(status_code=404, detail=f"Unknown country: {country_id}")
        return _snapshot_response()

    @app.post("/dashboard/select")
    def dashboard_select_alert(alert_id: Optional[str] = Query(None, alias="alertId")):
        controller.select_alert(alert_id)
        return _snapshot_response()

    @app.post("/dashboard/new")
    def dashboard_new_alert():
        controller.new_alert()
        return _snapshot_response()

    @app.post("/dashboard/regions/{region_id}/toggle")
    def dashboard_toggle_region(region_id: str):
        controller.toggle_region(region_id)
        return _snapshot_response()

    @app.post("/dashboard/save")
    def dashboard_save(form: AlertForm):
        try:
            controller.save_alert(form)
        except AlertValidationError as e:
            raise HTTPException(status_code=422, detail=str(e))
        return _snapshot_response()

    @app.post("/dashboard/delete/{alert_id}")
    def dashboard_delete(alert_id: str):
        controller.delete_alert(alert_id)
        return _snapshot_response()

    @app.post("/dashboard/suggest")
    async def dashboard_suggest(form: SuggestRequest):
        """선택 지역과 폼 값으로 근거 문구 제안"""
        try:
            async with make_client() as client:
                result = await controller.suggest_justification(
                    client,
                    event_type=form.event_type,
                    severity=form.severity,
                    event_date=form.event_date_from,
                    ensemble_forecasts=settings.dashboard.ensemble_forecasts,
                )
        except AlertValidationError as e:
            raise HTTPException(status_code=422, detail=str(e))
        return JSONResponse(result.model_dump())

    @app.get("/")
    async def root():
        """루트 엔드포인트"""
        return JSONResponse({
            "service": settings.observability.service_name,
            "version": settings.observability.build_version,
            "endpoints": {
                "health": "/health",
                "ready": "/ready",
                "metrics": "/metrics",
                "info": "/info",
                "countries": "/countries",
                "providers": "/providers",
                "alerts": "/alerts",
                "severities": "/severities",
                "stats": "/stats",
                "justification": "/justification/suggest",
                "edits": "/justification/edits",
                "dashboard": "/dashboard"
            }
        })

    return app
