"""
테스트 설정 및 픽스처

이 모듈은 pytest 설정과 공통 픽스처를 제공합니다.
"""

import pytest
import asyncio
from datetime import datetime, timedelta
from unittest.mock import AsyncMock
from meteops.settings import Settings
from meteops.adapters.mock_data import MockDataSource
from meteops.core.models import Alert, EventDates, UserStats
from meteops.core.store import AlertStore

# 모든 테스트의 기준 시각
FIXED_NOW = datetime(2024, 8, 16, 9, 30, 0)


def make_alert(alert_id="alert-x", *, country_id="colombia", region_ids=("macro-1",),
               severity="orange", status="active", start=None, end=None, version=1, **extra):
    """테스트용 경보 생성 헬퍼"""
    start = start or FIXED_NOW
    return Alert(
        id=alert_id,
        country_id=country_id,
        region_ids=list(region_ids),
        severity=severity,
        event_type=extra.pop("event_type", "Heavy Rainfall"),
        push_date_time=extra.pop("push_date_time", start - timedelta(days=1)),
        event_dates=EventDates(from_=start, to=end),
        justification=extra.pop("justification", "Models predict heavy rain over the region."),
        status=status,
        author=extra.pop("author", "Tester"),
        last_updated=extra.pop("last_updated", start - timedelta(days=2)),
        version=version,
        **extra,
    )


def bucket(green, yellow, orange, red, total=None):
    """UserStats 생성 헬퍼 (total 생략 시 합계)"""
    if total is None:
        total = green + yellow + orange + red
    return UserStats(green=green, yellow=yellow, orange=orange, red=red, total=total)


@pytest.fixture
def fixed_now():
    return FIXED_NOW


@pytest.fixture
def sample_settings():
    """테스트용 설정"""
    settings = Settings()
    settings.observability.service_name = "test-service"
    settings.observability.build_version = "1.0.0"
    settings.observability.log_level = "INFO"
    settings.observability.http_port = 8080
    settings.genai.api_key = "test-key"
    return settings


@pytest.fixture
def mock_source():
    """기준 시각이 고정된 MockDataSource"""
    return MockDataSource(today=FIXED_NOW)


@pytest.fixture
def seeded_store(mock_source):
    """초기 경보 3건이 들어있는 저장소"""
    return AlertStore(mock_source.initial_alerts(), clock=lambda: FIXED_NOW + timedelta(hours=1))


@pytest.fixture
def mock_justification_port():
    """테스트용 AI 근거 문구 포트"""
    return AsyncMock()


# pytest 설정
def pytest_configure(config):
    """pytest 설정"""
    config.addinivalue_line(
        "markers", "slow: 느린 테스트 마커"
    )
    config.addinivalue_line(
        "markers", "integration: 통합 테스트 마커"
    )


def pytest_collection_modifyitems(config, items):
    """테스트 아이템 수정"""
    for item in items:
        # 비동기 테스트에 asyncio 마커 추가
        if asyncio.iscoroutinefunction(getattr(item, "function", None)):
            item.add_marker(pytest.mark.asyncio)

        # 통합 테스트 마커 추가
        if "integration" in item.name:
            item.add_marker(pytest.mark.integration)
