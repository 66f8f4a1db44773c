"""
MockDataSource 단위 테스트

이 모듈은 메모리 참조 데이터(국가, 경보, 날짜별 통계)를 테스트합니다.
"""

import pytest
from datetime import date, timedelta

from meteops.adapters.mock_data import MockDataSource, day_multiplier, grid_path, vary_for_date
from meteops.core.models import UserStats
from conftest import FIXED_NOW


class TestCountries:
    """국가/지역 데이터 테스트"""

    def test_countries(self, mock_source):
        ids = [c.id for c in mock_source.countries()]
        assert ids == ["colombia", "kenya"]

    def test_region_counts(self, mock_source):
        assert len(mock_source.find_country("colombia").regions) == 21
        assert len(mock_source.find_country("kenya").regions) == 5

    def test_unknown_country(self, mock_source):
        assert mock_source.find_country("peru") is None

    def test_grid_path(self):
        """3열 그리드 경로"""
        assert grid_path(0, 3) == "M10,10 h120 v25 h-120 Z"
        assert grid_path(4, 3) == "M140,45 h120 v25 h-120 Z"

    def test_providers(self, mock_source):
        assert [p.id for p in mock_source.providers()] == ["actual", "google", "openweather", "other"]


class TestInitialAlerts:
    """초기 경보 테스트"""

    def test_three_alerts(self, mock_source):
        alerts = mock_source.initial_alerts()
        assert [a.id for a in alerts] == ["alert-1", "alert-2", "alert-3"]
        assert [a.status for a in alerts] == ["active", "draft", "expired"]

    def test_dates_relative_to_today(self, mock_source):
        alert_1, alert_2, alert_3 = mock_source.initial_alerts()
        assert alert_1.event_dates.from_ == FIXED_NOW
        assert alert_1.event_dates.to == FIXED_NOW + timedelta(days=1)
        # 종료일이 없던 경보는 단일일로 정규화됨
        assert alert_2.event_dates.to == alert_2.event_dates.from_
        assert alert_3.event_dates.to == FIXED_NOW - timedelta(days=3)


class TestDateVariantStats:
    """날짜별 통계 테스트"""

    @pytest.mark.parametrize("day,expected", [
        (date(2024, 8, 5), 1.0),
        (date(2024, 8, 10), 0.75),
        (date(2024, 8, 16), 1.05),
        (date(2024, 8, 19), 1.2),
    ])
    def test_day_multiplier(self, day, expected):
        assert day_multiplier(day) == pytest.approx(expected)

    def test_neutral_day_keeps_base(self, mock_source):
        """배율 1.0 인 날은 기본 값 그대로"""
        stats = mock_source.stats_by_region_for_date(date(2024, 8, 5))
        assert stats["macro-1"]["google"] == UserStats(
            green=250000, yellow=80000, orange=20000, red=1500, total=351500
        )

    def test_scaled_values(self):
        base = {"r": {"p": (100, 100, 100, 100, 400)}}
        stats = vary_for_date(base, date(2024, 8, 10))  # 배율 0.75
        assert stats["r"]["p"] == UserStats(green=75, yellow=125, orange=75, red=125, total=400)

    def test_totals_recomputed(self, mock_source):
        """total 은 항상 네 구간의 합"""
        for day in (date(2024, 8, d) for d in range(1, 31)):
            for table in (mock_source.stats_by_region_for_date(day), mock_source.national_stats_for_date(day)):
                for providers in table.values():
                    assert all(b.is_consistent() for b in providers.values())

    def test_cached_per_date(self, mock_source):
        day = date(2024, 8, 16)
        assert mock_source.stats_by_region_for_date(day) is mock_source.stats_by_region_for_date(day)
        assert mock_source.national_stats_for_date(day) is mock_source.national_stats_for_date(day)

    def test_national_has_both_countries(self, mock_source):
        stats = mock_source.national_stats_for_date(date(2024, 8, 16))
        assert set(stats) == {"colombia", "kenya"}
        assert set(stats["kenya"]) == {"actual", "google", "openweather"}

    def test_default_today(self):
        source = MockDataSource()
        assert source.initial_alerts()[0].event_dates.from_ == source.today
