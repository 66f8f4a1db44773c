"""
hypothesis를 활용한 코어 모델 테스트

이 모듈은 hypothesis 패키지를 사용하여
경보/통계 모델의 검증 규칙을 테스트합니다.
"""

import pytest
from datetime import datetime, timedelta
from hypothesis import given, strategies as st
from pydantic import ValidationError

from meteops.core.models import Alert, Country, EventDates, Region, UserStats
from conftest import FIXED_NOW, make_alert


class TestEventDatesModel:
    """EventDates 모델 테스트"""

    def test_missing_end_defaults_to_start(self):
        """종료일이 없으면 시작일과 같음"""
        dates = EventDates(from_=FIXED_NOW)
        assert dates.to == FIXED_NOW

    def test_alias_from(self):
        """JSON 별칭 'from' 으로 생성"""
        dates = EventDates.model_validate({"from": "2024-08-16T00:00:00", "to": "2024-08-17T00:00:00"})
        assert dates.from_ == datetime(2024, 8, 16)
        assert dates.to == datetime(2024, 8, 17)

    def test_inverted_interval_is_accepted(self):
        """역전된 기간은 거부하지 않음"""
        dates = EventDates(from_=FIXED_NOW, to=FIXED_NOW - timedelta(days=2))
        assert dates.to < dates.from_


class TestAlertModel:
    """Alert 모델 테스트"""

    def test_defaults(self):
        """기본 상태와 버전"""
        alert = Alert(
            id="a-1", country_id="kenya", region_ids=["nairobi"], severity="red",
            event_type="Storm", push_date_time=FIXED_NOW,
            event_dates=EventDates(from_=FIXED_NOW), justification="Strong winds expected.",
            author="Tester",
        )
        assert alert.status == "draft"
        assert alert.version == 1
        assert alert.image_url is None

    def test_empty_regions_rejected(self):
        """지역이 없는 경보는 생성 불가"""
        with pytest.raises(ValidationError):
            make_alert(region_ids=())

    def test_duplicate_regions_collapsed(self):
        """중복 지역은 순서를 유지하며 제거"""
        alert = make_alert(region_ids=("macro-4", "macro-1", "macro-4"))
        assert alert.region_ids == ["macro-4", "macro-1"]

    @given(severity=st.text(min_size=1, max_size=10).filter(lambda s: s not in ("yellow", "orange", "red")))
    def test_invalid_severity(self, severity: str):
        """정의되지 않은 심각도 거부"""
        with pytest.raises(ValidationError):
            make_alert(severity=severity)

    @given(status=st.text(min_size=1, max_size=10).filter(lambda s: s not in ("draft", "active", "expired")))
    def test_invalid_status(self, status: str):
        """정의되지 않은 상태 거부"""
        with pytest.raises(ValidationError):
            make_alert(status=status)

    def test_camel_case_round_trip(self):
        """camelCase JSON 으로 직렬화/역직렬화"""
        alert = make_alert(end=FIXED_NOW + timedelta(days=1))
        payload = alert.model_dump(mode="json", by_alias=True)

        assert "countryId" in payload
        assert "regionIds" in payload
        assert payload["eventDates"]["from"].startswith("2024-08-16")
        assert Alert.model_validate(payload) == alert


class TestUserStatsModel:
    """UserStats 모델 테스트"""

    @given(
        green=st.integers(min_value=0, max_value=10**7),
        yellow=st.integers(min_value=0, max_value=10**7),
        orange=st.integers(min_value=0, max_value=10**7),
        red=st.integers(min_value=0, max_value=10**7),
    )
    def test_consistent_total(self, green, yellow, orange, red):
        """합계가 맞으면 일관됨"""
        stats = UserStats(green=green, yellow=yellow, orange=orange, red=red,
                          total=green + yellow + orange + red)
        assert stats.is_consistent()

    def test_inconsistent_total(self):
        stats = UserStats(green=1, yellow=1, orange=1, red=1, total=5)
        assert not stats.is_consistent()

    def test_negative_rejected(self):
        with pytest.raises(ValidationError):
            UserStats(green=-1)


class TestCountryModel:
    """Country 모델 테스트"""

    def test_region_lookup(self):
        country = Country(id="kenya", name="Kenya", regions=[Region(id="nairobi", name="Nairobi")])
        assert country.region("nairobi").name == "Nairobi"
        assert country.region("macro-1") is None
