"""
Reference data port interface.

This module defines the protocol for countries, providers, seed
alerts and statistics. The in-memory mock implements it today; a
REST backend is expected to replace it.
"""

from datetime import date
from typing import Dict, List, Optional, Protocol
from meteops.core.models import Alert, Country, ForecastProvider, Stats

class ReferenceDataPort(Protocol):
    """참조 데이터 포트 인터페이스"""

    def countries(self) -> List[Country]:
        """국가 목록을 반환합니다."""
        ...

    def find_country(self, country_id: str) -> Optional[Country]:
        """
        국가를 조회합니다.

        Args:
            country_id: 국가 ID

        Returns:
            국가 또는 None
        """
        ...

    def providers(self) -> List[ForecastProvider]:
        """예보 제공자 목록을 반환합니다."""
        ...

    def initial_alerts(self) -> List[Alert]:
        """초기 경보 목록을 반환합니다."""
        ...

    def stats_by_region_for_date(self, day: date) -> Dict[str, Stats]:
        """
        날짜별 지역 통계를 반환합니다.

        Args:
            day: 조회 날짜

        Returns:
            지역 ID -> 통계
        """
        ...

    def national_stats_for_date(self, day: date) -> Dict[str, Stats]:
        """
        날짜별 전국 통계를 반환합니다.

        Args:
            day: 조회 날짜

        Returns:
            국가 ID -> 통계
        """
        ...
