"""
In-memory mock data for MeteOps.

This module stands in for the future REST backend: countries and their
regions, forecast providers, seed alerts, and per-date user statistics.
Each public method corresponds to an endpoint the backend is expected
to provide (GET /countries, GET /alerts?countryId=, GET /stats?date=).
"""

import math
from datetime import date, datetime, timedelta
from typing import Dict, List, Optional, Tuple
from meteops.core.models import Alert, Country, EventDates, ForecastProvider, Region, Stats, UserStats
from meteops.observability.logging_setup import get_logger

log = get_logger("meteops.mockdata")

# 그리드 셀 크기 (SVG 좌표)
CELL_WIDTH = 120
CELL_HEIGHT = 25
PADDING = 10
START_Y = 10

_COUNTRY_REGIONS: List[Tuple[str, str, List[Tuple[str, str]]]] = [
    ("colombia", "Colombia", [
        ("macro-1", "Caribe"),
        ("macro-2", "Eje Cafetero"),
        ("macro-3", "Pacífico"),
        ("macro-4", "Andina Norte"),
        ("macro-5", "Andina Centro"),
        ("macro-6", "Andina Sur"),
        ("macro-7", "Orinoquía"),
        ("macro-8", "Amazonía"),
        ("macro-9", "Insular"),
        ("macro-10", "Noroccidente"),
        ("macro-11", "Suroccidente"),
        ("macro-12", "Centro Oriente"),
        ("macro-13", "Centro Sur"),
        ("macro-14", "Nororiente"),
        ("macro-15", "Suroeste"),
        ("macro-16", "Magdalena Medio"),
        ("macro-17", "Alto Magdalena"),
        ("macro-18", "Catatumbo"),
        ("macro-19", "Bajo Cauca"),
        ("macro-20", "Urabá"),
        ("macro-21", "Piedemonte"),
    ]),
    ("kenya", "Kenya", [
        ("nairobi", "Nairobi"),
        ("mombasa", "Mombasa"),
        ("kisumu", "Kisumu"),
        ("nakuru", "Nakuru"),
        ("rift-valley", "Rift Valley"),
    ]),
]

PROVIDERS: List[ForecastProvider] = [
    ForecastProvider(id="actual", name="Actual"),
    ForecastProvider(id="google", name="Google Weather"),
    ForecastProvider(id="openweather", name="OpenWeather"),
    ForecastProvider(id="other", name="Other Provider"),
]

# (green, yellow, orange, red, total)
_BASE_STATS_BY_REGION: Dict[str, Dict[str, Tuple[int, int, int, int, int]]] = {
    # Colombia
    "macro-1": {
        "actual": (260000, 75000, 15000, 1000, 351000),
        "google": (250000, 80000, 20000, 1500, 351500),
        "openweather": (280000, 70000, 15000, 1000, 366000),
    },
    "macro-2": {
        "actual": (190000, 55000, 12000, 800, 257800),
        "google": (180000, 60000, 15000, 1000, 256000),
        "openweather": (200000, 50000, 12000, 800, 262800),
    },
    "macro-4": {
        "actual": (125000, 38000, 7500, 350, 170850),
        "google": (120000, 40000, 8000, 400, 168400),
        "openweather": (130000, 35000, 7000, 300, 172300),
    },
    "macro-10": {
        "actual": (65000, 22000, 3500, 100, 90600),
        "google": (60000, 25000, 4000, 150, 89150),
        "openweather": (70000, 20000, 3000, 100, 93100),
    },
    # Kenya
    "nairobi": {
        "actual": (16000, 4500, 1000, 80, 21580),
        "google": (15000, 5000, 1200, 100, 21300),
        "openweather": (18000, 2500, 800, 50, 21350),
    },
}

_BASE_NATIONAL_STATS: Dict[str, Dict[str, Tuple[int, int, int, int, int]]] = {
    "colombia": {
        "actual": (295000, 83000, 16500, 980, 395480),
        "google": (280000, 90000, 20000, 1200, 391200),
        "openweather": (310000, 75000, 16000, 950, 401950),
    },
    "kenya": {
        "actual": (160000, 45000, 10000, 800, 215800),
        "google": (150000, 50000, 12000, 1000, 213000),
        "openweather": (180000, 25000, 8000, 500, 213500),
    },
}


def grid_path(index: int, columns: int) -> str:
    """지역 인덱스에 해당하는 그리드 셀의 SVG 경로를 만듭니다."""
    col = index % columns
    row = index // columns
    x = col * (CELL_WIDTH + PADDING) + PADDING
    y = row * (CELL_HEIGHT + PADDING) + START_Y
    return f"M{x},{y} h{CELL_WIDTH} v{CELL_HEIGHT} h-{CELL_WIDTH} Z"


def build_countries(columns: int = 3) -> List[Country]:
    countries = []
    for country_id, name, regions in _COUNTRY_REGIONS:
        countries.append(Country(
            id=country_id,
            name=name,
            regions=[
                Region(id=rid, name=rname, path=grid_path(i, columns))
                for i, (rid, rname) in enumerate(regions)
            ],
        ))
    return countries


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def day_multiplier(day: date) -> float:
    """일자(day of month)에 따른 배율 (최대 ±25%)"""
    return 1 + ((day.day % 10) - 5) * 0.05


def vary_for_date(base: Dict[str, Dict[str, Tuple[int, int, int, int, int]]], day: date) -> Dict[str, Stats]:
    """
    날짜별로 다른 통계를 만듭니다.

    green/orange는 배율을, yellow/red는 (2 - 배율)을 곱하고
    total은 네 구간의 합으로 다시 계산합니다.
    """
    m = day_multiplier(day)
    result: Dict[str, Stats] = {}
    for key, providers in base.items():
        result[key] = {}
        for provider, (green, yellow, orange, red, _total) in providers.items():
            g = _round_half_up(green * m)
            y = _round_half_up(yellow * (2 - m))
            o = _round_half_up(orange * m)
            r = _round_half_up(red * (2 - m))
            result[key][provider] = UserStats(green=g, yellow=y, orange=o, red=r, total=g + y + o + r)
    return result


def build_initial_alerts(today: datetime) -> List[Alert]:
    """오늘 기준 상대 날짜로 초기 경보를 만듭니다."""
    return [
        Alert(
            id="alert-1",
            country_id="colombia",
            region_ids=["macro-1", "macro-4"],
            severity="orange",
            event_type="Heavy Rainfall",
            push_date_time=today - timedelta(days=1),
            event_dates=EventDates(from_=today, to=today + timedelta(days=1)),
            justification=(
                "An incoming weather system is expected to bring heavy rainfall, potentially "
                "causing localized flooding in urban and low-lying areas. Models predict "
                "50-75mm of rain over a 24-hour period."
            ),
            status="active",
            author="Juan Valdez",
            last_updated=today - timedelta(days=2),
            version=2,
        ),
        Alert(
            id="alert-2",
            country_id="colombia",
            region_ids=["macro-2", "macro-10"],
            severity="yellow",
            event_type="Heatwave",
            push_date_time=today,
            event_dates=EventDates(from_=today + timedelta(days=1)),
            justification=(
                "Temperatures are expected to rise above average, reaching 35°C. Residents "
                "should take precautions against heat-related illness."
            ),
            status="draft",
            author="Sofia Vergara",
            last_updated=today - timedelta(days=1),
            version=1,
        ),
        Alert(
            id="alert-3",
            country_id="colombia",
            region_ids=["macro-8"],
            severity="red",
            event_type="Severe Flooding",
            push_date_time=today - timedelta(days=5),
            event_dates=EventDates(from_=today - timedelta(days=5), to=today - timedelta(days=3)),
            justification=(
                "Major river overflow expected due to extreme upstream rainfall. Significant "
                "risk to life and property. Evacuation orders may be necessary."
            ),
            status="expired",
            author="Juan Valdez",
            last_updated=today - timedelta(days=6),
            version=1,
        ),
    ]


class MockDataSource:
    """메모리 기반 참조 데이터 소스 (ReferenceDataPort 구현)"""

    def __init__(self, today: Optional[datetime] = None, *, grid_columns: int = 3):
        """
        초기화합니다.

        Args:
            today: 초기 경보의 기준 시각 (None이면 현재 시각)
            grid_columns: 지역 그리드 열 수
        """
        self.today = today or datetime.now()
        self._countries = build_countries(grid_columns)
        self._region_cache: Dict[str, Dict[str, Stats]] = {}
        self._national_cache: Dict[str, Dict[str, Stats]] = {}
        log.info(f"MockDataSource 초기화: 국가 {len(self._countries)}개, 기준일 {self.today.date()}")

    def countries(self) -> List[Country]:
        return list(self._countries)

    def find_country(self, country_id: str) -> Optional[Country]:
        for c in self._countries:
            if c.id == country_id:
                return c
        return None

    def providers(self) -> List[ForecastProvider]:
        return list(PROVIDERS)

    def initial_alerts(self) -> List[Alert]:
        return build_initial_alerts(self.today)

    def stats_by_region_for_date(self, day: date) -> Dict[str, Stats]:
        key = day.isoformat()[:10]
        if key not in self._region_cache:
            self._region_cache[key] = vary_for_date(_BASE_STATS_BY_REGION, day)
        return self._region_cache[key]

    def national_stats_for_date(self, day: date) -> Dict[str, Stats]:
        key = day.isoformat()[:10]
        if key not in self._national_cache:
            self._national_cache[key] = vary_for_date(_BASE_NATIONAL_STATS, day)
        return self._national_cache[key]
