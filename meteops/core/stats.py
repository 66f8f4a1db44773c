"""
Statistics aggregation for MeteOps.

This module contains pure functions that roll per-region user
statistics up into a per-provider view of the current selection.
"""

from typing import Iterable, List, Mapping, Optional
from .models import Stats, UserStats
from meteops.observability.logging_setup import get_logger

log = get_logger("meteops.stats")


def empty_user_stats() -> UserStats:
    return UserStats(green=0, yellow=0, orange=0, red=0, total=0)


def add_user_stats(acc: UserStats, other: UserStats) -> UserStats:
    """두 통계 버킷을 필드별로 더합니다."""
    return UserStats(
        green=acc.green + other.green,
        yellow=acc.yellow + other.yellow,
        orange=acc.orange + other.orange,
        red=acc.red + other.red,
        total=acc.total + other.total,
    )


def inconsistent_providers(stats: Stats) -> List[str]:
    """total 불변식을 위반한 제공자 목록을 반환합니다."""
    return [provider for provider, bucket in stats.items() if not bucket.is_consistent()]


def aggregate_stats(selected_regions: Iterable[str],
                    country_id: str,
                    per_region_stats: Mapping[str, Stats],
                    national_stats: Mapping[str, Stats]) -> Optional[Stats]:
    """
    선택된 지역들의 통계를 제공자별로 합산합니다.

    Args:
        selected_regions: 선택된 지역 ID 목록
        country_id: 국가 ID
        per_region_stats: 지역 ID -> 통계
        national_stats: 국가 ID -> 전국 통계

    Returns:
        합산된 통계. 선택이 비어 있으면 전국 통계 그대로,
        전국 통계가 없으면 None
    """
    country_stats = national_stats.get(country_id)
    if country_stats is None:
        return None

    regions = list(selected_regions)
    if not regions:
        return country_stats

    aggregated: Stats = {provider: empty_user_stats() for provider in country_stats}

    for region_id in regions:
        region_stats = per_region_stats.get(region_id)
        if not region_stats:
            continue
        for provider in aggregated:
            bucket = region_stats.get(provider)
            if bucket is not None:
                aggregated[provider] = add_user_stats(aggregated[provider], bucket)

    bad = inconsistent_providers(aggregated)
    if bad:
        log.warning(f"통계 total 불변식 위반 country:{country_id} providers:{bad}")

    return aggregated
