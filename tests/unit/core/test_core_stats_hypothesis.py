"""
hypothesis를 활용한 통계 합산 테스트

이 모듈은 aggregate_stats 의 통과/합산/불변식 전파를 테스트합니다.
"""

from hypothesis import given, strategies as st

from meteops.core.models import UserStats
from meteops.core.stats import add_user_stats, aggregate_stats, empty_user_stats, inconsistent_providers
from conftest import bucket

PROVIDERS = ["actual", "google", "openweather"]
REGIONS = ["a", "b", "c", "d"]

counts = st.integers(min_value=0, max_value=10**6)


@st.composite
def consistent_buckets(draw):
    return bucket(draw(counts), draw(counts), draw(counts), draw(counts))


@st.composite
def region_tables(draw):
    """일부 지역/제공자가 빠질 수 있는 지역 통계 테이블"""
    table = {}
    for region in draw(st.lists(st.sampled_from(REGIONS), unique=True)):
        providers = draw(st.lists(st.sampled_from(PROVIDERS + ["other"]), unique=True))
        table[region] = {p: draw(consistent_buckets()) for p in providers}
    return table


NATIONAL = {
    "colombia": {p: bucket(100, 10, 5, 1) for p in PROVIDERS},
}


class TestAddUserStats:
    """add_user_stats 테스트"""

    def test_field_wise(self):
        total = add_user_stats(bucket(1, 2, 3, 4), bucket(10, 20, 30, 40))
        assert total == UserStats(green=11, yellow=22, orange=33, red=44, total=110)

    def test_empty_is_identity(self):
        b = bucket(5, 6, 7, 8)
        assert add_user_stats(empty_user_stats(), b) == b


class TestAggregateStats:
    """aggregate_stats 테스트"""

    def test_unknown_country_returns_none(self):
        assert aggregate_stats([], "peru", {}, NATIONAL) is None
        assert aggregate_stats(["a"], "peru", {}, NATIONAL) is None

    def test_empty_selection_passes_national_through(self):
        """선택이 없으면 전국 통계 객체 그대로"""
        result = aggregate_stats([], "colombia", {}, NATIONAL)
        assert result is NATIONAL["colombia"]

    def test_example_two_regions(self):
        """지역 A + B 합산 예시"""
        per_region = {
            "A": {"google": UserStats(green=100, yellow=20, orange=5, red=1, total=126)},
            "B": {"google": UserStats(green=50, yellow=10, orange=0, red=0, total=60)},
        }
        national = {"colombia": {"google": bucket(1, 1, 1, 1)}}

        result = aggregate_stats(["A", "B"], "colombia", per_region, national)

        assert result == {"google": UserStats(green=150, yellow=30, orange=5, red=1, total=186)}

    def test_missing_region_and_provider_skipped(self):
        """지역 통계가 없거나 제공자가 빠져도 실패하지 않음"""
        per_region = {"a": {"google": bucket(1, 2, 3, 4)}}
        result = aggregate_stats(["a", "zzz"], "colombia", per_region, NATIONAL)

        assert result["google"] == bucket(1, 2, 3, 4)
        assert result["actual"] == empty_user_stats()
        assert result["openweather"] == empty_user_stats()

    def test_provider_not_in_national_ignored(self):
        """전국 통계에 없는 제공자는 결과에 포함되지 않음"""
        per_region = {"a": {"other": bucket(9, 9, 9, 9)}}
        result = aggregate_stats(["a"], "colombia", per_region, NATIONAL)
        assert "other" not in result
        assert set(result) == set(PROVIDERS)

    def test_inconsistent_input_propagates(self):
        """불변식 위반은 재계산하지 않고 그대로 전파"""
        per_region = {"a": {"google": bucket(1, 1, 1, 1, total=10)}}
        result = aggregate_stats(["a"], "colombia", per_region, NATIONAL)
        assert result["google"].total == 10
        assert inconsistent_providers(result) == ["google"]

    @given(table=region_tables(), selected=st.lists(st.sampled_from(REGIONS), min_size=1))
    def test_total_invariant_holds(self, table, selected):
        """모든 입력이 일관되면 결과도 일관됨"""
        result = aggregate_stats(selected, "colombia", table, NATIONAL)
        assert set(result) == set(PROVIDERS)
        for provider, stats in result.items():
            assert stats.total == stats.green + stats.yellow + stats.orange + stats.red

    @given(table=region_tables(), selected=st.lists(st.sampled_from(REGIONS), min_size=1, unique=True), data=st.data())
    def test_selection_order_irrelevant(self, table, selected, data):
        """선택 순서와 무관"""
        shuffled = data.draw(st.permutations(selected))
        assert aggregate_stats(shuffled, "colombia", table, NATIONAL) == \
            aggregate_stats(selected, "colombia", table, NATIONAL)
