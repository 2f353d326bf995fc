"""
テスト - 1口抽選エンジンと乱数源
"""

import logging
from collections import Counter
from itertools import combinations

import pytest

from src.common.errors import BitmapWidthError
from src.common.models import BallRange, PickCount
from src.quickpick.rng import NumpyRandomSource, SequenceRandomSource, StdlibRandomSource
from src.quickpick.sampler import (
    draw_ticket_key,
    generate_by_exclusion,
    generate_by_insertion,
    generate_ticket,
    should_use_exclusion,
)
from src.quickpick.ticket_key import BitmapStrategy


class TestRandomSources:
    """乱数源のテスト"""

    def test_numpy_within_range(self):
        rng = NumpyRandomSource(seed=1)
        values = [rng.randint(1, 60) for _ in range(1000)]
        assert all(1 <= v <= 60 for v in values)
        # 両端も出ること
        assert 1 in values and 60 in values

    def test_numpy_seed_reproducible(self):
        a = NumpyRandomSource(seed=42)
        b = NumpyRandomSource(seed=42)
        assert [a.randint(0, 255) for _ in range(20)] == [b.randint(0, 255) for _ in range(20)]

    def test_numpy_returns_int(self):
        assert type(NumpyRandomSource(seed=0).randint(1, 10)) is int

    def test_stdlib_within_range(self):
        rng = StdlibRandomSource(seed=7)
        assert all(10 <= rng.randint(10, 20) <= 20 for _ in range(500))

    def test_sequence_cycles(self):
        """値列を先頭から繰り返すこと"""
        rng = SequenceRandomSource([5, 10, 15])
        assert [rng.randint(1, 60) for _ in range(4)] == [5, 10, 15, 5]
        assert rng.calls == 4

    def test_sequence_out_of_range(self):
        rng = SequenceRandomSource([70])
        with pytest.raises(ValueError, match="区間"):
            rng.randint(1, 60)

    def test_sequence_empty(self):
        with pytest.raises(ValueError):
            SequenceRandomSource([])


class TestDrawTicketKey:
    """draw_ticket_key() のテスト"""

    def test_duplicates_discarded(self):
        """既出の値は捨てられ、選択数ぶんの異なる数字が揃うこと"""
        r = BallRange.of(1, 60)
        rng = SequenceRandomSource([5, 5, 10, 15, 10, 20, 25, 30])
        key = draw_ticket_key(rng, r, PickCount.new(6, r))
        assert [b.value for b in key.to_balls(r)] == [5, 10, 15, 20, 25, 30]
        assert rng.calls == 8

    def test_pick_equals_size(self):
        """範囲の全数字を選ぶ場合も終了すること"""
        r = BallRange.of(1, 10)
        key = draw_ticket_key(NumpyRandomSource(seed=3), r, PickCount.new(10, r))
        assert key.count_balls() == 10

    @pytest.mark.parametrize("start,end,pick", [(1, 60, 6), (0, 99, 50), (0, 255, 20), (200, 255, 7)])
    def test_each_strategy(self, start, end, pick):
        r = BallRange.of(start, end)
        key = draw_ticket_key(NumpyRandomSource(seed=11), r, PickCount.new(pick, r))
        balls = key.to_balls(r)
        assert len(balls) == pick
        assert len(set(balls)) == pick
        assert all(r.contains(b) for b in balls)

    def test_explicit_strategy_mismatch_draws_nothing(self):
        """幅の合わないstrategyは抽選前に拒否されること"""
        r = BallRange.of(1, 100)
        rng = SequenceRandomSource([1])
        with pytest.raises(BitmapWidthError):
            draw_ticket_key(rng, r, PickCount.new(5, r), BitmapStrategy.NARROW)
        assert rng.calls == 0


class TestFallbackStrategies:
    """挿入方式・除外方式のテスト"""

    def test_should_use_exclusion(self):
        assert not should_use_exclusion(60, 6)  # 10%
        assert not should_use_exclusion(60, 30)  # 50%
        assert should_use_exclusion(60, 31)  # 50%超
        assert should_use_exclusion(60, 55)

    def test_insertion_count(self):
        balls = generate_by_insertion(NumpyRandomSource(seed=5), BallRange.of(1, 60), 10)
        assert len(balls) == 10
        assert len({b.value for b in balls}) == 10

    def test_exclusion_count(self):
        balls = generate_by_exclusion(NumpyRandomSource(seed=5), BallRange.of(1, 20), 15)
        assert len(balls) == 15
        assert len({b.value for b in balls}) == 15

    def test_exclusion_deterministic(self):
        """除外された数字以外が選ばれること"""
        rng = SequenceRandomSource([3, 3, 7])
        balls = generate_by_exclusion(rng, BallRange.of(1, 10), 8)
        assert [b.value for b in balls] == [1, 2, 4, 5, 6, 8, 9, 10]


class TestGenerateTicket:
    """generate_ticket() のテスト"""

    def test_bitmap_path(self):
        r = BallRange.of(1, 60)
        rng = SequenceRandomSource([30, 5, 60, 1, 12, 44])
        ticket = generate_ticket(rng, r, PickCount.new(6, r))
        assert ticket.values() == [1, 5, 12, 30, 44, 60]

    def test_falls_back_on_strategy_mismatch(self, caplog):
        """幅の合わないstrategyを指定すると集合方式で抽選すること"""
        r = BallRange.of(1, 100)
        with caplog.at_level(logging.WARNING, logger="src.quickpick.sampler"):
            ticket = generate_ticket(NumpyRandomSource(seed=9), r, PickCount.new(6, r), BitmapStrategy.NARROW)

        assert len(ticket) == 6
        assert all(1 <= v <= 100 for v in ticket.values())
        assert "集合方式" in caplog.text

    def test_fallback_exclusion_regime(self):
        r = BallRange.of(1, 100)
        ticket = generate_ticket(NumpyRandomSource(seed=9), r, PickCount.new(90, r), BitmapStrategy.NARROW)
        assert len(ticket) == 90


class TestUniformity:
    """抽選結果が全ての部分集合で一様であることの統計的確認"""

    TRIALS = 20_000

    def test_bitmap_uniform_over_subsets(self):
        """5個から2個: 10通りがほぼ均等に出ること"""
        r = BallRange.of(1, 5)
        pick = PickCount.new(2, r)
        rng = NumpyRandomSource(seed=12345)
        counts = Counter(tuple(generate_ticket(rng, r, pick).values()) for _ in range(self.TRIALS))

        assert set(counts) == set(combinations(range(1, 6), 2))
        expected = self.TRIALS / 10
        for subset, count in counts.items():
            assert abs(count - expected) < expected * 0.15, f"{subset}: {count}"

    def test_exclusion_uniform_over_subsets(self):
        """除外方式でも一様であること（5個から4個: 5通り）"""
        r = BallRange.of(1, 5)
        rng = NumpyRandomSource(seed=54321)
        counts = Counter(tuple(b.value for b in generate_by_exclusion(rng, r, 4)) for _ in range(self.TRIALS))

        assert set(counts) == set(combinations(range(1, 6), 4))
        expected = self.TRIALS / 5
        for subset, count in counts.items():
            assert abs(count - expected) < expected * 0.1, f"{subset}: {count}"
