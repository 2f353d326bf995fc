"""
テスト - ビットマップ・チケットキー
"""

import pytest

from src.common.errors import BitmapWidthError
from src.common.models import BallNumber, BallRange
from src.quickpick.ticket_key import Bitmap, BitmapStrategy, TicketKey, select_strategy


def _balls(*values: int) -> list[BallNumber]:
    return [BallNumber(v) for v in values]


class TestSelectStrategy:
    """select_strategy() のテスト"""

    @pytest.mark.parametrize(
        "start,end,expected",
        [
            (1, 60, BitmapStrategy.NARROW),
            (1, 64, BitmapStrategy.NARROW),  # size 64
            (0, 63, BitmapStrategy.NARROW),  # size 64
            (1, 65, BitmapStrategy.WIDE),  # size 65
            (0, 99, BitmapStrategy.WIDE),
            (0, 127, BitmapStrategy.WIDE),  # size 128
            (0, 128, BitmapStrategy.DYNAMIC),  # size 129
            (0, 255, BitmapStrategy.DYNAMIC),
        ],
    )
    def test_boundaries(self, start, end, expected):
        """範囲の個数だけで幅が決まること"""
        assert select_strategy(BallRange.of(start, end)) is expected

    def test_size_65_is_not_narrow(self):
        assert select_strategy(BallRange.of(1, 65)) is not BitmapStrategy.NARROW

    def test_large_absolute_values_small_range(self):
        """200〜255（size 56）は終了値が大きくてもNARROWになること"""
        assert select_strategy(BallRange.of(200, 255)) is BitmapStrategy.NARROW


class TestBitmapStrategy:
    """BitmapStrategy の幅チェックのテスト"""

    def test_fixed_widths(self):
        assert BitmapStrategy.NARROW.width == 64
        assert BitmapStrategy.WIDE.width == 128
        assert BitmapStrategy.DYNAMIC.width is None

    def test_narrow_rejects_65(self):
        with pytest.raises(BitmapWidthError, match="ビットマップ幅不足") as exc_info:
            BitmapStrategy.NARROW.check_width(65)
        assert exc_info.value.size == 65
        assert exc_info.value.strategy == "NARROW"

    def test_wide_rejects_129(self):
        with pytest.raises(BitmapWidthError):
            BitmapStrategy.WIDE.check_width(129)

    def test_accepts_exact_width(self):
        BitmapStrategy.NARROW.check_width(64)
        BitmapStrategy.WIDE.check_width(128)
        BitmapStrategy.DYNAMIC.check_width(256)

    def test_word_count(self):
        assert BitmapStrategy.NARROW.word_count(60) == 1
        assert BitmapStrategy.WIDE.word_count(100) == 1
        assert BitmapStrategy.DYNAMIC.word_count(129) == 3
        assert BitmapStrategy.DYNAMIC.word_count(256) == 4


class TestTicketKey:
    """TicketKey のテスト"""

    @pytest.mark.parametrize(
        "start,end,values",
        [
            (1, 60, [5, 10, 15, 20, 25, 30]),
            (1, 64, [1, 32, 64]),
            (0, 99, [0, 10, 20, 30, 40, 50]),
            (1, 128, [1, 64, 65, 128]),
            (0, 200, [0, 50, 100, 150, 200]),
            (200, 255, [200, 201, 254, 255]),
            (0, 255, [0, 63, 64, 127, 128, 191, 192, 255]),
        ],
    )
    def test_round_trip(self, start, end, values):
        """from_balls → to_balls で元の数字（昇順）に戻ること"""
        r = BallRange.of(start, end)
        key = TicketKey.from_balls(_balls(*values), r)
        assert key.strategy is select_strategy(r)
        assert key.to_balls(r) == _balls(*sorted(values))

    def test_round_trip_unsorted_input(self):
        """順不同の入力でも昇順で戻ること"""
        r = BallRange.of(1, 60)
        key = TicketKey.from_balls(_balls(30, 1, 60, 15), r)
        assert [b.value for b in key.to_balls(r)] == [1, 15, 30, 60]

    @pytest.mark.parametrize("strategy", list(BitmapStrategy))
    def test_round_trip_every_strategy(self, strategy):
        """幅を明示しても往復できること（範囲が幅に収まる場合）"""
        r = BallRange.of(1, 60)
        key = TicketKey.from_balls(_balls(2, 33, 60), r, strategy)
        assert key.strategy is strategy
        assert [b.value for b in key.to_balls(r)] == [2, 33, 60]

    def test_explicit_strategy_too_narrow(self):
        with pytest.raises(BitmapWidthError):
            TicketKey.from_balls(_balls(1, 2), BallRange.of(1, 100), BitmapStrategy.NARROW)

    def test_count_balls(self):
        r = BallRange.of(0, 255)
        key = TicketKey.from_balls(_balls(0, 64, 128, 192, 255), r)
        assert key.count_balls() == 5

    def test_top_bit_of_each_width(self):
        """幅の最上位ビットが正しく立つこと"""
        assert TicketKey.from_balls(_balls(63), BallRange.of(0, 63)).words == (1 << 63,)
        assert TicketKey.from_balls(_balls(127), BallRange.of(0, 127)).words == (1 << 127,)
        assert TicketKey.from_balls(_balls(128), BallRange.of(0, 128)).words == (0, 0, 1)

    def test_equality_and_hash(self):
        r = BallRange.of(1, 60)
        key1 = TicketKey.from_balls(_balls(5, 10, 15), r)
        key2 = TicketKey.from_balls(_balls(15, 10, 5), r)
        key3 = TicketKey.from_balls(_balls(5, 10, 20), r)
        assert key1 == key2
        assert hash(key1) == hash(key2)
        assert key1 != key3
        assert len({key1, key2, key3}) == 2

    def test_strategy_is_part_of_identity(self):
        """同じビットでも幅が違うキーは等しくないこと"""
        r = BallRange.of(1, 60)
        narrow = TicketKey.from_balls(_balls(5, 10), r, BitmapStrategy.NARROW)
        dynamic = TicketKey.from_balls(_balls(5, 10), r, BitmapStrategy.DYNAMIC)
        assert narrow.words == dynamic.words
        assert narrow != dynamic

    def test_ball_outside_range(self):
        with pytest.raises(ValueError, match="範囲"):
            TicketKey.from_balls(_balls(61), BallRange.of(1, 60))


class TestBitmap:
    """Bitmap のテスト"""

    def test_test_and_set(self):
        bitmap = Bitmap(BitmapStrategy.NARROW, 60)
        assert bitmap.test_and_set(5) is True
        assert bitmap.test_and_set(5) is False
        assert bitmap.count() == 1

    def test_dynamic_word_split(self):
        bitmap = Bitmap(BitmapStrategy.DYNAMIC, 200)
        bitmap.test_and_set(0)
        bitmap.test_and_set(64)
        bitmap.test_and_set(199)
        assert bitmap.freeze().words == (1, 1, 0, 1 << (199 - 192))

    def test_offset_beyond_size(self):
        """size 以上のオフセットはIndexError"""
        bitmap = Bitmap(BitmapStrategy.NARROW, 56)
        with pytest.raises(IndexError):
            bitmap.test_and_set(56)
        with pytest.raises(IndexError):
            bitmap.test_and_set(-1)

    def test_rejects_oversized_range(self):
        with pytest.raises(BitmapWidthError):
            Bitmap(BitmapStrategy.WIDE, 129)
