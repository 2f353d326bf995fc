"""
ロト クイックピック - ビットマップ・チケットキー

チケットを「範囲先頭からのオフセット」のビット集合として表現する。
ハッシュと等価比較が整数比較で済むため、大量のチケットの
重複判定に使う。

ビット幅は数字範囲の個数（size）だけで決まる:
    NARROW:  size ≤ 64       64ビットの1ワード
    WIDE:    65 ≤ size ≤ 128  128ビットの1ワード
    DYNAMIC: size > 128      64ビットワードのタプル（64オフセットごとに1ワード）

数字の絶対値（範囲の終了値）では決めない。
例えば 200〜255 は size 56 なので NARROW になる。
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from src.common.errors import BitmapWidthError
from src.common.models import BallNumber, BallRange

WORD_BITS = 64


class BitmapStrategy(Enum):
    """ビットマップの幅の選択肢"""

    NARROW = "narrow"
    WIDE = "wide"
    DYNAMIC = "dynamic"

    @property
    def width(self) -> Optional[int]:
        """固定幅のビット数（DYNAMICはNone）"""
        return _FIXED_WIDTHS.get(self)

    def fits(self, size: int) -> bool:
        """size 個のオフセットをこの幅で表現できるか"""
        width = self.width
        return width is None or size <= width

    def check_width(self, size: int) -> None:
        """
        size がこの幅に収まることを確認する。

        固定幅で size > 幅 を許すと、幅と同じかそれ以上の
        ビット位置を扱うことになるため、ここで明示的に拒否する。

        Raises:
            BitmapWidthError: 幅に収まらない場合
        """
        if not self.fits(size):
            raise BitmapWidthError(self.name, size)

    def word_count(self, size: int) -> int:
        """size 個のオフセットに必要なワード数"""
        if self is BitmapStrategy.DYNAMIC:
            return (size + WORD_BITS - 1) // WORD_BITS
        return 1


_FIXED_WIDTHS: dict[BitmapStrategy, int] = {
    BitmapStrategy.NARROW: 64,
    BitmapStrategy.WIDE: 128,
}


def select_strategy(ball_range: BallRange) -> BitmapStrategy:
    """
    数字範囲の個数から最も安いビットマップ幅を選ぶ。

    Args:
        ball_range: 数字範囲

    Returns:
        size ≤ 64 → NARROW、65〜128 → WIDE、129以上 → DYNAMIC
    """
    size = ball_range.size
    if size <= 64:
        return BitmapStrategy.NARROW
    if size <= 128:
        return BitmapStrategy.WIDE
    return BitmapStrategy.DYNAMIC


@dataclass(frozen=True)
class TicketKey:
    """
    チケットの不変なビット集合表現（ハッシュ可能）。

    strategy が異なるキーは、同じビットを持っていても等しくならない。
    """

    strategy: BitmapStrategy
    words: tuple[int, ...]

    @classmethod
    def from_balls(
        cls,
        balls: Iterable[BallNumber],
        ball_range: BallRange,
        strategy: Optional[BitmapStrategy] = None,
    ) -> "TicketKey":
        """
        数字の並びからキーを作成する。

        Args:
            balls: 数字の並び（順不同）
            ball_range: 数字範囲
            strategy: ビットマップ幅（省略時は select_strategy の結果）

        Raises:
            BitmapWidthError: strategy が範囲の個数を扱えない場合
            ValueError: 範囲外の数字が含まれる場合
        """
        bitmap = Bitmap(strategy or select_strategy(ball_range), ball_range.size)
        for ball in balls:
            if not ball_range.contains(ball):
                raise ValueError(f"数字 {ball} が範囲 {ball_range} の外です")
            bitmap.test_and_set(ball_range.offset_of(ball.value))
        return bitmap.freeze()

    def offsets(self) -> list[int]:
        """立っているビットのオフセットを昇順で返す"""
        result: list[int] = []
        for index, word in enumerate(self.words):
            base = index * WORD_BITS
            while word:
                lowest = word & -word
                result.append(base + lowest.bit_length() - 1)
                word ^= lowest
        return result

    def to_balls(self, ball_range: BallRange) -> list[BallNumber]:
        """
        キーを数字のリストに戻す。

        オフセットの昇順に走査するため、結果は並べ替え済みになる。
        """
        start = ball_range.start.value
        return [BallNumber(start + offset) for offset in self.offsets()]

    def count_balls(self) -> int:
        """立っているビットの数（＝チケットの数字の個数）"""
        return sum(word.bit_count() for word in self.words)


class Bitmap:
    """
    抽選中に使う可変のビットマップ。

    test_and_set() で重複判定と登録を O(1) で行い、
    freeze() で不変の TicketKey に変換する。
    """

    def __init__(self, strategy: BitmapStrategy, size: int) -> None:
        strategy.check_width(size)
        self.strategy = strategy
        self.size = size
        self._words = [0] * strategy.word_count(size)

    def test_and_set(self, offset: int) -> bool:
        """
        offset のビットを立てる。

        Returns:
            新たに立てた場合 True、既に立っていた場合 False

        Raises:
            IndexError: offset が 0〜size-1 の外
        """
        if not 0 <= offset < self.size:
            raise IndexError(f"オフセット {offset} が 0〜{self.size - 1} の外です")

        if self.strategy is BitmapStrategy.DYNAMIC:
            index, bit = divmod(offset, WORD_BITS)
        else:
            index, bit = 0, offset

        mask = 1 << bit
        if self._words[index] & mask:
            return False
        self._words[index] |= mask
        return True

    def count(self) -> int:
        return sum(word.bit_count() for word in self._words)

    def freeze(self) -> TicketKey:
        return TicketKey(self.strategy, tuple(self._words))
