"""
ロト クイックピック - ドメインモデル

数字・数字範囲・選択数・口数・チケット・生成設定を
検証済みの不変オブジェクトとして表現する。
検証は生成時に一度だけ行い、不正な値は型付きの例外で拒否する。
"""

from dataclasses import dataclass
from typing import Iterable, Iterator

from src.common import get_game_config
from src.common.errors import (
    InvalidBallNumberError,
    InvalidRangeError,
    PickExceedsRangeError,
    ZeroGamesError,
)

# 数字として扱える値の上限（1バイトに収まる範囲）
BALL_NUMBER_MAX = 255


@dataclass(frozen=True, order=True)
class BallNumber:
    """抽選で使われる1個の数字（0〜255）"""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise InvalidBallNumberError(self.value)
        if not 0 <= self.value <= BALL_NUMBER_MAX:
            raise InvalidBallNumberError(self.value)

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return f"{self.value:02d}"


@dataclass(frozen=True)
class BallRange:
    """
    数字範囲（両端を含む）。

    start < end を保証するため、範囲の個数 size は常に2以上になる。
    """

    start: BallNumber
    end: BallNumber

    def __post_init__(self) -> None:
        if self.start >= self.end:
            raise InvalidRangeError(self.start.value, self.end.value)

    @classmethod
    def of(cls, start: int, end: int) -> "BallRange":
        """整数の組から生成する"""
        return cls(BallNumber(start), BallNumber(end))

    @property
    def size(self) -> int:
        """範囲に含まれる数字の個数"""
        return self.end.value - self.start.value + 1

    def contains(self, ball: BallNumber) -> bool:
        return self.start <= ball <= self.end

    def offset_of(self, value: int) -> int:
        """数字を範囲先頭からのオフセット（0〜size-1）に変換する"""
        return value - self.start.value

    def __iter__(self) -> Iterator[BallNumber]:
        return (BallNumber(v) for v in range(self.start.value, self.end.value + 1))

    def __str__(self) -> str:
        return f"{self.start.value}〜{self.end.value}"


@dataclass(frozen=True)
class PickCount:
    """1口あたりの選択数（1 ≤ value ≤ 範囲の個数）"""

    value: int
    available: int

    def __post_init__(self) -> None:
        if not 1 <= self.value <= self.available:
            raise PickExceedsRangeError(self.value, self.available)

    @classmethod
    def new(cls, value: int, ball_range: BallRange) -> "PickCount":
        return cls(value, ball_range.size)


@dataclass(frozen=True)
class GameCount:
    """生成するユニークな口数（1以上）"""

    value: int

    def __post_init__(self) -> None:
        if self.value < 1:
            raise ZeroGamesError()


@dataclass(frozen=True)
class Ticket:
    """
    1口分のチケット。

    数字は昇順・重複なしのタプルとして保持するため、
    等価比較とハッシュは入力順に依存しない。
    """

    balls: tuple[BallNumber, ...]

    def __post_init__(self) -> None:
        # リストやイテレータも受け付けるため、まずタプルに固定する
        balls = tuple(self.balls)
        # 昇順・重複なしで渡された場合は並べ替えを省略する
        if not _is_canonical(balls):
            balls = tuple(sorted({_to_ball(b) for b in balls}))
        object.__setattr__(self, "balls", balls)

    @classmethod
    def of(cls, *values: int) -> "Ticket":
        """可変長の整数から生成する"""
        return cls(tuple(BallNumber(v) for v in values))

    def values(self) -> list[int]:
        """整数のリストとして取得する"""
        return [b.value for b in self.balls]

    def __len__(self) -> int:
        return len(self.balls)

    def __iter__(self) -> Iterator[BallNumber]:
        return iter(self.balls)

    def __contains__(self, ball: object) -> bool:
        if isinstance(ball, int):
            return any(b.value == ball for b in self.balls)
        return ball in self.balls

    def __str__(self) -> str:
        return " ".join(str(b) for b in self.balls)


def _to_ball(value: "BallNumber | int") -> BallNumber:
    return value if isinstance(value, BallNumber) else BallNumber(value)


def _is_canonical(balls: Iterable) -> bool:
    prev = None
    for b in balls:
        if not isinstance(b, BallNumber):
            return False
        if prev is not None and not prev < b:
            return False
        prev = b
    return True


@dataclass(frozen=True)
class Config:
    """
    チケット生成設定（口数・数字範囲・選択数）。

    生の値からは Config.new() を通して生成すること。
    各要素はそれぞれの型の検証を通過済みであることが保証される。
    """

    game_count: GameCount
    range: BallRange
    pick: PickCount

    def __post_init__(self) -> None:
        # 選択数は別の範囲に対して検証されている可能性がある
        size = self.range.size
        if self.pick.available != size or self.pick.value > size:
            raise PickExceedsRangeError(self.pick.value, size)

    @classmethod
    def new(cls, game_count: int, start: int, end: int, pick: int) -> "Config":
        """
        生の値から設定を生成する。

        start と end が逆順の場合は入れ替える。
        検証は口数 → 数字範囲 → 選択数の順で行い、最初の違反で例外を送出する。

        Args:
            game_count: 生成する口数
            start: 数字範囲の開始値（両端を含む）
            end: 数字範囲の終了値（両端を含む）
            pick: 1口あたりの選択数

        Raises:
            ZeroGamesError: 口数が0以下
            InvalidBallNumberError: 数字が0〜255の範囲外
            InvalidRangeError: 開始値と終了値が等しい
            PickExceedsRangeError: 選択数が0、または範囲の個数を超える
        """
        games = GameCount(game_count)

        if start > end:
            start, end = end, start

        ball_range = BallRange.of(start, end)
        pick_count = PickCount.new(pick, ball_range)

        return cls(game_count=games, range=ball_range, pick=pick_count)

    @classmethod
    def from_preset(cls, game_key: str, game_count: int) -> "Config":
        """
        LOTTERY_CONFIG のプリセットから設定を生成する。

        Raises:
            ValueError: 不正なゲームキーが指定された場合
        """
        config = get_game_config(game_key)
        return cls.new(game_count, config["range_min"], config["range_max"], config["pick_size"])
