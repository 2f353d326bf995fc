"""
ロト クイックピック - 乱数源

生成エンジンは乱数源を所有・初期化せず、呼び出し側から受け取る。
「閉区間 [low, high] の一様な整数を返す」だけの狭いインターフェース
RandomSource を満たせば、どの実装でも差し替えられる。
"""

import random
from typing import Optional, Protocol, Sequence

import numpy as np


class RandomSource(Protocol):
    """閉区間 [low, high] の一様な整数を返す乱数源"""

    def randint(self, low: int, high: int) -> int: ...


class NumpyRandomSource:
    """
    numpy の Generator を使う乱数源（CLIの既定）。

    使用例:
        >>> rng = NumpyRandomSource(seed=42)
        >>> 1 <= rng.randint(1, 43) <= 43
        True
    """

    def __init__(self, seed: Optional[int] = None) -> None:
        self._generator = np.random.default_rng(seed)

    def randint(self, low: int, high: int) -> int:
        return int(self._generator.integers(low, high, endpoint=True))


class StdlibRandomSource:
    """標準ライブラリの random.Random を使う乱数源"""

    def __init__(self, seed: Optional[int] = None) -> None:
        self._random = random.Random(seed)

    def randint(self, low: int, high: int) -> int:
        return self._random.randint(low, high)


class SequenceRandomSource:
    """
    固定の値列を先頭から繰り返し返す決定的な乱数源（テスト用）。

    返そうとした値が要求区間外の場合は ValueError を送出する。
    """

    def __init__(self, values: Sequence[int]) -> None:
        if not values:
            raise ValueError("値列が空です")
        self.values = list(values)
        self.index = 0

    @property
    def calls(self) -> int:
        """randint() が呼ばれた回数"""
        return self.index

    def randint(self, low: int, high: int) -> int:
        value = self.values[self.index % len(self.values)]
        self.index += 1
        if not low <= value <= high:
            raise ValueError(f"値列の値 {value} が区間 [{low}, {high}] の外です")
        return value
