"""
ロト クイックピック - 1口抽選エンジン

数字範囲から重複なしで pick 個を一様に抽選する。

既定はビットマップ方式: 範囲内の値を一様に引き、対応するビットが
既に立っていれば捨てて引き直す。どの部分集合も等確率で得られる。

ビットマップの幅が範囲に合わない場合に備え、集合を使う従来方式
（挿入方式・除外方式）も残している。
"""

import logging
from typing import Optional

from src.common.errors import BitmapWidthError
from src.common.models import BallNumber, BallRange, PickCount, Ticket
from src.quickpick.rng import RandomSource
from src.quickpick.ticket_key import Bitmap, BitmapStrategy, TicketKey, select_strategy

logger = logging.getLogger(__name__)


def draw_ticket_key(
    rng: RandomSource,
    ball_range: BallRange,
    pick: PickCount,
    strategy: Optional[BitmapStrategy] = None,
) -> TicketKey:
    """
    ビットマップ方式で1口分のキーを抽選する。

    既に立っているビットに当たった値は捨てる（回数制限なし）。
    pick ≤ size なので必ず終了する。

    Args:
        rng: 乱数源
        ball_range: 数字範囲
        pick: 選択数
        strategy: ビットマップ幅（省略時は select_strategy の結果）

    Returns:
        pick 個のビットが立った TicketKey

    Raises:
        BitmapWidthError: strategy が範囲の個数を扱えない場合（抽選前に判定）
    """
    bitmap = Bitmap(strategy or select_strategy(ball_range), ball_range.size)
    low = ball_range.start.value
    high = ball_range.end.value

    picked = 0
    while picked < pick.value:
        value = rng.randint(low, high)
        if bitmap.test_and_set(ball_range.offset_of(value)):
            picked += 1

    key = bitmap.freeze()
    assert key.count_balls() == pick.value, "ビット数が選択数と一致しない"
    return key


def should_use_exclusion(range_size: int, pick_count: int) -> bool:
    """範囲の半分を超えて選ぶ場合は除外方式の方が捨てる乱数が少ない"""
    return pick_count > range_size // 2


def generate_by_insertion(
    rng: RandomSource,
    ball_range: BallRange,
    pick_count: int,
) -> list[BallNumber]:
    """
    挿入方式: 重複なしの数字が pick_count 個揃うまで集合に追加する。

    選択数が範囲の半分以下のときに使う。
    """
    low = ball_range.start.value
    high = ball_range.end.value

    selected: set[int] = set()
    while len(selected) < pick_count:
        selected.add(rng.randint(low, high))

    return [BallNumber(v) for v in sorted(selected)]


def generate_by_exclusion(
    rng: RandomSource,
    ball_range: BallRange,
    pick_count: int,
) -> list[BallNumber]:
    """
    除外方式: size - pick_count 個を無作為に除外し、残りを選ぶ。

    選択数が範囲の半分を超えるときに使う。
    """
    low = ball_range.start.value
    high = ball_range.end.value
    exclude_count = ball_range.size - pick_count

    excluded: set[int] = set()
    while len(excluded) < exclude_count:
        excluded.add(rng.randint(low, high))

    return [ball for ball in ball_range if ball.value not in excluded]


def generate_ticket(
    rng: RandomSource,
    ball_range: BallRange,
    pick: PickCount,
    strategy: Optional[BitmapStrategy] = None,
) -> Ticket:
    """
    1口分のチケットを抽選する。

    ビットマップ方式を優先し、指定された strategy が範囲に合わない場合は
    挿入方式・除外方式にフォールバックする。どちらの方式でも
    全ての部分集合が等確率で得られる。

    Args:
        rng: 乱数源
        ball_range: 数字範囲
        pick: 選択数
        strategy: ビットマップ幅（省略時は範囲の個数から自動選択）

    Returns:
        昇順・重複なしの Ticket
    """
    try:
        key = draw_ticket_key(rng, ball_range, pick, strategy)
    except BitmapWidthError as e:
        logger.warning("ビットマップ方式を使えないため集合方式で抽選します: %s", e)
    else:
        return Ticket(tuple(key.to_balls(ball_range)))

    if should_use_exclusion(ball_range.size, pick.value):
        balls = generate_by_exclusion(rng, ball_range, pick.value)
    else:
        balls = generate_by_insertion(rng, ball_range, pick.value)
    return Ticket(tuple(balls))
