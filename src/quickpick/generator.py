"""
ロト クイックピック - ユニークチケット一括生成エンジン

指定口数の互いに異なるチケットを生成する。

処理の流れ:
    1. 実現可能性の確認: 要求口数 ≤ C(size, pick) でなければ即座に失敗
    2. 抽選ループ: TicketKey の集合に追加していき、重複も1試行として数える
    3. 終了判定: 要求口数に達したら成功、試行上限に達したら失敗
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from src.common.errors import TooManyUniqueGamesError, UniqueGenerationError
from src.common.models import BallRange, Config, GameCount, PickCount, Ticket
from src.common.probability import combination
from src.quickpick.rng import RandomSource
from src.quickpick.sampler import draw_ticket_key
from src.quickpick.ticket_key import TicketKey, select_strategy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AttemptPolicy:
    """
    試行回数の上限を決めるポリシー。

    要求口数 / 組み合わせ総数 の比率が大きいほど重複が起きやすいため、
    比率に応じて要求口数に掛ける倍率を大きくする。
    倍率と閾値は経験的な値で、呼び出し側から差し替えられる。
    """

    low_ratio: float = 0.5
    high_ratio: float = 0.8
    low_multiplier: int = 100
    mid_multiplier: int = 1_000
    high_multiplier: int = 10_000

    def __post_init__(self) -> None:
        if not 0 < self.low_ratio <= self.high_ratio:
            raise ValueError(f"不正な閾値: low_ratio={self.low_ratio}, high_ratio={self.high_ratio}")
        if min(self.low_multiplier, self.mid_multiplier, self.high_multiplier) < 1:
            raise ValueError("倍率は1以上を指定してください")

    def max_attempts(self, requested: int, max_possible: int) -> int:
        """
        試行回数の上限を返す。

        Args:
            requested: 要求口数
            max_possible: 組み合わせ総数

        Returns:
            比率 < low_ratio なら requested × low_multiplier、
            比率 < high_ratio なら requested × mid_multiplier、
            それ以外は requested × high_multiplier
        """
        ratio = requested / max_possible
        if ratio < self.low_ratio:
            return requested * self.low_multiplier
        if ratio < self.high_ratio:
            return requested * self.mid_multiplier
        return requested * self.high_multiplier


DEFAULT_ATTEMPT_POLICY = AttemptPolicy()


def generate_unique_tickets(
    rng: RandomSource,
    ball_range: BallRange,
    pick: PickCount,
    game_count: GameCount,
    policy: Optional[AttemptPolicy] = None,
    progress_callback: Optional[Callable[[int, int], None]] = None,
    progress_interval: int = 1,
) -> list[Ticket]:
    """
    互いに異なるチケットを game_count 口生成する。

    Args:
        rng: 乱数源
        ball_range: 数字範囲
        pick: 1口あたりの選択数
        game_count: 生成する口数
        policy: 試行回数の上限ポリシー（省略時は DEFAULT_ATTEMPT_POLICY）
        progress_callback: 進行状況通知関数 fn(生成済み口数, 要求口数)
        progress_interval: コールバック呼び出し間隔（生成口数）

    Returns:
        チケットのリスト（並び順に意味はない）

    Raises:
        TooManyUniqueGamesError: 要求口数が組み合わせ総数を超える（抽選は行わない）
        UniqueGenerationError: 試行上限までに要求口数に達しなかった
        CalculationOverflowError: 組み合わせ総数が128ビットを超える
        ValueError: progress_interval が1未満
    """
    if progress_interval < 1:
        raise ValueError(f"不正な進捗間隔: {progress_interval} (1以上を指定してください)")

    policy = policy or DEFAULT_ATTEMPT_POLICY
    requested = game_count.value

    max_possible = combination(ball_range.size, pick.value)
    if requested > max_possible:
        raise TooManyUniqueGamesError(requested, max_possible)

    max_attempts = policy.max_attempts(requested, max_possible)
    strategy = select_strategy(ball_range)
    logger.debug(
        "ユニーク生成開始: 範囲=%s 選択数=%d 口数=%d 組み合わせ総数=%d 方式=%s 試行上限=%d",
        ball_range, pick.value, requested, max_possible, strategy.name, max_attempts,
    )

    keys: set[TicketKey] = set()
    attempts = 0

    while len(keys) < requested:
        if attempts >= max_attempts:
            logger.debug("試行上限に到達: %d / %d 口", len(keys), requested)
            raise UniqueGenerationError(requested, len(keys))

        before = len(keys)
        keys.add(draw_ticket_key(rng, ball_range, pick, strategy))
        attempts += 1

        # 進行状況の通知
        if progress_callback and len(keys) > before and len(keys) % progress_interval == 0:
            progress_callback(len(keys), requested)

    logger.debug("ユニーク生成完了: %d 口（試行 %d 回、重複 %d 回）", requested, attempts, attempts - requested)

    # to_balls() は昇順で返すため Ticket 側の並べ替えは発生しない
    return [Ticket(tuple(key.to_balls(ball_range))) for key in keys]


def generate_tickets(
    rng: RandomSource,
    config: Config,
    policy: Optional[AttemptPolicy] = None,
    progress_callback: Optional[Callable[[int, int], None]] = None,
    progress_interval: int = 1,
) -> list[Ticket]:
    """
    生成設定に従ってユニークなチケットを生成する。

    使用例:
        >>> from src.common.models import Config
        >>> from src.quickpick.rng import NumpyRandomSource
        >>> config = Config.new(5, 1, 60, 6)
        >>> tickets = generate_tickets(NumpyRandomSource(seed=1), config)
        >>> len(tickets)
        5
    """
    return generate_unique_tickets(
        rng,
        config.range,
        config.pick,
        config.game_count,
        policy=policy,
        progress_callback=progress_callback,
        progress_interval=progress_interval,
    )
