"""
ロト クイックピック - 生成結果・確率レポートモジュール

生成したチケットと当選確率表をコンソールに出力する。
"""

from collections import Counter

from src.common.models import BallRange, Config, Ticket
from src.common.probability import combination, probability_table


def analyze_number_frequency(
    tickets: list[Ticket],
    ball_range: BallRange,
) -> dict[int, int]:
    """
    各数字の出現回数を集計する。

    Args:
        tickets: 生成したチケット
        ball_range: 数字範囲

    Returns:
        {数字: 出現回数} の辞書（範囲内の全数字を含む）
    """
    counter: Counter = Counter()
    for ticket in tickets:
        counter.update(ticket.values())

    # 出現0回の数字も含める
    return {ball.value: counter.get(ball.value, 0) for ball in ball_range}


def format_ticket(ticket: Ticket) -> str:
    """チケットを "05 - 12 - 33" の形式で整形する"""
    return " - ".join(str(ball) for ball in ticket)


def print_ticket_report(
    tickets: list[Ticket],
    config: Config,
    title: str = "クイックピック",
) -> None:
    """
    生成したチケットの一覧をコンソールに出力する。

    Args:
        tickets: 生成したチケット
        config: 生成設定
        title: 見出しに使うゲーム名
    """
    print()
    print("=" * 60)
    print(f"  🎰 {title} 生成結果")
    print("=" * 60)
    print(f"  数字範囲: {config.range}  選択数: {config.pick.value}個  口数: {len(tickets):,}口")
    print()

    # 表示は数字順（生成順には意味がない）
    for no, ticket in enumerate(sorted(tickets, key=lambda t: t.values()), 1):
        print(f"  {no:>4}:  {format_ticket(ticket)}")

    print()
    print("=" * 60)


def print_probability_report(total: int, pick: int) -> None:
    """
    一致数ごとの当選確率表をコンソールに出力する。

    Args:
        total: 数字の総数
        pick: 1口あたりの選択数
    """
    rows = probability_table(total, pick)

    print()
    print(f"  【当選確率表】 {total}個から{pick}個を選択")
    print(f"  この組み合わせは {combination(total, pick):,} 通りです。")
    print()
    print(f"  {'一致数':>6}  {'該当数':>20}  {'確率':>12}  {'オッズ':>20}")
    print(f"  {'─' * 6}  {'─' * 20}  {'─' * 12}  {'─' * 20}")
    for row in rows:
        odds = f"1 / {row['odds']:,.1f}" if row["odds"] is not None else "-"
        print(f"  {row['match']:>6}  {row['favorable']:>20,}  {row['probability']:>12.4e}  {odds:>20}")
    print()
