"""
ロト クイックピック - 組み合わせ・確率計算モジュール

階乗を使わずに二項係数と当選確率（超幾何分布）を正確に計算する。
値は128ビット符号なし整数の範囲に制限し、超えた場合は
切り捨てずに CalculationOverflowError を送出する。
"""

from typing import Optional

from src.common.errors import CalculationOverflowError, InvalidMatchCountError, PickExceedsRangeError

# 計算で許容する最大値（128ビット符号なし整数）
U128_MAX = (1 << 128) - 1


def _checked_mul(a: int, b: int, operation: str) -> int:
    """乗算結果が U128_MAX を超えたら CalculationOverflowError"""
    result = a * b
    if result > U128_MAX:
        raise CalculationOverflowError(operation)
    return result


def combination(n: int, k: int) -> int:
    """
    二項係数 C(n, k) を計算する。

    C(n, k) = C(n, n-k) を利用して k を小さい方に寄せ、
    result = result * (n - i) / (i + 1) を i = 0..k-1 で繰り返す。
    各ステップの除算は常に割り切れる。

    Args:
        n: 全体の個数
        k: 選ぶ個数

    Returns:
        C(n, k)。k > n の場合は 0

    Raises:
        ValueError: n または k が負
        CalculationOverflowError: 途中の積が128ビットを超えた場合
    """
    if n < 0 or k < 0:
        raise ValueError(f"不正な引数: C({n},{k})")
    if k > n:
        return 0
    if k == 0 or k == n:
        return 1

    k = min(k, n - k)
    result = 1

    for i in range(k):
        result = _checked_mul(
            result,
            n - i,
            f"C({n},{k}) の乗算がオーバーフロー（反復 {i}）",
        )
        result, remainder = divmod(result, i + 1)
        if remainder:
            # 連続する i+1 個の整数の積は (i+1)! で必ず割り切れる
            raise ArithmeticError(f"内部不変条件違反: C({n},{k}) の除算が割り切れない（反復 {i}）")

    return result


def calculate_probability(total: int, pick: int, match: int) -> tuple[int, int]:
    """
    pick 個を選んだとき、ちょうど match 個が一致する場合の数を返す。

    確率は favorable / total_outcomes で求まる。

    Args:
        total: 数字の総数
        pick: 1口あたりの選択数
        match: 一致数

    Returns:
        (favorable, total_outcomes) のタプル

    Raises:
        PickExceedsRangeError: pick が 0〜total の外の場合
        InvalidMatchCountError: match が 0〜pick の外の場合
        CalculationOverflowError: 計算が128ビットを超えた場合
    """
    if not 0 <= pick <= total:
        raise PickExceedsRangeError(pick, total)
    if not 0 <= match <= pick:
        raise InvalidMatchCountError(match, pick)

    total_outcomes = combination(total, pick)

    ways_to_match = combination(pick, match)
    ways_to_miss = combination(total - pick, pick - match)

    favorable = _checked_mul(
        ways_to_match,
        ways_to_miss,
        f"当選パターン数: {ways_to_match} * {ways_to_miss}",
    )
    return favorable, total_outcomes


def probability_table(total: int, pick: int) -> list[dict]:
    """
    一致数ごとの当選確率表を作成する。

    Args:
        total: 数字の総数
        pick: 1口あたりの選択数

    Returns:
        一致数の降順に並んだ辞書のリスト:
        [
            {
                "match": int,          # 一致数
                "favorable": int,      # 該当する組み合わせ数
                "total": int,          # 組み合わせ総数
                "probability": float,  # 確率
                "odds": float | None,  # 1/確率（該当なしはNone）
            },
            ...
        ]
    """
    rows: list[dict] = []
    for match in range(pick, -1, -1):
        favorable, outcomes = calculate_probability(total, pick, match)
        odds: Optional[float] = outcomes / favorable if favorable else None
        rows.append({
            "match": match,
            "favorable": favorable,
            "total": outcomes,
            "probability": favorable / outcomes if outcomes else 0.0,
            "odds": odds,
        })
    return rows
