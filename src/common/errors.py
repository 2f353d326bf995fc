"""
ロト クイックピック - 例外クラス

生成エンジン・組み合わせ計算で発生するエラーを定義する。
すべて LottoError を基底とし、対応する組み込み例外も継承するため
`except ValueError` のような従来の捕捉方法もそのまま使える。
"""


class LottoError(Exception):
    """ロト クイックピックの全エラーの基底クラス"""


class InvalidBallNumberError(LottoError, ValueError):
    """数字が扱える範囲（0〜255）外"""

    def __init__(self, value: int) -> None:
        self.value = value
        super().__init__(f"不正な数字: {value} (有効: 0〜255)")


class InvalidRangeError(LottoError, ValueError):
    """開始値が終了値以上"""

    def __init__(self, start: int, end: int) -> None:
        self.start = start
        self.end = end
        super().__init__(f"不正な数字範囲: 開始値({start})は終了値({end})より小さくしてください")


class PickExceedsRangeError(LottoError, ValueError):
    """選択数が0、または数字範囲の個数を超えている"""

    def __init__(self, pick: int, available: int) -> None:
        self.pick = pick
        self.available = available
        super().__init__(f"不正な選択数: {available}個の数字から{pick}個は選べません")


class ZeroGamesError(LottoError, ValueError):
    """生成口数が0"""

    def __init__(self) -> None:
        super().__init__("不正な口数: 1口以上を指定してください")


class CalculationOverflowError(LottoError, OverflowError):
    """組み合わせ計算が128ビット整数の上限を超えた"""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"計算オーバーフロー: {operation}")


class InvalidMatchCountError(LottoError, ValueError):
    """一致数が選択数を超えている"""

    def __init__(self, match_count: int, pick_count: int) -> None:
        self.match_count = match_count
        self.pick_count = pick_count
        super().__init__(f"不正な一致数: {pick_count}個の選択で{match_count}個は一致できません")


class TooManyUniqueGamesError(LottoError, ValueError):
    """要求口数が組み合わせ総数を超えている"""

    def __init__(self, requested: int, maximum: int) -> None:
        self.requested = requested
        self.maximum = maximum
        super().__init__(f"口数が多すぎます: {requested:,}口は生成できません（最大: {maximum:,}口）")


class UniqueGenerationError(LottoError, RuntimeError):
    """試行回数の上限までに要求口数を生成できなかった"""

    def __init__(self, requested: int, generated: int) -> None:
        self.requested = requested
        self.generated = generated
        super().__init__(f"ユニーク生成失敗: {requested:,}口中{generated:,}口しか生成できませんでした（試行上限到達）")


class BitmapWidthError(LottoError, ValueError):
    """数字範囲の個数がビットマップの幅に収まらない"""

    def __init__(self, strategy: str, size: int) -> None:
        self.strategy = strategy
        self.size = size
        super().__init__(f"ビットマップ幅不足: {strategy} では{size}個の数字範囲を扱えません")


class InputParseError(LottoError, ValueError):
    """入力文字列の解析に失敗した（CLI層で使用）"""

    def __init__(self, text: str, reason: str = "") -> None:
        self.text = text
        message = f"入力の解析に失敗しました: '{text}'"
        if reason:
            message += f" ({reason})"
        super().__init__(message)
