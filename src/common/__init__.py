"""
ロト クイックピック - 共通モジュール

ゲーム設定（数字範囲・選択数）のプリセットと、
ドメインモデル・組み合わせ計算・例外クラスを提供する。
"""

# ゲームキーごとの設定
#   name:       表示名
#   range_min:  数字の最小値
#   range_max:  数字の最大値
#   pick_size:  1口あたりの選択数
LOTTERY_CONFIG: dict[str, dict] = {
    "LOTO6": {
        "name": "ロト6",
        "range_min": 1,
        "range_max": 43,
        "pick_size": 6,
    },
    "LOTO7": {
        "name": "ロト7",
        "range_min": 1,
        "range_max": 37,
        "pick_size": 7,
    },
    "MINILOTO": {
        "name": "ミニロト",
        "range_min": 1,
        "range_max": 31,
        "pick_size": 5,
    },
    "MEGA_SENA": {
        "name": "メガセナ",
        "range_min": 1,
        "range_max": 60,
        "pick_size": 6,
    },
    "LOTOMANIA": {
        "name": "ロトマニア",
        "range_min": 0,
        "range_max": 99,
        "pick_size": 50,
    },
    "POWERBALL": {
        "name": "パワーボール（白球）",
        "range_min": 1,
        "range_max": 69,
        "pick_size": 5,
    },
}


def get_game_config(game_key: str) -> dict:
    """
    ゲームキーから設定辞書を取得する（大文字小文字を区別しない）。

    Raises:
        ValueError: 不正なゲームキーが指定された場合
    """
    key = game_key.upper()
    if key not in LOTTERY_CONFIG:
        raise ValueError(f"不正なゲームキー: '{game_key}' (有効: {', '.join(LOTTERY_CONFIG.keys())})")
    return LOTTERY_CONFIG[key]
