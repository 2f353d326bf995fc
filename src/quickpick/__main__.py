"""
ロト クイックピック - CLIエントリーポイント

使用方法:
    python -m src.quickpick [オプション]

実行例:
    # ロト6（デフォルト）を1口
    python -m src.quickpick

    # ロト7を10口、当選確率表も表示
    python -m src.quickpick --game loto7 --games 10 --possibilities

    # 任意の範囲（1〜60から6個）を5口、シード固定
    python -m src.quickpick --range 1-60 --pick 6 --games 5 --seed 42

    # 当選確率のインタラクティブHTMLグラフを生成
    python -m src.quickpick --game loto6 --games 100 --visualize
"""

import argparse
import logging
import re
import sys
import time
from typing import Optional

from src.common import LOTTERY_CONFIG, get_game_config
from src.common.errors import InputParseError, LottoError
from src.common.models import Config
from src.quickpick.analyzer import print_probability_report, print_ticket_report
from src.quickpick.generator import generate_tickets
from src.quickpick.rng import NumpyRandomSource
from src.quickpick.visualizer import generate_probability_html

_RANGE_RE = re.compile(r"^\s*(\d+)\s*[-~〜:]\s*(\d+)\s*$")


def parse_range_text(text: str) -> tuple[int, int]:
    """
    "1-60" 形式の文字列を (開始値, 終了値) に変換する。

    区切りは "-", "~", "〜", ":" のいずれか。

    Raises:
        InputParseError: 形式が不正な場合
    """
    m = _RANGE_RE.match(text)
    if not m:
        raise InputParseError(text, "'開始-終了' の形式で指定してください")
    return int(m.group(1)), int(m.group(2))


def _parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """コマンドライン引数を解析する"""
    parser = argparse.ArgumentParser(
        prog="python -m src.quickpick",
        description="ロト クイックピック（重複なしチケット生成・当選確率計算）",
    )
    parser.add_argument(
        "--game",
        type=str,
        default=None,
        choices=[key.lower() for key in LOTTERY_CONFIG],
        help="対象ゲーム（--range 省略時のデフォルト: loto6）",
    )
    parser.add_argument(
        "--range",
        type=str,
        default=None,
        help="数字範囲（例: 1-60）。指定時は --pick も必要",
    )
    parser.add_argument(
        "--pick",
        type=int,
        default=None,
        help="1口あたりの選択数（--range と併用）",
    )
    parser.add_argument(
        "-g",
        "--games",
        type=int,
        default=1,
        help="生成する口数（デフォルト: 1）",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="乱数シード（省略時: OSのエントロピー）",
    )
    parser.add_argument(
        "-P",
        "--possibilities",
        action="store_true",
        help="組み合わせ総数と一致数別の当選確率を表示する",
    )
    parser.add_argument(
        "--visualize",
        action="store_true",
        help="当選確率のインタラクティブHTMLグラフを生成する",
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default="output",
        help="HTMLの出力ディレクトリ（デフォルト: output）",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="デバッグログを表示する",
    )
    return parser.parse_args(argv)


def _build_config(args: argparse.Namespace) -> tuple[Config, str]:
    """引数から生成設定とゲーム名を組み立てる"""
    if args.range is not None:
        if args.pick is None:
            raise InputParseError(args.range, "--range には --pick の指定が必要です")
        start, end = parse_range_text(args.range)
        config = Config.new(args.games, start, end, args.pick)
        return config, str(config.range)

    game_key = (args.game or "loto6").upper()
    config = get_game_config(game_key)
    pick = args.pick if args.pick is not None else config["pick_size"]
    return Config.new(args.games, config["range_min"], config["range_max"], pick), config["name"]


def _progress_printer(current: int, total: int) -> None:
    """生成の進行状況をコンソールに表示"""
    pct = current / total * 100
    print(f"\r  生成中... {current:>10,} / {total:,} ({pct:.1f}%)", end="", flush=True)


def main(argv: Optional[list[str]] = None) -> None:
    """メイン処理"""
    args = _parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            handlers=[logging.StreamHandler()],
        )

    try:
        config, title = _build_config(args)
    except LottoError as e:
        print(f"\n❌ エラー: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"\n🎲 {title} クイックピック")
    print(f"   範囲: {config.range}  選択数: {config.pick.value}個  口数: {config.game_count.value:,}")

    # 1. チケットの生成
    start_time = time.time()
    show_progress = config.game_count.value >= 10_000
    try:
        tickets = generate_tickets(
            NumpyRandomSource(args.seed),
            config,
            progress_callback=_progress_printer if show_progress else None,
            progress_interval=max(config.game_count.value // 20, 1),  # 5%刻みで進捗表示
        )
    except LottoError as e:
        print(f"\n❌ エラー: {e}", file=sys.stderr)
        sys.exit(1)
    if show_progress:
        print()  # 改行（進捗表示の後）

    elapsed = time.time() - start_time
    print(f"   完了！ 実行時間: {elapsed:.2f}秒")

    # 2. 結果の表示
    print_ticket_report(tickets, config, title=title)

    # 3. 当選確率
    if args.possibilities or args.visualize:
        try:
            if args.possibilities:
                print_probability_report(config.range.size, config.pick.value)
            if args.visualize:
                path = generate_probability_html(config, tickets, title=title, output_dir=args.output_dir)
                print(f"\n📊 HTMLレポートを保存しました: {path}")
        except LottoError as e:
            print(f"\n❌ エラー: {e}", file=sys.stderr)
            sys.exit(1)


if __name__ == "__main__":
    main()
