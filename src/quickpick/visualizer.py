"""
ロト クイックピック - インタラクティブ可視化モジュール

plotly を使用して当選確率表と生成結果の数字分布を
インタラクティブなHTMLグラフとして出力する。
"""

import os
from datetime import datetime
from typing import Optional

import plotly.graph_objects as go

from src.common.models import Config, Ticket
from src.common.probability import probability_table
from src.quickpick.analyzer import analyze_number_frequency

# ── カラーパレット ──
BG_COLOR = "#0d1117"
CARD_COLOR = "#161b22"
TEXT_COLOR = "#e6edf3"
ACCENT_COLOR = "#58a6ff"
GRID_COLOR = "#30363d"


def _ensure_output_dir(output_dir: str) -> None:
    """出力ディレクトリが存在しない場合は作成する"""
    os.makedirs(output_dir, exist_ok=True)


def _apply_dark_layout(fig: go.Figure, title: str, x_title: str, y_title: str) -> None:
    fig.update_layout(
        title=dict(text=title, font=dict(size=20, color=TEXT_COLOR), x=0.5),
        xaxis=dict(title=x_title, tickmode="linear", dtick=1, gridcolor=GRID_COLOR, color=TEXT_COLOR),
        yaxis=dict(title=y_title, gridcolor=GRID_COLOR, color=TEXT_COLOR),
        plot_bgcolor=CARD_COLOR,
        paper_bgcolor=BG_COLOR,
        font=dict(color=TEXT_COLOR),
        hoverlabel=dict(bgcolor=CARD_COLOR, font_size=13, font_color=TEXT_COLOR),
        margin=dict(l=60, r=30, t=60, b=40),
        height=450,
    )


def build_probability_figure(total: int, pick: int) -> go.Figure:
    """
    一致数ごとの当選確率の棒グラフ（対数軸）を作成する。

    該当数が0の一致数は対数軸に描けないため除外する。
    """
    rows = [row for row in probability_table(total, pick) if row["favorable"] > 0]

    fig = go.Figure()
    fig.add_trace(
        go.Bar(
            x=[row["match"] for row in rows],
            y=[row["probability"] for row in rows],
            marker_color=ACCENT_COLOR,
            marker_line_width=0,
            customdata=[[row["favorable"], row["odds"]] for row in rows],
            hovertemplate=(
                "<b>%{x}個一致</b><br>確率: %{y:.4e}<br>"
                "該当数: %{customdata[0]:,}<br>オッズ: 1 / %{customdata[1]:,.1f}<extra></extra>"
            ),
        )
    )
    _apply_dark_layout(fig, f"🎯 {total}個から{pick}個 一致数別の当選確率", "一致数", "確率")
    fig.update_yaxes(type="log")
    return fig


def build_frequency_figure(tickets: list[Ticket], config: Config) -> go.Figure:
    """生成したチケットの数字別出現回数の棒グラフを作成する"""
    freq = analyze_number_frequency(tickets, config.range)
    numbers = list(freq.keys())
    counts = [freq[n] for n in numbers]

    # 期待値（全数字が等確率の場合）
    expected = len(tickets) * config.pick.value / config.range.size

    fig = go.Figure()
    fig.add_hline(
        y=expected,
        line_dash="dash",
        line_color="#8b949e",
        line_width=1,
        annotation_text=f"期待値 ({expected:,.1f})",
        annotation_position="top right",
        annotation_font_color="#8b949e",
    )
    fig.add_trace(
        go.Bar(
            x=numbers,
            y=counts,
            marker_color=ACCENT_COLOR,
            marker_line_width=0,
            hovertemplate="<b>数字 %{x}</b><br>出現回数: %{y:,}<extra></extra>",
        )
    )
    _apply_dark_layout(fig, "🎰 生成結果 数字別出現回数", "数字", "出現回数")
    return fig


def generate_probability_html(
    config: Config,
    tickets: Optional[list[Ticket]] = None,
    title: str = "クイックピック",
    output_dir: str = "output",
    filepath: Optional[str] = None,
) -> str:
    """
    当選確率表（と生成結果の数字分布）のHTMLレポートを生成する。

    Args:
        config: 生成設定
        tickets: 生成したチケット（省略時は確率グラフのみ）
        title: 見出しに使うゲーム名
        output_dir: 出力ディレクトリ
        filepath: 出力ファイルパス（省略時は自動生成）

    Returns:
        保存したHTMLファイルのパス
    """
    _ensure_output_dir(output_dir)

    if filepath is None:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filepath = os.path.join(output_dir, f"quickpick_{timestamp}.html")

    total = config.range.size
    pick = config.pick.value

    sections = [build_probability_figure(total, pick).to_html(full_html=False, include_plotlyjs=False)]
    if tickets:
        sections.append(build_frequency_figure(tickets, config).to_html(full_html=False, include_plotlyjs=False))

    charts_html = "\n".join(f'    <div class="chart-section">\n        {html}\n    </div>' for html in sections)
    timestamp_str = datetime.now().strftime("%Y-%m-%d %H:%M:%S")

    html_content = f"""<!DOCTYPE html>
<html lang="ja">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{title} 当選確率レポート</title>
    <script src="https://cdn.plot.ly/plotly-3.0.1.min.js"></script>
    <style>
        * {{ margin: 0; padding: 0; box-sizing: border-box; }}
        body {{
            background: {BG_COLOR};
            color: {TEXT_COLOR};
            font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Helvetica, Arial, sans-serif;
            padding: 20px;
        }}
        .header {{
            text-align: center;
            padding: 30px 0;
            border-bottom: 1px solid {GRID_COLOR};
            margin-bottom: 30px;
        }}
        .header .meta {{ color: #8b949e; font-size: 0.9em; }}
        .chart-section {{
            background: {CARD_COLOR};
            border: 1px solid {GRID_COLOR};
            border-radius: 12px;
            padding: 20px;
            margin-bottom: 25px;
        }}
    </style>
</head>
<body>
    <div class="header">
        <h1>🎯 {title} 当選確率レポート</h1>
        <p class="meta">数字範囲: {config.range} / 選択数: {pick}個 / 作成日時: {timestamp_str}</p>
    </div>
{charts_html}
</body>
</html>"""

    with open(filepath, "w", encoding="utf-8") as f:
        f.write(html_content)

    return filepath
