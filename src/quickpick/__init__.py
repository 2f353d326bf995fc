"""
ロト クイックピック - チケット生成エンジン

数字範囲から重複なしの数字セットを抽選し、
互いに異なるチケットを指定口数だけ生成する。

使用方法:
    python -m src.quickpick [--game loto6|loto7|...] [--games N] [--possibilities]
"""

from src.common.models import Config
from src.common.probability import calculate_probability, combination
from src.quickpick.generator import (
    AttemptPolicy,
    generate_tickets,
    generate_unique_tickets,
)
from src.quickpick.rng import (
    NumpyRandomSource,
    RandomSource,
    SequenceRandomSource,
    StdlibRandomSource,
)
from src.quickpick.sampler import generate_ticket
from src.quickpick.ticket_key import BitmapStrategy, TicketKey, select_strategy

__all__ = [
    "Config",
    "calculate_probability",
    "combination",
    "AttemptPolicy",
    "generate_tickets",
    "generate_unique_tickets",
    "generate_ticket",
    "RandomSource",
    "NumpyRandomSource",
    "StdlibRandomSource",
    "SequenceRandomSource",
    "BitmapStrategy",
    "TicketKey",
    "select_strategy",
]
