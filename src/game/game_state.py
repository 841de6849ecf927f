"""牌桌状态 - 选牌状态由调用方持有，评估器本身无状态"""

from enum import Enum
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set, Union

from src.config import BOARD_CARDS
from src.engine.card import Card
from src.engine.hand_type import HandResult
from src.game.player import Player

BOARD = "board"

SPLIT_POT_TEXT = "It's a Tie (Split Pot)!"


class GamePhase(str, Enum):
    """牌桌阶段"""
    SELECTING = "SELECTING"     # 选牌中
    READY = "READY"             # 所有牌位已选满
    SHOWDOWN = "SHOWDOWN"       # 已比牌


@dataclass(frozen=True)
class Slot:
    """一个牌位：owner 为 BOARD 或座位号"""
    owner: Union[int, str]
    index: int

    @property
    def is_board(self) -> bool:
        return self.owner == BOARD

    def __str__(self) -> str:
        return f"{self.owner}[{self.index}]"


@dataclass
class GameEvent:
    """牌桌事件记录"""
    phase: GamePhase
    action: str                  # "select", "clear", "seat_added", "seat_removed", "reset", "showdown"
    player_id: Optional[int] = None
    data: Any = None


@dataclass
class ShowdownResult:
    """一次比牌的结果"""
    results: Dict[int, HandResult]
    winners: Set[int]
    headline: str

    @property
    def is_split(self) -> bool:
        return len(self.winners) > 1


@dataclass
class TableState:
    """一手牌的完整选牌状态"""
    players: List[Player]
    board: List[Optional[Card]] = field(default_factory=lambda: [None] * BOARD_CARDS)
    used_cards: Set[Card] = field(default_factory=set)
    phase: GamePhase = GamePhase.SELECTING
    showdown: Optional[ShowdownResult] = None

    # 事件日志
    events: List[GameEvent] = field(default_factory=list)

    @property
    def board_cards(self) -> List[Card]:
        return [c for c in self.board if c is not None]
