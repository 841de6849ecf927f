"""玩家模型 - 一个座位的两张底牌与比牌结果"""

from dataclasses import dataclass, field
from typing import List, Optional

from src.config import HOLE_CARDS
from src.engine.card import Card
from src.engine.hand_type import HandResult


@dataclass
class Player:
    """一个座位"""
    id: int                          # 座位号，从 1 开始
    name: str                        # 显示名
    hole: List[Optional[Card]] = field(default_factory=lambda: [None] * HOLE_CARDS)
    result: Optional[HandResult] = None   # 最近一次比牌结果
    is_winner: bool = False

    @property
    def hole_cards(self) -> List[Card]:
        """已选的底牌"""
        return [c for c in self.hole if c is not None]

    @property
    def is_ready(self) -> bool:
        return all(c is not None for c in self.hole)

    def clear_result(self) -> None:
        self.result = None
        self.is_winner = False

    def reset_for_new_hand(self) -> None:
        """新一手重置"""
        self.hole = [None] * HOLE_CARDS
        self.clear_result()
