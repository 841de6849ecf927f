"""牌型定义 - 德州扑克9种成牌类别与评估结果"""

from enum import IntEnum
from dataclasses import dataclass, field
from functools import total_ordering
from typing import Tuple

from .card import Card


class HandCategory(IntEnum):
    """成牌类别（数值越大牌越大）。皇家同花顺与同花顺同为 10"""
    HIGH_CARD = 2
    ONE_PAIR = 3
    TWO_PAIR = 4
    THREE_OF_A_KIND = 5
    STRAIGHT = 6
    FLUSH = 7
    FULL_HOUSE = 8
    FOUR_OF_A_KIND = 9
    STRAIGHT_FLUSH = 10


HAND_NAMES = {
    HandCategory.STRAIGHT_FLUSH: "Royal Flush / Straight Flush",
    HandCategory.FOUR_OF_A_KIND: "Four of a Kind",
    HandCategory.FULL_HOUSE: "Full House",
    HandCategory.FLUSH: "Flush",
    HandCategory.STRAIGHT: "Straight",
    HandCategory.THREE_OF_A_KIND: "Three of a Kind",
    HandCategory.TWO_PAIR: "Two Pair",
    HandCategory.ONE_PAIR: "One Pair",
    HandCategory.HIGH_CARD: "High Card",
}


@total_ordering
@dataclass(frozen=True)
class HandResult:
    """
    一次评估的结果。
    比较只看 (category, tiebreak_score)：类别高者胜，同类别比 tiebreak。
    tiebreak_score 只在同类别之间有意义。cards 为组成最佳牌型的五张牌，仅供展示。
    """
    category: HandCategory
    tiebreak_score: int
    cards: Tuple[Card, ...] = field(default=(), compare=False)

    @property
    def name(self) -> str:
        return HAND_NAMES[self.category]

    @property
    def key(self) -> Tuple[int, int]:
        return int(self.category), self.tiebreak_score

    def __lt__(self, other: "HandResult") -> bool:
        if not isinstance(other, HandResult):
            return NotImplemented
        return self.key < other.key

    def __repr__(self) -> str:
        cards_str = " ".join(c.token for c in self.cards)
        return f"[{self.name}] {self.tiebreak_score} {cards_str}".rstrip()
