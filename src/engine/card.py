"""牌的定义 - 德州扑克52张标准扑克牌的数据模型"""

from enum import IntEnum, Enum
from dataclasses import dataclass
from typing import Iterable, List, Union

from .errors import InvalidCardFormat


class Rank(IntEnum):
    """点数枚举（A 默认作为最大的 14）"""
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14


class Suit(str, Enum):
    """花色枚举，值为牌面字符串中的花色字母。花色之间没有大小"""
    SPADE = "s"
    HEART = "h"
    DIAMOND = "d"
    CLUB = "c"

    @property
    def symbol(self) -> str:
        return SUIT_SYMBOLS[self]


SUIT_SYMBOLS = {
    Suit.SPADE: "♠", Suit.HEART: "♥",
    Suit.DIAMOND: "♦", Suit.CLUB: "♣",
}

# 点数字符映射
RANK_DISPLAY = {
    Rank.TWO: "2", Rank.THREE: "3", Rank.FOUR: "4",
    Rank.FIVE: "5", Rank.SIX: "6", Rank.SEVEN: "7",
    Rank.EIGHT: "8", Rank.NINE: "9", Rank.TEN: "T",
    Rank.JACK: "J", Rank.QUEEN: "Q", Rank.KING: "K",
    Rank.ACE: "A",
}

_RANK_BY_CHAR = {v: k for k, v in RANK_DISPLAY.items()}
_SUIT_BY_CHAR = {s.value: s for s in Suit}

# 选牌器中的排列顺序：A 在前，2 在后
SELECTOR_RANKS = sorted(Rank, reverse=True)
SELECTOR_SUITS = [Suit.SPADE, Suit.HEART, Suit.DIAMOND, Suit.CLUB]


@dataclass(frozen=True)
class Card:
    """一张扑克牌（不可变值对象）"""
    rank: Rank
    suit: Suit

    @property
    def token(self) -> str:
        """两字符牌面，如 'As', 'Th'"""
        return f"{RANK_DISPLAY[self.rank]}{self.suit.value}"

    @property
    def display(self) -> str:
        return f"{RANK_DISPLAY[self.rank]}{self.suit.symbol}"

    def __repr__(self) -> str:
        return self.token

    def __str__(self) -> str:
        return self.token


def parse_card(text: str) -> Card:
    """
    解析两字符牌面：第一个字符为点数（A K Q J T 9..2），
    第二个字符为花色（s h d c）。其他输入一律抛 InvalidCardFormat。
    """
    if not isinstance(text, str):
        raise InvalidCardFormat(text, "Card tokens must be strings.")
    token = text.strip()
    if len(token) != 2:
        raise InvalidCardFormat(text, "Expected two characters: <rank><suit>.")
    rank = _RANK_BY_CHAR.get(token[0])
    if rank is None:
        raise InvalidCardFormat(text, f"Unknown rank {token[0]!r}.")
    suit = _SUIT_BY_CHAR.get(token[1])
    if suit is None:
        raise InvalidCardFormat(text, f"Unknown suit {token[1]!r}.")
    return Card(rank=rank, suit=suit)


def parse_cards(tokens: Union[str, Iterable[str]]) -> List[Card]:
    """解析一组牌面：'As Kh, 2c' 或 ['As', 'Kh', '2c']"""
    if isinstance(tokens, str):
        tokens = tokens.replace(",", " ").split()
    return [parse_card(t) for t in tokens]


def rank_value(card: Card) -> int:
    """点数数值 2..14（T=10, J=11, Q=12, K=13, A=14）"""
    return int(card.rank)


def create_deck() -> List[Card]:
    """创建一副52张牌，按选牌器顺序排列"""
    deck = [Card(rank=r, suit=s) for r in SELECTOR_RANKS for s in SELECTOR_SUITS]
    assert len(deck) == 52, f"牌数错误: {len(deck)}"
    return deck


def sort_cards(cards: List[Card]) -> List[Card]:
    """按点数从大到小排序"""
    return sorted(cards, key=lambda c: c.rank, reverse=True)
