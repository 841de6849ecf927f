# 牌力评估引擎模块
from .card import Card, Rank, Suit, parse_card, parse_cards, rank_value, create_deck, sort_cards
from .errors import PokerError, InvalidCardFormat, InvalidInputSize, DuplicateCard, TableError
from .hand_type import HandCategory, HandResult, HAND_NAMES
from .hand_evaluator import (
    five_card_subsets,
    evaluate_five,
    evaluate_seven,
    compare_hands,
    find_winners,
    rank_hands,
)
