"""牌型评估器 - 从7张牌中找出最佳5张组合并给出可比较的牌力"""

import logging
from collections import Counter
from dataclasses import dataclass
from itertools import combinations
from typing import Hashable, Iterable, Iterator, List, Mapping, Optional, Sequence, Set, Tuple, TypeVar, Union

from .card import Card, parse_card, rank_value
from .errors import DuplicateCard, InvalidCardFormat, InvalidInputSize
from .hand_type import HandCategory, HandResult

logger = logging.getLogger(__name__)

HAND_SIZE = 5
HOLDEM_SIZE = 7

# tiebreak 按 14 进制逐位编码：高位的牌永远压过低位
BASE = 14

# A-5-4-3-2（轮子顺），A 当 1 用
_WHEEL = [14, 5, 4, 3, 2]

PlayerId = TypeVar("PlayerId", bound=Hashable)


# ============================================================
#  辅助函数
# ============================================================

def _coerce_cards(cards: Iterable[Union[Card, str]]) -> List[Card]:
    """允许直接传入牌面字符串；其他类型视为格式错误"""
    result = []
    for c in cards:
        if isinstance(c, Card):
            result.append(c)
        elif isinstance(c, str):
            result.append(parse_card(c))
        else:
            raise InvalidCardFormat(c, "Expected a Card or a two-character token.")
    return result


def _ensure_distinct(cards: Sequence[Card]) -> None:
    seen: Set[Card] = set()
    for card in cards:
        if card in seen:
            raise DuplicateCard(card)
        seen.add(card)


def _checked(cards: Iterable[Union[Card, str]], size: int) -> List[Card]:
    card_list = _coerce_cards(cards)
    if len(card_list) != size:
        raise InvalidInputSize(expected=size, found=len(card_list))
    _ensure_distinct(card_list)
    return card_list


def _positional(ranks: Sequence[int]) -> int:
    """按顺序把点数折叠成一个 14 进制数，第一个点数权重最高"""
    score = 0
    for r in ranks:
        score = score * BASE + r
    return score


def _straight_high(ranks: List[int]) -> Optional[int]:
    """
    ranks 已降序排列。是顺子则返回有效最大点数，否则返回 None。
    轮子顺 A-2-3-4-5 的有效最大点数是 5 而不是 14。
    """
    if len(set(ranks)) != HAND_SIZE:
        return None
    if ranks[0] - ranks[-1] == HAND_SIZE - 1:
        return ranks[0]
    if ranks == _WHEEL:
        return 5
    return None


# ============================================================
#  五张牌分类
# ============================================================

@dataclass
class _Shape:
    """五张牌的点数/花色特征"""
    ranks: List[int]          # 降序
    groups: List[int]         # 按 (出现次数, 点数) 降序排列的不同点数
    freq: List[int]           # 出现次数降序，如 [3, 2]
    is_flush: bool
    straight_high: Optional[int]

    @classmethod
    def of(cls, cards: Sequence[Card]) -> "_Shape":
        ranks = sorted((rank_value(c) for c in cards), reverse=True)
        counts = Counter(ranks)
        groups = sorted(counts, key=lambda r: (counts[r], r), reverse=True)
        return cls(
            ranks=ranks,
            groups=groups,
            freq=sorted(counts.values(), reverse=True),
            is_flush=len({c.suit for c in cards}) == 1,
            straight_high=_straight_high(ranks),
        )

    @property
    def is_straight(self) -> bool:
        return self.straight_high is not None


Scored = Tuple[HandCategory, int]


def _detect_straight_flush(s: _Shape) -> Optional[Scored]:
    """同花顺（含皇家同花顺）：只比有效最大点数"""
    if s.is_straight and s.is_flush:
        return HandCategory.STRAIGHT_FLUSH, s.straight_high
    return None


def _detect_four_of_a_kind(s: _Shape) -> Optional[Scored]:
    """四条：四条点数·14² + 踢脚"""
    if s.freq[0] == 4:
        quad, kicker = s.groups
        return HandCategory.FOUR_OF_A_KIND, quad * BASE ** 2 + kicker
    return None


def _detect_full_house(s: _Shape) -> Optional[Scored]:
    """葫芦：三条点数·14² + 对子点数"""
    if s.freq == [3, 2]:
        trip, pair = s.groups
        return HandCategory.FULL_HOUSE, trip * BASE ** 2 + pair
    return None


def _detect_flush(s: _Shape) -> Optional[Scored]:
    if s.is_flush:
        return HandCategory.FLUSH, _positional(s.ranks)
    return None


def _detect_straight(s: _Shape) -> Optional[Scored]:
    if s.is_straight:
        return HandCategory.STRAIGHT, s.straight_high
    return None


def _detect_three_of_a_kind(s: _Shape) -> Optional[Scored]:
    """三条：三条点数·14³ + 两张踢脚（14¹, 14⁰）"""
    if s.freq[0] == 3:
        trip, *kickers = s.groups
        return HandCategory.THREE_OF_A_KIND, trip * BASE ** 3 + _positional(kickers)
    return None


def _detect_two_pair(s: _Shape) -> Optional[Scored]:
    """两对：大对·14³ + 小对·14² + 踢脚"""
    if s.freq == [2, 2, 1]:
        high, low, kicker = s.groups
        return HandCategory.TWO_PAIR, high * BASE ** 3 + low * BASE ** 2 + kicker
    return None


def _detect_one_pair(s: _Shape) -> Optional[Scored]:
    """一对：对子点数·14⁴ + 三张踢脚（14², 14¹, 14⁰）"""
    if s.freq[0] == 2:
        pair, *kickers = s.groups
        return HandCategory.ONE_PAIR, pair * BASE ** 4 + _positional(kickers)
    return None


def _detect_high_card(s: _Shape) -> Scored:
    return HandCategory.HIGH_CARD, _positional(s.ranks)


def _score_five(cards: Sequence[Card]) -> HandResult:
    """给五张牌打分，不做输入校验"""
    s = _Shape.of(cards)

    # 按检测优先级依次尝试，前面的类别必须先排除
    # 例如葫芦的 [3, 2] 不能落到三条
    category, tiebreak = (
        _detect_straight_flush(s)
        or _detect_four_of_a_kind(s)
        or _detect_full_house(s)
        or _detect_flush(s)
        or _detect_straight(s)
        or _detect_three_of_a_kind(s)
        or _detect_two_pair(s)
        or _detect_one_pair(s)
        or _detect_high_card(s)
    )
    ordered = sorted(cards, key=lambda c: (s.groups.index(rank_value(c)), c.suit.value))
    return HandResult(category, tiebreak, tuple(ordered))


# ============================================================
#  对外接口
# ============================================================

def five_card_subsets(cards: Sequence[Union[Card, str]]) -> Iterator[Tuple[Card, ...]]:
    """
    7张牌的全部21种五张组合（每种去掉其中两张）。
    枚举顺序由输入顺序决定，同一输入结果稳定。
    """
    card_list = _coerce_cards(cards)
    if len(card_list) != HOLDEM_SIZE:
        raise InvalidInputSize(expected=HOLDEM_SIZE, found=len(card_list))
    return combinations(card_list, HAND_SIZE)


def evaluate_five(cards: Sequence[Union[Card, str]]) -> HandResult:
    """评估恰好五张互不相同的牌"""
    return _score_five(_checked(cards, HAND_SIZE))


def evaluate_seven(cards: Sequence[Union[Card, str]]) -> HandResult:
    """
    评估7张牌（2张底牌 + 5张公共牌），返回21种组合中最大的 HandResult。
    比较规则：先比类别，类别相同再比 tiebreak。结果与输入顺序无关。
    """
    card_list = _checked(cards, HOLDEM_SIZE)

    best: Optional[HandResult] = None
    for combo in five_card_subsets(card_list):
        result = _score_five(combo)
        if best is None or result.key > best.key:
            best = result

    logger.debug("evaluate_seven %s -> %r", " ".join(c.token for c in card_list), best)
    return best


def compare_hands(a: HandResult, b: HandResult) -> int:
    """a 大返回 1，b 大返回 -1，平局返回 0"""
    if a.key > b.key:
        return 1
    if a.key < b.key:
        return -1
    return 0


def find_winners(results: Mapping[PlayerId, HandResult]) -> Set[PlayerId]:
    """
    找出所有 (category, tiebreak) 等于最大值的玩家。
    返回一个元素为独赢，多个元素为平分底池。
    """
    if not results:
        raise InvalidInputSize(expected="at least 1", found=0, desc="No hands to compare.")

    best_key = max(r.key for r in results.values())
    winners = {pid for pid, r in results.items() if r.key == best_key}

    logger.debug("find_winners best=%s winners=%s of %d", best_key, sorted(map(str, winners)), len(results))
    return winners


def rank_hands(results: Mapping[PlayerId, HandResult]) -> List[Tuple[PlayerId, HandResult]]:
    """按牌力从大到小排列所有玩家（平局顺序保持输入顺序）"""
    return sorted(results.items(), key=lambda item: item[1].key, reverse=True)
