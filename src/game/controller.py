"""比牌控制器 - 管理选牌、座位增减，并调用评估器决出赢家"""

import logging
from typing import Callable, List, Optional, Union

from src.config import BOARD_CARDS, HOLE_CARDS, MAX_PLAYERS, MIN_PLAYERS
from src.engine.card import Card, create_deck, parse_card
from src.engine.errors import DuplicateCard, InvalidCardFormat, TableError
from src.engine.hand_evaluator import evaluate_seven, find_winners
from src.game.player import Player
from src.game.game_state import (
    BOARD, SPLIT_POT_TEXT, GameEvent, GamePhase, ShowdownResult, Slot, TableState,
)

logger = logging.getLogger(__name__)

EventCallback = Callable[[GameEvent], None]


class ShowdownController:
    """
    比牌控制器：两人固定桌和 N 人动态桌共用同一套流程和同一个评估器。
    选满所有牌位后自动比牌（auto_showdown=True 时）。
    """

    def __init__(
        self,
        player_names: List[str],
        fixed_seats: bool = False,
        max_players: int = MAX_PLAYERS,
        auto_showdown: bool = True,
    ):
        if not MIN_PLAYERS <= max_players <= MAX_PLAYERS:
            raise TableError(f"max_players must be within {MIN_PLAYERS}..{MAX_PLAYERS}, got {max_players}.")
        if not MIN_PLAYERS <= len(player_names) <= max_players:
            raise TableError(f"A table seats {MIN_PLAYERS}..{max_players} players, got {len(player_names)}.")
        self.fixed_seats = fixed_seats
        self.max_players = max_players
        self.auto_showdown = auto_showdown
        players = [Player(id=i + 1, name=name) for i, name in enumerate(player_names)]
        self.state = TableState(players=players)
        self._callbacks: List[EventCallback] = []  # 事件回调（用于 UI 通知）

    @classmethod
    def heads_up(cls, **kwargs) -> "ShowdownController":
        """两人固定桌"""
        return cls(["Player 1", "Player 2"], fixed_seats=True, **kwargs)

    @classmethod
    def dynamic(cls, n_players: int = MIN_PLAYERS, **kwargs) -> "ShowdownController":
        """N 人动态桌，可增减座位"""
        return cls([f"Player {i + 1}" for i in range(n_players)], **kwargs)

    @property
    def players(self) -> List[Player]:
        return self.state.players

    def on_event(self, callback: EventCallback) -> None:
        """注册事件回调"""
        self._callbacks.append(callback)

    def _emit(self, action: str, player_id: Optional[int] = None, data=None) -> None:
        """触发事件通知"""
        event = GameEvent(self.state.phase, action, player_id, data)
        self.state.events.append(event)
        for cb in self._callbacks:
            cb(event)

    # ============================================================
    #  座位管理
    # ============================================================

    def player(self, player_id: int) -> Player:
        for p in self.players:
            if p.id == player_id:
                return p
        raise TableError(f"Unknown seat {player_id!r}.")

    def add_player(self, name: Optional[str] = None) -> Player:
        """新增一个座位"""
        if self.fixed_seats:
            raise TableError("Seats are fixed at this table.")
        if len(self.players) >= self.max_players:
            raise TableError(f"Table is full ({self.max_players} players).")
        pid = max((p.id for p in self.players), default=0) + 1
        player = Player(id=pid, name=name or f"Player {pid}")
        self.players.append(player)
        self._invalidate()
        logger.info("座位 %d 加入: %s", pid, player.name)
        self._emit("seat_added", pid, player.name)
        return player

    def remove_player(self, player_id: int) -> None:
        """移除一个座位，并释放其底牌"""
        if self.fixed_seats:
            raise TableError("Seats are fixed at this table.")
        if len(self.players) <= MIN_PLAYERS:
            raise TableError(f"A table needs at least {MIN_PLAYERS} players.")
        player = self.player(player_id)
        for card in player.hole_cards:
            self.state.used_cards.discard(card)
        self.players.remove(player)
        self._invalidate()
        logger.info("座位 %d 离开", player_id)
        self._emit("seat_removed", player_id)

    # ============================================================
    #  选牌
    # ============================================================

    def _slots_of(self, slot: Slot) -> List[Optional[Card]]:
        """返回 slot 所在的牌位列表（公共牌或某个座位的底牌）"""
        if slot.is_board:
            cards = self.state.board
        else:
            cards = self.player(slot.owner).hole
        if not 0 <= slot.index < len(cards):
            raise TableError(f"Unknown slot {slot}.")
        return cards

    def card_at(self, slot: Slot) -> Optional[Card]:
        return self._slots_of(slot)[slot.index]

    def select_card(self, slot: Slot, card: Union[Card, str]) -> Optional[ShowdownResult]:
        """
        给牌位选一张牌，原来的牌被释放。
        该牌已被其他牌位占用时抛 DuplicateCard。
        选满后自动比牌并返回结果，否则返回 None。
        """
        if isinstance(card, str):
            card = parse_card(card)
        elif not isinstance(card, Card):
            raise InvalidCardFormat(card, "Expected a Card or a two-character token.")
        cards = self._slots_of(slot)
        old = cards[slot.index]

        if card != old:
            if card in self.state.used_cards:
                logger.warning("%s 已被占用，拒绝放入 %s", card, slot)
                raise DuplicateCard(card)
            if old is not None:
                self.state.used_cards.discard(old)
            self.state.used_cards.add(card)
            cards[slot.index] = card

        self._invalidate()
        self._emit("select", None if slot.is_board else slot.owner, (slot, card))

        if self.auto_showdown and self.is_ready:
            return self.showdown()
        return None

    def clear_card(self, slot: Slot) -> None:
        """清空一个牌位"""
        cards = self._slots_of(slot)
        old = cards[slot.index]
        if old is not None:
            self.state.used_cards.discard(old)
            cards[slot.index] = None
        self._invalidate()
        self._emit("clear", None if slot.is_board else slot.owner, slot)

    def available_cards(self) -> List[Card]:
        """尚未被任何牌位使用的牌（选牌器顺序）"""
        return [c for c in create_deck() if c not in self.state.used_cards]

    @property
    def is_ready(self) -> bool:
        """所有公共牌和所有座位的底牌都已选好"""
        expected = BOARD_CARDS + HOLE_CARDS * len(self.players)
        return len(self.state.used_cards) == expected

    def _invalidate(self) -> None:
        """牌面有变动：清掉上一次比牌结果"""
        s = self.state
        s.showdown = None
        for p in self.players:
            p.clear_result()
        s.phase = GamePhase.READY if self.is_ready else GamePhase.SELECTING

    # ============================================================
    #  比牌
    # ============================================================

    def showdown(self) -> ShowdownResult:
        """每个座位的 2 张底牌 + 5 张公共牌交给评估器，找出赢家"""
        if not self.is_ready:
            raise TableError("All hole and board cards must be selected before the showdown.")

        s = self.state
        board = s.board_cards
        results = {p.id: evaluate_seven(p.hole_cards + board) for p in self.players}
        winners = find_winners(results)

        for p in self.players:
            p.result = results[p.id]
            p.is_winner = p.id in winners

        if len(winners) > 1:
            headline = SPLIT_POT_TEXT
        else:
            headline = f"{self.player(next(iter(winners))).name} Wins!"

        s.showdown = ShowdownResult(results=results, winners=winners, headline=headline)
        s.phase = GamePhase.SHOWDOWN
        logger.info("比牌结果: %s (%s)", headline, ", ".join(
            f"{p.name}={p.result.name}" for p in self.players
        ))
        self._emit("showdown", data=s.showdown)
        return s.showdown

    def reset(self) -> None:
        """清空全部牌位，座位保留"""
        for p in self.players:
            p.reset_for_new_hand()
        self.state = TableState(players=self.players)
        self._emit("reset")


def board_slot(index: int) -> Slot:
    return Slot(BOARD, index)


def hole_slot(player_id: int, index: int) -> Slot:
    return Slot(player_id, index)
