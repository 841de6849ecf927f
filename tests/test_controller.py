"""ShowdownController 单元测试 - 选牌、座位增减、自动比牌"""

import pytest

from src.config import MAX_PLAYERS
from src.engine.card import parse_card, parse_cards
from src.engine.errors import DuplicateCard, InvalidCardFormat, TableError
from src.engine.hand_type import HandCategory
from src.game.controller import ShowdownController, board_slot, hole_slot
from src.game.game_state import GamePhase, SPLIT_POT_TEXT


# ============================================================
#  辅助工具
# ============================================================

def _deal(gc: ShowdownController, board: str, *hands: str):
    """按顺序填满公共牌和每个座位的底牌，返回最后一次 select 的结果"""
    result = None
    for i, card in enumerate(parse_cards(board)):
        result = gc.select_card(board_slot(i), card)
    for player, hand in zip(gc.players, hands):
        for i, card in enumerate(parse_cards(hand)):
            result = gc.select_card(hole_slot(player.id, i), card)
    return result


BOARD = "2c 7d 9h Jc Ks"


# ============================================================
#  两人固定桌
# ============================================================

class TestHeadsUp:

    def setup_method(self):
        self.gc = ShowdownController.heads_up()

    def test_two_fixed_seats(self):
        assert [p.name for p in self.gc.players] == ["Player 1", "Player 2"]
        with pytest.raises(TableError):
            self.gc.add_player()
        with pytest.raises(TableError):
            self.gc.remove_player(1)

    def test_auto_showdown_when_all_selected(self):
        result = _deal(self.gc, BOARD, "As Ad", "Kd Qh")
        assert result is not None
        assert result.winners == {1}
        assert result.headline == "Player 1 Wins!"
        assert not result.is_split
        assert self.gc.state.phase == GamePhase.SHOWDOWN
        assert self.gc.player(1).is_winner
        assert self.gc.player(2).result.category == HandCategory.ONE_PAIR

    def test_split_pot(self):
        result = _deal(self.gc, "Ah Ad Kc Kd Qs", "3c 4h", "5c 6h")
        assert result.winners == {1, 2}
        assert result.is_split
        assert result.headline == SPLIT_POT_TEXT

    def test_no_showdown_until_ready(self):
        assert _deal(self.gc, BOARD, "As Ad") is None
        assert self.gc.state.phase == GamePhase.SELECTING
        with pytest.raises(TableError):
            self.gc.showdown()

    def test_manual_showdown(self):
        gc = ShowdownController.heads_up(auto_showdown=False)
        assert _deal(gc, BOARD, "As Ad", "Kd Qh") is None
        assert gc.state.phase == GamePhase.READY
        assert gc.showdown().winners == {1}


# ============================================================
#  选牌
# ============================================================

class TestCardSelection:

    def setup_method(self):
        self.gc = ShowdownController.heads_up()

    def test_duplicate_rejected(self):
        self.gc.select_card(board_slot(0), "As")
        with pytest.raises(DuplicateCard):
            self.gc.select_card(hole_slot(1, 0), "As")
        assert self.gc.card_at(hole_slot(1, 0)) is None

    def test_reselect_same_slot_same_card(self):
        self.gc.select_card(board_slot(0), "As")
        self.gc.select_card(board_slot(0), "As")
        assert self.gc.state.used_cards == {parse_card("As")}

    def test_replacing_releases_old_card(self):
        self.gc.select_card(board_slot(0), "As")
        self.gc.select_card(board_slot(0), "Kd")
        assert parse_card("As") in self.gc.available_cards()
        assert parse_card("Kd") not in self.gc.available_cards()
        self.gc.select_card(hole_slot(2, 1), "As")

    def test_clear_card_invalidates_showdown(self):
        _deal(self.gc, BOARD, "As Ad", "Kd Qh")
        self.gc.clear_card(board_slot(4))
        assert self.gc.state.showdown is None
        assert self.gc.state.phase == GamePhase.SELECTING
        assert not self.gc.player(1).is_winner
        assert self.gc.player(1).result is None
        assert parse_card("Ks") in self.gc.available_cards()

    def test_available_cards(self):
        assert len(self.gc.available_cards()) == 52
        _deal(self.gc, BOARD, "As Ad", "Kd Qh")
        assert len(self.gc.available_cards()) == 52 - 9

    def test_bad_token(self):
        with pytest.raises(InvalidCardFormat):
            self.gc.select_card(board_slot(0), "Zz")

    @pytest.mark.parametrize("slot", [board_slot(5), board_slot(-1), hole_slot(1, 2), hole_slot(9, 0)])
    def test_unknown_slot(self, slot):
        with pytest.raises(TableError):
            self.gc.select_card(slot, "As")

    def test_reset(self):
        _deal(self.gc, BOARD, "As Ad", "Kd Qh")
        self.gc.reset()
        assert self.gc.state.used_cards == set()
        assert self.gc.state.board_cards == []
        assert all(p.hole_cards == [] for p in self.gc.players)
        assert self.gc.state.phase == GamePhase.SELECTING


# ============================================================
#  N 人动态桌
# ============================================================

class TestDynamicTable:

    def test_add_and_remove(self):
        gc = ShowdownController.dynamic(3)
        player = gc.add_player("Dana")
        assert player.id == 4
        assert [p.id for p in gc.players] == [1, 2, 3, 4]
        gc.remove_player(2)
        assert [p.id for p in gc.players] == [1, 3, 4]
        assert gc.add_player().name == "Player 5"

    def test_max_players(self):
        gc = ShowdownController.dynamic(MAX_PLAYERS)
        with pytest.raises(TableError):
            gc.add_player()

    def test_min_players(self):
        gc = ShowdownController.dynamic()
        with pytest.raises(TableError):
            gc.remove_player(1)

    @pytest.mark.parametrize("n", [0, 1, MAX_PLAYERS + 1])
    def test_bad_table_size(self, n):
        with pytest.raises(TableError):
            ShowdownController.dynamic(n)

    def test_remove_releases_cards(self):
        gc = ShowdownController.dynamic(3)
        gc.select_card(hole_slot(3, 0), "As")
        gc.remove_player(3)
        assert parse_card("As") in gc.available_cards()

    def test_new_seat_needs_cards(self):
        gc = ShowdownController.dynamic(2)
        _deal(gc, BOARD, "As Ad", "Kd Qh")
        gc.add_player()
        assert gc.state.phase == GamePhase.SELECTING
        assert gc.state.showdown is None

    def test_three_way_showdown(self):
        gc = ShowdownController.dynamic(3)
        result = _deal(gc, "Ah Ad Kc Kd Qs", "3c 4h", "5c 6h", "Ac 2d")
        assert result.winners == {3}
        assert result.headline == "Player 3 Wins!"
        assert gc.player(3).result.category == HandCategory.FULL_HOUSE

    def test_remove_player_then_showdown(self):
        gc = ShowdownController.dynamic(3)
        _deal(gc, "Ah Ad Kc Kd Qs", "3c 4h", "5c 6h", "Ac 2d")
        gc.remove_player(3)
        assert gc.state.phase == GamePhase.READY
        assert gc.showdown().winners == {1, 2}


# ============================================================
#  事件
# ============================================================

class TestEvents:

    def test_callbacks_receive_events(self):
        gc = ShowdownController.heads_up()
        seen = []
        gc.on_event(lambda e: seen.append(e.action))
        _deal(gc, BOARD, "As Ad", "Kd Qh")
        assert seen.count("select") == 9
        assert seen[-1] == "showdown"
        gc.clear_card(board_slot(0))
        gc.reset()
        assert seen[-2:] == ["clear", "reset"]

    def test_showdown_event_data(self):
        gc = ShowdownController.heads_up()
        events = []
        gc.on_event(events.append)
        result = _deal(gc, BOARD, "As Ad", "Kd Qh")
        assert events[-1].data is result
        assert events[-1].phase == GamePhase.SHOWDOWN
