"""终端可视化渲染器 - 在终端中展示一次比牌"""

from typing import List

from src.engine.card import Card, Suit, sort_cards
from src.engine.hand_evaluator import rank_hands
from src.engine.hand_type import HandCategory
from src.game.player import Player
from src.game.game_state import GameEvent, ShowdownResult, TableState


# 颜色常量 (ANSI)
RED = "\033[91m"
GREEN = "\033[92m"
YELLOW = "\033[93m"
BLUE = "\033[94m"
MAGENTA = "\033[95m"
CYAN = "\033[96m"
BOLD = "\033[1m"
DIM = "\033[2m"
RESET = "\033[0m"

# 大牌型高亮
CATEGORY_COLOR = {
    HandCategory.STRAIGHT_FLUSH: MAGENTA,
    HandCategory.FOUR_OF_A_KIND: MAGENTA,
    HandCategory.FULL_HOUSE: CYAN,
    HandCategory.FLUSH: CYAN,
    HandCategory.STRAIGHT: CYAN,
}


class TerminalRenderer:
    """终端可视化渲染器"""

    def __init__(self, color: bool = True):
        self.color = color

    def _paint(self, text: str, *codes: str) -> str:
        if not self.color or not codes:
            return text
        return f"{''.join(codes)}{text}{RESET}"

    # ============================================================
    #  牌面渲染
    # ============================================================

    def format_cards(self, cards: List[Card]) -> str:
        """将牌列表格式化为彩色字符串，红桃/方块标红"""
        parts = []
        for c in cards:
            if c.suit in (Suit.HEART, Suit.DIAMOND):
                parts.append(self._paint(c.display, RED))
            else:
                parts.append(c.display)
        return " ".join(parts)

    def format_player_name(self, player: Player) -> str:
        if player.is_winner:
            return self._paint(f"{player.name} 🏆", GREEN, BOLD)
        return self._paint(player.name, BOLD)

    @staticmethod
    def separator(char: str = "─", width: int = 60) -> str:
        return char * width

    def print_header(self, title: str) -> None:
        """打印带框的标题"""
        print(f"\n{self._paint('═' * 60, YELLOW, BOLD)}")
        print(self._paint(f"  {title}", YELLOW, BOLD))
        print(f"{self._paint('═' * 60, YELLOW, BOLD)}\n")

    # ============================================================
    #  牌桌展示
    # ============================================================

    def show_table(self, state: TableState) -> None:
        """展示公共牌与各座位底牌"""
        self.print_header("🃏 Board")
        print(f"  {self.format_cards(state.board_cards)}\n")
        for p in state.players:
            print(f"  {self.format_player_name(p)}: {self.format_cards(sort_cards(p.hole_cards))}")
        print()

    def show_showdown(self, state: TableState, showdown: ShowdownResult) -> None:
        """按牌力从大到小展示每个座位的最佳五张与赢家"""
        self.print_header("🏆 Showdown")
        by_id = {p.id: p for p in state.players}
        for pid, result in rank_hands(showdown.results):
            player = by_id[pid]
            color = CATEGORY_COLOR.get(result.category)
            name = self._paint(result.name, color) if color else result.name
            print(f"  {self.format_player_name(player):<20} {name:<30} {self.format_cards(list(result.cards))}")

        headline_color = BLUE if showdown.is_split else GREEN
        print(f"\n  {self._paint(showdown.headline, headline_color, BOLD)}")
        print(f"  {self.separator('─', 40)}\n")

    # ============================================================
    #  事件回调（注册到 ShowdownController）
    # ============================================================

    def make_event_callback(self):
        """创建事件回调函数，供 ShowdownController.on_event() 使用"""
        renderer = self

        def callback(event: GameEvent) -> None:
            if event.action == "showdown":
                print(renderer._paint(f"  >> {event.data.headline}", DIM))
            elif event.action in ("seat_added", "seat_removed"):
                print(renderer._paint(f"  >> {event.action}: {event.player_id}", DIM))

        return callback
