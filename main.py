"""德州扑克比牌工具 - 主入口"""

import sys
import argparse
import logging

from src.config import HOLE_CARDS, BOARD_CARDS, LOG_LEVELS, configure_logging, load_settings
from src.engine.card import parse_cards
from src.engine.errors import PokerError
from src.game.controller import ShowdownController, board_slot, hole_slot
from src.ui.renderer import TerminalRenderer

logger = logging.getLogger(__name__)


def build_table(board: str, hands: list, names: list, max_players: int, on_event=None) -> ShowdownController:
    """根据命令行给出的公共牌和底牌搭建一张牌桌"""
    if len(hands) == 2:
        gc = ShowdownController.heads_up(auto_showdown=False)
    else:
        gc = ShowdownController.dynamic(len(hands), max_players=max_players, auto_showdown=False)

    if on_event is not None:
        gc.on_event(on_event)

    for player, name in zip(gc.players, names):
        player.name = name

    board_cards = parse_cards(board)
    if len(board_cards) != BOARD_CARDS:
        raise PokerError(f"The board needs {BOARD_CARDS} cards, got {len(board_cards)}.")
    for i, card in enumerate(board_cards):
        gc.select_card(board_slot(i), card)

    for player, hand in zip(gc.players, hands):
        hole = parse_cards(hand)
        if len(hole) != HOLE_CARDS:
            raise PokerError(f"{player.name} needs {HOLE_CARDS} hole cards, got {len(hole)}.")
        for i, card in enumerate(hole):
            gc.select_card(hole_slot(player.id, i), card)
    return gc


def run_showdown(args, settings) -> int:
    """比一次牌并输出结果"""
    renderer = TerminalRenderer(color=not args.no_color)
    try:
        gc = build_table(
            args.board, args.hand, args.name or [], settings.max_players,
            on_event=renderer.make_event_callback(),
        )
        result = gc.showdown()
    except PokerError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    renderer.show_table(gc.state)
    renderer.show_showdown(gc.state, result)
    return 0


def serve(host: str, port: int, log_level: str) -> None:
    """启动 FastAPI 服务"""
    import uvicorn

    logger.info("服务启动 http://%s:%d", host, port)
    uvicorn.run("src.web.server:app", host=host, port=port, log_level=log_level.lower())


def main(argv=None) -> int:
    """命令行入口"""
    settings = load_settings()

    parser = argparse.ArgumentParser(description="Texas Hold'em showdown evaluator")
    parser.add_argument("--board", help='5张公共牌，如 "Ah Ad Kc Kd 2s"')
    parser.add_argument("--hand", action="append", default=[], help='一个座位的2张底牌，如 "As Ks"（可重复）')
    parser.add_argument("--name", action="append", help="座位名，按 --hand 的顺序（可重复）")
    parser.add_argument("--no-color", action="store_true", help="关闭 ANSI 颜色")
    parser.add_argument("--serve", action="store_true", help="启动 Web 服务")
    parser.add_argument("--host", default=settings.host, help=f"服务地址 (默认{settings.host})")
    parser.add_argument("--port", type=int, default=settings.port, help=f"服务端口 (默认{settings.port})")
    parser.add_argument(
        "--log-level", default=settings.log_level, type=str.upper, choices=LOG_LEVELS,
        help=f"日志级别 (默认{settings.log_level})",
    )
    args = parser.parse_args(argv)

    configure_logging(args.log_level)

    if args.serve:
        serve(args.host, args.port, args.log_level)
        return 0

    if not args.board or len(args.hand) < 2:
        parser.error("--board and at least two --hand options are required")
    return run_showdown(args, settings)


if __name__ == "__main__":
    sys.exit(main())
