"""Web 后端服务 - 比牌 REST 接口 + 每个连接一张牌桌的 WebSocket 会话"""

import json
import logging
from typing import Dict, List

from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from src.config import BOARD_CARDS, HOLE_CARDS, load_settings
from src.engine.card import Card, create_deck, parse_cards
from src.engine.errors import DuplicateCard, InvalidInputSize, PokerError
from src.engine.hand_evaluator import evaluate_seven, find_winners
from src.engine.hand_type import HAND_NAMES, HandResult
from src.game.controller import ShowdownController
from src.game.game_state import BOARD, ShowdownResult, Slot, TableState

logger = logging.getLogger(__name__)

settings = load_settings()


# ============================================================
#  序列化工具
# ============================================================

def card_to_dict(c: Card) -> dict:
    """将 Card 序列化为前端可用的 dict"""
    return {
        "token": c.token,
        "rank": int(c.rank),
        "suit": c.suit.value,
        "display": c.display,
    }


def result_to_dict(r: HandResult) -> dict:
    return {
        "category": int(r.category),
        "name": r.name,
        "tiebreak": r.tiebreak_score,
        "cards": [c.token for c in r.cards],
    }


def showdown_to_dict(sd: ShowdownResult) -> dict:
    return {
        "results": {str(pid): result_to_dict(r) for pid, r in sd.results.items()},
        "winners": sorted(sd.winners),
        "split": sd.is_split,
        "headline": sd.headline,
    }


def table_to_dict(state: TableState) -> dict:
    """将牌桌状态序列化"""
    def tokens(cards):
        return [c.token if c is not None else None for c in cards]

    return {
        "phase": state.phase.value,
        "board": tokens(state.board),
        "players": [
            {"id": p.id, "name": p.name, "hole": tokens(p.hole), "is_winner": p.is_winner}
            for p in state.players
        ],
        "used_cards": sorted(c.token for c in state.used_cards),
    }


# ============================================================
#  FastAPI 应用
# ============================================================

app = FastAPI(title="Texas Hold'em Showdown")


class EvaluateRequest(BaseModel):
    board: List[str]
    players: Dict[str, List[str]]


@app.exception_handler(PokerError)
async def poker_error_handler(request, exc: PokerError):
    logger.warning("拒绝请求 %s: %s", request.url.path, exc)
    return JSONResponse(status_code=400, content={"error": type(exc).__name__, "detail": str(exc)})


@app.get("/api/deck")
async def deck():
    """52张牌，按选牌器顺序"""
    return [card_to_dict(c) for c in create_deck()]


@app.get("/api/hands")
async def hand_names():
    return {str(int(k)): v for k, v in HAND_NAMES.items()}


@app.post("/api/evaluate")
async def evaluate(req: EvaluateRequest):
    """对每位玩家的 2 张底牌 + 5 张公共牌求最佳牌型，并给出赢家"""
    board = parse_cards(req.board)
    if len(board) != BOARD_CARDS:
        raise InvalidInputSize(expected=BOARD_CARDS, found=len(board), desc="Board size.")
    if not req.players:
        raise InvalidInputSize(expected="at least 1", found=0, desc="No players.")

    seen = set(board)
    results = {}
    for pid, hole_tokens in req.players.items():
        hole = parse_cards(hole_tokens)
        if len(hole) != HOLE_CARDS:
            raise InvalidInputSize(expected=HOLE_CARDS, found=len(hole), desc=f"Hole cards of {pid!r}.")
        # evaluate_seven 只能发现单个玩家7张牌内的重复，跨玩家的在这里检查
        for card in hole:
            if card in seen:
                raise DuplicateCard(card)
            seen.add(card)
        results[pid] = evaluate_seven(hole + board)

    winners = find_winners(results)
    return {
        "results": {pid: result_to_dict(r) for pid, r in results.items()},
        "winners": sorted(winners),
        "split": len(winners) > 1,
    }


# ============================================================
#  WebSocket 牌桌会话
# ============================================================

def _parse_slot(msg: dict) -> Slot:
    owner = msg.get("owner", BOARD)
    if owner != BOARD:
        owner = int(owner)
    return Slot(owner, int(msg["index"]))


def handle_message(gc: ShowdownController, msg: dict) -> dict:
    """执行一条客户端指令，返回要回给客户端的消息"""
    action = msg.get("action")
    if action == "select":
        gc.select_card(_parse_slot(msg), msg["card"])
    elif action == "clear":
        gc.clear_card(_parse_slot(msg))
    elif action == "add_player":
        gc.add_player(msg.get("name"))
    elif action == "remove_player":
        gc.remove_player(int(msg["player_id"]))
    elif action == "reset":
        gc.reset()
    elif action == "showdown":
        gc.showdown()
    else:
        return {"type": "error", "error": "UnknownAction", "detail": f"Unknown action {action!r}."}

    reply = {"type": "table", "table": table_to_dict(gc.state)}
    if gc.state.showdown is not None:
        reply["showdown"] = showdown_to_dict(gc.state.showdown)
    return reply


@app.websocket("/ws")
async def websocket_endpoint(ws: WebSocket):
    """WebSocket 端点：每个连接持有自己的牌桌，?mode=heads_up 为两人固定桌"""
    await ws.accept()
    if ws.query_params.get("mode") == "heads_up":
        gc = ShowdownController.heads_up()
    else:
        gc = ShowdownController.dynamic(max_players=settings.max_players)
    await ws.send_text(json.dumps({"type": "table", "table": table_to_dict(gc.state)}, ensure_ascii=False))
    try:
        while True:
            data = await ws.receive_text()
            try:
                msg = json.loads(data)
                reply = handle_message(gc, msg)
            except PokerError as e:
                logger.warning("WS 指令被拒绝: %s", e)
                reply = {"type": "error", "error": type(e).__name__, "detail": str(e)}
            except (ValueError, KeyError, TypeError, AttributeError) as e:
                reply = {"type": "error", "error": "MessageFormatError", "detail": str(e)}
            await ws.send_text(json.dumps(reply, ensure_ascii=False))
    except WebSocketDisconnect:
        logger.info("WS 连接断开")
