# 牌桌流程控制模块
from .player import Player
from .game_state import TableState, GamePhase, GameEvent, ShowdownResult, Slot, BOARD
from .controller import ShowdownController, board_slot, hole_slot
