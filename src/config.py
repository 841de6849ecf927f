"""
全局配置：服务地址、日志级别、牌桌人数上限。
均可通过环境变量覆盖，非法值回退到默认值。
"""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

# 牌桌人数
MIN_PLAYERS = 2
MAX_PLAYERS = 10

# 每个座位底牌数 / 公共牌数
HOLE_CARDS = 2
BOARD_CARDS = 5

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8000
DEFAULT_LOG_LEVEL = "INFO"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str = DEFAULT_LOG_LEVEL
    max_players: int = MAX_PLAYERS


def _env_int(env: Mapping[str, str], name: str, default: int, low: int, high: int) -> int:
    raw = env.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("%s=%r 不是整数，使用默认值 %d", name, raw, default)
        return default
    if not low <= value <= high:
        logger.warning("%s=%d 超出范围 [%d, %d]，使用默认值 %d", name, value, low, high, default)
        return default
    return value


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """从环境变量读取配置（HOLDEM_HOST / HOLDEM_PORT / HOLDEM_LOG_LEVEL / HOLDEM_MAX_PLAYERS）"""
    env = os.environ if env is None else env

    log_level = env.get("HOLDEM_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
    if log_level not in LOG_LEVELS:
        logger.warning("HOLDEM_LOG_LEVEL=%r 非法，使用默认值 %s", log_level, DEFAULT_LOG_LEVEL)
        log_level = DEFAULT_LOG_LEVEL

    return Settings(
        host=env.get("HOLDEM_HOST", DEFAULT_HOST) or DEFAULT_HOST,
        port=_env_int(env, "HOLDEM_PORT", DEFAULT_PORT, 1, 65535),
        log_level=log_level,
        max_players=_env_int(env, "HOLDEM_MAX_PLAYERS", MAX_PLAYERS, MIN_PLAYERS, MAX_PLAYERS),
    )


def configure_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
