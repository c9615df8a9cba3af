"""
Development-only choice between server rendering and the client shell.

Crawlers always get the server-rendered document so that what they index
matches production; people get the client shell with hot reload. Assets and
API calls are never classified.
"""
import re
from enum import Enum
from typing import Optional

from nutricatalog.core.rules import ASSET_EXTENSION_PATTERN, BOT_USER_AGENT_PATTERN, BYPASS_PATH_PREFIXES

_BOT_RE = re.compile(BOT_USER_AGENT_PATTERN, re.IGNORECASE)
_ASSET_RE = re.compile(ASSET_EXTENSION_PATTERN, re.IGNORECASE)


class RenderStrategy(str, Enum):
    BYPASS = "bypass"
    SERVER = "server"
    CLIENT = "client"


def is_bypass_path(path: str) -> bool:
    return path.startswith(BYPASS_PATH_PREFIXES) or bool(_ASSET_RE.search(path))


def is_crawler(user_agent: Optional[str]) -> bool:
    return bool(user_agent) and bool(_BOT_RE.search(user_agent))


def choose_render_strategy(path: str, user_agent: Optional[str]) -> RenderStrategy:
    if is_bypass_path(path):
        return RenderStrategy.BYPASS
    if is_crawler(user_agent):
        return RenderStrategy.SERVER
    return RenderStrategy.CLIENT
