"""Dictionary lookups in the web browser."""

from __future__ import annotations

import webbrowser
from urllib.parse import quote

from loguru import logger

from ..config import get_settings


def get_lookup_url(query: str, search_type: int | None = None) -> str:
    """Dictionary search URL for ``query``."""
    settings = get_settings()
    if search_type is None:
        search_type = settings.kanji_search_type
    return settings.lookup_url.format(query=quote(query), search_type=search_type)


def open_kanji(kanji: str) -> bool:
    """Open the kanji search page for all given kanji."""
    url = get_lookup_url(kanji)
    logger.debug(f"Opening {url}")
    opened = webbrowser.open(url)
    if not opened:
        logger.warning(f"No browser available, look up manually: {url}")
    return opened
