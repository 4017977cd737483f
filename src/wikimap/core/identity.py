"""
Topic identity helpers.

``normalize`` maps a human-readable title to the key used by the graph
store. Wikipedia treats titles that differ only in case, spacing,
underscores or percent-encoding as the same page, so the key ignores all
of those.
"""

import re
import unicodedata
from typing import List
from urllib.parse import quote, unquote

from ..config import DEFAULT_API_URL

_WHITESPACE = re.compile(r"\s+")


def normalize(name: str) -> str:
    """
    Compute the node id for a topic name.

    Deterministic and side-effect free; never raises.

    Examples:
        >>> normalize("Barack_Obama") == normalize("barack obama")
        True
    """
    text = unquote(name).replace("_", " ")
    text = unicodedata.normalize("NFC", text)
    return _WHITESPACE.sub("", text).casefold()


def wordwrap(text: str, width: int) -> str:
    """Break text on spaces into lines of at most ``width`` columns."""
    lines: List[str] = []
    current = ""
    for word in text.split():
        if not current:
            current = word
        elif len(current) + 1 + len(word) <= width:
            current = f"{current} {word}"
        else:
            lines.append(current)
            current = word
    if current:
        lines.append(current)
    return "\n".join(lines)


def unwrap(label: str) -> str:
    """Undo ``wordwrap``."""
    return label.replace("\n", " ")


def page_url(name: str, api_url: str = DEFAULT_API_URL) -> str:
    """Build the article URL for a title on the wiki behind ``api_url``."""
    base = api_url.rsplit("/w/", 1)[0]
    return f"{base}/wiki/{quote(unwrap(name).replace(' ', '_'))}"
