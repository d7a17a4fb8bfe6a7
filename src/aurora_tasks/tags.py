from __future__ import annotations

import re
from typing import List

_WHITESPACE_RUN = re.compile(r"\s+")


# PUBLIC_INTERFACE
def normalize_tags(raw: str) -> List[str]:
    """
    Parse a comma-separated tag string into canonical tokens.

    Each token is trimmed, dropped if empty, has internal whitespace runs
    collapsed to a single hyphen, and is lowercased. Order and duplicates
    are kept as given.

    Example:
        >>> normalize_tags(" Deep Work, q3,, Deep  work ")
        ['deep-work', 'q3', 'deep-work']
    """
    if not raw:
        return []
    tokens = (token.strip() for token in raw.split(","))
    return [_WHITESPACE_RUN.sub("-", token).lower() for token in tokens if token]
