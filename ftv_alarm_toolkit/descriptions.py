"""Alarm text cleanup."""

import re

# One leading "[...]" token (severity, category, ...) and its surrounding
# whitespace.  The bracket body may not contain "]".
_LEADING_BRACKET_RE = re.compile(r"^\s*\[[^\]]*\]\s*")


def normalize_description(text: str) -> str:
    """Strip a single leading bracketed annotation and trim the result.

    >>> normalize_description('[WARN] Motor overload')
    'Motor overload'
    >>> normalize_description('[A][B] Text')
    '[B] Text'
    """
    return _LEADING_BRACKET_RE.sub("", text, count=1).strip()
