"""
Token templates for user-facing blame text.

Templates use ``${token}`` placeholders, optionally with an argument:
``${commit.hash_short,12}``. Callable token values receive the argument
(or None). Unknown tokens are left as they are.
"""

import re
import time
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional, Union

from .models import CommitAuthor, CommitInfo, internal_hash


TokenValue = Union[str, int, Callable[[Optional[str]], str]]

TOKEN_PATTERN = re.compile(r"\$\{([a-z._\-]+)(?:,([^}]*))?\}")

_UNITS = [
    ("year", 365 * 24 * 3600),
    ("month", 30 * 24 * 3600),
    ("day", 24 * 3600),
    ("hour", 3600),
    ("minute", 60),
]


def parse_tokens(target: Optional[str], tokens: Dict[str, TokenValue]) -> str:
    """Replace every known token in ``target``."""
    if not target:
        return ""

    def substitute(match: "re.Match") -> str:
        name, argument = match.group(1), match.group(2)

        if name not in tokens:
            return match.group(0)

        value = tokens[name]
        if callable(value):
            return str(value(argument))
        return str(value)

    return TOKEN_PATTERN.sub(substitute, target)


def to_time_ago(timestamp: int, now: Optional[float] = None) -> str:
    """Describe how long ago ``timestamp`` (epoch seconds) was."""
    now = time.time() if now is None else now
    elapsed = max(0, int(now - timestamp))

    for unit, seconds in _UNITS:
        amount = elapsed // seconds
        if amount >= 1:
            return f"{amount} {unit}{'' if amount == 1 else 's'} ago"

    return "just now"


def _to_date(timestamp: int) -> str:
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).date().isoformat()


def _capitalize(text: str) -> str:
    return text[:1].upper() + text[1:]


def _author_tokens(prefix: str, author: CommitAuthor) -> Dict[str, TokenValue]:
    return {
        f"{prefix}.name": author.name,
        f"{prefix}.mail": author.mail,
        f"{prefix}.timestamp": author.timestamp,
        f"{prefix}.tz": author.tz,
        f"{prefix}.date": _to_date(author.timestamp),
    }


def normalize_commit_info_tokens(
    commit: CommitInfo,
    hash_length: int = 7,
    now: Optional[float] = None
) -> Dict[str, TokenValue]:
    """
    Build the token table for a commit.

    Args:
        commit: The commit to describe
        hash_length: Default length of ``commit.hash_short``
        now: Reference time for the relative-time tokens

    Returns:
        Dict mapping token names to values
    """
    def hash_short(length: Optional[str]) -> str:
        try:
            return internal_hash(commit.hash, int(length) if length else hash_length)
        except ValueError:
            return internal_hash(commit.hash, hash_length)

    ago = to_time_ago(commit.author.timestamp, now)
    committed_ago = to_time_ago(commit.committer.timestamp, now)

    tokens: Dict[str, Any] = {
        "commit.hash": commit.hash,
        "commit.hash_short": hash_short,
        "commit.summary": commit.summary,
        "commit.filename": commit.filename,
        "time.ago": ago,
        "time.c_ago": committed_ago,
        "time.from": _capitalize(ago),
        "time.c_from": _capitalize(committed_ago),
    }
    tokens.update(_author_tokens("author", commit.author))
    tokens.update(_author_tokens("committer", commit.committer))

    return tokens
