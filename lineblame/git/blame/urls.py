"""
Commit URL resolution.

Turns a commit into a browsable URL using the configured ``commit_url``
template, and offers a structural fallback that derives a commit page
from a common remote URL shape.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Any, Optional
from urllib.parse import urlparse

from .models import CommitInfo, is_blank_commit
from .tokens import parse_tokens
from lineblame.config import Properties, PropertyStore


REMOTE_PATTERN = re.compile(r"^(git@|https://)([^:/]+)[:/](.*)\.git$")


class UrlStatus(Enum):
    """Outcome of a commit URL resolution."""
    OK = "ok"
    MISSING_CONFIGURATION = "missing_configuration"
    MALFORMED = "malformed"


@dataclass
class UrlResolution:
    url: Optional[str]
    status: UrlStatus

    def to_dict(self) -> Dict[str, Any]:
        return {"url": self.url, "status": self.status.value}


def is_web_uri(value: str) -> bool:
    """Check for an absolute http(s) URI with a host."""
    if not value or any(ch.isspace() for ch in value):
        return False

    try:
        parsed = urlparse(value)
        host = parsed.hostname
    except ValueError:
        return False

    return parsed.scheme in ("http", "https") and bool(host)


def default_web_path(url: str, commit_hash: str) -> str:
    """
    Derive a commit page from a remote URL.

    ``git@host:path.git`` and ``https://host/path.git`` become
    ``https://host/path/commit/<hash>``; anything else is returned
    unchanged.
    """
    return REMOTE_PATTERN.sub(
        lambda m: f"https://{m.group(2)}/{m.group(3)}/commit/{commit_hash}",
        url
    )


class UrlResolver:
    """Resolves commits to browsable URLs from the configured template."""

    def __init__(self, properties: PropertyStore):
        self.properties = properties

    def resolve(self, commit: CommitInfo) -> UrlResolution:
        template = self.properties.get(Properties.COMMIT_URL)

        if is_blank_commit(commit) or not template:
            return UrlResolution(None, UrlStatus.MISSING_CONFIGURATION)

        parsed_url = parse_tokens(template, {"hash": commit.hash})

        if is_web_uri(parsed_url):
            return UrlResolution(parsed_url, UrlStatus.OK)

        return UrlResolution(None, UrlStatus.MALFORMED)

    def default_web_path(self, url: str, commit_hash: str) -> str:
        return default_web_path(url, commit_hash)
