"""
Parser for ``git blame --incremental`` output.

Every group starts with ``<hash> <orig-line> <final-line> <count>``,
where the hash is a SHA-1 or SHA-256 object id.
The first group of a commit carries its header lines (author, committer,
summary, ...); every group ends with ``filename <path>``.
"""

import re
from typing import Dict, Optional

from ..models import BlameInfo, CommitAuthor, CommitInfo, HASH_NO_COMMIT


GROUP_HEADER = re.compile(r"^([0-9a-f]{64}|[0-9a-f]{40}) (\d+) (\d+) (\d+)$")


def _normalize_hash(commit_hash: str) -> str:
    # Uncommitted lines use an all-zero id of the repository's hash length
    if commit_hash.strip("0") == "":
        return HASH_NO_COMMIT
    return commit_hash


def _strip_mail(mail: str) -> str:
    if mail.startswith("<") and mail.endswith(">"):
        return mail[1:-1]
    return mail


def _build_commit(commit_hash: str, headers: Dict[str, str], filename: str) -> CommitInfo:
    def author(prefix: str) -> CommitAuthor:
        try:
            timestamp = int(headers.get(f"{prefix}-time", "0"))
        except ValueError:
            timestamp = 0

        return CommitAuthor(
            name=headers.get(prefix, ""),
            mail=_strip_mail(headers.get(f"{prefix}-mail", "")),
            timestamp=timestamp,
            tz=headers.get(f"{prefix}-tz", "")
        )

    return CommitInfo(
        hash=commit_hash,
        author=author("author"),
        committer=author("committer"),
        summary=headers.get("summary", ""),
        filename=filename,
        generated=commit_hash == HASH_NO_COMMIT
    )


def parse_incremental(output: str) -> BlameInfo:
    """
    Build a BlameInfo from incremental blame output.

    Lines that do not fit the format are skipped.
    """
    info = BlameInfo()

    current_hash: Optional[str] = None
    headers: Dict[str, str] = {}
    seen_headers: Dict[str, Dict[str, str]] = {}

    for raw_line in output.splitlines():
        line = raw_line.rstrip("\r")
        if not line:
            continue

        match = GROUP_HEADER.match(line)
        if match:
            current_hash = _normalize_hash(match.group(1))
            final_line = int(match.group(3))
            count = int(match.group(4))

            for line_number in range(final_line, final_line + count):
                info.lines[line_number] = current_hash

            headers = seen_headers.setdefault(current_hash, {})
            continue

        if current_hash is None:
            continue

        key, _, value = line.partition(" ")

        if key == "filename":
            if current_hash not in info.commits:
                info.commits[current_hash] = _build_commit(current_hash, headers, value)
            current_hash = None
        elif key not in headers:
            headers[key] = value

    return info
