"""Parsers turning porcelain git output into result schemas."""

from __future__ import annotations

import re

from gitdesk.git.models import (
    BranchEntry,
    BranchListing,
    FileStatus,
    LogEntry,
    LogListing,
    RemoteEntry,
    RemoteRefs,
    StatusListing,
)

__all__ = [
    "LOG_FORMAT",
    "parse_branches",
    "parse_log",
    "parse_remotes",
    "parse_status",
    "split_lines",
]

# Field and record separators unlikely to appear in commit messages
_FIELD_SEP = "\x1f"
_RECORD_SEP = "\x1e"

#: --pretty format consumed by parse_log
LOG_FORMAT = (
    _FIELD_SEP.join(("%H", "%aI", "%s", "%D", "%b", "%an", "%ae")) + _RECORD_SEP
)

_BRANCH_HEADER = re.compile(
    r"^## (?:No commits yet on |Initial commit on )?"
    r"(?P<current>.+?)"
    r"(?:\.\.\.(?P<tracking>\S+))?"
    r"(?: \[(?P<counts>[^\]]+)\])?$"
)
_AHEAD = re.compile(r"ahead (\d+)")
_BEHIND = re.compile(r"behind (\d+)")
_DETACHED = ("HEAD (no branch)",)

_BRANCH_LINE = re.compile(
    r"^(?P<marker>[*+ ]) (?P<name>\(.+?\)|\S+)\s+(?P<commit>[0-9a-f]+)\s?(?P<label>.*)$"
)


def split_lines(output: str) -> list[str]:
    """Split command output into stripped, non-empty lines."""
    return [line.strip() for line in output.splitlines() if line.strip()]


def parse_status(output: str) -> StatusListing:
    """Parse ``git status --porcelain=v1 -b -z`` output.

    Records are NUL-terminated and paths are never quoted. A rename or copy
    record is followed by a separate record holding the source path.

    Args:
        output: Raw porcelain output, branch header first.

    Returns:
        StatusListing with branch tracking info and one entry per path.
    """
    current: str | None = None
    tracking: str | None = None
    ahead = behind = 0
    detached = False
    files: list[FileStatus] = []

    records = iter(output.split("\0"))
    for line in records:
        if not line:
            continue
        if line.startswith("## "):
            if line[3:] in _DETACHED:
                detached = True
                current = "HEAD"
                continue
            match = _BRANCH_HEADER.match(line)
            if match:
                current = match.group("current")
                tracking = match.group("tracking")
                counts = match.group("counts") or ""
                if found := _AHEAD.search(counts):
                    ahead = int(found.group(1))
                if found := _BEHIND.search(counts):
                    behind = int(found.group(1))
            continue

        if len(line) < 4:
            continue
        index, working_dir, path = line[0], line[1], line[3:]
        renamed = {index, working_dir} & {"R", "C"}
        from_path = next(records, None) if renamed else None
        files.append(
            FileStatus(
                path=path,
                index=index,
                working_dir=working_dir,
                from_path=from_path or None,
            )
        )

    return StatusListing(
        current=current,
        tracking=tracking,
        ahead=ahead,
        behind=behind,
        detached=detached,
        files=files,
    )


def parse_log(output: str) -> LogListing:
    """Parse ``git log --pretty=format:LOG_FORMAT`` output."""
    entries: list[LogEntry] = []
    for record in output.split(_RECORD_SEP):
        record = record.strip("\n")
        if not record:
            continue
        fields = record.split(_FIELD_SEP)
        fields += [""] * (7 - len(fields))
        sha, date, message, refs, body, author_name, author_email = fields[:7]
        entries.append(
            LogEntry(
                hash=sha.strip(),
                date=date,
                message=message,
                refs=refs,
                body=body.strip(),
                author_name=author_name,
                author_email=author_email,
            )
        )
    return LogListing.from_entries(entries)


def parse_branches(output: str) -> BranchListing:
    """Parse ``git branch -a -v --no-abbrev`` output."""
    current = ""
    detached = False
    names: list[str] = []
    branches: dict[str, BranchEntry] = {}

    for line in output.splitlines():
        match = _BRANCH_LINE.match(line)
        if not match:
            continue
        name = match.group("name")
        is_current = match.group("marker") == "*"
        if name.startswith("("):
            # "(HEAD detached at 1a2b3c4)"
            detached = detached or is_current
            name = match.group("commit")
        if is_current:
            current = name
        names.append(name)
        branches[name] = BranchEntry(
            name=name,
            current=is_current,
            commit=match.group("commit"),
            label=match.group("label").strip(),
        )

    return BranchListing(
        current=current, all=names, branches=branches, detached=detached
    )


def parse_remotes(output: str) -> list[RemoteEntry]:
    """Parse ``git remote -v`` output into one entry per remote name."""
    refs: dict[str, dict[str, str]] = {}
    for line in split_lines(output):
        parts = line.split()
        if len(parts) < 2:
            continue
        name, url = parts[0], parts[1]
        kind = parts[2].strip("()") if len(parts) > 2 else "fetch"
        entry = refs.setdefault(name, {"fetch": "", "push": ""})
        if kind in entry:
            entry[kind] = url
    return [
        RemoteEntry(name=name, refs=RemoteRefs(**urls)) for name, urls in refs.items()
    ]
