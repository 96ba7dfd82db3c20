"""Result schemas for git operations.

Every payload that crosses the dispatcher boundary is one of the models in
this module (or a plain string). They are frozen pydantic models so the
envelope can be dumped to JSON-plain data with ``model_dump(mode="json")``
and validated back on the consuming side.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field

__all__ = [
    "BranchEntry",
    "BranchListing",
    "FileStatus",
    "LogEntry",
    "LogListing",
    "OperationPayload",
    "OperationResult",
    "RemoteEntry",
    "RemoteRefs",
    "StatusListing",
]


class FileStatus(BaseModel):
    """One path from ``git status --porcelain``.

    Attributes:
        path: Path relative to the repository root.
        index: Index (staged) status letter, space when unchanged.
        working_dir: Working tree status letter, space when unchanged.
        from_path: Original path of a rename or copy.
    """

    model_config = ConfigDict(frozen=True)

    path: str
    index: str = " "
    working_dir: str = " "
    from_path: str | None = None


_CONFLICT_CODES = frozenset({"DD", "AU", "UD", "UA", "DU", "AA", "UU"})


class StatusListing(BaseModel):
    """Repository status snapshot.

    The per-category lists are derived from ``files`` so a listing built
    from the same porcelain output always agrees with itself.
    """

    model_config = ConfigDict(frozen=True)

    current: str | None = None
    tracking: str | None = None
    ahead: int = 0
    behind: int = 0
    detached: bool = False
    files: list[FileStatus] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def not_added(self) -> list[str]:
        return [f.path for f in self.files if f.index == "?"]

    @computed_field  # type: ignore[prop-decorator]
    @property
    def conflicted(self) -> list[str]:
        return [
            f.path for f in self.files if f.index + f.working_dir in _CONFLICT_CODES
        ]

    @computed_field  # type: ignore[prop-decorator]
    @property
    def created(self) -> list[str]:
        return [f.path for f in self.files if f.index == "A"]

    @computed_field  # type: ignore[prop-decorator]
    @property
    def deleted(self) -> list[str]:
        return [f.path for f in self.files if "D" in (f.index, f.working_dir)]

    @computed_field  # type: ignore[prop-decorator]
    @property
    def modified(self) -> list[str]:
        return [f.path for f in self.files if f.working_dir == "M"]

    @computed_field  # type: ignore[prop-decorator]
    @property
    def renamed(self) -> list[str]:
        return [f.path for f in self.files if f.index == "R"]

    @computed_field  # type: ignore[prop-decorator]
    @property
    def staged(self) -> list[str]:
        return [
            f.path
            for f in self.files
            if f.index not in (" ", "?", "!")
            and f.index + f.working_dir not in _CONFLICT_CODES
        ]

    def is_clean(self) -> bool:
        """True when no path is changed, staged or untracked."""
        return not self.files


class LogEntry(BaseModel):
    """Single commit from the log listing."""

    model_config = ConfigDict(frozen=True)

    hash: str
    date: str
    message: str
    refs: str = ""
    body: str = ""
    author_name: str = ""
    author_email: str = ""


class LogListing(BaseModel):
    """Commit history, most recent first.

    Attributes:
        all: Commits returned by git, capped at the configured count.
        total: Number of commits in ``all``.
        latest: First entry of ``all``, None for an empty history.
    """

    model_config = ConfigDict(frozen=True)

    all: list[LogEntry] = Field(default_factory=list)
    total: int = 0
    latest: LogEntry | None = None

    @classmethod
    def from_entries(cls, entries: list[LogEntry]) -> LogListing:
        latest = entries[0] if entries else None
        return cls(all=entries, total=len(entries), latest=latest)


class BranchEntry(BaseModel):
    """One branch from ``git branch -a -v``."""

    model_config = ConfigDict(frozen=True)

    name: str
    current: bool = False
    commit: str = ""
    label: str = ""


class BranchListing(BaseModel):
    """Local and remote-tracking branches.

    Attributes:
        current: Checked out branch, empty when git reports none.
        all: Branch names in git's order.
        branches: Branch details keyed by name.
        detached: True when HEAD is detached.
    """

    model_config = ConfigDict(frozen=True)

    current: str = ""
    all: list[str] = Field(default_factory=list)
    branches: dict[str, BranchEntry] = Field(default_factory=dict)
    detached: bool = False


class RemoteRefs(BaseModel):
    model_config = ConfigDict(frozen=True)

    fetch: str = ""
    push: str = ""


class RemoteEntry(BaseModel):
    """A configured remote and its fetch/push URLs."""

    model_config = ConfigDict(frozen=True)

    name: str
    refs: RemoteRefs = Field(default_factory=RemoteRefs)


OperationPayload = (
    StatusListing | LogListing | BranchListing | list[RemoteEntry] | list[str] | str
)


class OperationResult(BaseModel):
    """Uniform outcome of a git operation.

    Either ``success`` with ``data`` or a failure with ``error``. Built with
    :meth:`ok` / :meth:`fail`; :meth:`to_envelope` produces the plain data
    that crosses the process boundary.

    Example:
        >>> OperationResult.ok("done").to_envelope()
        {'success': True, 'data': 'done'}
        >>> OperationResult.fail("Path does not exist: /nope").to_envelope()
        {'success': False, 'error': 'Path does not exist: /nope'}
    """

    model_config = ConfigDict(frozen=True)

    success: bool
    data: Any = None
    error: str | None = None

    @classmethod
    def ok(
        cls, data: OperationPayload | dict[str, Any] | None = None
    ) -> OperationResult:
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str) -> OperationResult:
        return cls(success=False, error=error)

    def to_envelope(self) -> dict[str, Any]:
        """Dump to JSON-plain data: ``{success, data}`` or ``{success, error}``."""
        if self.success:
            return {"success": True, "data": _to_plain(self.data)}
        return {"success": False, "error": self.error or ""}

    @classmethod
    def from_envelope(cls, envelope: dict[str, Any]) -> OperationResult:
        return cls.model_validate(envelope)


def _to_plain(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, list):
        return [_to_plain(item) for item in value]
    if isinstance(value, dict):
        return {str(key): _to_plain(item) for key, item in value.items()}
    return value
