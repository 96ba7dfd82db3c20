"""Closed set of git operations and their typed argument payloads.

An incoming ``(operation, args)`` pair is parsed once into one of the
request dataclasses below. The dispatcher then matches on the request type,
so adding an operation means adding an ``Operation`` member, a request
class, a parse branch and a match arm.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from gitdesk.constants import DEFAULT_ADD_PATHSPEC, DEFAULT_DIFF_ARG, DEFAULT_REMOTE
from gitdesk.exceptions import InvalidArgumentsError, UnsupportedOperationError

__all__ = [
    "Operation",
    "OperationRequest",
    "MUTATING_OPERATIONS",
    "parse_operation",
    "parse_request",
    "InitRequest",
    "StatusRequest",
    "AddRequest",
    "CommitRequest",
    "LogRequest",
    "PullRequest",
    "PushRequest",
    "BranchRequest",
    "CheckoutRequest",
    "CreateBranchRequest",
    "FetchRequest",
    "DiffRequest",
    "DiffFileRequest",
    "ShowRequest",
    "ResetRequest",
    "UnstageRequest",
    "AddRemoteRequest",
    "RemoteGetUrlRequest",
    "RemoteSetUrlRequest",
    "RemoteRequest",
    "CloneRequest",
    "GetRemotesRequest",
    "RevListRequest",
    "TagRequest",
    "TagListRequest",
    "TagCreateRequest",
    "TagPushRequest",
]


class Operation(str, Enum):
    """Operation names accepted across the boundary."""

    INIT = "init"
    STATUS = "status"
    ADD = "add"
    COMMIT = "commit"
    LOG = "log"
    PULL = "pull"
    PUSH = "push"
    BRANCH = "branch"
    CHECKOUT = "checkout"
    CREATE_BRANCH = "create-branch"
    FETCH = "fetch"
    DIFF = "diff"
    DIFF_FILE = "diff-file"
    SHOW = "show"
    RESET = "reset"
    UNSTAGE = "unstage"
    ADD_REMOTE = "add-remote"
    REMOTE = "remote"
    CLONE = "clone"
    GET_REMOTES = "get-remotes"
    REV_LIST = "rev-list"
    TAG = "tag"
    TAG_LIST = "tag-list"
    TAG_CREATE = "tag-create"
    TAG_PUSH = "tag-push"


#: Operations whose success is announced to the user
MUTATING_OPERATIONS: frozenset[Operation] = frozenset(
    {
        Operation.INIT,
        Operation.ADD,
        Operation.COMMIT,
        Operation.PULL,
        Operation.PUSH,
        Operation.CHECKOUT,
        Operation.CREATE_BRANCH,
        Operation.FETCH,
        Operation.TAG_CREATE,
        Operation.TAG_PUSH,
    }
)


@dataclass(frozen=True, slots=True)
class InitRequest:
    pass


@dataclass(frozen=True, slots=True)
class StatusRequest:
    pass


@dataclass(frozen=True, slots=True)
class AddRequest:
    pathspec: str = DEFAULT_ADD_PATHSPEC


@dataclass(frozen=True, slots=True)
class CommitRequest:
    message: str


@dataclass(frozen=True, slots=True)
class LogRequest:
    pass


@dataclass(frozen=True, slots=True)
class PullRequest:
    pass


@dataclass(frozen=True, slots=True)
class PushRequest:
    """Push with raw flag tokens, e.g. ``("--set-upstream", "origin", "main")``."""

    flags: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class BranchRequest:
    pass


@dataclass(frozen=True, slots=True)
class CheckoutRequest:
    branch: str


@dataclass(frozen=True, slots=True)
class CreateBranchRequest:
    branch: str


@dataclass(frozen=True, slots=True)
class FetchRequest:
    remote: str = DEFAULT_REMOTE


@dataclass(frozen=True, slots=True)
class DiffRequest:
    target: str = DEFAULT_DIFF_ARG


@dataclass(frozen=True, slots=True)
class DiffFileRequest:
    path: str


@dataclass(frozen=True, slots=True)
class ShowRequest:
    ref: str


@dataclass(frozen=True, slots=True)
class ResetRequest:
    """Unstage one path, or everything when ``path`` is None."""

    path: str | None = None


@dataclass(frozen=True, slots=True)
class UnstageRequest:
    path: str


@dataclass(frozen=True, slots=True)
class AddRemoteRequest:
    url: str
    name: str = DEFAULT_REMOTE


@dataclass(frozen=True, slots=True)
class RemoteGetUrlRequest:
    name: str


@dataclass(frozen=True, slots=True)
class RemoteSetUrlRequest:
    name: str
    url: str


@dataclass(frozen=True, slots=True)
class RemoteRequest:
    """Any other ``git remote`` invocation, passed through."""

    args: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class CloneRequest:
    url: str
    target: str


@dataclass(frozen=True, slots=True)
class GetRemotesRequest:
    pass


@dataclass(frozen=True, slots=True)
class RevListRequest:
    args: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class TagRequest:
    """``git tag`` with raw arguments; lists tags when empty."""

    args: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class TagListRequest:
    pass


@dataclass(frozen=True, slots=True)
class TagCreateRequest:
    """Annotated tag when ``message`` is given, lightweight otherwise."""

    name: str
    message: str | None = None


@dataclass(frozen=True, slots=True)
class TagPushRequest:
    """Push one tag, or all tags when ``name`` is None."""

    remote: str = DEFAULT_REMOTE
    name: str | None = None


OperationRequest = (
    InitRequest
    | StatusRequest
    | AddRequest
    | CommitRequest
    | LogRequest
    | PullRequest
    | PushRequest
    | BranchRequest
    | CheckoutRequest
    | CreateBranchRequest
    | FetchRequest
    | DiffRequest
    | DiffFileRequest
    | ShowRequest
    | ResetRequest
    | UnstageRequest
    | AddRemoteRequest
    | RemoteGetUrlRequest
    | RemoteSetUrlRequest
    | RemoteRequest
    | CloneRequest
    | GetRemotesRequest
    | RevListRequest
    | TagRequest
    | TagListRequest
    | TagCreateRequest
    | TagPushRequest
)


def _arg(args: Sequence[str | None], index: int) -> str | None:
    """Positional argument, with empty strings treated as absent."""
    if index < len(args) and args[index]:
        return args[index]
    return None


def _require(args: Sequence[str | None], index: int, operation: str, what: str) -> str:
    value = _arg(args, index)
    if value is None:
        raise InvalidArgumentsError(f"{operation} requires {what}", operation=operation)
    return value


def _rest(args: Sequence[str | None]) -> tuple[str, ...]:
    return tuple(str(arg) for arg in args if arg is not None)


def parse_operation(name: str) -> Operation:
    """Exact lookup of an operation name.

    Raises:
        UnsupportedOperationError: If *name* is not a supported operation.
    """
    try:
        return Operation(name)
    except ValueError:
        raise UnsupportedOperationError(name) from None


def parse_request(name: str, args: Sequence[str | None] = ()) -> OperationRequest:
    """Parse an operation name and positional arguments into a request.

    Args:
        name: Operation name, e.g. "create-branch".
        args: Positional arguments, meaning depends on the operation.

    Returns:
        The typed request for the operation.

    Raises:
        UnsupportedOperationError: If *name* is not a supported operation.
        InvalidArgumentsError: If a mandatory argument is missing.
    """
    operation = parse_operation(name)

    if operation is Operation.INIT:
        return InitRequest()
    if operation is Operation.STATUS:
        return StatusRequest()
    if operation is Operation.ADD:
        return AddRequest(pathspec=_arg(args, 0) or DEFAULT_ADD_PATHSPEC)
    if operation is Operation.COMMIT:
        return CommitRequest(message=_require(args, 0, name, "a commit message"))
    if operation is Operation.LOG:
        return LogRequest()
    if operation is Operation.PULL:
        return PullRequest()
    if operation is Operation.PUSH:
        return PushRequest(flags=_rest(args))
    if operation is Operation.BRANCH:
        return BranchRequest()
    if operation is Operation.CHECKOUT:
        return CheckoutRequest(branch=_require(args, 0, name, "a branch name"))
    if operation is Operation.CREATE_BRANCH:
        return CreateBranchRequest(branch=_require(args, 0, name, "a branch name"))
    if operation is Operation.FETCH:
        return FetchRequest(remote=_arg(args, 0) or DEFAULT_REMOTE)
    if operation is Operation.DIFF:
        return DiffRequest(target=_arg(args, 0) or DEFAULT_DIFF_ARG)
    if operation is Operation.DIFF_FILE:
        return DiffFileRequest(path=_require(args, 0, name, "a file path"))
    if operation is Operation.SHOW:
        return ShowRequest(ref=_require(args, 0, name, "a commit or file reference"))
    if operation is Operation.RESET:
        return ResetRequest(path=_arg(args, 0))
    if operation is Operation.UNSTAGE:
        return UnstageRequest(path=_require(args, 0, name, "a file path"))
    if operation is Operation.ADD_REMOTE:
        return AddRemoteRequest(
            name=_arg(args, 0) or DEFAULT_REMOTE,
            url=_require(args, 1, name, "a remote URL"),
        )
    if operation is Operation.REMOTE:
        sub = _arg(args, 0)
        if sub == "get-url" and _arg(args, 1):
            return RemoteGetUrlRequest(name=_require(args, 1, name, "a remote name"))
        if sub == "set-url" and _arg(args, 1) and _arg(args, 2):
            return RemoteSetUrlRequest(
                name=_require(args, 1, name, "a remote name"),
                url=_require(args, 2, name, "a remote URL"),
            )
        return RemoteRequest(args=_rest(args))
    if operation is Operation.CLONE:
        return CloneRequest(
            url=_require(args, 0, name, "a repository URL"),
            target=_require(args, 1, name, "a target path"),
        )
    if operation is Operation.GET_REMOTES:
        return GetRemotesRequest()
    if operation is Operation.REV_LIST:
        return RevListRequest(args=_rest(args))
    if operation is Operation.TAG:
        return TagRequest(args=_rest(args))
    if operation is Operation.TAG_LIST:
        return TagListRequest()
    if operation is Operation.TAG_CREATE:
        return TagCreateRequest(
            name=_require(args, 0, name, "a tag name"),
            message=_arg(args, 1),
        )
    if operation is Operation.TAG_PUSH:
        return TagPushRequest(
            remote=_arg(args, 0) or DEFAULT_REMOTE, name=_arg(args, 1)
        )

    raise UnsupportedOperationError(name)
