"""Operation dispatcher: the single entry point for git actions.

``dispatch(operation, repo_path, *args)`` validates the path, parses the
request, runs it against the cached engine binding for the path and returns
an :class:`~gitdesk.git.models.OperationResult`. Every failure comes back as
a failed result; nothing raised by git escapes.

The only recovery performed here is for pushes rejected because the branch
has no upstream: the push is reissued once with
``--set-upstream <remote> <branch>``.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import NoReturn

from gitdesk.constants import DEFAULT_REMOTE, LOG_MAX_COUNT
from gitdesk.exceptions import (
    EngineError,
    GitDeskError,
    PathNotFoundError,
    TargetNotEmptyError,
)
from gitdesk.git.engine import EngineBinding, EngineRegistry, normalize_path
from gitdesk.git.errors import ErrorKind, classify_error
from gitdesk.git.models import OperationPayload, OperationResult
from gitdesk.git.parsers import (
    LOG_FORMAT,
    parse_branches,
    parse_log,
    parse_remotes,
    parse_status,
)
from gitdesk.git.requests import (
    AddRemoteRequest,
    AddRequest,
    BranchRequest,
    CheckoutRequest,
    CloneRequest,
    CommitRequest,
    CreateBranchRequest,
    DiffFileRequest,
    DiffRequest,
    FetchRequest,
    GetRemotesRequest,
    InitRequest,
    LogRequest,
    OperationRequest,
    PullRequest,
    PushRequest,
    RemoteGetUrlRequest,
    RemoteRequest,
    RemoteSetUrlRequest,
    ResetRequest,
    RevListRequest,
    ShowRequest,
    StatusRequest,
    TagCreateRequest,
    TagListRequest,
    TagPushRequest,
    TagRequest,
    UnstageRequest,
    parse_request,
)
from gitdesk.logging import get_logger

logger = get_logger(__name__)

__all__ = ["Dispatcher", "clone_repository"]


def _assert_never(request: NoReturn) -> NoReturn:
    raise AssertionError(f"Unhandled request type: {type(request).__name__}")


def clone_repository(registry: EngineRegistry, url: str, target: Path | str) -> str:
    """Clone *url* into *target*.

    A relative *target* is resolved against the process working directory.
    The target is created when missing and must be empty when present. The
    clone runs through a transient binding that is never cached.

    Raises:
        TargetNotEmptyError: If *target* exists and has content.
        EngineError: If git fails to clone.
    """
    target_path = normalize_path(target)
    if target_path.exists():
        if any(target_path.iterdir()):
            raise TargetNotEmptyError(target_path)
    else:
        target_path.mkdir(parents=True, exist_ok=True)

    binding = registry.transient(target_path.parent)
    return binding.execute("clone", url, str(target_path), merge_stderr=True)


class Dispatcher:
    """Routes named operations to the engine binding for a repository.

    Stateless per call; the only shared state is the injected registry.

    Attributes:
        registry: Path -> binding cache owned by the hosting application.
        log_max_count: Number of commits returned by ``log``.
        default_remote: Remote used for the upstream retry.

    Example:
        ```python
        dispatcher = Dispatcher(EngineRegistry())
        result = dispatcher.dispatch("commit", "/work/project", "fix typo")
        if not result.success:
            print(result.error)
        ```
    """

    def __init__(
        self,
        registry: EngineRegistry,
        *,
        log_max_count: int = LOG_MAX_COUNT,
        default_remote: str = DEFAULT_REMOTE,
    ) -> None:
        self._registry = registry
        self._log_max_count = log_max_count
        self._default_remote = default_remote

    @property
    def registry(self) -> EngineRegistry:
        return self._registry

    def dispatch(
        self,
        operation: str,
        repo_path: Path | str,
        *args: str | None,
    ) -> OperationResult:
        """Execute one named operation against *repo_path*.

        Args:
            operation: Operation name from the supported set.
            repo_path: Repository (or, for ``init``, target) directory.
            *args: Positional arguments, meaning depends on the operation.

        Returns:
            ``OperationResult.ok(payload)`` or ``OperationResult.fail(message)``.
        """
        log = logger.bind(operation=operation, repo_path=str(repo_path))
        log.debug("git_operation_started", args=list(args))

        try:
            if not Path(repo_path).expanduser().exists():
                raise PathNotFoundError(repo_path, operation=operation)
            request = parse_request(operation, args)
            binding = self._registry.get_or_create(repo_path)
            data = self.execute(binding, request)
        except GitDeskError as e:
            log.warning("git_operation_failed", error=e.message)
            return OperationResult.fail(e.message)
        except Exception as e:
            log.exception("git_operation_crashed")
            return OperationResult.fail(str(e) or type(e).__name__)

        log.debug("git_operation_succeeded")
        return OperationResult.ok(data)

    def execute(
        self, binding: EngineBinding, request: OperationRequest
    ) -> OperationPayload:
        """Run a parsed request on *binding* and return its payload.

        Raises:
            GitDeskError: Any validation or engine failure.
        """
        match request:
            case InitRequest():
                return binding.execute("init")
            case StatusRequest():
                return parse_status(
                    binding.execute("status", "--porcelain=v1", "-b", "-z")
                )
            case AddRequest(pathspec=pathspec):
                return binding.execute("add", pathspec)
            case CommitRequest(message=message):
                return binding.execute("commit", "-m", message)
            case LogRequest():
                return parse_log(
                    binding.execute(
                        "log",
                        f"--max-count={self._log_max_count}",
                        f"--pretty=format:{LOG_FORMAT}",
                    )
                )
            case PullRequest():
                return binding.execute("pull", merge_stderr=True)
            case PushRequest(flags=flags):
                return self._push(binding, flags)
            case BranchRequest():
                return parse_branches(
                    binding.execute("branch", "-a", "-v", "--no-abbrev", "--no-color")
                )
            case CheckoutRequest(branch=branch):
                return binding.execute("checkout", branch, merge_stderr=True)
            case CreateBranchRequest(branch=branch):
                return binding.execute("checkout", "-b", branch, merge_stderr=True)
            case FetchRequest(remote=remote):
                return binding.execute("fetch", remote, merge_stderr=True)
            case DiffRequest(target=target):
                return binding.execute("diff", target)
            case DiffFileRequest(path=path):
                return binding.execute("diff", path)
            case ShowRequest(ref=ref):
                return binding.execute("show", ref)
            case ResetRequest(path=path):
                return self._reset(binding, path)
            case UnstageRequest(path=path):
                return binding.execute("reset", "HEAD", path)
            case AddRemoteRequest(name=name, url=url):
                return binding.execute("remote", "add", name, url)
            case RemoteGetUrlRequest(name=name):
                return binding.execute("remote", "get-url", name).strip()
            case RemoteSetUrlRequest(name=name, url=url):
                return binding.execute("remote", "set-url", name, url)
            case RemoteRequest(args=remote_args):
                return binding.execute("remote", *remote_args)
            case CloneRequest(url=url, target=target):
                return clone_repository(self._registry, url, target)
            case GetRemotesRequest():
                return parse_remotes(binding.execute("remote", "-v"))
            case RevListRequest(args=rev_args):
                return binding.execute("rev-list", *rev_args)
            case TagRequest(args=tag_args):
                return binding.execute("tag", *(tag_args or ("-l",)))
            case TagListRequest():
                return binding.execute("tag", "-l")
            case TagCreateRequest(name=name, message=message):
                if message:
                    return binding.execute("tag", "-a", name, "-m", message)
                return binding.execute("tag", name)
            case TagPushRequest(remote=remote, name=name):
                if name:
                    return binding.execute(
                        "push", remote, f"refs/tags/{name}", merge_stderr=True
                    )
                return binding.execute("push", remote, "--tags", merge_stderr=True)
            case _:
                _assert_never(request)

    def _push(self, binding: EngineBinding, flags: Sequence[str]) -> str:
        try:
            return binding.execute("push", *flags, merge_stderr=True)
        except EngineError as e:
            if classify_error(e.message) is not ErrorKind.MISSING_UPSTREAM:
                raise
            branch = binding.current_branch()
            logger.info(
                "push_retry_set_upstream",
                repo_path=str(binding.path),
                branch=branch,
                remote=self._default_remote,
            )
            return binding.execute(
                "push",
                "--set-upstream",
                self._default_remote,
                branch,
                merge_stderr=True,
            )

    def _reset(self, binding: EngineBinding, path: str | None) -> str:
        if path:
            return binding.execute("reset", "--", path)
        try:
            return binding.execute("reset", "HEAD")
        except EngineError:
            # No HEAD yet in a repository without commits
            return binding.execute("reset")
