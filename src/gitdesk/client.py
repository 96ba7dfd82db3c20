"""Async client façade over the operation bridge.

:class:`GitClient` is what presentation code talks to. Every call goes
through :meth:`GitClient.execute`, which

- sends the operation across the bridge and validates the envelope,
- turns the "does not have any commits yet" failure of ``status`` and
  ``log`` into an empty successful result,
- reports other failures, and the success of state-changing operations,
  through the injected :class:`~gitdesk.notifications.Notifier`.

Payloads stay JSON-plain (dicts, lists, strings) on this side of the bridge.

Example:
    ```python
    client = GitClient(ThreadBridge(dispatcher))
    status = await client.get_status("/work/project")
    if status.success:
        print(status.data["current"])
    ```
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import ValidationError

from gitdesk.bridge import Bridge
from gitdesk.constants import DEFAULT_REMOTE, FALLBACK_BRANCH
from gitdesk.git.errors import ErrorKind, classify_error
from gitdesk.git.models import LogListing, OperationResult, StatusListing
from gitdesk.git.requests import MUTATING_OPERATIONS, Operation
from gitdesk.logging import get_logger
from gitdesk.notifications import LogNotifier, Notifier

logger = get_logger(__name__)

__all__ = ["GitClient"]

# Reads whose "no commits yet" failure means an empty result
_EMPTY_ON_NO_COMMITS: dict[str, Any] = {
    Operation.STATUS.value: StatusListing,
    Operation.LOG.value: LogListing,
}


def _success_message(operation: str, args: tuple[str | None, ...]) -> str:
    first = args[0] if args else None
    second = args[1] if len(args) > 1 else None
    match operation:
        case "init":
            return "Repository initialized"
        case "add":
            return "Files staged"
        case "commit":
            return "Commit created"
        case "pull":
            return "Pulled remote changes"
        case "push":
            return "Pushed to remote"
        case "checkout":
            return f"Switched to branch: {first}"
        case "create-branch":
            return f"Branch created: {first}"
        case "fetch":
            return "Fetched remote updates"
        case "tag-create":
            return f"Tag created: {first}"
        case "tag-push":
            return f"Tag pushed: {second}" if second else "All tags pushed"
        case _:
            return f"{operation} succeeded"


class GitClient:
    """Async operation façade used by presentation code.

    Attributes:
        bridge: Transport to the dispatcher.
        notifier: Receiver of user-facing messages.
        fallback_branch: Branch name reported when the current one is unknown.
    """

    def __init__(
        self,
        bridge: Bridge,
        notifier: Notifier | None = None,
        *,
        fallback_branch: str = FALLBACK_BRANCH,
    ) -> None:
        self.bridge = bridge
        self.notifier: Notifier = notifier or LogNotifier()
        self.fallback_branch = fallback_branch

    async def execute(
        self,
        operation: str,
        repo_path: Path | str,
        *args: str | None,
        notify: bool = True,
    ) -> OperationResult:
        """Run one operation through the bridge.

        Args:
            operation: Operation name.
            repo_path: Repository directory.
            *args: Positional operation arguments.
            notify: Report the outcome through the notifier.

        Returns:
            The validated result. Never raises for operational failures.
        """
        log = logger.bind(operation=operation, repo_path=str(repo_path))
        try:
            envelope = await self.bridge.invoke(operation, repo_path, *args)
            result = OperationResult.from_envelope(envelope)
        except ValidationError as e:
            log.error("git_envelope_invalid", error=str(e))
            return self._failed(
                operation, f"Invalid reply from git bridge: {e}", notify
            )
        except Exception as e:
            log.exception("git_bridge_failed")
            return self._failed(
                operation,
                str(e) or type(e).__name__,
                notify,
                notice=f"Error while running git operation ({operation}): {e}",
            )

        if not result.success:
            empty = _EMPTY_ON_NO_COMMITS.get(operation)
            no_commits = classify_error(result.error) is ErrorKind.NO_COMMITS_YET
            if empty is not None and no_commits:
                log.debug("git_operation_no_commits")
                return OperationResult.ok(empty().model_dump(mode="json"))
            return self._failed(operation, result.error or "", notify)

        if notify and operation in MUTATING_OPERATIONS:
            self.notifier.success(_success_message(operation, args))
        return result

    def _failed(
        self,
        operation: str,
        error: str,
        notify: bool,
        *,
        notice: str | None = None,
    ) -> OperationResult:
        message = error or f"Git operation failed: {operation}"
        if notify:
            self.notifier.error(
                notice or f"Git operation failed ({operation}): {message}"
            )
        return OperationResult.fail(message)

    async def is_git_repository(self, repo_path: Path | str) -> bool:
        result = await self.execute(Operation.STATUS.value, repo_path, notify=False)
        return result.success

    async def init(self, repo_path: Path | str) -> OperationResult:
        return await self.execute(Operation.INIT.value, repo_path)

    async def get_status(self, repo_path: Path | str) -> OperationResult:
        return await self.execute(Operation.STATUS.value, repo_path)

    async def add(self, repo_path: Path | str, files: str = ".") -> OperationResult:
        return await self.execute(Operation.ADD.value, repo_path, files)

    async def commit(self, repo_path: Path | str, message: str) -> OperationResult:
        return await self.execute(Operation.COMMIT.value, repo_path, message)

    async def get_log(self, repo_path: Path | str) -> OperationResult:
        return await self.execute(Operation.LOG.value, repo_path)

    async def pull(self, repo_path: Path | str) -> OperationResult:
        return await self.execute(Operation.PULL.value, repo_path)

    async def push(self, repo_path: Path | str, *flags: str) -> OperationResult:
        """Push; a missing upstream is set up by the dispatcher."""
        return await self.execute(Operation.PUSH.value, repo_path, *flags)

    async def get_branches(self, repo_path: Path | str) -> OperationResult:
        return await self.execute(Operation.BRANCH.value, repo_path)

    async def checkout(self, repo_path: Path | str, branch: str) -> OperationResult:
        return await self.execute(Operation.CHECKOUT.value, repo_path, branch)

    async def create_branch(
        self, repo_path: Path | str, branch: str
    ) -> OperationResult:
        return await self.execute(Operation.CREATE_BRANCH.value, repo_path, branch)

    async def fetch(
        self, repo_path: Path | str, remote: str = DEFAULT_REMOTE
    ) -> OperationResult:
        return await self.execute(Operation.FETCH.value, repo_path, remote)

    async def get_diff(self, repo_path: Path | str, file: str) -> OperationResult:
        return await self.execute(Operation.DIFF_FILE.value, repo_path, file)

    async def get_staged_diff(self, repo_path: Path | str) -> OperationResult:
        return await self.execute(Operation.DIFF.value, repo_path, "--cached")

    async def show(self, repo_path: Path | str, ref: str) -> OperationResult:
        return await self.execute(Operation.SHOW.value, repo_path, ref)

    async def unstage(
        self, repo_path: Path | str, file: str | None = None
    ) -> OperationResult:
        """Unstage one file, or everything when *file* is None."""
        if file:
            return await self.execute(Operation.RESET.value, repo_path, file)
        return await self.execute(Operation.RESET.value, repo_path)

    async def add_remote(
        self, repo_path: Path | str, url: str, name: str = DEFAULT_REMOTE
    ) -> OperationResult:
        return await self.execute(Operation.ADD_REMOTE.value, repo_path, name, url)

    async def get_remote_url(
        self, repo_path: Path | str, name: str = DEFAULT_REMOTE
    ) -> OperationResult:
        return await self.execute(Operation.REMOTE.value, repo_path, "get-url", name)

    async def set_remote_url(
        self, repo_path: Path | str, url: str, name: str = DEFAULT_REMOTE
    ) -> OperationResult:
        return await self.execute(
            Operation.REMOTE.value, repo_path, "set-url", name, url
        )

    async def get_remotes(self, repo_path: Path | str) -> OperationResult:
        return await self.execute(Operation.GET_REMOTES.value, repo_path)

    async def clone(
        self, parent_path: Path | str, url: str, target: Path | str
    ) -> OperationResult:
        """Clone *url* into *target*; *parent_path* must exist."""
        return await self.execute(Operation.CLONE.value, parent_path, url, str(target))

    async def rev_list(self, repo_path: Path | str, *args: str) -> OperationResult:
        return await self.execute(Operation.REV_LIST.value, repo_path, *args)

    async def get_tags(self, repo_path: Path | str) -> OperationResult:
        """Tag names as a list, empty lines dropped."""
        result = await self.execute(Operation.TAG_LIST.value, repo_path)
        if result.success and isinstance(result.data, str):
            tags = [line.strip() for line in result.data.splitlines() if line.strip()]
            return OperationResult.ok(tags)
        return result

    async def create_tag(
        self, repo_path: Path | str, name: str, message: str | None = None
    ) -> OperationResult:
        if message:
            return await self.execute(
                Operation.TAG_CREATE.value, repo_path, name, message
            )
        return await self.execute(Operation.TAG_CREATE.value, repo_path, name)

    async def push_tags(
        self,
        repo_path: Path | str,
        remote: str = DEFAULT_REMOTE,
        name: str | None = None,
    ) -> OperationResult:
        """Push one tag, or all tags when *name* is None."""
        return await self.execute(Operation.TAG_PUSH.value, repo_path, remote, name)

    async def get_current_branch(self, repo_path: Path | str) -> str:
        """Checked out branch, or the fallback branch when it is unknown."""
        result = await self.execute(Operation.BRANCH.value, repo_path, notify=False)
        if result.success and isinstance(result.data, dict):
            current = result.data.get("current")
            if current:
                return str(current)
        return self.fallback_branch

    async def get_ahead_behind(
        self,
        repo_path: Path | str,
        branch: str | None = None,
        remote: str = DEFAULT_REMOTE,
    ) -> tuple[int, int]:
        """Commits ``branch`` is ahead of and behind ``remote/branch``.

        Returns ``(0, 0)`` when either count cannot be computed, e.g. before
        the first push.
        """
        branch = branch or await self.get_current_branch(repo_path)
        upstream = f"{remote}/{branch}"
        ahead = await self._count(repo_path, f"{upstream}..{branch}")
        behind = await self._count(repo_path, f"{branch}..{upstream}")
        if ahead is None or behind is None:
            return 0, 0
        return ahead, behind

    async def _count(self, repo_path: Path | str, revision_range: str) -> int | None:
        result = await self.execute(
            Operation.REV_LIST.value, repo_path, "--count", revision_range, notify=False
        )
        if not result.success:
            return None
        try:
            return int(str(result.data).strip())
        except ValueError:
            return None
