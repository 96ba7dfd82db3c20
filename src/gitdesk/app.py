"""Application host wiring the gitdesk components together.

``GitDeskApp`` owns the engine registry for its lifetime; closing the app
(or leaving its ``with`` block) drops every cached binding.

Example:
    ```python
    with GitDeskApp(load_config()) as app:
        result = asyncio.run(app.client.get_status("/work/project"))
    ```
"""

from __future__ import annotations

from typing import Any

from gitdesk.bridge import ThreadBridge
from gitdesk.client import GitClient
from gitdesk.config import GitDeskConfig
from gitdesk.git.dispatcher import Dispatcher
from gitdesk.git.engine import EngineRegistry
from gitdesk.logging import get_logger
from gitdesk.notifications import LogNotifier, Notifier
from gitdesk.preferences import PreferenceStore, RecentRepositories
from gitdesk.runners import CommandRunner
from gitdesk.ssh import SshService

logger = get_logger(__name__)

__all__ = ["GitDeskApp"]


class GitDeskApp:
    """Single composition root: config in, ready-to-use services out.

    Attributes:
        config: Loaded configuration.
        registry: Path -> engine binding cache.
        dispatcher: Synchronous operation dispatcher.
        bridge: Async boundary in front of the dispatcher.
        client: Async client façade.
        ssh: SSH key and host-trust service.
        recent: Recent repository list.
    """

    def __init__(
        self,
        config: GitDeskConfig | None = None,
        *,
        notifier: Notifier | None = None,
        runner: CommandRunner | None = None,
    ) -> None:
        self.config = config or GitDeskConfig()
        engine = self.config.engine

        self.registry = EngineRegistry(block_timeout=engine.block_timeout_seconds)
        self.dispatcher = Dispatcher(
            self.registry,
            log_max_count=engine.log_max_count,
            default_remote=engine.default_remote,
        )
        self.bridge = ThreadBridge(self.dispatcher)
        self.client = GitClient(
            self.bridge,
            notifier or LogNotifier(),
            fallback_branch=engine.fallback_branch,
        )
        self.ssh = SshService(self.config.ssh, runner)
        self.recent = RecentRepositories(
            PreferenceStore(self.config.preferences.path),
            limit=self.config.preferences.max_recent,
        )
        self._closed = False
        logger.debug("app_started", block_timeout=engine.block_timeout_seconds)

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Release every engine binding. Safe to call more than once."""
        if self._closed:
            return
        self.registry.clear()
        self._closed = True
        logger.debug("app_closed")

    def __enter__(self) -> GitDeskApp:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
