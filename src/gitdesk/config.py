from __future__ import annotations

from contextvars import ContextVar
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from gitdesk.constants import (
    DEFAULT_BLOCK_TIMEOUT_SECONDS,
    DEFAULT_KEY_IDENTITY,
    DEFAULT_KEY_NAME,
    DEFAULT_REMOTE,
    FALLBACK_BRANCH,
    LOG_MAX_COUNT,
    MAX_RECENT_REPOSITORIES,
    MIN_BLOCK_TIMEOUT_SECONDS,
)
from gitdesk.exceptions import ConfigError
from gitdesk.logging import get_logger

__all__ = [
    "GitDeskConfig",
    "EngineConfig",
    "SshConfig",
    "PreferencesConfig",
    "load_config",
    "get_user_config_path",
    "get_user_data_dir",
]

logger = get_logger(__name__)

#: Project config path selected by load_config (--config)
_project_config_path: ContextVar[Path | None] = ContextVar(
    "_project_config_path", default=None
)


def get_user_data_dir() -> Path:
    """Get the directory holding gitdesk's per-user state.

    Returns:
        Path to ~/.config/gitdesk
    """
    return Path.home() / ".config" / "gitdesk"


class EngineConfig(BaseModel):
    """Settings for the git engine bindings.

    Attributes:
        block_timeout_seconds: Timeout for a single blocking git command.
            Never lower than 300s so large working trees can finish.
        log_max_count: Number of commits returned by the log operation.
        default_remote: Remote used when an operation names none.
        fallback_branch: Branch reported when the current one is unknown.
    """

    block_timeout_seconds: int = Field(
        default=DEFAULT_BLOCK_TIMEOUT_SECONDS, ge=MIN_BLOCK_TIMEOUT_SECONDS
    )
    log_max_count: int = Field(default=LOG_MAX_COUNT, gt=0, le=10000)
    default_remote: str = DEFAULT_REMOTE
    fallback_branch: str = FALLBACK_BRANCH


class SshConfig(BaseModel):
    """Settings for SSH key management and host trust.

    Attributes:
        ssh_dir: Directory holding the key pair and known_hosts.
        key_name: File name of the private key (public key adds ``.pub``).
        default_identity: Key comment used when none is supplied.
        scan_timeout_seconds: Timeout for each ssh-keyscan attempt.
        allow_builtin_host_keys: Fall back to the published host keys of
            github.com and gitlab.com when every live scan fails.
    """

    ssh_dir: Path = Field(default_factory=lambda: Path.home() / ".ssh")
    key_name: str = DEFAULT_KEY_NAME
    default_identity: str = DEFAULT_KEY_IDENTITY
    scan_timeout_seconds: float = Field(default=10.0, gt=0.0, le=120.0)
    allow_builtin_host_keys: bool = True

    @field_validator("ssh_dir")
    @classmethod
    def expand_ssh_dir(cls, v: Path) -> Path:
        return v.expanduser()

    @property
    def private_key_path(self) -> Path:
        return self.ssh_dir / self.key_name

    @property
    def public_key_path(self) -> Path:
        return self.ssh_dir / f"{self.key_name}.pub"

    @property
    def known_hosts_path(self) -> Path:
        return self.ssh_dir / "known_hosts"


class PreferencesConfig(BaseModel):
    """Settings for the user preference store.

    Attributes:
        path: JSON file holding the preference keys.
        max_recent: Number of recent repositories kept.
    """

    path: Path = Field(default_factory=lambda: get_user_data_dir() / "preferences.json")
    max_recent: int = Field(default=MAX_RECENT_REPOSITORIES, ge=1, le=50)

    @field_validator("path")
    @classmethod
    def expand_path(cls, v: Path) -> Path:
        return v.expanduser()


class YamlConfigSource(PydanticBaseSettingsSource):
    """Custom settings source that loads from YAML files."""

    def __init__(
        self,
        settings_cls: type[BaseSettings],
        yaml_file: Path | None = None,
    ):
        super().__init__(settings_cls)
        self.yaml_file = yaml_file
        self._config_data: dict[str, Any] = {}
        if yaml_file and yaml_file.exists():
            try:
                with open(yaml_file) as f:
                    loaded = yaml.safe_load(f)
                    if loaded is None:
                        logger.warning("config_file_empty", path=str(yaml_file))
                    elif isinstance(loaded, dict):
                        self._config_data = loaded
                    else:
                        raise ConfigError(
                            message=f"Config file {yaml_file} must contain a mapping",
                            field=None,
                            value=type(loaded).__name__,
                        )
            except yaml.YAMLError as e:
                raise ConfigError(
                    message=f"Invalid YAML in {yaml_file}: {e}",
                    field=None,
                    value=None,
                ) from e

    def get_field_value(
        self, field: FieldInfo, field_name: str
    ) -> tuple[Any, str, bool]:
        """Get value for a specific field from the YAML config."""
        if field_name in self._config_data:
            return self._config_data[field_name], field_name, False
        return None, field_name, False

    def __call__(self) -> dict[str, Any]:
        """Return the complete config data."""
        return self._config_data


class GitDeskConfig(BaseSettings):
    """Root configuration object containing all gitdesk settings."""

    model_config = SettingsConfigDict(
        env_prefix="GITDESK_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    engine: EngineConfig = Field(default_factory=EngineConfig)
    ssh: SshConfig = Field(default_factory=SshConfig)
    preferences: PreferencesConfig = Field(default_factory=PreferencesConfig)
    verbosity: Literal["error", "warning", "info", "debug"] = "warning"

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize the order of settings sources.

        Priority (highest to lowest):
        1. Init settings (explicit keyword arguments)
        2. Environment variables (GITDESK_*)
        3. Project YAML config (./gitdesk.yaml or the --config path)
        4. User YAML config (~/.config/gitdesk/config.yaml)
        """
        project_config_path = _project_config_path.get() or Path.cwd() / "gitdesk.yaml"
        return (
            init_settings,
            env_settings,
            YamlConfigSource(settings_cls, project_config_path),
            YamlConfigSource(settings_cls, get_user_config_path()),
        )


def get_user_config_path() -> Path:
    """Get the path to the user configuration file.

    Returns:
        Path to ~/.config/gitdesk/config.yaml
    """
    return get_user_data_dir() / "config.yaml"


def load_config(config_path: Path | None = None) -> GitDeskConfig:
    """Load configuration with hierarchy: defaults -> user -> project -> env.

    Args:
        config_path: Optional path to project config file. Defaults to
            ./gitdesk.yaml

    Returns:
        GitDeskConfig instance with merged configuration

    Raises:
        ConfigError: If configuration is invalid
    """
    if config_path is None:
        config_path = Path.cwd() / "gitdesk.yaml"

    if not config_path.exists():
        logger.info("project_config_missing", path=str(config_path))

    token = _project_config_path.set(config_path)
    try:
        return GitDeskConfig()
    except ValidationError as e:
        first_error = e.errors()[0]
        field = ".".join(str(loc) for loc in first_error["loc"])
        raise ConfigError(
            message=f"Invalid configuration: {first_error['msg']}",
            field=field,
            value=first_error.get("input"),
        ) from e
    finally:
        _project_config_path.reset(token)
