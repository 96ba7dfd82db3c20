"""Result schema for SSH helper operations."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

__all__ = ["SshOperation", "SshResult"]


class SshOperation(str, Enum):
    """Operation names accepted by :meth:`SshService.handle`."""

    CHECK_KEY = "check-ssh-key"
    GENERATE_KEY = "generate-ssh-key"
    GET_PUBLIC_KEY = "get-public-key"
    CHECK_KNOWN_HOSTS = "ssh-check-known-hosts"
    ADD_KNOWN_HOST = "ssh-add-known-host"


class SshResult(BaseModel):
    """Outcome of an SSH helper call.

    Only the fields meaningful for the operation are set; the envelope form
    drops the rest and uses camelCase keys (``publicKey``, ``hasHostEntry``).
    """

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    success: bool
    exists: bool | None = None
    public_key: str | None = None
    has_host_entry: bool | None = None
    host: str | None = None
    message: str | None = None
    error: str | None = None

    @classmethod
    def fail(cls, error: str) -> SshResult:
        return cls(success=False, error=error)

    def to_envelope(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
