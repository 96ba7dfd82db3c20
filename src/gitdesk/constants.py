"""gitdesk constants.

Single source of truth for engine limits, defaults and well-known names used
across the dispatcher, the client façade and the SSH helpers.
"""

from __future__ import annotations

# =============================================================================
# Engine
# =============================================================================

#: Minimum timeout for blocking git commands, large working trees need it
MIN_BLOCK_TIMEOUT_SECONDS: int = 300

#: Default timeout for blocking git commands
DEFAULT_BLOCK_TIMEOUT_SECONDS: int = 300

#: Number of commits returned by the ``log`` operation
LOG_MAX_COUNT: int = 50

#: Remote used when an operation does not name one
DEFAULT_REMOTE: str = "origin"

#: Branch reported when the current branch cannot be determined
FALLBACK_BRANCH: str = "main"

#: Pathspec staged by ``add`` when none is given
DEFAULT_ADD_PATHSPEC: str = "."

#: Argument used by ``diff`` when none is given
DEFAULT_DIFF_ARG: str = "--cached"

# =============================================================================
# SSH
# =============================================================================

#: Key pair file name inside the SSH directory
DEFAULT_KEY_NAME: str = "id_rsa"

#: Key type and size passed to ssh-keygen
KEY_TYPE: str = "rsa"
KEY_BITS: int = 4096

#: Identity comment used when the caller gives none
DEFAULT_KEY_IDENTITY: str = "git@example.com"

#: Host checked when an SSH host operation is not given one
DEFAULT_SSH_HOST: str = "github.com"

#: ssh-keyscan key-type preferences, tried in order
KEYSCAN_TYPE_PREFERENCES: tuple[str, ...] = (
    "rsa,dsa,ecdsa,ed25519",
    "rsa",
    "ecdsa",
    "ed25519",
)

#: Key material marking a placeholder host line that must never be written
PLACEHOLDER_KEY_MARKER: str = "AAAAEXAMPLE"

#: Published host keys for hosts whose live scan can be skipped.
#:
#: Used only when every ssh-keyscan attempt failed and
#: ``ssh.allow_builtin_host_keys`` is enabled. Trusting these lines skips
#: verification against the live host; keep the table in sync with the keys
#: the providers publish.
WELL_KNOWN_HOST_KEYS: dict[str, tuple[str, ...]] = {
    "github.com": (
        "github.com ssh-rsa AAAAB3NzaC1yc2EAAAABIwAAAQEAq2A7hRGmdnm9tUDbO9IDSwBK6TbQa+"
        "PXYPCPy6rbTrTtw7PHkccKrpp0yVhp5HdEIcKr6pLlVDBfOLX9QUsyCOV0wzfjIJNlGEYsdlLJiz"
        "Hhbn2mUjvSAHQqZETYP81eFzLQNnPHt4EVVUh7VfDESU84KezmD5QlWpXLmvU31/yMf+Se8xhHTv"
        "KSCZIFImWwoG6mbUoWf9nzpIoaSjB+weqqUUmpaaasXVal72J+UX2B+2RPW3RcT0eOzQgqlJL3RK"
        "rTJvdsjE3JEAvGq3lGHSZXy28G3skua2SmVi/w4yCE6gbODqnTWlg7+wC604ydGXA8VJiS5ap43J"
        "XiUFFAaQ==",
        "github.com ecdsa-sha2-nistp256 AAAAE2VjZHNhLXNoYTItbmlzdHAyNTYAAAAIbmlzdHAyNT"
        "YAAABBBEmKSENjQEezOmxkZMy7opKgwFB9nkt5YRrYMjNuG5N87uRgg6CLrLk0WKQ7uLwqcN9IR3"
        "v/GJWeLwhBYGGSWoA=",
        "github.com ssh-ed25519 AAAAC3NzaC1lZDI1NTE5AAAAIOMqqnkVzrm0SdG6UOoqKLsYqDo3bk"
        "hkCMTPHK9J6MvC",
    ),
    "gitlab.com": (
        "gitlab.com ssh-ed25519 AAAAC3NzaC1lZDI1NTE5AAAAIAfuCHKVTjquxvt98WTOuOuP4uZ8xe"
        "BFVvyZ0B+9Pj44",
        "gitlab.com ecdsa-sha2-nistp256 AAAAE2VjZHNhLXNoYTItbmlzdHAyNTYAAAAIbmlzdHAyNT"
        "YAAABBBFSMqzJeV9rUzU/odLm0t2HKQsbiI17W1t7053sP07YlNNROlJfoM6MxMHhFYDkjHSaw8b"
        "SWcxIrmhqmG5HzUWE=",
        "gitlab.com ssh-rsa AAAAB3NzaC1yc2EAAAADAQABAAABAQCsj2bNKTBSpIYDEGk9KxsGh3Otx"
        "J6JKZVa527HncQT3Ga8OK0gXT76TUpRU1kYTGtoWOgQ1bCcX+NVn92YNKI1qJGWDoVHQQLpCLHtU"
        "SPbOPlqK0WVBTTVlgnGsp3YTrTwt7U3nzbKt5oY4AyFsBIm1Cz+VpCGM0D40aoEzwS6tOGSmB0ib"
        "s46zHwZ0HYBq8A0VtSwwNWxT8F5cRgKNXsMCGdWl6CJeZC49zYH4DgkEq6zAuCSYDxJVY96mA7ZC"
        "p6E12HXdP1E8d7VBAIaSK/Nu3oih692qGp67z4fXKQcT3PFEV2o9Kf9K8QJvfjJ/Es893f9H8E8U"
        "B5qQo7J0Y1YzFi4Q==",
    ),
}

# =============================================================================
# Preferences
# =============================================================================

#: Preference key holding the JSON-encoded recent repository list
RECENT_REPOSITORIES_KEY: str = "gitRepos"

#: Number of recent repositories kept
MAX_RECENT_REPOSITORIES: int = 5

#: Line appended to .gitignore by the ignore helper
DEFAULT_GITIGNORE_ENTRY: str = "node_modules/"
