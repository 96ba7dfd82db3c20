"""Tests for engine error classification."""

from __future__ import annotations

import pytest

from gitdesk.git.errors import ErrorKind, classify_error


class TestClassifyError:
    @pytest.mark.parametrize(
        "message",
        [
            "fatal: The current branch feature has no upstream branch.\n"
            "To push the current branch and set the remote as upstream, use\n\n"
            "    git push --set-upstream origin feature",
            "error: no upstream branch configured",
            "hint: use setUpstream",
            "the current branch x has no upstream",
        ],
    )
    def test_missing_upstream(self, message: str) -> None:
        assert classify_error(message) is ErrorKind.MISSING_UPSTREAM

    def test_no_commits_yet(self) -> None:
        message = "fatal: your current branch 'main' does not have any commits yet"
        assert classify_error(message) is ErrorKind.NO_COMMITS_YET

    @pytest.mark.parametrize(
        "message",
        [
            "choose_kex: unsupported KEX method sntrup761x25519-sha512@openssh.com",
            "Unable to negotiate: unsupported key exchange",
        ],
    )
    def test_unsupported_kex(self, message: str) -> None:
        assert classify_error(message) is ErrorKind.UNSUPPORTED_KEX

    @pytest.mark.parametrize("message", [None, "", "fatal: not a git repository"])
    def test_other(self, message: str | None) -> None:
        assert classify_error(message) is ErrorKind.OTHER
