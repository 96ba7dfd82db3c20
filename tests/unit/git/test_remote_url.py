"""Tests for HTTPS <-> SSH remote URL conversion."""

from __future__ import annotations

import pytest

from gitdesk.git.remote_url import (
    detect_protocol,
    remote_host,
    to_https_url,
    to_ssh_url,
)


class TestToSshUrl:
    def test_converts_canonical_https(self) -> None:
        url = to_ssh_url("https://github.com/alice/proj.git")
        assert url == "git@github.com:alice/proj.git"

    def test_nested_group_path(self) -> None:
        assert (
            to_ssh_url("https://gitlab.com/group/sub/proj.git")
            == "git@gitlab.com:group/sub/proj.git"
        )

    def test_custom_user(self) -> None:
        assert (
            to_ssh_url("https://example.org/team/app.git", user="deploy")
            == "deploy@example.org:team/app.git"
        )

    @pytest.mark.parametrize(
        "url",
        [
            "https://github.com/alice/proj",
            "http://github.com/alice/proj.git",
            "git@github.com:alice/proj.git",
            "",
        ],
    )
    def test_non_canonical_returned_unchanged(self, url: str) -> None:
        assert to_ssh_url(url) == url


class TestToHttpsUrl:
    def test_converts_canonical_ssh(self) -> None:
        url = to_https_url("git@github.com:alice/proj.git")
        assert url == "https://github.com/alice/proj.git"

    @pytest.mark.parametrize(
        "url",
        [
            "ssh://git@github.com/alice/proj.git",
            "git@github.com:alice/proj",
            "/srv/repo.git",
        ],
    )
    def test_non_canonical_returned_unchanged(self, url: str) -> None:
        assert to_https_url(url) == url


def test_round_trip_is_exact() -> None:
    url = "https://github.com/alice/proj.git"
    assert to_https_url(to_ssh_url(url)) == url


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("https://github.com/alice/proj.git", "https"),
        ("git@github.com:alice/proj.git", "ssh"),
        ("/srv/git/proj.git", None),
        (None, None),
    ],
)
def test_detect_protocol(url: str | None, expected: str | None) -> None:
    assert detect_protocol(url) == expected


def test_remote_host() -> None:
    assert remote_host("git@gitlab.com:group/proj.git") == "gitlab.com"
    assert remote_host("https://github.com/alice/proj.git") == "github.com"
    assert remote_host("/srv/git/proj.git") is None
