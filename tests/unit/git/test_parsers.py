"""Tests for porcelain output parsers."""

from __future__ import annotations

from gitdesk.git.parsers import (
    LOG_FORMAT,
    parse_branches,
    parse_log,
    parse_remotes,
    parse_status,
    split_lines,
)

FS = "\x1f"
RS = "\x1e"


def _log_record(sha: str, subject: str, refs: str = "", body: str = "") -> str:
    date = "2024-05-01T10:00:00+02:00"
    fields = (sha, date, subject, refs, body, "Ada", "ada@example.com")
    return FS.join(fields) + RS


class TestParseStatus:
    def test_branch_with_tracking_and_counts(self) -> None:
        listing = parse_status("## main...origin/main [ahead 2, behind 1]\0")

        assert listing.current == "main"
        assert listing.tracking == "origin/main"
        assert listing.ahead == 2
        assert listing.behind == 1
        assert listing.detached is False
        assert listing.is_clean()

    def test_branch_without_upstream(self) -> None:
        listing = parse_status("## feature/login")

        assert listing.current == "feature/login"
        assert listing.tracking is None
        assert listing.ahead == 0

    def test_no_commits_yet(self) -> None:
        listing = parse_status("## No commits yet on main\0?? notes.txt\0")

        assert listing.current == "main"
        assert listing.not_added == ["notes.txt"]

    def test_detached_head(self) -> None:
        listing = parse_status("## HEAD (no branch)\0")

        assert listing.detached is True
        assert listing.current == "HEAD"

    def test_file_categories(self) -> None:
        output = "\0".join(
            [
                "## main",
                "M  staged.py",
                " M changed.py",
                "A  added.py",
                " D gone.py",
                "R  new.py",
                "old.py",
                "UU conflict.py",
                "?? untracked.py",
            ]
        )
        listing = parse_status(output)

        assert listing.staged == ["staged.py", "added.py", "new.py"]
        assert listing.modified == ["changed.py"]
        assert listing.created == ["added.py"]
        assert listing.deleted == ["gone.py"]
        assert listing.renamed == ["new.py"]
        assert listing.conflicted == ["conflict.py"]
        assert listing.not_added == ["untracked.py"]
        renamed = next(f for f in listing.files if f.path == "new.py")
        assert renamed.from_path == "old.py"
        assert not listing.is_clean()

    def test_paths_are_verbatim(self) -> None:
        listing = parse_status("## main\0?? with space.txt\0?? caf\u00e9.txt\0")
        assert listing.not_added == ["with space.txt", "caf\u00e9.txt"]

    def test_rename_source_with_arrow_in_name(self) -> None:
        listing = parse_status("## main\0R  b -> c.txt\0a.txt\0?? d.txt\0")

        assert listing.renamed == ["b -> c.txt"]
        assert listing.files[0].from_path == "a.txt"
        assert listing.not_added == ["d.txt"]

    def test_computed_lists_in_dump(self) -> None:
        data = parse_status("## main\0?? a.txt\0").model_dump(mode="json")
        assert data["not_added"] == ["a.txt"]
        assert data["current"] == "main"


class TestParseLog:
    def test_format_uses_separators(self) -> None:
        assert FS in LOG_FORMAT
        assert LOG_FORMAT.endswith(RS)

    def test_entries_most_recent_first(self) -> None:
        second = _log_record("b" * 40, "Second", refs="HEAD -> main")
        first = _log_record("a" * 40, "First", body="Longer\ndescription\n")
        output = second + "\n" + first
        listing = parse_log(output)

        assert listing.total == 2
        assert [e.message for e in listing.all] == ["Second", "First"]
        assert listing.latest is not None
        assert listing.latest.hash == "b" * 40
        assert listing.latest.refs == "HEAD -> main"
        assert listing.all[1].body == "Longer\ndescription"
        assert listing.all[1].author_email == "ada@example.com"

    def test_empty_output(self) -> None:
        listing = parse_log("")

        assert listing.all == []
        assert listing.total == 0
        assert listing.latest is None


class TestParseBranches:
    def test_local_and_remote_branches(self) -> None:
        sha1 = "1" * 40
        sha2 = "2" * 40
        output = "\n".join(
            [
                f"* main                  {sha1} Initial commit",
                f"  feature               {sha2} [ahead 1] Work in progress",
                "  remotes/origin/HEAD   -> origin/main",
                f"  remotes/origin/main   {sha1} Initial commit",
            ]
        )
        listing = parse_branches(output)

        assert listing.current == "main"
        assert listing.all == ["main", "feature", "remotes/origin/main"]
        assert listing.branches["main"].current is True
        assert listing.branches["feature"].commit == sha2
        assert listing.branches["feature"].label == "[ahead 1] Work in progress"
        assert listing.detached is False

    def test_detached_head(self) -> None:
        sha = "abcdef0" + "0" * 33
        listing = parse_branches(f"* (HEAD detached at abcdef0) {sha} Some commit\n")

        assert listing.detached is True
        assert listing.current == sha


class TestParseRemotes:
    def test_groups_fetch_and_push(self) -> None:
        output = "\n".join(
            [
                "origin\tgit@github.com:alice/proj.git (fetch)",
                "origin\tgit@github.com:alice/proj.git (push)",
                "upstream\thttps://github.com/bob/proj.git (fetch)",
                "upstream\tno_push (push)",
            ]
        )
        remotes = parse_remotes(output)

        assert [r.name for r in remotes] == ["origin", "upstream"]
        assert remotes[0].refs.fetch == "git@github.com:alice/proj.git"
        assert remotes[0].refs.push == "git@github.com:alice/proj.git"
        assert remotes[1].refs.push == "no_push"

    def test_no_remotes(self) -> None:
        assert parse_remotes("") == []


def test_split_lines_drops_blanks() -> None:
    assert split_lines("v1.0\n\n  v1.1  \n") == ["v1.0", "v1.1"]
