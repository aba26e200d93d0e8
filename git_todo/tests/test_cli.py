import pytest

from git_todo import cli
from git_todo.errors import BranchResolutionError
from git_todo.providers import git_provider


def _out(capsys):
    return capsys.readouterr().out.splitlines()


def test_add_list_done_flow(on_branch, capsys):
    on_branch("main")
    assert cli.main(["fix", "the", "bug"]) == 0
    assert cli.main(["write", "docs"]) == 0
    assert _out(capsys) == ["Added it!", "Added it!"]

    cli.main([])
    assert _out(capsys) == ["1  fix the bug", "2  write docs"]

    cli.main(["done", "1"])
    assert _out(capsys) == ["DONE! Good Job!"]
    cli.main([])
    assert _out(capsys) == ["1  write docs"]


def test_dash_is_done_alias(on_branch, capsys):
    on_branch("main")
    cli.main(["only"])
    cli.main(["-", "1"])
    assert _out(capsys) == ["Added it!", "DONE! Good Job!"]


def test_list_all(on_branch, capsys):
    on_branch("b")
    cli.main(["on", "b"])
    on_branch("a")
    cli.main(["on", "a"])
    capsys.readouterr()
    cli.main(["--all"])
    assert _out(capsys) == ["*a", "\t1  on a", " b", "\t1  on b"]


def test_done_other_branch(on_branch, capsys):
    on_branch("feature")
    cli.main(["feature", "work"])
    on_branch("main")
    cli.main(["done", "feature:1"])
    assert _out(capsys)[-1] == "DONE! Good Job!"
    cli.main(["-a"])
    assert _out(capsys) == []


def test_stale_ordinal_is_neutral(on_branch, capsys):
    on_branch("main")
    cli.main(["done", "3"])
    assert _out(capsys) == ["Nothing is DONE!"]


def test_help_skips_git(monkeypatch, capsys):
    def no_git():
        raise AssertionError("git must not be called for help")
    monkeypatch.setattr(git_provider, "get_current_branch", no_git)
    assert cli.main(["--help"]) == 0
    assert _out(capsys)[0].startswith("usage: git todo")


def test_validation_error_exits_non_zero(on_branch):
    on_branch("main")
    with pytest.raises(SystemExit) as exc:
        cli.main(["done", "abc"])
    assert "invalid done index" in str(exc.value.code)


def test_missing_done_index(on_branch):
    on_branch("main")
    with pytest.raises(SystemExit) as exc:
        cli.main(["done"])
    assert exc.value.code == "missing done index"


def test_branch_failure_exits_non_zero(monkeypatch):
    def detached():
        raise BranchResolutionError("failed to get current branch: detached HEAD")
    monkeypatch.setattr(git_provider, "get_current_branch", detached)
    with pytest.raises(SystemExit) as exc:
        cli.main([])
    assert str(exc.value.code).startswith("failed to get current branch")


def test_storage_error_exits_non_zero(on_branch, tmp_path):
    on_branch("main")
    broken = tmp_path / "broken.sqlite"
    broken.write_bytes(b"this is not a sqlite database" * 100)
    with pytest.raises(SystemExit) as exc:
        cli.main(["--db-path", str(broken), "hello"])
    assert exc.value.code


def test_db_path_option(on_branch, tmp_path, capsys):
    on_branch("main")
    target = tmp_path / "sub" / "todo.sqlite"
    cli.main(["--db-path", str(target), "stored", "elsewhere"])
    assert target.exists()
    cli.main([])
    assert _out(capsys) == ["Added it!"]


def test_options_inside_content_are_kept(on_branch, capsys):
    on_branch("main")
    cli.main(["remember", "--verbose", "-a"])
    cli.main([])
    assert _out(capsys) == ["Added it!", "1  remember --verbose -a"]


def test_unknown_leading_flag_is_content(on_branch, capsys):
    on_branch("main")
    cli.main(["-x", "marks", "the", "spot"])
    cli.main([])
    assert _out(capsys)[-1] == "1  -x marks the spot"


def test_db_path_under_regular_file_exits_non_zero(on_branch, tmp_path):
    on_branch("main")
    blocker = tmp_path / "file"
    blocker.write_text("not a directory", encoding="utf-8")
    with pytest.raises(SystemExit) as exc:
        cli.main(["--db-path", str(blocker / "sub" / "todo.sqlite"), "hello"])
    assert "cannot create database directory" in str(exc.value.code)


def test_default_config_log_level_applies(on_branch):
    import logging
    git_dir = on_branch("main")
    (git_dir / "info").mkdir()
    (git_dir / "info" / "todo.yaml").write_text("log_level: DEBUG\n", encoding="utf-8")
    cli.main([])
    assert logging.getLogger("git_todo").level == logging.DEBUG
    cli.main(["--help"])
    assert logging.getLogger("git_todo").level == logging.WARNING


def test_done_branch_override_is_trimmed(on_branch, capsys):
    on_branch("feat")
    cli.main(["work"])
    on_branch("main")
    cli.main(["done", "  feat :1"])
    assert _out(capsys) == ["Added it!", "DONE! Good Job!"]
