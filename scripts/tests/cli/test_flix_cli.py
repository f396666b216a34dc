"""End-to-end tests for the flixrec command line."""

import json

import pytest

import flix
from flix_utils import conf
from record_store import RecordList, U32_MAX


@pytest.fixture
def records_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(conf, "CONFIG_PATH", tmp_path / "config.json")
    return tmp_path / "records"


@pytest.fixture
def run(records_dir):
    def _run(*argv):
        return flix.main(["--records-path", str(records_dir), *argv])
    return _run


@pytest.fixture
def answers(monkeypatch):
    """Script the operator's replies to confirmation prompts."""
    def _answers(*replies):
        it = iter(replies)
        monkeypatch.setattr("builtins.input", lambda *args: next(it))
    return _answers


def _rows(records_dir, kind):
    path = records_dir / f"{kind}.jsonl"
    return [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]


# ---------------------------------------------------------------------------
# user
# ---------------------------------------------------------------------------

class TestUserCommands:
    def test_create(self, run, records_dir, capsys):
        assert run("user", "create", "ada", "ada@example.com") == flix.EXIT_OK
        row = _rows(records_dir, "user")[0]
        out = capsys.readouterr().out
        assert "User created successfully" in out
        assert f"ID: {row['id']}" in out
        assert row["name"] == "ada"

    def test_create_duplicate_email(self, run, records_dir, capsys):
        run("user", "create", "a", "x")
        before = (records_dir / "user.jsonl").read_bytes()
        assert run("user", "create", "b", "x") == flix.EXIT_FAILED
        assert "User not generated. Given email already exists" in capsys.readouterr().err
        assert (records_dir / "user.jsonl").read_bytes() == before

    def test_update_by_id(self, run, records_dir, capsys):
        run("user", "create", "a", "x")
        uid = _rows(records_dir, "user")[0]["id"]
        capsys.readouterr()

        assert run("user", "update", "--query-id", str(uid), "--new-name", "b") == flix.EXIT_OK
        out = capsys.readouterr().out
        assert "User updated successfully." in out
        assert "Name changed from a to b" in out
        assert "Email" not in out
        assert _rows(records_dir, "user") == [{"id": uid, "name": "b", "email": "x"}]

    def test_update_ambiguous(self, run, records_dir, capsys):
        run("user", "create", "a", "x")
        run("user", "create", "a", "y")
        before = (records_dir / "user.jsonl").read_bytes()

        assert run("user", "update", "--query-name", "a", "--new-name", "b") == flix.EXIT_FAILED
        err = capsys.readouterr().err
        assert "Update failed. Multiple users found from given query." in err
        assert "Name matches: 2" in err
        assert (records_dir / "user.jsonl").read_bytes() == before

    def test_update_email_to_taken_value(self, run, records_dir, capsys):
        run("user", "create", "a", "x")
        run("user", "create", "b", "y")
        assert run("user", "update", "--query-email", "y", "--new-email", "x") == flix.EXIT_FAILED
        assert "Update failed. Given email already exists" in capsys.readouterr().err

    def test_update_without_query(self, run, capsys):
        assert run("user", "update", "--new-name", "b") == flix.EXIT_FAILED
        assert "No query given. Please provide an ID, name, or email" in capsys.readouterr().err

    def test_delete_declined(self, run, records_dir, answers, capsys):
        run("user", "create", "a", "x")
        before = (records_dir / "user.jsonl").read_bytes()
        answers("n")

        assert run("user", "delete", "--email", "x") == flix.EXIT_OK
        out = capsys.readouterr().out
        assert "Are you sure you want to delete this user? [Y]es/[n]o" in out
        assert "User { id: " in out
        assert "User deletion cancelled." in out
        assert (records_dir / "user.jsonl").read_bytes() == before

    def test_delete_default_answer(self, run, records_dir, answers, capsys):
        run("user", "create", "a", "x")
        answers("")
        assert run("user", "delete", "--name", "a") == flix.EXIT_OK
        assert "User deleted successfully." in capsys.readouterr().out
        assert _rows(records_dir, "user") == []

    def test_delete_reprompts_on_invalid_answer(self, run, records_dir, answers, capsys):
        run("user", "create", "a", "x")
        answers("perhaps", "YES")
        assert run("user", "delete", "--name", "a") == flix.EXIT_OK
        captured = capsys.readouterr()
        assert "Invalid input" in captured.err
        assert "User deleted successfully." in captured.out

    def test_delete_with_yes_flag(self, run, records_dir, capsys):
        run("user", "create", "a", "x")
        assert run("--yes", "user", "delete", "--name", "a") == flix.EXIT_OK
        assert _rows(records_dir, "user") == []

    def test_delete_not_found(self, run, capsys):
        assert run("user", "delete", "--id", "7") == flix.EXIT_FAILED
        assert "Delete failed. No user found from given query." in capsys.readouterr().err

    def test_list_all(self, run, capsys):
        run("user", "create", "a", "x")
        run("user", "create", "b", "y")
        capsys.readouterr()
        assert run("user", "list", "--all") == flix.EXIT_OK
        lines = capsys.readouterr().out.splitlines()
        assert len(lines) == 2
        assert lines[0].startswith("User { id: ") and lines[0].endswith("name: 'a', email: 'x' }")

    def test_list_by_name_shows_every_match(self, run, capsys):
        run("user", "create", "a", "x")
        run("user", "create", "a", "y")
        run("user", "create", "b", "z")
        capsys.readouterr()
        assert run("user", "list", "--name", "a") == flix.EXIT_OK
        assert len(capsys.readouterr().out.splitlines()) == 2

    def test_list_no_match(self, run, capsys):
        run("user", "create", "a", "x")
        assert run("user", "list", "--name", "zzz") == flix.EXIT_FAILED
        assert "No user found from given query." in capsys.readouterr().err

    def test_list_all_rejects_query(self, run):
        with pytest.raises(SystemExit) as excinfo:
            run("user", "list", "--all", "--name", "a")
        assert excinfo.value.code == 2


# ---------------------------------------------------------------------------
# video / view
# ---------------------------------------------------------------------------

class TestVideoCommands:
    def test_create_starts_with_zero_views(self, run, records_dir):
        assert run("video", "create", "intro") == flix.EXIT_OK
        assert _rows(records_dir, "video")[0]["views"] == 0

    def test_add_and_show_views(self, run, capsys):
        run("video", "create", "intro")
        assert run("view", "add", "--name", "intro", "5") == flix.EXIT_OK
        assert run("view", "add", "--name", "intro") == flix.EXIT_OK
        assert run("view", "show", "--name", "intro") == flix.EXIT_OK
        out = capsys.readouterr().out
        assert "Successfully added 5 views to intro" in out
        assert "Successfully added 1 views to intro" in out
        assert "intro has 6 views" in out

    def test_add_views_does_not_prompt(self, run, records_dir, monkeypatch):
        def no_input(*args):
            raise AssertionError("unexpected prompt")

        monkeypatch.setattr("builtins.input", no_input)
        run("video", "create", "intro")
        assert run("view", "add", "--name", "intro", "3") == flix.EXIT_OK
        assert _rows(records_dir, "video")[0]["views"] == 3

    def test_add_views_overflow(self, run, records_dir, capsys):
        run("video", "create", "intro")
        run("--yes", "video", "update", "--query-name", "intro", "--new-views", str(U32_MAX))
        assert run("view", "add", "--name", "intro") == flix.EXIT_FAILED
        assert "Invalid value for views" in capsys.readouterr().err
        assert _rows(records_dir, "video")[0]["views"] == U32_MAX

    def test_views_argument_must_be_u32(self, run):
        with pytest.raises(SystemExit):
            run("view", "add", "--name", "intro", str(U32_MAX + 1))

    def test_show_ambiguous(self, run, capsys):
        run("video", "create", "intro")
        run("video", "create", "intro")
        assert run("view", "show", "--name", "intro") == flix.EXIT_FAILED
        err = capsys.readouterr().err
        assert "Multiple videos found from given query." in err
        assert "Name matches: 2" in err

    def test_set_views_confirmed(self, run, records_dir, answers, capsys):
        run("video", "create", "intro")
        answers("y")
        assert run("video", "update", "--query-name", "intro", "--new-views", "7") == flix.EXIT_OK
        out = capsys.readouterr().out
        assert "Are you sure you want to set the views of intro to 7? [Y]es/[n]o" in out
        assert "Views changed from 0 to 7" in out
        assert _rows(records_dir, "video")[0]["views"] == 7

    def test_set_views_declined(self, run, records_dir, answers, capsys):
        run("video", "create", "intro")
        answers("no")
        assert run("video", "update", "--query-name", "intro", "--new-name", "outro", "--new-views", "7") == flix.EXIT_OK
        assert "Video update aborted." in capsys.readouterr().out
        row = _rows(records_dir, "video")[0]
        assert (row["name"], row["views"]) == ("intro", 0)

    def test_rename_does_not_prompt(self, run, records_dir, monkeypatch):
        run("video", "create", "intro")

        def no_input(*args):
            raise AssertionError("unexpected prompt")

        monkeypatch.setattr("builtins.input", no_input)
        assert run("video", "update", "--query-name", "intro", "--new-name", "outro") == flix.EXIT_OK
        assert _rows(records_dir, "video")[0]["name"] == "outro"


# ---------------------------------------------------------------------------
# Configuration, corruption and internal errors
# ---------------------------------------------------------------------------

class TestEnvironment:
    def test_corrupt_collection(self, run, records_dir, capsys):
        records_dir.mkdir(parents=True)
        (records_dir / "user.jsonl").write_text("garbage\n", encoding="utf-8")
        assert run("user", "list", "--all") == flix.EXIT_CORRUPT
        assert "is corrupt" in capsys.readouterr().err
        assert (records_dir / "user.jsonl").read_text(encoding="utf-8") == "garbage\n"

    def test_corrupt_config(self, run, tmp_path, capsys):
        (tmp_path / "config.json").write_text("[1]", encoding="utf-8")
        assert run("user", "list", "--all") == flix.EXIT_CORRUPT
        assert "is corrupt" in capsys.readouterr().err

    @pytest.mark.parametrize(
        "content",
        [b'{"records_path": 5}', b'{"log_enabled": "maybe"}', b'{"records_path": "\xff"}'],
    )
    def test_invalid_config_values(self, run, tmp_path, capsys, content):
        (tmp_path / "config.json").write_bytes(content)
        assert run("user", "list", "--all") == flix.EXIT_CORRUPT
        assert "is corrupt" in capsys.readouterr().err

    def test_records_path_from_config(self, tmp_path, monkeypatch):
        monkeypatch.setattr(conf, "CONFIG_PATH", tmp_path / "config.json")
        (tmp_path / "config.json").write_text(
            json.dumps({"records_path": str(tmp_path / "from-config")}), encoding="utf-8"
        )
        assert flix.main(["video", "create", "intro"]) == flix.EXIT_OK
        assert (tmp_path / "from-config" / "video.jsonl").exists()

    def test_internal_index_error(self, run, records_dir, monkeypatch, capsys):
        run("user", "create", "a", "x")
        before = (records_dir / "user.jsonl").read_bytes()
        monkeypatch.setattr(RecordList, "index_of", lambda self, record: None)

        assert run("--yes", "user", "delete", "--name", "a") == flix.EXIT_INTERNAL
        err = capsys.readouterr().err
        assert err.startswith("Internal error: ")
        assert "This should never happen" in err
        assert (records_dir / "user.jsonl").read_bytes() == before

    def test_verbose_mirrors_log_to_stderr(self, run, capsys):
        assert run("-v", "user", "list", "--all") == flix.EXIT_OK
        assert "Command: user list" in capsys.readouterr().err

    def test_commands_are_logged(self, run, isolated_log):
        run("video", "create", "intro")
        text = isolated_log.read_text(encoding="utf-8")
        assert "--- New flixrec Session ---" in text
        assert "Created video" in text

    def test_logging_disabled_by_config(self, run, tmp_path, isolated_log):
        (tmp_path / "config.json").write_text(json.dumps({"log_enabled": False}), encoding="utf-8")
        assert run("video", "create", "intro") == flix.EXIT_OK
        assert not isolated_log.exists()

    def test_logging_disabled_by_string_flag(self, run, tmp_path, isolated_log):
        (tmp_path / "config.json").write_text(json.dumps({"log_enabled": "false"}), encoding="utf-8")
        assert run("video", "create", "intro") == flix.EXIT_OK
        assert not isolated_log.exists()
