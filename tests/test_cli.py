import json

from git_user_bend import cli


STORAGE_CONTENT = [
    {"alias": "jd", "name": "John Doe", "email": "john.doe@example.org", "usage_frequency": 11},
    {"alias": "so", "name": "Some One", "email": "some.one@example.org", "usage_frequency": 23},
]


def _write_storage(home, records=STORAGE_CONTENT):
    (home / ".gub.personas").write_text(json.dumps(records))


def _accept_any_directory(monkeypatch):
    monkeypatch.setattr("git_user_bend.cli.ensure_git_repository", lambda directory: directory)


def test_create_conditional_config_command(tmp_path, monkeypatch, capsys):
    _accept_any_directory(monkeypatch)
    _write_storage(tmp_path)
    repo = tmp_path / "work"
    repo.mkdir()

    exit_code = cli.main(
        ["--home", str(tmp_path), "create-conditional-config", "jd", ".work", str(repo), "-c"]
    )

    assert exit_code == 0
    assert "Created conditional configuration .work for persona jd." in capsys.readouterr().out
    config_dir = tmp_path / ".config" / "git"
    assert f'gitdir:{repo}"' in (config_dir / "config").read_text()
    assert "name = John Doe" in (config_dir / ".work").read_text()

    records = json.loads((tmp_path / ".gub.personas").read_text())
    assert records[0]["usage_frequency"] == 12
    assert records[1]["usage_frequency"] == 23


def test_create_conditional_config_defaults_to_working_directory(tmp_path, monkeypatch):
    checked = []
    monkeypatch.setattr("git_user_bend.cli.ensure_git_repository", checked.append)
    monkeypatch.chdir(tmp_path)
    _write_storage(tmp_path)
    (tmp_path / ".gitconfig").write_text("")

    assert cli.main(["--home", str(tmp_path), "create-conditional-config", "so", "work"]) == 0
    assert checked == [str(tmp_path)]
    assert f'[includeIf "gitdir:{tmp_path}"]' in (tmp_path / ".gitconfig").read_text()


def test_create_conditional_config_reports_errors(tmp_path, monkeypatch, capsys):
    _accept_any_directory(monkeypatch)

    exit_code = cli.main(
        ["--home", str(tmp_path), "create-conditional-config", "jo", "some-name", str(tmp_path), "-c"]
    )
    assert exit_code == 1
    assert capsys.readouterr().err == "Error: There are no defined personas.\n"

    _write_storage(tmp_path)
    exit_code = cli.main(
        ["--home", str(tmp_path), "create-conditional-config", "jd", "23", str(tmp_path), "-c"]
    )
    assert exit_code == 1
    assert capsys.readouterr().err == "Error: The provided configuration name is a number.\n"

    exit_code = cli.main(
        ["--home", str(tmp_path), "create-conditional-config", "jd", "some-name", str(tmp_path)]
    )
    assert exit_code == 1
    assert capsys.readouterr().err == (
        f"Error: No global Git configuration present in {tmp_path}.\n"
    )


def test_persona_commands(tmp_path, capsys):
    home = ["--home", str(tmp_path)]

    assert cli.main([*home, "personas"]) == 0
    assert capsys.readouterr().out == "There are no defined personas.\n"

    assert cli.main([*home, "add", "jd", "John Doe", "john.doe@example.org"]) == 0
    assert cli.main([*home, "add", "so", "Some One", "some.one@example.org"]) == 0
    assert cli.main([*home, "add", "jd", "Jane Doe", "jane.doe@example.org"]) == 1
    capsys.readouterr()

    records = json.loads((tmp_path / ".gub.personas").read_text())
    records[1]["usage_frequency"] = 3
    (tmp_path / ".gub.personas").write_text(json.dumps(records))

    assert cli.main([*home, "personas", "--by-usage"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines == [
        "so  Some One <some.one@example.org>  (usage 3)",
        "jd  John Doe <john.doe@example.org>  (usage 0)",
    ]

    assert cli.main([*home, "remove", "so"]) == 0
    assert cli.main([*home, "remove", "so"]) == 1
    assert "No known persona for alias so." in capsys.readouterr().err


def test_create_conditional_config_help_uses_home_option(tmp_path, monkeypatch, capsys):
    monkeypatch.setenv("HOME", str(tmp_path / "elsewhere"))
    monkeypatch.setenv("COLUMNS", "500")
    (tmp_path / ".gitconfig").write_text("")

    try:
        cli.main(["--home", str(tmp_path), "create-conditional-config", "-h"])
    except SystemExit as exc:
        assert exc.code == 0
    else:
        raise AssertionError("expected SystemExit from --help")

    out = " ".join(capsys.readouterr().out.split())
    assert str(tmp_path / ".gitconfig") in out


def test_create_conditional_config_with_config_that_is_not_utf8(tmp_path, monkeypatch):
    _accept_any_directory(monkeypatch)
    _write_storage(tmp_path)
    original = b"[user]\n    name = J\xfcrgen\n"
    (tmp_path / ".gitconfig").write_bytes(original)

    exit_code = cli.main(
        ["--home", str(tmp_path), "create-conditional-config", "jd", "w", str(tmp_path)]
    )

    assert exit_code == 0
    assert (tmp_path / ".gitconfig").read_bytes().startswith(original)
