"""Unit tests for the CLI main module."""

import errno
import json
import os
from unittest.mock import patch

import pytest

from workspace_tree.cli.main import format_counts, main


@pytest.fixture(autouse=True)
def no_signal_handlers():
    """Keep the test process's own signal handlers in place."""
    with patch("workspace_tree.cli.main.setup_signal_handling"):
        yield


@pytest.fixture
def project(tmp_path):
    root = tmp_path / "project"
    (root / "src").mkdir(parents=True)
    (root / "src" / "main.py").touch()
    (root / "server.log").touch()
    (root / "README.md").touch()
    (root / "node_modules").mkdir()
    return root


def test_format_counts():
    assert format_counts(2, 5) == "Directories: 2\nFiles: 5"


def test_text_output(project, capfd):
    main([str(project)])

    out = capfd.readouterr().out
    assert out.splitlines() == [
        "project/",
        "├── src/",
        "│   └── main.py",
        "├── README.md",
        "└── server.log",
    ]


def test_json_output(project, capfd):
    main(["-f", "json", str(project)])

    data = json.loads(capfd.readouterr().out)
    assert [entry["name"] for entry in data] == ["src", "README.md", "server.log"]
    assert data[0]["children"][0]["path"] == os.path.join(str(project), "src", "main.py")


def test_workspace_json_output(project, capfd):
    main(["-f", "json", "-w", "--indent", "2", str(project)])

    data = json.loads(capfd.readouterr().out)
    assert data["path"] == str(project)
    assert len(data["tree"]) == 3


def test_ignore_patterns(project, capfd):
    main(["-i", "*.log", "-i", "src/", str(project)])

    out = capfd.readouterr().out
    assert out.splitlines() == ["project/", "└── README.md"]


def test_exclude_file(project, tmp_path, capfd):
    rules_file = tmp_path / "extra.ignore"
    rules_file.write_text("*.md\n")

    main(["-e", str(rules_file), str(project)])

    assert "README.md" not in capfd.readouterr().out


def test_missing_exclude_file_is_usage_error(project):
    with pytest.raises(SystemExit) as exc_info:
        main(["-e", "/non/existent/rules", str(project)])

    assert exc_info.value.code == 2


def test_output_file_with_summary(project, tmp_path):
    output = tmp_path / "tree.txt"

    main(["-o", str(output), "-s", "file", str(project)])

    content = output.read_text(encoding="utf-8")
    assert content.startswith("project/\n")
    assert content.endswith("\nDirectories: 1\nFiles: 3\n")


def test_summary_to_stderr(project, capfd):
    main(["-s", "stderr", str(project)])

    captured = capfd.readouterr()
    assert "Directories: 1\nFiles: 3" in captured.err
    assert "Directories" not in captured.out


def test_missing_directory_exits_1(tmp_path, capfd):
    missing = tmp_path / "missing"

    with pytest.raises(SystemExit) as exc_info:
        main([str(missing)])

    assert exc_info.value.code == 1
    err = capfd.readouterr().err
    assert f"Error: Failed to read directory '{missing}'" in err


def test_permission_denied_exits_126(project, capfd):
    def denied(path):
        raise PermissionError(errno.EACCES, "Permission denied", path)

    with patch("os.scandir", side_effect=denied):
        with pytest.raises(SystemExit) as exc_info:
            main([str(project)])

    assert exc_info.value.code == 126
    assert "Permission denied" in capfd.readouterr().err


def test_invalid_option_combination(project, capfd):
    with pytest.raises(SystemExit) as exc_info:
        main(["-w", str(project)])

    assert exc_info.value.code == 1
    assert "Error: -w/--workspace requires --format json" in capfd.readouterr().err


def test_summary_file_requires_output(project, capfd):
    with pytest.raises(SystemExit) as exc_info:
        main(["-s", "file", str(project)])

    assert exc_info.value.code == 1
    assert "--summary=file requires -o/--output" in capfd.readouterr().err


def test_exit_code_after_sigpipe(project):
    with patch("workspace_tree.cli.main.signal_handler") as mock_handler, patch(
        "workspace_tree.cli.main.SafeWriter"
    ):
        mock_handler.exit_code.return_value = 141
        with pytest.raises(SystemExit) as exc_info:
            main([str(project)])

    assert exc_info.value.code == 141


@pytest.fixture
def undecodable_project(tmp_path):
    if os.name == "nt":
        pytest.skip("file names are not raw bytes on Windows")
    (tmp_path / "ok").mkdir()
    try:
        (tmp_path / os.fsdecode(b"bad\xff.txt")).touch()
    except (OSError, UnicodeEncodeError):
        pytest.skip("filesystem rejects names that are not valid UTF-8")
    return tmp_path


def test_text_output_with_undecodable_name(undecodable_project, capfd):
    main([str(undecodable_project)])

    captured = capfd.readouterr()
    assert captured.out.splitlines() == [
        f"{undecodable_project.name}/",
        "├── ok/",
        "└── bad\ufffd.txt",
    ]
    assert captured.err == ""


def test_json_output_with_undecodable_name(undecodable_project, capfd):
    main(["-f", "json", str(undecodable_project)])

    data = json.loads(capfd.readouterr().out)
    assert [entry["name"] for entry in data] == ["ok", "bad\ufffd.txt"]
    assert data[1]["path"] == os.path.join(str(undecodable_project), "bad\ufffd.txt")


def test_output_is_written_once(project):
    with patch("workspace_tree.cli.main.SafeWriter") as mock_writer:
        main(["-f", "json", str(project)])

    writer = mock_writer.return_value.__enter__.return_value
    mock_writer.assert_called_once_with(None)
    writer.write_lines.assert_called_once()
    writer.write.assert_not_called()
