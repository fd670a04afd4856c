from __future__ import annotations

"""
Unit tests for the CLI application controller.

Runs `main()` in-process with the logging bootstrap disabled and checks
exit codes, stdout/stderr rendering and configuration precedence.
"""

import json
from unittest.mock import patch

import pytest

from codexreport.core.processing.tokenizer import TokenEstimate
from codexreport.interface.cli import app


@pytest.fixture(autouse=True)
def isolated_cli(monkeypatch, tmp_path):
    """Keep persisted config and logging handlers out of the tests."""
    monkeypatch.setattr(app, "configure_logging", lambda cfg: None)
    monkeypatch.setattr(app, "load_config", lambda: app.get_default_config())


def test_cli_writes_document_and_warnings(make_tree, write_list, in_tmp, capsys):
    make_tree({"a/b.txt": "B\n"})
    list_file = write_list(["a/b.txt", "ghost.txt"])

    code = app.main([str(list_file)])

    captured = capsys.readouterr()
    assert code == 0
    assert captured.out.startswith("<codex>\n<file_map>\n└── a\n    └── b.txt\n</file_map>\n")
    assert captured.err == "Warning: Path does not exist and will be skipped: ghost.txt\n"


def test_cli_unopenable_list_exit_code(in_tmp, capsys):
    code = app.main(["nowhere.txt"])

    assert code == 1
    assert "Error: Could not open file: nowhere.txt" in capsys.readouterr().err


def test_cli_dump_config(in_tmp, capsys):
    code = app.main(["whatever.txt", "--dump-config", "--expand-dirs"])

    dumped = json.loads(capsys.readouterr().out)
    assert code == 0
    assert dumped["expand_dirs"] is True
    assert dumped["respect_repoignore"] is True


def test_cli_tokens_are_reported(make_tree, write_list, in_tmp, capsys):
    make_tree({"f.txt": "hello\n"})
    list_file = write_list(["f.txt"])

    with patch(
        "codexreport.core.pipeline.engine.estimate_tokens",
        return_value=TokenEstimate(1234, "tiktoken"),
    ):
        code = app.main([str(list_file), "--tokens"])

    captured = capsys.readouterr()
    assert code == 0
    assert "<file path=\"f.txt\">" in captured.out
    assert "Estimated tokens: 1,234 (tiktoken)" in captured.err


def test_cli_unexpected_failure_exit_code(write_list, in_tmp, capsys):
    list_file = write_list(["x"])

    with patch.object(app, "generate_report", side_effect=RuntimeError("boom")):
        code = app.main([str(list_file)])

    assert code == 1
    assert "ERROR: boom" in capsys.readouterr().err


def test_cli_overrides_beat_persisted_config(write_list, in_tmp, monkeypatch, capsys):
    persisted = dict(app.get_default_config(), expand_dirs=True, target_model="gpt-4")
    monkeypatch.setattr(app, "load_config", lambda: persisted)

    code = app.main(["l.txt", "--dump-config", "--model", "gpt-4o-mini"])

    dumped = json.loads(capsys.readouterr().out)
    assert code == 0
    assert dumped["expand_dirs"] is True
    assert dumped["target_model"] == "gpt-4o-mini"


def test_cli_output_failure_still_reports_missing_paths(make_tree, write_list, in_tmp, capsys):
    make_tree({"a.txt": "a\n", "blocker": "file"})
    list_file = write_list(["ghost.txt", "a.txt"])

    code = app.main([str(list_file), "-o", "blocker/out.xml"])

    err = capsys.readouterr().err
    assert code == 1
    assert "Warning: Path does not exist and will be skipped: ghost.txt\n" in err
    assert "Could not create output directory for blocker/out.xml" in err
