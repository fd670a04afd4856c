from __future__ import annotations

"""
Integration tests for the report engine.

Runs generate_report against real temporary files and checks the whole
document, the missing-path bookkeeping and the output destinations.
"""

import io
from unittest.mock import patch

from codexreport.core.pipeline import engine
from codexreport.core.pipeline.engine import generate_report
from codexreport.core.processing.tokenizer import TokenEstimate


def test_reference_document(make_tree, write_list, in_tmp):
    make_tree({"a/b.txt": "B\n", "a/c/d.txt": "D\n"})
    list_file = write_list(["a/b.txt", "a/c/d.txt"])

    result = generate_report(str(list_file))

    assert result.ok
    assert result.document == (
        "<codex>\n"
        "<file_map>\n"
        "└── a\n"
        "    ├── b.txt\n"
        "    └── c\n"
        "        └── d.txt\n"
        "</file_map>\n"
        "<file_contents>\n"
        '<file path="a/b.txt">\n'
        "```txt\n"
        "B\n"
        "```\n"
        "</file>\n"
        '<file path="a/c/d.txt">\n'
        "```txt\n"
        "D\n"
        "```\n"
        "</file>\n"
        "</file_contents>\n"
        "</codex>\n"
    )


def test_blank_list_produces_empty_sections(tmp_path):
    list_file = tmp_path / "blank.txt"
    list_file.write_text("\n\n\n", encoding="utf-8")

    result = generate_report(str(list_file))

    assert result.ok
    assert result.document == (
        "<codex>\n<file_map>\n</file_map>\n<file_contents>\n</file_contents>\n</codex>\n"
    )


def test_missing_path_is_reported_and_omitted(make_tree, write_list, in_tmp):
    make_tree({"a/b.txt": "B\n"})
    list_file = write_list(["x/y.txt", "a/b.txt"])

    result = generate_report(str(list_file))

    assert result.missing_paths == ["x/y.txt"]
    assert "x" not in result.tree_lines[0]
    assert "y.txt" not in result.document
    assert result.summary["missing"] == 1
    assert result.summary["emitted"] == 1


def test_directory_entries_appear_in_tree_only(make_tree, write_list, in_tmp):
    make_tree({"pkg/mod.py": "pass\n"})
    list_file = write_list(["pkg", "pkg/mod.py"])

    result = generate_report(str(list_file))

    assert result.tree_lines == ["└── pkg", "    └── mod.py"]
    assert result.document.count("<file path=") == 1
    assert result.summary["skipped"] == 1


def test_content_order_follows_list(make_tree, write_list, in_tmp):
    make_tree({"z.txt": "z\n", "a.txt": "a\n"})
    list_file = write_list(["z.txt", "a.txt"])

    result = generate_report(str(list_file))

    assert result.tree_lines == ["├── a.txt", "└── z.txt"]
    assert result.document.index('path="z.txt"') < result.document.index('path="a.txt"')


def test_crlf_list_file(make_tree, in_tmp):
    make_tree({"a.txt": "a\n"})
    list_file = in_tmp / "crlf.txt"
    list_file.write_bytes(b"a.txt\r\n\r\n")

    result = generate_report(str(list_file))

    assert result.missing_paths == []
    assert '<file path="a.txt">' in result.document


def test_unopenable_list_file_is_fatal(tmp_path):
    missing = tmp_path / "nope.txt"

    result = generate_report(str(missing))

    assert not result.ok
    assert result.error == f"Error: Could not open file: {missing}"


def test_stream_destination(make_tree, write_list, in_tmp):
    make_tree({"f.py": "x = 1\n"})
    list_file = write_list(["f.py"])
    out = io.StringIO()

    result = generate_report(str(list_file), out=out)

    assert result.document == ""
    assert out.getvalue().startswith("<codex>\n<file_map>\n└── f.py\n")


def test_output_file_destination(make_tree, write_list, in_tmp):
    make_tree({"f.py": "x = 1\n"})
    list_file = write_list(["f.py"])
    target = in_tmp / "out" / "nested" / "report.xml"

    result = generate_report(str(list_file), config={"output_path": str(target)})

    assert result.ok
    assert result.output_path == str(target)
    text = target.read_text(encoding="utf-8")
    assert text.endswith("</file_contents>\n</codex>\n")
    assert "x = 1\n" in text


def test_expand_dirs_adds_contents(make_tree, write_list, in_tmp, monkeypatch):
    make_tree({"proj/.repoignore": "*.log\n", "proj/a.py": "A\n", "proj/run.log": "L\n"})
    list_file = write_list(["proj"])
    monkeypatch.setattr(
        "codexreport.core.pipeline.components.filters.get_user_data_dir",
        lambda: str(in_tmp / "no-home"),
    )

    result = generate_report(str(list_file), config={"expand_dirs": True})

    assert result.tree_lines == ["└── proj", "    ├── .repoignore", "    └── a.py"]
    assert '<file path="proj/a.py">' in result.document
    assert "run.log" not in result.document
    assert result.summary["expanded"] == 2


def test_token_count_summary(make_tree, write_list, in_tmp):
    make_tree({"f.txt": "hello\n"})
    list_file = write_list(["f.txt"])
    out = io.StringIO()

    with patch.object(engine, "estimate_tokens", return_value=TokenEstimate(7, "heuristic")) as est:
        result = generate_report(str(list_file), out=out, config={"count_tokens": True})

    assert result.summary["tokens"] == 7
    assert result.summary["token_method"] == "heuristic"
    assert est.call_args[0][0] == out.getvalue()


def test_output_file_keeps_non_utf8_bytes(make_tree, write_list, in_tmp):
    make_tree({"legacy.txt": b"caf\xe9\r\n"})
    list_file = write_list(["legacy.txt"])
    target = in_tmp / "report.xml"

    result = generate_report(str(list_file), config={"output_path": str(target)})

    assert result.ok
    assert b"```txt\ncaf\xe9\r\n```\n" in target.read_bytes()


def test_output_failure_keeps_missing_paths(make_tree, write_list, in_tmp):
    make_tree({"a.txt": "a\n", "blocker": "not a directory"})
    list_file = write_list(["ghost.txt", "a.txt"])

    result = generate_report(str(list_file), config={"output_path": "blocker/report.xml"})

    assert not result.ok
    assert "blocker/report.xml" in result.error
    assert result.missing_paths == ["ghost.txt"]
