from pathlib import Path

from structgraph.cli import main


def _run_cli(args):
    """Helper to normalize return code vs SystemExit."""
    try:
        return main(args)
    except SystemExit as exc:  # argparse error path
        return exc.code


def test_cli_without_sources_is_usage_error(capsys) -> None:
    code = _run_cli([])
    captured = capsys.readouterr()
    assert code == 1
    assert captured.out == ""
    assert "Need at least one file name" in captured.err
    assert "usage:" in captured.err


def test_cli_malformed_file_aborts_without_output(tmp_path: Path, capsys) -> None:
    good = tmp_path / "good.go"
    good.write_text("package p\n\ntype A struct{ b B }\n", encoding="utf-8")
    bad = tmp_path / "bad.go"
    bad.write_text("package p\n\ntype struct {{{\n", encoding="utf-8")

    code = _run_cli([str(good), str(bad)])
    captured = capsys.readouterr()

    assert code == 1
    assert captured.out == ""
    assert "bad.go" in captured.err


def test_cli_missing_file(tmp_path: Path, capsys) -> None:
    code = _run_cli([str(tmp_path / "nope.go")])
    captured = capsys.readouterr()
    assert code == 1
    assert captured.out == ""
    assert "nope.go" in captured.err


def test_cli_invalid_format_option(tmp_path: Path, capsys) -> None:
    src = tmp_path / "a.go"
    src.write_text("package p\n", encoding="utf-8")
    code = _run_cli([str(src), "--format", "pdf"])
    captured = capsys.readouterr()
    assert code != 0
    assert "invalid choice" in captured.err.lower()
