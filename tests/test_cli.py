"""Tests for the unistream command-line tool."""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path

import pytest

from unistream.cli import main


def test_cli_converts_file(tmp_path: Path, compare_text: str):
    f = tmp_path / "test.txt"
    f.write_bytes(b"\xff\xfe" + compare_text.encode("utf-16-le"))
    result = subprocess.run(
        [sys.executable, "-m", "unistream", str(f)],
        capture_output=True,
    )
    assert result.returncode == 0
    assert result.stdout == compare_text.encode()


def test_cli_stdin():
    result = subprocess.run(
        [sys.executable, "-m", "unistream"],
        input=b"\xef\xbb\xbfHello world",
        capture_output=True,
    )
    assert result.returncode == 0
    assert result.stdout == b"Hello world"


def test_cli_content_type(tmp_path: Path):
    f = tmp_path / "koi8.txt"
    f.write_bytes("Привет".encode("koi8-r"))
    result = subprocess.run(
        [
            sys.executable,
            "-m",
            "unistream",
            "--content-type",
            "text/plain; charset=koi8-r",
            str(f),
        ],
        capture_output=True,
    )
    assert result.returncode == 0
    assert result.stdout == "Привет".encode()


def test_cli_version():
    result = subprocess.run(
        [sys.executable, "-m", "unistream", "--version"],
        capture_output=True,
        text=True,
    )
    assert result.returncode == 0
    assert "1.0.0" in result.stdout


def test_cli_output_dir(tmp_path: Path):
    src = tmp_path / "latin1.txt"
    src.write_bytes("Grüße aus Köln".encode("latin-1"))
    out_dir = tmp_path / "converted"
    main(["-o", str(out_dir), str(src)])
    assert (out_dir / "latin1_UTF8.txt").read_bytes() == "Grüße aus Köln".encode()


def test_cli_detect(tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    f = tmp_path / "test.txt"
    f.write_bytes("Grüße".encode("latin-1"))
    main(["--detect", str(f)])
    captured = capsys.readouterr()
    assert captured.out.strip() == f"{f}: iso-8859-1 (guessed)"


def test_cli_detect_bom(tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    f = tmp_path / "test.txt"
    f.write_bytes(b"\xfe\xff\x00h\x00i")
    main(["--detect", str(f)])
    captured = capsys.readouterr()
    assert "utf-16be (certain)" in captured.out


def test_cli_detect_multiple_files(tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    f1 = tmp_path / "a.txt"
    f2 = tmp_path / "b.txt"
    f1.write_bytes(b"Hello")
    f2.write_bytes("Héllo".encode())
    main(["--detect", str(f1), str(f2)])
    lines = capsys.readouterr().out.strip().split("\n")
    assert len(lines) == 2
    assert lines[1].endswith("utf-8 (guessed)")


def test_cli_nonexistent_file(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit, match="1"):
        main(["--detect", "nonexistent_file_xyz.txt"])
    captured = capsys.readouterr()
    assert "nonexistent_file_xyz.txt" in captured.err


def test_cli_keeps_going_after_failure(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    good = tmp_path / "good.txt"
    good.write_bytes(b"Hello")
    with pytest.raises(SystemExit):
        main(["--detect", str(tmp_path / "missing.txt"), str(good)])
    captured = capsys.readouterr()
    assert "good.txt" in captured.out


def test_cli_unknown_error_handler(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit, match="2"):
        main(["--errors", "no-such-handler", "x.txt"])
    assert "unknown error handler" in capsys.readouterr().err
