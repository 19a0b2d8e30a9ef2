import io

import pytest

from qrprint import cli


class BrokenStream(io.RawIOBase):
    """Input stream whose reads fail."""

    def readable(self):
        return True

    def readinto(self, b):
        raise OSError("Input/output error")


class ClosedStdout(io.StringIO):
    def write(self, s):
        raise BrokenPipeError("Broken pipe")


def test_no_arguments_prints_usage(capsys):
    with pytest.raises(SystemExit) as excinfo:
        cli.main([])
    assert excinfo.value.code != 0
    assert "usage" in capsys.readouterr().err


def test_too_many_arguments(capsys):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["a", "b"])
    assert excinfo.value.code != 0


def test_missing_file_returns_one(tmp_path, caplog):
    assert cli.main([str(tmp_path / "nope.bin")]) == 1
    assert "Error! opening file" in caplog.text


def test_read_failure_returns_one(tmp_path, monkeypatch, caplog):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(cli, "open", lambda path, mode: BrokenStream(), raising=False)

    assert cli.main(["input.bin"]) == 1
    assert "reading input.bin failed" in caplog.text
    assert list(tmp_path.glob("*.bmp")) == []


def test_closed_stdout_is_not_reported_as_read_failure(tmp_path, monkeypatch, caplog):
    src = tmp_path / "hello.txt"
    src.write_bytes(b"HELLO WRLD")
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("sys.stdout", ClosedStdout())

    assert cli.main([str(src)]) == 1
    assert "writing symbol to console failed" in caplog.text
    assert "reading" not in caplog.text


def test_encodes_file_into_working_directory(tmp_path, monkeypatch, capsys):
    src = tmp_path / "hello.txt"
    src.write_bytes(b"HELLO WRLD")
    monkeypatch.chdir(tmp_path)

    assert cli.main([str(src)]) == 0
    assert (tmp_path / "SEG0-10.bmp").is_file()
    assert "##" in capsys.readouterr().out


def test_zero_filled_file_is_encoded(tmp_path, monkeypatch, capsys):
    src = tmp_path / "zeros.bin"
    src.write_bytes(bytes(2300))
    monkeypatch.chdir(tmp_path)

    assert cli.main([str(src)]) == 0
    assert (tmp_path / "SEG0-2300.bmp").is_file()


def test_empty_file_exits_zero(tmp_path, monkeypatch):
    src = tmp_path / "empty.bin"
    src.write_bytes(b"")
    monkeypatch.chdir(tmp_path)

    assert cli.main([str(src)]) == 0
    assert list(tmp_path.glob("*.bmp")) == []
