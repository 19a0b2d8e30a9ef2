import io

import pytest

from qrprint.console import ConsoleWriteError, print_symbol, render_text
from qrprint.symbol import Symbol


def test_render_text_small_border(checker_symbol):
    text = render_text(checker_symbol, border=1)
    assert text == (
        "          \n"
        "  ##  ##  \n"
        "    ##    \n"
        "  ##  ##  \n"
        "          \n"
        "\n"
    )


def test_default_border_dimensions(checker_symbol):
    lines = render_text(checker_symbol).split("\n")

    # 11 rows, the blank trailing line, and the empty string after it
    assert len(lines) == 3 + 8 + 2
    assert lines[-2:] == ["", ""]
    assert all(len(line) == (3 + 8) * 2 for line in lines[:-2])
    assert lines[4] == " " * 8 + "##  ##" + " " * 8


def test_print_symbol_writes_to_stream():
    stream = io.StringIO()
    print_symbol(Symbol([[True]]), stream=stream, border=0)
    assert stream.getvalue() == "##\n\n"


def test_print_symbol_defaults_to_stdout(capsys):
    print_symbol(Symbol([[False]]), border=0)
    assert capsys.readouterr().out == "  \n\n"


def test_rows_written_one_at_a_time(checker_symbol):
    class Recorder(io.StringIO):
        def __init__(self):
            super().__init__()
            self.writes = []

        def write(self, s):
            self.writes.append(s)
            return super().write(s)

    stream = Recorder()
    print_symbol(checker_symbol, stream=stream, border=1)

    assert len(stream.writes) == 5 + 1
    assert "".join(stream.writes) == render_text(checker_symbol, border=1)


def test_write_failure_raises_console_error(checker_symbol):
    class ClosedPipe(io.StringIO):
        def write(self, s):
            raise BrokenPipeError("closed")

    with pytest.raises(ConsoleWriteError) as excinfo:
        print_symbol(checker_symbol, stream=ClosedPipe())
    assert isinstance(excinfo.value.__cause__, BrokenPipeError)
