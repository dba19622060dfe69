"""Tests for CodeWindow functionality."""

from pathlib import Path

import pytest

from error_to_communicate.core import code_window
from error_to_communicate.core.code_window import MISSING_CODE, CodeWindow
from error_to_communicate.core.theme import GREY, RESET, Theme
from error_to_communicate.models.backtrace import BacktraceLocation, ContextRange
from error_to_communicate.models.semantic import CodeWindowRequest, Emphasis
from error_to_communicate.utils.logging import LogEventNames
from error_to_communicate.utils.text import split_lines


@pytest.fixture
def window(plain_theme: Theme, tmp_path: Path) -> CodeWindow:
    """CodeWindow without colours, relative to the temporary directory."""
    return CodeWindow(theme=plain_theme, cwd=tmp_path)


def request_for(path: Path, linenum: int, begin: int, end: int, **options) -> CodeWindowRequest:
    location = BacktraceLocation(path=path, linenum=linenum, label=options.pop("label", ""))
    return CodeWindowRequest(location=location, context=ContextRange(begin, end), **options)


def code_lines(rendered: str) -> list[str]:
    """Lines of a rendered window after the path header."""
    return rendered.splitlines()[1:]


class TestRender:
    """Tests for CodeWindow.render()."""

    def test_window_around_line(self, window: CodeWindow, sample_file: Path) -> None:
        """Test the header, numbering and arrow of a plain window."""
        rendered = window.render(request_for(sample_file, 10, -2, 2))

        assert rendered == (
            "./sample.py:10\n"
            "   8:  line8\n"
            "   9:  line9\n"
            "-> 10: line10\n"
            "   11: line11\n"
            "   12: line12\n"
        )

    @pytest.mark.parametrize(
        ("linenum", "begin", "end", "expected"),
        [
            (10, -5, 5, 11),
            (10, 0, 5, 6),
            (10, 0, 0, 1),
            (10, -20, 0, 10),
            (18, 0, 5, 3),
            (1, -5, 5, 6),
        ],
    )
    def test_line_count(
        self,
        window: CodeWindow,
        sample_file: Path,
        linenum: int,
        begin: int,
        end: int,
        expected: int,
    ) -> None:
        """Test the window is clipped at the start and end of the file."""
        rendered = window.render(request_for(sample_file, linenum, begin, end))
        assert len(code_lines(rendered)) == expected

    def test_message_on_location_line(self, window: CodeWindow, sample_file: Path) -> None:
        """Test the message is appended to the marked line only."""
        rendered = window.render(request_for(sample_file, 10, -1, 1, message="EXPECTED 2"))

        assert code_lines(rendered) == [
            "   9:  line9",
            "-> 10: line10 EXPECTED 2",
            "   11: line11",
        ]

    def test_message_at_window_start(self, window: CodeWindow, sample_file: Path) -> None:
        """Test the message offset is relative to the first shown line."""
        rendered = window.render(request_for(sample_file, 3, 0, 2, message="here"))
        assert code_lines(rendered)[0] == "-> 3: line3 here"

    def test_mark_disabled(self, window: CodeWindow, sample_file: Path) -> None:
        """Test no arrow is drawn when marking is off."""
        rendered = window.render(request_for(sample_file, 10, -1, 1, mark=False))
        assert "->" not in rendered

    def test_missing_file_placeholder(self, window: CodeWindow, tmp_path: Path) -> None:
        """Test an unreadable file renders the placeholder."""
        rendered = window.render(request_for(tmp_path / "gone.py", 3, -5, 5, message="x"))
        assert rendered == "./gone.py:3\n" + MISSING_CODE

    def test_path_outside_cwd(self, window: CodeWindow) -> None:
        """Test a path outside cwd keeps its absolute directory."""
        rendered = window.render(request_for(Path("/nonexistent/dir/x.py"), 3, 0, 0))
        assert rendered.splitlines()[0] == "/nonexistent/dir/x.py:3"

    def test_relative_path_resolves_against_cwd(self, window: CodeWindow, sample_file: Path) -> None:
        """Test relative paths are read relative to cwd."""
        rendered = window.render(request_for(Path("sample.py"), 2, 0, 0))
        assert code_lines(rendered) == ["-> 2: line2"]

    def test_subdirectory_header(self, window: CodeWindow, tmp_path: Path) -> None:
        """Test the header shows the directory relative to cwd."""
        nested = tmp_path / "pkg" / "mod.py"
        nested.parent.mkdir()
        nested.write_text("x = 1\n")
        rendered = window.render(request_for(nested, 1, 0, 0))
        assert rendered.splitlines()[0] == "pkg/mod.py:1"

    def test_indentation_removed(self, window: CodeWindow, tmp_path: Path) -> None:
        """Test indentation shared by every line is stripped."""
        source = tmp_path / "indented.py"
        source.write_text("    def f():\n        return 1\n")
        rendered = window.render(request_for(source, 1, 0, 1))

        assert code_lines(rendered) == ["-> 1: def f():", "   2:     return 1"]

    def test_path_emphasis_indents_code(self, window: CodeWindow, sample_file: Path) -> None:
        """Test library frames are pushed right under their header."""
        rendered = window.render(request_for(sample_file, 5, 0, 0, emphasis=Emphasis.PATH))

        assert rendered == "./sample.py:5\n" + "      -> 5: line5\n"

    def test_file_without_trailing_newline(self, window: CodeWindow, tmp_path: Path) -> None:
        """Test the last line still ends the window with a newline."""
        source = tmp_path / "short.py"
        source.write_text("a = 1\nb = 2")
        rendered = window.render(request_for(source, 2, 0, 0, message="!"))
        assert rendered.endswith("-> 2: b = 2 !\n")


class TestHelpers:
    """Tests for the individual transforms."""

    def test_prefix_linenos_width(self, window: CodeWindow) -> None:
        """Test the number column is sized for the largest number."""
        numbered = window.prefix_linenos_to("a\nb\n", 99, 100)
        assert numbered == "   99:  a\n-> 100: b\n"

    def test_remove_indentation_counts_blank_lines(self, window: CodeWindow) -> None:
        """Test a blank line keeps the code from being dedented."""
        code = "    a\n\n    b\n"
        assert window.remove_indentation(code) == code

    def test_add_message_out_of_range(self, window: CodeWindow) -> None:
        """Test a message for a missing line is dropped."""
        assert window.add_message_to("a\n", 3, "msg") == "a\n"

    def test_read_lines_past_end(self, window: CodeWindow, sample_file: Path) -> None:
        """Test reading beyond the file yields what exists."""
        assert window.read_lines(sample_file, 19, 30) == ["line20\n"]

    def test_read_lines_missing(self, window: CodeWindow, tmp_path: Path) -> None:
        """Test a missing file reads as None."""
        assert window.read_lines(tmp_path / "nope.py", 0, 1) is None

    def test_highlight_with_colour(self, sample_file: Path, tmp_path: Path) -> None:
        """Test the highlight token is inverted on the location line."""
        window = CodeWindow(theme=Theme(color=True), cwd=tmp_path)
        rendered = window.render(request_for(sample_file, 10, 0, 0, highlight="line10"))
        assert "\x1b[7mline10" in rendered

    def test_highlight_survives_path_emphasis(self, sample_file: Path, tmp_path: Path) -> None:
        """Test greying out a library frame keeps the inverted token on its line."""
        window = CodeWindow(theme=Theme(color=True), cwd=tmp_path)
        request = request_for(sample_file, 10, -1, 1, highlight="line10", emphasis=Emphasis.PATH)

        lines = split_lines(window.render(request))

        assert len(lines) == 4
        assert lines[2].startswith(GREY)
        assert f"\x1b[7mline10{RESET}{GREY}" in lines[2]
        assert "\x1b[7m" not in lines[1] + lines[3]

    def test_missing_file_is_logged(
        self, window: CodeWindow, tmp_path: Path, record_logs
    ) -> None:
        """Test an unreadable source leaves a debug event."""
        events = record_logs(code_window)
        window.read_lines(tmp_path / "nope.py", 0, 1)
        assert events == [
            ("debug", LogEventNames.SOURCE_FILE_MISSING, {"path": str(tmp_path / "nope.py")})
        ]
