"""Tests for BacktraceParser functionality."""

import traceback
from pathlib import Path

import pytest

from error_to_communicate.core import backtrace_parser
from error_to_communicate.core.backtrace_parser import BacktraceParser
from error_to_communicate.models.backtrace import BacktraceLocation, ContextRange, is_vendored
from error_to_communicate.utils.logging import LogEventNames


@pytest.fixture
def parser() -> BacktraceParser:
    """Create a BacktraceParser instance."""
    return BacktraceParser()


class TestParseEntry:
    """Tests for single entries."""

    def test_labelled_entry_with_backtick(self, parser: BacktraceParser) -> None:
        """Test the backtick-quoted label shape."""
        location = parser.parse_entry("/Users/someone/a/b/c.rb:123:in `some_method_name'")
        assert location == BacktraceLocation(
            path=Path("/Users/someone/a/b/c.rb"), linenum=123, label="some_method_name"
        )

    def test_labelled_entry_with_quote(self, parser: BacktraceParser) -> None:
        """Test the single-quoted label shape."""
        location = parser.parse_entry("lib/app.py:7:in 'load'")
        assert location is not None
        assert location.path == Path("lib/app.py")
        assert location.linenum == 7
        assert location.label == "load"

    def test_unlabelled_entry(self, parser: BacktraceParser) -> None:
        """Test entries without a label get an empty one."""
        location = parser.parse_entry("broken.py:3")
        assert location == BacktraceLocation(path=Path("broken.py"), linenum=3, label="")

    def test_python_frame_line(self, parser: BacktraceParser) -> None:
        """Test CPython ``File ..., line ..., in ...`` lines."""
        location = parser.parse_entry('  File "/srv/app/main.py", line 10, in main')
        assert location == BacktraceLocation(path=Path("/srv/app/main.py"), linenum=10, label="main")

    def test_python_frame_with_source_line(self, parser: BacktraceParser) -> None:
        """Test format_tb entries, which carry the source after the frame line."""
        entry = '  File "/srv/app/main.py", line 10, in main\n    run()\n'
        location = parser.parse_entry(entry)
        assert location is not None
        assert location.linenum == 10

    def test_frame_summary(self, parser: BacktraceParser) -> None:
        """Test traceback.FrameSummary objects."""
        frame = traceback.FrameSummary("/srv/app/main.py", 4, "handler", line="")
        location = parser.parse_entry(frame)
        assert location == BacktraceLocation(path=Path("/srv/app/main.py"), linenum=4, label="handler")

    def test_colon_in_path(self, parser: BacktraceParser) -> None:
        """Test the line number is the last numeric field."""
        location = parser.parse_entry("C:/code/app.rb:12:in `run'")
        assert location is not None
        assert location.path == Path("C:/code/app.rb")
        assert location.linenum == 12

    @pytest.mark.parametrize(
        "entry",
        [
            "",
            "no line number here",
            "app.py:0:in `main'",
            ":12",
            "app.py:abc",
            42,
            None,
        ],
    )
    def test_malformed_entries(self, parser: BacktraceParser, entry: object) -> None:
        """Test malformed entries yield None."""
        assert parser.parse_entry(entry) is None


class TestParse:
    """Tests for whole backtraces."""

    def test_preserves_order(self, parser: BacktraceParser) -> None:
        """Test locations come out in input order."""
        locations = parser.parse(["a.rb:1:in `inner'", "b.rb:2:in `outer'"])
        assert [location.label for location in locations] == ["inner", "outer"]

    def test_skips_malformed_entries(self, parser: BacktraceParser) -> None:
        """Test a malformed entry does not fail the trace."""
        locations = parser.parse(["a.rb:1:in `inner'", "garbage", "b.rb:2"])
        assert [location.path for location in locations] == [Path("a.rb"), Path("b.rb")]

    def test_skipped_entry_is_logged(self, parser: BacktraceParser, record_logs) -> None:
        """Test each dropped entry leaves a debug event."""
        events = record_logs(backtrace_parser)
        parser.parse(["garbage", "a.py:1"])
        assert events == [
            ("debug", LogEventNames.BACKTRACE_ENTRY_SKIPPED, {"entry": "'garbage'"})
        ]

    def test_empty_backtrace(self, parser: BacktraceParser) -> None:
        """Test an empty backtrace parses to an empty tuple."""
        assert parser.parse([]) == ()


class TestBacktraceLocation:
    """Tests for the location model."""

    def test_line_index_is_zero_based(self) -> None:
        """Test line_index is linenum - 1."""
        location = BacktraceLocation(path=Path("a.py"), linenum=1, label="")
        assert location.line_index == 0

    def test_vendored_paths(self) -> None:
        """Test third-party package directories are recognised."""
        assert is_vendored(Path("/venv/lib/python3.11/site-packages/lib/x.py"))
        assert is_vendored(Path("/usr/lib/python3/dist-packages/lib/x.py"))
        assert not is_vendored(Path("/srv/app/x.py"))
        assert not is_vendored(Path("/srv/my-site-packages-notes/x.py"))

    def test_str(self) -> None:
        """Test the string form reads like a backtrace entry."""
        location = BacktraceLocation(path=Path("a.py"), linenum=3, label="run")
        assert str(location) == "a.py:3:in 'run'"

    def test_context_range_fields(self) -> None:
        """Test ContextRange unpacks as (begin, end)."""
        begin, end = ContextRange(-5, 5)
        assert (begin, end) == (-5, 5)
