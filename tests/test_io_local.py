"""Tests for local line sources."""

import pytest
import tempfile
from pathlib import Path
import io

from cpread.core.model import IoFailure
from cpread.io.local import FileLineSource, StreamLineSource, open_file_source, open_stdin_source


class TestFileLineSource:
    """Test file-backed line sources."""

    def test_basic_lines(self):
        """Lines come back in order without terminators."""
        with tempfile.NamedTemporaryFile() as f:
            f.write(b"1 2\n3 4\n\n5 6\n")
            f.flush()

            source = FileLineSource(f.name)
            assert source.next_line() == "1 2"
            assert source.next_line() == "3 4"
            assert source.next_line() == ""
            assert source.next_line() == "5 6"
            assert source.next_line() is None
            assert source.next_line() is None
            assert source.lines_read == 4

            source.close()

    def test_line_endings(self):
        """CRLF, CR and a missing final newline are all handled."""
        with tempfile.NamedTemporaryFile() as f:
            f.write(b"a\r\nb\rc")
            f.flush()

            with FileLineSource(f.name) as source:
                assert list(source) == ["a", "b", "c"]

    def test_path_source(self):
        """Path objects work as well as strings."""
        with tempfile.NamedTemporaryFile(delete=False) as f:
            f.write(b"x\n")
            temp_path = Path(f.name)

        try:
            with FileLineSource(temp_path) as source:
                assert list(source) == ["x"]
        finally:
            temp_path.unlink()

    def test_empty_file(self):
        """An empty file simply has no lines."""
        with tempfile.NamedTemporaryFile() as f:
            with FileLineSource(f.name) as source:
                assert source.next_line() is None

    def test_missing_file(self):
        """A missing path fails at open time."""
        with tempfile.TemporaryDirectory() as d:
            missing = Path(d) / "nope.txt"
            with pytest.raises(IoFailure, match="Cannot open") as excinfo:
                FileLineSource(missing)
            assert excinfo.value.source == missing
            assert isinstance(excinfo.value.__cause__, FileNotFoundError)

    def test_directory(self):
        """A directory is not a readable source."""
        with tempfile.TemporaryDirectory() as d:
            with pytest.raises(IoFailure):
                FileLineSource(d)

    def test_decode_error(self):
        """Undecodable bytes are an unrecoverable read error."""
        with tempfile.NamedTemporaryFile() as f:
            f.write(b"ok\n\xff\xfe\n")
            f.flush()

            source = FileLineSource(f.name)
            with pytest.raises(IoFailure, match="Read failed"):
                list(source)
            assert source.next_line() is None
            source.close()

    def test_lenient_errors(self):
        """errors='replace' turns bad bytes into replacement characters."""
        with tempfile.NamedTemporaryFile() as f:
            f.write(b"a\xffb\n")
            f.flush()

            with FileLineSource(f.name, errors="replace") as source:
                assert source.next_line() == "a�b"

    def test_close_is_idempotent(self):
        """Closing twice is fine; reading after close fails."""
        with tempfile.NamedTemporaryFile() as f:
            f.write(b"1\n")
            f.flush()

            source = FileLineSource(f.name)
            handle = source._stream
            source.close()
            source.close()
            assert handle.closed
            with pytest.raises(IoFailure, match="is closed"):
                source.next_line()


class TestStreamLineSource:
    """Test stream-backed line sources."""

    def test_text_stream(self):
        source = StreamLineSource(io.StringIO("a b\r\nc\n"))
        assert list(source) == ["a b", "c"]
        assert source.lines_read == 2

    def test_binary_stream(self):
        """Binary streams are decoded with the configured encoding."""
        source = StreamLineSource(io.BytesIO("ä 1\nö 2\n".encode("utf-8")))
        assert list(source) == ["ä 1", "ö 2"]

    def test_binary_stream_other_encoding(self):
        source = StreamLineSource(io.BytesIO("é\n".encode("latin-1")), encoding="latin-1")
        assert source.next_line() == "é"

    def test_not_owned_stream_stays_open(self):
        stream = io.StringIO("x\n")
        with StreamLineSource(stream) as source:
            assert source.next_line() == "x"
        assert not stream.closed

    def test_owned_stream_is_closed(self):
        stream = io.StringIO("x\n")
        StreamLineSource(stream, owns=True).close()
        assert stream.closed

    def test_read_error(self):
        """OSErrors from the stream surface as IoFailure and end iteration."""
        class Broken(io.StringIO):
            def readline(self, *args):
                raise OSError("disk on fire")

        source = StreamLineSource(Broken(), name="broken")
        with pytest.raises(IoFailure, match="disk on fire") as excinfo:
            source.next_line()
        assert excinfo.value.source == "broken"
        assert source.next_line() is None


class TestFactoryFunctions:
    """Test factory functions."""

    def test_open_file_source(self):
        with tempfile.NamedTemporaryFile() as f:
            f.write(b"1\n")
            f.flush()

            source = open_file_source(f.name)
            assert isinstance(source, FileLineSource)
            assert source.next_line() == "1"
            source.close()

    def test_open_stdin_source(self, monkeypatch):
        stdin = io.StringIO("4 5\n")
        monkeypatch.setattr("sys.stdin", stdin)
        source = open_stdin_source()
        assert source.name == "<stdin>"
        assert source.next_line() == "4 5"
        source.close()
        assert not stdin.closed
