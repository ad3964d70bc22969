"""Tests for the incremental journal reader."""

import builtins

import pytest

from journal_watcher.src.errors import ReadFailure
from journal_watcher.src.tailer import is_match, last_match, read_new_lines, split_lines

DEPOT = '{"event":"ColonisationConstructionDepot","x":1}'
DEPOT_2 = '{"event":"ColonisationConstructionDepot","x":2}'
OTHER = '{"event":"FSDJump","StarSystem":"Sol"}'


class TestIsMatch:
    def test_depot_event(self):
        assert is_match(DEPOT)

    def test_missing_braces(self):
        assert not is_match("ColonisationConstructionDepot seen but not json")

    def test_marker_absent(self):
        assert not is_match('{"other":"value"}')

    def test_trailing_whitespace_allowed(self):
        assert is_match(DEPOT + "  \t")

    def test_leading_whitespace_rejected(self):
        assert not is_match(" " + DEPOT)

    def test_malformed_json_still_matches(self):
        assert is_match("{ColonisationConstructionDepot not really json}")

    def test_custom_marker(self):
        assert is_match('{"event":"Docked"}', marker="Docked")
        assert not is_match(DEPOT, marker="Docked")


class TestSplitLines:
    def test_universal_newlines(self):
        assert split_lines(b"a\nb\r\nc\rd") == ["a", "b", "c", "d"]

    def test_invalid_utf8_replaced(self):
        assert split_lines(b"ok\n\xff\xfe\n") == ["ok", "\ufffd\ufffd"]


class TestLastMatch:
    def test_only_last_match_reported(self):
        lines = [DEPOT, OTHER, DEPOT_2]
        assert last_match(lines) == DEPOT_2

    def test_no_match(self):
        assert last_match([OTHER, "plain text"]) is None


class TestReadNewLines:
    def test_reads_from_start(self, tmp_path):
        f = tmp_path / "Journal.01.log"
        f.write_bytes((OTHER + "\n" + DEPOT + "\n").encode())
        result = read_new_lines(str(f), 0)
        assert result.line == DEPOT
        assert result.offset == f.stat().st_size
        assert result.bytes_read == f.stat().st_size

    def test_unchanged_file_reads_nothing(self, tmp_path, monkeypatch):
        f = tmp_path / "Journal.01.log"
        f.write_text(DEPOT + "\n")
        size = f.stat().st_size

        def no_open(*args, **kwargs):
            raise AssertionError("file should not be opened")

        monkeypatch.setattr(builtins, "open", no_open)
        result = read_new_lines(str(f), size)
        assert result.offset == size
        assert result.line is None
        assert result.bytes_read == 0

    def test_idempotent_without_growth(self, tmp_path):
        f = tmp_path / "Journal.01.log"
        f.write_text(DEPOT + "\n")
        first = read_new_lines(str(f), 0)
        second = read_new_lines(str(f), first.offset)
        assert second.offset == first.offset
        assert second.line is None

    def test_only_appended_lines_considered(self, tmp_path):
        f = tmp_path / "Journal.01.log"
        f.write_text(DEPOT + "\n")
        first = read_new_lines(str(f), 0)
        with open(f, "a") as fh:
            fh.write(OTHER + "\n")
        second = read_new_lines(str(f), first.offset)
        assert second.line is None
        assert second.offset > first.offset

    def test_last_match_in_batch(self, tmp_path):
        f = tmp_path / "Journal.01.log"
        f.write_text("\n".join([DEPOT, OTHER, DEPOT_2]) + "\n")
        assert read_new_lines(str(f), 0).line == DEPOT_2

    def test_crlf_lines(self, tmp_path):
        f = tmp_path / "Journal.01.log"
        f.write_bytes((DEPOT + "\r\n" + OTHER + "\r\n").encode())
        assert read_new_lines(str(f), 0).line == DEPOT

    def test_offsets_monotonic_and_bounded(self, tmp_path):
        f = tmp_path / "Journal.01.log"
        f.write_text("")
        offset = 0
        seen = b""
        for i in range(5):
            with open(f, "ab") as fh:
                fh.write(f'{{"event":"ColonisationConstructionDepot","n":{i}}}\n'.encode())
            before = offset
            result = read_new_lines(str(f), offset)
            offset = result.offset
            assert before <= offset <= f.stat().st_size
            with open(f, "rb") as fh:
                fh.seek(before)
                seen += fh.read(offset - before)
            assert result.line.endswith(f'"n":{i}}}')
        assert seen == f.read_bytes()

    def test_truncated_file_restarts_from_zero(self, tmp_path):
        f = tmp_path / "Journal.01.log"
        f.write_text(OTHER + "\n" + OTHER + "\n")
        offset = read_new_lines(str(f), 0).offset
        f.write_text(DEPOT + "\n")
        result = read_new_lines(str(f), offset)
        assert result.line == DEPOT
        assert result.offset == f.stat().st_size

    def test_missing_file_raises_read_failure(self, tmp_path):
        with pytest.raises(ReadFailure) as exc_info:
            read_new_lines(str(tmp_path / "gone.log"), 42)
        assert exc_info.value.offset == 42
        assert isinstance(exc_info.value.reason, FileNotFoundError)

    def test_open_failure_raises_read_failure(self, tmp_path, monkeypatch):
        f = tmp_path / "Journal.01.log"
        f.write_text(DEPOT + "\n")

        def denied(*args, **kwargs):
            raise PermissionError(13, "Permission denied")

        monkeypatch.setattr(builtins, "open", denied)
        with pytest.raises(ReadFailure) as exc_info:
            read_new_lines(str(f), 0)
        assert exc_info.value.offset == 0
