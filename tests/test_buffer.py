"""Test loading, saving and structural edits of the document buffer."""

import os
import tempfile

import pytest

from linepad.buffer import Buffer, split_lines
from linepad.errors import BufferIOError, IoErrorKind
from linepad.line import Line
from linepad.location import Location


def create_test_buffer(lines):
    return Buffer(lines=[Line.from_text(text) for text in lines])


def line_texts(buffer):
    return [str(line) for line in buffer.lines]


def write_temp_file(content, suffix='.txt'):
    with tempfile.NamedTemporaryFile(mode='w', suffix=suffix, delete=False,
                                     encoding='utf-8', newline='') as f:
        f.write(content)
        return f.name


def test_split_lines_trailing_newline_adds_no_empty_line():
    assert split_lines("a\nb\n") == ["a", "b"]
    assert split_lines("a\nb") == ["a", "b"]
    assert split_lines("") == []
    assert split_lines("\n") == [""]
    assert split_lines("a\n\nb\n") == ["a", "", "b"]


def test_split_lines_strips_carriage_returns():
    assert split_lines("a\r\nb\r\n") == ["a", "b"]


def test_load_file():
    temp_filename = write_temp_file("Line 1\nLine 2\nLine 3\n")
    try:
        buffer = Buffer.load(temp_filename)
        assert line_texts(buffer) == ["Line 1", "Line 2", "Line 3"]
        assert buffer.height() == 3
        assert buffer.file_info.path == temp_filename
        assert buffer.file_info.display_name == os.path.basename(temp_filename)
        assert buffer.dirty == False
    finally:
        os.remove(temp_filename)


def test_load_empty_file_gives_empty_buffer():
    temp_filename = write_temp_file("")
    try:
        buffer = Buffer.load(temp_filename)
        assert buffer.is_empty()
    finally:
        os.remove(temp_filename)


def test_load_nonexistent_file_raises_not_found():
    with pytest.raises(BufferIOError) as excinfo:
        Buffer.load("/nonexistent/file.txt")
    assert excinfo.value.kind == IoErrorKind.NOT_FOUND
    assert excinfo.value.path == "/nonexistent/file.txt"


def test_load_invalid_utf8_raises_encoding_error(tmp_path):
    path = tmp_path / "binary.txt"
    path.write_bytes(b"\xff\xfe\xfa")
    with pytest.raises(BufferIOError) as excinfo:
        Buffer.load(str(path))
    assert excinfo.value.kind == IoErrorKind.ENCODING


def test_save_without_path_fails_and_keeps_dirty():
    buffer = Buffer()
    buffer.insert_char("a", Location(0, 0))
    with pytest.raises(BufferIOError) as excinfo:
        buffer.save()
    assert excinfo.value.kind == IoErrorKind.NO_PATH
    assert buffer.dirty == True


def test_save_writes_newline_after_every_line(tmp_path):
    path = tmp_path / "out.txt"
    buffer = create_test_buffer(["First line", "Second line"])
    buffer.dirty = True
    buffer.save_as(str(path))
    assert path.read_text(encoding='utf-8') == "First line\nSecond line\n"
    assert buffer.dirty == False
    assert buffer.file_info.path == str(path)


def test_save_to_missing_directory_fails_and_keeps_dirty(tmp_path):
    buffer = create_test_buffer(["content"])
    buffer.file_info.path = str(tmp_path / "missing" / "out.txt")
    buffer.dirty = True
    with pytest.raises(BufferIOError):
        buffer.save()
    assert buffer.dirty == True
    assert not (tmp_path / "missing").exists()


def test_save_leaves_no_temp_files(tmp_path):
    path = tmp_path / "doc.txt"
    path.write_text("old\n", encoding='utf-8')
    buffer = Buffer.load(str(path))
    buffer.insert_char("!", Location(0, 3))
    buffer.save()
    assert path.read_text(encoding='utf-8') == "old!\n"
    assert sorted(p.name for p in tmp_path.iterdir()) == ["doc.txt"]


def test_load_save_load_round_trip(tmp_path):
    source = tmp_path / "source.txt"
    source.write_text("Hello 世界\nCafe\u0301\n\n\tindented\nlast", encoding='utf-8')
    first = Buffer.load(str(source))
    copy = tmp_path / "copy.txt"
    first.save_as(str(copy))
    second = Buffer.load(str(copy))
    assert line_texts(second) == line_texts(first)
    assert line_texts(second) == ["Hello 世界", "Cafe\u0301", "", "\tindented", "last"]


def test_insert_char_past_end_appends_line():
    buffer = Buffer()
    buffer.insert_char("A", Location(0, 0))
    assert line_texts(buffer) == ["A"]
    assert buffer.dirty == True


def test_insert_char_in_line():
    buffer = create_test_buffer(["ac"])
    buffer.insert_char("b", Location(0, 1))
    assert line_texts(buffer) == ["abc"]


def test_delete_within_line():
    buffer = create_test_buffer(["hello world"])
    buffer.delete(Location(0, 5))
    assert line_texts(buffer) == ["helloworld"]
    assert buffer.dirty == True


def test_delete_at_line_end_joins_next_line():
    buffer = create_test_buffer(["first", "second"])
    buffer.delete(Location(0, 5))
    assert line_texts(buffer) == ["firstsecond"]


def test_delete_at_document_end_does_nothing():
    buffer = create_test_buffer(["hello"])
    buffer.delete(Location(0, 5))
    buffer.delete(Location(1, 0))
    assert line_texts(buffer) == ["hello"]
    assert buffer.dirty == False


def test_insert_newline_splits_line():
    buffer = create_test_buffer(["hello", "world"])
    buffer.insert_newline(Location(0, 2))
    assert line_texts(buffer) == ["he", "llo", "world"]
    assert buffer.dirty == True


def test_insert_newline_at_line_start_and_end():
    buffer = create_test_buffer(["ab"])
    buffer.insert_newline(Location(0, 0))
    assert line_texts(buffer) == ["", "ab"]
    buffer.insert_newline(Location(1, 2))
    assert line_texts(buffer) == ["", "ab", ""]


def test_insert_newline_past_end_appends_empty_line():
    buffer = create_test_buffer(["ab"])
    buffer.insert_newline(Location(1, 0))
    assert line_texts(buffer) == ["ab", ""]


def test_display_name_without_path():
    assert Buffer().file_info.display_name == "[No Name]"
