import pytest

from mino.buffer import Row, TextBuffer, expand_tabs
from mino.config import EditorConfig


def make_row(text: str = "", **config: object) -> Row:
    return Row.from_chars(text, EditorConfig(**config))  # type: ignore[arg-type]


def assert_consistent(row: Row) -> None:
    assert row.size == len(row.chars)
    assert row.rsize == len(row.render)
    assert row.render == expand_tabs(
        row.chars, row.config.tab_stop, aligned=row.config.aligned_tabs
    )


def test_new_row_is_empty() -> None:
    row = Row.new()

    assert row.chars == ""
    assert row.render == ""
    assert row.size == 0
    assert row.rsize == 0
    assert row.has_tabs is False


def test_render_without_tabs_matches_chars() -> None:
    row = make_row("hello, world")

    assert row.render == row.chars
    assert row.rsize == row.size


def test_single_tab_renders_tab_stop_spaces() -> None:
    row = make_row("\t")

    assert row.render == "    "
    assert row.rsize == 4
    assert row.has_tabs is True


def test_flat_expansion_ignores_column() -> None:
    row = make_row("a\tb")

    assert row.render == "a    b"
    assert row.rsize == 6


def test_aligned_expansion_pads_to_next_stop() -> None:
    row = make_row("a\tb", tab_render="aligned")

    assert row.render == "a   b"
    assert row.rsize == 5


def test_custom_tab_stop() -> None:
    row = make_row("\tx", tab_stop=8)

    assert row.render == " " * 8 + "x"


def test_insert_char_clamps_to_end() -> None:
    row = make_row("abc")

    row.insert_char(100, "x")

    assert row.chars == "abcx"
    assert row.size == 4
    assert_consistent(row)


def test_insert_char_in_middle_refreshes_render() -> None:
    row = make_row("ab")

    row.insert_char(1, "\t")

    assert row.chars == "a\tb"
    assert row.render == "a    b"
    assert row.has_tabs is True
    assert_consistent(row)


def test_remove_char_deletes_at_index() -> None:
    row = make_row("a\tb")

    row.remove_char(1)

    assert row.chars == "ab"
    assert row.render == "ab"
    assert row.has_tabs is False
    assert_consistent(row)


def test_remove_char_last_character() -> None:
    row = make_row("abc")

    row.remove_char(2)

    assert row.chars == "ab"


@pytest.mark.parametrize("idx", [3, 10])
def test_remove_char_past_end_is_noop(idx: int) -> None:
    row = make_row("abc")

    row.remove_char(idx)

    assert row.chars == "abc"
    assert_consistent(row)


def test_remove_char_on_empty_row_is_noop() -> None:
    row = Row.new()

    row.remove_char(0)

    assert row.size == 0


def test_split_row_moves_tail() -> None:
    row = make_row("hello\tworld")

    tail = row.split_row(5)

    assert row.chars == "hello"
    assert tail.chars == "\tworld"
    assert tail.render == "    world"
    assert_consistent(row)
    assert_consistent(tail)


def test_split_row_at_zero_moves_everything() -> None:
    row = make_row("abc")

    tail = row.split_row(0)

    assert row.chars == ""
    assert tail.chars == "abc"


@pytest.mark.parametrize("idx", [3, 4, 50])
def test_split_row_past_end_returns_empty_row(idx: int) -> None:
    row = make_row("abc")

    tail = row.split_row(idx)

    assert tail.chars == ""
    assert tail.size == 0
    assert row.chars == "abc"
    assert row.render == "abc"


@pytest.mark.parametrize("idx", range(0, 8))
def test_split_then_merge_restores_text(idx: int) -> None:
    text = "ab\tc\td"
    buffer = TextBuffer()
    buffer.append_row(text)

    tail = buffer.rows[0].split_row(idx)
    buffer.insert_row(1, tail)
    buffer.merge_rows(0, 1)

    assert buffer.num_rows == 1
    assert buffer.rows[0].chars == text
    assert_consistent(buffer.rows[0])


def test_chars_at_clamps_range() -> None:
    row = make_row("abcdef")

    assert row.chars_at(1, 3) == "bc"
    assert row.chars_at(4, 100) == "ef"
    assert row.chars_at(6, 10) == ""
    assert row.chars_at(10, 20) == ""
    assert row.chars_at(3, 2) == ""
    assert row.chars_at() == "abcdef"


def test_chars_at_on_empty_row() -> None:
    assert Row.new().chars_at(0, 5) == ""


def test_rchars_at_reads_render() -> None:
    row = make_row("\tab")

    assert row.rchars_at(2, 5) == "  a"
    assert row.rchars_at(4, 100) == "ab"
    assert row.rchars_at(6) == ""


def test_chars_is_read_only() -> None:
    row = make_row("abc")

    with pytest.raises(AttributeError):
        row.chars = "xyz"  # type: ignore[misc]


def test_rows_compare_by_text() -> None:
    assert make_row("abc") == make_row("abc")
    assert make_row("abc") != make_row("abd")


def test_insert_char_with_longer_string_inserts_verbatim() -> None:
    row = make_row("ad")

    row.insert_char(1, "b\tc")

    assert row.chars == "ab\tcd"
    assert row.size == 5
    assert_consistent(row)
