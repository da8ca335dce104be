"""Tests for editor text edits and keyboard shortcuts."""

import pytest

from marknote.core.editor import (
    TextEdit,
    apply_shortcut,
    continue_list,
    insert_at_line_start,
    insert_text,
    paste,
    word_count,
)


@pytest.mark.parametrize(
    "value,expected",
    [
        ("", 0),
        ("   \n\t ", 0),
        ("hello", 1),
        ("  hello   world \n foo ", 3),
    ],
)
def test_word_count(value, expected):
    assert word_count(value) == expected


def test_insert_text_wraps_selection():
    edit = insert_text("hello world", 6, 11, "**", "**", "bold text")
    assert edit == TextEdit("hello **world**", 8, 13)


def test_insert_text_uses_placeholder_without_selection():
    edit = insert_text("hello ", 6, 6, "**", "**", "bold text")
    assert edit.content == "hello **bold text**"
    assert edit.content[edit.selection_start:edit.selection_end] == "bold text"


def test_insert_at_line_start_targets_caret_line():
    edit = insert_at_line_start("one\ntwo", 5, "## ")
    assert edit == TextEdit("one\n## two", 8, 8)


def test_insert_at_line_start_first_line():
    edit = insert_at_line_start("title", 2, "# ")
    assert edit == TextEdit("# title", 4, 4)


def test_continue_unordered_list():
    edit = continue_list("- a", 3)
    assert edit == TextEdit("- a\n- ", 6, 6)


def test_continue_unordered_list_keeps_bullet_and_indent():
    edit = continue_list("  * nested", 10)
    assert edit.content == "  * nested\n  * "


def test_continue_ordered_list_increments():
    edit = continue_list("  3. x", 6)
    assert edit == TextEdit("  3. x\n  4. ", 12, 12)


def test_continue_list_in_middle_of_text():
    value = "1. first\nafter"
    edit = continue_list(value, 8)
    assert edit.content == "1. first\n2. \nafter"


def test_continue_list_outside_list():
    assert continue_list("plain text", 10) is None


@pytest.mark.parametrize(
    "key,expected",
    [
        ("b", "**bold text**"),
        ("i", "*italic text*"),
        ("k", "[link text](url)"),
        ("`", "`code`"),
    ],
)
def test_wrap_shortcuts_insert_placeholder(key, expected):
    edit = apply_shortcut(key, "", 0, 0)
    assert edit.content == expected


def test_link_shortcut_wraps_selection():
    edit = apply_shortcut("k", "see", 0, 3)
    assert edit == TextEdit("[see](url)", 1, 4)


def test_heading_shortcut():
    edit = apply_shortcut("3", "abc", 1, 1)
    assert edit == TextEdit("### abc", 5, 5)


def test_tab_indents():
    edit = apply_shortcut("Tab", "ab", 1, 1, modifier=False)
    assert edit == TextEdit("a  b", 3, 3)


def test_enter_continues_list_without_modifier():
    edit = apply_shortcut("Enter", "- item", 6, 6, modifier=False)
    assert edit.content == "- item\n- "


def test_enter_outside_list_is_not_handled():
    assert apply_shortcut("Enter", "text", 4, 4, modifier=False) is None


def test_modifier_enter_is_not_a_text_edit():
    assert apply_shortcut("Enter", "x", 1, 1) is None


def test_unbound_keys():
    assert apply_shortcut("z", "x", 0, 0) is None
    assert apply_shortcut("b", "x", 0, 0, modifier=False) is None


def test_paste_prefers_html():
    edit = paste("ab", 1, 1, "Y", "<b>Y</b>")
    assert edit == TextEdit("a**Y**b", 6, 6)


def test_paste_blank_html_falls_back_to_text():
    edit = paste("ab", 0, 2, "plain", "   ")
    assert edit == TextEdit("plain", 5, 5)


def test_paste_replaces_selection():
    edit = paste("hello world", 6, 11, "there")
    assert edit == TextEdit("hello there", 11, 11)
