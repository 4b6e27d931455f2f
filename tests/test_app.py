"""
Tests for the keystroke state machine
"""

import pytest

from termpdf.app import InputController, PdfApplication
from termpdf.errors import DocumentError
from termpdf.pdf_model import PageStore
from termpdf.view import ViewModelBuilder
from termpdf.view_state import Normal, PageJump, Search


def press(controller, *keys):
    for key in keys:
        controller.handle_key(key)


def type_text(controller, text):
    press(controller, *text)


def test_page_keys(three_pages):
    c = InputController(three_pages)
    press(c, "Right", "n")
    assert c.state.current_page == 2
    press(c, "Left")
    assert c.state.current_page == 1
    press(c, "p", "p")
    assert c.state.current_page == 0
    press(c, "End")
    assert c.state.current_page == 2
    press(c, "Home")
    assert c.state.current_page == 0


def test_scroll_keys():
    c = InputController(PageStore(["\n".join(str(i) for i in range(30))]))
    c.resize(80, 10)
    press(c, "Down", "j", "j")
    assert c.state.scroll_offset == 3
    press(c, "Up", "k")
    assert c.state.scroll_offset == 1
    press(c, "PageDown", "PageDown", "PageDown")
    assert c.state.scroll_offset == 20
    press(c, "PageUp")
    assert c.state.scroll_offset == 10


def test_entering_modes_resets_buffer(three_pages):
    c = InputController(three_pages)
    press(c, "g", "1", "Esc", "g")
    assert c.mode == PageJump("")
    press(c, "Esc", "/")
    assert c.mode == Search("")


def test_page_jump(ten_pages):
    c = InputController(ten_pages)
    press(c, "g", "7", "Enter")
    assert c.mode == Normal()
    assert c.state.current_page == 6
    assert c.state.status_message == "Jumped to page 7"


def test_page_jump_out_of_range(ten_pages):
    c = InputController(ten_pages)
    press(c, "n", "g", "9", "9", "Enter")
    assert c.state.current_page == 1
    assert "Invalid page" in c.state.status_message
    assert c.mode == Normal()


def test_page_jump_ignores_non_digits(ten_pages):
    c = InputController(ten_pages)
    press(c, "g", "x", "3", "Left", "Backspace", "5")
    assert c.mode == PageJump("5")


def test_page_jump_empty_and_zero(ten_pages):
    c = InputController(ten_pages)
    press(c, "g", "Enter")
    assert c.state.status_message == "Invalid page number"
    press(c, "g", "0", "Enter")
    assert c.state.status_message == "Invalid page number: 0"
    assert c.state.current_page == 0


def test_page_jump_escape_discards(ten_pages):
    c = InputController(ten_pages)
    press(c, "g", "4", "Esc")
    assert c.mode == Normal()
    assert c.state.current_page == 0
    assert c.running


def test_search_and_cycle_single_match(three_pages):
    c = InputController(three_pages)
    press(c, "/")
    type_text(c, "hello")
    press(c, "Enter")

    assert c.search.match_count() == 1
    assert c.state.current_page == 1
    assert c.state.scroll_offset == 4

    press(c, "Home", "F")
    assert c.state.current_page == 1
    assert c.state.scroll_offset == 4
    assert c.search.cursor == 0
    assert c.state.status_message == "Match 1 of 1 for 'hello'"


def test_cycle_forward_and_backward(ten_pages):
    c = InputController(ten_pages)
    press(c, "/")
    type_text(c, "dog")
    press(c, "Enter")
    assert c.search.cursor == 0

    press(c, "B")
    assert c.state.current_page == 9
    press(c, "F", "F")
    assert c.state.current_page == 1


def test_aborted_search_does_not_leak(ten_pages):
    c = InputController(ten_pages)
    press(c, "/")
    type_text(c, "cat")
    press(c, "Esc", "/")
    type_text(c, "dog")
    press(c, "Enter")
    assert c.search.query == "dog"


def test_escape_keeps_previous_search(ten_pages):
    c = InputController(ten_pages)
    press(c, "/")
    type_text(c, "dog")
    press(c, "Enter", "/")
    type_text(c, "zzz")
    press(c, "Esc")
    assert c.search.query == "dog"
    assert c.search.match_count() == 10
    press(c, "F")
    assert c.state.current_page == 1


def test_search_keys_are_typed_not_dispatched(three_pages):
    c = InputController(three_pages)
    press(c, "/")
    type_text(c, "qgF/c")
    press(c, "Backspace", "Home")
    assert c.mode == Search("qgF/")
    assert c.running


def test_search_without_matches(three_pages):
    c = InputController(three_pages)
    press(c, "/")
    type_text(c, "missing")
    press(c, "Enter")
    assert c.state.status_message == "No matches found for 'missing'"
    assert c.state.current_page == 0
    press(c, "F")
    assert c.state.status_message == "No matches"


def test_empty_search_clears(ten_pages):
    c = InputController(ten_pages)
    press(c, "/", "d", "Enter", "/", "Enter")
    assert c.state.status_message == "Search query is empty"
    assert not c.search.active


def test_clear_search(ten_pages):
    c = InputController(ten_pages)
    press(c, "/", "c", "Enter", "c")
    assert not c.search.active
    assert c.state.status_message == "Search cleared"


def test_status_cleared_by_next_action(ten_pages):
    c = InputController(ten_pages)
    press(c, "g", "9", "9", "Enter")
    assert c.state.status_message
    press(c, "n")
    assert c.state.status_message == ""


def test_unknown_keys_are_ignored(three_pages):
    c = InputController(three_pages)
    press(c, "x", "F12", "Enter", "Backspace")
    assert c.state.current_page == 0
    assert c.mode == Normal()
    assert c.running


@pytest.mark.parametrize("key", ["q", "Esc"])
def test_quit(three_pages, key):
    c = InputController(three_pages)
    assert c.handle_key(key) is False
    assert not c.running


def test_empty_document(empty_store):
    c = InputController(empty_store)
    press(c, "n", "p", "Down", "Up", "Home", "End", "F", "B", "g", "1", "Enter")
    assert c.state.current_page == 0
    assert c.state.scroll_offset == 0
    assert c.running


def test_application_loads_and_starts_at_page(tmp_path):
    path = tmp_path / "doc.txt"
    path.write_text("one\x0ctwo\x0cthree", encoding="utf-8")
    app = PdfApplication(str(path), start_page=2)
    assert app.pages.page_count() == 3
    assert app.view_model().header == "Page 2 of 3"


def test_application_rejects_missing_file(tmp_path):
    with pytest.raises(DocumentError):
        PdfApplication(str(tmp_path / "nope.pdf"))


def top_row(controller):
    vm = ViewModelBuilder(controller.pages).build(controller.state, controller.search)
    return vm.body[0].text


def test_scroll_up_after_match_near_page_end():
    lines = [f"line {i}" for i in range(100)]
    lines[95] = "needle"
    c = InputController(PageStore(["\n".join(lines)]))
    c.resize(80, 20)
    press(c, "/")
    type_text(c, "needle")
    press(c, "Enter")
    assert top_row(c) == "line 80"

    press(c, "Up")
    assert top_row(c) == "line 79"
    assert c.state.scroll_offset == 79


def test_scroll_up_after_viewport_grows():
    c = InputController(PageStore(["\n".join(f"line {i}" for i in range(50))]))
    c.resize(80, 10)
    press(c, "End", *["Down"] * 40)
    assert top_row(c) == "line 40"

    c.resize(80, 30)
    assert top_row(c) == "line 20"
    press(c, "Up")
    assert top_row(c) == "line 19"
