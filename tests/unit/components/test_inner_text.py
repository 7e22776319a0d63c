"""
Unit tests for the inner_text entry point.

Trees are built by hand so each case shows exactly the structure under test.
"""

import logging

import pytest

from innertext.core import inner_text
from innertext.display import default_display
from innertext.dom import ELEMENT_NODE, TEXT_NODE, ComputedStyle, Element, Text


def E(name, *children, **attributes):
    return Element(name, list(children), attributes)


def T(data):
    return Text(data)


def hiding(*names):
    """Resolver that gives the named tags display: none and defaults elsewhere."""
    def resolver(element):
        if element.local_name in names:
            return ComputedStyle(display="none")
        return ComputedStyle(display=default_display(element.local_name))
    return resolver


class HostNode:
    """A tree node from some other DOM: plain attributes, tuple children."""

    def __init__(self, node_type, local_name=None, data="", children=()):
        self.node_type = node_type
        self.local_name = local_name
        self.data = data
        self.children = tuple(children)
        self.parent = None
        self.previous_sibling = None
        self.next_sibling = None
        for i, child in enumerate(self.children):
            child.parent = self
            child.previous_sibling = self.children[i - 1] if i else None
            child.next_sibling = self.children[i + 1] if i + 1 < len(self.children) else None

    @property
    def text_content(self):
        if self.node_type == TEXT_NODE:
            return self.data
        return "".join(child.text_content for child in self.children)


def host(name, *children):
    return HostNode(ELEMENT_NODE, local_name=name, children=children)


def host_text(data):
    return HostNode(TEXT_NODE, data=data)


class TestBlockBreaks:
    def test_no_leading_or_trailing_newlines(self):
        assert inner_text(E("div", E("p", T("hi")))) == "hi"

    def test_paragraph_then_block_gives_one_blank_line(self):
        root = E("div", E("p", T("a")), E("div", T("b")))
        assert inner_text(root) == "a\n\nb"

    def test_adjacent_blocks_give_one_newline(self):
        root = E("div", E("div", T("a")), E("div", E("div", T("b"))))
        assert inner_text(root) == "a\nb"

    def test_heading_and_paragraph(self):
        assert inner_text(E("div", E("h1", T("T")), E("p", T("x")))) == "T\n\nx"

    def test_list_items(self):
        assert inner_text(E("ul", E("li", T("one")), E("li", T("two")))) == "one\ntwo"

    def test_hr_between_text(self):
        assert inner_text(E("div", T("a"), E("hr"), T("b"))) == "a\nb"

    def test_markup_whitespace_between_blocks(self):
        root = E("div", T("\n  "), E("p", T("a")), T("\n  "), E("p", T("b")), T("\n"))
        assert inner_text(root) == "a\n\nb"


class TestBreaksAndTables:
    def test_br_is_newline(self):
        assert inner_text(E("div", T("a"), E("br"), T("b"))) == "a\nb"

    def test_double_br(self):
        assert inner_text(E("div", T("a"), E("br"), E("br"), T("b"))) == "a\n\nb"

    def test_table_rows_and_cells(self):
        root = E(
            "table",
            E("tr", E("td", T("1")), E("td", T("2"))),
            E("tr", E("td", T("3"))),
        )
        assert inner_text(root) == "1\t2\n3"

    def test_table_with_caption_and_groups(self):
        root = E(
            "table",
            E("caption", T("Cap")),
            E("thead", E("tr", E("th", T("h")))),
            E("tbody", E("tr", E("td", T("1"))), E("tr", E("td", T("2")))),
        )
        assert inner_text(root) == "Cap\nh\n1\n2"


class TestWhitespace:
    def test_pre_preserved(self):
        assert inner_text(E("pre", T("  a\n  b  "))) == "  a\n  b  "

    def test_pre_preserved_in_nested_inline(self):
        assert inner_text(E("pre", E("code", T("x  =  1\n")))) == "x  =  1\n"

    def test_spaces_around_inline_elements(self):
        root = E("div", T("hello "), E("b", T(" world ")), T(" !"))
        assert inner_text(root) == "hello world !"

    def test_spaces_around_non_rendered(self):
        root = E("div", T("a "), E("script", T("x()")), T(" b"))
        assert inner_text(root) == "a b"

    def test_space_before_br_dropped(self):
        assert inner_text(E("div", T("a "), E("br"), T(" b"))) == "a\nb"

    def test_text_root(self):
        assert inner_text(T("  hi   there ")) == "hi there"


class TestForms:
    def test_select_ignores_stray_text(self):
        root = E(
            "select",
            T("stray"),
            E("option", T("One")),
            E("optgroup", E("option", T("Two")), T("junk")),
        )
        assert inner_text(root) == "One\nTwo"

    def test_input_and_textarea_skipped(self):
        root = E("form", T("Name "), E("input"), E("textarea", T("typed")))
        assert inner_text(root) == "Name"


class TestRoot:
    def test_script_root_returns_raw_text(self):
        raw = "  if (a  <  b) {\n  go();\n}  "
        assert inner_text(E("script", T(raw))) == raw

    def test_style_root_returns_raw_text(self):
        assert inner_text(E("style", T(" p { color: red } "))) == " p { color: red } "

    def test_empty_root(self):
        assert inner_text(E("div")) == ""

    def test_deterministic(self):
        root = E("div", E("p", T("a  b")), T(" c "), E("table", E("tr", E("td", T("1")), E("td", T("2")))))
        assert inner_text(root) == inner_text(root)

    def test_tree_not_mutated(self):
        text = T("  a  ")
        root = E("div", text)
        inner_text(root)
        assert text.data == "  a  "
        assert root.children == [text]


class TestStyleResolver:
    def test_resolver_display_overrides_table(self):
        resolver = lambda el: ComputedStyle(display="block")  # noqa: E731
        assert inner_text(E("div", E("span", T("a")), E("span", T("b"))), resolver) == "a\nb"

    def test_resolver_can_make_blocks_inline(self):
        resolver = lambda el: ComputedStyle(display="inline")  # noqa: E731
        assert inner_text(E("div", E("div", T("a")), E("div", T("b"))), resolver) == "ab"

    def test_resolver_white_space_pre(self):
        resolver = lambda el: ComputedStyle(display="block", white_space="pre")  # noqa: E731
        assert inner_text(E("div", T(" a  b ")), resolver) == " a  b "

    def test_paragraph_breaks_do_not_depend_on_resolver(self):
        resolver = lambda el: ComputedStyle(display="inline")  # noqa: E731
        assert inner_text(E("div", E("p", T("a")), E("p", T("b"))), resolver) == "a\n\nb"

    def test_options_block_level_under_any_resolver(self):
        resolver = lambda el: ComputedStyle(display="inline")  # noqa: E731
        root = E("select", E("option", T("A")), E("option", T("B")))
        assert inner_text(root, resolver) == "A\nB"

    def test_resolver_errors_propagate(self):
        def resolver(element):
            raise RuntimeError("style recalculation failed")

        with pytest.raises(RuntimeError, match="style recalculation failed"):
            inner_text(E("div", E("span", T("a"))), resolver)

    def test_resolver_not_called_for_non_rendered_root(self):
        def resolver(element):
            raise AssertionError("should not be consulted")

        assert inner_text(E("noscript", T("enable js")), resolver) == "enable js"


class TestLogging:
    def test_debug_log_reports_mode(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="innertext.core"):
            inner_text(E("div", T("a")))
        assert "default stylesheet" in caplog.text

    def test_debug_log_for_non_rendered_root(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="innertext.core"):
            inner_text(E("script", T("x")))
        assert "not rendered" in caplog.text


class TestHiddenElements:
    def test_rp_fallback_text_not_rendered(self):
        root = E("ruby", T("漢"), E("rp", T("(")), E("rt", T("kan")), E("rp", T(")")))
        assert inner_text(root) == "漢kan"

    def test_hidden_subtree_contributes_nothing(self):
        root = E("div", E("p", T("shown")), E("section", E("p", T("secret"))))
        assert inner_text(root, hiding("section")) == "shown"

    def test_hidden_element_is_not_a_line_boundary(self):
        root = E("div", T("a "), E("span", T("x")), T("b"))
        assert inner_text(root, hiding("span")) == "a b"
        assert inner_text(E("div", T("a"), E("span", T("x")), T(" b")), hiding("span")) == "a b"

    def test_hidden_block_adds_no_breaks(self):
        root = E("span", E("span", T("a")), E("div", T("x")), E("span", T("b")))
        assert inner_text(root, hiding("div")) == "ab"

    def test_hidden_root_returns_raw_text(self):
        assert inner_text(E("rp", T(" ( "))) == " ( "
        assert inner_text(E("div", T(" a  b ")), hiding("div")) == " a  b "


class TestHostTrees:
    def test_any_tree_with_the_capability_set(self):
        root = host(
            "div",
            host("p", host_text("a")),
            host_text(" b "),
            host("table", host("tr", host("td", host_text("1")), host("td", host_text("2")))),
        )
        assert inner_text(root) == "a\n\nb\n1\t2"

    def test_host_tree_whitespace_search(self):
        root = host("div", host_text("x "), host("b", host_text(" y ")), host("br"), host_text(" z"))
        assert inner_text(root) == "x y\nz"


class TestLargeInputs:
    ROWS = 3000

    def test_long_table_is_linear_in_resolver_calls(self):
        calls = []

        def resolver(element):
            calls.append(element)
            return ComputedStyle(display=default_display(element.local_name))

        root = E("table", E("tbody", *[E("tr", E("td", T(str(i))), E("td", T("x"))) for i in range(self.ROWS)]))
        lines = inner_text(root, resolver).split("\n")
        assert len(lines) == self.ROWS
        assert lines[0] == "0\tx"
        assert lines[-1] == f"{self.ROWS - 1}\tx"
        assert len(calls) < 30 * self.ROWS

    def test_long_run_of_inline_siblings(self):
        pairs = []
        for _ in range(self.ROWS):
            pairs += [E("span", T("w")), T(" ")]
        assert inner_text(E("div", *pairs)) == " ".join(["w"] * self.ROWS)
