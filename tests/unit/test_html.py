"""Unit tests for the HTML formatter."""

import re

from sql_parse_tree.formatter.html import HtmlFormatter, to_html
from sql_parse_tree.parse_tree.builder import capture
from sql_parse_tree.parse_tree.nodes import ParseData, Property
from sql_parse_tree.parser import parse_sql

TYPE_TAG = re.compile(r"<b id='type_(\d+)'>([^<]*)</b>")


def test_ids_follow_depth_first_order(select_tree):
    tags = TYPE_TAG.findall(to_html(select_tree))

    assert [int(node_id) for node_id, _ in tags] == list(range(select_tree.count()))
    assert [name for _, name in tags] == [node.type_name for node in select_tree.walk()]


def test_ids_restart_for_every_render(select_tree):
    formatter = HtmlFormatter()

    first = formatter.format(select_tree)
    second = formatter.format(select_tree)

    assert first == second
    assert "types[0] = " in second
    assert f"var count = {select_tree.count()};" in second


def test_document_is_self_contained(select_tree):
    html = to_html(select_tree)

    assert html.startswith("<!DOCTYPE html>")
    assert "<script>" in html
    assert "<style>" in html
    assert "src=" not in html
    assert "href=" not in html


def test_children_start_collapsed(select_tree):
    html = to_html(select_tree)

    assert "<ol id='chd_0' class='hide canHide'>" in html
    assert "toggleChildren(0);" in html
    assert "chd_2" not in html


def test_multi_line_text_gets_detail_box(select_tree):
    html = to_html(select_tree)

    assert "<span id='text_0'>SELECT a, b</span>" in html
    assert "toggleDetail(0);" in html
    assert "<textarea class='detailText' id='txt_0' rows='2' readonly></textarea>" in html
    assert "document.getElementById('txt_0').value = texts[0];" in html
    assert "toggleDetail(1);" not in html


def test_script_arrays_hold_types_and_texts(select_tree):
    html = to_html(select_tree)

    assert 'types[0] = "select";' in html
    assert 'texts[0] = "SELECT a, b\\nFROM t";' in html
    assert 'types[2] = "identifier";' in html


def test_script_literals_are_escaped():
    root = ParseData(type_name="Literal", text="'</script><script>alert(1)</script>'")

    html = to_html(root)

    assert "<script>alert(1)" not in html
    assert "\\u003c/script\\u003e" in html


def test_first_line_is_html_escaped():
    root = ParseData(type_name="LT", text="a < b & c")

    assert "<span id='text_0'>a &lt; b &amp; c</span>" in to_html(root)


def test_properties_render_as_nested_lists(select_tree):
    html = to_html(select_tree)

    assert re.search(r"<li>\s*this:\s*a\s*</li>", html)
    assert re.search(r"hints:\s*<ul>\s*<li>\s*NOLOCK\s*</li>\s*<li>\s*<ul>\s*<li>\s*INDEX", html)


def test_unsupported_value_renders_type_name():
    prop = Property(name="size")
    prop.value = 3.5
    root = ParseData(type_name="Node", text="n", properties=[prop])

    assert re.search(r"<li>\s*size:\s*float\s*</li>", to_html(root))


def test_global_controls_and_search_box(select_tree):
    html = to_html(select_tree)

    assert "value='Collapse All' onClick='collapseExpandAll(true);'" in html
    assert "value='Expand All' onClick='collapseExpandAll(false);'" in html
    assert "id='txt_search' onKeyUp='doSearch();'" in html
    assert "toLowerCase().startsWith(text)" in html


def test_captured_tree_has_one_id_per_node():
    data = capture(parse_sql("SELECT a, b FROM t WHERE a = 1"))

    tags = TYPE_TAG.findall(to_html(data))

    assert len(tags) == data.count()


def test_default_capture_of_multi_line_sql_has_detail_box():
    data = capture(parse_sql("SELECT a,\n  b\nFROM t\nWHERE a = 1"))

    html = to_html(data)

    assert "toggleDetail(0);" in html
    assert "<span id='text_0'>SELECT</span>" in html


def test_deep_tree_nests_every_level():
    root = ParseData(type_name="Level", text="0")
    node = root
    for level in range(1, 1200):
        child = ParseData(type_name="Level", text=str(level))
        node.add_child(child)
        node = child

    html = to_html(root)

    assert len(TYPE_TAG.findall(html)) == 1200
    assert html.count("<ol id='chd_") == 1199
    assert html.count("</ol>") == 1200
    assert "<b id='type_1199'>Level</b>" in html
