"""SQL Parse Tree - Render parsed SQL as an inspectable, self-describing tree."""

from sql_parse_tree.config import LogDestination, OutputFormat, Settings, load_settings
from sql_parse_tree.formatter import render, to_html, to_json, to_markdown, to_yaml
from sql_parse_tree.parse_tree.builder import ParseTreeBuilder, capture
from sql_parse_tree.parse_tree.nodes import ParseData, Property
from sql_parse_tree.parser import parse_sql

__version__ = "0.1.0"

__all__ = [
    "load_settings",
    "Settings",
    "OutputFormat",
    "LogDestination",
    "parse_sql",
    "capture",
    "ParseTreeBuilder",
    "ParseData",
    "Property",
    "render",
    "to_json",
    "to_yaml",
    "to_html",
    "to_markdown",
]
