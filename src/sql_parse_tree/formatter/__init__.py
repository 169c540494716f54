"""Formatters that turn a parse tree into JSON, YAML, HTML or Markdown text."""

import logging
import time
from typing import Optional, Union

from sql_parse_tree.config import OutputFormat, Settings
from sql_parse_tree.errors import RenderDepthError, UnknownFormatError
from sql_parse_tree.formatter.html import HtmlFormatter, to_html
from sql_parse_tree.formatter.markdown import MarkdownFormatter, to_markdown
from sql_parse_tree.formatter.serialize import from_json, to_json, to_yaml
from sql_parse_tree.parse_tree.nodes import ParseData

logger = logging.getLogger(__name__)


def render(
    data: ParseData,
    output_format: Union[OutputFormat, str],
    settings: Optional[Settings] = None,
) -> str:
    """Render a parse tree in the requested format.

    Args:
        data: The parse tree
        output_format: One of json, yaml, html or md
        settings: Supplies the YAML depth ceiling and Markdown truncation

    Returns:
        The rendered document

    Raises:
        UnknownFormatError: If ``output_format`` is not a known format
        RenderDepthError: If the document nests deeper than the YAML ceiling
            or than the Python recursion limit allows
    """
    try:
        output_format = OutputFormat(output_format)
    except ValueError as e:
        raise UnknownFormatError(f"Unknown format {output_format!r}") from e
    if settings is None:
        settings = Settings()

    started = time.perf_counter()
    try:
        if output_format is OutputFormat.JSON:
            output = to_json(data)
        elif output_format is OutputFormat.YAML:
            output = to_yaml(data, max_depth=settings.yaml_max_depth)
        elif output_format is OutputFormat.HTML:
            output = to_html(data)
        else:
            output = to_markdown(data, truncate=settings.markdown_truncate)
    except RecursionError as e:
        raise RenderDepthError(
            f"{output_format.value.upper()} document is nested too deeply to render"
        ) from e
    logger.info("Render %s: %.6fs", output_format.value.upper(), time.perf_counter() - started)
    return output


__all__ = [
    "render",
    "to_json",
    "from_json",
    "to_yaml",
    "to_html",
    "to_markdown",
    "HtmlFormatter",
    "MarkdownFormatter",
]
