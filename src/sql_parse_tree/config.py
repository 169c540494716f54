"""Configuration management for sql-parse-tree.

This module provides a pydantic-based configuration system that loads settings
from environment variables (prefixed ``SQL_PARSE_TREE_``) and an optional
``.env`` file. Command-line options override whatever is loaded here.
"""

from enum import Enum
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class OutputFormat(str, Enum):
    """Formats a parse tree can be rendered in."""

    JSON = "json"
    YAML = "yaml"
    HTML = "html"
    MD = "md"


class LogDestination(str, Enum):
    """Where the timing log of a run is sent."""

    NONE = "none"
    STDOUT = "stdout"
    STDERR = "stderr"
    OUTPUT = "output"


class Settings(BaseSettings):
    """Configuration settings for sql-parse-tree.

    Environment Variables:
        SQL_PARSE_TREE_OUTPUT_FORMAT: Default output format (json, yaml, html, md)
        SQL_PARSE_TREE_DIALECT: sqlglot dialect to parse with (e.g. 'tsql')
        SQL_PARSE_TREE_PRETTY_TEXT: Pretty-print node text over several lines
        SQL_PARSE_TREE_YAML_MAX_DEPTH: Nesting ceiling for YAML output
        SQL_PARSE_TREE_MARKDOWN_TRUNCATE: Characters of node text shown in Markdown
        SQL_PARSE_TREE_LOG_DESTINATION: none, stdout, stderr or output

    Example:
        >>> settings = Settings(dialect="tsql")
        >>> settings.output_format
        <OutputFormat.JSON: 'json'>
    """

    model_config = SettingsConfigDict(
        env_prefix="SQL_PARSE_TREE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    output_format: OutputFormat = Field(
        default=OutputFormat.JSON,
        description="Format the parse tree is rendered in",
    )

    dialect: Optional[str] = Field(
        default=None,
        description="sqlglot dialect used to parse and to print node text (generic SQL if unset)",
    )

    pretty_text: bool = Field(
        default=True,
        description="Whether node text is pretty-printed over several lines",
    )

    yaml_max_depth: int = Field(
        default=500,
        ge=500,
        description="Maximum nesting depth of a YAML document before rendering fails",
    )

    markdown_truncate: int = Field(
        default=20,
        ge=1,
        description="Maximum characters of a node's first text line shown in Markdown",
    )

    log_destination: LogDestination = Field(
        default=LogDestination.NONE,
        description="Where the timing log is sent",
    )


def load_settings() -> Settings:
    """Load settings from environment variables and ``.env``.

    Returns:
        A Settings instance
    """
    return Settings()
