"""SQL parsing front end.

Wraps sqlglot's parser so callers always get exactly one root node, and so
parse failures surface as :class:`SqlSyntaxError` with one readable entry per
reported error.
"""

import logging
import time
from typing import List, Optional

import sqlglot
from sqlglot import exp
from sqlglot.errors import ParseError, TokenError

from sql_parse_tree.errors import SqlSyntaxError

logger = logging.getLogger(__name__)


class Script(exp.Expression):
    """Root node holding every statement of a multi-statement script."""

    arg_types = {"expressions": True}


def _describe_errors(error: ParseError) -> List[str]:
    described = []
    for detail in error.errors:
        described.append(f"{detail.get('line')},{detail.get('col')}: {detail.get('description')}")
    return described or [str(error)]


def parse_sql(sql: str, dialect: Optional[str] = None) -> exp.Expression:
    """Parse a SQL script into a single sqlglot expression tree.

    Args:
        sql: The SQL text, which may hold several statements
        dialect: sqlglot dialect name to read with, generic SQL when empty

    Returns:
        The statement's root node, or a :class:`Script` node wrapping all
        statements when there is more than one

    Raises:
        SqlSyntaxError: If the text does not parse or holds no statement
    """
    started = time.perf_counter()
    try:
        statements = sqlglot.parse(sql, read=dialect or None)
    except ParseError as e:
        raise SqlSyntaxError(_describe_errors(e)) from e
    except TokenError as e:
        raise SqlSyntaxError([str(e)]) from e
    logger.info("Parse took: %.6fs", time.perf_counter() - started)

    statements = [statement for statement in statements if statement is not None]
    if not statements:
        raise SqlSyntaxError(["1,1: No SQL statement found"])
    if len(statements) == 1:
        return statements[0]
    return Script(expressions=statements)
