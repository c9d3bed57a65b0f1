"""Parsing of the ``Tables`` setting.

The setting is a comma-separated list of table references. Each reference
has one to three dot-separated parts:

    name
    schema.name
    catalog.schema.name

A part may be quoted with ``"..."``, ``[...]`` or ```...``` to carry dots,
commas or spaces; a doubled closing character inside quotes stands for
itself. Wildcards (``%``, ``_``) are kept as written and interpreted by the
engine.

Example:
    >>> [p.name for p in parse_table_patterns('Account, sales."Order.Lines"')]
    ['Account', 'Order.Lines']
"""

from typing import List, Optional

from sqlbridge.common.exceptions import configuration_error
from sqlbridge.constants import TABLES_OPTION
from sqlbridge.types import TablePattern

QUOTE_PAIRS = {'"': '"', "[": "]", "`": "`"}
MAX_PARTS = 3


def _split_entries(raw: str) -> List[List[str]]:
    """Split ``raw`` into entries, each a list of unquoted parts."""
    entries: List[List[str]] = []
    parts: List[str] = []
    current: List[str] = []
    closing_quote: Optional[str] = None
    index = 0

    while index < len(raw):
        char = raw[index]
        if closing_quote is not None:
            if char == closing_quote:
                if raw[index + 1:index + 2] == closing_quote:
                    current.append(char)
                    index += 2
                    continue
                closing_quote = None
            else:
                current.append(char)
        elif char in QUOTE_PAIRS and not "".join(current).strip():
            current = []
            closing_quote = QUOTE_PAIRS[char]
        elif char == ".":
            parts.append("".join(current).strip())
            current = []
        elif char == ",":
            parts.append("".join(current).strip())
            entries.append(parts)
            parts, current = [], []
        else:
            current.append(char)
        index += 1

    if closing_quote is not None:
        raise configuration_error(
            f"Unterminated quoted name in the '{TABLES_OPTION}' option",
            config_key=TABLES_OPTION,
            details={"value": raw},
        )

    parts.append("".join(current).strip())
    entries.append(parts)
    return entries


def parse_table_patterns(raw: Optional[str]) -> List[TablePattern]:
    """Parse the ``Tables`` setting into table patterns.

    Args:
        raw: The setting value; None or blank yields no patterns

    Returns:
        Patterns in the order written. Blank entries are skipped.

    Raises:
        BridgeError: CONFIG_ERROR for unterminated quotes, more than three
            parts, or an entry with an empty table name
    """
    if not raw or not raw.strip():
        return []

    patterns: List[TablePattern] = []
    for parts in _split_entries(raw):
        if len(parts) == 1 and not parts[0]:
            continue
        if len(parts) > MAX_PARTS or not parts[-1]:
            raise configuration_error(
                f"Invalid table reference '{'.'.join(parts)}' in the '{TABLES_OPTION}' option",
                config_key=TABLES_OPTION,
                details={"value": raw},
            )

        name = parts[-1]
        schema = parts[-2] if len(parts) >= 2 else None
        catalog = parts[-3] if len(parts) == 3 else None
        patterns.append(TablePattern(catalog=catalog or None, schema=schema or None, name=name))

    return patterns


__all__ = ["parse_table_patterns"]
