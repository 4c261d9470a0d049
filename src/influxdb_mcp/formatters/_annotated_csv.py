"""
Annotated CSV normalization for Flux query responses.

InfluxDB returns Flux query results as "annotated CSV": ordinary comma-separated rows
interleaved with metadata rows (``#datatype``, ``#group``, ``#default``, ...) that start
with a marker character. The number and position of those metadata rows vary between
queries and server versions, so naive "first line is the header" parsing silently picks
an annotation row as the header and loses every value.

This module converts such payloads into plain Python structures:

- `extract_column_values`: the trimmed, non-empty values of one named column, in row order.
- `parse_rows`: one ``dict`` per data row, keyed by header name.
- `parse_columns`: the trimmed header names.

All functions share `content_lines` and `parse_header`, so they always agree on which
line is the header. They are pure and never raise for malformed tabular structure;
structural anomalies resolve to empty or partial results. Passing something other than a
``str`` as the payload is a caller bug and raises ``TypeError``.

Example:
    >>> text = "#datatype,string,long,string\\n,result,table,_value\\n,,0,cpu\\n"
    >>> extract_column_values(text, "_value")
    ['cpu']
    >>> parse_rows(text)
    [{'': '', 'result': '', 'table': '0', '_value': 'cpu'}]
"""

import logging

_LOGGER = logging.getLogger(__name__)

ANNOTATION_MARKER = "#"
"""str: Leading character of Flux annotation (metadata) rows."""

FIELD_SEPARATOR = ","


def _require_text(text: object, function_name: str) -> str:
    if not isinstance(text, str):
        raise TypeError(
            f"{function_name} expects the response body as str, got {type(text).__name__}"
        )
    return text


def content_lines(text: str, marker: str = ANNOTATION_MARKER) -> list[str]:
    """
    Split an annotated CSV payload into its content lines.

    A trailing carriage return is stripped from every line, zero-length lines are dropped
    and lines starting with ``marker`` are discarded wherever they appear. Whitespace-only
    lines are kept; they are not empty after terminator stripping.

    Args:
        text (str): The raw response body.
        marker (str): Annotation marker character. Defaults to ``"#"``.

    Returns:
        list[str]: Header and data lines in their original relative order.

    Raises:
        TypeError: If ``text`` is not a string.
    """
    text = _require_text(text, "content_lines")
    lines = []
    for raw_line in text.split("\n"):
        line = raw_line[:-1] if raw_line.endswith("\r") else raw_line
        if not line or line.startswith(marker):
            continue
        lines.append(line)
    return lines


def parse_header(line: str) -> list[str]:
    """Return the trimmed column names of a header line."""
    return [name.strip() for name in line.split(FIELD_SEPARATOR)]


def parse_columns(text: str, marker: str = ANNOTATION_MARKER) -> list[str]:
    """
    Return the header of an annotated CSV payload.

    Args:
        text (str): The raw response body.
        marker (str): Annotation marker character.

    Returns:
        list[str]: Trimmed column names, or an empty list when there are no content lines.
    """
    lines = content_lines(text, marker)
    if not lines:
        return []
    return parse_header(lines[0])


def extract_column_values(
    text: str, column: str, marker: str = ANNOTATION_MARKER
) -> list[str]:
    """
    Extract the values of one column from an annotated CSV payload.

    The header is the first line left after annotation lines are removed. The column is
    located by exact, case-sensitive comparison against the trimmed header names. Each data
    row contributes its field at that position, trimmed; rows that are too short or whose
    field is blank contribute nothing.

    Only the first content line is treated as a header. In a multi-table result whose
    tables have different schemas, the header lines of the later tables are read as data
    rows, so the column name itself (for example ``"_value"``) can appear among the values.

    Args:
        text (str): The raw response body.
        column (str): Name of the column to extract (for example ``"_value"``).
        marker (str): Annotation marker character.

    Returns:
        list[str]: Trimmed, non-empty values in source row order. Empty when the payload
        has no content lines or the column is not in the header.

    Raises:
        TypeError: If ``text`` is not a string.

    Example:
        >>> extract_column_values(",result,table,_value\\n,,0, cpu_usage \\n", "_value")
        ['cpu_usage']
    """
    lines = content_lines(text, marker)
    header = parse_header(lines[0]) if lines else []
    if column not in header:
        _LOGGER.debug(
            f"[formatters:extract_column_values] Column '{column}' not found in header {header}"
        )
        return []
    index = header.index(column)

    values = []
    for line in lines[1:]:
        fields = line.split(FIELD_SEPARATOR)
        value = fields[index].strip() if index < len(fields) else ""
        if value:
            values.append(value)

    _LOGGER.debug(
        f"[formatters:extract_column_values] Extracted {len(values)} value(s) from {len(lines) - 1} data row(s)"
    )
    return values


def parse_rows(text: str, marker: str = ANNOTATION_MARKER) -> list[dict[str, str]]:
    """
    Convert an annotated CSV payload into a list of row mappings.

    Header detection is identical to `extract_column_values`. Each data line is zipped
    positionally against the header:

    - duplicate header names keep the value of the last such column;
    - a row shorter than the header has no key for its missing trailing columns;
    - fields beyond the header length are ignored.

    Field values are returned untouched; only header names are trimmed.

    Args:
        text (str): The raw response body.
        marker (str): Annotation marker character.

    Returns:
        list[dict[str, str]]: One mapping per data row, in source order.

    Raises:
        TypeError: If ``text`` is not a string.
    """
    lines = content_lines(text, marker)
    if not lines:
        return []
    header = parse_header(lines[0])
    rows = [dict(zip(header, line.split(FIELD_SEPARATOR))) for line in lines[1:]]
    _LOGGER.debug(
        f"[formatters:parse_rows] Parsed {len(rows)} row(s) with {len(header)} column(s)"
    )
    return rows
