"""
Formatters for Flux query responses.

Converts the annotated CSV returned by the InfluxDB query engine into structures that MCP
tools and resources can return directly.

Formats:
    - json-row: list of row objects keyed by column name (default)
    - json-column: object mapping each column name to its list of values
    - csv: the annotated CSV text, unchanged
"""

import logging

from ._annotated_csv import (
    ANNOTATION_MARKER,
    content_lines,
    extract_column_values,
    parse_columns,
    parse_header,
    parse_rows,
)
from ._json import format_json_column, format_json_row

__all__ = [
    "ANNOTATION_MARKER",
    "VALID_FORMATS",
    "content_lines",
    "extract_column_values",
    "format_query_result",
    "parse_columns",
    "parse_header",
    "parse_rows",
]

_LOGGER = logging.getLogger(__name__)

VALID_FORMATS = {"json-row", "json-column", "csv"}
"""set[str]: Output formats accepted by `format_query_result`."""


def format_query_result(text: str, format_type: str = "json-row") -> tuple[str, object]:
    """
    Format an annotated CSV query response.

    Args:
        text (str): Annotated CSV response body.
        format_type (str): One of `VALID_FORMATS`.

    Returns:
        tuple[str, object]: The format used and the formatted data.

    Raises:
        ValueError: If ``format_type`` is not a valid format.
        TypeError: If ``text`` is not a string.
    """
    if format_type not in VALID_FORMATS:
        raise ValueError(
            f"Invalid format '{format_type}'. Valid formats: {', '.join(sorted(VALID_FORMATS))}"
        )

    _LOGGER.debug(f"[formatters:format_query_result] Formatting as {format_type}")
    if format_type == "json-row":
        return format_type, format_json_row(text)
    if format_type == "json-column":
        return format_type, format_json_column(text)
    if not isinstance(text, str):
        raise TypeError(
            f"format_query_result expects the response body as str, got {type(text).__name__}"
        )
    return format_type, text
