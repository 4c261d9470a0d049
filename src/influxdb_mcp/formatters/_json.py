"""JSON formatters for annotated CSV query results."""

from ._annotated_csv import ANNOTATION_MARKER, parse_columns, parse_rows


def format_json_row(text: str, marker: str = ANNOTATION_MARKER) -> list[dict]:
    """
    Format an annotated CSV payload as array of row objects.

    Args:
        text (str): Annotated CSV response body
        marker (str): Annotation marker character

    Returns:
        list[dict]: Array of objects, each representing a row.
                   Example: [{"_measurement": "cpu", "_value": "1"}, {"_measurement": "mem", "_value": "2"}]
    """
    return parse_rows(text, marker)


def format_json_column(text: str, marker: str = ANNOTATION_MARKER) -> dict:
    """
    Format an annotated CSV payload as column-oriented object.

    Columns missing from a short row are reported as None so every list has one entry per row.

    Args:
        text (str): Annotated CSV response body
        marker (str): Annotation marker character

    Returns:
        dict: Object with column names as keys, arrays as values.
             Example: {"_measurement": ["cpu", "mem"], "_value": ["1", "2"]}
    """
    columns = list(dict.fromkeys(parse_columns(text, marker)))
    rows = parse_rows(text, marker)
    return {name: [row.get(name) for row in rows] for name in columns}
