"""Tests for formatters/_json.py - row and column oriented JSON formatting."""

from influxdb_mcp.formatters._json import format_json_column, format_json_row

SAMPLE = (
    "#datatype,string,long,dateTime:RFC3339,double,string\r\n"
    "#group,false,false,false,false,true\r\n"
    "#default,_result,,,,\r\n"
    ",result,table,_time,_value,_measurement\r\n"
    ",,0,2024-01-01T00:00:00Z,1.5,cpu\r\n"
    ",,0,2024-01-01T00:01:00Z,2.5,cpu\r\n"
    "\r\n"
)


def test_format_json_row_returns_row_objects():
    result = format_json_row(SAMPLE)

    assert len(result) == 2
    assert result[0] == {
        "": "",
        "result": "",
        "table": "0",
        "_time": "2024-01-01T00:00:00Z",
        "_value": "1.5",
        "_measurement": "cpu",
    }
    assert result[1]["_value"] == "2.5"


def test_format_json_row_empty():
    assert format_json_row("") == []


def test_format_json_column_returns_column_lists():
    result = format_json_column(SAMPLE)

    assert list(result) == ["", "result", "table", "_time", "_value", "_measurement"]
    assert result["_value"] == ["1.5", "2.5"]
    assert result["_measurement"] == ["cpu", "cpu"]


def test_format_json_column_pads_short_rows_with_none():
    result = format_json_column("a,b,c\n1,2,3\n4\n")

    assert result == {"a": ["1", "4"], "b": ["2", None], "c": ["3", None]}


def test_format_json_column_duplicate_header_listed_once():
    result = format_json_column("x,y,x\n1,2,3\n")

    assert result == {"x": ["3"], "y": ["2"]}


def test_format_json_column_header_only():
    assert format_json_column("a,b\n") == {"a": [], "b": []}


def test_format_json_column_empty():
    assert format_json_column("#datatype,string\n") == {}


def test_custom_marker():
    text = "%datatype,string\nname\nalpha\n"

    assert format_json_row(text, marker="%") == [{"name": "alpha"}]
    assert format_json_column(text, marker="%") == {"name": ["alpha"]}
