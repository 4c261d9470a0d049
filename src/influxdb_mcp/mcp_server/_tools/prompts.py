"""
Guidance MCP Prompts.

Provides MCP prompts that teach an agent the two InfluxDB text formats it works with:
- flux-query-examples: Common Flux query patterns
- line-protocol-guide: Line protocol syntax for write-data
"""

from influxdb_mcp.mcp_server._tools.mcp_server import mcp_server

FLUX_QUERY_EXAMPLES = """\
Here are some example Flux queries for InfluxDB:

1. Get data from the last 5 minutes:
```flux
from(bucket: "my-bucket")
  |> range(start: -5m)
  |> filter(fn: (r) => r._measurement == "cpu_usage")
```

2. Calculate the average value over time windows:
```flux
from(bucket: "my-bucket")
  |> range(start: -1h)
  |> filter(fn: (r) => r._measurement == "temperature")
  |> aggregateWindow(every: 5m, fn: mean, createEmpty: false)
```

3. Find the maximum value per series:
```flux
from(bucket: "my-bucket")
  |> range(start: -24h)
  |> filter(fn: (r) => r._measurement == "cpu_usage" and r._field == "value")
  |> max()
```

4. Group by a tag and calculate the sum:
```flux
from(bucket: "my-bucket")
  |> range(start: -1h)
  |> filter(fn: (r) => r._measurement == "requests")
  |> group(columns: ["host"])
  |> sum()
```

5. List the measurements and field keys of a bucket:
```flux
import "influxdata/influxdb/schema"

schema.measurements(bucket: "my-bucket")
```
```flux
import "influxdata/influxdb/schema"

schema.fieldKeys(bucket: "my-bucket", predicate: (r) => r._measurement == "cpu_usage")
```

6. Join two series on time:
```flux
cpu = from(bucket: "my-bucket")
  |> range(start: -1h)
  |> filter(fn: (r) => r._measurement == "cpu_usage")

mem = from(bucket: "my-bucket")
  |> range(start: -1h)
  |> filter(fn: (r) => r._measurement == "memory_usage")

join(tables: {cpu: cpu, mem: mem}, on: ["_time", "host"])
```

Run these with the query-data tool. Results come back as rows keyed by column name; the
`_time`, `_measurement`, `_field` and `_value` columns carry the point data.
"""

LINE_PROTOCOL_GUIDE = """\
# InfluxDB Line Protocol Guide

Line protocol is the text format the write-data tool sends to InfluxDB. Each line is one
data point:

```
<measurement>[,<tag_key>=<tag_value>...] <field_key>=<field_value>[,<field_key>=<field_value>...] [<timestamp>]
```

## Components

- **Measurement**: name of the measurement (required).
- **Tag set**: comma-separated key=value pairs, indexed, string values only (optional).
- **Field set**: comma-separated key=value pairs, not indexed (at least one required).
- **Timestamp**: Unix time; nanoseconds unless the write precision says otherwise (optional,
  the server time is used when omitted).

## Field value types

- Float: `value=12.5`
- Integer: `count=42i`
- Unsigned integer: `count=42u`
- String: `message="hello world"`
- Boolean: `active=true` (also `t`, `T`, `True`, `TRUE`, `f`, `false`, ...)

## Examples

```
cpu,host=server01,region=us-west usage_idle=92.6,usage_user=3.1 1630000000000000000
temperature,location=kitchen value=21.5
http_requests,method=GET,status=200 count=15i,latency_ms=12.7
events,source=app message="user logged in",success=true
```

## Escaping

- In measurements: escape commas and spaces with a backslash (`\\,` and `\\ `).
- In tag keys, tag values and field keys: escape commas, equals signs and spaces.
- In string field values: escape double quotes and backslashes.

## Tips

- Send many points at once by separating lines with newlines.
- Keep the number of distinct tag values (series cardinality) bounded.
- Pass precision "s", "ms", "us" or "ns" to write-data to match your timestamps.
"""


@mcp_server.prompt(
    name="flux-query-examples",
    description="Example Flux queries for common InfluxDB tasks.",
)
def flux_query_examples() -> str:
    """MCP Prompt: Example Flux queries."""
    return FLUX_QUERY_EXAMPLES


@mcp_server.prompt(
    name="line-protocol-guide",
    description="Reference for the InfluxDB line protocol used by write-data.",
)
def line_protocol_guide() -> str:
    """MCP Prompt: Line protocol reference."""
    return LINE_PROTOCOL_GUIDE
