"""
Output formatters for column metadata.
Supports Markdown, JSON, CSV, and console table formats.
"""

import csv
import io
import json

from colmeta.core.columns import ColumnFetchResult

FIELDNAMES = [
    "columnName", "dataType", "dataLength", "dataPrecision", "dataScale",
    "nullable", "primaryKey", "supported", "dataClass", "preserveCase",
    "valueExpression",
]


def format_markdown(result: ColumnFetchResult) -> str:
    """
    Format columns as a Markdown table.

    Args:
        result: ColumnFetchResult to format

    Returns:
        Markdown formatted string
    """
    lines = []
    lines.append(f"# Columns: {result.schema}.{result.table}")
    lines.append("")
    lines.append(f"**Column count:** {len(result.columns)}")
    if result.error is not None:
        lines.append(f"**Error:** {result.error}")
    lines.append("")

    lines.append("| " + " | ".join(FIELDNAMES) + " |")
    lines.append("| " + " | ".join(["---"] * len(FIELDNAMES)) + " |")

    for col in result.columns:
        data = col.to_dict()
        row = []
        for name in FIELDNAMES:
            value = data[name]
            if isinstance(value, bool):
                value = "1" if value else "0"
            row.append(str(value).replace("|", "\\|"))
        lines.append("| " + " | ".join(row) + " |")

    return "\n".join(lines)


def format_json(result: ColumnFetchResult, pretty: bool = True) -> str:
    """
    Format columns as a JSON array of column objects.

    Args:
        result: ColumnFetchResult to format
        pretty: If True, format with indentation

    Returns:
        JSON formatted string
    """
    data = result.to_dicts()

    if pretty:
        return json.dumps(data, indent=2, ensure_ascii=False)
    return json.dumps(data, ensure_ascii=False)


def format_csv(result: ColumnFetchResult) -> str:
    """
    Format columns as CSV.

    Args:
        result: ColumnFetchResult to format

    Returns:
        CSV formatted string
    """
    output = io.StringIO()

    writer = csv.DictWriter(output, fieldnames=["schema", "table"] + FIELDNAMES)
    writer.writeheader()

    for col in result.columns:
        row = {"schema": result.schema, "table": result.table}
        row.update({name: value for name, value in col.to_dict().items() if name in FIELDNAMES})
        writer.writerow(row)

    return output.getvalue()


def format_table(result: ColumnFetchResult) -> str:
    """
    Format columns as pretty-printed console table.

    Args:
        result: ColumnFetchResult to format

    Returns:
        Formatted table string for console output
    """
    lines = []
    lines.append(f"\n{'='*80}")
    lines.append(f"  Columns: {result.schema}.{result.table}")
    lines.append(f"  Column count: {len(result.columns)}")
    if result.error is not None:
        lines.append(f"  Error: {result.error}")
    lines.append(f"{'='*80}\n")

    header = f"{'Column':<24} {'Type':<16} {'Class':<8} {'Null':<5} {'PK':<4} {'Supported':<10}"
    lines.append(header)
    lines.append("-" * len(header))

    for col in result.columns:
        nullable = "Yes" if col.nullable else "No"
        pk = "Yes" if col.primary_key else "No"
        supported = "Yes" if col.supported else "No"

        row = (f"{col.column_name:<24} {col.data_type:<16} {col.data_class.value:<8} "
               f"{nullable:<5} {pk:<4} {supported:<10}")
        lines.append(row)

    if result.columns:
        lines.append(f"\n{'Value Expressions':-^80}")
        for col in result.columns:
            lines.append(f"{col.column_name:<24} {col.value_expression}")

    lines.append("")
    return "\n".join(lines)


def format_columns(
    result: ColumnFetchResult,
    format_type: str = "table"
) -> str:
    """
    Format columns using specified format type.

    Args:
        result: ColumnFetchResult to format
        format_type: One of 'table', 'markdown', 'json', 'csv'

    Returns:
        Formatted string
    """
    formatters = {
        "table": format_table,
        "markdown": format_markdown,
        "json": format_json,
        "csv": format_csv,
    }

    formatter = formatters.get(format_type.lower())
    if not formatter:
        raise ValueError(f"Unknown format type: {format_type}. Valid options: {list(formatters.keys())}")

    return formatter(result)
