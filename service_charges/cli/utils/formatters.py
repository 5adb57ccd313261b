"""Output formatting utilities for CLI."""

from typing import List

import click
import pandas as pd


def format_success(message: str) -> str:
    """Format a success message with green color."""
    return click.style(f"✓ {message}", fg="green", bold=True)


def format_error(message: str) -> str:
    """Format an error message with red color."""
    return click.style(f"✗ {message}", fg="red", bold=True)


def format_warning(message: str) -> str:
    """Format a warning message with yellow color."""
    return click.style(f"⚠ {message}", fg="yellow", bold=True)


def format_info(message: str) -> str:
    """Format an info message with blue color."""
    return click.style(f"ℹ {message}", fg="blue")


def format_table(headers: List[str], rows: List[List[str]], max_width: int = 80) -> str:
    """Format data as a table.

    Args:
        headers: List of column headers
        rows: List of data rows (each row is a list of cell values)
        max_width: Maximum width for each column (default: 80)

    Returns:
        Formatted table as a string
    """
    if not headers:
        return ""

    col_widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            if i < len(col_widths):
                col_widths[i] = max(col_widths[i], len(str(cell)))

    col_widths = [min(w, max_width) for w in col_widths]

    separator = "+" + "+".join("-" * (w + 2) for w in col_widths) + "+"

    def render(cells: List[str]) -> str:
        formatted = [
            f" {str(cell)[: col_widths[i]]:<{col_widths[i]}} "
            for i, cell in enumerate(cells)
            if i < len(col_widths)
        ]
        return "|" + "|".join(formatted) + "|"

    table_lines = [separator, render(headers), separator]
    if rows:
        table_lines.extend(render(row) for row in rows)
        table_lines.append(separator)

    return "\n".join(table_lines)


def format_dataframe(df: pd.DataFrame, max_width: int = 40) -> str:
    """Format a DataFrame as a table.

    Args:
        df: DataFrame to render; every cell is converted with str()
        max_width: Maximum width for each column (default: 40)

    Returns:
        Formatted table as a string
    """
    headers = [str(column) for column in df.columns]
    rows = [[str(cell) for cell in row] for row in df.itertuples(index=False)]
    return format_table(headers, rows, max_width=max_width)
