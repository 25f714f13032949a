"""Contribution history import and summarization.

Turns a history of past contributions into the two projection inputs a
user rarely knows offhand: the current invested balance and the average
monthly contribution.

The CSV parser accepts flexible column names so exports from different
brokers and budgeting apps can be used as-is:

- Generic: date, amount
- Brokerage: Trade Date, Net Amount
- Brazilian apps: data, valor_aporte (with ``decimal_comma=True``)

"""

from __future__ import annotations

import csv
import io
import logging
from pathlib import Path
from typing import Any

import pandas as pd

logger = logging.getLogger(__name__)

_COLUMN_ALIASES: dict[str, list[str]] = {
    "date": ["date", "trade date", "transaction date", "settlement date", "data"],
    "amount": [
        "amount",
        "net amount",
        "contribution",
        "value",
        "valor_aporte",
        "valor",
        "aporte",
    ],
}


def _map_columns(raw_headers: list[str]) -> dict[str, int]:
    """Map raw CSV headers to the canonical date and amount columns.

    Raises:
        ValueError: If either column cannot be found.

    """
    normalized = [h.strip().lower() for h in raw_headers]
    mapping: dict[str, int] = {}

    for canonical, aliases in _COLUMN_ALIASES.items():
        for alias in aliases:
            if alias in normalized:
                mapping[canonical] = normalized.index(alias)
                break

    missing = {"date", "amount"} - set(mapping.keys())
    if missing:
        msg = f"Required columns not found: {sorted(missing)}. Available: {raw_headers}"
        raise ValueError(msg)

    return mapping


def _parse_amount(value: str, decimal_comma: bool = False) -> float | None:
    """Parse a currency string, returning None when it is not a number.

    With ``decimal_comma`` dots are thousands separators and the comma is
    the decimal mark ("1.234,56" -> 1234.56).
    """
    cleaned = value.strip().replace("R$", "").replace("$", "").replace(" ", "")
    if not cleaned:
        return None
    if decimal_comma:
        cleaned = cleaned.replace(".", "").replace(",", ".")
    else:
        cleaned = cleaned.replace(",", "")
    cleaned = cleaned.replace("(", "-").replace(")", "")
    try:
        return float(cleaned)
    except ValueError:
        return None


def parse_contributions_csv(
    file_path: str | Path | None = None,
    csv_content: str | None = None,
    decimal_comma: bool = False,
) -> list[dict[str, Any]]:
    """Parse a CSV file or string into contribution records.

    Provide either file_path or csv_content, not both. Rows without a
    date or with an unparseable amount are skipped.

    Args:
        file_path: Path to the CSV file.
        csv_content: Raw CSV content as a string.
        decimal_comma: Amounts use a decimal comma ("1.234,56").

    Returns:
        List of dicts with keys: date (as written), amount.

    Raises:
        ValueError: If neither file_path nor csv_content is provided,
            or if required columns are missing.

    """
    if file_path is None and csv_content is None:
        msg = "Provide either file_path or csv_content"
        raise ValueError(msg)

    if file_path is not None:
        text = Path(file_path).read_text(encoding="utf-8")
    else:
        text = csv_content  # type: ignore[assignment]

    reader = csv.reader(io.StringIO(text))
    header = next(reader, None)
    if header is None:
        msg = "CSV content is empty"
        raise ValueError(msg)
    col_map = _map_columns(header)
    width = max(col_map.values()) + 1

    records: list[dict[str, Any]] = []
    skipped = 0
    for row in reader:
        if not any(cell.strip() for cell in row):
            continue
        if len(row) < width:
            skipped += 1
            continue
        date_str = row[col_map["date"]].strip()
        amount = _parse_amount(row[col_map["amount"]], decimal_comma=decimal_comma)
        if not date_str or amount is None:
            skipped += 1
            continue
        records.append({"date": date_str, "amount": amount})

    if skipped:
        logger.warning("Skipped %d contribution rows without date or amount", skipped)

    logger.info("Parsed %d contributions from CSV", len(records))
    return records


def summarize_contributions(records: list[dict[str, Any]]) -> dict[str, Any]:
    """Derive projection inputs from a contribution history.

    The current balance is the sum of all contributions. The average
    monthly contribution divides that total by the number of distinct
    calendar months that had at least one contribution, so months with
    no activity do not drag the average down.

    Args:
        records: List of dicts with keys: date (ISO string), amount.

    Returns:
        Dict with keys: initial_amount, monthly_contribution_average,
        months_observed, first_month, last_month. Months are "YYYY-MM"
        strings, None for an empty history.

    Raises:
        ValueError: If a date cannot be parsed.

    """
    if not records:
        return {
            "initial_amount": 0.0,
            "monthly_contribution_average": 0.0,
            "months_observed": 0,
            "first_month": None,
            "last_month": None,
        }

    df = pd.DataFrame(records, columns=["date", "amount"])
    try:
        df["date"] = pd.to_datetime(df["date"], format="ISO8601")
    except (ValueError, TypeError) as exc:
        msg = f"Contribution dates must be ISO formatted: {exc}"
        raise ValueError(msg) from exc
    df["amount"] = df["amount"].astype(float)

    by_month = df.groupby(df["date"].dt.to_period("M"))["amount"].sum()
    total = float(df["amount"].sum())
    months_observed = int(len(by_month))

    return {
        "initial_amount": total,
        "monthly_contribution_average": total / months_observed,
        "months_observed": months_observed,
        "first_month": str(by_month.index.min()),
        "last_month": str(by_month.index.max()),
    }
