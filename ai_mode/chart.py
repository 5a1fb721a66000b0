"""
AI Mode: visualization metadata for query results.

Picks how a result set should be displayed from its shape and column types:
  kpi   - a single value (1 row x 1 column)
  line  - a date-like column plus numeric columns
  pie   - one label column and one numeric column, few rows
  bar   - one label column and numeric columns
  table - anything else
The oracle may suggest a type; the suggestion is used when it fits the data.
"""

import re
from typing import Dict, Optional

import pandas as pd

from ai_mode.schema import QueryMetadata

VISUALIZATION_TYPES = frozenset({"kpi", "table", "bar", "pie", "line", "area"})

PIE_MAX_SLICES = 6

_ISO_DATE = re.compile(r"^\d{4}-\d{2}(-\d{2})?")


def _column_type(series: pd.Series) -> str:
    if pd.api.types.is_bool_dtype(series):
        return "boolean"
    if pd.api.types.is_numeric_dtype(series):
        return "number"
    if pd.api.types.is_datetime64_any_dtype(series):
        return "date"
    sample = series.dropna()
    if not sample.empty and isinstance(sample.iloc[0], str) and _ISO_DATE.match(sample.iloc[0]):
        return "date"
    return "string"


def infer_column_types(df: pd.DataFrame) -> Dict[str, str]:
    return {str(col): _column_type(df[col]) for col in df.columns}


def choose_visualization(df: pd.DataFrame, column_types: Dict[str, str], suggested: Optional[str] = None) -> str:
    rows, cols = df.shape
    numeric = [c for c, t in column_types.items() if t == "number"]
    dates = [c for c, t in column_types.items() if t == "date"]
    labels = [c for c, t in column_types.items() if t == "string"]

    if rows == 1 and cols == 1:
        natural = "kpi"
    elif cols >= 2 and dates and numeric and len(dates) + len(numeric) == cols:
        natural = "line"
    elif cols == 2 and len(labels) == 1 and len(numeric) == 1 and 0 < rows <= PIE_MAX_SLICES:
        natural = "pie"
    elif cols >= 2 and len(labels) == 1 and numeric and len(labels) + len(numeric) == cols:
        natural = "bar"
    else:
        natural = "table"

    if suggested in VISUALIZATION_TYPES:
        if suggested == "table":
            return "table"
        if suggested == "kpi" and natural == "kpi":
            return "kpi"
        # chart suggestions need a label/date column and a numeric column
        if suggested in ("bar", "pie", "line", "area") and natural in ("bar", "pie", "line"):
            return suggested
    return natural


def build_metadata(df: pd.DataFrame, suggested: Optional[str] = None) -> QueryMetadata:
    column_types = infer_column_types(df)
    return QueryMetadata(
        visualization_type=choose_visualization(df, column_types, suggested),
        columns=[str(c) for c in df.columns],
        column_types=column_types,
        row_count=len(df),
        column_count=len(df.columns),
    )
