import json
import logging
from logging import Logger
from typing import Any

import numpy as np
import pandas as pd
from pandas import DataFrame as DF

logger = logging.getLogger(__name__)


def debug_df(df: DF, subset: list[str] = None, logger: Logger = logger) -> DF:
    """Log the frame and its column profile at debug level, then return it unchanged."""
    if not logger.isEnabledFor(logging.DEBUG):
        return df
    df_to_debug = df if subset is None else df[subset]
    logger.debug(f"{df_to_debug}")
    logger.debug(f"{sanity_check(df_to_debug)}")
    return df


def sanity_check(df: DF) -> DF:
    """One row per column: dtype, distinct values, density and numeric range."""
    return DF(
        {
            "dtypes": df.dtypes.astype("string"),
            "nuniques": df.nunique(),
            "count": df.count(),
            "density": df.count().div(len(df)) if len(df) else np.nan,
            "min": df.min(numeric_only=True),
            "max": df.max(numeric_only=True),
        },
        index=df.columns,
    )


def normalize_columns(df: DF, aliases: dict[str, str] | None = None) -> DF:
    """
    Lower-case and strip the column names, then rename them through `aliases`.
    Aliases are matched against the normalized names.
    """
    df = df.rename(columns=lambda col: str(col).strip().lower())
    if aliases:
        df = df.rename(columns=aliases)
    return df


def sample_records(df: DF, n: int = 5) -> list[dict[str, Any]]:
    """
    First `n` rows as JSON-safe records.
    Numpy scalars become python scalars and NaN becomes None.
    """
    if df.empty:
        return []
    return json.loads(df.head(n).to_json(orient="records", date_format="iso"))


def frame_to_markdown(df: DF, n: int = 10, float_format: str = "{:.2f}") -> str:
    """Render the first `n` rows as a github flavored markdown table."""
    head = df.head(n)
    columns = [str(col) for col in head.columns]

    def fmt(value) -> str:
        if value is None or (isinstance(value, float) and np.isnan(value)) or value is pd.NA:
            return ""
        if isinstance(value, (float, np.floating)):
            return float_format.format(value)
        return str(value)

    lines = [
        "| " + " | ".join(columns) + " |",
        "| " + " | ".join("---" for _ in columns) + " |",
    ]
    for row in head.itertuples(index=False):
        lines.append("| " + " | ".join(fmt(value) for value in row) + " |")
    return "\n".join(lines)


def left_merge_fill(lhs: DF, rhs: DF, on: str | list[str], fill: dict[str, Any]) -> DF:
    """Left merge `rhs` into `lhs` and fill the unmatched rows of the listed columns."""
    merged = lhs.merge(rhs, on=on, how="left")
    for col, value in fill.items():
        merged[col] = merged[col].fillna(value)
    return merged
