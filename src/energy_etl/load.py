import logging
from datetime import datetime, timezone
from logging import Logger
from pathlib import Path

from pandas import DataFrame as DF
from sqlalchemy import Table
from sqlalchemy.engine import Engine

LOGGER = logging.getLogger(__name__)


def load_frame(
    df: DF,
    table,
    engine: Engine,
    key_cols: list[str],
    logger: Logger = LOGGER,
) -> int:
    """
    Replace the contents of `table` with `df` in a single transaction.

    Only the table's columns are written, rows with a null key are dropped and
    `loaded_at` is stamped on every row. `table` is a Table or a mapped class.
    Returns the number of rows written.
    """
    table: Table = getattr(table, "__table__", table)
    columns = [column.name for column in table.columns]
    frame = df.reindex(columns=columns).dropna(subset=key_cols)
    if "loaded_at" in columns:
        frame["loaded_at"] = datetime.now(timezone.utc)

    with engine.begin() as conn:
        table.create(conn, checkfirst=True)
        deleted = conn.execute(table.delete()).rowcount
        frame.to_sql(table.name, conn, if_exists="append", index=False, chunksize=1000)

    logger.info(f"Loaded {len(frame)} rows into {table.name} (replaced {deleted})")
    return len(frame)


def export_csv(df: DF, path: str | Path, logger: Logger = LOGGER) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(path, index=False)
    logger.info(f"Exported {len(df)} rows to {path}")
    return path
