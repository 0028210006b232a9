"""CSV ingestion utilities for debt lists."""

from __future__ import annotations

from pathlib import Path

import pandas as pd

_HEADER_ALIASES = {
    "minpayment": "minimum_payment",
    "min_payment": "minimum_payment",
    "min payment": "minimum_payment",
    "minimum payment": "minimum_payment",
}


def normalize_frame(*, file_path: Path, encoding: str = "utf-8") -> pd.DataFrame:
    """Load a CSV file into a DataFrame with consistent column casing."""

    frame = pd.read_csv(file_path, encoding=encoding, dtype=str, keep_default_na=False)
    frame.columns = [_HEADER_ALIASES.get(c.strip().lower(), c.strip().lower()) for c in frame.columns]
    return frame


def load_debt_rows(file_path: Path | str, *, encoding: str = "utf-8") -> list[dict]:
    """Return raw debt rows (text values) ready for the normalizer.

    Rows are plain dictionaries; parsing and filtering happen in
    :mod:`payoffplanner.services.normalizer` so the same rules apply to form
    input and file input.
    """

    frame = normalize_frame(file_path=Path(file_path), encoding=encoding)
    rows: list[dict] = []
    for record in frame.to_dict(orient="records"):
        rows.append({key: ("" if value is None else value) for key, value in record.items()})
    return rows


__all__ = ["load_debt_rows", "normalize_frame"]
