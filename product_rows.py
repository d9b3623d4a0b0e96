"""Turn flat catalog export rows into product records.

`parse_product_row` is the pure mapping from one row's scalar fields to a
`Product`. It never rejects input: data-quality decisions (blank ids, units
that are not integers) belong to `row_to_product`, which the loader uses when
walking a pandas frame.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional, Tuple

import pandas as pd

from catalog_models import Money, Product

logger = logging.getLogger(__name__)

CATEGORY_SEPARATOR = ","

REQUIRED_COLUMNS = {
    "id",
    "name",
    "description",
    "picture",
    "currency_code",
    "categories",
    "units",
    "nanos",
}


def split_categories(value: str) -> Tuple[str, ...]:
    # "" must give () rather than ("",); other segments are kept verbatim.
    if not value:
        return ()
    return tuple(value.split(CATEGORY_SEPARATOR))


def parse_product_row(
    product_id: str,
    name: str,
    description: str,
    picture: str,
    currency_code: str,
    categories: str,
    units: int,
    nanos: int,
) -> Product:
    return Product(
        id=product_id,
        name=name,
        description=description,
        picture=picture,
        price_usd=Money(currency_code=currency_code, units=units, nanos=nanos),
        categories=split_categories(categories),
    )


def _is_missing(value: Any) -> bool:
    return value is None or (isinstance(value, float) and pd.isna(value))


def _text(value: Any) -> str:
    if _is_missing(value):
        return ""
    return str(value)


def _safe_int(value: Any) -> int | None:
    if _is_missing(value):
        return 0
    value_str = str(value).strip()
    if not value_str:
        return 0
    try:
        return int(value_str)
    except ValueError:
        return None


def row_to_product(row: pd.Series) -> Optional[Product]:
    """Build a product from one export row, or None when the row is unusable."""

    product_id = _text(row.get("id"))
    if not product_id.strip():
        logger.debug("Skipping row without product id: %s", dict(row))
        return None

    units = _safe_int(row.get("units"))
    nanos = _safe_int(row.get("nanos"))
    if units is None or nanos is None:
        logger.warning(
            "Skipping product %s: non-integer price (units=%r nanos=%r)",
            product_id,
            row.get("units"),
            row.get("nanos"),
        )
        return None

    return parse_product_row(
        product_id=product_id,
        name=_text(row.get("name")),
        description=_text(row.get("description")),
        picture=_text(row.get("picture")),
        currency_code=_text(row.get("currency_code")),
        categories=_text(row.get("categories")),
        units=units,
        nanos=nanos,
    )


def load_catalog_csv(path: Path, delimiter: str = ",") -> pd.DataFrame:
    df = pd.read_csv(path, sep=delimiter, dtype=str, keep_default_na=False)
    missing = REQUIRED_COLUMNS - set(df.columns)
    if missing:
        raise ValueError(f"CSV is missing required columns: {', '.join(sorted(missing))}")
    return df
