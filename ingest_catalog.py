"""Convert a catalog CSV export into the products.json document.

Reads the delimited export with pandas, turns every row into a `Product`,
drops unusable rows and repeated ids, and writes the `{"products": [...]}`
document the catalog service loads at startup.
"""
from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from catalog_models import Product
from product_rows import load_catalog_csv, row_to_product
from settings import configure_logging, get_settings

logger = logging.getLogger(__name__)


def build_catalog(
    file_path: Path,
    delimiter: Optional[str] = None,
) -> Tuple[List[Product], Dict[str, int]]:
    if not file_path.exists():
        raise FileNotFoundError(f"Input file not found: {file_path}")

    df = load_catalog_csv(file_path, delimiter or get_settings().csv.delimiter)

    products: List[Product] = []
    seen = set()
    stats = {"loaded": 0, "skipped": 0, "duplicates": 0}
    for _, row in df.iterrows():
        product = row_to_product(row)
        if product is None:
            stats["skipped"] += 1
            continue
        if product.id in seen:
            logger.warning("Duplicate product id %s, keeping the first occurrence", product.id)
            stats["duplicates"] += 1
            continue
        seen.add(product.id)
        products.append(product)
    stats["loaded"] = len(products)

    if not products:
        raise RuntimeError(f"No valid products were found in {file_path}")
    return products, stats


def export_catalog(products: List[Product], target: Path) -> Path:
    target.parent.mkdir(parents=True, exist_ok=True)
    with target.open("w", encoding="utf-8") as handle:
        json.dump(
            {"products": [product.to_dict() for product in products]},
            handle,
            ensure_ascii=False,
            indent=2,
        )
    return target


def ingest_catalog(
    file_path: Path,
    output_path: Path,
    delimiter: Optional[str] = None,
) -> Dict[str, int]:
    products, stats = build_catalog(file_path, delimiter=delimiter)
    export_catalog(products, output_path)
    logger.info(
        "Catalog written to %s (loaded=%s skipped=%s duplicates=%s)",
        output_path,
        stats["loaded"],
        stats["skipped"],
        stats["duplicates"],
    )
    return stats


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Build products.json from a catalog CSV export")
    parser.add_argument("--file", type=Path, help="Path to the catalog CSV export")
    parser.add_argument(
        "--output",
        type=Path,
        help="Where to write products.json (default from settings)",
    )
    parser.add_argument("--delimiter", type=str, help="Column delimiter of the export")
    parser.add_argument("--log-level", type=str, help="Override the configured log level")
    args = parser.parse_args(argv)

    configure_logging(level=args.log_level)
    settings = get_settings()
    file_path: Optional[Path] = args.file
    if file_path is None:
        if not settings.data_paths.catalog_export:
            parser.error("Set --file or data_paths.catalog_export in local_settings.json")
        file_path = Path(settings.data_paths.catalog_export)
    output_path: Path = args.output or Path(settings.data_paths.catalog_output)

    try:
        stats = ingest_catalog(file_path, output_path, delimiter=args.delimiter)
    except Exception as exc:
        logger.exception("Catalog ingestion failed")
        raise SystemExit(1) from exc

    logger.info(
        "Ingestion finished: loaded=%s skipped=%s duplicates=%s",
        stats["loaded"],
        stats["skipped"],
        stats["duplicates"],
    )


if __name__ == "__main__":
    main()
