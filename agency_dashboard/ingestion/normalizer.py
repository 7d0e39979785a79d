"""
Sheet Row Normalization

Turns loosely typed spreadsheet rows into ``MetricRecordCreate`` values.
Handles:
- Header aliasing
- Currency symbol stripping
- Numeric coercion (missing, unparseable or non-finite values become 0)
- Clipping negative revenue, cost and orders to 0
- Multi-format date parsing
- Deriving profit and ROI when their columns are absent
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Set, Tuple

import polars as pl
import structlog

from agency_dashboard.core.models import MetricRecordCreate

logger = structlog.get_logger(__name__)

# Normalised header (lowercase, underscores as spaces) -> field name
COLUMN_MAP = {
    "date": "date",
    "day": "date",
    "shop id": "shop_id",
    "shopid": "shop_id",
    "store id": "shop_id",
    "revenue": "revenue",
    "sales": "revenue",
    "gmv": "revenue",
    "orders": "orders",
    "order count": "orders",
    "orders count": "orders",
    "total purchase": "cost",
    "totalpurchase": "cost",
    "cost": "cost",
    "costs": "cost",
    "cogs": "cost",
    "profit": "profit",
    "net profit": "profit",
    "roi": "roi",
    "roi %": "roi",
    "roi (%)": "roi",
}

FIELDS = ["date", "shop_id", "revenue", "orders", "cost", "profit", "roi"]
NUMERIC_FIELDS = ["shop_id", "revenue", "orders", "cost", "profit", "roi"]

DATE_FORMATS = ["%m/%d/%Y", "%d.%m.%Y", "%b %d, %Y", "%d %b %Y"]


@dataclass
class NormalizationResult:
    """Normalised records plus bookkeeping about rejected rows"""
    records: List[MetricRecordCreate] = field(default_factory=list)
    total_rows: int = 0
    dropped_rows: int = 0


def canonical_header(header: Any) -> Optional[str]:
    """Map a raw header to a field name, ``None`` when unknown"""
    key = " ".join(str(header).replace("_", " ").strip().lower().split())
    return COLUMN_MAP.get(key)


def _to_frame(rows: List[Mapping[str, Any]]) -> Tuple[pl.DataFrame, Set[str]]:
    """Build an all-string frame of the known fields and the set of fields present"""
    columns: Dict[str, List[Optional[str]]] = {name: [] for name in FIELDS}
    present = set()

    for row in rows:
        mapped: Dict[str, Any] = {}
        for header, value in row.items():
            name = canonical_header(header)
            if name is not None and name not in mapped:
                mapped[name] = value
        present.update(mapped)
        for name in FIELDS:
            value = mapped.get(name)
            columns[name].append(None if value is None or str(value).strip() == "" else str(value).strip())

    frame = pl.DataFrame(columns, schema={name: pl.Utf8 for name in FIELDS})
    return frame, present


def _numeric(column: str) -> pl.Expr:
    """Strip currency/percent symbols and coerce to float; unparseable, NaN and infinite values become 0"""
    value = (
        pl.col(column)
        .str.replace_all(r"[$€£¥₽,%\s]", "")
        .cast(pl.Float64, strict=False)
    )
    return pl.when(value.is_finite()).then(value).otherwise(0.0).alias(column)


def _parsed_date() -> pl.Expr:
    """First format that parses wins; ISO strings may carry a time suffix"""
    candidates = [
        pl.col("date").str.slice(0, 10).str.strptime(pl.Date, "%Y-%m-%d", strict=False)
    ]
    candidates.extend(
        pl.col("date").str.strptime(pl.Date, fmt, strict=False) for fmt in DATE_FORMATS
    )
    return pl.coalesce(candidates).alias("date")


def normalize_rows(
    rows: Iterable[Mapping[str, Any]],
    shop_id: Optional[int] = None,
) -> NormalizationResult:
    """
    Normalise raw sheet rows into metric records.

    Args:
        rows: Row mappings keyed by sheet header
        shop_id: Owner for every row; when omitted a shop id column is required

    Returns:
        NormalizationResult with the records and the number of rows dropped
        for lacking a parseable date or owning shop
    """
    row_list = list(rows)
    if not row_list:
        return NormalizationResult()

    df, present = _to_frame(row_list)

    df = df.with_columns([_numeric(name) for name in NUMERIC_FIELDS] + [_parsed_date()])

    if shop_id is not None:
        df = df.with_columns(pl.lit(shop_id, dtype=pl.Int64).alias("shop_id"))
    else:
        df = df.with_columns(pl.col("shop_id").round(0).cast(pl.Int64))

    df = df.with_columns(
        pl.col("orders").round(0).cast(pl.Int64).clip(lower_bound=0),
        pl.col("revenue").clip(lower_bound=0.0),
        pl.col("cost").clip(lower_bound=0.0),
    )

    if "profit" not in present:
        df = df.with_columns((pl.col("revenue") - pl.col("cost")).alias("profit"))
    if "roi" not in present:
        df = df.with_columns(
            pl.when(pl.col("cost") != 0)
            .then(pl.col("profit") / pl.col("cost") * 100)
            .otherwise(0.0)
            .alias("roi")
        )

    valid = df.filter(pl.col("date").is_not_null() & (pl.col("shop_id") > 0))
    dropped = df.height - valid.height

    if dropped:
        logger.warning("Dropped unusable sheet rows", dropped=dropped, total=df.height)

    records = [
        MetricRecordCreate(
            shop_id=row["shop_id"],
            date=row["date"],
            revenue=row["revenue"],
            orders=row["orders"],
            cost=row["cost"],
            profit=row["profit"],
            roi=row["roi"],
        )
        for row in valid.select(FIELDS).iter_rows(named=True)
    ]

    return NormalizationResult(records=records, total_rows=df.height, dropped_rows=dropped)
