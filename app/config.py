# app/config.py
from dataclasses import dataclass
from os import getenv
from typing import Tuple

# Google spreadsheet holding the catalog; one tab per category
SHEET_ID = getenv("SHEET_ID", "1zlQvAqQjI7mjjiyGCyJwvT8RzW7aj6itwnY25ILcv9w")
SHEET_EXPORT_BASE = getenv("SHEET_EXPORT_BASE", "https://docs.google.com/spreadsheets/d")

# Tab names, verbatim (case matters upstream)
SHEET_CATEGORIES = tuple(
    c.strip()
    for c in getenv(
        "SHEET_CATEGORIES",
        "ACESSORIO,HIGIENE,INSUMO,PERFUMARIA,PISCINA,racao,REMEDIO,VENENO",
    ).split(",")
    if c.strip()
)

# Upstream fetch
FETCH_TIMEOUT = float(getenv("FETCH_TIMEOUT", "10"))
FETCH_WORKERS = int(getenv("FETCH_WORKERS", "8"))

# Defaults for the API
MAX_RESULTS = int(getenv("MAX_RESULTS", "10"))
PRICE_FALLBACK = getenv("PRICE_FALLBACK", "Consulte")
STOCK_LABEL = getenv("STOCK_LABEL", "Disponível")

LOG_LEVEL = getenv("LOG_LEVEL", "INFO")


@dataclass(frozen=True)
class SearchSettings:
    sheet_id: str = SHEET_ID
    categories: Tuple[str, ...] = SHEET_CATEGORIES
    export_base: str = SHEET_EXPORT_BASE
    fetch_timeout: float = FETCH_TIMEOUT
    fetch_workers: int = FETCH_WORKERS
    max_results: int = MAX_RESULTS
    price_fallback: str = PRICE_FALLBACK
    stock_label: str = STOCK_LABEL


def default_settings() -> SearchSettings:
    return SearchSettings()
