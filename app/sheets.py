# app/sheets.py
"""
Read one category (spreadsheet tab) through its CSV export and keep the rows
whose product name matches the search term.
"""
import logging
from dataclasses import dataclass, field
from typing import List, Optional
from urllib.parse import quote

import requests

from .config import SearchSettings
from .matching import contains
from .schemas import Product

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CategoryResult:
    category: str
    products: List[Product] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


# ---------- CSV helpers ----------

def parse_csv_line(line: str) -> List[str]:
    """
    Split one CSV line on commas that sit outside double quotes.
    Quotes only toggle state (no "" escaping); each field is trimmed.
    """
    fields = []
    current = []
    in_quotes = False

    for ch in line:
        if ch == '"':
            in_quotes = not in_quotes
        elif ch == "," and not in_quotes:
            fields.append("".join(current).strip())
            current = []
        else:
            current.append(ch)

    fields.append("".join(current).strip())
    return fields


def _clean_cell(value: str) -> str:
    return value.replace('"', "").strip()


def parse_category_csv(csv_text: str, category: str, term: str,
                       settings: SearchSettings) -> List[Product]:
    """
    Turn a category export into matching products. Columns are positional:
    NAME, CATEGORY, PRICE. The header row is skipped without validation.
    """
    lines = csv_text.split("\n")
    if len(lines) < 2:
        return []

    products = []
    for line in lines[1:]:
        if not line.strip():
            continue
        cols = parse_csv_line(line)
        if len(cols) < 3:
            continue

        name = _clean_cell(cols[0])
        price = _clean_cell(cols[2])
        if not name or not contains(name, term):
            continue

        products.append(Product(
            name=name,
            # the tab we read from, not the row's own category column
            category=category,
            price=price or settings.price_fallback,
            stock=settings.stock_label,
            brand="",
            description="",
        ))
    return products


# ---------- Upstream ----------

def build_export_url(settings: SearchSettings, category: str) -> str:
    return (f"{settings.export_base}/{settings.sheet_id}/gviz/tq"
            f"?tqx=out:csv&sheet={quote(category)}")


def fetch_category(term: str, category: str, settings: SearchSettings,
                   session: requests.Session) -> CategoryResult:
    """
    Never raises: a failing tab becomes a CategoryResult carrying the reason.
    """
    url = build_export_url(settings, category)
    try:
        resp = session.get(url, timeout=settings.fetch_timeout)
        if not resp.ok:
            logger.warning("Category %s unavailable: HTTP %s", category, resp.status_code)
            return CategoryResult(category, error=f"HTTP {resp.status_code}")

        products = parse_category_csv(resp.text, category, term, settings)
    except requests.RequestException as e:
        logger.warning("Category %s fetch failed: %s", category, e)
        return CategoryResult(category, error=str(e) or e.__class__.__name__)
    except Exception as e:
        logger.exception("Category %s could not be read", category)
        return CategoryResult(category, error=str(e) or e.__class__.__name__)

    logger.debug("Category %s: %d matching rows", category, len(products))
    return CategoryResult(category, products=products)
