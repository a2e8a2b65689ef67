# app/search.py
import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from contextlib import closing
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence

import requests

from .config import SearchSettings, default_settings
from .matching import similarity
from .schemas import Product
from .sheets import CategoryResult, fetch_category

logger = logging.getLogger(__name__)


class SearchValidationError(ValueError):
    """Search term missing or empty."""


class ProductsNotFound(LookupError):
    """No category produced a single match."""

    def __init__(self, term: str, failures: Sequence[CategoryResult] = ()):
        super().__init__(f"no products match {term!r}")
        self.term = term
        self.failures = list(failures)


@dataclass(frozen=True)
class SearchResult:
    total: int
    products: List[Product]
    # categories that could not be read; logged, never sent to the client
    failures: List[CategoryResult] = field(default_factory=list)


# ---------- Helpers ----------

def resolve_categories(category: Optional[str], settings: SearchSettings) -> List[str]:
    """
    A known category narrows the search; anything else means all of them.
    """
    if category and category in settings.categories:
        return [category]
    return list(settings.categories)


def fetch_all(term: str, categories: Sequence[str], settings: SearchSettings,
              session_factory: Callable[[], requests.Session]) -> List[CategoryResult]:
    """
    Fetch categories in parallel. Results come back in `categories` order
    whatever the completion order. Each worker thread uses its own session.
    """
    workers = max(1, min(settings.fetch_workers, len(categories)))
    if workers == 1:
        with closing(session_factory()) as session:
            return [fetch_category(term, c, settings, session) for c in categories]

    local = threading.local()
    opened = []

    def fetch(category):
        session = getattr(local, "session", None)
        if session is None:
            session = local.session = session_factory()
            opened.append(session)
        return fetch_category(term, category, settings, session)

    try:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            return list(pool.map(fetch, categories))
    finally:
        for session in opened:
            session.close()


def rank_products(term: str, products: Sequence[Product]) -> List[Product]:
    # sorted() is stable: equal scores keep discovery order
    needle = term.lower()
    return sorted(products, key=lambda p: similarity(needle, p.name.lower()), reverse=True)


# ---------- Orchestration ----------

def unified_search(term: Optional[str],
                   category: Optional[str] = None,
                   settings: Optional[SearchSettings] = None,
                   session_factory: Callable[[], requests.Session] = requests.Session) -> SearchResult:
    """
    Master orchestration routine:
     1) validate the term
     2) pick one category or all of them
     3) fetch + filter every category, dropping the ones that failed
     4) rank by similarity to the term
     5) keep the top `max_results`, remembering the full count
    """
    if not term:
        raise SearchValidationError('Parâmetro "produto" é obrigatório')

    settings = settings or default_settings()
    categories = resolve_categories(category, settings)
    results = fetch_all(term, categories, settings, session_factory)

    failures = [r for r in results if not r.ok]
    if failures:
        logger.info("Search %r skipped %d/%d categories: %s", term, len(failures), len(results),
                    ", ".join(f"{f.category} ({f.error})" for f in failures))

    merged = [p for r in results if r.ok for p in r.products]
    if not merged:
        raise ProductsNotFound(term, failures)

    ranked = rank_products(term, merged)
    return SearchResult(total=len(merged), products=ranked[:settings.max_results], failures=failures)
