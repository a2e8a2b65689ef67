"""
Shared fixtures: an in-memory stand-in for the spreadsheet's CSV exports.
"""
import threading
from urllib.parse import parse_qs, urlparse

import pytest

from app.config import SearchSettings

CATEGORIES = ("ACESSORIO", "HIGIENE", "INSUMO", "PERFUMARIA", "PISCINA", "racao", "REMEDIO", "VENENO")
HEADER = "NOME,CATEGORIA,PRECO"


def csv_body(*rows):
    return "\n".join((HEADER,) + rows)


class FakeResponse:
    def __init__(self, status_code=200, text=""):
        self.status_code = status_code
        self.text = text

    @property
    def ok(self):
        return self.status_code < 400


class FakeSession:
    """
    Answers export URLs by their `sheet` parameter. A tab value may be a CSV
    string, a (status, body) tuple, or an exception to raise.
    """

    def __init__(self, tabs):
        self.tabs = dict(tabs)
        self.calls = []
        self.closed = False
        self._lock = threading.Lock()

    def get(self, url, timeout=None):
        sheet = parse_qs(urlparse(url).query)["sheet"][0]
        with self._lock:
            self.calls.append(sheet)
        entry = self.tabs.get(sheet)
        if entry is None:
            return FakeResponse(404, "")
        if isinstance(entry, Exception):
            raise entry
        if isinstance(entry, tuple):
            return FakeResponse(*entry)
        return FakeResponse(200, entry)

    def close(self):
        self.closed = True


CATALOG = {
    "ACESSORIO": csv_body(
        '"Coleira Azul",ACESSORIO,"R$ 25,00"',
        '"Coleira Vermelha",ACESSORIO,"R$ 27,50"',
        '"Comedouro Inox",ACESSORIO,"R$ 40,00"',
    ),
    "HIGIENE": csv_body(
        '"Shampoo Neutro",HIGIENE,"R$ 30,00"',
        "linha quebrada",
    ),
    "INSUMO": HEADER,
    "PERFUMARIA": csv_body('"Colônia Filhotes",PERFUMARIA,"R$ 35,00"'),
    "PISCINA": csv_body('"Cloro Granulado",PISCINA,"R$ 90,00"'),
    "racao": csv_body(
        '"Racao",racao,"R$ 50,00"',
        '"Ração Premium Cães",racao,"R$ 120,00"',
        '"Racao Gatos Castrados",racao,',
    ),
    "REMEDIO": csv_body('"Vermífugo Racao Mix",REMEDIO,"R$ 15,00"'),
    "VENENO": (500, "upstream error"),
}


@pytest.fixture
def settings():
    return SearchSettings(
        sheet_id="test-sheet",
        categories=CATEGORIES,
        export_base="https://docs.google.com/spreadsheets/d",
        fetch_timeout=5,
        fetch_workers=4,
        max_results=10,
        price_fallback="Consulte",
        stock_label="Disponível",
    )


@pytest.fixture
def session():
    return FakeSession(CATALOG)
