# app/main.py
import logging
from typing import Callable, Optional

import requests
import uvicorn
from fastapi import Depends, FastAPI, Query, Request, Response
from fastapi.responses import JSONResponse

from . import config
from .search import ProductsNotFound, SearchValidationError, unified_search
from .schemas import (ErrorResponse, InternalErrorResponse, NotFoundResponse,
                      SearchResponse)

logging.basicConfig(level=config.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

app = FastAPI(title="Spreadsheet Product Search")

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

NOT_FOUND = NotFoundResponse(
    message="Produto não encontrado",
    sugestao="Verifique a grafia ou tente termos mais genéricos",
)


@app.middleware("http")
async def cors_headers(request: Request, call_next):
    # every response carries the headers; any OPTIONS is answered with an empty 200
    if request.method == "OPTIONS":
        response = Response(status_code=200)
    else:
        response = await call_next(request)
    response.headers.update(CORS_HEADERS)
    return response


def get_settings() -> config.SearchSettings:
    return config.default_settings()


def get_session_factory() -> Callable[[], requests.Session]:
    return requests.Session


@app.get("/health")
def health():
    return {"status": "ok"}


@app.api_route("/api/produtos", methods=["GET", "POST"], response_model=SearchResponse,
               responses={400: {"model": ErrorResponse},
                          404: {"model": NotFoundResponse},
                          500: {"model": InternalErrorResponse}})
def produtos(produto: Optional[str] = Query(None),
             categoria: Optional[str] = Query(None),
             settings: config.SearchSettings = Depends(get_settings),
             session_factory: Callable[[], requests.Session] = Depends(get_session_factory)):
    try:
        result = unified_search(produto, categoria, settings=settings, session_factory=session_factory)
    except SearchValidationError as e:
        return JSONResponse(status_code=400, content=ErrorResponse(error=str(e)).model_dump())
    except ProductsNotFound:
        logger.debug("No products for %r (categoria=%r)", produto, categoria)
        return JSONResponse(status_code=404, content=NOT_FOUND.model_dump())
    except Exception as e:
        logger.exception("Search failed for %r", produto)
        body = InternalErrorResponse(error="Erro interno do servidor", details=str(e))
        return JSONResponse(status_code=500, content=body.model_dump())

    return SearchResponse(total=result.total, produtos=result.products)


if __name__ == "__main__":
    uvicorn.run("app.main:app", host="127.0.0.1", port=8000, reload=True)
