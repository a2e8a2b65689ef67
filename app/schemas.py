# app/schemas.py
from typing import List
from pydantic import BaseModel, ConfigDict, Field

class Product(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str = Field(alias="nome")
    category: str = Field(alias="categoria")
    price: str = Field(alias="preco")
    stock: str = Field(alias="estoque")
    brand: str = Field("", alias="marca")
    description: str = Field("", alias="descricao")

class SearchResponse(BaseModel):
    total: int
    produtos: List[Product]

class ErrorResponse(BaseModel):
    error: str

class NotFoundResponse(BaseModel):
    message: str
    sugestao: str

class InternalErrorResponse(BaseModel):
    error: str
    details: str
