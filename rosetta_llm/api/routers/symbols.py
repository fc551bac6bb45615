"""Symbol table endpoints."""

from fastapi import APIRouter, HTTPException, Query

from rosetta_llm.api.models import CategoriesResponse, SymbolResponse
from rosetta_llm.services.rosetta.symbols import SYMBOLS, get_all_categories

router = APIRouter()


@router.get("/symbols", response_model=list[SymbolResponse])
async def list_symbols(
    category: str | None = Query(None, description="Only symbols in this category"),
) -> list[SymbolResponse]:
    """List notation symbols with their prose patterns."""
    if category is not None and category not in get_all_categories():
        raise HTTPException(status_code=404, detail=f"Unknown category: {category}")
    return [
        SymbolResponse(symbol=info.symbol, category=info.category, patterns=list(info.patterns))
        for info in SYMBOLS
        if category is None or info.category == category
    ]


@router.get("/categories", response_model=CategoriesResponse)
async def list_categories() -> CategoriesResponse:
    return CategoriesResponse(categories=get_all_categories())
