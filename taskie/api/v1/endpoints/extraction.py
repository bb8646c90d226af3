from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, HTTPException, status

from taskie.schemas import ParseResult, TaskExtractionError

router = APIRouter()


@router.post("/validate", response_model=ParseResult)
def validate_extraction(payload: Any = Body(...)) -> ParseResult:
    """Check a task extractor payload and return it with dates normalized."""

    try:
        return ParseResult.from_payload(payload)
    except TaskExtractionError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc
