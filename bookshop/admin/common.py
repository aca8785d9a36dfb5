"""Helpers shared by the back-office routers."""

from typing import Optional, TypeVar

from fastapi import HTTPException

RecordT = TypeVar("RecordT")


def found_or_404(record: Optional[RecordT], what: str) -> RecordT:
    if record is None:
        raise HTTPException(status_code=404, detail=f"{what} not found")
    return record
