"""Memo endpoints."""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from cooking_cost.constants import MEMO_SORT_FIELDS
from cooking_cost.database import get_db, transaction
from cooking_cost.models.memo import Memo
from cooking_cost.schemas.common import ApiResponse, DeleteResult, PaginatedResponse, PaginationMeta
from cooking_cost.schemas.memo import MemoResponse, MemoWrite
from cooking_cost.services.repository import Repository, contains

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/memos", tags=["memos"])

memos = Repository(Memo, MEMO_SORT_FIELDS, label="Memo")


@router.get("", response_model=PaginatedResponse[MemoResponse])
def list_memos(
    search: Optional[str] = Query(None, description="Substring of the content"),
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    sort_order: Optional[str] = Query(None, alias="sortOrder"),
    page: Optional[int] = Query(None),
    limit: Optional[int] = Query(None),
    offset: Optional[int] = Query(None),
    db: Session = Depends(get_db),
):
    result = memos.search(
        db,
        [contains(Memo.content, search)],
        sort_by=sort_by or "updated_at",
        sort_order=sort_order,
        page=page,
        limit=limit,
        offset=offset,
    )
    return PaginatedResponse[MemoResponse](
        data=[MemoResponse.model_validate(m) for m in result.items],
        pagination=PaginationMeta(**result.pagination),
    )


@router.post("", response_model=ApiResponse[MemoResponse], status_code=201)
def create_memo(data: MemoWrite, db: Session = Depends(get_db)):
    with transaction(db):
        memo = Memo(content=data.content)
        db.add(memo)

    logger.info(f"Created memo {memo.id}")
    return ApiResponse[MemoResponse](data=MemoResponse.model_validate(memo), message="Memo created")


@router.get("/{memo_id}", response_model=ApiResponse[MemoResponse])
def get_memo(memo_id: int, db: Session = Depends(get_db)):
    return ApiResponse[MemoResponse](data=MemoResponse.model_validate(memos.get_or_404(db, memo_id)))


@router.put("/{memo_id}", response_model=ApiResponse[MemoResponse])
def update_memo(memo_id: int, data: MemoWrite, db: Session = Depends(get_db)):
    with transaction(db):
        memo = memos.get_or_404(db, memo_id)
        memo.content = data.content

    return ApiResponse[MemoResponse](data=MemoResponse.model_validate(memo), message="Memo updated")


@router.delete("/{memo_id}", response_model=ApiResponse[DeleteResult])
def delete_memo(memo_id: int, db: Session = Depends(get_db)):
    with transaction(db):
        db.delete(memos.get_or_404(db, memo_id))

    logger.info(f"Deleted memo {memo_id}")
    return ApiResponse[DeleteResult](data=DeleteResult(id=memo_id), message="Memo deleted")
