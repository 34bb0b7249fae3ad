from fastapi import APIRouter, Depends, HTTPException, Query

from ..models import Split, SpendingSummary
from ..services.spending import get_splits_this_month, summarize_spending
from ..services.splits import SplitRepository, get_repository

router = APIRouter(prefix="/spending", tags=["Spending"])


@router.post("/summary", response_model=SpendingSummary)
async def summarize_posted_spending(
    splits: list[Split],
    this_month: bool = Query(False, description="Only count splits touched this calendar month (UTC)"),
) -> SpendingSummary:
    """
    Summarize spending over the splits sent in the body.

    User share is an equal split of each receipt total, not the
    assignment-aware breakdown.
    """
    try:
        if this_month:
            splits = get_splits_this_month(splits)
        return summarize_spending(splits)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to summarize spending: {str(e)}")


@router.get("/summary", response_model=SpendingSummary)
async def summarize_stored_spending(
    this_month: bool = Query(False, description="Only count splits touched this calendar month (UTC)"),
    repository: SplitRepository = Depends(get_repository),
) -> SpendingSummary:
    """
    Summarize spending over every stored split.

    Like the POST variant, all splits count unless this_month is set.
    """
    try:
        splits = repository.list()
        if this_month:
            splits = get_splits_this_month(splits)
        return summarize_spending(splits)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to summarize spending: {str(e)}")
