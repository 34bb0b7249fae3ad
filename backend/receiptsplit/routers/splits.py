import logging

from fastapi import APIRouter, Depends, HTTPException, Response

from ..models import Split, SplitCreate, SplitSummary
from ..services.reconciliation import summarize_split
from ..services.splits import SplitNotFoundError, SplitRepository, create_split, get_repository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/splits", tags=["Splits"])


@router.get("", response_model=list[Split])
async def list_splits(repository: SplitRepository = Depends(get_repository)) -> list[Split]:
    """List every stored split."""
    return repository.list()


@router.post("", response_model=Split, status_code=201)
async def create_new_split(
    request: SplitCreate | None = None,
    repository: SplitRepository = Depends(get_repository),
) -> Split:
    """
    Create an empty split with the current user as its only participant.
    """
    split = create_split(name=request.name if request else None)
    return repository.save(split)


@router.get("/{split_id}", response_model=Split)
async def get_split(split_id: str, repository: SplitRepository = Depends(get_repository)) -> Split:
    """Get a single split by id."""
    try:
        return repository.load(split_id)
    except SplitNotFoundError:
        raise HTTPException(status_code=404, detail=f"Split not found: {split_id}")


@router.put("/{split_id}", response_model=Split)
async def save_split(
    split_id: str,
    split: Split,
    repository: SplitRepository = Depends(get_repository),
) -> Split:
    """
    Store a split, creating it if it does not exist yet.

    The participant list is normalized against exclude_me before saving.
    """
    if split.id != split_id:
        raise HTTPException(
            status_code=400,
            detail=f"Split id in body ({split.id}) does not match path ({split_id})",
        )
    return repository.save(split)


@router.delete("/{split_id}", status_code=204)
async def delete_split(split_id: str, repository: SplitRepository = Depends(get_repository)) -> Response:
    """Delete a split."""
    try:
        repository.delete(split_id)
    except SplitNotFoundError:
        raise HTTPException(status_code=404, detail=f"Split not found: {split_id}")
    return Response(status_code=204)


@router.get("/{split_id}/summary", response_model=SplitSummary)
async def get_split_summary(split_id: str, repository: SplitRepository = Depends(get_repository)) -> SplitSummary:
    """Get the breakdown and derived totals for a stored split."""
    try:
        split = repository.load(split_id)
    except SplitNotFoundError:
        raise HTTPException(status_code=404, detail=f"Split not found: {split_id}")

    try:
        return summarize_split(split)
    except Exception as e:
        logger.exception("Breakdown failed for split %s", split_id)
        raise HTTPException(status_code=500, detail=f"Failed to calculate breakdown: {str(e)}")
