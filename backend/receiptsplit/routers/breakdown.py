from fastapi import APIRouter, HTTPException

from ..models import Split, SplitSummary
from ..services.reconciliation import summarize_split

router = APIRouter(prefix="/breakdown", tags=["Breakdown"])


@router.post("", response_model=SplitSummary)
async def calculate_split_breakdown(split: Split) -> SplitSummary:
    """
    Calculate the per-participant breakdown for a split sent in the body.

    Nothing is stored. The response also carries the receipt total, the
    reconciliation check and the shareable text.
    """
    try:
        return summarize_split(split)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to calculate breakdown: {str(e)}")
