from fastapi import APIRouter, Depends, HTTPException, Query, status

from .claims import BonusClaim, BonusClaimRepository
from .dependencies import get_repository

router = APIRouter(tags=["bonus-claims"])


@router.get(
    "/get-bonus-claim",
    response_model=BonusClaim,
    summary="Get a bonus claim",
)
def get_bonus_claim(
    user_id: str = Query(..., alias="userId", min_length=1),
    bonus_id: str = Query(..., alias="bonusId", min_length=1),
    repository: BonusClaimRepository = Depends(get_repository),
) -> BonusClaim:
    claim = repository.get(user_id, bonus_id)
    if claim is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Bonus claim not found",
        )
    return claim
