from fastapi import APIRouter, Depends, status

from ..common.claims import AddBonusClaimRequest, BonusClaim, BonusClaimRepository
from ..common.dependencies import get_repository

router = APIRouter(tags=["bonus-claims"])


@router.post(
    "/add-bonus-claim",
    response_model=BonusClaim,
    status_code=status.HTTP_201_CREATED,
    summary="Claim a bonus",
    description="Store a CLAIMED row for the user and bonus, replacing any earlier claim.",
)
def add_bonus_claim(
    request: AddBonusClaimRequest,
    repository: BonusClaimRepository = Depends(get_repository),
) -> BonusClaim:
    return repository.add(request.user_id, request.bonus_id)
