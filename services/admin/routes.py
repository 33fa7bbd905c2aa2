from fastapi import APIRouter, Depends, Query

from ..common.claims import BonusClaim, BonusClaimRepository
from ..common.dependencies import get_repository

router = APIRouter(tags=["bonus-claims"])


@router.get(
    "/list-bonus-claims",
    response_model=list[BonusClaim],
    summary="List bonus claims",
    description="List the claims of one user, or of all users when userId is omitted.",
)
def list_bonus_claims(
    user_id: str | None = Query(None, alias="userId", min_length=1),
    repository: BonusClaimRepository = Depends(get_repository),
) -> list[BonusClaim]:
    return repository.list_claims(user_id)
