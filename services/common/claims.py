"""
Bonus claim rows in the shared DynamoDB table.

Row layout: {PK: "USER#<id>", SK: "BONUS#<id>", status, timestamp}, where
timestamp is an ISO-8601 UTC string.
"""

from datetime import UTC, datetime
from typing import Any

import structlog
from boto3.dynamodb.conditions import Key
from botocore.exceptions import ClientError
from pydantic import BaseModel, ConfigDict, Field

logger = structlog.get_logger()

USER_PREFIX = "USER#"
BONUS_PREFIX = "BONUS#"

STATUS_CLAIMED = "CLAIMED"


def user_key(user_id: str) -> str:
    return f"{USER_PREFIX}{user_id}"


def bonus_key(bonus_id: str) -> str:
    return f"{BONUS_PREFIX}{bonus_id}"


class BonusClaim(BaseModel):
    """A stored claim, serialized with the table's attribute names."""

    PK: str
    SK: str
    status: str | None = None
    timestamp: str | None = None

    @property
    def user_id(self) -> str:
        return self.PK.removeprefix(USER_PREFIX)

    @property
    def bonus_id(self) -> str:
        return self.SK.removeprefix(BONUS_PREFIX)


class AddBonusClaimRequest(BaseModel):
    """Body of POST /add-bonus-claim."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(..., alias="userId", min_length=1, max_length=128)
    bonus_id: str = Field(..., alias="bonusId", min_length=1, max_length=128)


class ClaimStoreError(Exception):
    """Raised when the table cannot be read or written."""

    pass


class BonusClaimRepository:
    """Reads and writes claim rows through a boto3 Table resource."""

    def __init__(self, table: Any) -> None:
        self._table = table

    def add(
        self,
        user_id: str,
        bonus_id: str,
        status: str = STATUS_CLAIMED,
        now: datetime | None = None,
    ) -> BonusClaim:
        """
        Store a claim, replacing any previous row for the same user and bonus.

        Args:
            user_id: User identifier without prefix
            bonus_id: Bonus identifier without prefix
            status: Claim status
            now: Claim time, defaults to the current UTC time

        Returns:
            The stored claim

        Raises:
            ClaimStoreError: If DynamoDB rejects the write
        """
        claim = BonusClaim(
            PK=user_key(user_id),
            SK=bonus_key(bonus_id),
            status=status,
            timestamp=(now or datetime.now(UTC)).isoformat(),
        )
        try:
            self._table.put_item(Item=claim.model_dump())
        except ClientError as e:
            logger.error("Failed to insert claim", pk=claim.PK, sk=claim.SK, error=str(e))
            raise ClaimStoreError("Failed to insert claim") from e

        logger.info("Bonus claim stored", pk=claim.PK, sk=claim.SK, status=status)
        return claim

    def get(self, user_id: str, bonus_id: str) -> BonusClaim | None:
        """Fetch one claim by its composite key, None when absent."""
        key = {"PK": user_key(user_id), "SK": bonus_key(bonus_id)}
        try:
            response = self._table.get_item(Key=key)
        except ClientError as e:
            logger.error("Failed to fetch claim", error=str(e), **key)
            raise ClaimStoreError("Failed to fetch bonus claim") from e

        item = response.get("Item")
        if not item:
            return None
        return BonusClaim(**_claim_attributes(item))

    def list_claims(self, user_id: str | None = None) -> list[BonusClaim]:
        """List the claims of one user, or of every user when user_id is None."""
        if user_id is not None:
            operation = self._table.query
            kwargs: dict[str, Any] = {"KeyConditionExpression": Key("PK").eq(user_key(user_id))}
        else:
            operation = self._table.scan
            kwargs = {}

        claims: list[BonusClaim] = []
        try:
            while True:
                response = operation(**kwargs)
                claims.extend(BonusClaim(**_claim_attributes(item)) for item in response.get("Items", []))
                last_key = response.get("LastEvaluatedKey")
                if not last_key:
                    break
                kwargs["ExclusiveStartKey"] = last_key
        except ClientError as e:
            logger.error("Failed to list claims", user_id=user_id, error=str(e))
            raise ClaimStoreError("Failed to list bonus claims") from e

        return claims


def _claim_attributes(item: dict[str, Any]) -> dict[str, Any]:
    return {
        "PK": item["PK"],
        "SK": item["SK"],
        "status": item.get("status"),
        "timestamp": item.get("timestamp"),
    }
