from typing import Any

import boto3
from fastapi import HTTPException, status

from .claims import BonusClaimRepository
from .config import settings

# Singleton table resource
_table: Any | None = None


def get_table() -> Any:
    global _table
    if _table is None:
        if not settings.table_name:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="TABLE_NAME env var not set",
            )
        dynamodb = boto3.resource(
            "dynamodb",
            region_name=settings.aws_region,
            endpoint_url=settings.aws_endpoint_url,
        )
        _table = dynamodb.Table(settings.table_name)
    return _table


def get_repository() -> BonusClaimRepository:
    return BonusClaimRepository(get_table())
