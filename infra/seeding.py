"""Sample dataset and change-detection tokens for the table seed.

The seed custom resource is re-invoked by CloudFormation only when one of its
properties changes, so the SeedToken property decides how often seeding runs:

- ALWAYS: a fresh timestamp every synth, the seed re-runs on every deploy
- ON_CHANGE: a SHA256 of the sample rows, the seed re-runs only when they change

Either way the seed writes with put_item on the composite key, so repeated
runs converge on the same rows.
"""

import hashlib
import json
from collections.abc import Callable
from datetime import UTC, datetime
from enum import Enum


class SeedTokenPolicy(str, Enum):
    """When the seed custom resource is re-invoked."""
    ALWAYS = "always"
    ON_CHANGE = "on_change"


SAMPLE_ITEMS: tuple[dict[str, str], ...] = (
    {"PK": "USER#1", "SK": "BONUS#A", "status": "CLAIMED"},
    {"PK": "USER#2", "SK": "BONUS#B", "status": "PENDING"},
    {"PK": "USER#3", "SK": "BONUS#C", "status": "COMPLETED"},
)


def encode_items(items: tuple[dict[str, str], ...] = SAMPLE_ITEMS) -> str:
    """Canonical JSON for the sample rows (sorted keys, no whitespace)."""
    return json.dumps(list(items), sort_keys=True, separators=(",", ":"))


def content_hash(items: tuple[dict[str, str], ...] = SAMPLE_ITEMS) -> str:
    return hashlib.sha256(encode_items(items).encode()).hexdigest()


def seed_token(
    policy: SeedTokenPolicy,
    items: tuple[dict[str, str], ...] = SAMPLE_ITEMS,
    clock: Callable[[], datetime] = lambda: datetime.now(UTC),
) -> str:
    """
    Compute the change-detection token for the seed custom resource.

    Args:
        policy: Re-seed on every deploy or only when the rows change
        items: Rows to seed
        clock: Source of the current time for the ALWAYS policy

    Returns:
        Millisecond timestamp (ALWAYS) or hex SHA256 of the rows (ON_CHANGE)
    """
    if policy is SeedTokenPolicy.ON_CHANGE:
        return content_hash(items)
    return str(int(clock().timestamp() * 1000))
