import json
from datetime import UTC, datetime

from infra.seeding import (
    SAMPLE_ITEMS,
    SeedTokenPolicy,
    content_hash,
    encode_items,
    seed_token,
)


class TestSampleItems:
    def test_rows_use_composite_key_scheme(self):
        for item in SAMPLE_ITEMS:
            assert item["PK"].startswith("USER#")
            assert item["SK"].startswith("BONUS#")
            assert item["status"]

    def test_composite_keys_are_unique(self):
        keys = {(item["PK"], item["SK"]) for item in SAMPLE_ITEMS}
        assert len(keys) == len(SAMPLE_ITEMS)

    def test_encoding_is_canonical(self):
        assert json.loads(encode_items()) == list(SAMPLE_ITEMS)
        assert " " not in encode_items()


class TestSeedToken:
    def test_on_change_token_is_stable(self):
        first = seed_token(SeedTokenPolicy.ON_CHANGE, clock=lambda: datetime(2024, 1, 1, tzinfo=UTC))
        second = seed_token(SeedTokenPolicy.ON_CHANGE, clock=lambda: datetime(2025, 6, 1, tzinfo=UTC))

        assert first == second == content_hash()

    def test_on_change_token_follows_content(self):
        changed = SAMPLE_ITEMS + ({"PK": "USER#4", "SK": "BONUS#D", "status": "PENDING"},)

        assert seed_token(SeedTokenPolicy.ON_CHANGE, changed) != seed_token(SeedTokenPolicy.ON_CHANGE)

    def test_on_change_token_ignores_key_order(self):
        reordered = tuple({"status": i["status"], "SK": i["SK"], "PK": i["PK"]} for i in SAMPLE_ITEMS)
        assert content_hash(reordered) == content_hash()

    def test_always_token_changes_every_run(self):
        first = seed_token(SeedTokenPolicy.ALWAYS, clock=lambda: datetime(2024, 1, 1, tzinfo=UTC))
        second = seed_token(SeedTokenPolicy.ALWAYS, clock=lambda: datetime(2024, 1, 1, 0, 0, 1, tzinfo=UTC))

        assert first == "1704067200000"
        assert second == "1704067201000"
