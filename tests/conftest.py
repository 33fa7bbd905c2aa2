from datetime import UTC, datetime

import aws_cdk as cdk
import pytest

from infra.config import InfraSettings, resolve_environment
from infra.seeding import SeedTokenPolicy

ACCOUNT = "123456789012"
REGION = "us-east-1"
ROOT_DOMAIN = "example.com"


def lookup_context() -> dict:
    """Pre-resolved context lookups, so synth never reaches AWS."""
    return {
        f"availability-zones:account={ACCOUNT}:region={REGION}": [
            f"{REGION}a",
            f"{REGION}b",
        ],
        f"hosted-zone:account={ACCOUNT}:domainName={ROOT_DOMAIN}:region={REGION}": {
            "Id": "/hostedzone/Z0123456789EXAMPLE",
            "Name": f"{ROOT_DOMAIN}.",
        },
    }


@pytest.fixture
def app() -> cdk.App:
    return cdk.App(context=lookup_context())


@pytest.fixture
def root_domain() -> str:
    return ROOT_DOMAIN


@pytest.fixture
def infra_settings() -> InfraSettings:
    return InfraSettings(
        cdk_default_account=ACCOUNT,
        cdk_default_region=REGION,
        root_domain=None,
        seed_token_policy=SeedTokenPolicy.ON_CHANGE,
        preflight_lookups=False,
    )


@pytest.fixture
def fixed_clock():
    now = datetime(2024, 1, 1, tzinfo=UTC)
    return lambda: now


@pytest.fixture
def cdk_env() -> cdk.Environment:
    return cdk.Environment(account=ACCOUNT, region=REGION)


@pytest.fixture
def dev_profile(infra_settings):
    profile, _ = resolve_environment("dev", infra_settings)
    return profile


@pytest.fixture
def prod_profile(infra_settings):
    profile, _ = resolve_environment("prod", infra_settings)
    return profile
