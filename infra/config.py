"""
Run configuration for the bonus claims topology.

Process-level settings (account, region, root domain, seed policy) come from
the environment via pydantic-settings. The environment selector itself comes
from CDK context (`cdk deploy -c env=prod`) and is resolved into an immutable
EnvironmentProfile plus the RunMode for this invocation.
"""

from dataclasses import dataclass
from enum import Enum

from pydantic_settings import BaseSettings

from .errors import ConfigurationError
from .seeding import SeedTokenPolicy


class InfraSettings(BaseSettings):
    """Deployment settings loaded from environment."""

    # AWS target
    cdk_default_account: str | None = None
    cdk_default_region: str = "us-east-1"

    # DNS
    root_domain: str | None = None

    # Storage
    seed_token_policy: SeedTokenPolicy = SeedTokenPolicy.ALWAYS

    # Compute
    image_tag: str = "latest"
    container_port: int = 3000

    # Verify hosted zone and ECR repositories with boto3 before declaring stacks
    preflight_lookups: bool = False

    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = False


class EnvironmentName(str, Enum):
    """Supported deployment environments."""
    DEV = "dev"
    PROD = "prod"


class RunMode(str, Enum):
    """How far this invocation goes.

    BOOTSTRAP_PASS runs without an environment selector (for example under
    `cdk bootstrap`) and must not touch live provider state, so the DNS and
    compute stages are skipped.
    """
    BOOTSTRAP_PASS = "bootstrap"
    FULL_DEPLOY = "full"


DEFAULT_ENVIRONMENT = EnvironmentName.DEV


@dataclass(frozen=True)
class EnvironmentProfile:
    """Per-environment naming and retention policy."""

    name: EnvironmentName
    resource_suffix: str  # physical names and DNS labels, e.g. "user-dev"
    construct_suffix: str  # stack and construct ids, e.g. "ComputeStackDev"
    retain_resources_on_teardown: bool
    region: str
    account: str | None = None

    def physical_name(self, base: str) -> str:
        return f"{base}{self.resource_suffix}"

    def construct_id(self, base: str) -> str:
        return f"{base}{self.construct_suffix}"


# (retain_resources_on_teardown, resource_suffix, construct_suffix)
_ENVIRONMENT_POLICIES: dict[EnvironmentName, tuple[bool, str, str]] = {
    EnvironmentName.DEV: (False, "-dev", "Dev"),
    EnvironmentName.PROD: (True, "", ""),
}


def resolve_environment(
    env_token: str | None,
    settings: InfraSettings,
) -> tuple[EnvironmentProfile, RunMode]:
    """
    Resolve the environment selector into a profile and run mode.

    Args:
        env_token: Raw selector from CDK context, None when not supplied
        settings: Process-level settings providing account and region

    Returns:
        The environment profile and the run mode for this invocation

    Raises:
        ConfigurationError: If the selector names an unsupported environment
    """
    if env_token is None:
        name = DEFAULT_ENVIRONMENT
        run_mode = RunMode.BOOTSTRAP_PASS
    else:
        try:
            name = EnvironmentName(str(env_token).strip().lower())
        except ValueError as e:
            supported = ", ".join(n.value for n in EnvironmentName)
            raise ConfigurationError(
                f"Unsupported environment '{env_token}' (expected one of: {supported})"
            ) from e
        run_mode = RunMode.FULL_DEPLOY

    retain, resource_suffix, construct_suffix = _ENVIRONMENT_POLICIES[name]
    profile = EnvironmentProfile(
        name=name,
        resource_suffix=resource_suffix,
        construct_suffix=construct_suffix,
        retain_resources_on_teardown=retain,
        region=settings.cdk_default_region,
        account=settings.cdk_default_account,
    )
    return profile, run_mode
