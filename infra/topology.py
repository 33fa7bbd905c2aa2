"""
Topology composition for one environment.

Stages run strictly in order, each one feeding the next:

    Network -> Storage (+ Seed) -> Domain/Certificates -> Compute

Network and Storage are independent, Compute needs both plus the DNS bundle.
On a bootstrap pass only Network and Storage are declared: the hosted zone
lookup needs live provider state that does not exist yet.
"""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol

import aws_cdk as cdk
import structlog
from constructs import Construct

from .config import EnvironmentProfile, InfraSettings, RunMode
from .deployments import ServiceDeploymentSpec, build_service_specs
from .errors import ConfigurationError
from .seeding import seed_token
from .stacks import ComputeStack, DomainStack, NetworkStack, SeedStack, StorageStack

logger = structlog.get_logger()


class Lookups(Protocol):
    def require_hosted_zone(self, domain_name: str) -> str: ...

    def require_repository(self, repository_name: str) -> str: ...


@dataclass
class Topology:
    """Stacks declared for one environment."""

    profile: EnvironmentProfile
    run_mode: RunMode
    network: NetworkStack
    storage: StorageStack
    seed: SeedStack
    domain: DomainStack | None = None
    compute: ComputeStack | None = None

    @property
    def stacks(self) -> list[cdk.Stack]:
        declared = [self.network, self.storage, self.seed, self.domain, self.compute]
        return [stack for stack in declared if stack is not None]


def stack_id(profile: EnvironmentProfile, stage: str) -> str:
    """Stack id for a stage, e.g. BonusClaimsComputeStackDev."""
    return profile.construct_id(f"BonusClaims{stage}Stack")


def compose_topology(
    scope: Construct,
    profile: EnvironmentProfile,
    run_mode: RunMode,
    settings: InfraSettings,
    root_domain: str | None = None,
    lookups: Lookups | None = None,
    clock: Callable[[], datetime] = lambda: datetime.now(UTC),
) -> Topology:
    """
    Declare every stack of one environment.

    Args:
        scope: CDK app (or stage) to declare the stacks in
        profile: Resolved environment profile
        run_mode: Bootstrap pass or full deploy, decided once by the caller
        settings: Deployment settings
        root_domain: Hosted zone domain, required for a full deploy
        lookups: Provider lookups to verify the zone and ECR repositories
            before anything is declared, None to skip them
        clock: Time source for the deploy and seed tokens

    Returns:
        The declared stacks

    Raises:
        ConfigurationError: If a full deploy has no root domain or account
        ResourceLookupError: If a preflight lookup finds nothing
    """
    log = logger.bind(environment=profile.name.value, run_mode=run_mode.value)
    env = cdk.Environment(account=profile.account, region=profile.region)

    services: list[ServiceDeploymentSpec] = []
    if run_mode is RunMode.FULL_DEPLOY:
        if not root_domain:
            raise ConfigurationError(
                "A root domain is required for a full deploy (-c domain=... or ROOT_DOMAIN)"
            )
        # Hosted zone lookups resolve against a concrete account
        if not profile.account:
            raise ConfigurationError(
                "An AWS account is required for a full deploy (CDK_DEFAULT_ACCOUNT)"
            )
        services = build_service_specs(profile, settings, root_domain)
        if lookups is not None:
            lookups.require_hosted_zone(root_domain)
            for spec in services:
                lookups.require_repository(spec.repository_name)

    network = NetworkStack(scope, stack_id(profile, "Network"), profile=profile, env=env)
    log.info("Stage declared", stage="network", stack=network.stack_name)

    storage = StorageStack(scope, stack_id(profile, "Storage"), profile=profile, env=env)
    log.info("Stage declared", stage="storage", stack=storage.stack_name)

    token = seed_token(settings.seed_token_policy, clock=clock)
    seed = SeedStack(
        scope,
        stack_id(profile, "Seed"),
        profile=profile,
        table=storage.table,
        seed_token=token,
        env=env,
    )
    seed.add_dependency(storage)
    log.info(
        "Stage declared",
        stage="seed",
        stack=seed.stack_name,
        seed_token_policy=settings.seed_token_policy.value,
    )

    topology = Topology(
        profile=profile,
        run_mode=run_mode,
        network=network,
        storage=storage,
        seed=seed,
    )

    if run_mode is not RunMode.FULL_DEPLOY:
        log.info("Bootstrap pass, compute and DNS stages skipped")
        return topology

    domain = DomainStack(
        scope,
        stack_id(profile, "Domain"),
        profile=profile,
        run_mode=run_mode,
        root_domain=root_domain,
        services=services,
        env=env,
    )
    log.info("Stage declared", stage="domain", stack=domain.stack_name, root_domain=root_domain)

    # TODO: key DEPLOY_TOKEN on the image digest instead of the clock so unchanged
    # images do not roll the tasks on every deploy
    deploy_token = str(int(clock().timestamp() * 1000))
    compute = ComputeStack(
        scope,
        stack_id(profile, "Compute"),
        profile=profile,
        vpc=network.vpc,
        table=storage.table,
        services=services,
        deploy_token=deploy_token,
        dns=domain.bundle,
        env=env,
    )
    compute.add_dependency(network)
    compute.add_dependency(storage)
    compute.add_dependency(domain)
    log.info(
        "Stage declared",
        stage="compute",
        stack=compute.stack_name,
        services=[spec.service_name for spec in services],
    )

    topology.domain = domain
    topology.compute = compute
    return topology
