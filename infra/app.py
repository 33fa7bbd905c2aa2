#!/usr/bin/env python3
"""
CDK app for the bonus claims platform.

    cdk bootstrap                       # no env: network + table only
    cdk deploy --all -c env=dev -c domain=example.com
    cdk deploy --all -c env=prod -c domain=example.com
"""

import aws_cdk as cdk
import structlog

from .config import InfraSettings, RunMode, resolve_environment
from .errors import TopologyError
from .logging import configure_logging
from .preflight import ProviderLookups
from .topology import compose_topology

logger = structlog.get_logger()


def main() -> cdk.App:
    settings = InfraSettings()
    configure_logging("bonus-claims-infra", settings.log_level)

    app = cdk.App()

    # Absent env selector means a bootstrap pass, not "dev"
    env_token = app.node.try_get_context("env")
    root_domain = app.node.try_get_context("domain") or settings.root_domain

    try:
        profile, run_mode = resolve_environment(env_token, settings)
        lookups = None
        if settings.preflight_lookups and run_mode is RunMode.FULL_DEPLOY:
            lookups = ProviderLookups(region_name=profile.region)

        compose_topology(
            app,
            profile=profile,
            run_mode=run_mode,
            settings=settings,
            root_domain=root_domain,
            lookups=lookups,
        )
    except TopologyError as e:
        logger.error(
            "Topology composition failed",
            error=str(e),
            error_type=type(e).__name__,
        )
        raise

    app.synth()
    return app


if __name__ == "__main__":
    main()
