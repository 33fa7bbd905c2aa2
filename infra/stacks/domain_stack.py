"""
Domain Stack - hosted zone lookup and per-service ACM certificates.

The hosted zone must already exist: this stack only reads it and adds
certificate validation records. The lookup goes through the CDK context
provider, which needs live credentials, so the stack is never declared on a
bootstrap pass.
"""

from dataclasses import dataclass

from aws_cdk import CfnOutput, Stack
from aws_cdk import aws_certificatemanager as acm
from aws_cdk import aws_route53 as route53
from constructs import Construct

from ..config import EnvironmentProfile, RunMode
from ..deployments import ServiceDeploymentSpec
from ..errors import ConfigurationError


@dataclass(frozen=True)
class ServiceCertificate:
    domain_name: str
    certificate: acm.ICertificate


@dataclass(frozen=True)
class DnsCertificateBundle:
    """Zone and certificates handed to the compute stage."""

    zone: route53.IHostedZone
    root_domain: str
    certificates: dict[str, ServiceCertificate]
    validation_method: str = "DNS"


class DomainStack(Stack):
    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        profile: EnvironmentProfile,
        run_mode: RunMode,
        root_domain: str,
        services: list[ServiceDeploymentSpec],
        **kwargs,
    ) -> None:
        if run_mode is not RunMode.FULL_DEPLOY:
            raise ConfigurationError("Hosted zone lookups are not allowed on a bootstrap pass")

        super().__init__(scope, construct_id, **kwargs)

        zone = route53.HostedZone.from_lookup(
            self,
            profile.construct_id("HostedZone"),
            domain_name=root_domain,
        )

        certificates: dict[str, ServiceCertificate] = {}
        for spec in services:
            if not spec.domain_name:
                raise ConfigurationError(f"Service '{spec.service_name}' has no domain name")

            certificate = acm.Certificate(
                self,
                profile.construct_id(f"{spec.construct_base}Certificate"),
                domain_name=spec.domain_name,
                validation=acm.CertificateValidation.from_dns(zone),
            )
            certificates[spec.service_name] = ServiceCertificate(
                domain_name=spec.domain_name,
                certificate=certificate,
            )

            CfnOutput(
                self,
                f"{spec.construct_base}CertificateArn",
                value=certificate.certificate_arn,
            )

        self.bundle = DnsCertificateBundle(
            zone=zone,
            root_domain=root_domain,
            certificates=certificates,
        )
