from aws_cdk import (
    CfnOutput,
    Duration,
    Stack,
)
from aws_cdk import (
    aws_dynamodb as dynamodb,
)
from aws_cdk import (
    aws_ec2 as ec2,
)
from aws_cdk import (
    aws_ecr as ecr,
)
from aws_cdk import (
    aws_ecs as ecs,
)
from aws_cdk import (
    aws_ecs_patterns as ecs_patterns,
)
from aws_cdk import (
    aws_elasticloadbalancingv2 as elbv2,
)
from aws_cdk import (
    aws_iam as iam,
)
from aws_cdk import (
    aws_logs as logs,
)
from constructs import Construct

from ..config import EnvironmentProfile
from ..deployments import ServiceDeploymentSpec
from .domain_stack import DnsCertificateBundle


class ComputeStack(Stack):
    """
    One load-balanced Fargate service per application service.

    Only declared on a full deploy, after DomainStack. dns=None means no
    domain is available (a bootstrap pass or a no-domain run): services are
    then served over plain HTTP on the load balancer's own DNS name.
    """

    def __init__(
        self,
        scope: Construct,
        id: str,
        profile: EnvironmentProfile,
        vpc: ec2.IVpc,
        table: dynamodb.ITable,
        services: list[ServiceDeploymentSpec],
        deploy_token: str,
        dns: DnsCertificateBundle | None = None,
        **kwargs,
    ) -> None:
        super().__init__(scope, id, **kwargs)

        self.profile = profile

        # ECS Cluster
        self.cluster = ecs.Cluster(
            self,
            profile.construct_id("BonusClaimsCluster"),
            vpc=vpc,
            cluster_name=profile.physical_name("bonus-claims"),
        )

        # Both services are first-party and share one task role with read+write on the table
        self.task_role = iam.Role(
            self,
            profile.construct_id("FargateTaskRole"),
            assumed_by=iam.ServicePrincipal("ecs-tasks.amazonaws.com"),
        )
        table.grant_read_write_data(self.task_role)

        # Shared environment variables for all services.
        # DEPLOY_TOKEN changes on every synth, which rolls the tasks even when
        # the image tag did not move.
        shared_environment = {
            "TABLE_NAME": table.table_name,
            "AWS_REGION": profile.region,
            "DEPLOY_TOKEN": deploy_token,
        }

        self.services: dict[str, ecs_patterns.ApplicationLoadBalancedFargateService] = {}
        for spec in services:
            self.services[spec.service_name] = self._add_service(spec, shared_environment, dns)

    def _add_service(
        self,
        spec: ServiceDeploymentSpec,
        shared_environment: dict[str, str],
        dns: DnsCertificateBundle | None,
    ) -> ecs_patterns.ApplicationLoadBalancedFargateService:
        """Declare one load-balanced Fargate service, with custom domain and TLS when available."""
        construct_id = self.profile.construct_id(spec.construct_base)

        repository = ecr.Repository.from_repository_name(
            self,
            self.profile.construct_id(f"{spec.service_name.capitalize()}Repo"),
            spec.repository_name,
        )

        execution_role = iam.Role(
            self,
            f"{construct_id}ExecutionRole",
            assumed_by=iam.ServicePrincipal("ecs-tasks.amazonaws.com"),
            managed_policies=[
                iam.ManagedPolicy.from_aws_managed_policy_name(
                    "AmazonEC2ContainerRegistryReadOnly",
                ),
            ],
        )

        domain_options = {}
        if dns is not None:
            service_certificate = dns.certificates[spec.service_name]
            # The pattern also creates the alias A record for domain_name in the zone
            domain_options = {
                "domain_name": service_certificate.domain_name,
                "domain_zone": dns.zone,
                "certificate": service_certificate.certificate,
                "protocol": elbv2.ApplicationProtocol.HTTPS,
                "redirect_http": True,
            }

        service = ecs_patterns.ApplicationLoadBalancedFargateService(
            self,
            construct_id,
            cluster=self.cluster,
            service_name=self.profile.physical_name(spec.repository_name),
            cpu=spec.cpu,
            memory_limit_mib=spec.memory_mib,
            desired_count=spec.desired_count,
            task_subnets=ec2.SubnetSelection(subnet_type=ec2.SubnetType.PRIVATE_WITH_EGRESS),
            task_image_options=ecs_patterns.ApplicationLoadBalancedTaskImageOptions(
                image=ecs.ContainerImage.from_ecr_repository(repository, spec.image_tag),
                container_port=spec.container_port,
                environment={
                    **shared_environment,
                    "SERVICE_NAME": spec.service_name,
                    "PORT": str(spec.container_port),
                },
                task_role=self.task_role,
                execution_role=execution_role,
                log_driver=ecs.LogDrivers.aws_logs(
                    stream_prefix=spec.service_name,
                    log_retention=logs.RetentionDays.ONE_MONTH,
                ),
            ),
            public_load_balancer=True,
            **domain_options,
        )

        policy = spec.health_check
        service.target_group.configure_health_check(
            path=policy.path,
            interval=Duration.seconds(policy.interval_seconds),
            timeout=Duration.seconds(policy.timeout_seconds),
            healthy_threshold_count=policy.healthy_threshold,
            unhealthy_threshold_count=policy.unhealthy_threshold,
        )

        if dns is not None:
            url = f"https://{dns.certificates[spec.service_name].domain_name}"
        else:
            # No DNS bundle: reachable on the load balancer name only
            url = f"http://{service.load_balancer.load_balancer_dns_name}"
        CfnOutput(self, f"{spec.construct_base}Url", value=url)

        return service
