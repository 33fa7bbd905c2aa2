from dataclasses import dataclass

from aws_cdk import (
    Stack,
)
from aws_cdk import (
    aws_ec2 as ec2,
)
from constructs import Construct

from ..config import EnvironmentProfile
from ..errors import ConfigurationError


@dataclass(frozen=True)
class NetworkTopology:
    """VPC sizing shared by every environment."""

    address_space: str = "10.0.0.0/16"
    availability_zone_count: int = 2
    nat_gateway_count: int = 1
    subnet_cidr_mask: int = 24

    def __post_init__(self) -> None:
        # Application load balancers need subnets in at least two AZs
        if self.availability_zone_count < 2:
            raise ConfigurationError(
                f"availability_zone_count must be >= 2, got {self.availability_zone_count}"
            )
        if self.nat_gateway_count < 1:
            raise ConfigurationError(
                f"nat_gateway_count must be >= 1, got {self.nat_gateway_count}"
            )


class NetworkStack(Stack):
    def __init__(
        self,
        scope: Construct,
        id: str,
        profile: EnvironmentProfile,
        topology: NetworkTopology | None = None,
        **kwargs,
    ) -> None:
        super().__init__(scope, id, **kwargs)

        self.topology = topology or NetworkTopology()

        # Public subnets host the load balancers, tasks run in the private tier
        # and reach ECR/DynamoDB through a single shared NAT gateway
        self.vpc = ec2.Vpc(
            self, profile.construct_id("BonusClaimsVpc"),
            vpc_name=profile.physical_name("bonus-claims"),
            ip_addresses=ec2.IpAddresses.cidr(self.topology.address_space),
            max_azs=self.topology.availability_zone_count,
            nat_gateways=self.topology.nat_gateway_count,
            subnet_configuration=[
                ec2.SubnetConfiguration(
                    name="Public",
                    subnet_type=ec2.SubnetType.PUBLIC,
                    cidr_mask=self.topology.subnet_cidr_mask,
                ),
                ec2.SubnetConfiguration(
                    name="Private",
                    subnet_type=ec2.SubnetType.PRIVATE_WITH_EGRESS,
                    cidr_mask=self.topology.subnet_cidr_mask,
                ),
            ],
        )
