"""Storage Stack - DynamoDB table for bonus claims."""

from aws_cdk import (
    RemovalPolicy,
    Stack,
)
from aws_cdk import (
    aws_dynamodb as dynamodb,
)
from constructs import Construct

from ..config import EnvironmentProfile

# Composite key is fixed for the lifetime of the table; changing it needs a migration
PARTITION_KEY_NAME = "PK"
SORT_KEY_NAME = "SK"


def removal_policy_for(profile: EnvironmentProfile) -> RemovalPolicy:
    return RemovalPolicy.RETAIN if profile.retain_resources_on_teardown else RemovalPolicy.DESTROY


class StorageStack(Stack):
    """Single table holding USER#<id> / BONUS#<id> claim rows."""

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        profile: EnvironmentProfile,
        **kwargs,
    ) -> None:
        super().__init__(scope, construct_id, **kwargs)

        self.table = dynamodb.Table(
            self,
            profile.construct_id("BonusClaimsTable"),
            table_name=profile.physical_name("bonus-claims"),
            partition_key=dynamodb.Attribute(
                name=PARTITION_KEY_NAME, type=dynamodb.AttributeType.STRING
            ),
            sort_key=dynamodb.Attribute(name=SORT_KEY_NAME, type=dynamodb.AttributeType.STRING),
            billing_mode=dynamodb.BillingMode.PAY_PER_REQUEST,
            removal_policy=removal_policy_for(profile),
            encryption=dynamodb.TableEncryption.AWS_MANAGED,
        )
