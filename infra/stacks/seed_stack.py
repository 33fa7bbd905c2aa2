"""
Seed Stack - one-shot sample data load for the bonus claims table.

Kept apart from StorageStack: a failing seed rolls back only this stack, the
table stays deployed and the next deploy retries the seed.
"""

from pathlib import Path

from aws_cdk import CustomResource, Duration, Stack
from aws_cdk import aws_dynamodb as dynamodb
from aws_cdk import aws_lambda as _lambda
from aws_cdk import custom_resources as cr
from constructs import Construct

from ..config import EnvironmentProfile
from ..seeding import SAMPLE_ITEMS, encode_items

SEED_LAMBDA_DIR = Path(__file__).resolve().parents[2] / "seed_lambda"


class SeedStack(Stack):
    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        profile: EnvironmentProfile,
        table: dynamodb.ITable,
        seed_token: str,
        items: tuple[dict[str, str], ...] = SAMPLE_ITEMS,
        **kwargs,
    ) -> None:
        super().__init__(scope, construct_id, **kwargs)

        self.seed_function = _lambda.Function(
            self,
            profile.construct_id("InsertItemsFunction"),
            runtime=_lambda.Runtime.PYTHON_3_12,
            handler="main.handler",
            code=_lambda.Code.from_asset(str(SEED_LAMBDA_DIR), exclude=["__pycache__"]),
            environment={
                "TABLE_NAME": table.table_name,
            },
            timeout=Duration.seconds(60),
        )

        table.grant_write_data(self.seed_function)

        provider = cr.Provider(
            self,
            profile.construct_id("InsertItemsProvider"),
            on_event_handler=self.seed_function,
        )

        # CloudFormation only calls the handler again when a property changes,
        # SeedToken carries the re-seed policy
        self.seed_resource = CustomResource(
            self,
            profile.construct_id("InsertSampleData"),
            service_token=provider.service_token,
            properties={
                "TableName": table.table_name,
                "Items": encode_items(items),
                "SeedToken": seed_token,
            },
        )
