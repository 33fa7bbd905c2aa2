from unittest.mock import MagicMock, patch

import pytest
from botocore.exceptions import ClientError

from infra.errors import HostedZoneNotFoundError, ImageRepositoryNotFoundError, ResourceLookupError
from infra.preflight import ProviderLookups


class TestProviderLookups:
    @pytest.fixture
    def clients(self):
        route53, ecr = MagicMock(), MagicMock()
        with patch("infra.preflight.boto3") as mock_boto3:
            mock_boto3.client.side_effect = lambda name, **kwargs: {"route53": route53, "ecr": ecr}[name]
            yield route53, ecr

    def test_hosted_zone_found(self, clients):
        route53, _ = clients
        route53.list_hosted_zones_by_name.return_value = {
            "HostedZones": [
                {"Id": "/hostedzone/Z1", "Name": "example.com.", "Config": {"PrivateZone": False}},
            ]
        }

        zone_id = ProviderLookups("us-east-1").require_hosted_zone("example.com")

        assert zone_id == "/hostedzone/Z1"
        route53.list_hosted_zones_by_name.assert_called_once_with(DNSName="example.com.", MaxItems="1")

    def test_hosted_zone_name_must_match_exactly(self, clients):
        route53, _ = clients
        # list_hosted_zones_by_name returns the next zone in order when there is no match
        route53.list_hosted_zones_by_name.return_value = {
            "HostedZones": [{"Id": "/hostedzone/Z2", "Name": "example.org.", "Config": {}}]
        }

        with pytest.raises(HostedZoneNotFoundError):
            ProviderLookups().require_hosted_zone("example.com")

    def test_private_zone_is_ignored(self, clients):
        route53, _ = clients
        route53.list_hosted_zones_by_name.return_value = {
            "HostedZones": [
                {"Id": "/hostedzone/Z3", "Name": "example.com.", "Config": {"PrivateZone": True}},
            ]
        }

        with pytest.raises(ResourceLookupError):
            ProviderLookups().require_hosted_zone("example.com.")

    def test_repository_found(self, clients):
        _, ecr = clients
        ecr.describe_repositories.return_value = {
            "repositories": [{"repositoryUri": "123.dkr.ecr.us-east-1.amazonaws.com/user-service"}]
        }

        uri = ProviderLookups().require_repository("user-service")

        assert uri.endswith("/user-service")
        ecr.describe_repositories.assert_called_once_with(repositoryNames=["user-service"])

    def test_repository_not_found(self, clients):
        _, ecr = clients
        ecr.describe_repositories.side_effect = ClientError(
            {"Error": {"Code": "RepositoryNotFoundException", "Message": "nope"}},
            "DescribeRepositories",
        )

        with pytest.raises(ImageRepositoryNotFoundError, match="admin-service"):
            ProviderLookups().require_repository("admin-service")

    def test_other_ecr_errors_propagate(self, clients):
        _, ecr = clients
        ecr.describe_repositories.side_effect = ClientError(
            {"Error": {"Code": "AccessDeniedException", "Message": "denied"}},
            "DescribeRepositories",
        )

        with pytest.raises(ClientError):
            ProviderLookups().require_repository("user-service")
