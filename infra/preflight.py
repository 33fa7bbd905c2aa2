"""Provider lookups run before a full deploy declares any stack.

The CDK hosted-zone context provider already fails a synth when the zone is
missing, but ECR references are not checked until the service tries to pull
its image. Checking both up front turns a half-converged deployment into an
immediate, named failure.
"""

import boto3
import structlog
from botocore.exceptions import ClientError

from .errors import HostedZoneNotFoundError, ImageRepositoryNotFoundError

logger = structlog.get_logger()


class ProviderLookups:
    """Read-only Route 53 and ECR lookups."""

    def __init__(self, region_name: str | None = None) -> None:
        self._route53 = boto3.client("route53")
        self._ecr = boto3.client("ecr", region_name=region_name)

    def require_hosted_zone(self, domain_name: str) -> str:
        """
        Find the public hosted zone for a domain.

        Args:
            domain_name: Root domain, with or without trailing dot

        Returns:
            The hosted zone id

        Raises:
            HostedZoneNotFoundError: If no public zone matches exactly
        """
        wanted = domain_name.rstrip(".") + "."
        response = self._route53.list_hosted_zones_by_name(DNSName=wanted, MaxItems="1")
        for zone in response.get("HostedZones", []):
            if zone["Name"] == wanted and not zone.get("Config", {}).get("PrivateZone", False):
                logger.info("Hosted zone found", domain=domain_name, zone_id=zone["Id"])
                return zone["Id"]

        logger.error("Hosted zone not found", domain=domain_name)
        raise HostedZoneNotFoundError(f"Hosted zone not found: {domain_name}")

    def require_repository(self, repository_name: str) -> str:
        """
        Check that an ECR repository exists.

        Args:
            repository_name: Repository name, e.g. "user-service"

        Returns:
            The repository URI

        Raises:
            ImageRepositoryNotFoundError: If the repository does not exist
        """
        try:
            response = self._ecr.describe_repositories(repositoryNames=[repository_name])
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "")
            if error_code == "RepositoryNotFoundException":
                logger.error("Image repository not found", repository=repository_name)
                raise ImageRepositoryNotFoundError(
                    f"Image repository not found: {repository_name}"
                ) from e
            raise

        uri = response["repositories"][0]["repositoryUri"]
        logger.info("Image repository found", repository=repository_name, uri=uri)
        return uri
