"""Per-service deployment settings for the Fargate services."""

from dataclasses import dataclass, field

from .config import EnvironmentProfile, InfraSettings
from .errors import ConfigurationError

APPLICATION_SERVICES = ("user", "admin")


@dataclass(frozen=True)
class HealthCheckPolicy:
    """Target group health check."""

    path: str = "/"
    interval_seconds: int = 30
    timeout_seconds: int = 5
    healthy_threshold: int = 2
    unhealthy_threshold: int = 2

    def __post_init__(self) -> None:
        if self.timeout_seconds >= self.interval_seconds:
            raise ConfigurationError(
                f"Health check timeout ({self.timeout_seconds}s) must be shorter "
                f"than the interval ({self.interval_seconds}s)"
            )
        if self.healthy_threshold < 1 or self.unhealthy_threshold < 1:
            raise ConfigurationError("Health check thresholds must be >= 1")


@dataclass(frozen=True)
class ServiceDeploymentSpec:
    """What one application service runs as."""

    service_name: str
    container_port: int = 3000
    cpu: int = 256
    memory_mib: int = 512
    desired_count: int = 1
    image_tag: str = "latest"
    domain_name: str | None = None
    health_check: HealthCheckPolicy = field(default_factory=HealthCheckPolicy)

    @property
    def repository_name(self) -> str:
        return f"{self.service_name}-service"

    @property
    def construct_base(self) -> str:
        # "user" -> "UserService"
        return f"{self.service_name.capitalize()}Service"


def service_domain(service_name: str, profile: EnvironmentProfile, root_domain: str) -> str:
    """Custom domain for a service, e.g. user-dev.example.com or user.example.com."""
    return f"{profile.physical_name(service_name)}.{root_domain.rstrip('.')}"


def build_service_specs(
    profile: EnvironmentProfile,
    settings: InfraSettings,
    root_domain: str | None = None,
) -> list[ServiceDeploymentSpec]:
    """
    Build the deployment spec of every application service.

    Args:
        profile: Resolved environment profile
        settings: Deployment settings (image tag, container port)
        root_domain: Hosted zone domain, None to skip custom domains

    Returns:
        One spec per application service, in declaration order
    """
    return [
        ServiceDeploymentSpec(
            service_name=name,
            container_port=settings.container_port,
            image_tag=settings.image_tag,
            domain_name=service_domain(name, profile, root_domain) if root_domain else None,
        )
        for name in APPLICATION_SERVICES
    ]
