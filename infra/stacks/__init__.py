from .compute_stack import ComputeStack
from .domain_stack import DnsCertificateBundle, DomainStack, ServiceCertificate
from .network_stack import NetworkStack, NetworkTopology
from .seed_stack import SeedStack
from .storage_stack import PARTITION_KEY_NAME, SORT_KEY_NAME, StorageStack

__all__ = [
    "ComputeStack",
    "DnsCertificateBundle",
    "DomainStack",
    "NetworkStack",
    "NetworkTopology",
    "PARTITION_KEY_NAME",
    "SORT_KEY_NAME",
    "SeedStack",
    "ServiceCertificate",
    "StorageStack",
]
