# Standard Library
from enum import Enum


class ImageRepositoryType(str, Enum):
    """Enumeration of App Runner image repository types.

    Attributes:
        ecr: Private Amazon ECR repository.
        ecr_public: Amazon ECR Public repository.
    """

    ecr = "ECR"
    ecr_public = "ECR_PUBLIC"


class HealthCheckProtocol(str, Enum):
    """Enumeration of App Runner health check protocols.

    Attributes:
        http: HTTP health check against a path.
        tcp: TCP health check against the service port.
    """

    http = "HTTP"
    tcp = "TCP"


class AppRunnerInstanceSize(str, Enum):
    """Enumeration of pre-configured App Runner instance sizes.

    Attributes:
        small: 0.25 vCPU, 0.5 GB.
        medium: 0.5 vCPU, 1 GB.
        large: 1 vCPU, 2 GB.
        xlarge: 2 vCPU, 4 GB.
    """

    small = "small"
    medium = "medium"
    large = "large"
    xlarge = "xlarge"
