# Local Modules
from fluent_cdk.builders import (
    app_runner_service,
    bastion_host,
    bucket_metrics,
    permission,
)
from fluent_cdk.errors import (
    BuilderError,
    MissingConfigurationError,
    ResourceAlreadyAttachedError,
    ResourceNotCreatedError,
)
from fluent_cdk.stacks import FluentStack

__all__ = [
    "app_runner_service",
    "bastion_host",
    "bucket_metrics",
    "permission",
    "BuilderError",
    "MissingConfigurationError",
    "ResourceAlreadyAttachedError",
    "ResourceNotCreatedError",
    "FluentStack",
]
