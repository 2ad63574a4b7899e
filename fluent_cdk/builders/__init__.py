"""Fluent builders wrapping AWS CDK constructs with opinionated defaults.

Each builder accumulates an immutable configuration where the first value set
for a field wins and tag lists accumulate, then finalizes it with ``run()``
into a spec holding the materialized construct properties and, once the
construct is created, the live resource.

The builders included in this module are:
- AppRunnerServiceBuilder: App Runner service (``CfnService``).
- BastionHostBuilder: Bastion host (``BastionHostLinux``).
- PermissionBuilder: Lambda function permission grant.
- BucketMetricsBuilder: S3 bucket metrics configuration.
"""

from .app_runner import (
    AppRunnerServiceBuilder,
    AppRunnerServiceConfig,
    AppRunnerServiceSpec,
    app_runner_service,
)
from .bastion_host import (
    BastionHostBuilder,
    BastionHostConfig,
    BastionHostSpec,
    bastion_host,
)
from .bucket_metrics import (
    BucketMetricsBuilder,
    BucketMetricsConfig,
    BucketMetricsSpec,
    bucket_metrics,
)
from .function_permission import (
    PermissionBuilder,
    PermissionConfig,
    PermissionSpec,
    permission,
)

__all__ = [
    "AppRunnerServiceBuilder",
    "AppRunnerServiceConfig",
    "AppRunnerServiceSpec",
    "app_runner_service",
    "BastionHostBuilder",
    "BastionHostConfig",
    "BastionHostSpec",
    "bastion_host",
    "BucketMetricsBuilder",
    "BucketMetricsConfig",
    "BucketMetricsSpec",
    "bucket_metrics",
    "PermissionBuilder",
    "PermissionConfig",
    "PermissionSpec",
    "permission",
]
