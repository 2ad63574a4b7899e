# Local Modules
from fluent_cdk.utils.enums import (
    AppRunnerInstanceSize,
    HealthCheckProtocol,
    ImageRepositoryType,
)
from fluent_cdk.utils.merge import merge_configs
from fluent_cdk.utils.tags import Tag, collapse_tags

__all__ = [
    "AppRunnerInstanceSize",
    "HealthCheckProtocol",
    "ImageRepositoryType",
    "merge_configs",
    "Tag",
    "collapse_tags",
]
