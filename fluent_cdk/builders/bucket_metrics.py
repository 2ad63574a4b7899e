# Standard Library
from typing import Any, Dict, Iterable, Optional, Tuple

# Third Party
from aws_cdk import aws_s3 as s3
from aws_lambda_powertools import Logger
from pydantic import BaseModel, ConfigDict, Field

# Local Modules
from fluent_cdk.builders.base import ConfigBuilder, ResourceSpec
from fluent_cdk.errors import MissingConfigurationError
from fluent_cdk.utils.config import DEFAULT_BUCKET_METRICS_ID
from fluent_cdk.utils.tags import Tag, collapse_tags

# Initialize logger
logger = Logger(service="bucket-metrics-builder")


class BucketMetricsConfig(BaseModel):
    """Partial configuration of an S3 bucket metrics filter.

    Attributes:
        id: Identifier of the metrics configuration.
        prefix: Only objects under this key prefix are measured.
        tag_filters: Tag pairs objects must carry to be measured.
    """

    model_config = ConfigDict(frozen=True)

    id: Optional[str] = Field(None, description="Metrics configuration ID")
    prefix: Optional[str] = Field(None, description="Object key prefix")
    tag_filters: Tuple[Tuple[str, str], ...] = Field(
        default_factory=tuple, description="Tag filter pairs"
    )


class BucketMetricsSpec(ResourceSpec):
    """Finalized metrics filter.

    The live resource is the bucket the configuration was added to.
    """

    resource_kind = "Bucket metrics"

    @property
    def id(self) -> str:
        return self.name

    @property
    def metrics(self) -> s3.BucketMetrics:
        """The materialized properties as an ``s3.BucketMetrics`` struct."""
        return s3.BucketMetrics(**self.props)

    @property
    def bucket(self) -> s3.IBucket:
        return self._require_resource()

    @property
    def bucket_name(self) -> str:
        return self.bucket.bucket_name


class BucketMetricsBuilder(ConfigBuilder[BucketMetricsConfig]):
    """Fluent builder for S3 bucket metrics configurations."""

    config_type = BucketMetricsConfig

    def id(self, id: str) -> "BucketMetricsBuilder":
        return self._with(id=id)

    def prefix(self, prefix: str) -> "BucketMetricsBuilder":
        return self._with(prefix=prefix)

    def tag_filter(self, key: str, value: str) -> "BucketMetricsBuilder":
        return self._with(tag_filters=((key, value),))

    def tag_filters(self, filters: Iterable[Tag]) -> "BucketMetricsBuilder":
        return self._with(tag_filters=tuple(filters))

    def run(self) -> BucketMetricsSpec:
        """Validate and materialize the metrics configuration.

        Raises
        ------
        MissingConfigurationError
            If no id was set.
        """
        config = self.config

        if config.id is None:
            error = MissingConfigurationError("bucket metrics", "id")
            logger.error(str(error))
            raise error

        props: Dict[str, Any] = {
            "id": config.id,
            "tag_filters": collapse_tags(config.tag_filters),
        }
        if config.prefix is not None:
            props["prefix"] = config.prefix

        logger.debug(
            f"Finalized bucket metrics {config.id} with properties "
            f"{sorted(props)}"
        )
        return BucketMetricsSpec(config.id, config.id, props)


def bucket_metrics() -> BucketMetricsBuilder:
    return BucketMetricsBuilder()


def entire_bucket_metrics() -> BucketMetricsSpec:
    """Metrics filter measuring every object in the bucket."""
    return bucket_metrics().id(DEFAULT_BUCKET_METRICS_ID).run()


def prefix_metrics(id: str, prefix: str) -> BucketMetricsSpec:
    return bucket_metrics().id(id).prefix(prefix).run()
