"""Unit tests for the bucket_metrics builder module."""

# Standard Library
from unittest.mock import MagicMock, patch

# Third Party
import pytest

# Local Modules
from fluent_cdk.builders.bucket_metrics import (
    BucketMetricsConfig,
    bucket_metrics,
    entire_bucket_metrics,
    prefix_metrics,
)
from fluent_cdk.errors import MissingConfigurationError, ResourceNotCreatedError


class TestBucketMetricsBuilder:
    """Test cases for the BucketMetricsBuilder class."""

    def test_entire_bucket(self):
        """Test an id-only configuration."""
        spec = bucket_metrics().id("EntireBucket").run()

        assert spec.id == "EntireBucket"
        assert spec.props["id"] == "EntireBucket"
        assert "prefix" not in spec.props
        assert spec.props["tag_filters"] == {}

    @patch("fluent_cdk.builders.bucket_metrics.logger")
    def test_missing_id(self, mock_logger):
        """Test finalizing without an id fails."""
        with pytest.raises(MissingConfigurationError) as exc_info:
            bucket_metrics().run()

        assert exc_info.value.field == "id"
        assert "id is required" in str(exc_info.value)
        mock_logger.error.assert_called_once()

    def test_missing_id_with_prefix(self):
        """Test a prefix alone does not satisfy the id requirement."""
        with pytest.raises(MissingConfigurationError):
            bucket_metrics().prefix("uploads/").run()

    def test_prefix(self):
        """Test the prefix is copied across."""
        spec = bucket_metrics().id("uploads-metrics").prefix("uploads/").run()

        assert spec.props["prefix"] == "uploads/"

    def test_tag_filters_accumulate(self):
        """Test tag filters from repeated calls are all kept."""
        spec = (
            bucket_metrics()
            .id("tagged-metrics")
            .tag_filter("env", "prod")
            .tag_filters([("team", "analytics")])
            .run()
        )

        assert spec.props["tag_filters"] == {
            "env": "prod",
            "team": "analytics",
        }

    def test_duplicate_tag_filter_last_wins(self):
        """Test a repeated tag filter key keeps its last value."""
        builder = (
            bucket_metrics()
            .id("tagged-metrics")
            .tag_filter("env", "dev")
            .tag_filter("env", "prod")
        )

        assert builder.config.tag_filters == (("env", "dev"), ("env", "prod"))
        assert builder.run().props["tag_filters"] == {"env": "prod"}

    def test_first_id_wins(self):
        """Test setting the id twice keeps the first value."""
        spec = bucket_metrics().id("first").id("second").run()

        assert spec.id == "first"

    def test_merge_fragment(self):
        """Test a fragment fills only unset fields."""
        fragment = BucketMetricsConfig(id="fragment", prefix="logs/")
        spec = bucket_metrics().id("explicit").merge(fragment).run()

        assert spec.id == "explicit"
        assert spec.props["prefix"] == "logs/"

    def test_metrics_struct(self):
        """Test the properties convert into a BucketMetrics struct."""
        struct = prefix_metrics("logs", "logs/").metrics

        assert struct.id == "logs"
        assert struct.prefix == "logs/"
        assert struct.tag_filters == {}

    def test_entire_bucket_metrics_helper(self):
        """Test the entire bucket preset."""
        spec = entire_bucket_metrics()

        assert dict(spec.props) == {"id": "EntireBucket", "tag_filters": {}}

    def test_bucket_before_and_after_attach(self):
        """Test the bucket is only available once attached."""
        spec = entire_bucket_metrics()

        with pytest.raises(ResourceNotCreatedError):
            spec.bucket_name

        bucket = MagicMock()
        bucket.bucket_name = "my-bucket"
        spec.attach(bucket)

        assert spec.bucket is bucket
        assert spec.bucket_name == "my-bucket"

    @patch("fluent_cdk.builders.bucket_metrics.logger")
    def test_run_logs_finalization(self, mock_logger):
        """Test finalizing a metrics configuration is logged at debug level."""
        bucket_metrics().id("EntireBucket").run()

        mock_logger.debug.assert_called_once()
        assert "EntireBucket" in mock_logger.debug.call_args[0][0]

    @patch("fluent_cdk.builders.base.logger")
    def test_bucket_before_attach_logs_error(self, mock_logger):
        """Test reading the bucket before it exists is logged."""
        spec = entire_bucket_metrics()

        with pytest.raises(ResourceNotCreatedError):
            spec.bucket

        mock_logger.error.assert_called_once()
