"""Unit tests for the function_permission builder module."""

# Standard Library
from unittest.mock import MagicMock, patch

# Third Party
import pytest
from aws_cdk import aws_iam as iam

# Local Modules
from fluent_cdk.builders.function_permission import (
    PermissionConfig,
    permission,
)
from fluent_cdk.errors import MissingConfigurationError, ResourceNotCreatedError


class TestPermissionBuilder:
    """Test cases for the PermissionBuilder class."""

    def setup_method(self):
        """Set up test fixtures before each test method."""
        self.principal = MagicMock()

    def test_invoke_permission(self):
        """Test a principal and action materialize without optional fields."""
        spec = (
            permission("invoke-perm")
            .principal(self.principal)
            .action("lambda:InvokeFunction")
            .run()
        )

        assert spec.id == "invoke-perm"
        assert dict(spec.props) == {
            "principal": self.principal,
            "action": "lambda:InvokeFunction",
        }

    def test_all_fields(self):
        """Test every optional field is copied across."""
        spec = (
            permission("s3-invoke")
            .principal(self.principal)
            .action("lambda:InvokeFunction")
            .source_arn("arn:aws:s3:::my-bucket")
            .source_account("123456789012")
            .event_source_token("token")
            .run()
        )

        assert spec.props["source_arn"] == "arn:aws:s3:::my-bucket"
        assert spec.props["source_account"] == "123456789012"
        assert spec.props["event_source_token"] == "token"

    @patch("fluent_cdk.builders.function_permission.logger")
    def test_missing_principal(self, mock_logger):
        """Test finalizing without a principal fails."""
        with pytest.raises(MissingConfigurationError) as exc_info:
            permission("invoke-perm").action("lambda:InvokeFunction").run()

        assert exc_info.value.field == "principal"
        assert "principal is required" in str(exc_info.value)
        mock_logger.error.assert_called_once()

    def test_first_principal_wins(self):
        """Test the first principal set is kept."""
        other = MagicMock()
        spec = permission("p").principal(self.principal).principal(other).run()

        assert spec.props["principal"] is self.principal

    def test_merge_fragment(self):
        """Test a fragment fills only unset fields."""
        fragment = PermissionConfig(
            action="lambda:GetFunction", source_account="111111111111"
        )
        spec = (
            permission("p")
            .principal(self.principal)
            .action("lambda:InvokeFunction")
            .merge(fragment)
            .run()
        )

        assert spec.props["action"] == "lambda:InvokeFunction"
        assert spec.props["source_account"] == "111111111111"

    def test_permission_struct(self):
        """Test the properties convert into a lambda Permission struct."""
        principal = iam.ServicePrincipal("s3.amazonaws.com")
        spec = (
            permission("s3-invoke")
            .principal(principal)
            .action("lambda:InvokeFunction")
            .run()
        )

        struct = spec.permission

        assert struct.principal is principal
        assert struct.action == "lambda:InvokeFunction"
        assert struct.source_arn is None

    def test_function_before_and_after_attach(self):
        """Test the granted function is only available once attached."""
        spec = permission("p").principal(self.principal).run()

        with pytest.raises(ResourceNotCreatedError):
            spec.function

        function = MagicMock()
        function.function_arn = "arn:aws:lambda:function"
        spec.attach(function)

        assert spec.function is function
        assert spec.function_arn == "arn:aws:lambda:function"

    @patch("fluent_cdk.builders.function_permission.logger")
    def test_run_logs_finalization(self, mock_logger):
        """Test finalizing a permission is logged at debug level."""
        permission("p").principal(self.principal).action("lambda:*").run()

        mock_logger.debug.assert_called_once()
        assert "p" in mock_logger.debug.call_args[0][0]

    @patch("fluent_cdk.builders.base.logger")
    def test_function_before_attach_logs_error(self, mock_logger):
        """Test reading the function before it exists is logged."""
        spec = permission("p").principal(self.principal).run()

        with pytest.raises(ResourceNotCreatedError):
            spec.function_arn

        mock_logger.error.assert_called_once()
