"""Unit tests for the errors module."""

# Local Modules
from fluent_cdk.errors import (
    BuilderError,
    MissingConfigurationError,
    ResourceAlreadyAttachedError,
    ResourceNotCreatedError,
)


class TestErrors:
    """Test cases for the builder exceptions."""

    def test_missing_configuration_message(self):
        """Test the message names the field and the resource."""
        error = MissingConfigurationError(
            "App Runner service 'web'", "source_configuration"
        )

        assert str(error) == (
            "source configuration is required for App Runner service 'web'"
        )
        assert error.field == "source_configuration"
        assert error.resource == "App Runner service 'web'"
        assert isinstance(error, BuilderError)
        assert isinstance(error, ValueError)

    def test_resource_not_created_message(self):
        """Test the message tells the caller to create the resource first."""
        error = ResourceNotCreatedError("Bastion host 'MyBastion'")

        assert "Bastion host 'MyBastion' has not been created yet" in str(error)
        assert isinstance(error, RuntimeError)

    def test_resource_already_attached(self):
        """Test the already attached error is a builder error."""
        error = ResourceAlreadyAttachedError("Permission 'p'")

        assert isinstance(error, BuilderError)
        assert "Permission 'p'" in str(error)
