# Standard Library
from typing import Any, Dict, Optional

# Third Party
from aws_cdk import aws_iam as iam, aws_lambda as lambda_
from aws_lambda_powertools import Logger
from pydantic import BaseModel, ConfigDict, Field

# Local Modules
from fluent_cdk.builders.base import ConfigBuilder, ResourceSpec
from fluent_cdk.errors import MissingConfigurationError

# Initialize logger
logger = Logger(service="function-permission-builder")


class PermissionConfig(BaseModel):
    """Partial configuration of a Lambda function permission grant."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    principal: Optional[Any] = Field(
        None, description="iam.IPrincipal allowed to invoke the function"
    )
    action: Optional[str] = Field(
        None, description="Action to allow, e.g. lambda:InvokeFunction"
    )
    source_arn: Optional[str] = Field(
        None, description="ARN of the resource allowed to invoke"
    )
    source_account: Optional[str] = Field(
        None, description="Account that owns the invoking resource"
    )
    event_source_token: Optional[str] = Field(
        None, description="Token required from Alexa Smart Home invokers"
    )


class PermissionSpec(ResourceSpec):
    """Finalized permission grant.

    The live resource is the Lambda function the permission was added to.
    """

    resource_kind = "Permission"

    @property
    def id(self) -> str:
        return self.name

    @property
    def permission(self) -> lambda_.Permission:
        """The materialized properties as a ``lambda_.Permission`` struct."""
        return lambda_.Permission(**self.props)

    @property
    def function(self) -> lambda_.IFunction:
        return self._require_resource()

    @property
    def function_arn(self) -> str:
        return self.function.function_arn


class PermissionBuilder(ConfigBuilder[PermissionConfig]):
    """Fluent builder for Lambda function permission grants.

    Parameters
    ----------
    id : str
        The ID of the permission statement on the function.
    config : Optional[PermissionConfig], optional
        An initial configuration, by default an empty one.
    """

    config_type = PermissionConfig

    def __init__(
        self, id: str, config: Optional[PermissionConfig] = None
    ) -> None:
        super().__init__(config)
        self.id = id

    def principal(self, principal: iam.IPrincipal) -> "PermissionBuilder":
        return self._with(principal=principal)

    def action(self, action: str) -> "PermissionBuilder":
        return self._with(action=action)

    def source_arn(self, arn: str) -> "PermissionBuilder":
        return self._with(source_arn=arn)

    def source_account(self, account: str) -> "PermissionBuilder":
        return self._with(source_account=account)

    def event_source_token(self, token: str) -> "PermissionBuilder":
        return self._with(event_source_token=token)

    def run(self) -> PermissionSpec:
        """Validate the grant and materialize its properties.

        Raises
        ------
        MissingConfigurationError
            If no principal was set.
        """
        config = self.config

        if config.principal is None:
            error = MissingConfigurationError(
                f"permission '{self.id}'", "principal"
            )
            logger.error(str(error))
            raise error

        props: Dict[str, Any] = {"principal": config.principal}
        for field in (
            "action",
            "source_arn",
            "source_account",
            "event_source_token",
        ):
            value = getattr(config, field)
            if value is not None:
                props[field] = value

        logger.debug(
            f"Finalized permission {self.id} with properties {sorted(props)}"
        )
        return PermissionSpec(self.id, self.id, props)


def permission(id: str) -> PermissionBuilder:
    return PermissionBuilder(id)
