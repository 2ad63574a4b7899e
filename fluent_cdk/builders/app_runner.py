# Standard Library
from typing import Any, Dict, Iterable, Optional, Tuple, Union

# Third Party
from aws_cdk import aws_apprunner as apprunner, aws_iam as iam
from aws_lambda_powertools import Logger
from pydantic import BaseModel, ConfigDict, Field

# Local Modules
from fluent_cdk.builders.base import ConfigBuilder, ResourceSpec
from fluent_cdk.errors import MissingConfigurationError
from fluent_cdk.utils.config import DEFAULT_HEALTH_CHECK_PATH
from fluent_cdk.utils.enums import (
    AppRunnerInstanceSize,
    HealthCheckProtocol,
    ImageRepositoryType,
)
from fluent_cdk.utils.tags import Tag, to_cfn_tags

# Initialize logger
logger = Logger(service="app-runner-service-builder")

# (cpu, memory) for each pre-configured instance size
INSTANCE_SIZES: Dict[AppRunnerInstanceSize, Tuple[str, str]] = {
    AppRunnerInstanceSize.small: ("0.25 vCPU", "0.5 GB"),
    AppRunnerInstanceSize.medium: ("0.5 vCPU", "1 GB"),
    AppRunnerInstanceSize.large: ("1 vCPU", "2 GB"),
    AppRunnerInstanceSize.xlarge: ("2 vCPU", "4 GB"),
}


class AppRunnerServiceConfig(BaseModel):
    """Partial configuration of an App Runner service.

    Attributes:
        construct_id: Construct ID, defaults to the service name.
        source_configuration: Source of the service (image or code).
        instance_configuration: CPU, memory and instance role settings.
        health_check_configuration: Health check settings.
        auto_scaling_configuration_arn: ARN of an auto scaling configuration.
        instance_role: IAM role assumed by the running instances.
        access_role: IAM role App Runner uses to pull the source image.
        tags: Tag pairs in the order they were added.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    construct_id: Optional[str] = Field(
        None, description="Construct ID of the service"
    )
    source_configuration: Optional[Any] = Field(
        None, description="apprunner.CfnService.SourceConfigurationProperty"
    )
    instance_configuration: Optional[Any] = Field(
        None, description="apprunner.CfnService.InstanceConfigurationProperty"
    )
    health_check_configuration: Optional[Any] = Field(
        None,
        description="apprunner.CfnService.HealthCheckConfigurationProperty",
    )
    auto_scaling_configuration_arn: Optional[str] = Field(
        None, description="ARN of the auto scaling configuration"
    )
    instance_role: Optional[Any] = Field(
        None, description="iam.IRole assumed by the service instances"
    )
    access_role: Optional[Any] = Field(
        None, description="iam.IRole used to access the image repository"
    )
    tags: Tuple[Tuple[str, str], ...] = Field(
        default_factory=tuple, description="Tag pairs in accumulation order"
    )


class AppRunnerServiceSpec(ResourceSpec):
    """Finalized App Runner service ready to be added to a stack."""

    resource_kind = "App Runner service"

    @property
    def service(self) -> apprunner.CfnService:
        return self._require_resource()

    @property
    def service_url(self) -> str:
        return self.service.attr_service_url

    @property
    def service_arn(self) -> str:
        return self.service.attr_service_arn

    @property
    def service_id(self) -> str:
        return self.service.attr_service_id

    @property
    def service_status(self) -> str:
        return self.service.attr_status


class AppRunnerServiceBuilder(ConfigBuilder[AppRunnerServiceConfig]):
    """Fluent builder for App Runner services.

    Parameters
    ----------
    name : str
        The name of the App Runner service.
    config : Optional[AppRunnerServiceConfig], optional
        An initial configuration, by default an empty one.
    """

    config_type = AppRunnerServiceConfig

    def __init__(
        self, name: str, config: Optional[AppRunnerServiceConfig] = None
    ) -> None:
        super().__init__(config)
        self.name = name

    def construct_id(self, construct_id: str) -> "AppRunnerServiceBuilder":
        return self._with(construct_id=construct_id)

    def source_configuration(
        self, source: apprunner.CfnService.SourceConfigurationProperty
    ) -> "AppRunnerServiceBuilder":
        return self._with(source_configuration=source)

    def instance_configuration(
        self, instance: apprunner.CfnService.InstanceConfigurationProperty
    ) -> "AppRunnerServiceBuilder":
        return self._with(instance_configuration=instance)

    def instance_size(
        self, size: Union[AppRunnerInstanceSize, str]
    ) -> "AppRunnerServiceBuilder":
        """Set the instance configuration from a named preset."""
        return self._with(instance_configuration=instance_size(size))

    def health_check_configuration(
        self, health_check: apprunner.CfnService.HealthCheckConfigurationProperty
    ) -> "AppRunnerServiceBuilder":
        return self._with(health_check_configuration=health_check)

    def auto_scaling_configuration_arn(
        self, arn: str
    ) -> "AppRunnerServiceBuilder":
        return self._with(auto_scaling_configuration_arn=arn)

    def instance_role(self, role: iam.IRole) -> "AppRunnerServiceBuilder":
        return self._with(instance_role=role)

    def access_role(self, role: iam.IRole) -> "AppRunnerServiceBuilder":
        return self._with(access_role=role)

    def tag(self, key: str, value: str) -> "AppRunnerServiceBuilder":
        return self._with(tags=((key, value),))

    def tags(self, tags: Iterable[Tag]) -> "AppRunnerServiceBuilder":
        return self._with(tags=tuple(tags))

    def run(self) -> AppRunnerServiceSpec:
        """Validate the configuration and materialize the service properties.

        Returns
        -------
        AppRunnerServiceSpec
            The finalized service spec.

        Raises
        ------
        MissingConfigurationError
            If no source configuration was set.
        """
        config = self.config
        construct_id = config.construct_id or self.name

        if config.source_configuration is None:
            error = MissingConfigurationError(
                f"App Runner service '{self.name}'", "source_configuration"
            )
            logger.error(str(error))
            raise error

        source = config.source_configuration
        if config.access_role is not None:
            source = _with_access_role(source, config.access_role)

        instance = config.instance_configuration
        if config.instance_role is not None:
            instance = _with_instance_role(instance, config.instance_role)

        props: Dict[str, Any] = {
            "service_name": self.name,
            "source_configuration": source,
        }
        if instance is not None:
            props["instance_configuration"] = instance
        if config.health_check_configuration is not None:
            props["health_check_configuration"] = (
                config.health_check_configuration
            )
        if config.auto_scaling_configuration_arn is not None:
            props["auto_scaling_configuration_arn"] = (
                config.auto_scaling_configuration_arn
            )
        if config.tags:
            props["tags"] = to_cfn_tags(config.tags)

        logger.debug(
            f"Finalized App Runner service {self.name} with "
            f"properties {sorted(props)}"
        )
        return AppRunnerServiceSpec(self.name, construct_id, props)


def _with_access_role(
    source: apprunner.CfnService.SourceConfigurationProperty, role: iam.IRole
) -> apprunner.CfnService.SourceConfigurationProperty:
    existing = source.authentication_configuration
    return apprunner.CfnService.SourceConfigurationProperty(
        auto_deployments_enabled=source.auto_deployments_enabled,
        code_repository=source.code_repository,
        image_repository=source.image_repository,
        authentication_configuration=(
            apprunner.CfnService.AuthenticationConfigurationProperty(
                access_role_arn=role.role_arn,
                connection_arn=(
                    existing.connection_arn if existing is not None else None
                ),
            )
        ),
    )


def _with_instance_role(
    instance: Optional[apprunner.CfnService.InstanceConfigurationProperty],
    role: iam.IRole,
) -> apprunner.CfnService.InstanceConfigurationProperty:
    return apprunner.CfnService.InstanceConfigurationProperty(
        cpu=instance.cpu if instance is not None else None,
        memory=instance.memory if instance is not None else None,
        instance_role_arn=role.role_arn,
    )


def ecr_source(
    image_uri: str, port: int
) -> apprunner.CfnService.SourceConfigurationProperty:
    """Create a source configuration for an image in a private ECR repository.

    Parameters
    ----------
    image_uri : str
        The image identifier, e.g. ``123456789012.dkr.ecr.us-east-1.amazonaws.com/app:latest``.
    port : int
        The port the container listens on.

    Returns
    -------
    apprunner.CfnService.SourceConfigurationProperty
        Source configuration with automatic deployments enabled.
    """
    return apprunner.CfnService.SourceConfigurationProperty(
        auto_deployments_enabled=True,
        image_repository=apprunner.CfnService.ImageRepositoryProperty(
            image_identifier=image_uri,
            image_repository_type=ImageRepositoryType.ecr.value,
            image_configuration=apprunner.CfnService.ImageConfigurationProperty(
                port=str(port),
            ),
        ),
    )


def ecr_source_with_auto_deploy(
    image_uri: str, port: int, access_role: iam.IRole
) -> apprunner.CfnService.SourceConfigurationProperty:
    """Create an auto-deploying ECR source pulled with ``access_role``."""
    return _with_access_role(ecr_source(image_uri, port), access_role)


def ecr_public_source(
    image_uri: str, port: int
) -> apprunner.CfnService.SourceConfigurationProperty:
    """Create a source configuration for an ECR Public image.

    App Runner does not support automatic deployments for public images, so
    they are disabled.
    """
    return apprunner.CfnService.SourceConfigurationProperty(
        auto_deployments_enabled=False,
        image_repository=apprunner.CfnService.ImageRepositoryProperty(
            image_identifier=image_uri,
            image_repository_type=ImageRepositoryType.ecr_public.value,
            image_configuration=apprunner.CfnService.ImageConfigurationProperty(
                port=str(port),
            ),
        ),
    )


def instance_config(
    cpu: str, memory: str
) -> apprunner.CfnService.InstanceConfigurationProperty:
    return apprunner.CfnService.InstanceConfigurationProperty(
        cpu=cpu, memory=memory
    )


def instance_size(
    size: Union[AppRunnerInstanceSize, str],
) -> apprunner.CfnService.InstanceConfigurationProperty:
    """Create an instance configuration from a named preset.

    Parameters
    ----------
    size : Union[AppRunnerInstanceSize, str]
        One of ``small``, ``medium``, ``large`` or ``xlarge``.

    Returns
    -------
    apprunner.CfnService.InstanceConfigurationProperty
        The instance configuration for the preset.

    Raises
    ------
    ValueError
        If ``size`` is not a known preset.
    """
    cpu, memory = INSTANCE_SIZES[AppRunnerInstanceSize(size)]
    return instance_config(cpu, memory)


def health_check(
    path: str = DEFAULT_HEALTH_CHECK_PATH,
) -> apprunner.CfnService.HealthCheckConfigurationProperty:
    """Create the standard HTTP health check for ``path``."""
    return apprunner.CfnService.HealthCheckConfigurationProperty(
        path=path,
        protocol=HealthCheckProtocol.http.value,
        interval=5,
        timeout=2,
        healthy_threshold=1,
        unhealthy_threshold=5,
    )


def tcp_health_check() -> apprunner.CfnService.HealthCheckConfigurationProperty:
    return apprunner.CfnService.HealthCheckConfigurationProperty(
        protocol=HealthCheckProtocol.tcp.value,
        interval=5,
        timeout=2,
        healthy_threshold=1,
        unhealthy_threshold=5,
    )


def app_runner_service(name: str) -> AppRunnerServiceBuilder:
    """Create a new App Runner service builder.

    Example::

        spec = (
            app_runner_service("my-web-app")
            .source_configuration(ecr_source("my-repo:latest", 8080))
            .instance_size("small")
            .run()
        )
    """
    return AppRunnerServiceBuilder(name)
