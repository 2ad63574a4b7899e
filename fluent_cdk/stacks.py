# Standard Library
from typing import Optional

# Third Party
from aws_cdk import (
    CfnOutput,
    RemovalPolicy,
    Stack,
    aws_apprunner as apprunner,
    aws_ec2 as ec2,
    aws_lambda as lambda_,
    aws_s3 as s3,
)
from aws_lambda_powertools import Logger
from constructs import Construct

# Local Modules
from fluent_cdk.builders import (
    AppRunnerServiceSpec,
    BastionHostSpec,
    BucketMetricsSpec,
    PermissionSpec,
    app_runner_service,
    bastion_host,
)
from fluent_cdk.builders.app_runner import ecr_public_source, health_check
from fluent_cdk.builders.bucket_metrics import (
    entire_bucket_metrics,
    prefix_metrics,
)
from fluent_cdk.builders.base import ResourceSpec
from fluent_cdk.errors import (
    MissingConfigurationError,
    ResourceAlreadyAttachedError,
)
from fluent_cdk.utils.config import DEFAULT_CONTAINER_PORT

# Initialize logger
logger = Logger(service="fluent-stack")


class FluentStack(Stack):
    """Stack that creates resources from finalized builder specs.

    Each ``add_*`` method hands the spec's properties to CDK and attaches the
    created construct back onto the spec so its live attributes can be read.
    A spec that already holds a live resource is rejected before anything is
    added to the stack.
    """

    def _reject_created(self, spec: ResourceSpec) -> None:
        if spec.is_created:
            error = ResourceAlreadyAttachedError(spec.description)
            logger.error(str(error))
            raise error

    def add_app_runner_service(
        self, spec: AppRunnerServiceSpec
    ) -> apprunner.CfnService:
        """Create a ``CfnService`` from ``spec``.

        Parameters
        ----------
        spec : AppRunnerServiceSpec
            The finalized App Runner service spec.

        Returns
        -------
        apprunner.CfnService
            The created service, also attached to ``spec``.

        Raises
        ------
        ResourceAlreadyAttachedError
            If the spec has already been added to a stack.
        """
        self._reject_created(spec)

        service = apprunner.CfnService(self, spec.construct_id, **spec.props)
        spec.attach(service)
        logger.info(f"Added {spec.description} as {spec.construct_id}")
        return service

    def add_bastion_host(self, spec: BastionHostSpec) -> ec2.BastionHostLinux:
        """Create a ``BastionHostLinux`` from ``spec``.

        Parameters
        ----------
        spec : BastionHostSpec
            The finalized bastion host spec.

        Returns
        -------
        ec2.BastionHostLinux
            The created bastion host, also attached to ``spec``.

        Raises
        ------
        ResourceAlreadyAttachedError
            If the spec has already been added to a stack.
        MissingConfigurationError
            If the spec was finalized without a VPC.
        """
        self._reject_created(spec)

        if "vpc" not in spec.props:
            error = MissingConfigurationError(spec.description, "vpc")
            logger.error(str(error))
            raise error

        bastion = ec2.BastionHostLinux(self, spec.construct_id, **spec.props)
        spec.attach(bastion)
        logger.info(f"Added {spec.description} as {spec.construct_id}")
        return bastion

    def grant_permission(
        self, function: lambda_.IFunction, spec: PermissionSpec
    ) -> None:
        """Add the permission described by ``spec`` to ``function``.

        Parameters
        ----------
        function : lambda_.IFunction
            The function receiving the permission.
        spec : PermissionSpec
            The finalized permission spec.

        Raises
        ------
        ResourceAlreadyAttachedError
            If the permission has already been granted on a function.
        """
        self._reject_created(spec)

        function.add_permission(spec.id, **spec.props)
        spec.attach(function)
        logger.info(f"Granted {spec.description} on {function.node.id}")

    def add_bucket_metrics(
        self, bucket: s3.Bucket, spec: BucketMetricsSpec
    ) -> None:
        """Add the metrics configuration described by ``spec`` to ``bucket``.

        Parameters
        ----------
        bucket : s3.Bucket
            The bucket receiving the metrics configuration.
        spec : BucketMetricsSpec
            The finalized metrics spec.

        Raises
        ------
        ResourceAlreadyAttachedError
            If the configuration has already been added to a bucket.
        """
        self._reject_created(spec)

        bucket.add_metric(**spec.props)
        spec.attach(bucket)
        logger.info(f"Added {spec.description} to {bucket.node.id}")


class SampleServiceStack(FluentStack):
    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        stack_suffix: Optional[str] = "",
        **kwargs,
    ) -> None:
        """Sample stack wiring an App Runner service, a bastion host and an
        S3 bucket with metrics from CDK context.

        Parameters
        ----------
        scope : Construct
            The scope in which this construct is defined.
        construct_id : str
            The ID of the construct.
        stack_suffix : Optional[str], optional
            Suffix to append to resource names for this stack, by default ""
        """
        super().__init__(scope, construct_id, **kwargs)

        # region Context Configuration
        self.stack_suffix = (stack_suffix if stack_suffix else "").lower()
        service_name = self.node.try_get_context("service_name") or "web-app"
        image_uri = (
            self.node.try_get_context("image_uri")
            or "public.ecr.aws/nginx/nginx:latest"
        )
        container_port = int(
            self.node.try_get_context("container_port")
            or DEFAULT_CONTAINER_PORT
        )
        instance_size = self.node.try_get_context("instance_size") or "small"
        bastion_enabled = bool(self.node.try_get_context("bastion_enabled"))
        # endregion

        # region App Runner Service
        self.service = (
            app_runner_service(f"{service_name}{self.stack_suffix}")
            .construct_id("AppRunnerService")
            .source_configuration(ecr_public_source(image_uri, container_port))
            .instance_size(instance_size)
            .health_check_configuration(health_check())
            .tag("Service", service_name)
            .run()
        )
        self.add_app_runner_service(self.service)

        CfnOutput(self, "ServiceUrl", value=self.service.service_url)
        # endregion

        # region Bastion Host
        if bastion_enabled:
            vpc = ec2.Vpc(self, "BastionVpc", max_azs=2, nat_gateways=0)
            self.bastion = (
                bastion_host(f"bastion{self.stack_suffix}")
                .construct_id("BastionHost")
                .vpc(vpc)
                .instance_name(f"{service_name}-bastion{self.stack_suffix}")
                .run()
            )
            self.add_bastion_host(self.bastion)

            CfnOutput(self, "BastionInstanceId", value=self.bastion.instance_id)
        # endregion

        # region Access Logs Bucket
        bucket = s3.Bucket(
            self,
            "AccessLogsBucket",
            encryption=s3.BucketEncryption.S3_MANAGED,
            block_public_access=s3.BlockPublicAccess.BLOCK_ALL,
            enforce_ssl=True,
            removal_policy=RemovalPolicy.DESTROY,
            auto_delete_objects=True,
        )
        self.add_bucket_metrics(bucket, entire_bucket_metrics())
        self.add_bucket_metrics(
            bucket, prefix_metrics("AppRunnerLogs", f"{service_name}/")
        )
        # endregion
