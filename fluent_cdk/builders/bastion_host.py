# Standard Library
from typing import Any, Dict, Optional

# Third Party
from aws_cdk import aws_ec2 as ec2, aws_iam as iam
from aws_lambda_powertools import Logger
from pydantic import BaseModel, ConfigDict, Field

# Local Modules
from fluent_cdk.builders.base import ConfigBuilder, ResourceSpec

# Initialize logger
logger = Logger(service="bastion-host-builder")


class BastionHostConfig(BaseModel):
    """Partial configuration of a bastion host.

    All fields start unset; the instance type, machine image, subnet
    selection and IMDSv2 requirement are defaulted when the builder runs.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    construct_id: Optional[str] = Field(
        None, description="Construct ID of the bastion host"
    )
    vpc: Optional[Any] = Field(
        None, description="ec2.IVpc to launch the bastion host into"
    )
    instance_type: Optional[Any] = Field(None, description="ec2.InstanceType")
    machine_image: Optional[Any] = Field(
        None, description="ec2.IMachineImage"
    )
    subnet_selection: Optional[Any] = Field(
        None, description="ec2.SubnetSelection"
    )
    security_group: Optional[Any] = Field(
        None, description="ec2.ISecurityGroup"
    )
    instance_name: Optional[str] = Field(
        None, description="Name of the EC2 instance"
    )
    require_imdsv2: Optional[bool] = Field(
        None, description="Whether IMDSv2 is required on the instance"
    )


class BastionHostSpec(ResourceSpec):
    """Finalized bastion host ready to be added to a stack."""

    resource_kind = "Bastion host"

    @property
    def resource(self) -> ec2.BastionHostLinux:
        """The underlying ``BastionHostLinux``.

        Raises
        ------
        ResourceNotCreatedError
            If the bastion host has not been added to a stack yet.
        """
        return self._require_resource()

    @property
    def instance_id(self) -> str:
        return self.resource.instance_id

    @property
    def instance_private_ip(self) -> str:
        return self.resource.instance_private_ip

    @property
    def instance_public_ip(self) -> str:
        return self.resource.instance_public_ip

    @property
    def instance_availability_zone(self) -> str:
        return self.resource.instance_availability_zone

    @property
    def role(self) -> iam.IRole:
        return self.resource.role


def default_instance_type() -> ec2.InstanceType:
    return ec2.InstanceType.of(
        ec2.InstanceClass.BURSTABLE3, ec2.InstanceSize.NANO
    )


def default_machine_image() -> ec2.IMachineImage:
    return ec2.MachineImage.latest_amazon_linux2023()


def default_subnet_selection() -> ec2.SubnetSelection:
    return ec2.SubnetSelection(subnet_type=ec2.SubnetType.PUBLIC)


class BastionHostBuilder(ConfigBuilder[BastionHostConfig]):
    """Fluent builder for bastion hosts following AWS security practices.

    Defaults applied when the builder runs:

    - instance type ``t3.nano``
    - latest Amazon Linux 2023 image
    - public subnets
    - IMDSv2 required

    Parameters
    ----------
    name : str
        The name of the bastion host.
    config : Optional[BastionHostConfig], optional
        An initial configuration, by default an empty one.
    """

    config_type = BastionHostConfig

    def __init__(
        self, name: str, config: Optional[BastionHostConfig] = None
    ) -> None:
        super().__init__(config)
        self.name = name

    def construct_id(self, construct_id: str) -> "BastionHostBuilder":
        return self._with(construct_id=construct_id)

    def vpc(self, vpc: ec2.IVpc) -> "BastionHostBuilder":
        return self._with(vpc=vpc)

    def instance_type(
        self, instance_type: ec2.InstanceType
    ) -> "BastionHostBuilder":
        return self._with(instance_type=instance_type)

    def machine_image(
        self, image: ec2.IMachineImage
    ) -> "BastionHostBuilder":
        return self._with(machine_image=image)

    def subnet_selection(
        self, selection: ec2.SubnetSelection
    ) -> "BastionHostBuilder":
        return self._with(subnet_selection=selection)

    def security_group(
        self, security_group: ec2.ISecurityGroup
    ) -> "BastionHostBuilder":
        return self._with(security_group=security_group)

    def instance_name(self, name: str) -> "BastionHostBuilder":
        return self._with(instance_name=name)

    def require_imdsv2(self, require: bool = True) -> "BastionHostBuilder":
        return self._with(require_imdsv2=require)

    def run(self) -> BastionHostSpec:
        config = self.config
        construct_id = config.construct_id or self.name

        props: Dict[str, Any] = {}

        # A bastion host cannot be created without a VPC, but the spec can
        if config.vpc is not None:
            props["vpc"] = config.vpc
        else:
            logger.warning(
                f"VPC is required for bastion host {self.name}; it will fail "
                "to be created until one is set"
            )

        props["instance_type"] = (
            config.instance_type
            if config.instance_type is not None
            else default_instance_type()
        )
        props["machine_image"] = (
            config.machine_image
            if config.machine_image is not None
            else default_machine_image()
        )
        props["subnet_selection"] = (
            config.subnet_selection
            if config.subnet_selection is not None
            else default_subnet_selection()
        )
        props["require_imdsv2"] = (
            config.require_imdsv2 if config.require_imdsv2 is not None else True
        )

        if config.security_group is not None:
            props["security_group"] = config.security_group
        if config.instance_name is not None:
            props["instance_name"] = config.instance_name

        logger.debug(f"Finalized bastion host {self.name}")
        return BastionHostSpec(self.name, construct_id, props)


def bastion_host(name: str) -> BastionHostBuilder:
    """Create a bastion host builder.

    Example::

        spec = (
            bastion_host("MyBastion")
            .vpc(my_vpc)
            .instance_name("bastion-host")
            .run()
        )
    """
    return BastionHostBuilder(name)
