# Standard Library
import copy
from types import MappingProxyType
from typing import Any, Generic, Mapping, Optional, Type, TypeVar

# Third Party
from aws_lambda_powertools import Logger
from pydantic import BaseModel

# Local Modules
from fluent_cdk.errors import (
    ResourceAlreadyAttachedError,
    ResourceNotCreatedError,
)
from fluent_cdk.utils.merge import merge_configs

# Initialize logger
logger = Logger(service="fluent-cdk-builders")

ConfigT = TypeVar("ConfigT", bound=BaseModel)
BuilderT = TypeVar("BuilderT", bound="ConfigBuilder")


class ConfigBuilder(Generic[ConfigT]):
    """Immutable fluent builder accumulating a configuration record.

    Every option method returns a new builder whose configuration is the
    current one merged with a single-field fragment, so the first value set
    for a field is the one that sticks and tag lists accumulate.
    """

    config_type: Type[ConfigT]

    def __init__(self, config: Optional[ConfigT] = None) -> None:
        self.config = config if config is not None else self.config_type()

    def merge(self: BuilderT, fragment: ConfigT) -> BuilderT:
        """Fold a configuration fragment into the accumulated configuration.

        Parameters
        ----------
        fragment : ConfigT
            A partial configuration; fields already set on this builder keep
            their value.

        Returns
        -------
        BuilderT
            A new builder carrying the merged configuration.
        """
        builder = copy.copy(self)
        builder.config = merge_configs(self.config, fragment)
        return builder

    def _with(self: BuilderT, **fields: Any) -> BuilderT:
        return self.merge(self.config_type(**fields))

    def run(self) -> "ResourceSpec":
        raise NotImplementedError


class ResourceSpec:
    """Finalized configuration plus a write-once slot for the live resource.

    Parameters
    ----------
    name : str
        The logical name of the resource.
    construct_id : str
        The construct ID used when the resource is added to a stack.
    props : Mapping[str, Any]
        The resolved keyword arguments for the wrapped CDK construct.
    """

    resource_kind = "Resource"

    def __init__(
        self,
        name: str,
        construct_id: str,
        props: Mapping[str, Any],
    ) -> None:
        self.name = name
        self.construct_id = construct_id
        self._props = MappingProxyType(dict(props))
        self._resource: Optional[Any] = None

    @property
    def description(self) -> str:
        return f"{self.resource_kind} '{self.name}'"

    @property
    def props(self) -> Mapping[str, Any]:
        """Read-only view of the materialized properties."""
        return self._props

    @property
    def is_created(self) -> bool:
        return self._resource is not None

    def attach(self, resource: Any) -> None:
        """Record the live resource created from this spec.

        Parameters
        ----------
        resource : Any
            The construct created by CDK from :attr:`props`.

        Raises
        ------
        ResourceAlreadyAttachedError
            If a resource has already been attached.
        """
        if self._resource is not None:
            logger.error(
                f"Live resource already attached to {self.description}"
            )
            raise ResourceAlreadyAttachedError(self.description)

        self._resource = resource
        logger.debug(f"Attached live resource to {self.description}")

    def _require_resource(self) -> Any:
        if self._resource is None:
            error = ResourceNotCreatedError(self.description)
            logger.error(str(error))
            raise error
        return self._resource

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(name={self.name!r}, "
            f"construct_id={self.construct_id!r}, "
            f"created={self.is_created})"
        )
