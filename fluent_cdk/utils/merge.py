# Standard Library
from typing import TypeVar

# Third Party
from pydantic import BaseModel

ConfigT = TypeVar("ConfigT", bound=BaseModel)


def merge_configs(first: ConfigT, second: ConfigT) -> ConfigT:
    """Merge two partial configurations of the same type.

    The earlier configuration takes precedence: for every optional slot the
    value from ``first`` is kept when set, otherwise the value from ``second``
    is used. Tuple slots (tags, tag filters) are concatenated with the pairs
    of ``first`` ahead of those of ``second``. Neither input is modified.

    Parameters
    ----------
    first : ConfigT
        The earlier (inner) configuration fragment.
    second : ConfigT
        The later (outer) configuration fragment.

    Returns
    -------
    ConfigT
        A new configuration combining both fragments.

    Raises
    ------
    TypeError
        If the two configurations are not of the same type.
    """
    if type(first) is not type(second):
        raise TypeError(
            f"Cannot merge {type(first).__name__} with {type(second).__name__}"
        )

    values = {}
    for name in type(first).model_fields:
        first_value = getattr(first, name)
        second_value = getattr(second, name)
        if isinstance(first_value, tuple):
            values[name] = first_value + second_value
        else:
            values[name] = (
                first_value if first_value is not None else second_value
            )

    return type(first)(**values)
