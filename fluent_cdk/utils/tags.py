# Standard Library
from typing import Dict, Iterable, List, Tuple

# Third Party
from aws_cdk import CfnTag

Tag = Tuple[str, str]


def collapse_tags(tags: Iterable[Tag]) -> Dict[str, str]:
    """Collapse an ordered list of tag pairs into a keyed mapping.

    Keys keep the position of their first appearance while the value is
    taken from the last pair carrying that key.

    Parameters
    ----------
    tags : Iterable[Tag]
        The ``(key, value)`` pairs in accumulation order.

    Returns
    -------
    Dict[str, str]
        The tags keyed by tag key.
    """
    collapsed: Dict[str, str] = {}
    for key, value in tags:
        collapsed[key] = value
    return collapsed


def to_cfn_tags(tags: Iterable[Tag]) -> List[CfnTag]:
    """Materialize tag pairs as CloudFormation tags, one per distinct key."""
    return [
        CfnTag(key=key, value=value)
        for key, value in collapse_tags(tags).items()
    ]
