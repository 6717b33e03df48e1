import logging
from typing import List, NamedTuple

from lookup_errors import NoResolverFoundError
from name_codec import suffix_nodes
from registry import Registry, RegistryEntry

logger = logging.getLogger(__name__)


class WalkMatch(NamedTuple):
    name: str
    node: bytes
    entry: RegistryEntry


def walk(labels: List[str], registry: Registry) -> WalkMatch:
    """
    Longest-suffix match: query the registry for the full name, then each
    parent, then the root, and return the first registered entry.
    """
    for depth, node in enumerate(suffix_nodes(labels)):
        suffix = ".".join(labels[depth:])
        entry = registry.lookup(node)
        logger.debug("Probed %s (0x%s): %s", suffix or ".", node.hex(), entry)
        if entry is not None:
            return WalkMatch(suffix, node, entry)
    raise NoResolverFoundError(".".join(labels))
