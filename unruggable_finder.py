import logging
import sys
from typing import List, NamedTuple

from gateway_set import resolve_gateways
from known_names import KNOWN_NAMES
from lookup_errors import UnruggableLookupError
from name_codec import dns_decode, dns_encode, normalize
from registry import Registry, build_registry
from registry_walker import walk
from settings import load_settings

logger = logging.getLogger(__name__)


class LookupResult(NamedTuple):
    verifier: str
    gateways: List[str]


class UnruggableFinder:
    """
    Finds the verifier and gateways responsible for a name.
    Every call goes to the registry; results are never cached.
    """

    def __init__(self, registry: Registry):
        self.registry = registry

    def find_unruggable(self, encoded: bytes) -> LookupResult:
        labels = dns_decode(encoded)
        match = walk(labels, self.registry)
        gateways = resolve_gateways(match.entry)
        logger.info("%s matched %s -> %s", ".".join(labels), match.name or ".", match.entry.verifier)
        return LookupResult(match.entry.verifier, gateways)

    def find(self, name: str) -> LookupResult:
        return self.find_unruggable(dns_encode(normalize(name)))


def find_unruggable(encoded: bytes, registry: Registry) -> LookupResult:
    return UnruggableFinder(registry).find_unruggable(encoded)


def main(argv=None):
    names = argv if argv is not None else sys.argv[1:]
    if not names:
        names = [meta["name"] for meta in KNOWN_NAMES.values() if meta["name"]]

    try:
        finder = UnruggableFinder(build_registry(load_settings()))
    except RuntimeError as e:
        print(f"❌ {e}")
        return 2
    failed = 0
    for name in names:
        print(f"DEBUG: Resolving {name}")
        try:
            verifier, gateways = finder.find(name)
        except UnruggableLookupError as e:
            failed += 1
            print(f"❌ {name}: {e}")
            continue
        print(f"✅ {name} -> {verifier}")
        for url in gateways:
            print(f"   {url}")
    return 1 if failed else 0


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    sys.exit(main())
