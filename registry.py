import json
import logging
import time
from dataclasses import dataclass
from typing import Dict, Optional, Protocol, Tuple

import requests
from web3 import Web3
from web3.exceptions import ContractLogicError, Web3Exception

from lookup_errors import RegistryUnavailableError
from name_codec import namehash

logger = logging.getLogger(__name__)

ZERO_ADDRESS = "0x" + "00" * 20

FINDER_ABI = [
    {
        "inputs": [{"name": "node", "type": "bytes32"}],
        "name": "lookup",
        "outputs": [
            {"name": "verifier", "type": "address"},
            {"name": "gateways", "type": "string[]"},
        ],
        "stateMutability": "view",
        "type": "function",
    }
]


@dataclass(frozen=True)
class RegistryEntry:
    verifier: str
    gateways: Tuple[str, ...] = ()


class Registry(Protocol):
    def lookup(self, node: bytes) -> Optional[RegistryEntry]:
        ...


class InMemoryRegistry:
    """
    Registry snapshot keyed by namehash.
    Used for tests and for offline mode (REGISTRY_SNAPSHOT).
    """

    def __init__(self, entries: Optional[Dict[str, dict]] = None):
        self._entries: Dict[bytes, RegistryEntry] = {}
        for name, record in (entries or {}).items():
            self.register(name, record["verifier"], record.get("gateways", ()))

    @classmethod
    def from_json(cls, path):
        with open(path, "r", encoding="utf-8") as f:
            return cls(json.load(f))

    def register(self, name: str, verifier: str, gateways=()):
        labels = name.split(".") if name not in ("", ".") else []
        entry = RegistryEntry(Web3.to_checksum_address(verifier), tuple(gateways))
        self._entries[namehash(labels)] = entry

    def clear(self):
        self._entries.clear()

    def lookup(self, node: bytes) -> Optional[RegistryEntry]:
        return self._entries.get(node)

    def __len__(self):
        return len(self._entries)


class OnchainRegistry:
    """Reads entries from the finder contract through a JSON-RPC node."""

    def __init__(self, w3: Web3, address: str, retries: int = 3, backoff: float = 1.0):
        self.w3 = w3
        self.address = Web3.to_checksum_address(address)
        self.retries = max(1, retries)
        self.backoff = backoff
        self.contract = w3.eth.contract(address=self.address, abi=FINDER_ABI)

    @classmethod
    def from_url(cls, rpc_url: str, address: str, timeout: float = 10, retries: int = 3):
        w3 = Web3(Web3.HTTPProvider(rpc_url, request_kwargs={"timeout": timeout}))
        return cls(w3, address, retries=retries)

    def lookup(self, node: bytes) -> Optional[RegistryEntry]:
        verifier, gateways = self._call(node)
        if int(verifier, 16) == 0:
            return None
        return RegistryEntry(Web3.to_checksum_address(verifier), tuple(gateways))

    def _call(self, node: bytes):
        last_error = None
        for attempt in range(1, self.retries + 1):
            try:
                return self.contract.functions.lookup(node).call()
            except ContractLogicError as e:
                raise RegistryUnavailableError(f"lookup reverted for 0x{node.hex()}: {e}") from e
            except (requests.exceptions.RequestException, TimeoutError, Web3Exception) as e:
                last_error = e
                logger.warning("Registry lookup failed (attempt %d/%d): %s", attempt, self.retries, e)
                if attempt < self.retries:
                    time.sleep(self.backoff * attempt)
        raise RegistryUnavailableError(
            f"registry {self.address} unreachable after {self.retries} attempts"
        ) from last_error


def build_registry(settings) -> Registry:
    if settings.snapshot_path:
        logger.info("Using offline registry snapshot %s", settings.snapshot_path)
        return InMemoryRegistry.from_json(settings.snapshot_path)
    if not settings.rpc_url:
        raise RuntimeError("Missing RPC_URL (or REGISTRY_SNAPSHOT) in .env file")
    return OnchainRegistry.from_url(
        settings.rpc_url,
        settings.finder_address,
        timeout=settings.timeout,
        retries=settings.retries,
    )
