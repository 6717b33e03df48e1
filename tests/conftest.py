import os
import sys
from typing import Optional

import pytest

# Add project root to sys.path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from registry import InMemoryRegistry, RegistryEntry

DRPC_BASE = "https://lb.drpc.org/gateway/unruggable?network=base"
BASE_3668 = "https://base.3668.io"
TEAMNICK_VERIFIER = "0x82304C5f4A08cfA38542664C5B78e1969cA49Cec"
REVERSE_VERIFIER = "0x074C93CD956B0Dd2cAc0f9F11dDA4d3893a88149"


class RecordingRegistry(InMemoryRegistry):
    """Snapshot that remembers every node it was asked for."""

    def __init__(self, entries=None):
        self.queried = []
        super().__init__(entries)

    def clear(self):
        super().clear()
        self.queried.clear()

    def lookup(self, node: bytes) -> Optional[RegistryEntry]:
        self.queried.append(node)
        return super().lookup(node)


@pytest.fixture
def registry_snapshot():
    registry = RecordingRegistry({
        "teamnick.eth": {"verifier": TEAMNICK_VERIFIER, "gateways": [DRPC_BASE]},
        "80002105.reverse": {
            "verifier": REVERSE_VERIFIER,
            "gateways": [DRPC_BASE, BASE_3668, DRPC_BASE],
        },
    })
    yield registry
    registry.clear()
