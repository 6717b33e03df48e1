from ens.exceptions import InvalidName
from ens.utils import normalize_name
from web3 import Web3

from lookup_errors import MalformedEncodingError

# Constants
MAX_LABEL_LENGTH = 63
ROOT_NODE = bytes(32)
EVM_COIN_TYPE_BIT = 0x80000000


def dns_decode(encoded: bytes):
    """
    Split a DNS wire-encoded name into labels, most specific first.
    b'\\x05raffy\\x08teamnick\\x03eth\\x00' -> ['raffy', 'teamnick', 'eth']
    """
    labels = []
    pos = 0
    while True:
        if pos >= len(encoded):
            raise MalformedEncodingError("missing terminator")
        length = encoded[pos]
        pos += 1
        if length == 0:
            break
        if length > MAX_LABEL_LENGTH:
            raise MalformedEncodingError(f"label at offset {pos - 1} is {length} bytes")
        end = pos + length
        if end > len(encoded):
            raise MalformedEncodingError(f"label at offset {pos - 1} overruns buffer")
        if b"." in encoded[pos:end]:
            raise MalformedEncodingError(f"label at offset {pos - 1} contains '.'")
        try:
            labels.append(encoded[pos:end].decode("utf-8"))
        except UnicodeDecodeError as e:
            raise MalformedEncodingError(f"label at offset {pos - 1} is not utf-8") from e
        pos = end
    if pos != len(encoded):
        raise MalformedEncodingError(f"{len(encoded) - pos} trailing bytes after terminator")
    return labels


def dns_encode(name: str) -> bytes:
    if name in ("", "."):
        return b"\x00"
    out = bytearray()
    for label in name.split("."):
        raw = label.encode("utf-8")
        if not raw:
            raise MalformedEncodingError(f"empty label in '{name}'")
        if len(raw) > MAX_LABEL_LENGTH:
            raise MalformedEncodingError(f"label '{label[:16]}...' is {len(raw)} bytes")
        out.append(len(raw))
        out += raw
    out.append(0)
    return bytes(out)


def normalize(name: str) -> str:
    """ENSIP-15 normalization of a typed name (case folding, emoji, confusables)."""
    if name in ("", "."):
        return ""
    try:
        return normalize_name(name)
    except InvalidName as e:
        raise MalformedEncodingError(f"cannot normalize '{name}': {e}") from e


def labelhash(label: str) -> bytes:
    return bytes(Web3.keccak(text=label))


def namehash(labels) -> bytes:
    # Root first: node(l.p) = keccak(node(p) + labelhash(l))
    node = ROOT_NODE
    for label in reversed(labels):
        node = bytes(Web3.keccak(node + labelhash(label)))
    return node


def suffix_nodes(labels):
    """Namehash of every suffix of `labels`: full name first, root last."""
    nodes = [ROOT_NODE]
    for label in reversed(labels):
        nodes.append(bytes(Web3.keccak(nodes[-1] + labelhash(label))))
    nodes.reverse()
    return nodes


def reverse_name(address: str, chain_id: int = None) -> str:
    addr = address.lower()
    if addr.startswith("0x"):
        addr = addr[2:]
    if len(addr) != 40:
        raise ValueError(f"not a 20-byte address: {address}")
    if chain_id is None:
        return f"{addr}.addr.reverse"
    coin_type = EVM_COIN_TYPE_BIT | chain_id
    return f"{addr}.{coin_type:x}.reverse"
