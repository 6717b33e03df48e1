from registry import RegistryEntry


def resolve_gateways(entry: RegistryEntry):
    # dict keeps insertion order, so the first occurrence of each URL wins
    return list(dict.fromkeys(entry.gateways))
