class UnruggableLookupError(Exception):
    """Base class for every failure raised by the lookup path."""


class MalformedEncodingError(UnruggableLookupError, ValueError):
    pass


class NoResolverFoundError(UnruggableLookupError, LookupError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"no registered suffix for '{name or '.'}'")


class RegistryUnavailableError(UnruggableLookupError):
    """Registry could not be queried (timeout, transport error, revert)."""
