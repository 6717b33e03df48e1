import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

# Finder contract deployed on mainnet
DEFAULT_FINDER_ADDRESS = "0xED73a03F19e8D849E44a39252d222c6ad5217E1e"


@dataclass(frozen=True)
class Settings:
    rpc_url: Optional[str] = None
    finder_address: str = DEFAULT_FINDER_ADDRESS
    timeout: float = 10.0
    retries: int = 3
    snapshot_path: Optional[str] = None


def _env_number(key: str, default: str, cast):
    raw = os.getenv(key, default)
    try:
        return cast(raw)
    except ValueError:
        raise RuntimeError(f"Invalid {key}={raw!r} in .env file (expected {cast.__name__})") from None


def load_settings() -> Settings:
    """Read configuration from the environment (and .env, if present)."""
    load_dotenv()
    return Settings(
        rpc_url=os.getenv("RPC_URL") or None,
        finder_address=os.getenv("FINDER_ADDRESS") or DEFAULT_FINDER_ADDRESS,
        timeout=_env_number("REGISTRY_TIMEOUT", "10", float),
        retries=_env_number("REGISTRY_RETRIES", "3", int),
        snapshot_path=os.getenv("REGISTRY_SNAPSHOT") or None,
    )
