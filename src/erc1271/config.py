"""
Environment configuration.

Variables
  RPC_URL                     JSON-RPC endpoint (default https://cloudflare-eth.com)
  RPC_TIMEOUT                 per-request timeout in seconds (default 10)
  ERC1271_VALIDATOR_ADDRESS   contract to call instead of the signer
  ERC1271_VALID_SIGNATURE     custom magic value (4 bytes hex)

A ``.env`` file in the working directory is loaded first, then the optional
file passed to :func:`load_settings`. Values already set in the process
environment win over both.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .constants import DEFAULT_RPC_TIMEOUT, DEFAULT_RPC_URL
from .exceptions import InvalidInputError


@dataclass(frozen=True)
class Settings:
    rpc_url: str = DEFAULT_RPC_URL
    rpc_timeout: float = DEFAULT_RPC_TIMEOUT
    validator_address: Optional[str] = None
    valid_signature: Optional[str] = None


def load_env(env_file: Optional[str] = None) -> None:
    base_env = Path(".env")
    if base_env.exists():
        load_dotenv(base_env)
    if env_file:
        if not Path(env_file).exists():
            raise InvalidInputError(f"env file not found: {env_file}")
        load_dotenv(env_file)


def _timeout_from_env() -> float:
    raw = os.getenv("RPC_TIMEOUT")
    if not raw:
        return DEFAULT_RPC_TIMEOUT
    try:
        return float(raw)
    except ValueError as e:
        raise InvalidInputError(f"RPC_TIMEOUT must be a number, got {raw!r}") from e


def load_settings(env_file: Optional[str] = None) -> Settings:
    load_env(env_file)
    return Settings(
        rpc_url=os.getenv("RPC_URL") or DEFAULT_RPC_URL,
        rpc_timeout=_timeout_from_env(),
        validator_address=os.getenv("ERC1271_VALIDATOR_ADDRESS") or None,
        valid_signature=os.getenv("ERC1271_VALID_SIGNATURE") or None,
    )
