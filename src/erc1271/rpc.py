"""
RPC capability consumed by the validator.

Any object exposing ``get_code`` and ``call`` with web3.py's ``Eth``
signatures can be used, so ``Web3(...).eth`` works as-is and tests can pass
a small dummy.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol, Union

from web3 import Web3

from .constants import DEFAULT_BLOCK_IDENTIFIER, DEFAULT_RPC_TIMEOUT

logger = logging.getLogger(__name__)

BlockIdentifier = Union[str, int, bytes]


class RpcClient(Protocol):
    def get_code(self, account: str, block_identifier: Optional[BlockIdentifier] = None) -> bytes:
        ...

    def call(
        self,
        transaction: Dict[str, Any],
        block_identifier: Optional[BlockIdentifier] = None,
    ) -> bytes:
        ...


@dataclass(frozen=True)
class CallOptions:
    """Read-only call parameters: the ``from`` account and the block to read at."""

    from_address: Optional[str] = None
    block_identifier: BlockIdentifier = DEFAULT_BLOCK_IDENTIFIER


def connect(rpc_url: str, timeout: float = DEFAULT_RPC_TIMEOUT) -> Web3:
    """Build a ``Web3`` HTTP client with a per-request timeout and no retries.

    Retrying transient failures is left to the caller.
    """
    logger.debug("connecting to %s (timeout %ss)", rpc_url, timeout)
    provider = Web3.HTTPProvider(
        rpc_url,
        request_kwargs={"timeout": timeout},
        exception_retry_configuration=None,
    )
    return Web3(provider)
