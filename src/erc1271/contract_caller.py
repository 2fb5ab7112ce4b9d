"""
ABI adapter for the single ERC-1271 method

    isValidSignature(bytes32 hash, bytes signature) returns (bytes4)

The selector and argument types are derived from ``ERC1271_ABI``; calldata is
built with ``eth_abi`` and sent as a plain ``eth_call`` so that any
:class:`erc1271.rpc.RpcClient` can serve it.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Union

from eth_abi import decode, encode
from eth_utils import to_hex
from eth_utils.abi import (
    function_abi_to_4byte_selector,
    get_abi_input_types,
    get_abi_output_types,
)

from .constants import ERC1271_ABI
from .exceptions import InvalidInputError
from .rpc import CallOptions, RpcClient
from .utils import AddressLike, to_address

logger = logging.getLogger(__name__)

__all__ = ["ContractCaller"]


def _bind(abi: List[Dict[str, Any]], name: str) -> Dict[str, Any]:
    for entry in abi:
        if entry.get("type") == "function" and entry.get("name") == name:
            return entry
    raise ValueError(f"function {name!r} not found in ABI")


class ContractCaller:
    """Read-only caller for ``isValidSignature`` on one contract."""

    METHOD = "isValidSignature"

    def __init__(self, address: AddressLike, client: RpcClient, abi: Optional[List[Dict[str, Any]]] = None):
        self.address = to_address(address)
        self.client = client

        fn_abi = _bind(abi if abi is not None else ERC1271_ABI, self.METHOD)
        self.selector: bytes = function_abi_to_4byte_selector(fn_abi)
        self.input_types = get_abi_input_types(fn_abi)
        self.output_types = get_abi_output_types(fn_abi)

    def encode_call(self, hash: bytes, signature: Union[bytes, bytearray]) -> bytes:
        if len(hash) != 32:
            raise InvalidInputError(f"hash must be 32 bytes, got {len(hash)}")
        return self.selector + encode(self.input_types, [bytes(hash), bytes(signature)])

    def decode_result(self, data: bytes) -> bytes:
        (magic_value,) = decode(self.output_types, bytes(data))
        return magic_value

    def is_valid_signature(
        self,
        hash: bytes,
        signature: Union[bytes, bytearray],
        *,
        call_opts: Optional[CallOptions] = None,
    ) -> bytes:
        """
        Call ``isValidSignature(hash, signature)`` and return the 4-byte answer.

        Reverts, RPC failures and undecodable output are raised unchanged;
        deciding what they mean is up to the caller.
        """
        opts = call_opts or CallOptions()
        tx: Dict[str, Any] = {"to": self.address, "data": to_hex(self.encode_call(hash, signature))}
        if opts.from_address:
            tx["from"] = to_address(opts.from_address)

        logger.debug("eth_call %s.%s at %s", self.address, self.METHOD, opts.block_identifier)
        raw = self.client.call(tx, opts.block_identifier)
        return self.decode_result(raw)
