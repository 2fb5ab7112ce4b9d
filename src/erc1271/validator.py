"""
ERC-1271 signature validator.

Usage
  from erc1271 import Validator, connect

  w3 = connect("https://cloudflare-eth.com")
  validator = Validator.from_web3(w3)
  ok = validator.validate(b"Hello go test!", signer, signature_hex)

Outcome classes
  - ``True``   the contract returned the expected magic value
  - ``False``  no contract code at the target, the call reverted or halted
               (invalid opcode, out of gas, ...), the answer could not be
               decoded, or the answer differs from the magic value
  - raises     ``TransportError`` when the node could not be asked at all,
               ``InvalidInputError`` for malformed addresses or signature hex
"""
from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from typing import Optional, Union

from eth_abi.exceptions import DecodingError
from web3 import Web3
from web3.exceptions import BadFunctionCallOutput, ContractLogicError, Web3RPCError

from .constants import DEFAULT_BLOCK_IDENTIFIER, VALID_SIGNATURE
from .contract_caller import ContractCaller
from .exceptions import InvalidInputError, TransportError
from .rpc import BlockIdentifier, CallOptions, RpcClient
from .utils import AddressLike, decode_hex, is_zero_address, text_hash, to_address

logger = logging.getLogger(__name__)

__all__ = ["Validator"]

# Errors meaning the contract answered but did not accept the signature.
REJECTION_ERRORS = (ContractLogicError, BadFunctionCallOutput, DecodingError)

# JSON-RPC code nodes use for EVM execution errors.
EXECUTION_ERROR_CODE = 3

# geth VM errors, reported with code -32000 when the call halts without reverting.
VM_ERROR_MESSAGES = (
    "invalid opcode",
    "out of gas",
    "invalid jump destination",
    "stack underflow",
    "stack limit reached",
    "write protection",
    "return data out of bounds",
    "execution reverted",
)


def is_execution_error(error: Web3RPCError) -> bool:
    """True when the node reports the EVM halted while running the call."""
    response = getattr(error, "rpc_response", None) or {}
    rpc_error = response.get("error") if isinstance(response, dict) else None
    if not isinstance(rpc_error, dict):
        return False
    if rpc_error.get("code") == EXECUTION_ERROR_CODE:
        return True
    message = str(rpc_error.get("message") or "").lower()
    return any(vm_error in message for vm_error in VM_ERROR_MESSAGES)


@dataclass(frozen=True)
class Validator:
    """Immutable ERC-1271 validation settings bound to an RPC client.

    ``with_*`` methods return a new validator and leave the receiver as is,
    so a single instance can be shared between threads.
    """

    client: RpcClient = field(compare=False, repr=False)
    validator_address: Optional[str] = None
    valid_signature: bytes = VALID_SIGNATURE
    block_identifier: BlockIdentifier = DEFAULT_BLOCK_IDENTIFIER

    def __post_init__(self) -> None:
        address = self.validator_address
        if address is not None:
            address = None if is_zero_address(address) else to_address(address)
        object.__setattr__(self, "validator_address", address)

        magic = decode_hex(self.valid_signature)
        if len(magic) != 4:
            raise InvalidInputError(f"valid signature must be 4 bytes, got {len(magic)}")
        object.__setattr__(self, "valid_signature", magic)

    @classmethod
    def from_web3(cls, w3: Web3) -> "Validator":
        return cls(w3.eth)

    # ------------------------------------------------------------------ #
    # configuration                                                      #
    # ------------------------------------------------------------------ #

    def with_validator_address(self, address: Optional[AddressLike]) -> "Validator":
        """Call *address* instead of the signer; zero or ``None`` clears it."""
        return dataclasses.replace(self, validator_address=address)

    def with_custom_valid_signature(self, value: Union[str, bytes]) -> "Validator":
        """Compare results against a non-standard 4-byte magic value."""
        return dataclasses.replace(self, valid_signature=value)

    def with_block_identifier(self, block_identifier: BlockIdentifier) -> "Validator":
        return dataclasses.replace(self, block_identifier=block_identifier)

    # ------------------------------------------------------------------ #
    # checks                                                             #
    # ------------------------------------------------------------------ #

    def resolve_target(self, signer: AddressLike) -> str:
        if self.validator_address is not None:
            return self.validator_address
        return to_address(signer)

    def is_contract(self, address: AddressLike) -> bool:
        address = to_address(address)
        try:
            code = self.client.get_code(address, self.block_identifier)
        except Exception as e:
            logger.debug("failed to check if %s is a contract: %s", address, e)
            raise TransportError(f"eth_getCode for {address} failed: {e}", address=address) from e
        return len(code) > 0

    def validate(
        self,
        message: Union[str, bytes],
        signer: AddressLike,
        signature: Union[str, bytes],
    ) -> bool:
        """Tell whether *signature* over *message* is accepted for *signer*.

        Args:
            message: Raw message; hashed with the personal-sign prefix.
            signer: Signer address, used as ``from`` of the call and as the
                call target unless a validator address is configured.
            signature: Signature as hex (``0x`` optional) or bytes.

        Returns:
            True when the contract returned the configured magic value.
        """
        signer_address = to_address(signer)
        target = self.resolve_target(signer_address)
        logger.debug("signer %s, validator %s", signer_address, target)

        if not self.is_contract(target):
            logger.debug("%s is not a contract", target)
            return False

        digest = text_hash(message)
        signature_bytes = decode_hex(signature)

        caller = ContractCaller(target, self.client)
        opts = CallOptions(from_address=signer_address, block_identifier=self.block_identifier)
        try:
            result = caller.is_valid_signature(digest, signature_bytes, call_opts=opts)
        except REJECTION_ERRORS as e:
            logger.debug("invalid signature: %s rejected the call (%s)", target, e)
            return False
        except Web3RPCError as e:
            if is_execution_error(e):
                logger.debug("invalid signature: %s halted (%s)", target, e)
                return False
            logger.debug("isValidSignature call to %s failed: %s", target, e)
            raise TransportError(f"isValidSignature call to {target} failed: {e}", address=target) from e
        except Exception as e:
            logger.debug("isValidSignature call to %s failed: %s", target, e)
            raise TransportError(f"isValidSignature call to {target} failed: {e}", address=target) from e

        valid = result == self.valid_signature
        logger.debug("%s returned 0x%s, expected 0x%s", target, result.hex(), self.valid_signature.hex())
        return valid
