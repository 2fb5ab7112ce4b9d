"""
ERC-1271 smart contract signature validation.

Asks the signer's contract (or a configured validator contract) whether it
accepts a signature over the personal-sign digest of a message.
"""

from .constants import VALID_SIGNATURE
from .contract_caller import ContractCaller
from .exceptions import InvalidInputError, TransportError, ValidatorError
from .rpc import CallOptions, RpcClient, connect
from .utils import is_zero_address, text_hash
from .validator import Validator

__all__ = [
    "VALID_SIGNATURE",
    "CallOptions",
    "ContractCaller",
    "InvalidInputError",
    "RpcClient",
    "TransportError",
    "Validator",
    "ValidatorError",
    "connect",
    "is_zero_address",
    "text_hash",
]
