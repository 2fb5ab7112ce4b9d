"""
Address and hex helpers shared by the validator and the CLI.

Public API
----------
is_zero_address(value)
    True only for the all-zero 20-byte address (hex string or raw bytes).
to_address(value)
    EIP-55 checksum address, or ``InvalidInputError``.
decode_hex(value)
    Raw bytes from a hex string (``0x`` optional) or bytes.
text_hash(message)
    Personal-sign digest handed to ``isValidSignature``.
"""
from __future__ import annotations

from typing import Union

from eth_utils import is_hex_address, keccak, to_bytes, to_checksum_address

from .constants import PERSONAL_SIGN_PREFIX
from .exceptions import InvalidInputError

__all__ = ["is_zero_address", "to_address", "decode_hex", "text_hash"]

AddressLike = Union[str, bytes, bytearray]


def is_zero_address(value: object) -> bool:
    if isinstance(value, (bytes, bytearray)):
        return len(value) == 20 and not any(value)
    if isinstance(value, str) and is_hex_address(value):
        return not any(to_bytes(hexstr=value))
    return False


def to_address(value: AddressLike) -> str:
    """Normalise *value* to a checksum address.

    Mixed-case input is accepted without checksum verification, the same way
    most RPC tooling treats user supplied addresses.
    """
    if isinstance(value, (bytes, bytearray)):
        if len(value) != 20:
            raise InvalidInputError(f"address must be 20 bytes, got {len(value)}")
        return to_checksum_address("0x" + bytes(value).hex())
    if isinstance(value, str) and is_hex_address(value.strip()):
        return to_checksum_address(value.strip().lower())
    raise InvalidInputError(f"invalid address: {value!r}")


def decode_hex(value: Union[str, bytes, bytearray]) -> bytes:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if not isinstance(value, str):
        raise InvalidInputError(f"expected hex string or bytes, got {type(value).__name__}")
    try:
        # odd-length input is left-padded with a single zero nibble
        return to_bytes(hexstr=value.strip())
    except ValueError as e:
        raise InvalidInputError(f"invalid hex value {value!r}: {e}") from e


def text_hash(message: Union[str, bytes]) -> bytes:
    """
    keccak256("\\x19Ethereum Signed Message:\\n" + len(message) + message)

    ``str`` messages are UTF-8 encoded first, the length is the byte length.
    """
    if isinstance(message, str):
        message = message.encode("utf-8")
    return keccak(PERSONAL_SIGN_PREFIX + str(len(message)).encode() + bytes(message))
