"""
Fixed values of the ERC-1271 protocol and the tool defaults.
"""

from eth_utils import keccak

# --------------------------------------------------------------------------- #
# ERC-1271                                                                    #
# --------------------------------------------------------------------------- #

IS_VALID_SIGNATURE_SIGNATURE = "isValidSignature(bytes32,bytes)"

# Magic value returned by a conforming contract when it accepts a signature
# (0x1626ba7e).
VALID_SIGNATURE: bytes = keccak(text=IS_VALID_SIGNATURE_SIGNATURE)[:4]

ERC1271_ABI = [
    {
        "constant": True,
        "inputs": [
            {"name": "hash", "type": "bytes32"},
            {"name": "signature", "type": "bytes"},
        ],
        "name": "isValidSignature",
        "outputs": [{"name": "magicValue", "type": "bytes4"}],
        "stateMutability": "view",
        "type": "function",
    }
]

PERSONAL_SIGN_PREFIX = b"\x19Ethereum Signed Message:\n"

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

# --------------------------------------------------------------------------- #
# defaults                                                                    #
# --------------------------------------------------------------------------- #

DEFAULT_RPC_URL = "https://cloudflare-eth.com"
DEFAULT_RPC_TIMEOUT = 10.0
DEFAULT_BLOCK_IDENTIFIER = "latest"
