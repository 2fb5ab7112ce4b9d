#!/usr/bin/env python3
"""
Command-line front end.

Usage
  python -m erc1271 -a 0xSIGNER -m "Hello go test!" -s 0xSIGNATURE \
    [-r https://rpc.url] [-v 0xVALIDATOR] [--vs 0x1626ba7e] [-d]

Prints ``true`` or ``false``. Exit status is 0 when validity was determined,
1 when the RPC node could not be queried and 2 for missing or malformed input.
"""
from __future__ import annotations

import argparse
import logging
from typing import Optional

from .config import load_settings
from .exceptions import InvalidInputError, TransportError
from .rpc import connect
from .validator import Validator

logger = logging.getLogger("erc1271")

EXIT_OK = 0
EXIT_TRANSPORT = 1
EXIT_USAGE = 2


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="erc1271-validate", description="Validate an ERC-1271 signature")
    p.add_argument("-r", "--rpc", dest="rpc", default=None, help="RPC url (default $RPC_URL or https://cloudflare-eth.com)")
    p.add_argument("-m", "--message", dest="message", default="", help="Message that was signed")
    p.add_argument("-a", "--address", dest="address", default=None, help="Signer address")
    p.add_argument("-s", "--sig", "--signature", dest="signature", default=None, help="Signature to validate (hex)")
    p.add_argument("-v", "--validator", dest="validator", default=None, help="Validator address (must be a contract)")
    p.add_argument(
        "--vs", "--valid-signature", "--valid_signature",
        dest="valid_signature",
        default=None,
        help="Custom valid signature (expected successful response, 4 bytes hex)",
    )
    p.add_argument("-d", "--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--env", dest="env_file", default=None, help="Path to .env file to load")
    p.add_argument("--timeout", dest="timeout", type=float, default=None, help="RPC timeout in seconds (default $RPC_TIMEOUT or 10)")
    return p


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = load_settings(args.env_file)
    except InvalidInputError as e:
        logger.error("%s", e)
        return EXIT_USAGE

    rpc_url = args.rpc or settings.rpc_url
    timeout = args.timeout if args.timeout is not None else settings.rpc_timeout
    validator_address = args.validator or settings.validator_address
    valid_signature = args.valid_signature or settings.valid_signature

    if not rpc_url:
        logger.error("empty rpc url provided")
        return EXIT_USAGE
    if not args.address:
        logger.error("empty signer address provided")
        return EXIT_USAGE
    if not args.signature:
        logger.error("empty signature provided")
        return EXIT_USAGE

    logger.debug(
        "arguments: signer=%s message=%r signature=%s rpc=%s validator=%s valid_signature=%s",
        args.address, args.message, args.signature, rpc_url, validator_address, valid_signature,
    )

    try:
        validator = Validator.from_web3(connect(rpc_url, timeout))
        if validator_address:
            validator = validator.with_validator_address(validator_address)
        if valid_signature:
            validator = validator.with_custom_valid_signature(valid_signature)
        valid = validator.validate(args.message.encode("utf-8"), args.address, args.signature)
    except InvalidInputError as e:
        logger.error("invalid input: %s", e)
        return EXIT_USAGE
    except TransportError as e:
        logger.error("failed to validate signature: %s", e)
        return EXIT_TRANSPORT

    print("true" if valid else "false")
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
