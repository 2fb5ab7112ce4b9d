#!/usr/bin/env python3
"""
Allows running the validator with: python -m erc1271
"""

from .cli import main

if __name__ == "__main__":
    raise SystemExit(main())
