#!/usr/bin/env python3
"""
Generate a JWT secret key for the meterbill API.

Usage:
    python3 scripts/generate_jwt_secret.py

    # Use directly in environment
    export METERBILL_JWT_SECRET=$(python3 scripts/generate_jwt_secret.py)

    # Longer secret
    python3 scripts/generate_jwt_secret.py --bytes 64
"""

import argparse
import secrets


def generate_jwt_secret(length: int = 32) -> str:
    """
    Generate a cryptographically secure JWT secret key.

    Parameters
    ----------
    length : int, optional
        Number of random bytes (default: 32, i.e. 256 bits).

    Returns
    -------
    str
        URL-safe base64-encoded random string.
    """
    return secrets.token_urlsafe(length)


def main():
    """Print a JWT secret for METERBILL_JWT_SECRET."""
    parser = argparse.ArgumentParser(description="Generate a meterbill JWT secret")
    parser.add_argument("--bytes", type=int, default=32, help="Random bytes (default: 32)")
    args = parser.parse_args()

    print(generate_jwt_secret(args.bytes))


if __name__ == "__main__":
    main()
