#!/usr/bin/env python3
"""
CLI tool to sign a payload or build signed query string parameters.

Usage:
    python -m signer.src.cli.sign_payload \
        --client-id id1 \
        --client-secret secret1 \
        --param token=t --param page=p --param redirect_uri=r \
        --query

Credentials fall back to SIGNER_CLIENT_ID / SIGNER_CLIENT_SECRET, and
options to SIGNER_SELF_KEY / SIGNER_HASH_ALGO.
"""

import argparse
import json
import logging
import os
import sys
from typing import Dict, List, Optional

from ..config import SignerOptions
from ..errors import SignerError
from ..signer import Signer

logger = logging.getLogger(__name__)


def parse_params(items: List[str]) -> Dict[str, str]:
    """Parse repeated KEY=VALUE arguments; the value may itself contain "="."""
    params = {}
    for item in items:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise argparse.ArgumentTypeError(f"Expected KEY=VALUE, got {item!r}")
        params[key] = value
    return params


def load_payload(input_path: Optional[str], items: List[str]) -> dict:
    """Load payload from a JSON object file, then apply --param pairs on top."""
    payload = {}

    if input_path:
        with open(input_path, 'r') as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise argparse.ArgumentTypeError(f"{input_path} must contain a JSON object")
        payload.update(data)

    payload.update(parse_params(items))
    return payload


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Sign a payload for a redirect handoff')
    parser.add_argument('--client-id', default=os.getenv('SIGNER_CLIENT_ID'),
                        help='Client id (default: $SIGNER_CLIENT_ID)')
    parser.add_argument('--client-secret', default=os.getenv('SIGNER_CLIENT_SECRET'),
                        help='Client secret (default: $SIGNER_CLIENT_SECRET)')
    parser.add_argument('--self-key', help='Signing party key (default: $SIGNER_SELF_KEY or WePay)')
    parser.add_argument('--hash-algo', help='Hash algorithm (default: $SIGNER_HASH_ALGO or sha512)')
    parser.add_argument('--param', action='append', default=[], metavar='KEY=VALUE',
                        help='Payload field, may be repeated')
    parser.add_argument('--in', dest='input', help='JSON file holding the payload object')

    mode = parser.add_mutually_exclusive_group()
    mode.add_argument('--query', action='store_true', help='Print query string parameters')
    mode.add_argument('--verify', metavar='SIGNATURE', help='Check SIGNATURE against the payload')

    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    if not args.client_id or not args.client_secret:
        parser.error('--client-id and --client-secret are required (or set SIGNER_CLIENT_ID/SIGNER_CLIENT_SECRET)')

    try:
        payload = load_payload(args.input, args.param)
    except (OSError, ValueError, argparse.ArgumentTypeError) as e:
        parser.error(str(e))

    options = SignerOptions.from_env().merge({"self_key": args.self_key, "hash_algo": args.hash_algo})
    signer = Signer(args.client_id, args.client_secret, options)

    try:
        if args.verify is not None:
            valid = signer.verify(payload, args.verify)
            print("valid" if valid else "invalid")
            return 0 if valid else 1

        if args.query:
            print(signer.generate_query_string_params(payload))
        else:
            print(signer.sign(payload))
    except SignerError as e:
        logger.debug(f"Signing failed: {e!r}")
        print(f"{parser.prog}: error: {e}", file=sys.stderr)
        return 2

    return 0


if __name__ == '__main__':
    sys.exit(main())
