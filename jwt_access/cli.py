"""
jwt-access Command Line Interface.

Provides commands for creating a service account key, producing an
Authorization header for a URI, and inspecting tokens.
"""

import argparse
import sys
import json
import os
import logging

from jwt_access.access import JWTAccess
from jwt_access.config import CREDENTIALS_ENV_VAR
from jwt_access.decode import decode_token
from jwt_access.errors import JWTAccessError
from jwt_access.keys import generate_service_account


def setup_logging(verbose: bool = False) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format='%(levelname)s: %(message)s'
    )


def cmd_init(args: argparse.Namespace) -> int:
    """Generate a new service account key file."""
    account = generate_service_account(args.email, key_id=args.key_id)
    content = account.to_json()

    if args.out:
        try:
            with open(args.out, 'w') as f:
                f.write(content)
            os.chmod(args.out, 0o600)
        except OSError as e:
            print(f"Error writing {args.out}: {e}", file=sys.stderr)
            return 1
        print(f"Wrote credentials for {account.client_email} to {args.out}", file=sys.stderr)
    else:
        print(content)

    return 0


def cmd_header(args: argparse.Namespace) -> int:
    """Print an Authorization header for a URI."""
    path = args.credentials or os.environ.get(CREDENTIALS_ENV_VAR)
    if not path:
        print(f"Error: Missing credentials. Set {CREDENTIALS_ENV_VAR} or use --credentials", file=sys.stderr)
        return 1

    try:
        client = JWTAccess.from_service_account_file(path)
        headers = client.get_request_metadata(args.uri)
    except OSError as e:
        print(f"Error reading credentials: {e}", file=sys.stderr)
        return 1
    except JWTAccessError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.value_only:
        print(headers['Authorization'])
    else:
        for name, value in headers.items():
            print(f"{name}: {value}")
    return 0


def cmd_decode(args: argparse.Namespace) -> int:
    """Decode a token and optionally verify its signature."""
    public_key = None
    if args.key:
        try:
            with open(args.key, 'rb') as f:
                public_key = f.read()
        except OSError as e:
            print(f"Error reading key: {e}", file=sys.stderr)
            return 1

    try:
        decoded = decode_token(args.token, public_key=public_key)
    except JWTAccessError as e:
        print(f"Error decoding token: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps({
            "verified": decoded.verified,
            "header": decoded.header,
            "claims": decoded.claims,
        }, indent=2))
    else:
        status = "VERIFIED" if decoded.verified else "UNVERIFIED"
        print(status)
        print(f"   Issuer:   {decoded.iss}")
        print(f"   Subject:  {decoded.sub}")
        print(f"   Audience: {decoded.aud}")
        print(f"   Expires:  {decoded.exp}")
        if decoded.header.get('kid'):
            print(f"   Key ID:   {decoded.header['kid']}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='jwt-access',
        description='Self-signed JWT access tokens for service accounts'
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable verbose output')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # init command
    p_init = subparsers.add_parser('init', help='Generate a new service account key')
    p_init.add_argument('--email', required=True, help='Service account email')
    p_init.add_argument('--key-id', help='Key identifier (defaults to the JWK thumbprint)')
    p_init.add_argument('--out', help='Write credentials to this file instead of stdout')

    # header command
    p_header = subparsers.add_parser('header', help='Print an Authorization header for a URI')
    p_header.add_argument('uri', help='Target URI (token audience)')
    p_header.add_argument('--credentials', help=f'Service account JSON file (default: ${CREDENTIALS_ENV_VAR})')
    p_header.add_argument('--value-only', action='store_true', help='Print only the header value')

    # decode command
    p_decode = subparsers.add_parser('decode', help='Decode a token')
    p_decode.add_argument('token', help='The token to decode')
    p_decode.add_argument('--key', help='PEM public key file for signature verification')
    p_decode.add_argument('--json', action='store_true', help='Output as JSON')

    return parser


def main(argv=None) -> int:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    if args.command == 'init':
        return cmd_init(args)
    elif args.command == 'header':
        return cmd_header(args)
    elif args.command == 'decode':
        return cmd_decode(args)
    else:
        parser.print_help()
        return 0


if __name__ == '__main__':
    sys.exit(main())
