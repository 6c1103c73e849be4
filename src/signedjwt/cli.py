"""
Command line entry point for signedjwt.

Subcommands:
    encode  - sign a claims object and print the token
    decode  - print header and claims without signature verification
    verify  - verify signature and registered claims, then print the claims

Key, algorithm, audience and leeway default to the JWT_* environment
settings (see ``signedjwt.core.config``).
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Sequence

from signedjwt.algorithms import SUPPORTED_ALGORITHMS
from signedjwt.core.config import Settings, get_settings
from signedjwt.core.exceptions import JwtError
from signedjwt.core.logging import configure_logging
from signedjwt.token import Token

__all__ = ["main"]

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Output formatting
# ---------------------------------------------------------------------------

def _print_json(label: str, data: dict[str, Any]) -> None:
    """Print a labelled JSON section."""
    print(f"\n{label}:")
    print(json.dumps(data, indent=4))


def _fail(message: str) -> int:
    print(f"Error: {message}")
    return 1


# ---------------------------------------------------------------------------
# Input helpers
# ---------------------------------------------------------------------------

def _read_positional(value: str | None, use_stdin: bool, label: str) -> str:
    if use_stdin:
        value = sys.stdin.read()
    value = (value or "").strip()
    if not value:
        raise ValueError(f"No {label} given.")
    return value


def _resolve_key(args: argparse.Namespace, settings: Settings, *, signing: bool) -> str:
    if args.key_file:
        return Path(args.key_file).expanduser().read_text(encoding="utf-8")
    if args.key is not None:
        return args.key
    return settings.signing_key() if signing else settings.verification_key()


def _parse_header_fields(raw_fields: Sequence[str]) -> dict[str, Any]:
    fields: dict[str, Any] = {}
    for raw in raw_fields:
        name, sep, value = raw.partition("=")
        if not sep or not name:
            raise ValueError(f"Header fields must look like NAME=VALUE, got {raw!r}.")
        try:
            fields[name] = json.loads(value)
        except ValueError:
            fields[name] = value
    return fields


# ---------------------------------------------------------------------------
# Subcommands
# ---------------------------------------------------------------------------

def _cmd_encode(args: argparse.Namespace, settings: Settings) -> int:
    claims = json.loads(_read_positional(args.claims, args.stdin, "claims"))
    if not isinstance(claims, dict):
        return _fail("Claims must be a JSON object.")

    token = Token.create(args.alg or settings.algorithm)
    for name, value in _parse_header_fields(args.header).items():
        token.set_header_field(name, value)
    for name, value in claims.items():
        token.set_claim(name, value)

    print(token.encode(_resolve_key(args, settings, signing=True)))
    return 0


def _cmd_decode(args: argparse.Namespace, settings: Settings) -> int:
    token = Token.decode(_read_positional(args.token, args.stdin, "token"))
    _print_json("Header", token.header)
    _print_json("Claims", token.claims)
    return 0


def _cmd_verify(args: argparse.Namespace, settings: Settings) -> int:
    token = Token.decode(_read_positional(args.token, args.stdin, "token"))
    audience = args.audience if args.audience is not None else settings.audience
    leeway = args.leeway if args.leeway is not None else settings.leeway_seconds

    token.verify(_resolve_key(args, settings, signing=False), audience, leeway=leeway)
    print("valid")
    _print_json("Claims", token.claims)
    return 0


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------

def _add_key_arguments(parser: argparse.ArgumentParser) -> None:
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--key", default=None, help="HMAC secret or PEM key text")
    group.add_argument("--key-file", default=None, help="Read the key from a file")


def _add_input_arguments(parser: argparse.ArgumentParser, name: str, help_text: str) -> None:
    parser.add_argument(name, nargs="?", default=None, help=help_text)
    parser.add_argument(
        "--stdin",
        action="store_true",
        default=False,
        help=f"Read {name} from stdin (for piping)",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="signedjwt",
        description="Encode, decode and verify JSON Web Tokens.",
        epilog="Examples:\n"
               "  %(prog)s encode --alg HS256 --key secret '{\"sub\": \"42\"}'\n"
               "  %(prog)s decode <token>\n"
               "  echo '<token>' | %(prog)s verify --key secret --stdin\n",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    encode = subparsers.add_parser("encode", help="Sign claims and print the token")
    encode.add_argument("--alg", choices=SUPPORTED_ALGORITHMS, default=None, help="Signing algorithm")
    encode.add_argument(
        "--header",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Extra header field, e.g. kid=k1 (repeatable)",
    )
    _add_key_arguments(encode)
    _add_input_arguments(encode, "claims", "Claims as a JSON object")
    encode.set_defaults(handler=_cmd_encode)

    decode = subparsers.add_parser("decode", help="Decode without signature verification")
    _add_input_arguments(decode, "token", "JWT string")
    decode.set_defaults(handler=_cmd_decode)

    verify = subparsers.add_parser("verify", help="Verify signature and registered claims")
    verify.add_argument("--audience", default=None, help="Expected audience")
    verify.add_argument("--leeway", type=float, default=None, help="Clock skew tolerance in seconds")
    _add_key_arguments(verify)
    _add_input_arguments(verify, "token", "JWT string")
    verify.set_defaults(handler=_cmd_verify)

    return parser


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main(argv: Sequence[str] | None = None) -> int:
    configure_logging()
    args = _build_parser().parse_args(argv)

    try:
        return args.handler(args, get_settings())
    except JwtError as exc:
        logger.debug("cli.%s failed: %r", args.command, exc)
        return _fail(str(exc))
    except (OSError, ValueError) as exc:
        return _fail(str(exc))
