"""
Command-line front end for securestore.

    securestore [--file PATH] [--algorithm NAME] [--keyring] [-v] COMMAND ...

Commands: get, set, replace, find, delete, list, algorithms, remember, forget.
Secrets are printed to stdout, logs go to stderr.

Exit codes: 0 success, 1 entry absent / nothing written, 2 store error.
"""

from __future__ import annotations

import argparse
import asyncio
import getpass
import logging
import sys
from typing import Callable, List, Optional, Union

from securestore.core.exceptions import SecureStoreError
from securestore.core.session import SecureStore
from securestore.security.crypto import get_profile, list_algorithms
from securestore.security.keystore import (
    assess_keyring_backend,
    delete_store_password,
    save_store_password,
)
from .context import CliContext, build_context
from .logging_config import configure_logging

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_MISSING = 1
EXIT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="securestore",
        description="Encrypted service/account/secret store (openssl enc -nosalt compatible).",
    )
    parser.add_argument("--file", "-f", help="store file (default: $SECURESTORE_PATH or ~/.securestore/secure.enc)")
    parser.add_argument("--algorithm", "-a", help="openssl cipher name (default: $SECURESTORE_ALGORITHM or aes256)")
    parser.add_argument("--keyring", action="store_true", help="read the store password from the OS keyring")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging on stderr")

    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("get", help="print the secret for SERVICE ACCOUNT")
    p.add_argument("service")
    p.add_argument("account")

    for name, text in (("set", "store a secret if none exists yet"), ("replace", "create or overwrite a secret")):
        p = sub.add_parser(name, help=text)
        p.add_argument("service")
        p.add_argument("account")
        p.add_argument("secret", nargs="?", help="prompted for when omitted")

    p = sub.add_parser("find", help="print any secret stored under SERVICE")
    p.add_argument("service")

    p = sub.add_parser("delete", help="remove SERVICE ACCOUNT and print the removed secret")
    p.add_argument("service")
    p.add_argument("account")

    p = sub.add_parser("list", help="list services, or the accounts of SERVICE")
    p.add_argument("service", nargs="?")

    sub.add_parser("algorithms", help="list accepted algorithm names")

    p = sub.add_parser("remember", help="save the store password in the OS keyring")
    p.add_argument("--force", action="store_true", help="store even if the keyring backend looks insecure")

    sub.add_parser("forget", help="remove the store password from the OS keyring")
    return parser


def _print_or_missing(value: Union[str, bool, None]) -> int:
    if value is None or value is False:
        return EXIT_MISSING
    print(value)
    return EXIT_OK


async def _run_store_command(args: argparse.Namespace, store: SecureStore, prompt: Callable[[str], str]) -> int:
    if args.command == "get":
        return _print_or_missing(await store.get_password(args.service, args.account))

    if args.command in ("set", "replace"):
        secret = args.secret or prompt(f"Secret for {args.service}/{args.account}: ")
        if args.command == "set":
            written = await store.set_password(args.service, args.account, secret)
        else:
            written = await store.replace_password(args.service, args.account, secret)
        if not written:
            logger.info("%s %s/%s: nothing written", args.command, args.service, args.account)
        return EXIT_OK if written else EXIT_MISSING

    if args.command == "find":
        return _print_or_missing(await store.find_password(args.service))

    if args.command == "delete":
        return _print_or_missing(await store.delete_password(args.service, args.account))

    if args.command == "list":
        if args.service:
            names = await store.list_accounts(args.service)
        else:
            names = await store.list_services()
        for name in names:
            print(name)
        return EXIT_OK

    raise ValueError(f"unknown command {args.command!r}")


def _remember(ctx: CliContext, force: bool, prompt: Callable[[str], str]) -> int:
    secure, msg = assess_keyring_backend()
    if not secure and not force:
        print(f"refusing to store the password: {msg} (use --force to override)", file=sys.stderr)
        return EXIT_ERROR
    save_store_password(ctx.path, prompt(f"Password for {ctx.path}: "))
    logger.info("password for %s saved to the OS keyring", ctx.path)
    return EXIT_OK


def main(argv: Optional[List[str]] = None, prompt: Callable[[str], str] = getpass.getpass) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else logging.WARNING)

    if args.command == "algorithms":
        for name in list_algorithms():
            print(name)
        return EXIT_OK

    ctx = build_context(args.file, args.algorithm, use_keyring=args.keyring)
    try:
        if args.command == "remember":
            return _remember(ctx, args.force, prompt)
        if args.command == "forget":
            return EXIT_OK if delete_store_password(ctx.path) else EXIT_MISSING

        # fail on a bad algorithm name before prompting for anything
        get_profile(ctx.algorithm)
        store = ctx.open(prompt=prompt)
        return asyncio.run(_run_store_command(args, store, prompt))
    except SecureStoreError as err:
        print(f"securestore: {err}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
