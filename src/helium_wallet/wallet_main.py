"""Command-line entry point for building, signing and submitting transactions."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Optional

from pydantic import ValidationError as PydanticValidationError

from .application.wallet.dtos import (
    CreateHtlcCommandDTO,
    CreateOuiCommandDTO,
    PayCommandDTO,
    PayeeArg,
    RedeemHtlcCommandDTO,
    SubmitTxnCommandDTO,
    TxnResultDTO,
)
from .application.wallet.use_cases.balance import BalanceService
from .application.wallet.use_cases.htlc import HtlcService
from .application.wallet.use_cases.oui import OuiService
from .application.wallet.use_cases.payment import PaymentService
from .domain.errors import WalletError
from .domain.units import Hnt
from .envs.wallet_env import Settings, get_settings
from .infrastructure.ledger.ledger_client import LedgerClient
from .infrastructure.staking.staking_client import StakingClient

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="helium-wallet",
        description="Build, sign and submit Helium ledger transactions.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    pay = sub.add_parser(
        "pay",
        help="Send one or more payments. HNT only goes to 8 decimals of precision.",
    )
    pay.add_argument(
        "--payee",
        "-p",
        dest="payees",
        action="append",
        required=True,
        metavar="ADDRESS=HNT",
        help="Address and amount of HNT to send in <address>=<amount> format.",
    )
    pay.add_argument("--commit", action="store_true", help="Commit the payment to the API")
    pay.add_argument(
        "--hash", action="store_true", help="Only output the submitted transaction hash."
    )

    htlc = sub.add_parser("htlc", help="Create or redeem from an HTLC address")
    htlc_sub = htlc.add_subparsers(dest="htlc_command", required=True)

    htlc_create = htlc_sub.add_parser(
        "create",
        help="Create an HTLC address with a hashlock and timelock and fund it.",
    )
    htlc_create.add_argument("payee", help="The address of the intended payee")
    htlc_create.add_argument("--hnt", required=True, help="Number of HNT to send")
    htlc_create.add_argument(
        "--hashlock",
        required=True,
        help="Hex encoded SHA256 digest of the secret preimage that locks the contract",
    )
    htlc_create.add_argument(
        "--timelock",
        required=True,
        type=int,
        help="Block height after which the payer can reclaim the tokens",
    )
    htlc_create.add_argument("--commit", action="store_true", help="Commit the payment to the API")

    htlc_redeem = htlc_sub.add_parser(
        "redeem", help="Redeem the balance of an HTLC address with its preimage"
    )
    htlc_redeem.add_argument("address", help="Address of the HTLC contract")
    htlc_redeem.add_argument("--preimage", "-p", required=True)
    htlc_redeem.add_argument(
        "--hash", action="store_true", help="Only output the submitted transaction hash."
    )
    htlc_redeem.add_argument("--commit", action="store_true", help="Commit the payment to the API")

    oui = sub.add_parser("oui", help="Allocate an OUI or submit an OUI transaction")
    oui_sub = oui.add_subparsers(dest="oui_command", required=True)

    oui_create = oui_sub.add_parser(
        "create",
        help="Allocate an Organizational Unique Identifier for routing endpoints.",
    )
    oui_create.add_argument(
        "--address",
        "-a",
        dest="addresses",
        action="append",
        default=[],
        help="Address of a router to send packets to (repeatable)",
    )
    oui_create.add_argument(
        "--filter", required=True, help="Initial device membership filter, base64"
    )
    oui_create.add_argument(
        "--oui",
        required=True,
        type=int,
        help="The requested OUI; one larger than the current OUI on the ledger",
    )
    oui_create.add_argument(
        "--subnet-size",
        required=True,
        type=int,
        help="Requested subnet size, a power of two between 8 and 65536",
    )
    oui_create.add_argument(
        "--payer",
        help="Payer address. Defaults to this wallet; 'staking' uses the staking service.",
    )
    oui_create.add_argument(
        "--commit",
        action="store_true",
        help="Commit the transaction to the API when this wallet is the payer",
    )

    oui_submit = oui_sub.add_parser(
        "submit", help="Submit a base64 OUI transaction signed by its payer"
    )
    oui_submit.add_argument("transaction", help="Base64 encoded transaction")
    oui_submit.add_argument("--commit", action="store_true", help="Commit the transaction to the API")

    balance = sub.add_parser("balance", help="Get balances in HNT")
    balance.add_argument(
        "--address",
        "-a",
        dest="addresses",
        action="append",
        default=[],
        help="Address to get the balance for (defaults to this wallet)",
    )
    return parser


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2))


def _print_result(result: TxnResultDTO, hash_only: bool = False) -> None:
    if hash_only:
        print(result.hash or "none")
        return
    _print_json(result.model_dump(mode="json"))


def _run(args: argparse.Namespace, settings: Settings) -> None:
    with LedgerClient(settings.api_base_url, timeout=settings.http_timeout) as ledger:
        if args.command == "balance":
            addresses = list(args.addresses)
            if not addresses:
                with settings.load_keypair() as keypair:
                    addresses = [keypair.pubkey_bin.to_b58()]
            balances = BalanceService(ledger).balances(addresses)
            _print_json([b.model_dump(mode="json") for b in balances])
            return

        if args.command == "oui" and args.oui_command == "submit":
            result = OuiService(ledger).submit(
                SubmitTxnCommandDTO(transaction=args.transaction, commit=args.commit)
            )
            _print_result(result)
            return

        with settings.load_keypair() as keypair:
            if args.command == "pay":
                dto = PayCommandDTO(
                    payees=[PayeeArg.parse(p) for p in args.payees], commit=args.commit
                )
                _print_result(PaymentService(ledger).pay(dto, keypair), args.hash)
            elif args.command == "htlc" and args.htlc_command == "create":
                create_dto = CreateHtlcCommandDTO(
                    payee=args.payee,
                    hnt=Hnt.parse(args.hnt),
                    hashlock=args.hashlock,
                    timelock=args.timelock,
                    commit=args.commit,
                )
                _print_result(HtlcService(ledger).create(create_dto, keypair))
            elif args.command == "htlc" and args.htlc_command == "redeem":
                redeem_dto = RedeemHtlcCommandDTO(
                    address=args.address, preimage=args.preimage, commit=args.commit
                )
                _print_result(HtlcService(ledger).redeem(redeem_dto, keypair), args.hash)
            elif args.command == "oui" and args.oui_command == "create":
                oui_dto = CreateOuiCommandDTO(
                    addresses=args.addresses,
                    filter=args.filter,
                    oui=args.oui,
                    subnet_size=args.subnet_size,
                    payer=args.payer,
                    commit=args.commit,
                )
                with StakingClient(
                    settings.staking_base_url, timeout=settings.http_timeout
                ) as staking:
                    _print_result(OuiService(ledger, staking).create(oui_dto, keypair))


def main(argv: Optional[list[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        settings = get_settings()
    except (PydanticValidationError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    logging.basicConfig(level=settings.log_level)
    try:
        _run(args, settings)
    except (WalletError, PydanticValidationError) as e:
        logger.debug("Command failed", exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
