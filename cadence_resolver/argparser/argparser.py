"""
Module handling the cli arguments
"""
import re
from argparse import ArgumentParser
from typing import Dict, Optional, Tuple

from cadence_resolver.argparser.defaults import DEFAULTS_FLAG_IN_CONFIG
from cadence_resolver.utils.address import Address

# (Location, 0xaddress)
ALIAS_REGEX = re.compile(r"\(\s*([^,()]+?)\s*,\s*(0x[0-9a-fA-F]+)\s*\)")


def convert_aliases(aliases: str) -> Dict[str, str]:
    """Convert the --aliases argument to a mapping.
    "(FungibleToken, 0xee82856bf20e2aa6),(./NFT.cdc, 0x01)"

    Args:
        aliases (str): aliases as a list of (location, address) tuples

    Raises:
        ValueError: If the argument is malformed

    Returns:
        Dict[str, str]: location -> hex address
    """
    matches = ALIAS_REGEX.findall(aliases)
    remainder = ALIAS_REGEX.sub("", aliases).replace(",", "").strip()
    if not matches or remainder:
        raise ValueError(
            f"Invalid aliases {aliases!r}, expected a list of (location, 0xaddress) tuples"
        )
    return {location: Address.from_hex(address).hex() for location, address in matches}


def split_target(target: str) -> Tuple[str, Optional[str]]:
    """Split a program argument into its location and its optional address.
    "./A.cdc@0x01" -> ("./A.cdc", "0x01")

    Args:
        target (str): location, optionally followed by @address

    Returns:
        Tuple[str, Optional[str]]: (location, address)
    """
    location, separator, address = target.rpartition("@")
    if separator and location and address.startswith(("0x", "0X")):
        return location, address
    return target, None


def init(parser: ArgumentParser) -> None:
    """Add cadence-resolver arguments to the parser

    Args:
        parser (ArgumentParser): argument parser
    """

    group_resolve = parser.add_argument_group("Resolve options")
    group_resolve.add_argument(
        "--aliases",
        help="Addresses of contracts already deployed. "
        'Example: --aliases "(FungibleToken, 0xee82856bf20e2aa6),(./NFT.cdc, 0x01)"',
        action="store",
        default=DEFAULTS_FLAG_IN_CONFIG["aliases"],
    )

    group_resolve.add_argument(
        "--deploy",
        help="Treat the programs as contracts to deploy and sort them in deployment order",
        action="store_true",
        default=DEFAULTS_FLAG_IN_CONFIG["deploy"],
    )

    group_resolve.add_argument(
        "--working-dir",
        help="Directory the locations are relative to (default: current directory)",
        action="store",
        dest="working_dir",
        default=DEFAULTS_FLAG_IN_CONFIG["working_dir"],
    )

    _init_account(parser)
    _init_output(parser)


def _init_account(parser: ArgumentParser) -> None:
    group_account = parser.add_argument_group("Account options")
    group_account.add_argument(
        "--account-name",
        help="Name of the account the programs target",
        action="store",
        dest="account_name",
        default=DEFAULTS_FLAG_IN_CONFIG["account_name"],
    )

    group_account.add_argument(
        "--account-address",
        help="Address of the account the programs target, unless given as location@0xaddress",
        action="store",
        dest="account_address",
        default=DEFAULTS_FLAG_IN_CONFIG["account_address"],
    )


def _init_output(parser: ArgumentParser) -> None:
    group_output = parser.add_argument_group("Output options")
    group_output.add_argument(
        "--print-order",
        help="Print the programs in order",
        action="store_true",
        dest="print_order",
        default=DEFAULTS_FLAG_IN_CONFIG["print_order"],
    )

    group_output.add_argument(
        "--print-code",
        help="Print the code of each program, with the imports replaced",
        action="store_true",
        dest="print_code",
        default=DEFAULTS_FLAG_IN_CONFIG["print_code"],
    )

    group_output.add_argument(
        "--export-json",
        help="Export the deployment plan and the rewritten sources to the export directory",
        action="store_true",
        dest="export_json",
        default=DEFAULTS_FLAG_IN_CONFIG["export_json"],
    )
