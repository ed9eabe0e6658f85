"""
This is the cadence-resolver cli script
"""
import argparse
import json
import logging
import os
import sys
from importlib.metadata import PackageNotFoundError, version
from typing import Dict, List, Optional, Union

from cadence_resolver.argparser import DEFAULTS_FLAG_IN_CONFIG, argparser
from cadence_resolver.exceptions import CadenceResolverError
from cadence_resolver.export import export_to_json
from cadence_resolver.loader import FileLoader
from cadence_resolver.program_imports import DeploymentImports, ProgramImports
from cadence_resolver.utils.zip import ZIP_TYPES_ACCEPTED, save_to_zip

logging.basicConfig()
LOGGER = logging.getLogger("CadenceResolver")
LOGGER.setLevel(logging.INFO)


def _version() -> str:
    try:
        return version("cadence-resolver")
    except PackageNotFoundError:
        return "unknown"


def parse_args(arguments: Optional[List[str]] = None) -> argparse.Namespace:
    """Create a argparse object and parse the arguments

    Args:
        arguments (Optional[List[str]]): arguments to parse. Defaults to sys.argv

    Returns:
        argparse.Namespace: parsed arguments
    """
    # Create our argument parser
    parser = argparse.ArgumentParser(
        description="cadence-resolver. Resolve the imports of Cadence programs "
        "and sort contracts in deployment order",
        usage="cadence-resolver program.cdc [program.cdc@0xaddress ...] [flag]",
    )

    # Add arguments
    parser.add_argument(
        "targets", nargs="+", help="program locations, optionally followed by @0xaddress"
    )

    parser.add_argument(
        "--config-file",
        help="Provide a config file (default: cadence_resolver.config.json)",
        action="store",
        dest="config_file",
        default="cadence_resolver.config.json",
    )

    parser.add_argument(
        "--export-dir",
        help="Export directory (default: cadence-export)",
        action="store",
        dest="export_dir",
        default=DEFAULTS_FLAG_IN_CONFIG["export_dir"],
    )

    parser.add_argument(
        "--export-zip",
        help="Export the deployment plan and the rewritten sources to a zip file",
        action="store",
        dest="export_to_zip",
        default=DEFAULTS_FLAG_IN_CONFIG["export_to_zip"],
    )

    parser.add_argument(
        "--export-zip-type",
        help=f"Zip compression type. One of {','.join(ZIP_TYPES_ACCEPTED.keys())}. Default lzma",
        action="store",
        dest="export_to_zip_type",
        default=DEFAULTS_FLAG_IN_CONFIG["export_to_zip_type"],
    )

    parser.add_argument(
        "--version",
        help="displays the current version",
        version=_version(),
        action="version",
    )

    argparser.init(parser)
    if arguments is None and len(sys.argv) == 1:
        parser.print_help(sys.stderr)
        sys.exit(1)

    args = parser.parse_args(arguments)

    # If there is a config file provided, update the values with the one in the config file
    if os.path.isfile(args.config_file):
        try:
            with open(args.config_file, encoding="utf8") as f_config:
                config = json.load(f_config)
                for key, elem in config.items():
                    if key not in DEFAULTS_FLAG_IN_CONFIG:
                        LOGGER.info("%s has an unknown key: %s : %s", args.config_file, key, elem)
                        continue
                    if getattr(args, key) == DEFAULTS_FLAG_IN_CONFIG[key]:
                        setattr(args, key, elem)
        except json.decoder.JSONDecodeError as exception:
            LOGGER.error(
                "Impossible to read %s, please check the file %s", args.config_file, exception
            )

    return args


def _aliases(aliases: Union[None, str, Dict[str, str]]) -> Dict[str, str]:
    """Return the aliases given on the command line or in the config file

    Args:
        aliases (Union[None, str, Dict[str, str]]): --aliases value, or config file object

    Returns:
        Dict[str, str]: location -> hex address
    """
    if not aliases:
        return {}
    if isinstance(aliases, dict):
        return aliases
    return argparser.convert_aliases(aliases)


def build_imports(args: argparse.Namespace) -> ProgramImports:
    """Load the programs and resolve their imports (and sort them with --deploy)

    Args:
        args (argparse.Namespace): parsed arguments

    Returns:
        ProgramImports: resolved programs
    """
    loader = FileLoader(args.working_dir)
    aliases = _aliases(args.aliases)

    imports: ProgramImports
    if args.deploy:
        imports = DeploymentImports(loader, aliases)
    else:
        imports = ProgramImports(loader, aliases)

    for target in args.targets:
        location, address = argparser.split_target(target)
        imports.add_program(location, address or args.account_address, args.account_name)

    if isinstance(imports, DeploymentImports):
        imports.sort()
    else:
        imports.resolve()
    return imports


def _print_programs(imports: ProgramImports, print_code: bool) -> None:
    """Print the programs in order

    Args:
        imports (ProgramImports): resolved programs
        print_code (bool): also print the rewritten code
    """
    for position, program in enumerate(imports.programs):
        target = program.target.hex_with_prefix()
        print(f"{position}: {program.name or '-'} ({program.location}) -> {target}")
        for location, dependency in program.dependencies.items():
            print(f"\t{location} -> {dependency.target.hex_with_prefix()} ({dependency.location})")
        for location, address in program.aliases.items():
            print(f"\t{location} -> {address.hex_with_prefix()} (alias)")
        if print_code:
            print(program.replaced_imports())


def main(arguments: Optional[List[str]] = None) -> None:
    """Main function run from the cli

    Args:
        arguments (Optional[List[str]]): arguments. Defaults to sys.argv
    """
    args = parse_args(arguments)
    try:
        imports = build_imports(args)

        if args.print_order or args.print_code:
            _print_programs(imports, args.print_code)

        if args.export_json:
            export_to_json(imports, args.export_dir)

        if args.export_to_zip:
            save_to_zip(imports, args.export_to_zip, args.export_to_zip_type)

    except (CadenceResolverError, ValueError) as exception:
        LOGGER.error(exception)
        sys.exit(-1)


if __name__ == "__main__":
    main()
