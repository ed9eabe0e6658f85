"""
Module handling the program
"""
import logging
from typing import Any, Dict, List, Optional, Sequence

from cadence_resolver.parser.abstract_parser import AbstractParser
from cadence_resolver.parser.ast import CompositeKind, ParsedProgram, StringLocation
from cadence_resolver.utils.address import Address

LOGGER = logging.getLogger("CadenceResolver")


def parse_name(ast: ParsedProgram) -> str:
    """Return the name of the contract declared in the program.
    The first contract composite wins, then the first contract interface

    Args:
        ast (ParsedProgram): parsed program

    Returns:
        str: contract name, or an empty string if the program declares no contract
    """
    for composite_declaration in ast.composite_declarations():
        if composite_declaration.composite_kind == CompositeKind.CONTRACT:
            return composite_declaration.identifier

    for interface_declaration in ast.interface_declarations():
        if interface_declaration.composite_kind == CompositeKind.CONTRACT:
            return interface_declaration.identifier

    return ""


# pylint: disable=too-many-instance-attributes
class Program:
    """The Program class represents a contract, a script or a transaction, and the result of
    the resolution of its imports

    Attributes
    ----------
    id: int
        Insertion index in the owning collection
    location: str
        Location of the program, unique in the owning collection
    name: str
        Contract name, or an empty string if the program is not a contract
    target: Address
        Account the program is deployed to or executed on
    account_name: str
        Name of the target account
    code: str
        Original source
    args: List[Any]
        Arguments, opaque to the resolver
    dependencies: Dict[str, Program]
        Import location -> imported program of the same collection
    aliases: Dict[str, Address]
        Import location -> address of an already deployed contract
    """

    # pylint: disable=too-many-arguments
    def __init__(
        self,
        index: int,
        location: str,
        code: str,
        target: Address,
        account_name: str,
        args: Optional[Sequence[Any]],
        parser: AbstractParser,
    ):
        """Parse the code and initialize the Program

        Args:
            index (int): insertion index
            location (str): location
            code (str): source
            target (Address): target account address
            account_name (str): target account name
            args (Optional[Sequence[Any]]): arguments
            parser (AbstractParser): parser used on the code

        Raises:
            ParseError: If the code does not parse
        """
        self._index: int = index
        self._location: str = location
        self._code: str = code
        self._target: Address = target
        self._account_name: str = account_name
        self._args: List[Any] = list(args) if args else []
        self._ast: ParsedProgram = parser.parse(code.encode("utf8"), location)
        self._name: str = parse_name(self._ast)
        self._dependencies: Dict[str, "Program"] = {}
        self._aliases: Dict[str, Address] = {}

    # region Getters
    ###################################################################################
    ###################################################################################

    @property
    def id(self) -> int:  # pylint: disable=invalid-name
        """Return the insertion index of the program

        Returns:
            int: insertion index
        """
        return self._index

    @property
    def name(self) -> str:
        """Return the contract name

        Returns:
            str: contract name, empty if the program declares no contract
        """
        return self._name

    @property
    def location(self) -> str:
        """Return the location

        Returns:
            str: location
        """
        return self._location

    @property
    def code(self) -> str:
        """Return the original code, without import replacements

        Returns:
            str: source
        """
        return self._code

    @property
    def args(self) -> List[Any]:
        return self._args

    @property
    def account_name(self) -> str:
        return self._account_name

    @property
    def target(self) -> Address:
        """Return the target account address

        Returns:
            Address: address the program is deployed to or executed on
        """
        return self._target

    @property
    def ast(self) -> ParsedProgram:
        return self._ast

    @property
    def dependencies(self) -> Dict[str, "Program"]:
        """Return the imports bound to programs of the same collection

        Returns:
            Dict[str, Program]: import location -> program
        """
        return self._dependencies

    @property
    def aliases(self) -> Dict[str, Address]:
        """Return the imports bound to already deployed contracts

        Returns:
            Dict[str, Address]: import location -> address
        """
        return self._aliases

    # endregion
    ###################################################################################
    ###################################################################################

    # region Imports
    ###################################################################################
    ###################################################################################

    def imports(self) -> List[str]:
        """Return the string locations imported by the program, in source order.
        Identifier and address imports are ignored

        Returns:
            List[str]: distinct import locations
        """
        imports: List[str] = []
        for import_declaration in self._ast.import_declarations():
            location = import_declaration.location
            if isinstance(location, StringLocation) and location.path not in imports:
                imports.append(location.path)
        return imports

    def has_imports(self) -> bool:
        return len(self.imports()) > 0

    def is_contract(self) -> bool:
        """Check if the program can be deployed: it declares exactly one composite

        Returns:
            bool: True if the program is a contract
        """
        return len(self._ast.composite_declarations()) == 1

    def add_dependency(self, location: str, dependency: "Program") -> None:
        self._aliases.pop(location, None)
        self._dependencies[location] = dependency

    def add_alias(self, location: str, address: Address) -> None:
        self._dependencies.pop(location, None)
        self._aliases[location] = address

    def replaced_imports(self) -> str:
        """Return the code with each bound import location replaced by its address.

        Only the first occurrence of "<location>" is replaced for each binding: an import
        location is expected to appear once in the code. Comments, whitespace and other
        string literals are kept as they are.

        Returns:
            str: code ready to be deployed or executed
        """
        code = self._code

        for location, dependency in self._dependencies.items():
            code = code.replace(f'"{location}"', dependency.target.hex_with_prefix(), 1)

        for location, address in self._aliases.items():
            code = code.replace(f'"{location}"', address.hex_with_prefix(), 1)

        return code

    # endregion
    ###################################################################################
    ###################################################################################

    def __repr__(self) -> str:
        return f"<Program {self._index} {self._location} ({self._name or 'no contract'})>"
