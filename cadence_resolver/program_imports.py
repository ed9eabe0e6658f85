"""
Collections of programs and the resolution of their imports
"""
import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from cadence_resolver.exceptions import (
    CyclicImportError,
    DuplicateContractName,
    DuplicateLocation,
    LoadError,
    NotAContract,
    ParseError,
    UnresolvedImport,
)
from cadence_resolver.loader import Loader
from cadence_resolver.parser.abstract_parser import AbstractParser
from cadence_resolver.parser.declarations import DeclarationParser
from cadence_resolver.program import Program
from cadence_resolver.utils.address import Address
from cadence_resolver.utils.graph import Unorderable, sort_stabilized

LOGGER = logging.getLogger("CadenceResolver")

# (program, import location, bound program or address)
Binding = Tuple[Program, str, Union[Program, Address]]


class ProgramImports:
    """The ProgramImports class holds a set of programs and resolves their imports, either to
    another program of the set or to an alias address

    Attributes
    ----------
    programs: List[Program]
        The programs, in insertion order (deployment order once sorted)
    aliases: Dict[str, Address]
        Location -> address of contracts already deployed
    """

    def __init__(
        self,
        loader: Loader,
        aliases: Optional[Mapping[str, Union[str, Address]]] = None,
        parser: Optional[AbstractParser] = None,
    ):
        """Init the object

        Args:
            loader (Loader): loader providing the sources
            aliases (Optional[Mapping[str, Union[str, Address]]]): location -> hex address
                (case-insensitive, 0x prefix optional)
            parser (Optional[AbstractParser]): parser. Defaults to DeclarationParser

        Raises:
            InvalidAddress: If an alias is not an hex address
        """
        self._loader: Loader = loader
        self._parser: AbstractParser = parser if parser is not None else DeclarationParser()
        self._aliases: Dict[str, Address] = {
            location: Address.convert(address) for location, address in (aliases or {}).items()
        }
        # Normalized location -> address, the first alias wins
        self._aliases_by_key: Dict[str, Address] = {}
        for location, address in self._aliases.items():
            self._aliases_by_key.setdefault(self._loader.normalize("", location), address)
        self._programs: List[Program] = []
        self._programs_by_location: Dict[str, Program] = {}
        # Normalized location -> program, used for the lookup of imports
        self._programs_by_key: Dict[str, Program] = {}
        # Contract name -> first program declaring it, for import "Name"
        self._programs_by_name: Dict[str, Program] = {}

    @property
    def programs(self) -> List[Program]:
        """Return the programs

        Returns:
            List[Program]: programs, in insertion order or in deployment order once sorted
        """
        return list(self._programs)

    @property
    def aliases(self) -> Dict[str, Address]:
        return dict(self._aliases)

    @property
    def loader(self) -> Loader:
        return self._loader

    def program_by_location(self, location: str) -> Optional[Program]:
        """Return the program added with the location

        Args:
            location (str): location

        Returns:
            Optional[Program]: the program, None if there is none
        """
        return self._programs_by_location.get(location)

    def add_program(
        self,
        location: str,
        address: Union[Address, str, bytes, None] = None,
        account_name: str = "",
        args: Optional[Sequence[Any]] = None,
    ) -> Program:
        """Load, parse and add a program

        Args:
            location (str): location, given to the loader
            address (Union[Address, str, bytes, None]): target account. Defaults to the zero address
            account_name (str): target account name
            args (Optional[Sequence[Any]]): arguments, kept as they are

        Raises:
            DuplicateLocation: If a program with the location, or a location the loader
                normalizes to the same key, already exists
            LoadError: If the loader failed
            ParseError: If the source does not parse

        Returns:
            Program: the new program
        """
        key = self._loader.normalize("", location)
        if location in self._programs_by_location or key in self._programs_by_key:
            raise DuplicateLocation(location)

        try:
            source = self._loader.load(location)
        except LoadError:
            raise
        except Exception as error:  # pylint: disable=broad-except
            raise LoadError(location, error) from error

        try:
            code = source.decode("utf8")
        except UnicodeDecodeError as error:
            raise ParseError(location, [f"source is not valid UTF-8: {error}"]) from error

        program = Program(
            len(self._programs),
            location,
            code,
            Address.convert(address),
            account_name,
            args,
            self._parser,
        )

        self._programs.append(program)
        self._programs_by_location[location] = program
        self._programs_by_key[key] = program
        if program.name:
            self._programs_by_name.setdefault(program.name, program)
        LOGGER.debug("Added %r", program)
        return program

    def _lookup(self, program: Program, location: str) -> Union[Program, Address, None]:
        # Programs by location, then by contract name, then aliases
        key = self._loader.normalize(program.location, location)

        imported = (
            self._programs_by_location.get(location)
            or self._programs_by_key.get(key)
            or self._programs_by_name.get(location)
        )
        if imported is not None:
            return imported

        if location in self._aliases:
            return self._aliases[location]
        return self._aliases_by_key.get(key)

    def resolve(self) -> None:
        """Bind every import of every program to a program of the collection or to an alias.
        Imports are looked up as program locations, then as contract names (import "Name"),
        then as aliases: a program wins over an alias with the same location.

        Nothing is bound if an import cannot be resolved, and calling resolve again binds
        the same imports again.

        Raises:
            UnresolvedImport: with every import that matches neither a program nor an alias
        """
        bindings: List[Binding] = []
        missing: List[Tuple[str, str]] = []

        for program in self._programs:
            for location in program.imports():
                bound = self._lookup(program, location)
                if bound is None:
                    missing.append((program.name or program.location, location))
                else:
                    bindings.append((program, location, bound))

        if missing:
            raise UnresolvedImport(missing)

        for program, location, bound in bindings:
            if isinstance(bound, Program):
                program.add_dependency(location, bound)
                LOGGER.debug("%s: %s -> %s", program.location, location, bound.location)
            else:
                program.add_alias(location, bound)
                LOGGER.debug("%s: %s -> alias %s", program.location, location, bound)


class DeploymentImports(ProgramImports):
    """
    Programs to deploy: every program is a contract, and the programs can be sorted in
    deployment order
    """

    def sort(self) -> None:
        """Resolve the imports and sort the contracts in deployment order: every contract comes
        after the contracts it imports. Among valid orders, the one closest to the insertion
        order is used.

        The programs are left untouched if sorting fails.

        Raises:
            NotAContract: If a program is not a contract
            DuplicateContractName: If two programs declare the same contract
            UnresolvedImport: If an import cannot be resolved
            CyclicImportError: If contracts import each other
        """
        for program in self._programs:
            if not program.is_contract():
                raise NotAContract(program.location)

        names: Dict[str, Program] = {}
        for program in self._programs:
            if program.name and program.name in names:
                raise DuplicateContractName(program.name)
            names[program.name] = program

        self.resolve()

        # An edge goes from a dependency to the program importing it
        edges: Dict[int, List[int]] = {program.id: [] for program in self._programs}
        for program in self._programs:
            for dependency in program.dependencies.values():
                edges[dependency.id].append(program.id)

        by_id = {program.id: program for program in self._programs}
        try:
            order = sort_stabilized(by_id.keys(), edges)
        except Unorderable as error:
            raise CyclicImportError(
                [[by_id[node] for node in component] for component in error.components]
            ) from error

        self._programs = [by_id[node] for node in order]
        LOGGER.debug("Deployment order: %s", [program.name for program in self._programs])
