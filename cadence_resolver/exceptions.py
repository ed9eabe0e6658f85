"""
Exceptions raised while loading, resolving and ordering programs
"""
from typing import TYPE_CHECKING, List, Sequence, Tuple

if TYPE_CHECKING:
    from cadence_resolver.program import Program


class CadenceResolverError(Exception):
    """
    Base class of every error raised by cadence-resolver
    """

    # pylint: disable=unnecessary-pass
    pass


class InvalidAddress(CadenceResolverError, ValueError):
    """
    Raised if a string cannot be converted to an account address
    """

    pass


class LoadError(CadenceResolverError):
    """
    Raised if the loader could not provide the source of a location
    """

    def __init__(self, location: str, cause: Exception):
        """Init the object

        Args:
            location (str): location that failed to load
            cause (Exception): underlying error
        """
        super().__init__(f"failed to load {location}: {cause}")
        self.location: str = location
        self.cause: Exception = cause


class ParseError(CadenceResolverError):
    """
    Raised if the source of a location does not parse
    """

    def __init__(self, location: str, diagnostics: Sequence[str]):
        """Init the object

        Args:
            location (str): location of the source
            diagnostics (Sequence[str]): parser diagnostics, kept verbatim
        """
        self.location: str = location
        self.diagnostics: List[str] = list(diagnostics)
        super().__init__(f"parsing failed for {location}:\n" + "\n".join(self.diagnostics))


class DuplicateLocation(CadenceResolverError):
    """
    Raised if a program is added twice with the same location
    """

    def __init__(self, location: str):
        super().__init__(f"program with location {location} already exists")
        self.location: str = location


class UnresolvedImport(CadenceResolverError):
    """
    Raised if an import matches neither a program nor an alias.

    All the missing imports of a resolve pass are reported together.
    """

    def __init__(self, missing: Sequence[Tuple[str, str]]):
        """Init the object

        Args:
            missing (Sequence[Tuple[str, str]]): (importer, import location) pairs.
                The importer is the program name, or its location if it has no name
        """
        assert missing
        self.missing: List[Tuple[str, str]] = list(missing)
        super().__init__(
            "\n".join(
                f"import from {importer} could not be found: {location}, "
                "make sure import path is correct"
                for importer, location in self.missing
            )
        )

    @property
    def importer(self) -> str:
        """Return the first program with a missing import

        Returns:
            str: program name or location
        """
        return self.missing[0][0]

    @property
    def location(self) -> str:
        """Return the first missing import

        Returns:
            str: import location
        """
        return self.missing[0][1]


class NotAContract(CadenceResolverError):
    """
    Raised if a deployment contains a program which is not a contract
    """

    def __init__(self, location: str):
        super().__init__(f"sorting is only possible for contracts, {location} is not a contract")
        self.location: str = location


class DuplicateContractName(CadenceResolverError):
    """
    Raised if the same contract is deployed more than once in a deployment
    """

    def __init__(self, name: str):
        super().__init__(
            f"the same contract cannot be deployed to multiple accounts on the same network: {name}"
        )
        self.name: str = name


class CyclicImportError(CadenceResolverError):
    """
    Raised if contracts import each other and therefore cannot be deployed
    """

    def __init__(self, cycles: List[List["Program"]]):
        """Init the object

        Args:
            cycles (List[List[Program]]): programs of each cycle, smallest id first
        """
        self.cycles: List[List["Program"]] = cycles
        formatted = " ".join("[" + " ".join(names) + "]" for names in self.contract_names())
        super().__init__(f"contracts: import cycle(s) detected: [{formatted}]")

    def contract_names(self) -> List[List[str]]:
        """Return the names of the programs of each cycle

        Returns:
            List[List[str]]: one list of names per cycle
        """
        return [[program.name for program in cycle] for cycle in self.cycles]
