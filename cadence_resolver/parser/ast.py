"""
Minimal Cadence AST used by the resolver.

Only the declarations the resolver needs are represented: the import declarations with
their location, and the top-level composite and interface declarations.
Any parser able to produce a ParsedProgram can drive the resolver.
"""
from enum import IntEnum
from typing import List, Sequence, Union


class CompositeKind(IntEnum):
    """
    Kind of a composite or interface declaration
    """

    STRUCTURE = 1
    RESOURCE = 2
    CONTRACT = 3
    EVENT = 4
    ENUM = 5
    ATTACHMENT = 6

    def __str__(self) -> str:
        return KEYWORD_OF_KIND[self]


KIND_OF_KEYWORD = {
    "struct": CompositeKind.STRUCTURE,
    "resource": CompositeKind.RESOURCE,
    "contract": CompositeKind.CONTRACT,
    "event": CompositeKind.EVENT,
    "enum": CompositeKind.ENUM,
    "attachment": CompositeKind.ATTACHMENT,
}

KEYWORD_OF_KIND = {kind: keyword for keyword, kind in KIND_OF_KEYWORD.items()}


class StringLocation:
    """Location written as a string literal: import X from "./X.cdc" """

    def __init__(self, path: str):
        self.path: str = path

    def __str__(self) -> str:
        return self.path

    def __repr__(self) -> str:
        return f"StringLocation({self.path!r})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, StringLocation) and other.path == self.path

    def __hash__(self) -> int:
        return hash(("string", self.path))


class IdentifierLocation:
    """Location written as an identifier: import Crypto"""

    def __init__(self, identifier: str):
        self.identifier: str = identifier

    def __str__(self) -> str:
        return self.identifier

    def __repr__(self) -> str:
        return f"IdentifierLocation({self.identifier!r})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, IdentifierLocation) and other.identifier == self.identifier

    def __hash__(self) -> int:
        return hash(("identifier", self.identifier))


class AddressLocation:
    """Location written as an account address: import Foo from 0x01"""

    def __init__(self, address: str):
        self.address: str = address

    def __str__(self) -> str:
        return self.address

    def __repr__(self) -> str:
        return f"AddressLocation({self.address!r})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, AddressLocation) and other.address == self.address

    def __hash__(self) -> int:
        return hash(("address", self.address))


Location = Union[StringLocation, IdentifierLocation, AddressLocation]


# pylint: disable=too-few-public-methods
class ImportDeclaration:
    """
    An import declaration
    """

    def __init__(self, identifiers: Sequence[str], location: Location, line: int = 0):
        """Init the object

        Args:
            identifiers (Sequence[str]): imported identifiers (empty for import "X")
            location (Location): imported location
            line (int): line of the declaration. Defaults to 0 (unknown)
        """
        self.identifiers: List[str] = list(identifiers)
        self.location: Location = location
        self.line: int = line

    def __repr__(self) -> str:
        return f"ImportDeclaration({self.identifiers}, {self.location!r})"


class CompositeDeclaration:
    """
    A composite declaration, such as a contract or a resource
    """

    def __init__(self, composite_kind: CompositeKind, identifier: str, line: int = 0):
        self.composite_kind: CompositeKind = composite_kind
        self.identifier: str = identifier
        self.line: int = line

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.composite_kind}, {self.identifier!r})"


class InterfaceDeclaration(CompositeDeclaration):
    """
    An interface declaration, such as a contract interface
    """


class ParsedProgram:
    """
    Top-level declarations of a parsed program
    """

    def __init__(
        self,
        imports: Sequence[ImportDeclaration] = (),
        composites: Sequence[CompositeDeclaration] = (),
        interfaces: Sequence[InterfaceDeclaration] = (),
    ):
        self._imports = tuple(imports)
        self._composites = tuple(composites)
        self._interfaces = tuple(interfaces)

    def import_declarations(self) -> List[ImportDeclaration]:
        """Return the import declarations, in source order

        Returns:
            List[ImportDeclaration]: import declarations
        """
        return list(self._imports)

    def composite_declarations(self) -> List[CompositeDeclaration]:
        """Return the top-level composite declarations, in source order

        Returns:
            List[CompositeDeclaration]: composite declarations
        """
        return list(self._composites)

    def interface_declarations(self) -> List[InterfaceDeclaration]:
        """Return the top-level interface declarations, in source order

        Returns:
            List[InterfaceDeclaration]: interface declarations
        """
        return list(self._interfaces)
