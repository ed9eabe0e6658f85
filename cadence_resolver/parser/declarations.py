"""
Declaration parser

Scan Cadence source for its top-level declarations: imports, composites and interfaces.
This is not a validator: bodies are skipped, only comments, string literals and the nesting
of delimiters are checked.
"""
import logging
from collections import namedtuple
from typing import List, Optional, Tuple

from cadence_resolver.exceptions import ParseError
from cadence_resolver.parser.abstract_parser import AbstractParser
from cadence_resolver.parser.ast import (
    KIND_OF_KEYWORD,
    AddressLocation,
    CompositeDeclaration,
    IdentifierLocation,
    ImportDeclaration,
    InterfaceDeclaration,
    Location,
    ParsedProgram,
    StringLocation,
)

LOGGER = logging.getLogger("CadenceResolver")

# kind: "identifier", "string", "address", "number", "punctuation"
Token = namedtuple("Token", ["kind", "value", "line", "column"])

OPENERS = {"(": ")", "[": "]", "{": "}"}
CLOSERS = {closer: opener for opener, closer in OPENERS.items()}


def _is_identifier_start(char: str) -> bool:
    return char.isalpha() or char == "_"


def _is_identifier_part(char: str) -> bool:
    return char.isalnum() or char == "_"


# pylint: disable=too-many-branches,too-many-statements
def tokenize(source: str) -> Tuple[List[Token], List[str]]:
    """Split the source into tokens, dropping whitespace and comments

    Args:
        source (str): source code

    Returns:
        Tuple[List[Token], List[str]]: (tokens, diagnostics)
    """
    tokens: List[Token] = []
    diagnostics: List[str] = []
    index = 0
    line = 1
    line_start = 0
    length = len(source)

    while index < length:
        char = source[index]
        column = index - line_start + 1

        if char == "\n":
            index += 1
            line += 1
            line_start = index
            continue

        if char.isspace():
            index += 1
            continue

        if source.startswith("//", index):
            end = source.find("\n", index)
            index = length if end == -1 else end
            continue

        if source.startswith("/*", index):
            # Block comments nest
            depth = 0
            start_line, start_column = line, column
            while index < length:
                if source.startswith("/*", index):
                    depth += 1
                    index += 2
                elif source.startswith("*/", index):
                    depth -= 1
                    index += 2
                    if depth == 0:
                        break
                else:
                    if source[index] == "\n":
                        line += 1
                        line_start = index + 1
                    index += 1
            if depth:
                diagnostics.append(f"{start_line}:{start_column}: unterminated block comment")
            continue

        if char == '"':
            start = index + 1
            index = start
            while index < length and source[index] not in ('"', "\n"):
                index += 2 if source[index] == "\\" else 1
            if index >= length or source[index] != '"':
                diagnostics.append(f"{line}:{column}: unterminated string literal")
                continue
            tokens.append(Token("string", source[start:index], line, column))
            index += 1
            continue

        if _is_identifier_start(char):
            start = index
            while index < length and _is_identifier_part(source[index]):
                index += 1
            tokens.append(Token("identifier", source[start:index], line, column))
            continue

        if char.isdigit():
            start = index
            if source.startswith(("0x", "0X"), index):
                index += 2
                while index < length and (source[index] in "0123456789abcdefABCDEF_"):
                    index += 1
                tokens.append(Token("address", source[start:index], line, column))
                continue
            while index < length and (source[index].isalnum() or source[index] in "_."):
                index += 1
            tokens.append(Token("number", source[start:index], line, column))
            continue

        tokens.append(Token("punctuation", char, line, column))
        index += 1

    return tokens, diagnostics


class _Scanner:
    """
    Walk the tokens and collect the top-level declarations
    """

    def __init__(self, tokens: List[Token]):
        self._tokens = tokens
        self._position = 0
        self._stack: List[Token] = []
        self.diagnostics: List[str] = []
        self.imports: List[ImportDeclaration] = []
        self.composites: List[CompositeDeclaration] = []
        self.interfaces: List[InterfaceDeclaration] = []

    def _peek(self, offset: int = 0) -> Optional[Token]:
        if self._position + offset < len(self._tokens):
            return self._tokens[self._position + offset]
        return None

    def _next(self) -> Optional[Token]:
        token = self._peek()
        if token is not None:
            self._position += 1
        return token

    def _error(self, token: Optional[Token], message: str) -> None:
        if token is None:
            last = self._tokens[-1] if self._tokens else Token("", "", 1, 1)
            self.diagnostics.append(f"{last.line}:{last.column}: {message}, found end of file")
        else:
            self.diagnostics.append(f"{token.line}:{token.column}: {message}, found {token.value!r}")

    def scan(self) -> None:
        while True:
            token = self._next()
            if token is None:
                break

            if token.kind == "punctuation":
                self._track_nesting(token)
                continue

            if self._stack or token.kind != "identifier":
                continue

            if token.value == "import":
                self._import(token)
            elif token.value in KIND_OF_KEYWORD:
                self._composite(token)

        for opener in reversed(self._stack):
            self.diagnostics.append(f"{opener.line}:{opener.column}: unclosed {opener.value!r}")

    def _track_nesting(self, token: Token) -> None:
        if token.value in OPENERS:
            self._stack.append(token)
        elif token.value in CLOSERS:
            if not self._stack:
                self.diagnostics.append(f"{token.line}:{token.column}: unexpected {token.value!r}")
            elif self._stack[-1].value != CLOSERS[token.value]:
                opener = self._stack.pop()
                self.diagnostics.append(
                    f"{token.line}:{token.column}: mismatched {token.value!r}, "
                    f"expected {OPENERS[opener.value]!r}"
                )
            else:
                self._stack.pop()

    def _location(self) -> Optional[Location]:
        token = self._peek()
        if token is None:
            return None
        if token.kind == "string":
            self._next()
            return StringLocation(token.value)
        if token.kind == "address":
            self._next()
            return AddressLocation(token.value)
        if token.kind == "identifier":
            self._next()
            return IdentifierLocation(token.value)
        return None

    def _import(self, keyword: Token) -> None:
        # import "X" | import A, B from <location> | import Crypto | import from "X"
        token = self._peek()
        if token is not None and token.kind == "string":
            self._next()
            self.imports.append(ImportDeclaration([], StringLocation(token.value), keyword.line))
            return

        after = self._peek(1)
        if (
            token is not None
            and token.value == "from"
            and after is not None
            and after.kind in ("string", "address")
        ):
            self._next()
            location = self._location()
            assert location is not None
            self.imports.append(ImportDeclaration([], location, keyword.line))
            return

        identifiers: List[str] = []
        while True:
            token = self._peek()
            if token is None or token.kind != "identifier":
                self._error(token, "expected import location")
                return
            self._next()
            identifiers.append(token.value)
            separator = self._peek()
            if separator is not None and separator.value == ",":
                self._next()
                continue
            break

        following = self._peek()
        if following is not None and following.kind == "identifier" and following.value == "from":
            self._next()
            location = self._location()
            if location is None:
                self._error(self._peek(), "expected location after 'from'")
                return
            self.imports.append(ImportDeclaration(identifiers, location, keyword.line))
            return

        if len(identifiers) > 1:
            self._error(following, "expected 'from' after imported identifiers")
            return
        self.imports.append(
            ImportDeclaration([], IdentifierLocation(identifiers[0]), keyword.line)
        )

    def _composite(self, keyword: Token) -> None:
        kind = KIND_OF_KEYWORD[keyword.value]
        is_interface = False
        token = self._peek()
        if token is not None and token.kind == "identifier" and token.value == "interface":
            self._next()
            is_interface = True
            token = self._peek()

        if token is None or token.kind != "identifier":
            self._error(token, f"expected identifier after {keyword.value!r}")
            return
        self._next()

        if is_interface:
            self.interfaces.append(InterfaceDeclaration(kind, token.value, keyword.line))
        else:
            self.composites.append(CompositeDeclaration(kind, token.value, keyword.line))


class DeclarationParser(AbstractParser):
    """
    Default parser: scan the top-level declarations of Cadence source
    """

    NAME = "declarations"

    def parse(self, code: bytes, location: str) -> ParsedProgram:
        """Parse the code

        Args:
            code (bytes): UTF-8 source
            location (str): location of the source, used in diagnostics

        Raises:
            ParseError: If the source is not valid UTF-8, has unterminated literals or comments,
                unbalanced delimiters, or malformed import and composite declarations

        Returns:
            ParsedProgram: top-level declarations of the source
        """
        try:
            source = code.decode("utf8")
        except UnicodeDecodeError as error:
            raise ParseError(location, [f"source is not valid UTF-8: {error}"]) from error

        tokens, diagnostics = tokenize(source)
        scanner = _Scanner(tokens)
        scanner.scan()
        diagnostics += scanner.diagnostics

        if diagnostics:
            raise ParseError(location, diagnostics)

        LOGGER.debug(
            "%s: %d import(s), %d composite(s), %d interface(s)",
            location,
            len(scanner.imports),
            len(scanner.composites),
            len(scanner.interfaces),
        )
        return ParsedProgram(scanner.imports, scanner.composites, scanner.interfaces)
