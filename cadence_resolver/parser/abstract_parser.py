"""
Abstract Parser

This gives the skeleton for any parser able to drive the resolver
"""
import abc

from cadence_resolver.parser.ast import ParsedProgram


class AbstractParser(metaclass=abc.ABCMeta):
    """
    This is the abstract class for the parsers
    """

    NAME: str = ""

    @abc.abstractmethod
    def parse(self, code: bytes, location: str) -> ParsedProgram:
        """Parse the code

        Args:
            code (bytes): UTF-8 source
            location (str): location of the source, used in diagnostics

        Raises:
            ParseError: If the source does not parse. Diagnostics are kept verbatim

        Returns:
            ParsedProgram: top-level declarations of the source
        """
        raise NotImplementedError
