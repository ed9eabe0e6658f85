"""
Init module
"""

__all__ = ["AbstractParser", "DeclarationParser", "ParsedProgram"]

from .abstract_parser import AbstractParser
from .ast import ParsedProgram
from .declarations import DeclarationParser
