"""
Init module
"""

from .exceptions import (
    CadenceResolverError,
    CyclicImportError,
    DuplicateContractName,
    DuplicateLocation,
    InvalidAddress,
    LoadError,
    NotAContract,
    ParseError,
    UnresolvedImport,
)
from .loader import FileLoader, Loader, MemoryLoader
from .program import Program
from .program_imports import DeploymentImports, ProgramImports
from .utils.address import Address
