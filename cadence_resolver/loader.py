"""
Loaders

A loader provides the source of a location. The resolver treats locations as opaque keys;
the loader decides what they mean (a file, an entry of a mapping, ...)
"""
import abc
import logging
from pathlib import Path
from typing import Dict, Mapping, Optional, Union

from cadence_resolver.exceptions import LoadError
from cadence_resolver.utils.naming import (
    absolute_location,
    clean_location,
    is_relative_path,
    location_to_path,
)

LOGGER = logging.getLogger("CadenceResolver")


class Loader(metaclass=abc.ABCMeta):
    """
    This is the abstract class for the loaders
    """

    @abc.abstractmethod
    def load(self, location: str) -> bytes:
        """Return the source of the location

        Args:
            location (str): location

        Raises:
            LoadError: If the source cannot be retrieved

        Returns:
            bytes: UTF-8 source
        """
        raise NotImplementedError

    # pylint: disable=no-self-use,unused-argument
    def normalize(self, base: str, location: str) -> str:
        """Return the key under which an import is looked up.
        By default locations are opaque and returned unchanged

        Args:
            base (str): location of the importing program
            location (str): import location

        Returns:
            str: normalized location
        """
        return location


class MemoryLoader(Loader):
    """
    Serve sources from a mapping location -> source
    """

    def __init__(self, sources: Optional[Mapping[str, Union[str, bytes]]] = None):
        self._sources: Dict[str, bytes] = {}
        for location, source in (sources or {}).items():
            self.add(location, source)

    def add(self, location: str, source: Union[str, bytes]) -> None:
        """Add or replace a source

        Args:
            location (str): location
            source (Union[str, bytes]): source, str are encoded in UTF-8
        """
        if isinstance(source, str):
            source = source.encode("utf8")
        self._sources[location] = source

    def load(self, location: str) -> bytes:
        """Return the source of the location

        Args:
            location (str): location

        Raises:
            LoadError: If the location is unknown

        Returns:
            bytes: UTF-8 source
        """
        try:
            return self._sources[location]
        except KeyError as error:
            raise LoadError(location, error) from error


class FileLoader(Loader):
    """
    Read sources from the file system.

    Relative imports (./X.cdc, ../X.cdc) are normalized against the directory of the
    importing program.
    """

    def __init__(self, working_dir: Optional[Union[str, Path]] = None):
        """Init the object

        Args:
            working_dir (Optional[Union[str, Path]]): directory the locations are relative to.
                Defaults to the current directory
        """
        self._working_dir: Path = Path(working_dir) if working_dir is not None else Path.cwd()

    @property
    def working_dir(self) -> Path:
        """Return the working directory

        Returns:
            Path: Working directory
        """
        return self._working_dir

    def load(self, location: str) -> bytes:
        """Read the file of the location

        Args:
            location (str): file path, absolute or relative to the working directory

        Raises:
            LoadError: If the file cannot be read

        Returns:
            bytes: file content
        """
        path = location_to_path(location, self._working_dir)
        LOGGER.debug("Loading %s from %s", location, path)
        try:
            with open(path, "rb") as file_desc:
                return file_desc.read()
        except OSError as error:
            raise LoadError(location, error) from error

    def normalize(self, base: str, location: str) -> str:
        """Resolve relative imports against the importing program

        Args:
            base (str): location of the importing program
            location (str): import location

        Returns:
            str: normalized location
        """
        if is_relative_path(location):
            return absolute_location(base, location)
        if location.endswith(".cdc"):
            return clean_location(location)
        return location
