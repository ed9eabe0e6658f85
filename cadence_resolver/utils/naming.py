"""
Module handling the location naming operations (relative -> absolute, etc)
"""
import posixpath
from pathlib import Path
from typing import Union


def is_relative_path(location: str) -> bool:
    """Check if the location is a path relative to the importing program

    Args:
        location (str): import location

    Returns:
        bool: True if the location starts with ./ or ../
    """
    return location.startswith(("./", "../"))


def clean_location(location: str) -> str:
    """Normalize the separators and the dots of a path location.
    './a/../B.cdc' -> 'B.cdc'

    Args:
        location (str): location

    Returns:
        str: cleaned location
    """
    return posixpath.normpath(location.replace("\\", "/"))


def absolute_location(base: str, location: str) -> str:
    """Join a relative import location with the directory of the importing program.
    ('contracts/A.cdc', './B.cdc') -> 'contracts/B.cdc'

    Args:
        base (str): location of the importing program
        location (str): import location

    Returns:
        str: cleaned location, relative to the same root as base
    """
    if not is_relative_path(location):
        return location
    return clean_location(posixpath.join(posixpath.dirname(base.replace("\\", "/")), location))


def location_to_path(location: str, working_dir: Union[str, Path]) -> Path:
    """Convert a location to a file path

    Args:
        location (str): location
        working_dir (Union[str, Path]): directory the relative locations start from

    Returns:
        Path: path of the file
    """
    path = Path(location)
    if path.is_absolute():
        return path
    return Path(working_dir).joinpath(path)


def location_to_export_name(location: str) -> str:
    """Convert a location to a file name usable in an export.
    '../contracts/A.cdc' -> 'contracts/A.cdc'

    Args:
        location (str): location

    Returns:
        str: export name
    """
    parts = [part for part in clean_location(location).split("/") if part not in ("", ".", "..")]
    name = "/".join(parts) or "program"
    if not name.endswith(".cdc"):
        name += ".cdc"
    return name
