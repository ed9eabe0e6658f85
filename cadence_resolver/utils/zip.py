"""
Handle ZIP operations
"""
import json
import zipfile
from typing import TYPE_CHECKING, Dict
from zipfile import ZipFile

from cadence_resolver.export import PLAN_FILENAME, generate_plan_export

if TYPE_CHECKING:
    from cadence_resolver.program_imports import ProgramImports


# https://docs.python.org/3/library/zipfile.html#zipfile-objects
ZIP_TYPES_ACCEPTED = {
    "lzma": zipfile.ZIP_LZMA,
    "stored": zipfile.ZIP_STORED,
    "deflated": zipfile.ZIP_DEFLATED,
    "bzip2": zipfile.ZIP_BZIP2,
}


def save_to_zip(imports: "ProgramImports", zip_filename: str, zip_type: str = "lzma") -> None:
    """Save the deployment plan and the rewritten sources to a zip

    Args:
        imports (ProgramImports): resolved programs
        zip_filename (str): zip file to generate
        zip_type (str): compression type, one of ZIP_TYPES_ACCEPTED. Defaults to "lzma"
    """
    plan = generate_plan_export(imports)
    with ZipFile(
        zip_filename, "w", compression=ZIP_TYPES_ACCEPTED.get(zip_type, zipfile.ZIP_LZMA)
    ) as file_desc:
        file_desc.writestr(PLAN_FILENAME, json.dumps(plan, indent=2))
        for program, program_export in zip(imports.programs, plan["programs"]):
            file_desc.writestr(program_export["file"], program.replaced_imports())


def load_from_zip(zip_filename: str) -> Dict[str, str]:
    """Load the content of a zip generated by save_to_zip

    Args:
        zip_filename (str): zip file

    Returns:
        Dict[str, str]: file name -> content
    """
    with ZipFile(zip_filename, "r") as file_desc:
        return {name: file_desc.read(name).decode("utf8") for name in file_desc.namelist()}
