"""
Export the resolved programs: the deployment plan (json) and the rewritten sources
"""
import json
import logging
import os
from typing import TYPE_CHECKING, Dict, List, Optional, Set, Union

from Crypto.Hash import SHA3_256

from cadence_resolver.utils.naming import location_to_export_name

if TYPE_CHECKING:
    from cadence_resolver.program import Program
    from cadence_resolver.program_imports import ProgramImports

LOGGER = logging.getLogger("CadenceResolver")

PLAN_FILENAME = "deployment.json"


def code_hash(code: str) -> str:
    """Return the SHA3-256 hash of the code

    Args:
        code (str): code

    Returns:
        str: hex digest
    """
    sha3_result = SHA3_256.new()
    sha3_result.update(code.encode("utf-8"))
    return sha3_result.hexdigest()


def export_file_names(programs: List["Program"]) -> List[str]:
    """Return a distinct export file name for each program.
    On a collision, the program id is added before the extension: 'X.cdc' -> 'X_1.cdc'

    Args:
        programs (List[Program]): programs

    Returns:
        List[str]: file names, in the order of the programs
    """
    used: Set[str] = set()
    names: List[str] = []
    for program in programs:
        name = location_to_export_name(program.location)
        if name in used:
            stem = name[: -len(".cdc")]
            name = f"{stem}_{program.id}.cdc"
            suffix = 0
            while name in used:
                suffix += 1
                name = f"{stem}_{program.id}_{suffix}.cdc"
        used.add(name)
        names.append(name)
    return names


def generate_program_export(program: "Program", file_name: Optional[str] = None) -> Dict:
    """Generate the export of one program

    Args:
        program (Program): resolved program
        file_name (Optional[str]): name of the exported source. Defaults to the name
            derived from the location

    Returns:
        Dict: json-serializable description of the program
    """
    code = program.replaced_imports()
    return {
        "location": program.location,
        "name": program.name,
        "account": program.account_name,
        "target": program.target.hex_with_prefix(),
        "dependencies": {
            location: dependency.location
            for location, dependency in sorted(program.dependencies.items())
        },
        "aliases": {
            location: address.hex_with_prefix()
            for location, address in sorted(program.aliases.items())
        },
        "file": file_name or location_to_export_name(program.location),
        "code_hash": code_hash(code),
    }


def generate_plan_export(imports: "ProgramImports") -> Dict:
    """Generate the deployment plan of resolved (or sorted) programs

    Args:
        imports (ProgramImports): resolved programs

    Returns:
        Dict: json-serializable plan
    """
    programs = imports.programs
    return {
        "deployment_order": [program.name or program.location for program in programs],
        "programs": [
            generate_program_export(program, file_name)
            for program, file_name in zip(programs, export_file_names(programs))
        ],
    }


def export_to_json(imports: "ProgramImports", export_dir: str = "cadence-export") -> List[str]:
    """Write the deployment plan and the rewritten source of each program

    Args:
        imports (ProgramImports): resolved programs
        export_dir (str): export directory. Defaults to "cadence-export"

    Returns:
        List[str]: paths of the files generated, the plan first
    """
    if not os.path.exists(export_dir):
        os.makedirs(export_dir)

    plan = generate_plan_export(imports)
    plan_path = os.path.join(export_dir, PLAN_FILENAME)
    with open(plan_path, "w", encoding="utf8") as file_desc:
        json.dump(plan, file_desc, indent=2)

    paths = [plan_path]
    for program, program_export in zip(imports.programs, plan["programs"]):
        path = os.path.join(export_dir, program_export["file"])
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, "w", encoding="utf8", newline="") as file_desc:
            file_desc.write(program.replaced_imports())
        paths.append(path)

    LOGGER.info("Exported %d program(s) to %s", len(imports.programs), export_dir)
    return paths


def load_plan(path: Union[str, os.PathLike]) -> Dict:
    """Load a deployment plan written by export_to_json

    Args:
        path (Union[str, os.PathLike]): plan file

    Returns:
        Dict: plan
    """
    with open(path, encoding="utf8") as file_desc:
        return json.load(file_desc)
