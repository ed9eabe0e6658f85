"""
Test the export of resolved programs
"""
import os

import pytest

from cadence_resolver.export import (
    PLAN_FILENAME,
    code_hash,
    export_file_names,
    export_to_json,
    generate_plan_export,
    load_plan,
)
from cadence_resolver.loader import MemoryLoader
from cadence_resolver.program_imports import DeploymentImports
from cadence_resolver.utils.zip import load_from_zip, save_to_zip

SOURCES = {
    "./contracts/Token.cdc": 'import FT from "FungibleToken"\npub contract Token {}',
    "./contracts/Market.cdc": 'import Token from "./contracts/Token.cdc"\npub contract Market {}',
}


@pytest.fixture
def sorted_imports() -> DeploymentImports:
    imports = DeploymentImports(MemoryLoader(SOURCES), {"FungibleToken": "0xee82856bf20e2aa6"})
    imports.add_program("./contracts/Market.cdc", "0x01", "alice")
    imports.add_program("./contracts/Token.cdc", "0x02", "bob")
    imports.sort()
    return imports


def test_code_hash() -> None:
    """Test the SHA3-256 of the code"""
    assert code_hash("") == "a7ffc6f8bf1ed76651c14756a061d662f580ff4de43b49fa82d80a4b80f8434a"
    assert code_hash("pub contract A {}") != code_hash("pub contract B {}")


def test_generate_plan_export(sorted_imports: DeploymentImports) -> None:
    """Test the deployment plan"""
    plan = generate_plan_export(sorted_imports)

    assert plan["deployment_order"] == ["Token", "Market"]
    token, market = plan["programs"]
    assert token == {
        "location": "./contracts/Token.cdc",
        "name": "Token",
        "account": "bob",
        "target": "0x0000000000000002",
        "dependencies": {},
        "aliases": {"FungibleToken": "0xee82856bf20e2aa6"},
        "file": "contracts/Token.cdc",
        "code_hash": code_hash("import FT from 0xee82856bf20e2aa6\npub contract Token {}"),
    }
    assert market["dependencies"] == {"./contracts/Token.cdc": "./contracts/Token.cdc"}
    assert market["aliases"] == {}
    assert market["account"] == "alice"


def test_export_to_json(sorted_imports: DeploymentImports, make_tmpdir: str) -> None:
    """Test that the plan and the rewritten sources are written"""
    export_dir = os.path.join(make_tmpdir, "export")
    paths = export_to_json(sorted_imports, export_dir)

    assert paths == [
        os.path.join(export_dir, PLAN_FILENAME),
        os.path.join(export_dir, "contracts/Token.cdc"),
        os.path.join(export_dir, "contracts/Market.cdc"),
    ]
    assert load_plan(paths[0]) == generate_plan_export(sorted_imports)
    with open(paths[2], encoding="utf8") as file_desc:
        assert file_desc.read() == "import Token from 0x0000000000000002\npub contract Market {}"


@pytest.mark.parametrize("zip_type", ["lzma", "stored", "deflated", "bzip2"])
def test_zip(sorted_imports: DeploymentImports, make_tmpdir: str, zip_type: str) -> None:
    """Test that the zip holds the plan and the rewritten sources"""
    zip_filename = os.path.join(make_tmpdir, "deployment.zip")
    save_to_zip(sorted_imports, zip_filename, zip_type)

    content = load_from_zip(zip_filename)
    assert sorted(content) == sorted([PLAN_FILENAME, "contracts/Token.cdc", "contracts/Market.cdc"])
    assert content["contracts/Token.cdc"] == (
        "import FT from 0xee82856bf20e2aa6\npub contract Token {}"
    )
    assert '"deployment_order"' in content[PLAN_FILENAME]


def test_export_file_names_are_distinct(make_tmpdir: str) -> None:
    """Test that locations mapping to the same file name are exported to distinct files"""
    sources = {
        "X": "pub contract X {}",
        "X.cdc": "pub contract Y {}",
        "../Z.cdc": "pub contract Z {}",
        "Z.cdc": "pub contract W {}",
    }
    imports = DeploymentImports(MemoryLoader(sources), {})
    for location in sources:
        imports.add_program(location)
    imports.resolve()

    assert export_file_names(imports.programs) == ["X.cdc", "X_1.cdc", "Z.cdc", "Z_3.cdc"]

    export_dir = os.path.join(make_tmpdir, "export")
    paths = export_to_json(imports, export_dir)
    assert len(set(paths)) == 5
    with open(os.path.join(export_dir, "X_1.cdc"), encoding="utf8") as file_desc:
        assert file_desc.read() == "pub contract Y {}"

    zip_filename = os.path.join(make_tmpdir, "deployment.zip")
    save_to_zip(imports, zip_filename)
    assert len(load_from_zip(zip_filename)) == 5
