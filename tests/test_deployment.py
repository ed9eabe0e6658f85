"""
Test sorting contracts in deployment order
"""
from typing import Dict, List, Optional

import pytest

from cadence_resolver.exceptions import (
    CyclicImportError,
    DuplicateContractName,
    NotAContract,
    UnresolvedImport,
)
from cadence_resolver.loader import MemoryLoader
from cadence_resolver.program_imports import DeploymentImports

CONTRACTS = {
    "ContractA.cdc": "pub contract ContractA {}",
    "ContractB.cdc": "pub contract ContractB {}",
    "ContractC.cdc": """
        import ContractA from "ContractA.cdc"

        pub contract ContractC {}
    """,
    "ContractD.cdc": """
        import ContractC from "ContractC.cdc"

        pub contract ContractD {}
    """,
    "ContractE.cdc": """
        import ContractF from "ContractF.cdc"

        pub contract ContractE {}
    """,
    "ContractF.cdc": """
        import ContractE from "ContractE.cdc"

        pub contract ContractF {}
    """,
    "ContractG.cdc": """
        import ContractA from "ContractA.cdc"
        import ContractB from "ContractB.cdc"

        pub contract ContractG {}
    """,
    "ContractH.cdc": """
        import ContractFoo from "Foo.cdc"

        pub contract ContractH {}
    """,
}


def deploy(
    locations: List[str], sources: Optional[Dict[str, str]] = None, aliases=None
) -> DeploymentImports:
    imports = DeploymentImports(MemoryLoader(sources or CONTRACTS), aliases or {})
    for index, location in enumerate(locations):
        imports.add_program(location, hex(index + 1))
    return imports


def sorted_locations(imports: DeploymentImports) -> List[str]:
    imports.sort()
    return [program.location for program in imports.programs]


@pytest.mark.parametrize(
    "locations,expected",
    [
        ([], []),
        (["ContractA.cdc"], ["ContractA.cdc"]),
        (["ContractA.cdc", "ContractB.cdc"], ["ContractA.cdc", "ContractB.cdc"]),
        (["ContractA.cdc", "ContractC.cdc"], ["ContractA.cdc", "ContractC.cdc"]),
        (["ContractC.cdc", "ContractA.cdc"], ["ContractA.cdc", "ContractC.cdc"]),
        (
            ["ContractA.cdc", "ContractC.cdc", "ContractD.cdc"],
            ["ContractA.cdc", "ContractC.cdc", "ContractD.cdc"],
        ),
        (
            ["ContractD.cdc", "ContractC.cdc", "ContractA.cdc"],
            ["ContractA.cdc", "ContractC.cdc", "ContractD.cdc"],
        ),
        (
            ["ContractA.cdc", "ContractB.cdc", "ContractG.cdc"],
            ["ContractA.cdc", "ContractB.cdc", "ContractG.cdc"],
        ),
        (
            ["ContractG.cdc", "ContractB.cdc", "ContractA.cdc"],
            ["ContractB.cdc", "ContractA.cdc", "ContractG.cdc"],
        ),
    ],
)
def test_deployment_order(locations: List[str], expected: List[str]) -> None:
    """Test that every contract comes after the contracts it imports"""
    assert sorted_locations(deploy(locations)) == expected


def test_linear_chain() -> None:
    """Test that A -> B -> C is deployed as C, B, A"""
    sources = {
        "A": 'import X from "B"\naccess(all) contract A {}',
        "B": 'import Y from "C"\naccess(all) contract B {}',
        "C": "access(all) contract C {}",
    }
    imports = deploy(["A", "B", "C"], sources)
    imports.sort()

    assert [program.name for program in imports.programs] == ["C", "B", "A"]
    a = imports.programs[2]
    assert a.replaced_imports() == "import X from 0x0000000000000002\naccess(all) contract A {}"


def test_diamond() -> None:
    """Test that shared dependencies come first, then the insertion order is kept"""
    sources = {
        "D": 'import B from "B"\nimport C from "C"\npub contract D {}',
        "B": 'import A from "A"\npub contract B {}',
        "C": 'import A from "A"\npub contract C {}',
        "A": "pub contract A {}",
    }
    assert sorted_locations(deploy(["D", "B", "C", "A"], sources)) == ["A", "B", "C", "D"]
    assert sorted_locations(deploy(["D", "C", "B", "A"], sources)) == ["A", "C", "B", "D"]


def test_aliases_are_not_dependencies() -> None:
    """Test that aliased imports do not constrain the order"""
    sources = {
        "A": 'import FT from "FungibleToken"\npub contract A {}',
        "B": "pub contract B {}",
    }
    imports = deploy(["A", "B"], sources, {"FungibleToken": "ee82856bf20e2aa6"})
    assert sorted_locations(imports) == ["A", "B"]
    assert "0xee82856bf20e2aa6" in imports.programs[0].replaced_imports()


def test_import_cycle() -> None:
    """Test that a cycle of two contracts is reported"""
    imports = deploy(["ContractE.cdc", "ContractF.cdc"])
    before = imports.programs

    with pytest.raises(CyclicImportError) as error:
        imports.sort()

    assert error.value.contract_names() == [["ContractE", "ContractF"]]
    assert str(error.value) == "contracts: import cycle(s) detected: [[ContractE ContractF]]"
    assert imports.programs == before


def test_import_cycle_without_identifiers() -> None:
    """Test a cycle written with imports that name no identifier"""
    sources = {
        "A": 'import from "B"\npub contract A {}',
        "B": 'import from "A"\npub contract B {}',
    }
    with pytest.raises(CyclicImportError) as error:
        deploy(["A", "B"], sources).sort()
    assert error.value.contract_names() == [["A", "B"]]


def test_import_cycle_smallest_id_first() -> None:
    """Test that cycles start with the contract added first"""
    imports = deploy(["ContractF.cdc", "ContractA.cdc", "ContractE.cdc"])
    with pytest.raises(CyclicImportError) as error:
        imports.sort()
    assert error.value.contract_names() == [["ContractF", "ContractE"]]


def test_multiple_cycles() -> None:
    """Test that every cycle is reported, and not the contracts depending on them"""
    sources = {
        "A": 'import B from "B"\npub contract A {}',
        "B": 'import C from "C"\npub contract B {}',
        "C": 'import A from "A"\npub contract C {}',
        "D": 'import A from "A"\npub contract D {}',
        "E": 'import F from "F"\npub contract E {}',
        "F": 'import E from "E"\npub contract F {}',
    }
    imports = deploy(["D", "E", "C", "F", "B", "A"], sources)
    with pytest.raises(CyclicImportError) as error:
        imports.sort()
    assert error.value.contract_names() == [["E", "F"], ["C", "B", "A"]]


def test_self_import() -> None:
    """Test that a contract importing itself is a cycle"""
    sources = {"A": 'import A from "A"\npub contract A {}', "B": "pub contract B {}"}
    imports = deploy(["B", "A"], sources)
    with pytest.raises(CyclicImportError) as error:
        imports.sort()
    assert error.value.contract_names() == [["A"]]


def test_unresolved_import() -> None:
    """Test that an unresolved import fails the sort"""
    imports = deploy(["ContractH.cdc"])
    with pytest.raises(UnresolvedImport) as error:
        imports.sort()
    assert str(error.value) == (
        "import from ContractH could not be found: Foo.cdc, make sure import path is correct"
    )


def test_not_a_contract() -> None:
    """Test that scripts cannot be sorted"""
    sources = {
        "A": "pub contract A {}",
        "Script": 'import A from "A"\npub fun main() {}',
    }
    imports = deploy(["A", "Script"], sources)
    with pytest.raises(NotAContract) as error:
        imports.sort()
    assert error.value.location == "Script"
    # Nothing has been resolved
    assert imports.programs[1].dependencies == {}


def test_interface_only_is_not_a_contract() -> None:
    """Test that a contract interface alone is not deployable"""
    imports = deploy(["I"], {"I": "pub contract interface I {}"})
    with pytest.raises(NotAContract):
        imports.sort()


def test_duplicate_contract_name() -> None:
    """Test that the same contract cannot be deployed twice"""
    sources = {"A": "pub contract Token {}", "B": "pub contract Token {}"}
    with pytest.raises(DuplicateContractName) as error:
        deploy(["A", "B"], sources).sort()
    assert error.value.name == "Token"


def test_sort_is_deterministic() -> None:
    """Test that identical inputs give identical outputs"""
    sources = {
        f"C{index}": "".join(f'import X{dep} from "C{dep}"\n' for dep in range(index % 3))
        + f"pub contract C{index} {{}}"
        for index in range(8)
    }
    locations = [f"C{index}" for index in (5, 1, 7, 0, 3, 6, 2, 4)]

    runs = []
    for _ in range(3):
        imports = deploy(locations, sources)
        imports.sort()
        runs.append(
            [(program.location, program.replaced_imports()) for program in imports.programs]
        )
    assert runs[0] == runs[1] == runs[2]

    order = [location for location, _ in runs[0]]
    for position, location in enumerate(order):
        index = int(location[1:])
        for dep in range(index % 3):
            assert order.index(f"C{dep}") < position


def test_sort_is_stable() -> None:
    """Test that moving an unrelated contract does not reorder the others"""
    sources = {
        "A": "pub contract A {}",
        "B": 'import A from "A"\npub contract B {}',
        "C": "pub contract C {}",
        "U": "pub contract U {}",
    }
    first = sorted_locations(deploy(["B", "C", "A", "U"], sources))
    second = sorted_locations(deploy(["U", "B", "C", "A"], sources))
    assert [x for x in first if x != "U"] == [x for x in second if x != "U"]


def test_sort_twice() -> None:
    """Test that sorting an already sorted deployment keeps the order"""
    imports = deploy(["ContractD.cdc", "ContractC.cdc", "ContractA.cdc"])
    first = sorted_locations(imports)
    assert sorted_locations(imports) == first


def test_import_by_contract_name() -> None:
    """Test that import "Name" binds the program declaring the contract Name"""
    sources = {
        "./B.cdc": 'import "A"\npub contract B {}',
        "./A.cdc": "pub contract A {}",
    }
    imports = deploy(["./B.cdc", "./A.cdc"], sources)
    imports.sort()

    b, a = imports.programs[1], imports.programs[0]
    assert [program.name for program in imports.programs] == ["A", "B"]
    assert b.dependencies == {"A": a}
    assert b.replaced_imports() == "import 0x0000000000000002\npub contract B {}"


def test_import_by_contract_name_wins_over_alias() -> None:
    """Test that a program matching the contract name is preferred to an alias"""
    sources = {
        "./B.cdc": 'import A from "A"\npub contract B {}',
        "./A.cdc": "pub contract A {}",
    }
    imports = deploy(["./B.cdc", "./A.cdc"], sources, {"A": "0x09"})
    imports.sort()

    b = imports.programs[1]
    assert b.aliases == {}
    assert b.replaced_imports() == "import A from 0x0000000000000002\npub contract B {}"
