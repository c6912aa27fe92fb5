import pytest
from openff.cleavage.topology import Molecule


def pytest_addoption(parser):
    parser.addoption(
        "--runslow", action="store_true", default=False, help="run slow tests"
    )


def pytest_configure(config):
    config.addinivalue_line("markers", "slow: mark test as slow to run")


def pytest_collection_modifyitems(config, items):
    if config.getoption("--runslow"):
        return
    skip_slow = pytest.mark.skip(reason="need --runslow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


@pytest.fixture()
def isopropanol() -> Molecule:
    # ids: C1 C2 O3 C4
    return Molecule.from_smiles("CC(O)C")


@pytest.fixture()
def ethanol() -> Molecule:
    return Molecule.from_smiles("CCO")


@pytest.fixture()
def acetic_acid() -> Molecule:
    return Molecule.from_smiles("CC(=O)O")


@pytest.fixture()
def acetate() -> Molecule:
    # ids: C1 C2 O3 O4
    return Molecule.from_smiles("CC(=O)[O-]")


@pytest.fixture()
def dimethyl_ether() -> Molecule:
    return Molecule.from_smiles("COC")


@pytest.fixture()
def methyl_ethyl_ether() -> Molecule:
    # ids: C1 C2 O3 C4
    return Molecule.from_smiles("CCOC")


@pytest.fixture()
def isopropyl_hydroperoxide() -> Molecule:
    # ids: C1 C2 C3 O4 O5
    return Molecule.from_smiles("CC(C)OO")
