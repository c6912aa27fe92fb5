import pytest
from openff.cleavage._tests.utils import (
    assert_conserves_atoms,
    canonical_smiles,
    expected_smiles,
    fragment_smiles,
)
from openff.cleavage.matchers import carbonyl_oxygen_dump_sets, oxidized_ether_sets
from openff.cleavage.topology import Molecule


@pytest.mark.parametrize(
    "smiles, expected_sets",
    [
        ("CC(O)C", [("C", "CC=O"), ("C", "CC=O")]),
        ("CCO", [("C", "C=O")]),
        ("CC(=O)[O-]", [("O=C=O", "[CH3-]")]),
        ("CO", []),
        ("COC", []),
        ("CCC", []),
    ],
)
def test_carbonyl_oxygen_dump_sets(smiles, expected_sets):
    molecule = Molecule.from_smiles(smiles)

    fragment_sets = carbonyl_oxygen_dump_sets(molecule)

    assert sorted(fragment_smiles(fragments) for fragments in fragment_sets) == sorted(
        expected_smiles(*expected) for expected in expected_sets
    )

    for fragments in fragment_sets:
        assert_conserves_atoms(molecule, fragments)

    assert molecule.to_smiles() == canonical_smiles(smiles)


@pytest.mark.parametrize("unique, expected_count", [(True, 1), (False, 2)])
def test_oxidized_ether_sets_unique(dimethyl_ether, unique, expected_count):
    fragment_sets = oxidized_ether_sets(dimethyl_ether, unique)

    assert len(fragment_sets) == expected_count

    for fragments in fragment_sets:
        assert fragment_smiles(fragments) == expected_smiles("[CH3+]", "C[O-]")


def test_oxidized_ether_sets(methyl_ethyl_ether):
    fragment_sets = oxidized_ether_sets(methyl_ethyl_ether)

    assert sorted(fragment_smiles(fragments) for fragments in fragment_sets) == sorted(
        [expected_smiles("C[CH2+]", "C[O-]"), expected_smiles("[CH3+]", "CC[O-]")]
    )


@pytest.mark.parametrize("smiles", ["CC(O)C", "CC(=O)[O-]", "C[O-]", "CCC"])
def test_oxidized_ether_sets_no_match(smiles):
    assert oxidized_ether_sets(Molecule.from_smiles(smiles)) == []
