import pytest
from openff.cleavage._tests.utils import canonical_smiles
from openff.cleavage.topology import Atom, Bond, Molecule
from rdkit import Chem


def test_from_smiles_kekulizes():
    molecule = Molecule.from_smiles("c1ccccc1")

    bond_orders = sorted(bond.bond_order for bond in molecule.bonds)
    assert bond_orders == [1, 1, 1, 2, 2, 2]


def test_from_rdkit():
    rd_molecule = Chem.MolFromSmiles("c1ccccc1O")

    molecule = Molecule.from_rdkit(rd_molecule)

    assert [atom.id for atom in molecule.atoms] == [1, 2, 3, 4, 5, 6, 7]
    assert all(bond.bond_order in {1, 2} for bond in molecule.bonds)

    # The input should not have been modified.
    assert any(bond.GetIsAromatic() for bond in rd_molecule.GetBonds())


def test_to_rdkit_is_copy():
    molecule = Molecule.from_smiles("CO")

    rd_molecule = Chem.RWMol(molecule.to_rdkit())
    rd_molecule.RemoveAtom(1)

    assert molecule.n_atoms == 2


def test_to_smiles(isopropanol):
    assert isopropanol.to_smiles() == canonical_smiles("CC(C)O")

    isopropanol.add_hydrogens()

    assert isopropanol.to_smiles() == canonical_smiles("CC(C)O")
    assert "[H]" in isopropanol.to_smiles(explicit_hydrogens=True)


def test_atom_lookup(isopropanol):
    oxygen = isopropanol.atom(3)

    assert isinstance(oxygen, Atom)
    assert oxygen.atomic_number == 8
    assert oxygen.symbol == "O"

    with pytest.raises(ValueError, match="does not correspond to an atom"):
        isopropanol.atom(99)


def test_add_hydrogens(ethanol):
    ethanol.add_hydrogens()

    assert ethanol.n_atoms == 9
    assert ethanol.has_explicit_hydrogens

    atom_ids = [atom.id for atom in ethanol.atoms]

    assert atom_ids[:3] == [1, 2, 3]
    assert sorted(atom_ids[3:]) == [4, 5, 6, 7, 8, 9]

    assert ethanol.atom(1).heavy_degree == 1
    assert len(ethanol.atom(1).bonded_atoms) == 4


def test_add_hydrogens_idempotent(ethanol):
    ethanol.add_hydrogens()
    ethanol.add_hydrogens()

    assert ethanol.n_atoms == 9


def test_remove_hydrogens(ethanol):
    ethanol.add_hydrogens()
    ethanol.remove_hydrogens()

    assert ethanol.n_atoms == 3
    assert not ethanol.has_explicit_hydrogens

    assert [atom.id for atom in ethanol.atoms] == [1, 2, 3]
    assert ethanol.atom(3).total_hydrogen_count == 1


def test_dup(isopropanol):
    copied = isopropanol.dup()

    assert [atom.id for atom in copied.atoms] == [atom.id for atom in isopropanol.atoms]

    copied.delete_bond(copied.get_bond(copied.atom(2), copied.atom(3)))

    assert isopropanol.get_bond(isopropanol.atom(2), isopropanol.atom(3)) is not None


@pytest.mark.parametrize(
    "smiles, hybridization",
    [("CC", "sp3"), ("C=C", "sp2"), ("C#C", "sp"), ("C=C=C", "sp2")],
)
def test_hybridization(smiles, hybridization):
    molecule = Molecule.from_smiles(smiles)
    assert molecule.atom(1).hybridization == hybridization


def test_formal_charge_changes_hydrogens(ethanol):
    oxygen = ethanol.atom(3)
    assert oxygen.total_hydrogen_count == 1

    oxygen.formal_charge = -1

    assert oxygen.formal_charge == -1
    assert oxygen.total_hydrogen_count == 0


@pytest.mark.parametrize(
    "smiles, atom_id, expected_valence",
    [("C", 1, 4), ("[CH3+]", 1, 3), ("C[O-]", 2, 1), ("CO", 2, 2)],
)
def test_allowed_valence(smiles, atom_id, expected_valence):
    molecule = Molecule.from_smiles(smiles)
    assert molecule.atom(atom_id).allowed_valence == expected_valence


def test_explicit_valence():
    molecule = Molecule.from_smiles("C=O")
    assert molecule.atom(1).explicit_valence == 2

    molecule.add_hydrogens()
    assert molecule.atom(1).explicit_valence == 4


def test_remove_hydrogen_implicit(ethanol):
    carbon = ethanol.atom(1)
    carbon.remove_hydrogen()

    assert carbon.total_hydrogen_count == 2


def test_remove_hydrogen_implicit_renormalized(ethanol):
    ethanol.atom(1).remove_hydrogen()

    assert ethanol.dup().atom(1).total_hydrogen_count == 3


def test_remove_hydrogen_explicit(ethanol):
    ethanol.add_hydrogens()

    ethanol.atom(1).remove_hydrogen()

    assert ethanol.n_atoms == 8
    assert len(ethanol.atom(1).bonded_atoms) == 3


def test_remove_hydrogen_missing():
    molecule = Molecule.from_smiles("O=C=O")

    with pytest.raises(ValueError, match="does not have a hydrogen to remove"):
        molecule.atom(2).remove_hydrogen()


def test_get_bond(ethanol):
    bond = ethanol.get_bond(ethanol.atom(2), ethanol.atom(3))

    assert isinstance(bond, Bond)
    assert bond.bond_order == 1
    assert {bond.atom1.id, bond.atom2.id} == {2, 3}
    assert bond.other_atom(ethanol.atom(3)) == ethanol.atom(2)

    assert ethanol.get_bond(ethanol.atom(1), ethanol.atom(3)) is None
    assert ethanol.atom(1).bond_to(ethanol.atom(3)) is None


def test_bond_survives_hydrogen_changes(ethanol):
    bond = ethanol.get_bond(ethanol.atom(2), ethanol.atom(3))

    ethanol.add_hydrogens()
    bond.bond_order = 2

    assert bond.bond_order == 2


def test_bond_order_invalid(ethanol):
    bond = ethanol.get_bond(ethanol.atom(1), ethanol.atom(2))

    with pytest.raises(ValueError, match="is not a supported bond order"):
        bond.bond_order = 4


def test_add_and_delete_bond(ethanol):
    bond = ethanol.add_bond(ethanol.atom(1), ethanol.atom(3))

    assert bond.bond_order == 1
    assert ethanol.to_smiles() == canonical_smiles("C1CO1")

    ethanol.delete_bond(bond)

    assert ethanol.to_smiles() == canonical_smiles("CCO")

    with pytest.raises(ValueError, match=r"\(1, 3\) is not a bond in this molecule"):
        ethanol.delete_bond(bond)


def test_delete_missing_bond(ethanol):
    with pytest.raises(ValueError, match="None is not a bond in this molecule"):
        ethanol.delete_bond(ethanol.get_bond(ethanol.atom(1), ethanol.atom(3)))


def test_bond_repr_after_delete(ethanol):
    bond = ethanol.get_bond(ethanol.atom(2), ethanol.atom(3))
    ethanol.delete_bond(bond)

    assert repr(bond) == "Bond(atom_ids=(2, 3))"


def test_split(ethanol):
    fragments = ethanol.split(ethanol.get_bond(ethanol.atom(2), ethanol.atom(3)))

    assert [fragment.to_smiles() for fragment in fragments] == ["CC", "O"]
    assert [[atom.id for atom in fragment.atoms] for fragment in fragments] == [
        [1, 2],
        [3],
    ]

    assert ethanol.n_atoms == 3
    assert ethanol.to_smiles() == canonical_smiles("CCO")


def test_split_disconnected():
    molecule = Molecule.from_smiles("CC.O")

    fragments = molecule.split()

    assert [fragment.n_atoms for fragment in fragments] == [2, 1]


def test_swap():
    molecule = Molecule.from_smiles("CC.ON")

    molecule.swap(molecule.atom(1), molecule.atom(2), molecule.atom(3), molecule.atom(4))

    assert molecule.get_bond(molecule.atom(3), molecule.atom(2)) is not None
    assert molecule.get_bond(molecule.atom(1), molecule.atom(4)) is not None
    assert molecule.to_smiles() == canonical_smiles("CO.CN")


def test_swap_keeps_bond_orders():
    molecule = Molecule.from_smiles("C=C.ON")

    molecule.swap(molecule.atom(1), molecule.atom(2), molecule.atom(3), molecule.atom(4))

    assert molecule.get_bond(molecule.atom(3), molecule.atom(2)).bond_order == 2
    assert molecule.get_bond(molecule.atom(1), molecule.atom(4)).bond_order == 1


def test_swap_not_bonded(ethanol):
    with pytest.raises(ValueError, match="must be bonded"):
        ethanol.swap(ethanol.atom(1), ethanol.atom(3), ethanol.atom(2), ethanol.atom(3))


def test_each_match(dimethyl_ether):
    matches = [*dimethyl_ether.each_match("C-[O;X2;H0;+0]", unique=False)]

    assert len(matches) == 2
    assert all(oxygen.id == 2 for _, oxygen in matches)

    assert len([*dimethyl_ether.each_match("C-[O;X2;H0;+0]")]) == 1


def test_each_match_while_editing(dimethyl_ether):
    for carbon, oxygen in dimethyl_ether.each_match("C-[O;X2;H0;+0]", unique=False):
        dimethyl_ether.delete_bond(carbon.bond_to(oxygen))

    assert dimethyl_ether.to_smiles() == canonical_smiles("C.C.O")


def test_correct_for_ph(acetic_acid):
    acetic_acid.correct_for_ph()

    assert acetic_acid.has_explicit_hydrogens
    assert acetic_acid.n_atoms == 7
    assert acetic_acid.to_smiles() == canonical_smiles("CC(=O)[O-]")


def test_correct_for_ph_low(acetic_acid):
    acetic_acid.correct_for_ph(2.0)
    assert acetic_acid.to_smiles() == canonical_smiles("CC(=O)O")
