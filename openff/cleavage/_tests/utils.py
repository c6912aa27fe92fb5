from collections.abc import Iterable

from openff.cleavage.handles import MoleculeHandle
from rdkit import Chem


def canonical_smiles(smiles: str) -> str:
    """Round trip a SMILES pattern through RDKit so that it can be compared with
    the patterns produced by ``Molecule.to_smiles``."""
    return Chem.MolToSmiles(Chem.MolFromSmiles(smiles))


def fragment_smiles(fragments: Iterable[MoleculeHandle]) -> list[str]:
    """Returns the sorted, canonical, SMILES patterns of a set of fragments."""
    return sorted(canonical_smiles(fragment.to_smiles()) for fragment in fragments)


def expected_smiles(*smiles: str) -> list[str]:
    return sorted(canonical_smiles(pattern) for pattern in smiles)


def n_saturated_atoms(molecule: MoleculeHandle) -> int:
    """Returns the number of atoms a molecule has once all of its hydrogens have been
    added, without modifying it."""

    saturated = molecule.dup()
    saturated.add_hydrogens()

    return saturated.n_atoms


def assert_conserves_atoms(
    molecule: MoleculeHandle, fragments: Iterable[MoleculeHandle]
):
    assert n_saturated_atoms(molecule) == sum(
        n_saturated_atoms(fragment) for fragment in fragments
    )
