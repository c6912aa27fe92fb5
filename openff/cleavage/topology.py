"""An RDKit backed molecular graph.

Atoms carry an id which survives copying, hydrogen addition / removal and
splitting, which lets atoms found in a parent molecule be looked up in any copy
or fragment of it. ``Atom`` and ``Bond`` objects are light weight views which
resolve the underlying RDKit object through these ids whenever they are used, so
they remain valid while the molecule they belong to is being edited.
"""

import logging
from collections.abc import Iterator
from typing import Optional

from rdkit import Chem

from openff.cleavage.chemi import (
    apply_ph_transforms,
    assign_atom_ids,
    extract_component,
    find_connected_components,
    find_substructure_matches,
    normalize_hydrogens,
    rdkit_to_smiles,
    smiles_to_rdkit,
)
from openff.cleavage.utils import default_ph_transforms, get_atom_id, get_atom_index

logger = logging.getLogger(__name__)

_BOND_TYPES = {
    1: Chem.BondType.SINGLE,
    2: Chem.BondType.DOUBLE,
    3: Chem.BondType.TRIPLE,
}


class Atom:
    """A view of a single atom in a ``Molecule``."""

    def __init__(self, molecule: "Molecule", atom_id: int):
        self._molecule = molecule
        self._id = atom_id

    @property
    def _rd_atom(self) -> Chem.Atom:
        rd_molecule = self._molecule._rd_molecule
        return rd_molecule.GetAtomWithIdx(get_atom_index(rd_molecule, self._id))

    @property
    def id(self) -> int:
        return self._id

    @property
    def molecule(self) -> "Molecule":
        return self._molecule

    @property
    def atomic_number(self) -> int:
        return self._rd_atom.GetAtomicNum()

    @property
    def symbol(self) -> str:
        return self._rd_atom.GetSymbol()

    @property
    def formal_charge(self) -> int:
        return self._rd_atom.GetFormalCharge()

    @formal_charge.setter
    def formal_charge(self, value: int):
        self._rd_atom.SetFormalCharge(value)
        self._molecule._update()

    @property
    def bonds(self) -> list["Bond"]:
        return [
            Bond(self._molecule, self._id, neighbour.id)
            for neighbour in self.bonded_atoms
        ]

    @property
    def bonded_atoms(self) -> list["Atom"]:
        rd_molecule = self._molecule._rd_molecule
        return [
            Atom(self._molecule, get_atom_id(rd_molecule, neighbour.GetIdx()))
            for neighbour in self._rd_atom.GetNeighbors()
        ]

    @property
    def heavy_degree(self) -> int:
        """The number of bonds to atoms other than hydrogen."""
        return sum(1 for atom in self.bonded_atoms if atom.atomic_number != 1)

    @property
    def hybridization(self) -> str:
        """The hybridization implied by the bond orders around the atom."""
        pi_bonds = sum(bond.bond_order - 1 for bond in self.bonds)
        return {0: "sp3", 1: "sp2"}.get(pi_bonds, "sp")

    @property
    def implicit_hydrogen_count(self) -> int:
        return self._rd_atom.GetNumImplicitHs()

    @property
    def total_hydrogen_count(self) -> int:
        return self._rd_atom.GetTotalNumHs(includeNeighbors=True)

    @property
    def explicit_valence(self) -> int:
        """The sum of the bond orders to all atoms present in the graph."""
        return sum(bond.bond_order for bond in self.bonds)

    @property
    def allowed_valence(self) -> int:
        """The largest valence the atom may have given its formal charge.

        Charged atoms are treated as their isoelectronic neutral element, e.g. a
        carbocation as boron and an oxide anion as fluorine.
        """
        effective_number = self.atomic_number - self.formal_charge

        if effective_number < 1:
            return 0

        valences = Chem.GetPeriodicTable().GetValenceList(effective_number)
        return max(valences)

    def bond_to(self, other: "Atom") -> Optional["Bond"]:
        return self._molecule.get_bond(self, other)

    def remove_hydrogen(self):
        """Remove a single hydrogen from this atom, preferring hydrogen atoms which
        are present in the graph over implicit ones.

        An implicit hydrogen removed this way stays removed only until the hydrogens
        of the molecule are next normalized, e.g. by ``dup``, ``split`` or
        ``add_hydrogens``.
        """

        for neighbour in self.bonded_atoms:
            if neighbour.atomic_number != 1:
                continue

            rd_molecule = self._molecule._rd_molecule
            rd_molecule.RemoveAtom(get_atom_index(rd_molecule, neighbour.id))
            self._molecule._update()

            return

        n_hydrogens = self.implicit_hydrogen_count

        if n_hydrogens == 0:
            raise ValueError(f"atom {self._id} does not have a hydrogen to remove.")

        rd_atom = self._rd_atom
        rd_atom.SetNoImplicit(True)
        rd_atom.SetNumExplicitHs(n_hydrogens - 1)

        self._molecule._update()

    def __eq__(self, other):
        return (
            isinstance(other, Atom)
            and self._molecule is other._molecule
            and self._id == other._id
        )

    def __hash__(self):
        return hash((id(self._molecule), self._id))

    def __repr__(self):
        return f"Atom(id={self._id}, symbol={self.symbol}, charge={self.formal_charge})"


class Bond:
    """A view of the bond between two atoms of a ``Molecule``."""

    def __init__(self, molecule: "Molecule", atom1_id: int, atom2_id: int):
        self._molecule = molecule
        self._atom_ids = (atom1_id, atom2_id)

    @property
    def _rd_bond(self) -> Chem.Bond:
        rd_molecule = self._molecule._rd_molecule

        rd_bond = rd_molecule.GetBondBetweenAtoms(
            *(get_atom_index(rd_molecule, atom_id) for atom_id in self._atom_ids)
        )

        if rd_bond is None:
            raise ValueError(f"atoms {self._atom_ids} are not bonded.")

        return rd_bond

    @property
    def molecule(self) -> "Molecule":
        return self._molecule

    @property
    def atom1(self) -> Atom:
        return Atom(self._molecule, self._atom_ids[0])

    @property
    def atom2(self) -> Atom:
        return Atom(self._molecule, self._atom_ids[1])

    @property
    def atom_ids(self) -> tuple[int, int]:
        return self._atom_ids

    @property
    def bond_order(self) -> int:
        return int(self._rd_bond.GetBondTypeAsDouble())

    @bond_order.setter
    def bond_order(self, value: int):
        if value not in _BOND_TYPES:
            raise ValueError(f"{value} is not a supported bond order.")

        rd_bond = self._rd_bond
        rd_bond.SetBondType(_BOND_TYPES[value])
        rd_bond.SetIsAromatic(False)

        self._molecule._update()

    def other_atom(self, atom: Atom) -> Atom:
        if atom.id not in self._atom_ids:
            raise ValueError(f"atom {atom.id} is not part of this bond.")

        other_id = self._atom_ids[1] if atom.id == self._atom_ids[0] else self._atom_ids[0]
        return Atom(self._molecule, other_id)

    def __eq__(self, other):
        return (
            isinstance(other, Bond)
            and self._molecule is other._molecule
            and {*self._atom_ids} == {*other._atom_ids}
        )

    def __hash__(self):
        return hash((id(self._molecule), frozenset(self._atom_ids)))

    def __repr__(self):
        return f"Bond(atom_ids={self._atom_ids})"


class Molecule:
    """A mutable molecular graph backed by an RDKit ``RWMol``."""

    def __init__(self, rd_molecule: Optional[Chem.Mol] = None):
        self._rd_molecule = (
            Chem.RWMol() if rd_molecule is None else Chem.RWMol(rd_molecule)
        )

        assign_atom_ids(self._rd_molecule)
        normalize_hydrogens(self._rd_molecule)

    @classmethod
    def from_smiles(cls, smiles: str) -> "Molecule":
        """Create a molecule from a SMILES pattern. Hydrogens written explicitly in
        the pattern are kept as atoms, otherwise they are implicit."""
        return cls(smiles_to_rdkit(smiles))

    @classmethod
    def from_rdkit(cls, rd_molecule: Chem.Mol) -> "Molecule":
        """Create a molecule from a copy of an RDKit molecule. Aromatic bonds are
        kekulized."""
        rd_molecule = Chem.RWMol(rd_molecule)
        Chem.Kekulize(rd_molecule, clearAromaticFlags=True)

        return cls(rd_molecule)

    def to_rdkit(self) -> Chem.Mol:
        """Returns a copy of the underlying RDKit molecule."""
        return Chem.Mol(self._rd_molecule)

    def to_smiles(self, explicit_hydrogens: bool = False) -> str:
        return rdkit_to_smiles(self._rd_molecule, explicit_hydrogens)

    def _update(self):
        self._rd_molecule.UpdatePropertyCache(strict=False)

    @property
    def atoms(self) -> list[Atom]:
        return [
            Atom(self, get_atom_id(self._rd_molecule, rd_atom.GetIdx()))
            for rd_atom in self._rd_molecule.GetAtoms()
        ]

    @property
    def bonds(self) -> list[Bond]:
        return [
            Bond(
                self,
                get_atom_id(self._rd_molecule, rd_bond.GetBeginAtomIdx()),
                get_atom_id(self._rd_molecule, rd_bond.GetEndAtomIdx()),
            )
            for rd_bond in self._rd_molecule.GetBonds()
        ]

    @property
    def n_atoms(self) -> int:
        return self._rd_molecule.GetNumAtoms()

    @property
    def has_explicit_hydrogens(self) -> bool:
        return any(
            rd_atom.GetAtomicNum() == 1 for rd_atom in self._rd_molecule.GetAtoms()
        )

    def atom(self, atom_id: int) -> Atom:
        # Raise early for ids which are not present.
        get_atom_index(self._rd_molecule, atom_id)
        return Atom(self, atom_id)

    def get_bond(self, atom1: Atom, atom2: Atom) -> Optional[Bond]:
        rd_bond = self._rd_molecule.GetBondBetweenAtoms(
            get_atom_index(self._rd_molecule, atom1.id),
            get_atom_index(self._rd_molecule, atom2.id),
        )

        if rd_bond is None:
            return None

        return Bond(self, atom1.id, atom2.id)

    def add_bond(self, atom1: Atom, atom2: Atom, bond_order: int = 1) -> Bond:
        if bond_order not in _BOND_TYPES:
            raise ValueError(f"{bond_order} is not a supported bond order.")

        self._rd_molecule.AddBond(
            get_atom_index(self._rd_molecule, atom1.id),
            get_atom_index(self._rd_molecule, atom2.id),
            _BOND_TYPES[bond_order],
        )
        self._update()

        return Bond(self, atom1.id, atom2.id)

    def delete_bond(self, bond: Bond):
        if bond is None or self.get_bond(bond.atom1, bond.atom2) is None:
            atom_ids = None if bond is None else bond.atom_ids
            raise ValueError(f"{atom_ids} is not a bond in this molecule.")

        atom1_id, atom2_id = bond.atom_ids

        self._rd_molecule.RemoveBond(
            get_atom_index(self._rd_molecule, atom1_id),
            get_atom_index(self._rd_molecule, atom2_id),
        )
        self._update()

    def dup(self) -> "Molecule":
        """Returns an independent copy of this molecule whose atoms have the same
        ids."""
        return Molecule(self._rd_molecule)

    def split(self, *bonds: Bond) -> list["Molecule"]:
        """Returns the connected pieces of a copy of this molecule once any of the
        specified bonds have been removed from it. This molecule is left
        unchanged."""

        product = self.dup()

        for bond in bonds:
            atom1_id, atom2_id = bond.atom_ids
            product.delete_bond(Bond(product, atom1_id, atom2_id))

        return [
            Molecule(extract_component(product._rd_molecule, component))
            for component in find_connected_components(product._rd_molecule)
        ]

    def add_hydrogens(self):
        """Add every implicit hydrogen to the graph as an atom."""

        self._update()

        self._rd_molecule = Chem.RWMol(Chem.AddHs(self._rd_molecule))

        assign_atom_ids(self._rd_molecule)
        normalize_hydrogens(self._rd_molecule)

    def remove_hydrogens(self):
        """Remove hydrogen atoms from the graph, making them implicit."""

        self._update()

        self._rd_molecule = Chem.RWMol(
            Chem.RemoveHs(self._rd_molecule, sanitize=False)
        )

        normalize_hydrogens(self._rd_molecule)

    def correct_for_ph(self, ph: float = 7.4):
        """Protonate / deprotonate ionizable groups to represent the dominant
        species at a given pH, then add hydrogens."""

        self.remove_hydrogens()

        logger.debug(f"correcting {self.to_smiles()} for a pH of {ph}")

        apply_ph_transforms(self._rd_molecule, ph, default_ph_transforms())
        self._update()

        self.add_hydrogens()

    def each_match(
        self, smarts: str, unique: bool = True
    ) -> Iterator[tuple[Atom, ...]]:
        """Iterate over the atoms matched by a SMARTS pattern.

        All matches are found before the first is yielded, so the molecule may be
        edited while iterating.

        Parameters
        ----------
        smarts
            The pattern to match.
        unique
            Whether to skip matches which are symmetry equivalent to an earlier
            match.

        Returns
        -------
            Tuples of the matched atoms in the order they appear in the pattern.
        """

        matches = [
            tuple(get_atom_id(self._rd_molecule, index) for index in match)
            for match in find_substructure_matches(self._rd_molecule, smarts, unique)
        ]

        for match in matches:
            yield tuple(Atom(self, atom_id) for atom_id in match)

    def swap(self, anchor1: Atom, to_move1: Atom, anchor2: Atom, to_move2: Atom):
        """Move ``to_move1`` from ``anchor1`` onto ``anchor2`` and ``to_move2`` from
        ``anchor2`` onto ``anchor1``, keeping the order of both bonds."""

        bond1 = self.get_bond(anchor1, to_move1)
        bond2 = self.get_bond(anchor2, to_move2)

        if bond1 is None or bond2 is None:
            raise ValueError("both of the atom pairs to swap must be bonded.")

        bond_order1, bond_order2 = bond1.bond_order, bond2.bond_order

        self.delete_bond(bond1)
        self.delete_bond(bond2)

        self.add_bond(anchor2, to_move1, bond_order1)
        self.add_bond(anchor1, to_move2, bond_order2)

    def __repr__(self):
        return f"Molecule({self.to_smiles()})"
