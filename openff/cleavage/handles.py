"""The narrow set of atom, bond and molecule capabilities which the fragmentation
engine relies upon.

Any chemistry backend can be used with the engine provided its objects satisfy
these protocols. ``openff.cleavage.topology`` provides the default, RDKit backed,
implementation.
"""

from collections.abc import Iterator, Sequence
from typing import Optional, Protocol


class AtomHandle(Protocol):
    @property
    def id(self) -> int:
        """An identifier which is stable across copies of the owning molecule."""

    @property
    def molecule(self) -> "MoleculeHandle": ...

    @property
    def atomic_number(self) -> int: ...

    @property
    def formal_charge(self) -> int: ...

    @formal_charge.setter
    def formal_charge(self, value: int): ...

    @property
    def hybridization(self) -> str:
        """One of ``"sp3"``, ``"sp2"`` or ``"sp"``."""

    @property
    def bonds(self) -> list["BondHandle"]: ...

    @property
    def bonded_atoms(self) -> list["AtomHandle"]: ...

    @property
    def heavy_degree(self) -> int: ...

    @property
    def explicit_valence(self) -> int: ...

    @property
    def allowed_valence(self) -> int: ...

    def bond_to(self, other: "AtomHandle") -> Optional["BondHandle"]: ...


class BondHandle(Protocol):
    @property
    def molecule(self) -> "MoleculeHandle": ...

    @property
    def atom1(self) -> AtomHandle: ...

    @property
    def atom2(self) -> AtomHandle: ...

    @property
    def bond_order(self) -> int: ...

    @bond_order.setter
    def bond_order(self, value: int): ...


class MoleculeHandle(Protocol):
    @property
    def atoms(self) -> list[AtomHandle]: ...

    @property
    def n_atoms(self) -> int: ...

    @property
    def has_explicit_hydrogens(self) -> bool: ...

    def to_smiles(self, explicit_hydrogens: bool = False) -> str: ...

    def atom(self, atom_id: int) -> AtomHandle: ...

    def get_bond(self, atom1: AtomHandle, atom2: AtomHandle) -> Optional[BondHandle]: ...

    def add_bond(
        self, atom1: AtomHandle, atom2: AtomHandle, bond_order: int = 1
    ) -> BondHandle: ...

    def delete_bond(self, bond: BondHandle): ...

    def dup(self) -> "MoleculeHandle": ...

    def split(self, *bonds: BondHandle) -> list["MoleculeHandle"]: ...

    def add_hydrogens(self): ...

    def remove_hydrogens(self): ...

    def correct_for_ph(self, ph: float = 7.4): ...

    def each_match(
        self, smarts: str, unique: bool = True
    ) -> Iterator[tuple[AtomHandle, ...]]: ...

    def swap(
        self,
        anchor1: AtomHandle,
        to_move1: AtomHandle,
        anchor2: AtomHandle,
        to_move2: AtomHandle,
    ): ...


FragmentSet = Sequence[MoleculeHandle]
