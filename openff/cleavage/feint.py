"""Scoped edits which temporarily change a molecule and always restore it.

Every helper here restores the bonds and charges it touched when its scope is
left, whether the body completes normally or raises, in the reverse order the
edits were applied.
"""

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Optional, TypeVar

from openff.cleavage.handles import AtomHandle, BondHandle, MoleculeHandle

R = TypeVar("R")


@contextmanager
def feinted_e_transfer(
    molecule: MoleculeHandle,
    give_e_pair: Optional[AtomHandle] = None,
    get_e_pair: Optional[AtomHandle] = None,
) -> Iterator[MoleculeHandle]:
    """Move an electron pair from ``give_e_pair`` to ``get_e_pair`` for the duration
    of the scope, i.e. increase the formal charge of the giving atom by one and
    decrease that of the receiving atom by one.

    Parameters
    ----------
    molecule
        The molecule which owns the atoms.
    give_e_pair
        The atom donating the electron pair, if any.
    get_e_pair
        The atom receiving the electron pair, if any.

    Returns
    -------
        The edited molecule.
    """

    give_charge = None if give_e_pair is None else give_e_pair.formal_charge
    get_charge = None if get_e_pair is None else get_e_pair.formal_charge

    try:
        if give_e_pair is not None:
            give_e_pair.formal_charge = give_charge + 1

        if get_e_pair is not None:
            get_e_pair.formal_charge = get_charge - 1

        yield molecule

    finally:
        if get_e_pair is not None:
            get_e_pair.formal_charge = get_charge

        if give_e_pair is not None:
            give_e_pair.formal_charge = give_charge


@contextmanager
def feinted_double_bond(
    bond: BondHandle,
    give_e_pair: Optional[AtomHandle] = None,
    get_e_pair: Optional[AtomHandle] = None,
) -> Iterator[MoleculeHandle]:
    """Turn a bond into a double bond for the duration of the scope, optionally
    also moving an electron pair between two atoms (see ``feinted_e_transfer``).

    Returns
    -------
        The molecule which owns the bond.
    """

    original_order = bond.bond_order

    try:
        bond.bond_order = 2

        if give_e_pair is None and get_e_pair is None:
            yield bond.molecule
        else:
            with feinted_e_transfer(bond.molecule, give_e_pair, get_e_pair) as molecule:
                yield molecule

    finally:
        bond.bond_order = original_order


def feint_e_transfer(
    molecule: MoleculeHandle,
    callback: Callable[[MoleculeHandle], R],
    give_e_pair: Optional[AtomHandle] = None,
    get_e_pair: Optional[AtomHandle] = None,
) -> R:
    """Call ``callback`` with the molecule while an electron pair is moved from
    ``give_e_pair`` to ``get_e_pair`` and return whatever it returns."""

    with feinted_e_transfer(molecule, give_e_pair, get_e_pair) as edited:
        return callback(edited)


def feint_double_bond(
    bond: BondHandle,
    callback: Callable[[MoleculeHandle], R],
    give_e_pair: Optional[AtomHandle] = None,
    get_e_pair: Optional[AtomHandle] = None,
) -> R:
    """Turn ``bond`` into a double bond, call ``callback`` with the changed
    molecule, then return the bond (and any charges moved by ``give_e_pair`` /
    ``get_e_pair``) to its original state.

    Returns
    -------
        Whatever ``callback`` returned.
    """

    with feinted_double_bond(bond, give_e_pair, get_e_pair) as molecule:
        return callback(molecule)


@contextmanager
def swapped_atoms(
    molecule: MoleculeHandle,
    anchor1: AtomHandle,
    to_move1: AtomHandle,
    anchor2: AtomHandle,
    to_move2: AtomHandle,
) -> Iterator[MoleculeHandle]:
    """Bond ``to_move1`` to ``anchor2`` and ``to_move2`` to ``anchor1`` (see
    ``Molecule.swap``) for the duration of the scope."""

    molecule.swap(anchor1, to_move1, anchor2, to_move2)

    try:
        yield molecule
    finally:
        molecule.swap(anchor1, to_move2, anchor2, to_move1)
