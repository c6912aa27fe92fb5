"""Mechanisms which break a molecule into fragments.

Each mechanism is anchored on atoms found by a rule matcher (or supplied by the
caller) and returns one or more fragment sets, the fragments of which have had
their hydrogens added so that they can be checked for atom conservation.
"""

import logging
from collections.abc import Sequence

from openff.cleavage.feint import feinted_double_bond, swapped_atoms
from openff.cleavage.filters import allowable_fragment_sets
from openff.cleavage.handles import AtomHandle, FragmentSet, MoleculeHandle

logger = logging.getLogger(__name__)


def _is_sp3_carbon(atom: AtomHandle) -> bool:
    return atom.atomic_number == 6 and atom.hybridization == "sp3"


def _saturated(fragments: FragmentSet) -> list[MoleculeHandle]:
    for fragment in fragments:
        fragment.add_hydrogens()

    return [*fragments]


def carbonyl_oxygen_dump(
    molecule: MoleculeHandle,
    carbon: AtomHandle,
    oxygen: AtomHandle,
    carbon_nbr: AtomHandle,
) -> list[MoleculeHandle]:
    """Split the molecule between ``carbon`` and ``carbon_nbr``, form a double bond
    between ``carbon`` and ``oxygen``, and move whatever was on the oxygen (e.g. a
    hydrogen, a substituent or a charge) onto ``carbon_nbr``.

    Notes
    -----
    * The molecule is not modified; the edits are made to a copy of it.
    * The returned fragments are not checked for atom conservation.

    Parameters
    ----------
    molecule
        The molecule to fragment.
    carbon
        The carbon which will become a carbonyl carbon.
    oxygen
        The oxygen singly bonded to ``carbon``.
    carbon_nbr
        The carbon bonded to ``carbon`` which will be split off.

    Returns
    -------
        The fragments of the edited copy.
    """

    appendage = next(
        (atom for atom in oxygen.bonded_atoms if atom.id != carbon.id), None
    )
    oxygen_charge = oxygen.formal_charge

    product = molecule.dup()

    new_carbon = product.atom(carbon.id)
    new_oxygen = product.atom(oxygen.id)
    new_carbon_nbr = product.atom(carbon_nbr.id)

    product.delete_bond(new_carbon.bond_to(new_carbon_nbr))

    if appendage is not None and appendage.id != carbon_nbr.id:
        new_appendage = product.atom(appendage.id)

        product.delete_bond(new_oxygen.bond_to(new_appendage))
        product.add_bond(new_carbon_nbr, new_appendage)

    if oxygen_charge != 0:
        new_carbon_nbr.formal_charge += oxygen_charge
        new_oxygen.formal_charge -= oxygen_charge

    new_carbon.bond_to(new_oxygen).bond_order = 2

    return _saturated(product.split())


def carbon_oxygen_esteal(
    molecule: MoleculeHandle, carbon: AtomHandle, oxygen: AtomHandle
) -> list[MoleculeHandle]:
    """Break the bond between ``carbon`` and ``oxygen`` giving both electrons to the
    oxygen, i.e. form a carbocation and an oxide anion.

    Notes
    -----
    * The molecule is not modified; the edits are made to a hydrogen saturated
      copy of it.
    * Hydrogen counts follow from valence, so the carbocation is left with one
      hydrogen fewer than the neutral carbon would carry once the bond is gone.
    * The returned fragments are not checked for atom conservation.
    """

    product = molecule.dup()
    product.add_hydrogens()

    new_carbon = product.atom(carbon.id)
    new_oxygen = product.atom(oxygen.id)

    product.delete_bond(new_carbon.bond_to(new_oxygen))

    new_carbon.formal_charge += 1
    new_oxygen.formal_charge -= 1

    return _saturated(product.split())


def _stripped_copy(molecule: MoleculeHandle) -> MoleculeHandle:
    working = molecule.dup()
    working.remove_hydrogens()

    return working


def peroxy_to_carboxy(
    molecule: MoleculeHandle,
    carbon: AtomHandle,
    oxygen: AtomHandle,
    carbon_nbrs: Sequence[AtomHandle],
    oxygen_nbr: AtomHandle,
) -> list[list[MoleculeHandle]]:
    """Rearrange a hydroperoxide ``carbon-oxygen-oxygen_nbr`` into a carboxylic acid
    on ``carbon``, splitting off each sp3 carbon neighbour of ``carbon`` in turn.

    Notes
    -----
    * The edits are made to a copy of the molecule with its hydrogens removed, so
      repeated calls give the same fragments. The only change made to the molecule
      itself is the hydrogens added by the conservation check.

    Parameters
    ----------
    molecule
        The molecule to fragment.
    carbon
        The carbon bonded to the peroxide.
    oxygen
        The peroxide oxygen bonded to ``carbon``.
    carbon_nbrs
        The neighbours of ``carbon`` which may be split off.
    oxygen_nbr
        The neighbour of ``oxygen`` other than ``carbon``.

    Returns
    -------
        One fragment set per sp3 carbon neighbour which conserves the atoms of the
        molecule, or an empty list if ``oxygen_nbr`` is not a terminal oxygen.
    """

    if oxygen_nbr.atomic_number != 8 or oxygen_nbr.heavy_degree != 1:
        logger.debug(f"atom {oxygen_nbr.id} is not a terminal peroxide oxygen")
        return []

    working = _stripped_copy(molecule)

    carbon = working.atom(carbon.id)
    oxygen = working.atom(oxygen.id)
    oxygen_nbr = working.atom(oxygen_nbr.id)

    fragment_sets = []

    for carbon_nbr in [atom for atom in carbon_nbrs if _is_sp3_carbon(atom)]:
        carbon_nbr = working.atom(carbon_nbr.id)

        with swapped_atoms(working, carbon, carbon_nbr, oxygen, oxygen_nbr):
            with feinted_double_bond(working.get_bond(carbon, oxygen)) as feinted:
                # The swap leaves the neighbour being split off on the oxygen.
                fragments = feinted.split(feinted.get_bond(oxygen, carbon_nbr))

        fragment_sets.append(_saturated(fragments))

    return allowable_fragment_sets(molecule, fragment_sets)


def co2_loss(
    molecule: MoleculeHandle,
    carbon: AtomHandle,
    oxygen: AtomHandle,
    c3_nbr: AtomHandle,
) -> list[list[MoleculeHandle]]:
    """Lose carbon dioxide from the carboxyl group on ``carbon``, leaving the
    electron pair of the broken bond (and so a negative charge) on ``c3_nbr``."""

    working = _stripped_copy(molecule)

    carbon = working.atom(carbon.id)
    oxygen = working.atom(oxygen.id)
    c3_nbr = working.atom(c3_nbr.id)

    with feinted_double_bond(
        working.get_bond(carbon, oxygen), oxygen, c3_nbr
    ) as feinted:
        fragments = feinted.split(feinted.get_bond(c3_nbr, carbon))

    return allowable_fragment_sets(molecule, [_saturated(fragments)])


def alcohol_to_aldehyde(
    molecule: MoleculeHandle,
    carbon: AtomHandle,
    oxygen: AtomHandle,
    carbon_nbrs: Sequence[AtomHandle],
) -> list[list[MoleculeHandle]]:
    """Turn the alcohol on ``carbon`` into a carbonyl, releasing each sp3 carbon
    neighbour of ``carbon`` in turn."""

    working = _stripped_copy(molecule)

    carbon = working.atom(carbon.id)
    oxygen = working.atom(oxygen.id)

    fragment_sets = []

    for carbon_nbr in [atom for atom in carbon_nbrs if _is_sp3_carbon(atom)]:
        with feinted_double_bond(working.get_bond(carbon, oxygen)) as feinted:
            fragments = feinted.split(feinted.get_bond(carbon, carbon_nbr))

        fragment_sets.append(_saturated(fragments))

    return allowable_fragment_sets(molecule, fragment_sets)


def near_side_double_bond_break(
    molecule: MoleculeHandle, carbon: AtomHandle, electrophile: AtomHandle
) -> list[list[MoleculeHandle]]:
    """Form a double bond between ``carbon`` and each of its sp3 carbon neighbours
    in turn while breaking the bond between ``carbon`` and ``electrophile``, e.g.
    the loss of water from an alcohol."""

    working = _stripped_copy(molecule)

    carbon = working.atom(carbon.id)
    electrophile = working.atom(electrophile.id)

    fragment_sets = []

    for near_carbon in [atom for atom in carbon.bonded_atoms if _is_sp3_carbon(atom)]:
        with feinted_double_bond(working.get_bond(carbon, near_carbon)) as feinted:
            fragments = feinted.split(feinted.get_bond(electrophile, carbon))

        fragment_sets.append(_saturated(fragments))

    return allowable_fragment_sets(molecule, fragment_sets)


def electrophile_snatches_electrons(
    molecule: MoleculeHandle, carbon: AtomHandle, electrophile: AtomHandle
) -> list[list[MoleculeHandle]]:
    """Break the bond between ``carbon`` and ``electrophile`` giving both electrons
    to the electrophile."""

    raise NotImplementedError(
        "The electrophile snatches electrons mechanism has not been implemented."
    )
