"""Find the places in a molecule where a fragmentation rule applies and run the
matching mechanism at each of them."""

import logging

from openff.cleavage.handles import MoleculeHandle
from openff.cleavage.mechanisms import carbon_oxygen_esteal, carbonyl_oxygen_dump

logger = logging.getLogger(__name__)

# A carbon singly bonded to either a hydroxyl or a charged oxygen.
CARBONYL_OXYGEN_SMARTS = "C-[O;H1,!+0]"
# A carbon bonded to an uncharged, two connected oxygen, i.e. an ether.
ETHER_OXYGEN_SMARTS = "C-[O;X2;H0;+0]"


def carbonyl_oxygen_dump_sets(
    molecule: MoleculeHandle, unique: bool = True
) -> list[list[MoleculeHandle]]:
    """Apply ``carbonyl_oxygen_dump`` once for every carbon neighbour of every
    carbon matched by ``CARBONYL_OXYGEN_SMARTS``.

    Parameters
    ----------
    molecule
        The molecule to fragment, typically without explicit hydrogens.
    unique
        Whether to skip matches which are symmetry equivalent to an earlier one.

    Returns
    -------
        The (unfiltered) fragment sets.
    """

    fragment_sets = []

    for carbon, oxygen in molecule.each_match(CARBONYL_OXYGEN_SMARTS, unique):
        for carbon_nbr in carbon.bonded_atoms:
            if carbon_nbr.atomic_number != 6:
                continue

            fragment_sets.append(
                carbonyl_oxygen_dump(molecule, carbon, oxygen, carbon_nbr)
            )

    logger.debug(f"found {len(fragment_sets)} carbonyl oxygen dump fragment sets")

    return fragment_sets


def oxidized_ether_sets(
    molecule: MoleculeHandle, unique: bool = True
) -> list[list[MoleculeHandle]]:
    """Apply ``carbon_oxygen_esteal`` to every carbon-oxygen bond matched by
    ``ETHER_OXYGEN_SMARTS``."""

    fragment_sets = [
        carbon_oxygen_esteal(molecule, carbon, oxygen)
        for carbon, oxygen in molecule.each_match(ETHER_OXYGEN_SMARTS, unique)
    ]

    logger.debug(f"found {len(fragment_sets)} oxidized ether fragment sets")

    return fragment_sets
