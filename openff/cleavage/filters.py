import logging
from collections.abc import Sequence

from openff.cleavage.handles import FragmentSet, MoleculeHandle

logger = logging.getLogger(__name__)


def allowable_fragmentation(molecule: MoleculeHandle, fragments: FragmentSet) -> bool:
    """Returns whether a set of fragments accounts for every atom of the molecule
    they were generated from.

    Notes
    -----
    * Both the molecule and the fragments should have had their hydrogens added
      (see ``add_hydrogens``) before calling this function, otherwise only the
      heavy atoms are compared.

    Parameters
    ----------
    molecule
        The parent molecule.
    fragments
        The fragments of the parent.
    """
    return molecule.n_atoms == sum(fragment.n_atoms for fragment in fragments)


def allowable_fragment_sets(
    molecule: MoleculeHandle, fragment_sets: Sequence[FragmentSet]
) -> list[FragmentSet]:
    """Adds hydrogens to the molecule, then selects the fragment sets which conserve
    its atoms.

    Sets which gain or lose atoms are the signature of a chemically invalid split
    and are silently dropped.

    Parameters
    ----------
    molecule
        The parent molecule. Hydrogens will be added to it as a side effect.
    fragment_sets
        The candidate fragment sets, each of whose fragments should already have
        had their hydrogens added.

    Returns
    -------
        The allowed fragment sets in their original order.
    """

    molecule.add_hydrogens()

    allowed_sets = []

    for fragments in fragment_sets:
        is_allowed = allowable_fragmentation(molecule, fragments)

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                f"{[fragment.to_smiles() for fragment in fragments]} "
                f"{'conserves' if is_allowed else 'does not conserve'} the "
                f"{molecule.n_atoms} atoms of the parent"
            )

        if is_allowed:
            allowed_sets.append(fragments)

    return allowed_sets
