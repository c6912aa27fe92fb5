import json
from importlib import resources
from typing import Any

from rdkit import Chem

ATOM_ID_PROPERTY = "cleavage_atom_id"


def default_ph_transforms() -> list[dict[str, Any]]:
    """Returns the default set of protonation transforms used when correcting a
    molecule for a given pH.

    Notes
    -----
    * The transforms are loaded from the internal ``data/ph-transforms.json``
      file.
    * Each transform stores a ``smarts`` pattern with exactly one tagged atom
      (``:1``), the ``pka`` of the group and its ``type`` (``"acid"`` or
      ``"base"``).

    Returns
    -------
        A list of transforms ordered as they should be applied.
    """

    data_file = resources.files("openff.cleavage").joinpath(
        "data/ph-transforms.json"
    )

    with data_file.open() as file:
        transforms = json.load(file)

    return transforms


def get_atom_id(
    rd_molecule: Chem.Mol, atom_index: int, error_on_missing: bool = True
) -> int:
    """Returns the stable id of a particular atom in an RDKit molecule.

    Parameters
    ----------
    rd_molecule
        The molecule containing the atom.
    atom_index
        The index of the atom in the molecule.
    error_on_missing
        Whether an error should be raised if the atom has not been assigned an id.

    Returns
    -------
        The id if found, otherwise 0.
    """
    rd_atom = rd_molecule.GetAtomWithIdx(atom_index)

    if not rd_atom.HasProp(ATOM_ID_PROPERTY):
        if error_on_missing:
            raise KeyError(f"atom {atom_index} has not been assigned an id.")

        return 0

    return rd_atom.GetIntProp(ATOM_ID_PROPERTY)


def get_atom_index(rd_molecule: Chem.Mol, atom_id: int) -> int:
    """Returns the index of the atom in an RDKit molecule which has the specified
    stable id.

    Parameters
    ----------
    rd_molecule
        The molecule containing the atom.
    atom_id
        The stable id of the atom.

    Returns
    -------
        The corresponding atom index
    """

    for rd_atom in rd_molecule.GetAtoms():
        if (
            rd_atom.HasProp(ATOM_ID_PROPERTY)
            and rd_atom.GetIntProp(ATOM_ID_PROPERTY) == atom_id
        ):
            return rd_atom.GetIdx()

    raise ValueError(f"{atom_id} does not correspond to an atom in the molecule.")
