"""functions to build, match, split and protonate RDKit molecules"""

import logging
from typing import Any

import networkx
from rdkit import Chem

from openff.cleavage.utils import ATOM_ID_PROPERTY, get_atom_id

logger = logging.getLogger(__name__)


def smiles_to_rdkit(smiles: str) -> Chem.RWMol:
    """Create a kekulized RDKit molecule from a SMILES pattern.

    Any hydrogens written explicitly in the pattern are retained as atoms.

    Parameters
    ----------
    smiles
        SMILES representation of desired molecule.

    Returns
    -------
        An editable molecule whose bonds all have integer bond orders.
    """

    parameters = Chem.SmilesParserParams()
    parameters.removeHs = False

    rd_molecule = Chem.MolFromSmiles(smiles, parameters)

    if rd_molecule is None:
        raise ValueError(f"{smiles} could not be parsed into a molecule.")

    Chem.Kekulize(rd_molecule, clearAromaticFlags=True)

    return Chem.RWMol(rd_molecule)


def assign_atom_ids(rd_molecule: Chem.Mol):
    """Assign a stable id to every atom which does not yet have one. New ids
    continue on from the largest id already present."""

    next_id = 1 + max(
        (get_atom_id(rd_molecule, atom.GetIdx(), False) for atom in rd_molecule.GetAtoms()),
        default=0,
    )

    for rd_atom in rd_molecule.GetAtoms():
        if rd_atom.HasProp(ATOM_ID_PROPERTY):
            continue

        rd_atom.SetIntProp(ATOM_ID_PROPERTY, next_id)
        next_id += 1


def normalize_hydrogens(rd_molecule: Chem.Mol):
    """Make the hydrogen count of every heavy atom follow from its valence.

    Explicit hydrogen counts stored on atoms (e.g. from bracket atoms in a SMILES
    pattern) are cleared so that editing a bond or a formal charge immediately
    changes the number of implicit hydrogens an atom carries. Radical centers are
    left untouched.
    """

    for rd_atom in rd_molecule.GetAtoms():
        if rd_atom.GetAtomicNum() == 1 or rd_atom.GetNumRadicalElectrons() > 0:
            continue

        rd_atom.SetNoImplicit(False)
        rd_atom.SetNumExplicitHs(0)

    rd_molecule.UpdatePropertyCache(strict=False)


def _perceived_copy(rd_molecule: Chem.Mol) -> Chem.Mol:
    """Returns a copy of a molecule with ring membership and aromaticity perceived
    so that SMARTS primitives such as ``C`` / ``c`` behave as expected. The atom
    ordering of the copy matches the input."""

    rd_copy = Chem.Mol(rd_molecule)
    rd_copy.UpdatePropertyCache(strict=False)

    Chem.FastFindRings(rd_copy)
    # Molecules caught part way through an edit may not fully sanitize.
    Chem.SanitizeMol(rd_copy, catchErrors=True)

    return rd_copy


def find_substructure_matches(
    rd_molecule: Chem.Mol, smarts: str, unique: bool = True
) -> list[tuple[int, ...]]:
    """Find the atoms in a molecule which match a SMARTS pattern.

    Parameters
    ----------
    rd_molecule
        The molecule to search.
    smarts
        The SMARTS pattern to match.
    unique
        Whether to drop matches which are symmetry equivalent to an earlier match,
        i.e. whose atoms have the same canonical ranks (computed without breaking
        ties) as those of a match already found.

    Returns
    -------
        The indices of the matched atoms in the order they appear in the pattern.
    """

    query = Chem.MolFromSmarts(smarts)

    if query is None:
        raise ValueError(f"{smarts} is not a valid SMARTS pattern.")

    rd_copy = _perceived_copy(rd_molecule)

    matches = rd_copy.GetSubstructMatches(query, uniquify=unique, maxMatches=10000)

    if not unique:
        return [*matches]

    symmetry_classes = Chem.CanonicalRankAtoms(rd_copy, breakTies=False)

    unique_matches = []
    found_classes = set()

    for match in matches:
        match_classes = tuple(symmetry_classes[index] for index in match)

        if match_classes in found_classes:
            continue

        found_classes.add(match_classes)
        unique_matches.append(match)

    return unique_matches


def find_connected_components(rd_molecule: Chem.Mol) -> list[set[int]]:
    """Find the disconnected pieces of a molecule.

    A graph of the molecule is constructed (using ``networkx``) from its atoms and
    bonds, from which the components are identified as those sets of atoms which
    are 'connected' together (using ``connected_components``) by at least one path.

    Returns
    -------
        The atom indices of each component, ordered by the smallest index each
        contains.
    """

    graph = networkx.Graph()
    graph.add_nodes_from(range(rd_molecule.GetNumAtoms()))

    for bond in rd_molecule.GetBonds():
        graph.add_edge(bond.GetBeginAtomIdx(), bond.GetEndAtomIdx())

    return sorted(networkx.connected_components(graph), key=min)


def extract_component(rd_molecule: Chem.Mol, atom_indices: set[int]) -> Chem.RWMol:
    """Returns a copy of a molecule which only contains the specified atoms (and
    the bonds between them). The stable ids of the retained atoms are preserved."""

    component = Chem.RWMol(rd_molecule)
    component.BeginBatchEdit()

    for atom_index in range(rd_molecule.GetNumAtoms()):
        if atom_index in atom_indices:
            continue

        component.RemoveAtom(atom_index)

    component.CommitBatchEdit()
    component.UpdatePropertyCache(strict=False)

    return component


def _tagged_atom_index(query: Chem.Mol) -> int:
    tagged = [atom.GetIdx() for atom in query.GetAtoms() if atom.GetAtomMapNum() == 1]

    if len(tagged) != 1:
        raise ValueError(
            f"{Chem.MolToSmarts(query)} must define exactly one tagged (:1) atom."
        )

    return tagged[0]


def apply_ph_transforms(
    rd_molecule: Chem.Mol, ph: float, transforms: list[dict[str, Any]]
):
    """Protonate or deprotonate a molecule in place so that it represents the
    dominant species at a given pH.

    Notes
    -----
    * The molecule should not contain explicit hydrogens. Hydrogen counts follow
      from the changed formal charges.

    Parameters
    ----------
    rd_molecule
        The molecule to modify.
    ph
        The pH to correct the molecule for.
    transforms
        The transforms to consider, see ``default_ph_transforms``. Acids whose pKa
        is below the pH lose a proton from their tagged atom and bases whose pKa is
        above the pH gain one.
    """

    for transform in transforms:
        if transform["type"] == "acid":
            if ph <= transform["pka"]:
                continue

            charge = -1

        elif transform["type"] == "base":
            if ph >= transform["pka"]:
                continue

            charge = 1

        else:
            raise NotImplementedError(
                f"Only acid and base transforms are supported, not {transform['type']}."
            )

        query = Chem.MolFromSmarts(transform["smarts"])

        if query is None:
            logger.warning(f"Skipping the unparseable {transform['name']} transform.")
            continue

        tagged_index = _tagged_atom_index(query)

        rd_copy = _perceived_copy(rd_molecule)

        for match in rd_copy.GetSubstructMatches(query, uniquify=True):
            rd_atom = rd_molecule.GetAtomWithIdx(match[tagged_index])

            if rd_atom.GetFormalCharge() != 0:
                continue

            rd_atom.SetFormalCharge(charge)

        rd_molecule.UpdatePropertyCache(strict=False)


def rdkit_to_smiles(rd_molecule: Chem.Mol, explicit_hydrogens: bool = False) -> str:
    """Write a molecule to a canonical SMILES pattern.

    Parameters
    ----------
    rd_molecule
        The molecule to write.
    explicit_hydrogens
        Whether any hydrogen atoms should be kept in the pattern.
    """

    rd_copy = Chem.Mol(rd_molecule)
    rd_copy.UpdatePropertyCache(strict=False)

    if not explicit_hydrogens:
        rd_copy = Chem.RemoveHs(rd_copy, sanitize=False)

    Chem.SanitizeMol(rd_copy, catchErrors=True)

    return Chem.MolToSmiles(rd_copy)
