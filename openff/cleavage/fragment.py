import logging
from collections.abc import Callable
from enum import Enum
from typing import Any, Optional

import openff.cleavage
import rdkit
from openff.cleavage.filters import allowable_fragment_sets
from openff.cleavage.handles import MoleculeHandle
from openff.cleavage.matchers import carbonyl_oxygen_dump_sets, oxidized_ether_sets
from openff.cleavage.topology import Molecule

from pydantic.v1 import BaseModel, Field

logger = logging.getLogger(__name__)

RuleMatcher = Callable[[MoleculeHandle, bool], list[list[MoleculeHandle]]]


class FragmentationRule(str, Enum):
    """The fragmentation rules which can be applied to a molecule."""

    CARBONYL_OXYGEN_DUMP = "cad_o"
    CARBONYL_OXYGEN_DUMP_VARIANT = "cad_oo"
    OXIDIZED_ETHER = "oxed_ether"


class ConfigurationError(ValueError):
    """An exception raised when a fragmentation engine is configured with options it
    does not understand."""


# Both carbonyl oxygen dump rules are driven by the same pattern.
_RULE_MATCHERS: dict[FragmentationRule, RuleMatcher] = {
    FragmentationRule.CARBONYL_OXYGEN_DUMP: carbonyl_oxygen_dump_sets,
    FragmentationRule.CARBONYL_OXYGEN_DUMP_VARIANT: carbonyl_oxygen_dump_sets,
    FragmentationRule.OXIDIZED_ETHER: oxidized_ether_sets,
}


def _default_rules() -> list[str]:
    return [rule.value for rule in FragmentationRule]


class FragmentationResult(BaseModel):
    """An object which stores the results of fragmenting a molecule."""

    parent_smiles: str = Field(
        ..., description="A SMILES pattern describing the parent molecule."
    )

    fragment_sets: list[list[str]] = Field(
        ...,
        description="The SMILES patterns of the fragments in each of the generated "
        "fragment sets. Every set accounts for all of the atoms of the parent.",
    )

    provenance: dict[str, Any] = Field(
        ...,
        description="A dictionary storing provenance information about how the "
        "fragments were generated.",
    )

    @property
    def parent_molecule(self) -> Molecule:
        """The parent molecule represented as a ``Molecule`` object."""
        return Molecule.from_smiles(self.parent_smiles)

    @property
    def fragment_molecules(self) -> list[list[Molecule]]:
        """The fragment sets represented as ``Molecule`` objects."""
        return [
            [Molecule.from_smiles(smiles) for smiles in fragment_set]
            for fragment_set in self.fragment_sets
        ]


class MechanismFragmenter(BaseModel):
    """Fragment engine which breaks molecules apart following simple, electron
    pushing, reaction mechanisms."""

    rules: list[str] = Field(
        default_factory=_default_rules,
        description="The identifiers of the fragmentation rules to apply, e.g. "
        "'cad_o' or 'oxed_ether'. See ``FragmentationRule`` for the available rules.",
    )

    uniq: bool = Field(
        False,
        description="Whether to remove fragment sets which are duplicates of an "
        "earlier set. This is not yet supported.",
    )

    ph: float = Field(
        7.4,
        description="The pH to protonate / deprotonate molecules without explicit "
        "hydrogens at before they are fragmented.",
    )

    unique_matches: bool = Field(
        True,
        description="Whether to skip rule matches which are symmetry equivalent to an "
        "earlier match.",
    )

    def _validate_rules(self) -> list[FragmentationRule]:
        """Convert the rule identifiers into ``FragmentationRule`` values, raising a
        ``ConfigurationError`` for any that are not recognised."""

        available = {rule.value for rule in FragmentationRule}
        unknown = [rule for rule in self.rules if rule not in available]

        if len(unknown) > 0:
            raise ConfigurationError(
                f"{unknown} are not valid fragmentation rules. The available rules "
                f"are {sorted(available)}."
            )

        return [FragmentationRule(rule) for rule in self.rules]

    def _rule_matchers(self) -> list[RuleMatcher]:
        """Returns each distinct matcher required by the selected rules, in the order
        the rules were selected."""

        matchers = []

        for rule in self._validate_rules():
            matcher = _RULE_MATCHERS[rule]

            if matcher in matchers:
                continue

            matchers.append(matcher)

        return matchers

    def fragment(self, molecule: MoleculeHandle) -> list[list[MoleculeHandle]]:
        """Fragments a molecule according to this class' settings.

        Notes
        -----
        * The molecule is not modified; all work is performed on a copy of it.
        * Molecules without explicit hydrogens are first corrected for the pH, and
          the returned fragments will have their hydrogens removed. Molecules with
          explicit hydrogens are used as is, and the returned fragments will keep
          their hydrogens.

        Parameters
        ----------
        molecule
            The molecule to fragment.

        Returns
        -------
            The fragment sets which account for every atom of the molecule.
        """

        matchers = self._rule_matchers()

        if self.uniq:
            raise NotImplementedError(
                "Removing duplicate fragment sets is not yet supported."
            )

        had_hydrogens = molecule.has_explicit_hydrogens

        working_molecule = molecule.dup()

        if not had_hydrogens:
            working_molecule.correct_for_ph(self.ph)

        working_molecule.remove_hydrogens()

        fragment_sets = []

        for matcher in matchers:
            fragment_sets.extend(matcher(working_molecule, self.unique_matches))

        fragment_sets = allowable_fragment_sets(working_molecule, fragment_sets)

        if not had_hydrogens:
            for fragments in fragment_sets:
                for fragment in fragments:
                    fragment.remove_hydrogens()

        logger.info(
            f"generated {len(fragment_sets)} fragment sets from "
            f"{molecule.to_smiles()} using the {self.rules} rules"
        )

        return fragment_sets

    def fragment_result(self, molecule: MoleculeHandle) -> FragmentationResult:
        """Fragments a molecule and stores the fragments as SMILES patterns together
        with provenance about how they were generated.

        Parameters
        ----------
        molecule
            The molecule to fragment.

        Returns
        -------
            The results of the fragmentation including the fragments and provenance
            about the fragmentation.
        """

        fragment_sets = self.fragment(molecule)

        return FragmentationResult(
            parent_smiles=molecule.to_smiles(),
            fragment_sets=[
                [fragment.to_smiles() for fragment in fragments]
                for fragments in fragment_sets
            ],
            provenance=self._default_provenance(),
        )

    def _default_provenance(self) -> dict[str, Any]:
        """Returns a dictionary containing default provenance information."""

        provenance = {
            "creator": openff.cleavage.__package__,
            "version": openff.cleavage.__version__,
            "options": self.dict(),
            "toolkits": [("RDKit", rdkit.__version__)],
        }

        return provenance


def fragment(
    molecule: MoleculeHandle,
    rules: Optional[list[str]] = None,
    uniq: bool = False,
    ph: float = 7.4,
) -> list[list[MoleculeHandle]]:
    """Fragment a molecule using a set of fragmentation rules.

    Parameters
    ----------
    molecule
        The molecule to fragment. It is not modified.
    rules
        The identifiers of the rules to apply. All rules are applied by default.
    uniq
        Whether to remove duplicate fragment sets. This is not yet supported and
        will raise a ``NotImplementedError``.
    ph
        The pH to correct molecules without explicit hydrogens for.

    Returns
    -------
        The fragment sets which account for every atom of the molecule.
    """

    fragmenter = MechanismFragmenter(
        rules=_default_rules() if rules is None else rules, uniq=uniq, ph=ph
    )

    return fragmenter.fragment(molecule)
