import json

from openff.cleavage.fragment import MechanismFragmenter
from openff.cleavage.topology import Molecule

"""
This is an example script to enumerate the fragments a set of molecules may break
into following simple electron pushing mechanisms.
"""

molecules = {
    "isopropanol": "CC(C)O",
    "acetic acid": "CC(=O)O",
    "methyl tert-butyl ether": "COC(C)(C)C",
}

# Instantiate a fragmenter engine which applies every available rule.
frag_engine = MechanismFragmenter()

results = {}

for name, smiles in molecules.items():
    # Molecules without explicit hydrogens are corrected for the pH first.
    result = frag_engine.fragment_result(Molecule.from_smiles(smiles))

    print(f"{name}: {result.fragment_sets}")
    results[name] = result.dict()

with open('example_fragments.json', 'w') as f:
    json.dump(results, f, indent=2, sort_keys=True)
