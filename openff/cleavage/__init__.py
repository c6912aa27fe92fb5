"""
openff-cleavage

Enumerate the fragments a molecule may break into following simple reaction
mechanisms.
"""

from importlib.metadata import version

from openff.cleavage import (
    chemi,
    feint,
    filters,
    fragment,
    handles,
    matchers,
    mechanisms,
    topology,
    utils,
)

__version__ = version("openff-cleavage")
__all__ = [
    "chemi",
    "feint",
    "filters",
    "fragment",
    "handles",
    "matchers",
    "mechanisms",
    "topology",
    "utils",
]
