"""
openff-cleavage

Enumerate the fragments a molecule may break into following simple reaction mechanisms.
"""
from setuptools import find_namespace_packages, setup

DOCLINES = __doc__.split("\n")

setup(
    name='openff-cleavage',
    author='Open Force Field Initiative',
    description=DOCLINES[1],
    long_description="\n".join(DOCLINES[3:]),
    version='0.1.0',
    license='MIT',
    packages=find_namespace_packages(include=['openff.*']),
    # Optional include package data to ship with your package
    package_data={'openff.cleavage': ["data/*.json"]
                  },
    install_requires=[
        'rdkit',
        'networkx',
        'pydantic>=2',
    ],
    extras_require={
        'test': ['pytest'],
    },
    python_requires=">=3.10",
    zip_safe=False,
)
