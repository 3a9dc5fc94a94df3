from setuptools import setup, find_packages
# To use a consistent encoding
from codecs import open
from os import path


here = path.abspath(path.dirname(__file__))

# Get the long description from the README file
with open(path.join(here, 'README.rst'), encoding='utf-8') as f:
    long_description = f.read()


# Arguments marked as "Required" below must be included for upload to PyPI.
# Fields marked as "Optional" may be commented out.

setup(
    name='basketminer',
    version='1.0.0',
    description='Apriori market-basket analysis: frequent itemsets, association rules and rule pruning',
    long_description=long_description,
    license='GNU',
    packages=find_packages(exclude=['contrib', 'docs', 'tests']),
    install_requires=['pandas', 'numpy'],
    extras_require={
        'test': ['pytest'],
    },
    python_requires='>=3.7',
)
