"""Setup script for ocean_grids package."""

from setuptools import setup, find_packages

setup(
    name='ocean_grids',
    version='0.3',
    packages=find_packages(include=['ocean_grids', 'ocean_grids.*']),
    package_data={'ocean_grids.config': ['defaults.yaml']},
    python_requires='>=3.9',
    install_requires=[
        'numpy>=1.20.0',
        'pyyaml>=5.4',
        'matplotlib>=3.3.0',
    ],
    extras_require={
        'test': ['pytest>=7.0'],
    },
)
