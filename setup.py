"""Setup script for graphsql."""

from setuptools import find_packages, setup

setup(
    name="graphsql",
    version="0.1.0",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.10",
    install_requires=[],
    extras_require={
        "postgres": ["psycopg2-binary>=2.9"],
        "mysql": ["PyMySQL>=1.0"],
        "test": ["pytest>=7.0"],
    },
)
