# setup.py
from setuptools import setup, find_packages

setup(
    name="squirrel",
    version="0.1.0",
    description="A small S-expression language: tree-walking evaluator and JavaScript code generator",
    packages=find_packages(include=["squirrel", "squirrel.*"]),
    python_requires=">=3.11",
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    zip_safe=False,
)
