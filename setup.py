# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="crateunify",
    version="0.1.0",
    description="Unify a Rust crate's module tree into one buildable source file",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["crateunify", "crateunify.*"]),
    python_requires=">=3.9",
    install_requires=[
        "tree-sitter>=0.23",
        "tree-sitter-rust>=0.23",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'cargo-unify=crateunify.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
