#!/usr/bin/env python3
"""Setup script for the pdf2array table reconstruction package."""

from setuptools import find_packages, setup

install_requires = [
    "pymupdf>=1.24",
    "numpy>=1.24",
    "numba>=0.58",
    "scipy>=1.10",
]

extras_require = {
    "test": ["pytest>=7.0"],
}

setup(
    name="pdf2array",
    version="1.0.0",
    description="Reconstruct rows and columns of text from PDF pages",
    packages=find_packages(include=["pdf2array", "pdf2array.*"]),
    install_requires=install_requires,
    extras_require=extras_require,
    python_requires=">=3.10",
    zip_safe=False,
)
