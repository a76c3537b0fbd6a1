"""
Exact Math - Setup
"""

from setuptools import setup, find_packages

setup(
    name="exact_math",
    version="1.0",
    description="Exact symbolic algebra: simplify, factor, differentiate and solve",
    author="Exact Math contributors",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.8",
    install_requires=[
        "numpy",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: Mathematics",
        "Programming Language :: Python :: 3",
    ],
)
