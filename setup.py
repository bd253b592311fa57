from setuptools import setup, find_packages

setup(
    name="robustfit",
    version="1.0.0",
    description="Generic RANSAC estimation with adaptive trial budget",
    author="robustfit developers",
    packages=find_packages(exclude=["tests", "tests.*", "examples"]),
    install_requires=[
        "numpy>=1.24.0",
        "scipy>=1.10.0",
        "pyyaml>=6.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    python_requires=">=3.9",
)
