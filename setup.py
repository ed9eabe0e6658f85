"""
cadence-resolver package installation
"""
from setuptools import find_packages, setup

with open("README.md", "r", encoding="utf8") as f:
    long_description = f.read()

setup(
    name="cadence-resolver",
    description="Resolve the imports of Cadence programs and sort contracts in deployment order.",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.8",
    install_requires=["pycryptodome>=3.4.6"],
    extras_require={
        "test": [
            "pytest",
            "pytest-cov",
        ],
        "lint": [
            "black==22.3.0",
            "pylint==2.13.4",
            "mypy==0.942",
            "darglint==1.8.0",
        ],
        "doc": [
            "pdoc",
        ],
        "dev": [
            "cadence-resolver[test,doc,lint]",
        ],
    },
    license="Apache-2.0",
    long_description=long_description,
    long_description_content_type="text/markdown",
    package_data={"cadence_resolver": ["py.typed"]},
    entry_points={"console_scripts": ["cadence-resolver = cadence_resolver.__main__:main"]},
)
