import os

from setuptools import find_packages, setup

setup(
    name="typecheck",
    version="0.1.0",
    packages=find_packages(include=["typecheck", "typecheck.*"]),
    python_requires=">=3.10",
    install_requires=[
        "pydantic>=2.10.6,<3.0.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    author="Typecheck Contributors",
    description="Composable runtime schema validation with sanitizing and type-string rendering",
    long_description=open("README.md").read()
    if os.path.exists("README.md")
    else "",
    long_description_content_type="text/markdown",
)
