#!/usr/bin/env python

"""The setup script."""

from setuptools import setup, find_packages

with open("requirements.txt") as f:
    required = f.read().splitlines()

with open("requirements-test.txt") as f:
    test_required = f.read().splitlines()

with open("README.md") as f:
    readme = f.read()

setup(
    name="fixarm",
    version="1.0.0",
    description="Azure Resource Manager client plumbing: independent child resources and pipeline policies.",
    python_requires=">=3.9",
    classifiers=["Programming Language :: Python :: 3"],
    install_requires=required,
    extras_require={"test": test_required},
    license="Apache Software License 2.0",
    long_description=readme,
    long_description_content_type="text/markdown",
    include_package_data=True,
    packages=find_packages(include=["fixarm", "fixarm.*"]),
    test_suite="test",
    tests_require=test_required,
)
