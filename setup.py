#!/usr/bin/env python3
"""
Setup script for hub-deploy.
"""

import codecs
import os
import re
from setuptools import setup, find_packages


def read(rel_path):
    """Read file content."""
    here = os.path.abspath(os.path.dirname(__file__))
    with codecs.open(os.path.join(here, rel_path), 'r', 'utf-8') as fp:
        return fp.read()


def find_version(rel_path):
    """Extract version from __version__.py file."""
    init_content = read(rel_path)
    version_match = re.search(
        r'^__version__\s*=\s*[\'"]([^\'"]*)[\'"]',
        init_content,
        re.MULTILINE
    )
    if version_match:
        return version_match.group(1)
    raise RuntimeError("Unable to find version string.")


if __name__ == "__main__":
    setup(
        name="hub-deploy",
        version=find_version("hub_deploy/__version__.py"),
        description="Build the Hub Chat image and deploy it to Google Cloud Run",
        license="MIT",
        packages=find_packages(exclude=["tests*", "docs*", "examples*", "scripts*"]),
        python_requires=">=3.8",
        install_requires=[
            "click>=8.0",
            "rich>=12.0",
            "PyYAML>=6.0",
            "httpx>=0.24",
        ],
        extras_require={
            "test": [
                "pytest>=7.0",
            ],
        },
        entry_points={
            "console_scripts": [
                "hub-deploy=hub_deploy.cli.main:main",
            ],
        },
    )
