"""
Setup script for vimpytype.

VimpyType is a terminal trainer for modal-editor navigation. It serves
three kinds of practice:

1. Lessons - Guided, one motion at a time
2. Drills - Random motions from a difficulty's key set, scored
3. Challenges - Multi-key sequences with accepted alternatives

The 'vimpytype' command is the entry point.
"""

from setuptools import find_packages, setup

setup(
    name="vimpytype",
    version="1.0.0",
    description="Terminal trainer for modal editor navigation commands",
    long_description=open("README.md", encoding="utf-8").read() if __import__("os").path.exists("README.md") else "",
    long_description_content_type="text/markdown",
    author="VimpyType",
    packages=find_packages(include=["vimpytype", "vimpytype.*"]),
    python_requires=">=3.10",
    install_requires=[
        # CLI
        "typer>=0.9.0",
        "rich>=13.0.0",
        # Config & Validation
        "pydantic>=2.0.0",
        "pydantic-settings>=2.0.0",
        # Logging
        "loguru>=0.7.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "ruff>=0.1.0",
            "mypy>=1.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "vimpytype=vimpytype.cli.main:run",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: Developers",
        "Intended Audience :: Education",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Education",
        "Topic :: Text Editors",
    ],
    keywords="vim modal-editor training typing cli education",
)
