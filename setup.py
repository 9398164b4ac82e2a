#!/usr/bin/env python3
"""
Music Catalog Sync - Setup Configuration
Catalogs a band/album music folder and adds new albums to a sorted spreadsheet
"""

from setuptools import setup, find_packages

# Read README for long description
with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

# Core dependencies
core_requirements = [
    "mutagen>=1.47.0",      # Audio metadata handling
    "openpyxl>=3.1.0",      # Spreadsheet reading/writing
    "tqdm>=4.66.0",         # Progress bars
    "python-dotenv>=1.0.0", # Environment variables
]

# Development dependencies
dev_requirements = [
    "pytest>=7.0.0",
    "pytest-cov>=4.0.0",
    "black>=23.0.0",
    "flake8>=6.0.0",
    "mypy>=1.0.0",
]

setup(
    # Package information
    name="music-catalog-sync",
    version="1.0.0",
    author="RamC Venkatasamy",
    author_email="ramc46@example.com",
    description="Catalog a band/album music folder into a sorted spreadsheet",
    long_description=long_description,
    long_description_content_type="text/markdown",

    # Package discovery
    packages=find_packages(exclude=["tests*", "test_*", "*.tests*"]),
    include_package_data=True,

    # Dependencies
    install_requires=core_requirements,
    extras_require={
        "dev": dev_requirements,
        "test": ["pytest>=7.0.0", "pytest-cov>=4.0.0"],
    },

    # Console entry points
    entry_points={
        "console_scripts": [
            "music-catalog-sync=musiccatalog.cli.main:main",
        ],
    },

    # Python version and classifiers
    python_requires=">=3.9",
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "Intended Audience :: End Users/Desktop",
        "License :: OSI Approved :: MIT License",
        "Environment :: Console",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Multimedia :: Sound/Audio",
        "Topic :: Office/Business :: Financial :: Spreadsheet",
        "Topic :: Utilities",
    ],

    keywords=[
        "music", "catalog", "mp3", "flac", "bitrate", "genre",
        "spreadsheet", "xlsx", "music-library"
    ],

    zip_safe=False,
    platforms=["any"],
)
