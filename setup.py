#!/usr/bin/env python3
"""
Setup script for gsheet-gamedata package

Downloads game design tables from Google Sheets and generates
JSON data files plus Cocos Creator TypeScript accessors.
"""

from setuptools import setup, find_packages

setup(
    name="gsheet-gamedata",
    version="0.1.0",
    packages=find_packages(include=["gsheet_gamedata", "gsheet_gamedata.*"]),
    python_requires=">=3.9",
    install_requires=[
        # 🌐 HTTP
        "httpx>=0.25.2",

        # 📋 Data Validation & Settings
        "pydantic>=2.5.0",
        "pydantic-settings>=2.1.0",
        "python-dotenv>=1.0.0",

        # 📝 Logging
        "python-json-logger>=2.0.7",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.3",
            "pytest-asyncio>=0.21.1",
        ],
    },
    entry_points={
        "console_scripts": [
            "gsheet-gamedata=gsheet_gamedata.cli:main",
        ],
    },
    package_data={
        "gsheet_gamedata": ["py.typed"],
    },
)
