"""
Setup script for dotdash.

    pip install -e .            # service + CLI
    pip install -e ".[test]"    # plus the test toolchain
"""

import re
from pathlib import Path

from setuptools import find_packages, setup

HERE = Path(__file__).parent

# Single source of truth for the version is dotdash/__init__.py
version_match = re.search(
    r'^__version__\s*=\s*["\']([^"\']+)["\']',
    (HERE / "dotdash" / "__init__.py").read_text(encoding="utf-8"),
    re.MULTILINE,
)
VERSION = version_match.group(1) if version_match else "0.0.0"

readme = HERE / "README.md"

TEST_REQUIRES = [
    "pytest>=7.4.0",
    "pytest-asyncio>=0.21.0",
    "pytest-cov>=4.1.0",
    "pytest-mock>=3.12.0",
    "httpx>=0.24.0",  # FastAPI TestClient transport
]

setup(
    name="dotdash",
    version=VERSION,
    description="Text to International Morse Code translation service with a real-time chat relay",
    long_description=readme.read_text(encoding="utf-8") if readme.exists() else "",
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    entry_points={
        "console_scripts": [
            "dotdash=dotdash.cli.__main__:main",
            "dotdash-server=dotdash.web.__main__:main",
        ],
    },
    install_requires=[
        "fastapi>=0.104.0",
        "uvicorn[standard]>=0.24.0",
        "websockets>=12.0",
        "pydantic>=2.0.0",
        "pyyaml>=6.0",
        "python-dotenv>=1.0.0",
        "rich>=13.0.0",
    ],
    extras_require={
        "test": TEST_REQUIRES,
        "dev": TEST_REQUIRES + ["black>=23.12.0", "isort>=5.13.0", "flake8>=6.1.0", "mypy>=1.7.0"],
    },
    python_requires=">=3.9",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Framework :: FastAPI",
        "Programming Language :: Python :: 3",
        "Topic :: Communications :: Ham Radio",
    ],
    keywords="morse code translator fastapi websocket",
)
