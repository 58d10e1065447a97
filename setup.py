#!/usr/bin/env python3
"""
httpwrap Setup
Request and response wrappers for a single HTTP request/response cycle
"""

from setuptools import setup, find_packages
from pathlib import Path


def get_version():
    """Get version from __init__.py"""
    version_file = Path(__file__).parent / "src" / "httpwrap" / "__init__.py"
    if version_file.exists():
        with open(version_file, 'r') as f:
            for line in f:
                if line.startswith("__version__"):
                    return line.split("=")[1].strip().strip('"\'')
    return "0.1.0"


def read_readme():
    """Read README file"""
    readme_path = Path(__file__).parent / "README.md"
    if readme_path.exists():
        with open(readme_path, 'r', encoding='utf-8') as f:
            return f.read()
    return ""


# Core dependencies - the wrappers only need the standard library
install_requires = []

extras_require = {
    # Development tools
    "dev": [
        "pytest>=6.0.0",
        "pytest-cov>=3.0.0",
        "faker>=8.0.0",
        "httpx>=0.24.0",
        "black>=21.0.0",
        "isort>=5.0.0",
        "flake8>=3.9.0",
        "mypy>=0.910",
    ],
}

extras_require["test"] = [
    "pytest>=6.0.0",
    "pytest-cov>=3.0.0",
    "faker>=8.0.0",
    "httpx>=0.24.0",
]

setup(
    name="httpwrap",
    version=get_version(),
    author="httpwrap Team",
    description="Request and response wrappers for a single HTTP request/response cycle",
    long_description=read_readme(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Internet :: WWW/HTTP",
        "Topic :: Internet :: WWW/HTTP :: WSGI",
    ],
    keywords="http request response wsgi cgi",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.8",
    install_requires=install_requires,
    extras_require=extras_require,
    entry_points={
        "console_scripts": [
            "httpwrap=httpwrap.cli:main",
        ],
    },
    zip_safe=False,
)
