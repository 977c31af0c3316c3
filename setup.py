"""
SREST Setup Configuration

Tools for REST services and web sites.
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read README for long description
readme_file = Path(__file__).parent / "README.md"
long_description = readme_file.read_text(encoding="utf-8") if readme_file.exists() else ""

setup(
    name="srest",
    version="0.2.0",

    description="RESTful routing, middleware chaining, form binding and hot-reloading views on Flask",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["srest", "srest.*"]),
    include_package_data=True,
    install_requires=[
        "flask>=2.3.0",
        "werkzeug>=2.3.0",
        "jinja2>=3.0.0",
        "pydantic>=2.0.0",
        "click>=8.0.0",
        "python-dotenv>=1.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "cryptography>=41.0.0",
            "black>=23.0.0",
            "ruff>=0.1.0",
        ],
    },
    python_requires=">=3.8",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: BSD License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Framework :: Flask",
    ],
    keywords="flask rest routing middleware templates",
)
