from setuptools import setup, find_packages
import os

# Read version from __init__.py
def get_version():
    """Get version from exception_factory/__init__.py"""
    init_file = os.path.join(os.path.dirname(__file__), "exception_factory", "__init__.py")
    with open(init_file, "r") as f:
        for line in f:
            if line.startswith("__version__"):
                return line.split("=")[1].strip().strip('"\'')
    raise RuntimeError("Unable to find version string.")

extras_require = {
    # Development dependencies
    "dev": [
        "pytest>=7.4.0",
        "pytest-cov>=4.1.0",
        "coverage>=7.3.2",
        "dill>=0.4.0",  # Pickling generated types by reference
    ],
}

setup(
    name="exception-factory",
    version=get_version(),
    description="Lazily synthesized exception types for registered package namespaces",
    long_description=open("README.md", "r", encoding="utf-8").read(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: Libraries :: Python Modules",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.9",
    keywords="exceptions, import-hook, registry, code-generation",
    packages=find_packages(include=["exception_factory", "exception_factory.*"]),
    package_data={"exception_factory": ["resources/*.tpl"]},
    install_requires=[
        # Storage and serialization
        "PyYAML>=6.0.2",
    ],
    extras_require=extras_require,

    # Console script entry points
    entry_points={
        "console_scripts": [
            "exception-factory=exception_factory.__main__:main",
        ],
    },
)
