from setuptools import find_packages, setup

setup(
    name="docrepo",
    version="0.1.0",
    description="Document repositories with atomic update and bulk delete procedures",
    packages=find_packages(include=["docrepo", "docrepo.*"]),
    python_requires=">=3.10",
    install_requires=[
        "pymongo",  # MongoDB
        "mongomock",  # In-memory MongoDB backend
        "pydantic>=2",  # Configuration and entity validation
        "typer>=0.12,<0.20",  # CLI (0.20+ vendors its own click, breaking click.get_current_context)
        "click>=8.2",  # CLI context and exceptions
        "rich",  # Terminal formatting
        "PyYAML",  # YAML command output
    ],
    extras_require={
        "test": [
            "pytest>=7.0",  # Testing framework
            "pytest-timeout>=2.1",  # Test timeouts
        ],
    },
    entry_points={
        "console_scripts": [
            "docrepo=docrepo.cli:main",
        ],
    },
)
