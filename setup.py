"""Setup configuration for unity-runner."""

from setuptools import setup, find_packages

setup(
    name="unity-runner",
    version="0.1.0",
    description="Run Unity batch builds and follow their log output",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.11",
    install_requires=[
        "pyyaml>=6.0",
        "click>=8.1.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
        ],
    },
    entry_points={
        "console_scripts": [
            "unity-runner=unity_runner.cli:main",
        ],
    },
)
