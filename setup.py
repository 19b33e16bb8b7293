"""
taskcore setup.py — Package configuration and CLI entry point.
"""

from setuptools import find_packages, setup

setup(
    name="taskcore",
    version="1.0.0",
    description="taskcore — task creation with a shared client/server rule set",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.11",
    entry_points={
        "console_scripts": [
            "taskcore=taskcore.cli:main",
        ],
    },
    install_requires=[
        "pydantic>=2.5",
        "pyyaml>=6.0",
        "httpx>=0.27",
        "fastapi>=0.110",
        "uvicorn>=0.29",
        "tzdata>=2024.1",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
        ],
    },
)
