"""Packaging for SpeechTimer.

    pip install -e ".[test]"
"""

from setuptools import setup, find_packages

setup(
    name="SpeechTimer",
    version="0.1.0",
    description="Green/orange/red signal timer for timed speeches",
    packages=find_packages(include=["speechtimer", "speechtimer.*"]),
    install_requires=[
        "PyQt6",
        "SQLAlchemy>=2.0",
        "numpy",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "speechtimer=speechtimer.__main__:main",
        ],
    },
    python_requires=">=3.10",
)
