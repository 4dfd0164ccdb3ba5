from __future__ import annotations

from pathlib import Path

from setuptools import find_packages, setup


ROOT = Path(__file__).resolve().parent


def _read(name: str, default: str = "") -> str:
    path = ROOT / name
    if not path.is_file():
        return default
    return path.read_text(encoding="utf-8").strip()


def _requirements(name: str) -> list[str]:
    """Requirement lines of `name`, without comments and `-r` includes."""
    return [
        line.strip()
        for line in _read(name).splitlines()
        if line.strip() and not line.strip().startswith(("#", "-r"))
    ]


setup(
    name="weekgrid",
    version=_read("weekgrid/VERSION", default="0.1.0"),
    description="Weekly timetable clash detection and grid layout (library + CLI)",
    long_description=_read("README.md"),
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=("tests", "tests.*")),
    package_data={"weekgrid": ["VERSION"]},
    include_package_data=True,
    python_requires=">=3.9",
    install_requires=_requirements("requirements.txt"),
    # dev extra = test runner on top of the runtime requirements
    extras_require={"dev": _requirements("requirements-dev.txt")},
    entry_points={"console_scripts": ["weekgrid=weekgrid.cli:main"]},
)
