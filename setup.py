from pathlib import Path
import re

from setuptools import find_packages, setup

_INIT = Path(__file__).parent / "src" / "mapsub" / "__init__.py"
_VERSION = re.search(r"__version__ = '([^']+)'", _INIT.read_text(encoding="utf-8")).group(1)


setup(
    name="mapsub",
    version=_VERSION,
    description="Collision-safe multi-pattern literal substitution driven by a mapping table",
    author="GAHEOS",
    python_requires=">=3.9",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    extras_require={"test": ["pytest>=7"]},
    entry_points={"console_scripts": ["mapsub = mapsub.cli:run"]},
)
