"""Top-level package for the draw-lines question toolkit.

Provides subpackages:
- drawlines_toolkit.core – coordinates, line geometry, question definitions
- drawlines_toolkit.grading – zone matching and response grading
- drawlines_toolkit.interaction – pointer/keyboard controller and question manager
- drawlines_toolkit.loading – question-definition loading and validation
- drawlines_toolkit.output – Pillow rendering of lines and zones
"""

def _get_version() -> str:
    """Get version from pyproject.toml (dev) or importlib.metadata (installed)."""
    from pathlib import Path

    # In dev mode, read directly from pyproject.toml
    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"

    if pyproject.exists():
        try:
            content = pyproject.read_text()
        except OSError:
            content = ""
        for line in content.splitlines():
            if line.strip().startswith("version"):
                # Parse: version = "0.1.0"
                return line.split("=")[1].strip().strip('"').strip("'")

    # Fallback to importlib.metadata for installed package
    from importlib.metadata import PackageNotFoundError, version as pkg_version
    try:
        return pkg_version("drawlines_toolkit")
    except PackageNotFoundError:
        return "0.0.0"

__version__ = _get_version()
__all__: list[str] = ["__version__"]
