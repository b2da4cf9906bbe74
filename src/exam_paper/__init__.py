"""Top-level package for the exam paper preview and dual export.

Provides subpackages:
- exam_paper.core – question, header and layout models
- exam_paper.builder – composition, rendering and the dual export
- exam_paper.host – preview host (PySide6) driving preview and export
"""

DISTRIBUTION_NAME = "exam-paper-preview"


def _version_from_pyproject() -> str:
    """Version declared in the checkout's pyproject.toml, or "" if absent."""
    import re
    from pathlib import Path

    pyproject = Path(__file__).resolve().parents[2] / "pyproject.toml"
    try:
        content = pyproject.read_text(encoding="utf-8")
    except OSError:
        return ""
    match = re.search(r'^version\s*=\s*["\']([^"\']+)["\']', content, re.MULTILINE)
    return match.group(1) if match else ""


def _get_version() -> str:
    """Checkout version first (editable installs), then installed metadata."""
    version = _version_from_pyproject()
    if version:
        return version

    from importlib.metadata import PackageNotFoundError, version as pkg_version
    try:
        return pkg_version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        return "0.0.0"


__version__ = _get_version()
__all__: list[str] = ["__version__"]
