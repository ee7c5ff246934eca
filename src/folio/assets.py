"""Asset discovery for bundled templates and static files.

Locates the Jinja2 templates and static assets shipped inside the folio
package.
"""

from importlib.resources import files
from pathlib import Path


def _bundled_dir(name: str) -> Path:
    resource = files("folio").joinpath(name)
    if not resource.is_dir():
        msg = f"Bundled {name} not found. Reinstall folio with 'pip install -e .'."
        raise FileNotFoundError(msg)
    return Path(str(resource))


def get_templates_dir() -> Path:
    """Return path to bundled page templates.

    Raises:
        FileNotFoundError: If templates are not bundled.
    """
    return _bundled_dir("templates")


def get_static_dir() -> Path:
    """Return path to bundled static assets (stylesheet, live reload script).

    Raises:
        FileNotFoundError: If static assets are not bundled.
    """
    return _bundled_dir("static")
