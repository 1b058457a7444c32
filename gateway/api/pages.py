"""Fixed HTML pages and landing page rendering."""

from html import escape
from pathlib import Path
from string import Template

CONTENT_FAILED = "<html><body><div><h1>Conversion failed</h1></div></body></html>"

CONTENT_404 = """<html>
    <body>
    <h1>Error 404</h1>
    <p>Ressource not found</p>
    </body>
</html>"""

INDEX_TEMPLATE = "index.html"


def load_template(templates_dir: Path, name: str = INDEX_TEMPLATE) -> Template:
    """Load a page template.

    Raises:
        FileNotFoundError: If the template does not exist
    """
    return Template((templates_dir / name).read_text(encoding="utf-8"))


def render_index(template: Template, version: str, gdal_version: str) -> str:
    return template.safe_substitute(
        version=escape(version),
        gdal_version=escape(gdal_version.strip()),
    )
