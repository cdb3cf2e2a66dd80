from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError, select_autoescape

from .aggregator import AggregatedView
from .errors import FatalError

ASSETS_DIR = Path(__file__).parent / "assets"
TEMPLATE_DIR = ASSETS_DIR / "html"
HOME_TEMPLATE = "podtato-home.html"


@lru_cache(maxsize=None)
def template_environment(template_dir: Path = TEMPLATE_DIR) -> Environment:
    """One Environment per template directory; it caches compiled templates."""
    return Environment(
        loader=FileSystemLoader(str(template_dir)),
        autoescape=select_autoescape(["html"]),
        undefined=StrictUndefined,
    )


def render_home(view: AggregatedView, template_dir: Path | None = None) -> str:
    """Render the home page. A broken template is a deployment defect: FatalError."""
    env = template_environment(template_dir or TEMPLATE_DIR)
    try:
        template = env.get_template(HOME_TEMPLATE)
    except TemplateError as e:
        raise FatalError(f"failed to parse template: {e}") from e
    try:
        return template.render(view=view)
    except Exception as e:
        raise FatalError(f"failed to execute template: {type(e).__name__}: {e}") from e
