"""HTML table renderer for weather records."""

import logging
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from tenki.models.common import TenkiError
from tenki.models.forecast import WeatherRecord
from tenki.reporting.formatters import display_value, format_date_label, icon_file

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "天気予報"
TABLE_HEADERS = ("日付", "天気", "風速", "波の高さ", "画像")
TEMPLATES_DIR = Path(__file__).parent / "templates"
FORECAST_TEMPLATE = "forecast.html"


class RenderIOError(TenkiError):
    """Raised when the rendered HTML cannot be written."""


def build_environment(templates_dir: Path = TEMPLATES_DIR) -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(templates_dir)),
        autoescape=select_autoescape(["html", "xml"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["date_label"] = format_date_label
    env.filters["display"] = display_value
    env.filters["icon"] = icon_file
    return env


_env = build_environment()


def render_html(
    records: list[WeatherRecord],
    heading: str,
    title: str = DEFAULT_TITLE,
    image_dir: str = "img",
    placeholder: str = "-",
) -> str:
    """Render a self-contained HTML document with one table row per record."""
    template = _env.get_template(FORECAST_TEMPLATE)
    return template.render(
        records=records,
        heading=heading,
        title=title,
        headers=TABLE_HEADERS,
        image_dir=image_dir.rstrip("/"),
        placeholder=placeholder,
    )


def write_html(
    records: list[WeatherRecord],
    path: str | Path,
    heading: str,
    title: str = DEFAULT_TITLE,
    image_dir: str = "img",
    placeholder: str = "-",
) -> Path:
    """Render and write the document to path. Returns the written path."""
    path = Path(path)
    document = render_html(
        records, heading, title=title, image_dir=image_dir, placeholder=placeholder
    )
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(document, encoding="utf-8")
    except OSError as e:
        raise RenderIOError(f"Could not write HTML to {path}: {e}") from e
    logger.info("Wrote %d rows to %s", len(records), path)
    return path
