import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup

from nutricatalog.core.config import Settings
from nutricatalog.core.rules import CALCULATORS, CALCULATORS_HUB_PATH
from nutricatalog.models import MetaTags, format_amount
from nutricatalog.utils.slugs import to_slug

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"


def dump_json_ld(document: Dict[str, Any]) -> Markup:
    """Serialize one JSON-LD document for a <script> block."""
    # "</" would end the script element early
    text = json.dumps(document, ensure_ascii=False, indent=2).replace("</", "<\\/")
    return Markup(text)


class DocumentRenderer:
    """
    Turns resolved page data into HTML. Rendering never fetches data, so the
    same inputs always produce the same document.
    """

    def __init__(self, settings: Settings, templates_dir: Optional[Path] = None):
        self.settings = settings
        self.env = Environment(
            loader=FileSystemLoader(str(templates_dir or TEMPLATES_DIR)),
            autoescape=select_autoescape(["html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["slug"] = to_slug
        self.env.filters["amount"] = format_amount
        self.env.globals.update(
            settings=settings,
            calculators=CALCULATORS,
            calculators_path=CALCULATORS_HUB_PATH,
        )

    def render_page(self, template: str, context: Dict[str, Any]) -> Markup:
        """Render the body markup (header, main content, footer) of one page."""
        return Markup(self.env.get_template(template).render(**context))

    def render_document(self, body: Markup, meta: MetaTags, structured_data: Sequence[Dict[str, Any]]) -> str:
        return self.env.get_template("document.html").render(
            body=body,
            meta=meta,
            json_ld=[dump_json_ld(doc) for doc in structured_data],
        )

    def render_shell(self, path: str) -> str:
        """Bare client application shell; the browser builds the page itself."""
        return self.env.get_template("shell.html").render(path=path)

    def render_sitemap(self, urls: List[Dict[str, str]]) -> str:
        return self.env.get_template("sitemap.xml").render(urls=urls)
