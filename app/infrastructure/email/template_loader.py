"""
Email template loader and renderer.
Handles Jinja2 templates for invoice emails.
"""

import logging
from datetime import date, datetime
from decimal import Decimal
from pathlib import Path
from typing import Dict, Any

from jinja2 import Environment, FileSystemLoader, select_autoescape

logger = logging.getLogger(__name__)


def format_currency(value, currency: str = "IDR") -> str:
    """Format a money amount, IDR without decimals."""
    amount = Decimal(str(value))
    if currency == "IDR":
        return f"Rp {amount:,.0f}".replace(",", ".")
    return f"{amount:,.2f} {currency}"


def format_date(value, fmt: str = "%d/%m/%Y") -> str:
    if isinstance(value, (date, datetime)):
        return value.strftime(fmt)
    return str(value) if value is not None else ""


class EmailTemplateLoader:
    """Loads and renders email templates using Jinja2."""

    def __init__(self, templates_dir: Path = None):
        self.templates_dir = templates_dir or Path(__file__).parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html"]),
        )
        self.env.filters["currency"] = format_currency
        self.env.filters["date"] = format_date

    def render(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a template with context.

        Args:
            template_name: File name under the templates directory
            context: Template variables

        Returns:
            Rendered content
        """
        template = self.env.get_template(template_name)
        rendered = template.render(current_year=datetime.now().year, **context)
        logger.debug("Rendered template: %s", template_name)
        return rendered

    def render_pair(self, name: str, context: Dict[str, Any]) -> tuple[str, str]:
        """Render `<name>.html` and `<name>.txt`, returning (html, text)."""
        return self.render(f"{name}.html", context), self.render(f"{name}.txt", context)
