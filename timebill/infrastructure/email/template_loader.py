"""
Email template loader and renderer.
Renders Jinja2 plain-text templates whose first line is the subject.
"""

import logging
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from timebill.domain.services.billing_service import format_currency
from timebill.domain.services.email_service import EmailTemplate, TemplateRenderer

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"


class EmailTemplateLoader(TemplateRenderer):
    """Loads and renders email templates using Jinja2."""

    def __init__(self, templates_dir: Optional[Path] = None):
        """Initialize template loader with email templates directory."""
        self.templates_dir = Path(templates_dir or TEMPLATES_DIR)

        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=False,
            undefined=StrictUndefined,
            keep_trailing_newline=False,
        )

        self._register_filters()

    def _register_filters(self):
        """Register custom Jinja2 filters for email templates."""

        def format_date(value, format="%Y-%m-%d"):
            if isinstance(value, (date, datetime)):
                return value.strftime(format)
            return str(value)

        def format_hours(value):
            """Render hours without a trailing .0 for whole numbers."""
            number = float(value)
            return str(int(number)) if number.is_integer() else f"{number:g}"

        self.env.filters["currency"] = format_currency
        self.env.filters["date"] = format_date
        self.env.filters["hours"] = format_hours

    def render(self, template_name: str, context: Dict[str, Any]) -> EmailTemplate:
        """
        Render an email template with context.

        Args:
            template_name: Name of template file (e.g. 'invoice_generated.txt')
            context: Template context variables

        Returns:
            EmailTemplate with the first rendered line as subject and the rest as body
        """
        template = self.env.get_template(template_name)
        rendered = template.render(**context).strip()
        subject, _, body = rendered.partition("\n")
        logger.debug(f"Rendered email template: {template_name}")
        return EmailTemplate(subject=subject.strip(), body=body.strip())

    def template_exists(self, template_name: str) -> bool:
        """Check if template file exists."""
        return (self.templates_dir / template_name).exists()

    def list_templates(self) -> List[str]:
        """List all available email templates."""
        return sorted(path.name for path in self.templates_dir.glob("*.txt"))
