import re
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict

from django.utils import dateformat, numberformat

from .conf import notification_setting

PLACEHOLDER_RE = re.compile(r"\{(\w+)\}")


def _format_number(value, decimal_pos=None) -> str:
    return numberformat.format(
        value,
        ".",
        decimal_pos=decimal_pos,
        grouping=notification_setting("NUMBER_GROUPING"),
        thousand_sep=notification_setting("THOUSAND_SEPARATOR"),
        force_grouping=True,
    )


def format_value(value: Any) -> str:
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, int):
        return _format_number(value)
    if isinstance(value, Decimal):
        if value == value.to_integral_value():
            return _format_number(int(value))
        return _format_number(value, decimal_pos=2)
    if isinstance(value, (date, datetime)):
        return dateformat.format(value, notification_setting("DATE_FORMAT"))
    return str(value)


def render_template(template: str, data: Dict[str, Any]) -> str:
    """Substitute ``{name}`` tokens from ``data``; unknown tokens stay as written."""
    if not template:
        return ""

    def _sub(match):
        key = match.group(1)
        if key not in data or data[key] is None:
            return match.group(0)
        return format_value(data[key])

    return PLACEHOLDER_RE.sub(_sub, template)
