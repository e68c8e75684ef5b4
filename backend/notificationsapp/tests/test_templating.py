from datetime import date
from decimal import Decimal

from django.test import override_settings

from notificationsapp.templating import format_value, render_template


def test_substitutes_known_tokens():
    out = render_template("Order for {customerName} due in {days} days", {"customerName": "Asha", "days": 2})
    assert out == "Order for Asha due in 2 days"


def test_unknown_tokens_stay_verbatim():
    out = render_template("Hello {customerName}, see {foo}", {"customerName": "Asha"})
    assert out == "Hello Asha, see {foo}"


def test_none_values_are_not_blanked():
    assert render_template("{deliveryDate}", {"deliveryDate": None}) == "{deliveryDate}"


def test_numbers_use_indian_grouping():
    assert format_value(150000) == "1,50,000"
    assert format_value(Decimal("12345678.00")) == "1,23,45,678"
    assert format_value(Decimal("1234.5")) == "1,234.50"
    assert format_value(999) == "999"


def test_dates_render_short():
    assert format_value(date(2025, 3, 5)) == "5/3/2025"


def test_other_values_use_str():
    assert format_value("Teak chair") == "Teak chair"
    assert format_value(True) == "True"


@override_settings(NOTIFICATIONS={"NUMBER_GROUPING": 3, "DATE_FORMAT": "Y-m-d"})
def test_formats_follow_settings():
    assert format_value(150000) == "150,000"
    assert format_value(date(2025, 3, 5)) == "2025-03-05"


def test_empty_template():
    assert render_template("", {"a": 1}) == ""
