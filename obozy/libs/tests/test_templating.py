from datetime import date, datetime

from obozy.libs.templating import format_date, format_datetime, render_template


def test_dates_use_polish_format():
    assert format_date(date(2025, 7, 1)) == "01.07.2025"
    assert format_datetime(datetime(2025, 7, 1, 9, 5)) == "01.07.2025 09:05"


def test_every_occurrence_of_a_known_key_is_replaced():
    content = "{{name}} jedzie na obóz. Powodzenia, {{name}}!"
    assert render_template(content, {"name": "Ola"}) == \
        "Ola jedzie na obóz. Powodzenia, Ola!"


def test_unknown_placeholders_are_left_untouched():
    content = "Kwota: {{amount}} PLN, termin: {{deadline}}"
    assert render_template(content, {"amount": 400}) == \
        "Kwota: 400 PLN, termin: {{deadline}}"


def test_rendering_is_idempotent():
    content = "{{camp_name}}: {{participant_name}}"
    variables = {"camp_name": "Zlot", "participant_name": "Jan Kowalski"}
    first = render_template(content, variables)
    assert render_template(content, variables) == first
    assert render_template(first, variables) == first


def test_no_escaping_is_applied():
    assert render_template("{{notes}}", {"notes": "<b>&</b>"}) == "<b>&</b>"
