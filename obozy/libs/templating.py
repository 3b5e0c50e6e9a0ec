"""Placeholder substitution for payment reminders and registration cards."""

DATE_FORMAT = "%d.%m.%Y"
DATETIME_FORMAT = "%d.%m.%Y %H:%M"
NO_ZHP_STATUS = "Brak"


def format_date(value):
    return value.strftime(DATE_FORMAT)


def format_datetime(value):
    return value.strftime(DATETIME_FORMAT)


def render_template(content, variables):
    """
    Replace every ``{{key}}`` in content with the value of that key

    Keys are substituted one after another with a plain string replace; there
    is no escaping and placeholders whose key is missing from variables are
    left untouched.
    """
    for key, value in variables.items():
        content = content.replace("{{%s}}" % key, str(value))
    return content
