"""
The public registration form is split into five disclosure sections.

Any section can be opened or closed by the user at any time. On top of that
the form expands itself as it's filled in: every section up to and including
the one after the last section holding data is open, and so is any section
with a validation error. Nothing here gates submission.
"""
from collections import namedtuple

FormSection = namedtuple("FormSection",
                         ["id", "title", "description", "fields"])
SectionState = namedtuple("SectionState",
                          ["section", "number", "is_open", "has_errors",
                           "fields"])

SECTIONS = (
    FormSection("camp", "Wybór obozu",
                "Wybierz obóz, w którym chcesz wziąć udział",
                ("camp",)),
    FormSection("personal", "Dane osobowe",
                "Wprowadź swoje podstawowe dane osobowe",
                ("first_name", "last_name", "pesel", "birth_date")),
    FormSection("contact", "Dane kontaktowe",
                "Podaj dane do kontaktu",
                ("email", "phone")),
    FormSection("address", "Adres zamieszkania",
                "Wprowadź swój adres zamieszkania",
                ("address", "city", "postal_code")),
    FormSection("additional", "Informacje dodatkowe",
                "Dodatkowe informacje i preferencje",
                ("zhp_status", "notes")),
)
SECTION_IDS = tuple(section.id for section in SECTIONS)


def _has_data(section, data):
    return any((data.get(field) or "").strip() for field in section.fields)


def last_filled_index(data):
    filled = [index for index, section in enumerate(SECTIONS)
              if _has_data(section, data)]
    return filled[-1] if filled else -1


def open_section_ids(data=None, toggled=(), error_fields=()):
    data = data or {}
    reach = min(last_filled_index(data) + 1, len(SECTIONS) - 1)
    opened = {section.id for section in SECTIONS[:reach + 1]}
    opened |= {section.id for section in SECTIONS
               if set(section.fields) & set(error_fields)}
    for section_id in toggled:
        if section_id in SECTION_IDS:
            opened ^= {section_id}
    return [section_id for section_id in SECTION_IDS if section_id in opened]


def section_states(form, toggled=()):
    data = form.data if form.is_bound else {}
    error_fields = set(form.errors) if form.is_bound else set()
    opened = open_section_ids(data, toggled, error_fields)
    return [
        SectionState(
            section=section,
            number=index + 1,
            is_open=section.id in opened,
            has_errors=bool(set(section.fields) & error_fields),
            fields=[form[field] for field in section.fields],
        )
        for index, section in enumerate(SECTIONS)
    ]
