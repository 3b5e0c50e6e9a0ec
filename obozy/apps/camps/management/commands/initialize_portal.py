import yaml
from django.conf import settings
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from obozy.apps.camps.models import (CampTypeDescription, DocumentTemplate,
                                     HomepageSection)
from obozy.libs.cacheing import query_cache


def load_defaults(path=None):
    path = path or settings.PORTAL_DEFAULTS_YAML_PATH
    try:
        with open(path, "r", encoding="utf-8") as stream:
            return yaml.safe_load(stream) or {}
    except (OSError, yaml.YAMLError) as e:
        raise CommandError(f"Could not read portal defaults from {path}: {e}")


class Command(BaseCommand):
    help = "Seed camp type descriptions, homepage sections and default templates"

    def add_arguments(self, parser):
        parser.add_argument(
            "--defaults",
            dest="defaults",
            help="Path to the YAML defaults file",
            default=None)
        parser.add_argument(
            "--overwrite",
            dest="overwrite",
            help="Overwrite homepage sections that already exist",
            action="store_true",
            default=False)

    @transaction.atomic
    def handle(self, *args, **options):
        defaults = load_defaults(options["defaults"])

        self.stdout.write("Setting camp type descriptions")
        for entry in defaults.get("camp_types", []):
            CampTypeDescription.objects.update_or_create(
                type=entry["type"],
                defaults={"label": entry["label"],
                          "description": entry.get("description", "")})

        self.stdout.write("Setting homepage sections")
        for entry in defaults.get("homepage_sections", []):
            fields = {
                "title": entry.get("title"),
                "subtitle": entry.get("subtitle"),
                "content": entry.get("content") or {},
                "order": entry.get("order", 0),
                "is_visible": entry.get("is_visible", True),
            }
            section = HomepageSection.objects.filter(type=entry["type"]).first()
            if section is None:
                HomepageSection.objects.create(type=entry["type"], **fields)
            elif options["overwrite"]:
                for field, value in fields.items():
                    setattr(section, field, value)
                section.save()

        self.stdout.write("Setting default document templates")
        for entry in defaults.get("templates", []):
            exists = DocumentTemplate.objects.filter(
                type=entry["type"], name=entry["name"]).exists()
            if exists:
                continue
            is_default = entry.get("is_default", False) and \
                not DocumentTemplate.objects.filter(
                    type=entry["type"], is_default=True).exists()
            DocumentTemplate.objects.create(
                type=entry["type"],
                name=entry["name"],
                content=entry["content"],
                is_default=is_default,
            )

        query_cache.clear_cache()
        self.stdout.write(self.style.SUCCESS("Portal initialized"))
