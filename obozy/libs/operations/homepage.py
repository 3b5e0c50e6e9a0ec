import os

from django.db.models import Prefetch
from haikunator import Haikunator

from obozy.apps.camps.models import HomepageImage, HomepageSection
from obozy.libs.cacheing.query_cache import HOMEPAGE, QueryKey, cached_query
from obozy.libs.errors import ErrorKind
from obozy.libs.notifications import SUCCESS, WARNING, create_notification
from obozy.libs.operations.base import fail, operation
from obozy.libs.storage import IMAGES_BUCKET, get_storage

MAX_IMAGE_SIZE = 5 * 1024 * 1024
SECTION_FIELDS = ("title", "subtitle", "content", "order", "is_visible")


def validate_image(uploaded_file):
    content_type = getattr(uploaded_file, "content_type", None) or ""
    if not content_type.startswith("image/"):
        fail(ErrorKind.VALIDATION, "Dozwolone są tylko pliki graficzne")
    if uploaded_file.size > MAX_IMAGE_SIZE:
        fail(ErrorKind.VALIDATION, "Maksymalny rozmiar pliku to 5MB")


def image_path(section_id, filename):
    extension = os.path.splitext(filename)[1].lstrip(".").lower() or "img"
    name = Haikunator().haikunate(token_length=6, delimiter="-")
    return f"homepage/{section_id}/{name}.{extension}"


@operation("get_homepage_sections", mutates=False)
def get_homepage_sections(visible_only=True, request=None):
    def load():
        sections = HomepageSection.objects.prefetch_related(
            Prefetch("images", queryset=HomepageImage.objects.order_by("pk")))
        if visible_only:
            sections = sections.filter(is_visible=True)
        return list(sections.order_by("order", "pk"))

    return cached_query(
        QueryKey(HOMEPAGE, "visible" if visible_only else "all"), load)


@operation("update_homepage_section", table="homepage_sections",
           invalidates=(HOMEPAGE,))
def update_homepage_section(section_id, data, request=None):
    section = HomepageSection.objects.get(pk=section_id)
    for field in SECTION_FIELDS:
        if field in data:
            setattr(section, field, data[field])
    section.full_clean()
    section.save()
    create_notification("Strona główna", "Sekcja została zaktualizowana",
                        SUCCESS, request=request)
    return section


@operation("upload_homepage_image", table="homepage_images",
           invalidates=(HOMEPAGE,))
def upload_homepage_image(section_id, uploaded_file, alt=None, request=None):
    section = HomepageSection.objects.get(pk=section_id)
    validate_image(uploaded_file)

    storage = get_storage(IMAGES_BUCKET)
    path = storage.upload(image_path(section.pk, uploaded_file.name),
                          uploaded_file.read())
    image = HomepageImage.objects.create(
        section=section,
        url=storage.public_url(path),
        alt=alt or uploaded_file.name,
    )
    create_notification("Strona główna", "Obraz został dodany", SUCCESS,
                        request=request)
    return image


@operation("delete_homepage_image", table="homepage_images",
           invalidates=(HOMEPAGE,))
def delete_homepage_image(image_id, request=None):
    # the stored file is kept, only the row referencing it goes away
    HomepageImage.objects.get(pk=image_id).delete()
    create_notification("Strona główna", "Obraz został usunięty", WARNING,
                        request=request)
    return image_id
