from obozy.libs.operations.base import Result, operation
from obozy.libs.operations.camps import (create_camp, delete_camp, get_camps,
                                         get_camp_type_descriptions,
                                         update_camp,
                                         update_camp_type_description)
from obozy.libs.operations.homepage import (delete_homepage_image,
                                            get_homepage_sections,
                                            update_homepage_section,
                                            upload_homepage_image)
from obozy.libs.operations.registrations import (
    add_registration_note, create_registration, delete_registration,
    delete_registration_card, exclude_registration, export_registrations,
    generate_registration_card, get_registration_card, get_registrations,
    register_payment, send_custom_email, send_payment_reminder,
    update_registration, upload_registration_card)
from obozy.libs.operations.stats import get_stats
from obozy.libs.operations.templates import (create_template, delete_template,
                                             generate_document, get_templates,
                                             update_template)
