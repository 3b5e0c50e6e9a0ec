import re
from datetime import timedelta
from decimal import Decimal

import pytest
from django.utils import timezone

from obozy.apps.camps.models import AdminAuditLog, Camp, DocumentTemplate
from obozy.apps.registration.models import Notification, Registration
from obozy.libs import operations
from obozy.libs.cacheing.query_cache import REGISTRATIONS, STATS
from obozy.libs.errors import ErrorKind
from obozy.libs.payments import COMPLETED, PARTIAL, payment_state
from obozy.libs.tests.helpers import (flashed, make_admin, make_camp,
                                      make_registration, make_request,
                                      registration_data)


def camp_data(**overrides):
    start = timezone.localdate() + timedelta(days=10)
    data = {
        "name": "Turnus Lipcowy",
        "type": Camp.TURNUS,
        "location": "Przebrno",
        "start_date": start,
        "end_date": start + timedelta(days=10),
        "price": Decimal("1000"),
        "capacity": 30,
    }
    data.update(overrides)
    return data


@pytest.fixture
def admin_request(db):
    return make_request(user=make_admin("druh@example.com"))


@pytest.mark.django_db
class TestCampOperations:
    def test_end_before_start_is_rejected(self, admin_request):
        start = timezone.localdate() + timedelta(days=10)
        result = operations.create_camp(
            camp_data(end_date=start - timedelta(days=1)),
            request=admin_request)

        assert result.data is None
        assert result.error.kind is ErrorKind.VALIDATION
        assert result.error.msg == \
            "Data zakończenia musi być późniejsza niż data rozpoczęcia"
        assert not Camp.objects.exists()
        assert flashed(admin_request) == [result.error.msg]
        assert AdminAuditLog.objects.filter(action="error",
                                            table_name="errors").exists()

    def test_create_is_audited_and_visible_immediately(self, admin_request):
        assert operations.get_camps().data == []

        result = operations.create_camp(camp_data(), request=admin_request)

        assert result.error is None
        assert operations.get_camps().data == [result.data]
        audit = AdminAuditLog.objects.get(action="create_camp")
        assert audit.table_name == "camps"
        assert audit.record_id == str(result.data.pk)
        assert audit.user == admin_request.user
        assert flashed(admin_request) == \
            ["Utworzono nowy obóz: Turnus Lipcowy"]

    def test_delete_missing_camp_is_not_found(self):
        result = operations.delete_camp(999)
        assert result.error.kind is ErrorKind.NOT_FOUND

    def test_type_description_upserts(self):
        operations.update_camp_type_description(Camp.ZLOT, "Zlot", "Pierwszy")
        operations.update_camp_type_description(Camp.ZLOT, "Zlot", "Drugi")

        descriptions = operations.get_camp_type_descriptions().data
        assert [d.description for d in descriptions] == ["Drugi"]


@pytest.mark.django_db
class TestRegistrationOperations:
    def test_new_registrations_start_pending(self):
        camp = make_camp()
        result = operations.create_registration(registration_data(
            camp, registration_status=Registration.CONFIRMED,
            payment_status=Registration.PAYMENT_COMPLETED))

        registration = result.data
        assert registration.registration_status == Registration.PENDING
        assert registration.payment_status == Registration.PAYMENT_PENDING
        assert registration.notifications.get().type == \
            Notification.REGISTRATION

    def test_bad_pesel_is_rejected_before_any_write(self):
        camp = make_camp()
        result = operations.create_registration(
            registration_data(camp, pesel="123"))

        assert result.error.kind is ErrorKind.INVALID_PESEL
        assert not Registration.objects.exists()
        assert not Notification.objects.exists()

    def test_bad_postal_code_is_rejected(self):
        result = operations.create_registration(
            registration_data(make_camp(), postal_code="80001"))
        assert result.error.kind is ErrorKind.INVALID_POSTAL_CODE
        assert not Registration.objects.exists()

    def test_only_ascii_digits_count(self):
        arabic_indic = "٠١٢٣٤٥٦٧٨٩١"
        result = operations.create_registration(
            registration_data(make_camp(), pesel=arabic_indic))

        assert result.error.kind is ErrorKind.INVALID_PESEL
        assert not Registration.objects.exists()

    def test_same_participant_twice_on_one_camp(self):
        camp = make_camp()
        assert operations.create_registration(
            registration_data(camp)).error is None

        result = operations.create_registration(registration_data(camp))

        assert result.error.kind is ErrorKind.DUPLICATE_REGISTRATION
        assert Registration.objects.count() == 1

    def test_same_participant_on_another_camp_is_fine(self):
        operations.create_registration(registration_data(make_camp()))
        result = operations.create_registration(
            registration_data(make_camp(name="Zlot Jesienny")))
        assert result.error is None

    def test_registration_mutations_invalidate_lists_and_stats(self):
        assert set(operations.create_registration.invalidates) >= \
            {REGISTRATIONS, STATS}
        camp = make_camp()
        assert operations.get_registrations(camp.pk).data == []
        assert operations.get_stats().data["total_registrations"] == 0

        operations.create_registration(registration_data(camp))

        assert len(operations.get_registrations(camp.pk).data) == 1
        assert len(operations.get_registrations("all").data) == 1
        assert operations.get_stats().data["total_registrations"] == 1
        assert operations.get_stats().data["pending_registrations"] == 1

    def test_notes_are_kept_newest_first(self):
        registration = make_registration(make_camp())
        for note in ("pierwsza", "druga", "trzecia"):
            operations.add_registration_note(registration.pk, note)

        registration.refresh_from_db()
        entries = registration.note_entries
        assert [entry.split(": ", 1)[1] for entry in entries] == \
            ["trzecia", "druga", "pierwsza"]
        stamp = r"^\d{2}\.\d{2}\.\d{4} \d{2}:\d{2}: "
        assert all(re.match(stamp, entry) for entry in entries)

    def test_exclusion_replaces_notes_and_cancels(self):
        registration = make_registration(make_camp(), notes="stara notatka")
        operations.exclude_registration(registration.pk, "regulamin")

        registration.refresh_from_db()
        assert registration.registration_status == Registration.CANCELLED
        assert registration.notes == "Wykluczono: regulamin"
        assert registration.notifications.filter(
            type=Notification.CONFIRMATION).exists()

    def test_partial_then_complete_payment(self):
        registration = make_registration(make_camp(price=Decimal("1000")))

        operations.register_payment(registration.pk, Decimal("400"))
        registration.refresh_from_db()
        state = payment_state(registration.paid_amount, registration.camp.price)
        assert state.status == PARTIAL
        assert state.text == "Częściowo (400 / 1000 PLN)"

        operations.register_payment(registration.pk, "600")
        registration.refresh_from_db()
        assert payment_state(registration.paid_amount,
                             registration.camp.price).status == COMPLETED

    @pytest.mark.parametrize("amount, message", [
        ("0", "Kwota musi być większa od 0"),
        ("-5", "Kwota musi być większa od 0"),
        ("abc", "Wprowadź poprawną kwotę"),
    ])
    def test_invalid_payment_amounts(self, amount, message):
        registration = make_registration(make_camp())
        result = operations.register_payment(registration.pk, amount)

        assert result.error.kind is ErrorKind.VALIDATION
        assert result.error.msg == message
        registration.refresh_from_db()
        assert registration.paid_amount == 0

    def test_reminder_and_custom_message_are_recorded(self):
        registration = make_registration(make_camp(price=Decimal("850")))
        reminder = operations.send_payment_reminder(registration.pk).data
        operations.send_custom_email(registration.pk, "Lista rzeczy",
                                     "Śpiwór, latarka")

        assert reminder.type == Notification.PAYMENT
        assert "850 PLN" in reminder.content
        assert registration.notifications.filter(
            type=Notification.CUSTOM, subject="Lista rzeczy").exists()

    def test_card_data(self):
        registration = make_registration(make_camp(name="Hotelik Majowy"))
        card = operations.generate_registration_card(registration.pk).data

        assert card["participant"]["name"] == "Jan Kowalski"
        assert card["participant"]["zhp_status"] == "Brak"
        assert card["camp"]["name"] == "Hotelik Majowy"
        assert card["camp"]["price"] == "1000 PLN"
        assert card["status"] == {"registration": "pending",
                                  "payment": "pending"}


@pytest.mark.django_db
class TestRegistrationCards:
    def test_upload_fetch_and_delete(self, media_root):
        from django.core.files.uploadedfile import SimpleUploadedFile

        registration = make_registration(make_camp())
        assert operations.get_registration_card(registration.pk).data is None

        upload = SimpleUploadedFile("karta.pdf", b"%PDF-1.4",
                                    content_type="application/pdf")
        card = operations.upload_registration_card(registration.pk,
                                                   upload).data

        assert card.file_path == f"{registration.pk}/karta.pdf"
        assert (media_root / "registration_cards" / card.file_path).exists()
        url = operations.get_registration_card(registration.pk).data
        assert url.endswith(f"/registration_cards/{registration.pk}/karta.pdf")

        assert operations.delete_registration_card(registration.pk).error \
            is None
        assert not (media_root / "registration_cards" /
                    card.file_path).exists()
        assert operations.get_registration_card(registration.pk).data is None

    def test_delete_removes_every_uploaded_file(self, media_root):
        from django.core.files.uploadedfile import SimpleUploadedFile

        registration = make_registration(make_camp())
        for name in ("a.pdf", "b.pdf"):
            operations.upload_registration_card(
                registration.pk, SimpleUploadedFile(
                    name, b"%PDF-1.4", content_type="application/pdf"))
        folder = media_root / "registration_cards" / str(registration.pk)
        assert sorted(path.name for path in folder.iterdir()) == \
            ["a.pdf", "b.pdf"]

        assert operations.delete_registration_card(registration.pk).error \
            is None
        assert list(folder.iterdir()) == []
        assert not registration.cards.exists()

    def test_deleting_a_missing_card(self):
        registration = make_registration(make_camp())
        result = operations.delete_registration_card(registration.pk)
        assert result.error.kind is ErrorKind.NOT_FOUND
        assert result.error.msg == "Nie znaleziono karty zgłoszeniowej"


@pytest.mark.django_db
class TestTemplateOperations:
    def template_data(self, name, is_default=False):
        return {"type": DocumentTemplate.PAYMENT_REMINDER, "name": name,
                "content": "Kwota: {{amount}}", "is_default": is_default}

    def test_only_one_default_per_type(self):
        first = operations.create_template(
            self.template_data("Pierwszy", True)).data
        second = operations.create_template(
            self.template_data("Drugi", True)).data
        card = operations.create_template({
            "type": DocumentTemplate.REGISTRATION_CARD, "name": "Karta",
            "content": "{{pesel}}", "is_default": True}).data

        defaults = DocumentTemplate.objects.filter(
            type=DocumentTemplate.PAYMENT_REMINDER, is_default=True)
        assert list(defaults) == [second]
        first.refresh_from_db()
        assert not first.is_default
        card.refresh_from_db()
        assert card.is_default

        operations.update_template(first.pk, {"is_default": True})
        assert list(DocumentTemplate.objects.filter(
            type=DocumentTemplate.PAYMENT_REMINDER,
            is_default=True)) == [first]

    def test_templates_listed_default_first(self):
        operations.create_template(self.template_data("Zwykły"))
        operations.create_template(self.template_data("Domyślny", True))
        names = [t.name for t in operations.get_templates(
            DocumentTemplate.PAYMENT_REMINDER).data]
        assert names == ["Domyślny", "Zwykły"]

    def test_generate_document(self, settings):
        settings.PAYMENT_ACCOUNT_NUMBER = "11 2222 3333"
        camp = make_camp(name="Zlot Hufca", price=Decimal("400"))
        registration = make_registration(camp)
        template = DocumentTemplate.objects.create(
            type=DocumentTemplate.PAYMENT_REMINDER, name="Przypomnienie",
            content=("{{participant_name}}, {{camp_name}}: {{amount}} PLN "
                     "na konto {{account_number}} {{unknown_key}}"))

        first = operations.generate_document(template.pk,
                                             registration.pk).data
        second = operations.generate_document(template.pk,
                                              registration.pk).data

        assert first == second
        assert first == ("Jan Kowalski, Zlot Hufca: 400 PLN "
                         "na konto 11 2222 3333 {{unknown_key}}")
