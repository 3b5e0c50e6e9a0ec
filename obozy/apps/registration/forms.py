from decimal import Decimal

from django import forms
from django.utils import timezone

from obozy.apps.camps.models import Camp
from obozy.apps.registration.models import (PESEL_REGEX, PHONE_REGEX,
                                            POSTAL_CODE_REGEX, Registration)


class CampChoiceField(forms.ModelChoiceField):
    def label_from_instance(self, obj):
        return (f"{obj.name} ({obj.type_label}, "
                f"{obj.start_date:%d.%m.%Y} - {obj.end_date:%d.%m.%Y})")


class RegistrationForm(forms.Form):
    """Public registration form, one participant for one camp"""

    camp = CampChoiceField(
        queryset=Camp.objects.order_by("start_date", "pk"),
        empty_label="Wybierz obóz",
        error_messages={"required": "Wybierz obóz",
                        "invalid_choice": "Wybierz obóz"})
    first_name = forms.CharField(
        max_length=100, min_length=2,
        error_messages={"min_length": "Imię musi mieć minimum 2 znaki",
                        "required": "Imię musi mieć minimum 2 znaki"})
    last_name = forms.CharField(
        max_length=100, min_length=2,
        error_messages={"min_length": "Nazwisko musi mieć minimum 2 znaki",
                        "required": "Nazwisko musi mieć minimum 2 znaki"})
    pesel = forms.RegexField(
        regex=PESEL_REGEX, max_length=11,
        error_messages={"invalid": "PESEL musi mieć 11 cyfr",
                        "required": "PESEL musi mieć 11 cyfr",
                        "max_length": "PESEL musi mieć 11 cyfr"})
    birth_date = forms.DateField(
        widget=forms.DateInput(attrs={"type": "date"}, format="%Y-%m-%d"),
        error_messages={"required": "Podaj datę urodzenia",
                        "invalid": "Podaj datę urodzenia"})
    email = forms.EmailField(
        max_length=254,
        error_messages={"invalid": "Wprowadź poprawny adres email",
                        "required": "Wprowadź poprawny adres email"})
    phone = forms.RegexField(
        regex=PHONE_REGEX, max_length=30,
        error_messages={"invalid": "Wprowadź poprawny numer telefonu",
                        "required": "Wprowadź poprawny numer telefonu"})
    address = forms.CharField(
        max_length=255, min_length=5,
        error_messages={"min_length": "Wprowadź pełny adres",
                        "required": "Wprowadź pełny adres"})
    city = forms.CharField(
        max_length=100, min_length=2,
        error_messages={"min_length": "Wprowadź nazwę miasta",
                        "required": "Wprowadź nazwę miasta"})
    postal_code = forms.RegexField(
        regex=POSTAL_CODE_REGEX, max_length=6,
        error_messages={
            "invalid": "Wprowadź poprawny kod pocztowy (XX-XXX)",
            "required": "Wprowadź poprawny kod pocztowy (XX-XXX)",
            "max_length": "Wprowadź poprawny kod pocztowy (XX-XXX)"})
    zhp_status = forms.CharField(required=False, max_length=100)
    notes = forms.CharField(required=False,
                            widget=forms.Textarea(attrs={"rows": 3}))

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["pesel"].widget.attrs.update(
            {"inputmode": "numeric", "placeholder": "12345678901"})
        self.fields["postal_code"].widget.attrs.update(
            {"placeholder": "00-000"})
        self.fields["phone"].widget.attrs.update(
            {"placeholder": "+48 123 456 789"})

    def clean_birth_date(self):
        birth_date = self.cleaned_data["birth_date"]
        if birth_date > timezone.localdate():
            raise forms.ValidationError(
                "Data urodzenia nie może być z przyszłości")
        return birth_date

    def clean_zhp_status(self):
        return self.cleaned_data.get("zhp_status") or None

    def clean_notes(self):
        return self.cleaned_data.get("notes") or None


class AdminRegistrationForm(RegistrationForm):
    registration_status = forms.ChoiceField(
        choices=Registration.REGISTRATION_STATUS_CHOICES)
    payment_status = forms.ChoiceField(
        choices=Registration.PAYMENT_STATUS_CHOICES)

    def __init__(self, *args, instance=None, **kwargs):
        if instance is not None and "initial" not in kwargs:
            kwargs["initial"] = {
                field: getattr(instance, field) for field in self.base_fields
            }
        super().__init__(*args, **kwargs)


class PaymentForm(forms.Form):
    amount = forms.DecimalField(
        max_digits=10, decimal_places=2, min_value=Decimal("0.01"),
        error_messages={"min_value": "Kwota musi być większa od 0",
                        "invalid": "Wprowadź poprawną kwotę",
                        "required": "Wprowadź poprawną kwotę"})

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["amount"].widget.attrs.update({"step": "0.01"})


class NoteForm(forms.Form):
    note = forms.CharField(widget=forms.Textarea(attrs={"rows": 3}))


class ExcludeForm(forms.Form):
    reason = forms.CharField(widget=forms.Textarea(attrs={"rows": 3}))


class CustomEmailForm(forms.Form):
    subject = forms.CharField(max_length=255)
    content = forms.CharField(widget=forms.Textarea(attrs={"rows": 6}))


class RegistrationCardUploadForm(forms.Form):
    card = forms.FileField()

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["card"].widget.attrs.update({"accept": ".pdf"})

    def clean_card(self):
        card = self.cleaned_data["card"]
        if "pdf" not in (card.content_type or ""):
            raise forms.ValidationError("Dozwolone są tylko pliki PDF")
        return card
