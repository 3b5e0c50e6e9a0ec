import json
from decimal import Decimal

from django import forms
from django.utils import timezone

from obozy.apps.camps.models import Camp, DocumentTemplate, HomepageSection
from obozy.libs.operations.homepage import MAX_IMAGE_SIZE


class LoginForm(forms.Form):
    email = forms.CharField(
        required=False,
        widget=forms.EmailInput(attrs={"autocomplete": "email"}))
    password = forms.CharField(
        required=False,
        widget=forms.PasswordInput(attrs={"autocomplete": "current-password"}))

    def clean_email(self):
        email = (self.cleaned_data.get("email") or "").strip()
        if not email:
            raise forms.ValidationError("Wprowadź adres email")
        if "@" not in email:
            raise forms.ValidationError("Wprowadź poprawny adres email")
        return email

    def clean_password(self):
        password = self.cleaned_data.get("password") or ""
        if not password.strip():
            raise forms.ValidationError("Wprowadź hasło")
        return password


class CampForm(forms.Form):
    name = forms.CharField(
        max_length=200, min_length=5,
        error_messages={"min_length": "Nazwa musi mieć minimum 5 znaków",
                        "required": "Nazwa musi mieć minimum 5 znaków"})
    type = forms.ChoiceField(
        choices=(("", "Wybierz typ"),) + Camp.TYPE_CHOICES,
        initial=Camp.TURNUS,
        error_messages={"required": "Wybierz typ obozu",
                        "invalid_choice": "Wybierz typ obozu"})
    location = forms.CharField(
        max_length=200, min_length=2, initial="Przebrno",
        error_messages={"min_length": "Lokalizacja musi mieć minimum 2 znaki",
                        "required": "Lokalizacja musi mieć minimum 2 znaki"})
    start_date = forms.DateField(
        widget=forms.DateInput(attrs={"type": "date"}, format="%Y-%m-%d"))
    end_date = forms.DateField(
        widget=forms.DateInput(attrs={"type": "date"}, format="%Y-%m-%d"))
    price = forms.DecimalField(
        max_digits=10, decimal_places=2, min_value=Decimal("1"),
        error_messages={"min_value": "Cena musi być większa od 0"})
    capacity = forms.IntegerField(
        min_value=1,
        error_messages={"min_value": "Pojemność musi być większa od 0"})

    def __init__(self, *args, instance=None, **kwargs):
        self.instance = instance
        if instance is not None and "initial" not in kwargs:
            kwargs["initial"] = {
                field: getattr(instance, field) for field in self.base_fields
            }
        super().__init__(*args, **kwargs)
        self.fields["price"].widget.attrs.update({"step": "0.01"})

    def clean_start_date(self):
        start_date = self.cleaned_data["start_date"]
        # only new camps have to start in the future
        if self.instance is None and start_date < timezone.localdate():
            raise forms.ValidationError(
                "Data rozpoczęcia musi być w przyszłości")
        return start_date

    def clean(self):
        cleaned_data = super().clean()
        start_date = cleaned_data.get("start_date")
        end_date = cleaned_data.get("end_date")
        if start_date and end_date and end_date < start_date:
            self.add_error(
                "end_date",
                "Data zakończenia musi być późniejsza niż data rozpoczęcia")
        return cleaned_data


class CampTypeDescriptionForm(forms.Form):
    type = forms.ChoiceField(choices=Camp.TYPE_CHOICES,
                             widget=forms.HiddenInput)
    label = forms.CharField(max_length=100)
    description = forms.CharField(required=False,
                                  widget=forms.Textarea(attrs={"rows": 3}))


class DocumentTemplateForm(forms.Form):
    name = forms.CharField(max_length=200)
    type = forms.ChoiceField(choices=DocumentTemplate.TYPE_CHOICES)
    content = forms.CharField(widget=forms.Textarea(attrs={"rows": 12}))
    is_default = forms.BooleanField(required=False)

    def __init__(self, *args, instance=None, **kwargs):
        if instance is not None and "initial" not in kwargs:
            kwargs["initial"] = {
                field: getattr(instance, field) for field in self.base_fields
            }
        super().__init__(*args, **kwargs)
        self.fields["content"].help_text = (
            "Dostępne zmienne: {{participant_name}}, {{camp_name}}, "
            "{{camp_dates}}, {{amount}}, {{due_date}}, {{account_number}}, "
            "{{current_date}}, {{pesel}}, {{birth_date}}, {{email}}, "
            "{{phone}}, {{address}}, {{zhp_status}}, {{notes}}")


class HomepageSectionForm(forms.ModelForm):
    content = forms.CharField(required=False,
                              widget=forms.Textarea(attrs={"rows": 8}))

    class Meta:
        model = HomepageSection
        fields = ("title", "subtitle", "content", "order", "is_visible")

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        if not self.is_bound:
            self.initial["content"] = json.dumps(
                self.instance.content or {}, indent=2, ensure_ascii=False)

    def clean_content(self):
        raw = (self.cleaned_data.get("content") or "").strip()
        if not raw:
            return {}
        try:
            content = json.loads(raw)
        except ValueError:
            raise forms.ValidationError("Treść musi być poprawnym JSON-em")
        if not isinstance(content, dict):
            raise forms.ValidationError("Treść musi być obiektem JSON")
        return content


class HomepageImageForm(forms.Form):
    image = forms.FileField()
    alt = forms.CharField(required=False, max_length=255)

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["image"].widget.attrs.update({"accept": "image/*"})

    def clean_image(self):
        image = self.cleaned_data["image"]
        if not (image.content_type or "").startswith("image/"):
            raise forms.ValidationError("Dozwolone są tylko pliki graficzne")
        if image.size > MAX_IMAGE_SIZE:
            raise forms.ValidationError("Maksymalny rozmiar pliku to 5MB")
        return image
