from django.contrib import admin

from .models import Notification, Registration, RegistrationCard


class RegistrationCardInline(admin.TabularInline):
    model = RegistrationCard
    extra = 0
    fields = ("file_path", "uploaded_by", "created_at")
    readonly_fields = ("created_at",)


@admin.register(Registration)
class RegistrationAdmin(admin.ModelAdmin):
    list_display = ("first_name", "last_name", "camp", "registration_status",
                    "paid_amount", "created_at")
    list_filter = ("camp", "registration_status")
    search_fields = ("first_name", "last_name", "pesel", "email")
    inlines = (RegistrationCardInline,)


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ("subject", "type", "registration", "is_read", "sent_at")
    list_filter = ("type", "is_read")
