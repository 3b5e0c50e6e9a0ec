from django.contrib import admin

from .models import (Admin, AdminAuditLog, Camp, CampTypeDescription,
                     DocumentTemplate, HomepageImage, HomepageSection)


@admin.register(Camp)
class CampAdmin(admin.ModelAdmin):
    list_display = ("name", "type", "location", "start_date", "end_date",
                    "price", "capacity")
    list_filter = ("type",)
    search_fields = ("name", "location")


@admin.register(CampTypeDescription)
class CampTypeDescriptionAdmin(admin.ModelAdmin):
    list_display = ("type", "label")


@admin.register(DocumentTemplate)
class DocumentTemplateAdmin(admin.ModelAdmin):
    list_display = ("name", "type", "is_default", "created_at")
    list_filter = ("type", "is_default")


@admin.register(Admin)
class AdminProfileAdmin(admin.ModelAdmin):
    list_display = ("user", "role", "last_login")
    list_filter = ("role",)


class HomepageImageInline(admin.TabularInline):
    model = HomepageImage
    extra = 0
    fields = ("url", "alt")


@admin.register(HomepageSection)
class HomepageSectionAdmin(admin.ModelAdmin):
    list_display = ("type", "title", "order", "is_visible")
    inlines = (HomepageImageInline,)


@admin.register(AdminAuditLog)
class AdminAuditLogAdmin(admin.ModelAdmin):
    list_display = ("action", "table_name", "record_id", "user", "created_at")
    list_filter = ("action",)
    readonly_fields = ("action", "table_name", "record_id", "old_data",
                       "new_data", "user", "created_at")
