from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import path

import obozy.apps.camps.views.auth_views as auth_views
import obozy.apps.camps.views.camp_views as camp_views
import obozy.apps.camps.views.payment_views as payment_views
import obozy.apps.camps.views.public_views as public_views
import obozy.apps.camps.views.registration_views as registration_views
import obozy.apps.camps.views.settings_views as settings_views
import obozy.apps.camps.views.views as views
import obozy.apps.registration.views as portal_views

admin.autodiscover()

urlpatterns = [
    path("django-admin/", admin.site.urls),
    path("", public_views.public_home, name="public_home"),
    path("registration/", portal_views.registration_portal,
         name="registration_portal"),
    path("login/", auth_views.login_view, name="login"),
    path("logout/", auth_views.logout_view, name="logout"),
    path("403/", views.render_403, name="403"),
    path("404/", views.render_404, name="404"),
    path("500/", views.render_500, name="500"),

    path("admin/", views.index, name="admin_index"),
    path("admin/health/", views.health, name="health"),

    # Camp related
    path("admin/camps/", camp_views.view_camps, name="view_camps"),
    path("admin/camps/new/", camp_views.enter_camp, name="enter_camp"),
    path("admin/camps/<int:camp_id>/", camp_views.edit_camp, name="edit_camp"),
    path("admin/camps/<int:camp_id>/delete/", camp_views.delete_camp,
         name="delete_camp"),
    path("admin/camps/types/<str:camp_type>/",
         camp_views.update_camp_type_description,
         name="update_camp_type_description"),

    # Registration related
    path("admin/registrations/", registration_views.view_registrations,
         name="view_registrations"),
    path("admin/registrations/export/",
         registration_views.export_registrations,
         name="export_registrations"),
    path("admin/registrations/<int:registration_id>/",
         registration_views.view_registration,
         name="view_registration"),
    path("admin/registrations/<int:registration_id>/delete/",
         registration_views.delete_registration,
         name="delete_registration"),
    path("admin/registrations/<int:registration_id>/exclude/",
         registration_views.exclude_registration,
         name="exclude_registration"),
    path("admin/registrations/<int:registration_id>/note/",
         registration_views.add_registration_note,
         name="add_registration_note"),
    path("admin/registrations/<int:registration_id>/message/",
         registration_views.send_custom_email,
         name="send_custom_email"),
    path("admin/registrations/<int:registration_id>/reminder/",
         registration_views.send_payment_reminder,
         name="send_payment_reminder"),
    path("admin/registrations/<int:registration_id>/document/"
         "<int:template_id>/",
         registration_views.generate_document,
         name="generate_document"),
    path("admin/registrations/<int:registration_id>/card/data/",
         registration_views.registration_card_data,
         name="registration_card_data"),
    path("admin/registrations/<int:registration_id>/card/",
         registration_views.upload_registration_card,
         name="upload_registration_card"),
    path("admin/registrations/<int:registration_id>/card/delete/",
         registration_views.delete_registration_card,
         name="delete_registration_card"),

    # Payment related
    path("admin/payments/", payment_views.view_payments, name="view_payments"),
    path("admin/payments/<int:registration_id>/",
         payment_views.register_payment,
         name="register_payment"),
    path("admin/templates/new/", payment_views.enter_template,
         name="enter_template"),
    path("admin/templates/<int:template_id>/", payment_views.edit_template,
         name="edit_template"),
    path("admin/templates/<int:template_id>/delete/",
         payment_views.delete_template,
         name="delete_template"),

    # Stats and notifications
    path("admin/stats/", views.view_stats, name="view_stats"),
    path("admin/notifications/", views.view_notifications,
         name="view_notifications"),
    path("admin/notifications/<int:notification_id>/read/",
         views.read_notification,
         name="read_notification"),

    # Homepage settings
    path("admin/settings/", settings_views.view_settings,
         name="view_settings"),
    path("admin/settings/sections/<int:section_id>/",
         settings_views.update_section,
         name="update_section"),
    path("admin/settings/sections/<int:section_id>/images/",
         settings_views.upload_image,
         name="upload_image"),
    path("admin/settings/images/<int:image_id>/delete/",
         settings_views.delete_image,
         name="delete_image"),
]

if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)

handler403 = "obozy.apps.camps.views.views.render_403"
handler404 = "obozy.apps.camps.views.views.render_404"
handler500 = "obozy.apps.camps.views.views.render_500"
