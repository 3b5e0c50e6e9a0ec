from django.contrib.auth.signals import user_logged_in, user_logged_out
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from obozy.apps.camps.auth_roles import (forget_admin_lookup,
                                         stamp_admin_last_login)
from obozy.apps.camps.models import Admin
from obozy.libs.cacheing.query_cache import ADMINS, invalidate
from obozy.libs.session import SIGNED_IN, SIGNED_OUT, auth_events

auth_events.subscribe(forget_admin_lookup)
auth_events.subscribe(stamp_admin_last_login)


@receiver(user_logged_in)
def publish_sign_in(sender, request, user, **kwargs):
    auth_events.publish(SIGNED_IN, user, request)


@receiver(user_logged_out)
def publish_sign_out(sender, request, user, **kwargs):
    auth_events.publish(SIGNED_OUT, user, request)


@receiver(post_save, sender=Admin)
@receiver(post_delete, sender=Admin)
def invalidate_admin_lookups(sender, instance, **kwargs):
    invalidate(ADMINS)
