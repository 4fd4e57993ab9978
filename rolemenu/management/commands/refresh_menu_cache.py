from django.core.management.base import BaseCommand
from django.utils import timezone

from rolemenu.models import Role
from rolemenu.services.broadcast import broadcast_menu_refresh
from rolemenu.services.menu_access import get_role_menu_access, invalidate_role_cache


class Command(BaseCommand):
    help = "Rebuild cached role menu grants; broadcast WebSocket refresh event."

    def handle(self, *args, **options):
        now = timezone.now()
        role_ids = []
        for role in Role.objects.filter(is_active=True).order_by('id'):
            invalidate_role_cache(role.id)
            get_role_menu_access(role)
            role_ids.append(role.id)

        sent = broadcast_menu_refresh(role_ids)
        note = "" if sent else " (no channel layer)"
        self.stdout.write(self.style.SUCCESS(f"Refreshed {len(role_ids)} roles at {now}{note}"))
