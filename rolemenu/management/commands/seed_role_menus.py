"""
Create the default roles, their menu grants and one test user per role.

Running the command again resets grants, passwords and role assignments
to the values below.
"""
from django.contrib.auth.hashers import make_password
from django.core.management.base import BaseCommand

from rolemenu.models import Role, User
from rolemenu.navigation import NAVIGATION_CATEGORIES, PAGE_TABS, get_category_by_id
from rolemenu.services.menu_access import set_role_menu_config

TEST_PASSWORD = "123456"

# role name -> (description, test username, categories, extra item hrefs, tabs, queues)
# ``None`` for items means every item of the granted categories.
ROLE_SET = [
    ("administrator", "Full access to every module", "admin1",
     [c.id for c in NAVIGATION_CATEGORIES], None,
     {page: [t.value for t in tabs] for page, tabs in PAGE_TABS.items()}, []),
    ("doctor", "Clinicians", "doctor1",
     ["overview", "patient-care", "clinical-services"], None,
     {"/patients/[id]": ["overview", "vitals", "lab-results", "medications", "procedures", "orders", "allergies"],
      "/inpatient": ["overview", "reviews", "vitals", "labs", "orders", "medications"]},
     ["consultation", "triage"]),
    ("nurse", "Nursing staff", "nurse1",
     ["overview", "patient-care", "clinical-services"],
     {"/", "/patients", "/triaging", "/queue", "/inpatient", "/maternity", "/icu"},
     {"/patients/[id]": ["overview", "vitals", "medications", "allergies", "queue-status"],
      "/inpatient": ["overview", "nursing", "vitals", "medications"]},
     ["triage", "registration"]),
    ("cashier", "Front desk billing", "cashier1",
     ["overview", "financial"],
     {"/", "/finance/cash", "/finance/charges", "/billing", "/insurance"},
     {"/patients/[id]": ["overview", "billing", "insurance"]},
     ["billing", "cashier"]),
    ("pharmacist", "Pharmacy and drug stock", "pharmacist1",
     ["overview", "clinical-services", "procurement"],
     {"/", "/pharmacy", "/inventory", "/inventory/adjust", "/procurement/notifications"},
     {"/patients/[id]": ["overview", "medications", "allergies"]},
     ["pharmacy"]),
]


def _payload(categories, hrefs, tabs, queues) -> dict:
    items = []
    for category_id in categories:
        for item in get_category_by_id(category_id).items:
            if hrefs is None or item.href in hrefs:
                items.append({"categoryId": category_id, "menuItemPath": item.href, "isAllowed": True})
    return {
        "categories": [{"categoryId": c, "isAllowed": True} for c in categories],
        "menuItems": items,
        "tabs": [
            {"pagePath": page, "tabId": tab, "isAllowed": True}
            for page, tab_ids in tabs.items() for tab in tab_ids
        ],
        "queues": [{"servicePoint": q, "isAllowed": True} for q in queues],
    }


class Command(BaseCommand):
    help = "Ensure default roles, menu grants and test users exist (idempotent)."

    def handle(self, *args, **opts):
        for name, description, username, categories, hrefs, tabs, queues in ROLE_SET:
            role, _ = Role.objects.update_or_create(
                name=name, defaults={"description": description, "is_active": True},
            )
            counts = set_role_menu_config(role, _payload(categories, hrefs, tabs, queues))

            u, created = User.objects.get_or_create(
                username=username,
                defaults={"role": role, "password": make_password(TEST_PASSWORD), "is_active": True},
            )
            if not created:
                u.password = make_password(TEST_PASSWORD)
                u.role = role
                u.is_active = True
                u.save(update_fields=["password", "role", "is_active"])
            self.stdout.write(self.style.SUCCESS(f"ok: {name} ({username}) {counts}"))
        self.stdout.write(self.style.SUCCESS("All roles ensured."))
