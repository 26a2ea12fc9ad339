import unittest

from autoflow.rbac import AccessEvaluator, MenuItem, Role, RoleRegistry, Section, build_default_registry
from autoflow.rbac.roles import ASSIGNABLE_ROLES

ALL_ROLES = tuple(Role)


class TestDefaultRegistry(unittest.TestCase):

    def setUp(self):
        self.registry = build_default_registry()
        self.evaluator = AccessEvaluator(self.registry)

    def test_paths_are_unique(self):
        paths = [item.path for item in self.registry.items]
        self.assertEqual(len(paths), len(set(paths)))

    def test_shop_pages(self):
        roles_by_path = {item.path: item.roles for item in self.registry.items}
        self.assertEqual(roles_by_path["/customers"], {Role.ADMIN})
        self.assertEqual(roles_by_path["/vehicles"], {Role.ADMIN, Role.CLIENT})
        self.assertEqual(roles_by_path["/repair-orders"], {Role.ADMIN, Role.USER})
        self.assertEqual(roles_by_path["/appointments"], {Role.ADMIN, Role.USER, Role.CLIENT})
        self.assertEqual(roles_by_path["/customer-portal"], {Role.CLIENT})
        self.assertEqual(roles_by_path["/inventory"], {Role.ADMIN})

    def test_unknown_role_is_never_granted(self):
        for item in self.registry.items:
            self.assertNotIn(Role.UNKNOWN, item.roles)

    def test_items_are_immutable(self):
        item = self.registry.items[0]
        with self.assertRaises(Exception):
            item.path = "/elsewhere"


class TestHasAccess(unittest.TestCase):

    def setUp(self):
        self.registry = build_default_registry()
        self.evaluator = AccessEvaluator(self.registry)

    def test_dashboard_open_to_every_role(self):
        for role in ALL_ROLES + (None, "bogus"):
            with self.subTest(role=role):
                self.assertTrue(self.evaluator.has_access(role, "/"))

    def test_registry_entries(self):
        for item in self.registry.items:
            if item.path == "/":
                continue
            for role in ALL_ROLES:
                with self.subTest(path=item.path, role=role):
                    self.assertEqual(self.evaluator.has_access(role, item.path), role in item.roles)

    def test_nested_paths_inherit_access(self):
        for item in self.registry.items:
            if item.path == "/":
                continue
            for suffix in ("42", "42/edit", "new"):
                path = item.path + "/" + suffix
                for role in ASSIGNABLE_ROLES:
                    with self.subTest(path=path, role=role):
                        self.assertEqual(self.evaluator.has_access(role, path), role in item.roles)

    def test_unregistered_paths_denied(self):
        for path in ("/payroll", "/customersx", "/inventory-report", "", "customers", "/admin/inventory"):
            for role in ALL_ROLES:
                with self.subTest(path=path, role=role):
                    self.assertFalse(self.evaluator.has_access(role, path))

    def test_unknown_roles_denied(self):
        for role in (None, "bogus", "ADMIN", Role.UNKNOWN):
            with self.subTest(role=role):
                self.assertFalse(self.evaluator.has_access(role, "/appointments"))
                self.assertFalse(self.evaluator.has_access(role, "/customers"))

    def test_malformed_paths_denied(self):
        self.assertFalse(self.evaluator.has_access(Role.ADMIN, None))
        self.assertFalse(self.evaluator.has_access(Role.ADMIN, 17))

    def test_find_entry(self):
        self.assertEqual(self.evaluator.find_entry("/invoices/7").path, "/invoices")
        self.assertIsNone(self.evaluator.find_entry("/payroll"))
        self.assertIsNone(self.evaluator.find_entry(None))


class TestMenuItemsForRole(unittest.TestCase):

    def setUp(self):
        self.registry = build_default_registry()
        self.evaluator = AccessEvaluator(self.registry)

    def test_subset_in_registry_order(self):
        for role in ALL_ROLES:
            with self.subTest(role=role):
                expected = tuple(item for item in self.registry.items if role in item.roles)
                self.assertEqual(self.evaluator.menu_items_for_role(role), expected)

    def test_repeatable(self):
        first = self.evaluator.menu_items_for_role("user")
        second = self.evaluator.menu_items_for_role("user")
        self.assertEqual(first, second)

    def test_client_menu(self):
        paths = [item.path for item in self.evaluator.menu_items_for_role("client")]
        self.assertEqual(paths, ["/", "/appointments", "/vehicles", "/customer-portal"])

    def test_technician_menu(self):
        paths = [item.path for item in self.evaluator.menu_items_for_role(Role.USER)]
        self.assertEqual(paths, ["/", "/inspections", "/appointments", "/repair-orders", "/job-board"])

    def test_unknown_role_sees_nothing(self):
        self.assertEqual(self.evaluator.menu_items_for_role("bogus"), ())
        self.assertEqual(self.evaluator.menu_items_for_role(None), ())

    def test_role_specific_titles(self):
        appointments = self.evaluator.find_entry("/appointments")
        self.assertEqual(self.evaluator.title_for_role(appointments, "client"), "My Appointments")
        self.assertEqual(self.evaluator.title_for_role(appointments, "user"), "My Assignments")
        customers = self.evaluator.find_entry("/customers")
        self.assertEqual(self.evaluator.title_for_role(customers, "admin"), "Customer Management")


class TestCustomRegistry(unittest.TestCase):

    def _item(self, path, roles, section=Section.OPERATIONS):
        return MenuItem(title=path, path=path, icon="fas fa-circle", section=section, roles=frozenset(roles))

    def test_evaluator_uses_injected_registry(self):
        registry = RoleRegistry(items=(
            self._item("/bays", {Role.USER}),
            self._item("/bays/reserved", {Role.ADMIN}),
        ))
        evaluator = AccessEvaluator(registry)

        self.assertTrue(evaluator.has_access(Role.USER, "/bays"))
        self.assertFalse(evaluator.has_access(Role.ADMIN, "/customers"))
        # First matching entry decides
        self.assertTrue(evaluator.has_access(Role.USER, "/bays/reserved"))
        self.assertFalse(evaluator.has_access(Role.ADMIN, "/bays/reserved"))

    def test_dashboard_open_without_registry_entry(self):
        evaluator = AccessEvaluator(RoleRegistry(items=()))
        self.assertTrue(evaluator.has_access(Role.CLIENT, "/"))
        self.assertFalse(evaluator.has_access(Role.ADMIN, "/customers"))

    def test_duplicate_paths_rejected(self):
        with self.assertRaises(ValueError):
            RoleRegistry(items=(
                self._item("/bays", {Role.USER}),
                self._item("/bays", {Role.ADMIN}),
            ))


if __name__ == '__main__':
    unittest.main()
