import enum
import unittest

from autoflow.models.user import UserRole
from autoflow.rbac import AccessEvaluator, Role, build_default_registry


class TestRoleParsing(unittest.TestCase):

    def test_known_values(self):
        self.assertIs(Role.parse("admin"), Role.ADMIN)
        self.assertIs(Role.parse("user"), Role.USER)
        self.assertIs(Role.parse("client"), Role.CLIENT)

    def test_role_instances_pass_through(self):
        self.assertIs(Role.parse(Role.CLIENT), Role.CLIENT)

    def test_stored_account_roles(self):
        self.assertIs(Role.parse(UserRole.ADMIN), Role.ADMIN)
        self.assertIs(Role.parse(UserRole.USER), Role.USER)

    def test_untrusted_values_are_unknown(self):
        for value in (None, "", "bogus", "Admin", " admin", 1, [], {"role": "admin"}):
            with self.subTest(value=value):
                self.assertIs(Role.parse(value), Role.UNKNOWN)

    def test_foreign_enum_is_parsed_by_value(self):
        class Other(enum.Enum):
            MANAGER = "manager"
            CLIENT = "client"

        self.assertIs(Role.parse(Other.CLIENT), Role.CLIENT)
        self.assertIs(Role.parse(Other.MANAGER), Role.UNKNOWN)

    def test_is_known(self):
        self.assertTrue(Role.ADMIN.is_known)
        self.assertFalse(Role.UNKNOWN.is_known)


class TestRoleDisplayName(unittest.TestCase):

    def setUp(self):
        self.evaluator = AccessEvaluator(build_default_registry())

    def test_display_names(self):
        self.assertEqual(self.evaluator.role_display_name("admin"), "Shop Manager")
        self.assertEqual(self.evaluator.role_display_name("user"), "Technician")
        self.assertEqual(self.evaluator.role_display_name(Role.CLIENT), "Client")

    def test_fallback_label(self):
        self.assertEqual(self.evaluator.role_display_name(None), "User")
        self.assertEqual(self.evaluator.role_display_name("bogus"), "User")
        self.assertEqual(self.evaluator.role_display_name(Role.UNKNOWN), "User")
        self.assertEqual(self.evaluator.role_display_name(42), "User")


if __name__ == '__main__':
    unittest.main()
