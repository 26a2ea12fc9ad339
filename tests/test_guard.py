import asyncio
import unittest

from autoflow.rbac import AccessEvaluator, AuthSession, GuardState, RouteGuard, build_default_registry
from autoflow.rbac.guard import DENIAL_REDIRECT_DELAY

SHORT_DELAY = 0.05


def signed_in(role):
    return AuthSession.for_user({"username": "pat", "role": role})


class GuardTestCase(unittest.IsolatedAsyncioTestCase):

    def setUp(self):
        self.evaluator = AccessEvaluator(build_default_registry())
        self.navigations = []

    def make_guard(self, path, auth=None, delay=SHORT_DELAY):
        guard = RouteGuard(self.evaluator, self.navigations.append, path, auth, redirect_delay=delay)
        self.addCleanup(guard.dispose)
        return guard


class TestGuardScenarios(GuardTestCase):

    async def test_client_denied_inventory(self):
        guard = self.make_guard("/inventory", signed_in("client"), delay=DENIAL_REDIRECT_DELAY)

        self.assertIs(guard.state, GuardState.DENIED_PENDING_REDIRECT)
        view = guard.render()
        self.assertFalse(view.render_children)
        self.assertEqual(view.role_label, "Client")
        self.assertEqual(view.title, "Access Denied")
        self.assertTrue(guard.redirect_pending)
        self.assertEqual(self.navigations, [])

        remaining = guard._timer.when() - asyncio.get_running_loop().time()
        self.assertGreater(remaining, 1.5)
        self.assertLessEqual(remaining, 2.0)

    async def test_denied_redirect_fires_after_delay(self):
        guard = self.make_guard("/inventory", signed_in("client"))

        await asyncio.sleep(SHORT_DELAY * 3)

        self.assertEqual(self.navigations, ["/"])
        self.assertFalse(guard.redirect_pending)

    async def test_admin_authorized_inventory(self):
        guard = self.make_guard("/inventory", signed_in("admin"))

        self.assertIs(guard.state, GuardState.AUTHORIZED)
        self.assertTrue(guard.render().render_children)
        self.assertFalse(guard.redirect_pending)
        await asyncio.sleep(SHORT_DELAY * 3)
        self.assertEqual(self.navigations, [])

    async def test_unauthenticated_redirects_immediately(self):
        guard = self.make_guard("/customers", AuthSession.anonymous())

        self.assertIs(guard.state, GuardState.UNAUTHENTICATED)
        self.assertFalse(guard.render().render_children)
        self.assertEqual(self.navigations, ["/"])
        self.assertFalse(guard.redirect_pending)

    async def test_path_change_keeps_one_timer(self):
        guard = self.make_guard("/repair-orders", signed_in("user"))
        self.assertIs(guard.state, GuardState.AUTHORIZED)

        guard.update(path="/invoices")
        self.assertIs(guard.state, GuardState.DENIED_PENDING_REDIRECT)
        first_timer = guard._timer

        guard.update(path="/customers")
        self.assertIs(guard.state, GuardState.DENIED_PENDING_REDIRECT)
        self.assertTrue(first_timer.cancelled())
        self.assertIsNot(guard._timer, first_timer)

        await asyncio.sleep(SHORT_DELAY * 3)
        self.assertEqual(self.navigations, ["/"])


class TestGuardTransitions(GuardTestCase):

    async def test_loading_renders_nothing(self):
        guard = self.make_guard("/appointments")

        self.assertIs(guard.state, GuardState.LOADING)
        view = guard.render()
        self.assertFalse(view.render_children)
        self.assertIsNone(view.role_label)
        self.assertEqual(self.navigations, [])

    async def test_auth_resolution_moves_out_of_loading(self):
        guard = self.make_guard("/appointments", AuthSession.loading())

        guard.update(auth=signed_in("client"))

        self.assertIs(guard.state, GuardState.AUTHORIZED)
        self.assertEqual(self.navigations, [])

    async def test_same_inputs_do_not_reschedule(self):
        guard = self.make_guard("/settings", signed_in("user"))
        timer = guard._timer

        guard.update(auth=signed_in("user"), path="/settings")

        self.assertIs(guard._timer, timer)
        self.assertFalse(timer.cancelled())

    async def test_unauthenticated_navigates_once(self):
        guard = self.make_guard("/customers", AuthSession.anonymous())

        guard.update(path="/")
        guard.update(path="/vehicles")

        self.assertIs(guard.state, GuardState.UNAUTHENTICATED)
        self.assertEqual(self.navigations, ["/"])

    async def test_navigating_away_cancels_redirect(self):
        guard = self.make_guard("/reporting", signed_in("client"))

        guard.update(path="/")

        self.assertIs(guard.state, GuardState.AUTHORIZED)
        self.assertFalse(guard.redirect_pending)
        await asyncio.sleep(SHORT_DELAY * 3)
        self.assertEqual(self.navigations, [])

    async def test_role_change_reevaluates(self):
        guard = self.make_guard("/job-board", signed_in("user"))
        self.assertIs(guard.state, GuardState.AUTHORIZED)

        guard.update(auth=signed_in("client"))

        self.assertIs(guard.state, GuardState.DENIED_PENDING_REDIRECT)
        self.assertEqual(guard.render().role_label, "Client")

    async def test_logout_while_denied_cancels_timer(self):
        guard = self.make_guard("/reporting", signed_in("user"))

        guard.update(auth=AuthSession.anonymous())

        self.assertIs(guard.state, GuardState.UNAUTHENTICATED)
        self.assertFalse(guard.redirect_pending)
        await asyncio.sleep(SHORT_DELAY * 3)
        self.assertEqual(self.navigations, ["/"])

    async def test_unknown_role_denied(self):
        guard = self.make_guard("/appointments", signed_in("superuser"))

        self.assertIs(guard.state, GuardState.DENIED_PENDING_REDIRECT)
        self.assertEqual(guard.render().role_label, "User")

    async def test_unknown_role_still_reaches_dashboard(self):
        guard = self.make_guard("/", AuthSession.for_user({"username": "pat"}))

        self.assertIs(guard.state, GuardState.AUTHORIZED)


class TestGuardDisposal(GuardTestCase):

    async def test_dispose_cancels_pending_redirect(self):
        guard = self.make_guard("/inventory", signed_in("client"))

        guard.dispose()

        self.assertFalse(guard.redirect_pending)
        await asyncio.sleep(SHORT_DELAY * 3)
        self.assertEqual(self.navigations, [])

    async def test_context_manager_disposes(self):
        with RouteGuard(self.evaluator, self.navigations.append, "/inventory",
                        signed_in("user"), redirect_delay=SHORT_DELAY) as guard:
            self.assertTrue(guard.redirect_pending)

        self.assertTrue(guard.disposed)
        await asyncio.sleep(SHORT_DELAY * 3)
        self.assertEqual(self.navigations, [])

    async def test_disposed_guard_ignores_updates(self):
        guard = self.make_guard("/inventory", signed_in("admin"))
        guard.dispose()

        guard.update(auth=signed_in("client"))

        self.assertIs(guard.state, GuardState.AUTHORIZED)
        self.assertFalse(guard.redirect_pending)


class TestGuardEventLoop(unittest.TestCase):

    def setUp(self):
        self.evaluator = AccessEvaluator(build_default_registry())
        self.navigations = []

    def test_denial_outside_a_loop_needs_explicit_loop(self):
        with self.assertRaisesRegex(RuntimeError, "explicit loop"):
            RouteGuard(self.evaluator, self.navigations.append, "/inventory", signed_in("client"))

    def test_failed_denial_leaves_guard_unchanged(self):
        guard = RouteGuard(self.evaluator, self.navigations.append, "/inventory", signed_in("admin"))

        with self.assertRaises(RuntimeError):
            guard.update(auth=signed_in("client"))

        self.assertIs(guard.state, GuardState.AUTHORIZED)
        self.assertFalse(guard.redirect_pending)

    def test_authorized_guard_needs_no_loop(self):
        guard = RouteGuard(self.evaluator, self.navigations.append, "/inventory", signed_in("admin"))

        self.assertIs(guard.state, GuardState.AUTHORIZED)

    def test_explicit_loop_runs_redirect(self):
        loop = asyncio.new_event_loop()
        self.addCleanup(loop.close)
        guard = RouteGuard(self.evaluator, self.navigations.append, "/inventory",
                           signed_in("client"), redirect_delay=SHORT_DELAY, loop=loop)

        self.assertTrue(guard.redirect_pending)
        loop.run_until_complete(asyncio.sleep(SHORT_DELAY * 3))

        self.assertEqual(self.navigations, ["/"])
        guard.dispose()


if __name__ == '__main__':
    unittest.main()
