"""
In-Memory Backend Tests
=======================

Unit tests for the dictionary-backed data backend and auth provider.
"""

from django.test import TestCase

from infrastructure.backend import AuthenticationError, InMemoryAuthProvider, InMemoryBackend, Op, in_


class InMemoryBackendTest(TestCase):
    def setUp(self):
        self.backend = InMemoryBackend()
        self.rows = self.backend.insert(
            "products",
            [
                {"name": "Straight Jeans", "price": "59.99", "category": "Jeans"},
                {"name": "Oxford Shirt", "price": "44.99", "category": "Shirts"},
                {"name": "Crew Tee", "price": "19.99", "category": "T-Shirts", "discount": None},
            ],
        )

    def test_insert_generates_id_and_created_at(self):
        ids = {row["id"] for row in self.rows}
        self.assertEqual(len(ids), 3)
        created = [row["created_at"] for row in self.rows]
        self.assertEqual(created, sorted(created))
        self.assertEqual(len(set(created)), 3)

    def test_insert_keeps_explicit_id(self):
        row = self.backend.insert("users", [{"id": "user-1", "email": "a@example.com"}])[0]
        self.assertEqual(row["id"], "user-1")

    def test_select_equality_filter(self):
        rows = self.backend.select("products", filters={"category": "Shirts"})
        self.assertEqual([row["name"] for row in rows], ["Oxford Shirt"])

    def test_select_unknown_table_is_empty(self):
        self.assertEqual(self.backend.select("missing"), [])

    def test_select_in_filter(self):
        wanted = [self.rows[0]["id"], self.rows[2]["id"]]
        rows = self.backend.select("products", filters={"id": in_(wanted)})
        self.assertEqual({row["id"] for row in rows}, set(wanted))

    def test_select_comparison_operators(self):
        cheap = self.backend.select("products", filters={"price": Op("lt", "50")})
        self.assertEqual({row["name"] for row in cheap}, {"Oxford Shirt", "Crew Tee"})

        shirts = self.backend.select("products", filters={"name": Op("ilike", "%shirt%")})
        self.assertEqual([row["name"] for row in shirts], ["Oxford Shirt"])

        not_jeans = self.backend.select("products", filters={"category": Op("neq", "Jeans")})
        self.assertEqual(len(not_jeans), 2)

    def test_select_null_filter(self):
        rows = self.backend.select("products", filters={"discount": None})
        self.assertEqual(len(rows), 3)

        rows = self.backend.select("products", filters={"discount": Op("is", None)})
        self.assertEqual(len(rows), 3)

    def test_select_order_and_limit(self):
        newest = self.backend.select("products", order_by="created_at", ascending=False, limit=1)
        self.assertEqual(newest[0]["name"], "Crew Tee")

        by_name = self.backend.select("products", order_by="name")
        self.assertEqual([row["name"] for row in by_name], ["Crew Tee", "Oxford Shirt", "Straight Jeans"])

    def test_select_projects_columns(self):
        rows = self.backend.select("products", columns="id,name", filters={"category": "Jeans"})
        self.assertEqual(set(rows[0].keys()), {"id", "name"})

    def test_update_returns_affected_rows(self):
        updated = self.backend.update("products", {"price": "49.99"}, {"category": "Jeans"})
        self.assertEqual(len(updated), 1)
        self.assertEqual(updated[0]["price"], "49.99")

        self.assertEqual(self.backend.update("products", {"price": "1"}, {"category": "Hats"}), [])

    def test_delete_returns_removed_rows(self):
        deleted = self.backend.delete("products", {"category": "Shirts"})
        self.assertEqual(len(deleted), 1)
        self.assertEqual(len(self.backend.select("products")), 2)

    def test_unfiltered_mutations_are_rejected(self):
        with self.assertRaises(ValueError):
            self.backend.update("products", {"price": "0"}, {})
        with self.assertRaises(ValueError):
            self.backend.delete("products", {})

    def test_returned_rows_are_copies(self):
        row = self.backend.select("products", filters={"category": "Jeans"})[0]
        row["price"] = "0.00"
        self.assertEqual(self.backend.select("products", filters={"category": "Jeans"})[0]["price"], "59.99")


class InMemoryAuthProviderTest(TestCase):
    def setUp(self):
        self.provider = InMemoryAuthProvider()

    def test_sign_up_issues_session(self):
        session = self.provider.sign_up("Shopper@Example.com", "secret1")

        self.assertTrue(session.is_active)
        self.assertEqual(session.user.email, "shopper@example.com")
        self.assertEqual(self.provider.get_user(session.access_token).id, session.user.id)

    def test_sign_up_twice_is_rejected(self):
        self.provider.sign_up("shopper@example.com", "secret1")
        with self.assertRaises(AuthenticationError) as ctx:
            self.provider.sign_up("shopper@example.com", "secret1")
        self.assertEqual(ctx.exception.code, "user_already_exists")

    def test_sign_in_with_wrong_password(self):
        self.provider.sign_up("shopper@example.com", "secret1")
        with self.assertRaises(AuthenticationError) as ctx:
            self.provider.sign_in_with_password("shopper@example.com", "wrong-password")
        self.assertEqual(ctx.exception.message, "Invalid login credentials")

    def test_confirmation_required(self):
        provider = InMemoryAuthProvider(require_confirmation=True)
        session = provider.sign_up("shopper@example.com", "secret1")
        self.assertFalse(session.is_active)

        with self.assertRaises(AuthenticationError):
            provider.sign_in_with_password("shopper@example.com", "secret1")

        provider.confirm_email("shopper@example.com")
        self.assertTrue(provider.sign_in_with_password("shopper@example.com", "secret1").is_active)

    def test_refresh_rotates_refresh_token(self):
        session = self.provider.sign_up("shopper@example.com", "secret1")
        refreshed = self.provider.refresh_session(session.refresh_token)

        self.assertNotEqual(refreshed.access_token, session.access_token)
        with self.assertRaises(AuthenticationError):
            self.provider.refresh_session(session.refresh_token)

    def test_sign_out_invalidates_access_token(self):
        session = self.provider.sign_up("shopper@example.com", "secret1")
        self.provider.sign_out(session.access_token)
        self.assertIsNone(self.provider.get_user(session.access_token))
