from unittest.mock import MagicMock, patch

from django.test import TestCase
from django.urls import reverse

from apps.core.health import HealthChecker, HealthCheckStatus


class HealthCheckTest(TestCase):
    """Tests for the health checker and the health endpoints."""

    def setUp(self) -> None:
        self.checker = HealthChecker()
        self.health_url = reverse("core:health-check")
        self.ready_url = reverse("core:readiness-check")
        self.live_url = reverse("core:liveness-check")

    def test_checks_registered(self) -> None:
        """Test the checker runs the database, cache and column checks."""
        self.assertEqual(
            list(self.checker.checks), ["database", "cache", "author_columns"]
        )

    def test_run_all_checks_healthy(self) -> None:
        """Test healthy status against the test database and cache."""
        results = self.checker.run_all_checks()

        self.assertEqual(results["status"], HealthCheckStatus.HEALTHY)
        self.assertEqual(results["environment"], "test")
        for check in ("database", "cache", "author_columns"):
            self.assertEqual(results["checks"][check]["status"], HealthCheckStatus.HEALTHY)

    @patch("apps.core.health.connection")
    def test_database_failure(self, mock_conn: MagicMock) -> None:
        """Test a failing database makes the check unhealthy."""
        mock_conn.cursor.side_effect = Exception("Connection refused")

        result = self.checker._check_database()

        self.assertEqual(result["status"], HealthCheckStatus.UNHEALTHY)
        self.assertIn("Connection refused", result["message"])

    @patch("apps.core.health.cache")
    def test_cache_mismatch(self, mock_cache: MagicMock) -> None:
        """Test a cache returning the wrong value is unhealthy."""
        mock_cache.get.return_value = "wrong_value"

        result = self.checker._check_cache()

        self.assertEqual(result["status"], HealthCheckStatus.UNHEALTHY)
        self.assertEqual(result["message"], "Cache read/write test failed")

    @patch("apps.core.health.cache")
    def test_cache_failure_is_degraded(self, mock_cache: MagicMock) -> None:
        """Test an unreachable cache only degrades the service."""
        mock_cache.set.side_effect = Exception("Redis down")

        result = self.checker._check_cache()

        self.assertEqual(result["status"], HealthCheckStatus.DEGRADED)
        self.assertIn("Redis down", result["message"])

    @patch("apps.core.health.AuthorColumnCatalog")
    def test_author_columns_without_id(self, mock_catalog: MagicMock) -> None:
        """Test a catalog missing the id column is unhealthy."""
        mock_catalog.return_value.existing_columns.return_value = frozenset({"gender"})

        result = self.checker._check_author_columns()

        self.assertEqual(result["status"], HealthCheckStatus.UNHEALTHY)

    def test_run_all_checks_exception(self) -> None:
        """Test an exception raised by a check marks it unhealthy."""
        self.checker.checks["author_columns"] = MagicMock(side_effect=Exception("boom"))

        results = self.checker.run_all_checks()

        self.assertEqual(results["status"], HealthCheckStatus.UNHEALTHY)
        self.assertIn("boom", results["checks"]["author_columns"]["message"])

    def test_health_view(self) -> None:
        """Test the health endpoint reports every check."""
        response = self.client.get(self.health_url)

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data["status"], HealthCheckStatus.HEALTHY)
        self.assertIn("author_columns", data["checks"])
        self.assertIn("no-cache", response["Cache-Control"])

    @patch("apps.core.health.health_checker.run_all_checks")
    def test_health_view_unhealthy(self, mock_run: MagicMock) -> None:
        """Test the health endpoint returns 503 when unhealthy."""
        mock_run.return_value = {"status": HealthCheckStatus.UNHEALTHY}

        response = self.client.get(self.health_url)

        self.assertEqual(response.status_code, 503)

    @patch("apps.core.health.health_checker.run_all_checks")
    def test_health_view_degraded(self, mock_run: MagicMock) -> None:
        """Test the health endpoint stays 200 when degraded."""
        mock_run.return_value = {"status": HealthCheckStatus.DEGRADED}

        response = self.client.get(self.health_url)

        self.assertEqual(response.status_code, 200)

    def test_health_view_rejects_post(self) -> None:
        """Test only GET and HEAD are allowed."""
        response = self.client.post(self.health_url)

        self.assertEqual(response.status_code, 405)

    def test_readiness_check(self) -> None:
        """Test readiness with a working database."""
        response = self.client.get(self.ready_url)

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "ready")

    @patch("apps.core.health.health_checker._check_database")
    def test_readiness_check_database_down(self, mock_db: MagicMock) -> None:
        """Test readiness returns 503 when the database is down."""
        mock_db.return_value = {"status": HealthCheckStatus.UNHEALTHY}

        response = self.client.get(self.ready_url)

        self.assertEqual(response.status_code, 503)
        self.assertEqual(response.json()["status"], "not_ready")

    def test_liveness_check(self) -> None:
        """Test liveness always answers."""
        response = self.client.get(self.live_url)

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "alive")
