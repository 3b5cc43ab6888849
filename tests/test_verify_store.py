from __future__ import annotations

import io
import os
import sys
from contextlib import redirect_stdout
from pathlib import Path
from tempfile import TemporaryDirectory
from unittest import TestCase
from unittest.mock import patch

UTILS_DIR = Path(__file__).resolve().parents[1] / "utils"
if str(UTILS_DIR) not in sys.path:
    sys.path.insert(0, str(UTILS_DIR))

import verify_store

from ArtGraph.storage import neo4j_storage
from ArtGraph.storage.neo4j_storage import Neo4jConnection

from fake_neo4j import FakeDriverFactory


class VerifyStoreTests(TestCase):
    def setUp(self) -> None:
        self.tmpdir = TemporaryDirectory()
        self.addCleanup(self.tmpdir.cleanup)
        self.factory = FakeDriverFactory()
        connection_patch = patch.object(neo4j_storage, "_connection", Neo4jConnection(driver_factory=self.factory))
        connection_patch.start()
        self.addCleanup(connection_patch.stop)

    def run_verify(self, config_path=None, environ=None):
        output = io.StringIO()
        with patch.dict(os.environ, environ or {}, clear=True):
            with redirect_stdout(output):
                ok = verify_store.verify_store(config_path)
        return ok, output.getvalue()

    def test_missing_config_file_reports_failure(self) -> None:
        ok, output = self.run_verify(os.path.join(self.tmpdir.name, "nope.yaml"))

        self.assertFalse(ok)
        self.assertIn("❌ ConfigurationError", output)
        self.assertEqual([], self.factory.calls)

    def test_bad_retry_window_reports_failure(self) -> None:
        ok, output = self.run_verify(environ={"ENDPOINT_RETRY_WINDOW": "soon"})

        self.assertFalse(ok)
        self.assertIn("❌ ConfigurationError", output)

    def test_reachable_store_reports_success(self) -> None:
        environ = {
            "ENDPOINT_URI": "bolt://db:7687",
            "ENDPOINT_USER": "neo4j",
            "ENDPOINT_PASSWORD": "secret",
        }
        ok, output = self.run_verify(environ=environ)

        self.assertTrue(ok)
        self.assertIn("Neo4j community Edition v5.20.0 is ready", output)
        self.assertTrue(self.factory.drivers[0].closed)

    def test_main_exits_non_zero_on_bad_config(self) -> None:
        missing = os.path.join(self.tmpdir.name, "nope.yaml")
        with patch.object(sys, "argv", ["verify_store.py", "--config", missing]), \
                patch.dict(os.environ, {}, clear=True), \
                redirect_stdout(io.StringIO()):
            with self.assertRaises(SystemExit) as ctx:
                verify_store.main()

        self.assertEqual(1, ctx.exception.code)
