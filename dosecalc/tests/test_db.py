import os
import sqlite3
import tempfile
import unittest
from unittest import mock

from dosecalc import db


class SqliteKeyValueStoreTests(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmpdir.cleanup)
        self.store = db.SqliteKeyValueStore(os.path.join(self.tmpdir.name, "nested", "kv.db"))
        self.store.init_db()

    def test_set_get_remove(self):
        self.assertIsNone(self.store.get("insulinDoseInputs"))
        self.store.set("insulinDoseInputs", '{"tdd": "50"}')
        self.assertEqual(self.store.get("insulinDoseInputs"), '{"tdd": "50"}')
        self.store.set("insulinDoseInputs", '{"tdd": "40"}')
        self.assertEqual(self.store.get("insulinDoseInputs"), '{"tdd": "40"}')
        self.store.remove("insulinDoseInputs")
        self.assertIsNone(self.store.get("insulinDoseInputs"))

    def test_remove_missing_key(self):
        self.store.remove("never-written")
        self.assertIsNone(self.store.get("never-written"))

    def test_keys_are_independent(self):
        self.store.set("insulinDoseInputs", "{}")
        self.store.set("insulinDoseLang", "th")
        self.store.remove("insulinDoseInputs")
        self.assertEqual(self.store.get("insulinDoseLang"), "th")

    def test_values_survive_reopen(self):
        self.store.set("insulinDoseLang", "th")
        reopened = db.SqliteKeyValueStore(self.store.path)
        self.assertEqual(reopened.get("insulinDoseLang"), "th")

    def test_unusable_path_raises_storage_error(self):
        blocker = os.path.join(self.tmpdir.name, "blocker")
        with open(blocker, "w") as handle:
            handle.write("not a directory")
        store = db.SqliteKeyValueStore(os.path.join(blocker, "kv.db"))
        with self.assertRaises(db.StorageError):
            store.init_db()
        with self.assertRaises(db.StorageError):
            store.set("insulinDoseLang", "en")

    def test_connection_closed_when_statement_fails(self):
        conn = mock.MagicMock()
        conn.execute.side_effect = sqlite3.OperationalError("disk I/O error")
        with mock.patch("dosecalc.db.sqlite3.connect", return_value=conn):
            for call in (
                lambda: self.store.get("insulinDoseLang"),
                lambda: self.store.set("insulinDoseLang", "th"),
                lambda: self.store.remove("insulinDoseLang"),
            ):
                conn.close.reset_mock()
                with self.assertRaises(db.StorageError):
                    call()
                conn.close.assert_called_once_with()

    def test_path_from_environment(self):
        target = os.path.join(self.tmpdir.name, "env.db")
        with mock.patch.dict(os.environ, {"DOSECALC_DB_PATH": target}):
            self.assertEqual(db.SqliteKeyValueStore().path, target)


class MemoryKeyValueStoreTests(unittest.TestCase):
    def test_round_trip(self):
        store = db.MemoryKeyValueStore({"insulinDoseLang": "th"})
        self.assertEqual(store.get("insulinDoseLang"), "th")
        store.remove("insulinDoseLang")
        store.remove("insulinDoseLang")
        self.assertIsNone(store.get("insulinDoseLang"))


if __name__ == "__main__":
    unittest.main()
