from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path

from schedule.errors import ConfigurationIncompleteError
from schedule.store import GuildConfigStore
from schedule.store import JsonFileBackend
from schedule.store import MemoryBackend
from schedule.store import MessageRecordStore


class JsonFileBackendTests(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.path = Path(self.tmp.name) / "nested" / "meta.json"

    def test_missing_or_corrupt_file_reads_as_empty(self):
        backend = JsonFileBackend(self.path)
        self.assertEqual(backend.load(), {})
        self.path.parent.mkdir(parents=True)
        self.path.write_text("{not json", encoding="utf-8")
        self.assertEqual(backend.load(), {})

    def test_save_writes_whole_document(self):
        backend = JsonFileBackend(self.path)
        backend.save({"a": {"messageId": "1"}})
        self.assertEqual(json.loads(self.path.read_text(encoding="utf-8")), {"a": {"messageId": "1"}})
        self.assertFalse(self.path.with_name("meta.json.tmp").exists())


class GuildConfigStoreTests(unittest.TestCase):
    def setUp(self):
        self.backend = MemoryBackend()
        self.store = GuildConfigStore(self.backend)

    def test_unknown_guild_returns_none(self):
        self.assertIsNone(self.store.get("1"))

    def test_update_merges_nested_sections(self):
        self.store.update("1", {"staffChannelId": "10", "threads": {"thisMonth": "100", "lastMonth": "99"}})
        self.store.update("1", {"notion": {"databaseId": "db"}})
        cfg = self.store.update("1", {"threads": {"thisMonth": "101"}})

        self.assertEqual(cfg.staff_channel_id, "10")
        self.assertEqual(cfg.thread_for("thisMonth"), "101")
        self.assertEqual(cfg.thread_for("lastMonth"), "99")
        self.assertIsNone(cfg.thread_for("archive"))
        self.assertEqual(cfg.database_id, "db")
        self.assertEqual(self.backend.data["1"]["notion"], {"databaseId": "db"})

    def test_guilds_are_independent(self):
        self.store.update("1", {"staffChannelId": "10"})
        self.store.update("2", {"staffChannelId": "20"})
        self.assertEqual(self.store.get("1").staff_channel_id, "10")
        self.assertEqual(self.store.get("2").staff_channel_id, "20")

    def test_require_reports_what_is_missing(self):
        with self.assertRaises(ConfigurationIncompleteError) as ctx:
            self.store.require("1")
        self.assertIn("/caltrix setup", str(ctx.exception))

        self.store.update("1", {"staffChannelId": "10", "threads": {"thisMonth": "100"}})
        with self.assertRaises(ConfigurationIncompleteError) as ctx:
            self.store.require("1")
        self.assertIn("Notion DB not configured", str(ctx.exception))

        self.store.update("1", {"notion": {"databaseId": "db"}})
        self.assertEqual(self.store.require("1").database_id, "db")


class MessageRecordStoreTests(unittest.TestCase):
    def test_records_keyed_by_guild_and_scope(self):
        backend = MemoryBackend()
        store = MessageRecordStore(backend)

        store.set_message_id("1", "thisMonth", 555)
        store.set_message_id("1", "nextMonth", 556)

        self.assertEqual(store.get_message_id("1", "thisMonth"), 555)
        self.assertEqual(store.get_message_id("1", "nextMonth"), 556)
        self.assertIsNone(store.get_message_id("2", "thisMonth"))
        self.assertEqual(backend.data["1:thisMonth"], {"messageId": "555"})

    def test_bad_record_reads_as_missing(self):
        store = MessageRecordStore(MemoryBackend({"1:thisMonth": {"messageId": "nope"}}))
        self.assertIsNone(store.get_message_id("1", "thisMonth"))


if __name__ == "__main__":
    unittest.main()
