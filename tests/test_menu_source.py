from __future__ import annotations

import unittest
from unittest.mock import MagicMock, patch

import requests

import config
from errors import MenuSourceError
from menu_grouping import MenuEntry
from menu_source import LocalMenuSource, SupabaseMenuSource, get_menu_source, load_menu_entries
from tests.support import AppTestCase


def _response(status=200, payload=None, text="", json_error=False):
    r = MagicMock()
    r.status_code = status
    r.text = text
    if json_error:
        r.json.side_effect = ValueError("not json")
    else:
        r.json.return_value = payload
    return r


class TestSupabaseMenuSource(unittest.TestCase):
    def setUp(self) -> None:
        self.source = SupabaseMenuSource("https://example.supabase.co/", "anon-key", timeout=3)

    @patch("menu_source.requests.get")
    def test_fetch_all_builds_postgrest_request(self, get) -> None:
        get.return_value = _response(payload=[
            {"id": "a1", "name": "Travel", "link": "#", "category": None, "display_order": 1, "is_active": True},
            {"id": "a2", "name": "Flights", "link": "/f", "category": "Travel", "display_order": 1, "is_active": False},
            "garbage",
        ])
        entries = self.source.fetch()

        self.assertEqual([e.name for e in entries], ["Travel", "Flights"])
        self.assertIsInstance(entries[0], MenuEntry)
        self.assertFalse(entries[1].is_active)

        args, kwargs = get.call_args
        self.assertEqual(args[0], "https://example.supabase.co/rest/v1/nav_menu_items")
        self.assertEqual(kwargs["params"], {"select": "*", "order": "display_order.asc"})
        self.assertEqual(kwargs["headers"]["apikey"], "anon-key")
        self.assertEqual(kwargs["headers"]["Authorization"], "Bearer anon-key")
        self.assertEqual(kwargs["timeout"], 3)

    @patch("menu_source.requests.get")
    def test_fetch_active_only_adds_filter(self, get) -> None:
        get.return_value = _response(payload=[])
        self.source.fetch(active_only=True)
        self.assertEqual(get.call_args.kwargs["params"]["is_active"], "eq.true")

    @patch("menu_source.requests.get")
    def test_errors_raise_menu_source_error(self, get) -> None:
        cases = [
            requests.ConnectionError("down"),
            _response(status=401, text="invalid api key"),
            _response(json_error=True),
            _response(payload={"message": "not a list"}),
        ]
        for case in cases:
            with self.subTest(case=case):
                if isinstance(case, Exception):
                    get.side_effect = case
                else:
                    get.side_effect = None
                    get.return_value = case
                with self.assertRaises(MenuSourceError):
                    self.source.fetch()

    @patch("menu_source.requests.get")
    def test_load_menu_entries_returns_empty_list_on_failure(self, get) -> None:
        get.side_effect = requests.Timeout("slow")
        with self.assertLogs("menu_source", level="ERROR"):
            self.assertEqual(load_menu_entries(source=self.source), [])


class TestSourceSelection(unittest.TestCase):
    def test_supabase_when_configured(self) -> None:
        with patch.object(config, "SUPABASE_URL", "https://x.supabase.co"), \
                patch.object(config, "SUPABASE_ANON_KEY", "k"):
            source = get_menu_source()
        self.assertIsInstance(source, SupabaseMenuSource)
        self.assertEqual(source.base_url, "https://x.supabase.co")

    def test_local_when_key_missing(self) -> None:
        with patch.object(config, "SUPABASE_URL", "https://x.supabase.co"), \
                patch.object(config, "SUPABASE_ANON_KEY", ""):
            self.assertIsInstance(get_menu_source(), LocalMenuSource)


class TestLocalMenuSource(AppTestCase):
    def test_reads_rows_as_entries(self) -> None:
        self.add_item("Travel", display_order=1)
        self.add_item("Hidden", display_order=2, is_active=False)
        self.assertEqual([e.name for e in load_menu_entries()], ["Travel", "Hidden"])
        self.assertEqual([e.name for e in load_menu_entries(active_only=True)], ["Travel"])


if __name__ == "__main__":
    unittest.main()
