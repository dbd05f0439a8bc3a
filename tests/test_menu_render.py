from __future__ import annotations

import unittest

from menu_grouping import MenuEntry, group_menu_entries
from menu_render import format_menu_tree, product_href, render_full_menu, serialize_groups
from tests.support import AppTestCase


def entries():
    return [
        MenuEntry(id=1, name="회사소개", link="/company", display_order=1),
        MenuEntry(id=2, name="행사 상품", link="#", display_order=2),
        MenuEntry(id=3, name="기업 행사", link="/products", category="행사 상품", display_order=1),
        MenuEntry(id=4, name="고객센터", link="", display_order=3),
        MenuEntry(id=5, name="고아 메뉴", link="/products", category="없는 그룹", display_order=1),
    ]


class TestSerializeGroups(unittest.TestCase):
    def test_fallback_link_only_for_empty_groups(self) -> None:
        data = serialize_groups(group_menu_entries(entries()), entries())
        by_name = {g["name"]: g for g in data}

        self.assertEqual(by_name["회사소개"]["items"], [])
        self.assertEqual(by_name["회사소개"]["fallback_link"], "/company")
        self.assertIsNone(by_name["행사 상품"]["fallback_link"])
        # Parent without a link gets no fallback.
        self.assertIsNone(by_name["고객센터"]["fallback_link"])
        self.assertIsNone(by_name["없는 그룹"]["fallback_link"])
        self.assertEqual([g["name"] for g in data], ["회사소개", "행사 상품", "고객센터", "없는 그룹"])

    def test_item_href_points_to_product_list(self) -> None:
        data = serialize_groups(group_menu_entries(entries()), entries())
        item = data[1]["items"][0]
        self.assertEqual(item["name"], "기업 행사")
        self.assertEqual(item["href"], product_href("기업 행사"))
        self.assertEqual(product_href("a b&c"), "/products?category=a%20b%26c")


class TestFormatMenuTree(unittest.TestCase):
    def test_tree_lines(self) -> None:
        lines = format_menu_tree(group_menu_entries(entries()), entries())
        self.assertEqual(lines, [
            "[1] 회사소개",
            "    → 바로가기 /company",
            "[2] 행사 상품",
            "    - [1] 기업 행사",
            "[3] 고객센터",
            "    → 바로가기 (링크 없음)",
            "[9999] 없는 그룹 (자동)",
            "    - [1] 고아 메뉴",
        ])


class TestRenderFullMenu(AppTestCase):
    def _render(self, variant):
        with self.app.test_request_context("/menu"):
            return render_full_menu(group_menu_entries(entries()), entries(), variant=variant)

    def test_mobile_renders_accordion(self) -> None:
        html = self._render("mobile")
        self.assertIn('data-variant="mobile"', html)
        self.assertEqual(html.count('class="menu-toggle'), 4)
        self.assertIn('href="/company"', html)
        self.assertIn("바로가기", html)
        self.assertIn("로그인", html)

    def test_desktop_renders_grid(self) -> None:
        html = self._render("desktop")
        self.assertIn('data-variant="desktop"', html)
        self.assertIn("md:grid-cols-4", html)
        self.assertNotIn("menu-toggle", html)
        self.assertEqual(html.count("menu-fallback"), 1)

    def test_unknown_variant_falls_back_to_mobile(self) -> None:
        self.assertIn('data-variant="mobile"', self._render("tablet"))


if __name__ == "__main__":
    unittest.main()
