# --------------------------------------------------------------------------------
# 전체메뉴 그룹핑 (1차 메뉴 → 2차 메뉴)
# 평면 메뉴 목록을 최대 2단계(그룹 → 하위 항목) 트리로 변환. 입력은 변경하지 않음.
# --------------------------------------------------------------------------------
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from functools import lru_cache
from operator import attrgetter
from typing import Any, Iterable, Optional

from config import MENU_CACHE_SIZE

# 부모가 아예 없는 카테고리(고아)로 만든 자동 그룹의 정렬값.
# 명시적으로 순서가 지정된 모든 그룹 뒤에 오도록 하는 정책값이다.
ORPHAN_SORT_ORDER = 9999

IMPLICIT_GROUP_PREFIX = "implicit-"

_by_order = attrgetter("display_order")


def _to_order(value) -> int:
    """display_order 정규화. 숫자로 읽을 수 없으면 0."""
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        pass
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return 0


def _to_category(value) -> Optional[str]:
    return str(value) if value else None


def _to_bool(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() not in ("", "0", "false", "no", "off")
    return bool(value)


@dataclass(frozen=True)
class MenuEntry:
    """메뉴 한 줄. category가 비어 있으면 1차 메뉴(그룹 후보)."""

    id: Any
    name: str
    link: str = ""
    category: Optional[str] = None
    display_order: int = 0
    is_active: bool = True

    @property
    def is_parent(self) -> bool:
        return not self.category

    @classmethod
    def from_dict(cls, d: Mapping) -> "MenuEntry":
        return cls(
            id=d.get("id"),
            name=str(d.get("name") or ""),
            link=str(d.get("link") or ""),
            category=_to_category(d.get("category")),
            display_order=_to_order(d.get("display_order")),
            is_active=_to_bool(d.get("is_active")),
        )

    @classmethod
    def from_row(cls, row) -> "MenuEntry":
        """ORM 객체 등 속성으로 값을 가진 레코드."""
        return cls(
            id=getattr(row, "id", None),
            name=str(getattr(row, "name", "") or ""),
            link=str(getattr(row, "link", "") or ""),
            category=_to_category(getattr(row, "category", None)),
            display_order=_to_order(getattr(row, "display_order", 0)),
            is_active=_to_bool(getattr(row, "is_active", True)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "link": self.link,
            "category": self.category,
            "display_order": self.display_order,
            "is_active": self.is_active,
        }


@dataclass
class MenuGroup:
    name: str
    items: list[MenuEntry] = field(default_factory=list)
    display_order: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "items": [i.to_dict() for i in self.items],
            "display_order": self.display_order,
        }


@dataclass(frozen=True)
class AdminGroup:
    """관리자 화면의 1차 메뉴. implicit=True면 부모 없이 하위 메뉴만 있는 자동 그룹."""

    id: Any
    name: str
    display_order: int
    is_active: bool
    implicit: bool = False
    link: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": "implicit" if self.implicit else "real",
            "name": self.name,
            "display_order": self.display_order,
            "is_active": self.is_active,
            "link": self.link,
        }


def coerce_entry(obj) -> MenuEntry:
    if isinstance(obj, MenuEntry):
        return obj
    if isinstance(obj, Mapping):
        return MenuEntry.from_dict(obj)
    return MenuEntry.from_row(obj)


def coerce_entries(entries: Optional[Iterable]) -> list[MenuEntry]:
    return [coerce_entry(e) for e in (entries or ()) if e is not None]


def group_menu_entries(entries: Optional[Iterable]) -> list[MenuGroup]:
    """
    평면 메뉴 목록 → 정렬된 그룹 목록.

    1) category 없는 항목 = 정의된 부모. 활성/비활성 모두 이름을 기억한다.
    2) 활성 부모만 그룹으로 만든다. 비활성 부모는 그룹째 숨김.
    3) 활성 하위 항목을 입력 순서대로 붙인다.
       - 활성 부모 그룹이 있으면 그 그룹에 추가
       - 같은 이름의 부모가 아예 없으면(고아) 카테고리 이름으로 자동 그룹 생성
       - 부모는 있으나 비활성이면 버림 (자동 그룹으로 올리지 않음)
    4) 그룹·항목 모두 display_order 오름차순 안정 정렬.

    예외를 던지지 않는다. 하위 항목이 없는 활성 부모 그룹도 items=[]로 반환한다.
    """
    entries = coerce_entries(entries)

    parents = [e for e in entries if e.is_parent]
    defined_parent_names = {p.name for p in parents}

    # dict는 삽입 순서를 유지하므로 동일 정렬값의 순서가 처음 본 순서로 고정된다.
    groups: dict[str, MenuGroup] = {}
    for p in parents:
        # 같은 이름의 활성 부모가 여럿이면 위치는 처음 것, 정렬값은 마지막 것을 따른다.
        if p.is_active:
            groups[p.name] = MenuGroup(name=p.name, items=[], display_order=p.display_order)

    for child in entries:
        if child.is_parent or not child.is_active:
            continue
        group = groups.get(child.category)
        if group is None:
            if child.category in defined_parent_names:
                continue
            group = MenuGroup(name=child.category, items=[], display_order=ORPHAN_SORT_ORDER)
            groups[child.category] = group
        group.items.append(child)

    out = sorted(groups.values(), key=_by_order)
    for g in out:
        g.items.sort(key=_by_order)
    return out


@lru_cache(maxsize=MENU_CACHE_SIZE)
def _grouped_cached(entries: tuple) -> tuple:
    return tuple(group_menu_entries(entries))


def grouped_menu(entries: Optional[Iterable]) -> list[MenuGroup]:
    """group_menu_entries의 캐시 버전. 같은 목록이면 다시 계산하지 않는다."""
    key = tuple(coerce_entries(entries))
    try:
        cached = _grouped_cached(key)
    except TypeError:
        # id가 해시 불가능한 값이면 캐시 없이 계산
        cached = group_menu_entries(key)
    return [MenuGroup(name=g.name, items=list(g.items), display_order=g.display_order) for g in cached]


def clear_grouping_cache() -> None:
    _grouped_cached.cache_clear()


def grouping_cache_info():
    return _grouped_cached.cache_info()


def find_parent_entry(entries: Optional[Iterable], name: str) -> Optional[MenuEntry]:
    """빈 그룹의 '바로가기' 링크용: 이름이 같은 첫 번째 1차 메뉴."""
    for e in coerce_entries(entries):
        if e.is_parent and e.name == name:
            return e
    return None


def children_of(entries: Optional[Iterable], group_name: str) -> list[MenuEntry]:
    """그룹에 속한 하위 메뉴 전체 (비활성 포함), display_order 순."""
    return sorted(
        (e for e in coerce_entries(entries) if not e.is_parent and e.category == group_name),
        key=_by_order,
    )


def build_admin_groups(entries: Optional[Iterable]) -> list[AdminGroup]:
    """관리자 1차 메뉴 목록: 실제 부모(비활성 포함) + 부모 없는 카테고리의 자동 그룹."""
    entries = coerce_entries(entries)
    parents = sorted((e for e in entries if e.is_parent), key=_by_order)
    parent_names = {p.name for p in parents}

    out = [
        AdminGroup(
            id=p.id,
            name=p.name,
            display_order=p.display_order,
            is_active=p.is_active,
            implicit=False,
            link=p.link,
        )
        for p in parents
    ]

    seen = set()
    for e in entries:
        cat = e.category
        if e.is_parent or cat in parent_names or cat in seen:
            continue
        seen.add(cat)
        out.append(
            AdminGroup(
                id=IMPLICIT_GROUP_PREFIX + cat,
                name=cat,
                display_order=ORPHAN_SORT_ORDER,
                is_active=True,
                implicit=True,
            )
        )
    return out
