# --------------------------------------------------------------------------------
# 메뉴 콘텐츠 읽기: 로컬 DB 또는 Supabase(REST)
# SUPABASE_URL·SUPABASE_ANON_KEY가 설정되어 있으면 원격, 아니면 로컬 DB 사용.
# --------------------------------------------------------------------------------
import logging

import requests

import config
from errors import MenuSourceError
from menu_grouping import MenuEntry, coerce_entries
import menu_service

logger = logging.getLogger(__name__)


class LocalMenuSource:
    """로컬 DB(nav_menu_items)에서 읽기. 앱 컨텍스트 필요."""

    name = "local"

    def fetch(self, active_only=False):
        rows = menu_service.get_nav_menu_items() if active_only else menu_service.get_all_nav_menu_items()
        return [MenuEntry.from_row(r) for r in rows]


class SupabaseMenuSource:
    """Supabase PostgREST로 nav_menu_items 읽기."""

    name = "supabase"

    def __init__(self, base_url, api_key, table="nav_menu_items", timeout=10):
        self.base_url = (base_url or "").rstrip("/")
        self.api_key = api_key
        self.table = table
        self.timeout = timeout

    def _headers(self):
        return {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
            "Accept": "application/json",
        }

    def fetch(self, active_only=False):
        url = f"{self.base_url}/rest/v1/{self.table}"
        params = {"select": "*", "order": "display_order.asc"}
        if active_only:
            params["is_active"] = "eq.true"
        try:
            r = requests.get(url, headers=self._headers(), params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise MenuSourceError(f"Supabase 연결 실패: {e}") from e
        if r.status_code != 200:
            raise MenuSourceError(f"Supabase 응답 오류 ({r.status_code}): {r.text[:200]}")
        try:
            data = r.json()
        except ValueError as e:
            raise MenuSourceError("Supabase 응답이 JSON이 아닙니다.") from e
        if not isinstance(data, list):
            raise MenuSourceError("Supabase 응답 형식이 올바르지 않습니다.")
        return coerce_entries(d for d in data if isinstance(d, dict))


def get_menu_source():
    if config.SUPABASE_URL and config.SUPABASE_ANON_KEY:
        return SupabaseMenuSource(
            config.SUPABASE_URL,
            config.SUPABASE_ANON_KEY,
            table=config.SUPABASE_MENU_TABLE,
            timeout=config.SUPABASE_TIMEOUT,
        )
    return LocalMenuSource()


def load_menu_entries(active_only=False, source=None):
    """
    메뉴 목록 조회. 원격 조회 실패 시 로그만 남기고 빈 목록 반환
    (빈 목록이면 그룹도 빈 목록이 되어 메뉴 영역만 비어 보임).
    """
    source = source or get_menu_source()
    try:
        return source.fetch(active_only=active_only)
    except MenuSourceError as e:
        logger.error("menu load failed (%s): %s", source.name, e)
        return []
