# --------------------------------------------------------------------------------
# 설정·상수 (환경변수 기반)
# --------------------------------------------------------------------------------
import os

from dotenv import load_dotenv

load_dotenv()

# Flask 세션
FLASK_SECRET_KEY = os.getenv("FLASK_SECRET_KEY", "default_fallback_key")
SESSION_MINUTES = int(os.getenv("SESSION_MINUTES", "30").strip() or "30")

# 로컬 DB (메뉴 콘텐츠 저장소)
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///haengsa_menu.db").strip()

# Supabase (원격 콘텐츠). URL·키가 모두 있으면 원격에서 메뉴를 읽음
SUPABASE_URL = os.getenv("SUPABASE_URL", "").strip().rstrip("/")
SUPABASE_ANON_KEY = os.getenv("SUPABASE_ANON_KEY", "").strip()
SUPABASE_TIMEOUT = float(os.getenv("SUPABASE_TIMEOUT", "10").strip() or "10")
SUPABASE_MENU_TABLE = os.getenv("SUPABASE_MENU_TABLE", "nav_menu_items").strip() or "nav_menu_items"

# 최초 관리자 계정 (비워두면 생성하지 않음)
ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "").strip()
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "").strip()

# 로그
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO"

# 메뉴 그룹 캐시 크기 (입력 목록별 결과 보관 개수)
MENU_CACHE_SIZE = int(os.getenv("MENU_CACHE_SIZE", "32").strip() or "32")
