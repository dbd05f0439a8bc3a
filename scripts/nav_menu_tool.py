# --------------------------------------------------------------------------------
# 전체메뉴 점검·동기화 (Flask 앱 컨텍스트 필요)
# - 트리 출력: python scripts/nav_menu_tool.py tree [--source=local|supabase]
# - 동기화:   python scripts/nav_menu_tool.py sync [--dry-run]   (Supabase → 로컬 DB 전체 교체)
# --------------------------------------------------------------------------------
import os
import sys
import argparse

# 프로젝트 루트를 path에 추가
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


def main(argv=None):
    parser = argparse.ArgumentParser(description="전체메뉴 트리 출력 / Supabase 동기화")
    parser.add_argument("command", choices=("tree", "sync"))
    parser.add_argument("--source", choices=("local", "supabase"), default=None, help="tree 조회 대상 (기본: 설정에 따름)")
    parser.add_argument("--dry-run", action="store_true", help="sync 시 저장하지 않고 건수만 출력")
    args = parser.parse_args(argv)

    import config
    from app import app, init_db
    from errors import MenuSourceError
    from menu_grouping import group_menu_entries
    from menu_render import format_menu_tree
    from menu_service import replace_all_nav_menu_items
    from menu_source import LocalMenuSource, SupabaseMenuSource, get_menu_source

    def supabase():
        if not (config.SUPABASE_URL and config.SUPABASE_ANON_KEY):
            print("SUPABASE_URL, SUPABASE_ANON_KEY 환경변수를 설정하세요.")
            sys.exit(2)
        return SupabaseMenuSource(config.SUPABASE_URL, config.SUPABASE_ANON_KEY,
                                  table=config.SUPABASE_MENU_TABLE, timeout=config.SUPABASE_TIMEOUT)

    init_db(app)
    with app.app_context():
        if args.command == "tree":
            if args.source == "supabase":
                source = supabase()
            elif args.source == "local":
                source = LocalMenuSource()
            else:
                source = get_menu_source()
            try:
                entries = source.fetch()
            except MenuSourceError as e:
                print(f"메뉴 조회 실패: {e}")
                return 1
            for line in format_menu_tree(group_menu_entries(entries), entries):
                print(line)
            return 0

        try:
            entries = supabase().fetch()
        except MenuSourceError as e:
            print(f"메뉴 조회 실패: {e}")
            return 1
        if args.dry_run:
            print(f"[dry-run] Supabase 메뉴 {len(entries)}건 (저장 안 함)")
            return 0
        saved = replace_all_nav_menu_items(entries)
        print(f"동기화 완료: {saved}건 저장")
        return 0


if __name__ == "__main__":
    sys.exit(main())
