# --------------------------------------------------------------------------------
# 메뉴 관련 예외
# --------------------------------------------------------------------------------


class MenuError(Exception):
    """메뉴 처리 예외의 공통 부모."""


class MenuValidationError(MenuError, ValueError):
    """관리자 입력값이 올바르지 않음 (400)."""


class MenuItemNotFound(MenuError, LookupError):
    """해당 id의 메뉴 항목이 없음 (404)."""

    def __init__(self, item_id):
        super().__init__(f"메뉴 항목을 찾을 수 없습니다. (id={item_id})")
        self.item_id = item_id


class MenuServiceError(MenuError):
    """DB 저장/삭제 실패 (500)."""


class MenuSourceError(MenuError):
    """원격 콘텐츠(Supabase) 조회 실패."""
