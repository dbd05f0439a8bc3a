# --------------------------------------------------------------------------------
# 전체메뉴 콘텐츠 저장소 (조회·추가·수정·삭제)
# 관리자 화면과 공개 API가 함께 사용. 모든 쓰기는 커밋하고 실패 시 롤백.
# --------------------------------------------------------------------------------
import logging

from sqlalchemy.exc import SQLAlchemyError

from errors import MenuItemNotFound, MenuServiceError, MenuValidationError
from models import NavMenuItem, db

logger = logging.getLogger(__name__)

NAME_MAX_LENGTH = 100
PARENT_DEFAULT_LINK = '#'
CHILD_DEFAULT_LINK = '/products'

_TRUE_VALUES = ('1', 'true', 'yes', 'on')
_FALSE_VALUES = ('0', 'false', 'no', 'off', '')


def _ordered(query):
    return query.order_by(NavMenuItem.display_order.asc(), NavMenuItem.id.asc())


def _parent_filter():
    return db.or_(NavMenuItem.category.is_(None), NavMenuItem.category == '')


def _commit(action):
    try:
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.exception("nav menu %s failed", action)
        raise MenuServiceError(f"메뉴 {action} 중 오류가 발생했습니다.") from e


def _get_or_raise(item_id):
    item = db.session.get(NavMenuItem, item_id)
    if item is None:
        raise MenuItemNotFound(item_id)
    return item


def _parse_bool(value):
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    s = str(value if value is not None else '').strip().lower()
    if s in _TRUE_VALUES:
        return True
    if s in _FALSE_VALUES:
        return False
    raise MenuValidationError("노출 여부 값이 올바르지 않습니다.")


def _parse_order(value):
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    if isinstance(value, bool):
        raise MenuValidationError("순서는 숫자로 입력해 주세요.")
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        raise MenuValidationError("순서는 숫자로 입력해 주세요.")


def _text(value, label):
    if value is None:
        return ''
    if not isinstance(value, str):
        raise MenuValidationError(f"{label} 값은 문자열로 입력해 주세요.")
    return value.strip()


def _clean(data, partial=False):
    """요청 값(dict 또는 form) → 컬럼 값. partial이면 들어온 키만 처리."""
    out = {}
    if not partial or 'name' in data:
        name = _text(data.get('name'), "메뉴 이름")
        if not name:
            raise MenuValidationError("메뉴 이름을 입력해 주세요.")
        if len(name) > NAME_MAX_LENGTH:
            raise MenuValidationError(f"메뉴 이름은 {NAME_MAX_LENGTH}자 이내로 입력해 주세요.")
        out['name'] = name
    if 'category' in data:
        out['category'] = _text(data.get('category'), "상위 메뉴") or None
    if 'link' in data:
        out['link'] = _text(data.get('link'), "링크")
    if 'display_order' in data:
        out['display_order'] = _parse_order(data.get('display_order'))
    if 'is_active' in data:
        out['is_active'] = _parse_bool(data.get('is_active'))
    return out


def _check_self_parent(name, category):
    if category and category == name:
        raise MenuValidationError("자기 자신을 상위 메뉴로 지정할 수 없습니다.")


def _default_link(category):
    return CHILD_DEFAULT_LINK if category else PARENT_DEFAULT_LINK


def get_all_nav_menu_items():
    """전체 메뉴 (비활성 포함), display_order 순"""
    return _ordered(NavMenuItem.query).all()


def get_nav_menu_items():
    """노출 중인 메뉴만"""
    return _ordered(NavMenuItem.query.filter(NavMenuItem.is_active.is_(True))).all()


def next_display_order(category=None):
    """새 항목의 기본 순서 = 같은 단계 형제 수 (1차 메뉴면 1차 메뉴 개수)."""
    q = NavMenuItem.query
    q = q.filter(NavMenuItem.category == category) if category else q.filter(_parent_filter())
    return q.count()


def add_nav_menu_item(data):
    fields = _clean(data)
    category = fields.get('category')
    _check_self_parent(fields['name'], category)
    if fields.get('display_order') is None:
        fields['display_order'] = next_display_order(category)
    if not fields.get('link'):
        fields['link'] = _default_link(category)
    fields.setdefault('is_active', True)

    item = NavMenuItem(**fields)
    db.session.add(item)
    _commit("추가")
    logger.info("nav menu added id=%s name=%r category=%r", item.id, item.name, item.category)
    return item


def update_nav_menu_item(item_id, data):
    """
    부분 수정. 1차 메뉴 이름이 바뀌면 그 이름을 category로 가진 하위 메뉴도 새 이름으로 옮긴다
    (이름으로 연결되므로 옮기지 않으면 하위 메뉴가 자동 그룹으로 떨어져 나감).
    """
    item = _get_or_raise(item_id)
    fields = _clean(data, partial=True)

    new_name = fields.get('name', item.name)
    new_category = fields['category'] if 'category' in fields else item.category
    _check_self_parent(new_name, new_category)
    if 'display_order' in fields and fields['display_order'] is None:
        del fields['display_order']
    if 'link' in fields and not fields['link']:
        fields['link'] = _default_link(new_category)

    old_name = item.name
    was_parent = not item.category
    for key, value in fields.items():
        setattr(item, key, value)

    moved = 0
    if was_parent and not new_category and new_name != old_name:
        moved = NavMenuItem.query.filter(
            NavMenuItem.category == old_name,
            NavMenuItem.id != item.id,
        ).update({NavMenuItem.category: new_name})
    _commit("수정")
    if moved:
        logger.info("nav menu group renamed %r -> %r, %d children moved", old_name, new_name, moved)
    return item


def delete_nav_menu_item(item_id):
    """항목 1건 삭제. 1차 메뉴를 지워도 하위 메뉴는 남아 자동 그룹으로 노출된다."""
    item = _get_or_raise(item_id)
    db.session.delete(item)
    _commit("삭제")
    logger.info("nav menu deleted id=%s", item_id)


def delete_implicit_group(category):
    """부모 없는 자동 그룹 삭제 = 해당 category를 가진 하위 메뉴 전부 삭제. 삭제 건수 반환."""
    category = _text(category, "그룹")
    if not category:
        raise MenuValidationError("삭제할 그룹을 선택해 주세요.")
    if NavMenuItem.query.filter(_parent_filter(), NavMenuItem.name == category).first():
        raise MenuValidationError("자동 그룹이 아닙니다. 1차 메뉴는 개별 삭제해 주세요.")
    count = NavMenuItem.query.filter(NavMenuItem.category == category).delete()
    _commit("삭제")
    logger.info("nav menu implicit group %r deleted (%d items)", category, count)
    return count


def replace_all_nav_menu_items(entries):
    """
    로컬 메뉴 전체를 주어진 목록으로 교체 (Supabase → 로컬 동기화용). 원격 id는 버리고 새로 발급.
    이름이 비어 있는 항목은 건너뛴다. 저장한 건수 반환.
    """
    saved = 0
    try:
        NavMenuItem.query.delete()
        for e in entries:
            name = (e.name or '').strip()
            if not name:
                continue
            db.session.add(NavMenuItem(
                name=name[:NAME_MAX_LENGTH],
                link=e.link or _default_link(e.category),
                category=e.category,
                display_order=e.display_order,
                is_active=e.is_active,
            ))
            saved += 1
    except SQLAlchemyError as err:
        db.session.rollback()
        logger.exception("nav menu replace failed")
        raise MenuServiceError("메뉴 동기화 중 오류가 발생했습니다.") from err
    _commit("동기화")
    logger.info("nav menu replaced with %d items", saved)
    return saved


def toggle_nav_menu_item(item_id):
    item = _get_or_raise(item_id)
    item.is_active = not item.is_active
    _commit("수정")
    return item
