# -------------------------------------------------------------------------------
# 관리자(admin) 전체메뉴 관리 라우트
# app.py의 create_app()에서 register_admin_routes(app) 호출로 등록
# -------------------------------------------------------------------------------
import logging
from functools import wraps

from flask import Blueprint, jsonify, render_template_string, request
from flask_login import current_user, login_required

from errors import MenuItemNotFound, MenuServiceError, MenuValidationError
from menu_grouping import MenuEntry, build_admin_groups, children_of
from menu_render import render_page
import menu_service

logger = logging.getLogger(__name__)

admin_bp = Blueprint('admin', __name__, url_prefix='/admin/nav-menu')


def admin_required(view):
    """로그인 + 관리자 권한. 권한 없으면 403 JSON."""
    @wraps(view)
    @login_required
    def wrapper(*args, **kwargs):
        if not getattr(current_user, 'is_admin', False):
            return jsonify({"success": False, "message": "권한이 없습니다."}), 403
        return view(*args, **kwargs)
    return wrapper


@admin_bp.errorhandler(MenuValidationError)
def _on_validation_error(e):
    return jsonify({"success": False, "message": str(e)}), 400


@admin_bp.errorhandler(MenuItemNotFound)
def _on_not_found(e):
    return jsonify({"success": False, "message": str(e)}), 404


@admin_bp.errorhandler(MenuServiceError)
def _on_service_error(e):
    return jsonify({"success": False, "message": str(e)}), 500


def _request_data():
    """JSON 객체 또는 form. JSON이 객체가 아니면 400."""
    data = request.get_json(silent=True)
    if data is None:
        return request.form
    if not isinstance(data, dict):
        raise MenuValidationError("요청 형식이 올바르지 않습니다.")
    return data


def _entries():
    return [MenuEntry.from_row(r) for r in menu_service.get_all_nav_menu_items()]


ADMIN_NAV_MENU_HTML = """
<div class="max-w-6xl mx-auto py-10 px-6">
  <div class="flex items-center justify-between mb-6">
    <div>
      <h2 class="text-2xl font-bold text-slate-800">전체 메뉴 관리</h2>
      <p class="text-slate-500 text-sm mt-1">웹사이트 전체 메뉴(사이트맵) 구조를 관리합니다.</p>
    </div>
    <a href="/logout" class="text-slate-300 font-bold hover:text-red-500 text-sm">로그아웃</a>
  </div>
  <div class="flex gap-6">
    <div class="w-1/3 bg-white rounded-xl shadow-md border border-slate-200">
      <div class="p-4 border-b bg-slate-50 flex justify-between items-center rounded-t-xl">
        <h3 class="font-bold">1차 메뉴 (그룹)</h3>
        <button type="button" onclick="openForm({})" class="text-xs bg-[#FF5B60] text-white px-2 py-1.5 rounded">+ 그룹 추가</button>
      </div>
      <div class="p-2 space-y-1">
        {% for g in groups %}
        <div class="admin-group p-3 rounded-lg flex items-center justify-between border {% if selected == g.name %}bg-blue-50 border-blue-200{% else %}border-transparent{% endif %}" data-type="{{ 'implicit' if g.implicit else 'real' }}">
          <a href="?group={{ g.name|urlencode }}" class="flex items-center gap-3">
            {% if g.implicit %}
            <span class="text-[10px] font-bold px-1 py-0.5 bg-red-50 text-red-400 rounded border border-red-100">자동</span>
            {% else %}
            <span class="text-xs font-bold w-5 h-5 flex items-center justify-center bg-slate-100 rounded text-slate-500">{{ g.display_order }}</span>
            {% endif %}
            <span class="font-medium text-slate-700">{{ g.name }}</span>
            {% if not g.implicit and not g.is_active %}<span class="text-[10px] bg-slate-100 text-slate-400 px-1.5 py-0.5 rounded">숨김</span>{% endif %}
          </a>
          <div class="flex items-center gap-2 text-xs">
            {% if g.implicit %}
            <button type="button" onclick="post('/admin/nav-menu/delete-group', {category: {{ g.name|tojson }}})" class="text-red-400">삭제</button>
            {% else %}
            <button type="button" onclick="post('/admin/nav-menu/toggle/{{ g.id }}', {})" class="text-slate-400">{{ '숨기기' if g.is_active else '보이기' }}</button>
            <button type="button" onclick="post('/admin/nav-menu/delete/{{ g.id }}', {})" class="text-red-400">삭제</button>
            {% endif %}
          </div>
        </div>
        {% endfor %}
      </div>
    </div>
    <div class="flex-1 bg-white rounded-xl shadow-md border border-slate-200">
      <div class="p-4 border-b bg-slate-50 flex justify-between items-center rounded-t-xl">
        <h3 class="font-bold">{{ selected or '그룹을 선택하세요' }}</h3>
        {% if selected %}
        <button type="button" onclick="openForm({category: {{ selected|tojson }}})" class="text-xs bg-slate-800 text-white px-2 py-1.5 rounded">+ 하위 메뉴 추가</button>
        {% endif %}
      </div>
      <ul class="p-2 space-y-1">
        {% for c in children %}
        <li class="admin-child p-3 rounded-lg flex items-center justify-between border border-slate-100">
          <span class="text-sm"><b class="text-slate-400 mr-2">{{ c.display_order }}</b>{{ c.name }} <span class="text-slate-400 text-xs">{{ c.link }}</span>{% if not c.is_active %} <span class="text-[10px] bg-slate-100 text-slate-400 px-1.5 py-0.5 rounded">숨김</span>{% endif %}</span>
          <span class="flex gap-2 text-xs">
            <button type="button" onclick='openForm({{ c.to_dict()|tojson }})' class="text-blue-500">수정</button>
            <button type="button" onclick="post('/admin/nav-menu/toggle/{{ c.id }}', {})" class="text-slate-400">{{ '숨기기' if c.is_active else '보이기' }}</button>
            <button type="button" onclick="post('/admin/nav-menu/delete/{{ c.id }}', {})" class="text-red-400">삭제</button>
          </span>
        </li>
        {% endfor %}
      </ul>
    </div>
  </div>
</div>
<script>
function post(url, body) {
  if (url.indexOf('/delete') >= 0 && !confirm('정말 삭제하시겠습니까? 하위 메뉴가 있다면 함께 연결이 끊길 수 있습니다.')) return;
  fetch(url, {method: 'POST', headers: {'Content-Type': 'application/json'}, body: JSON.stringify(body)})
    .then(function(r){ return r.json(); })
    .then(function(d){ if (!d.success) { alert(d.message || '실패'); } location.reload(); });
}
function openForm(item) {
  var name = prompt('메뉴 이름', item.name || '');
  if (name === null) return;
  var link = prompt('링크', item.link || (item.category ? '/products' : '#'));
  if (link === null) return;
  var order = prompt('순서', item.display_order === undefined ? '' : item.display_order);
  if (order === null) return;
  var body = {name: name, link: link, display_order: order, category: item.category || ''};
  if (item.id) body.id = item.id;
  post('/admin/nav-menu/save', body);
}
</script>
"""


@admin_bp.route('', methods=['GET'])
@admin_required
def admin_nav_menu():
    """전체 메뉴 관리 화면: 왼쪽 1차 메뉴(자동 그룹 포함), 오른쪽 선택 그룹의 하위 메뉴"""
    entries = _entries()
    selected = (request.args.get('group') or '').strip()
    body = render_template_string(
        ADMIN_NAV_MENU_HTML,
        groups=build_admin_groups(entries),
        children=children_of(entries, selected) if selected else [],
        selected=selected,
    )
    return render_page("전체 메뉴 관리", body)


@admin_bp.route('/groups', methods=['GET'])
@admin_required
def admin_nav_menu_groups():
    return jsonify({"success": True, "groups": [g.to_dict() for g in build_admin_groups(_entries())]})


@admin_bp.route('/groups/<path:name>/children', methods=['GET'])
@admin_required
def admin_nav_menu_children(name):
    return jsonify({"success": True, "items": [c.to_dict() for c in children_of(_entries(), name)]})


@admin_bp.route('/save', methods=['POST'])
@admin_required
def admin_nav_menu_save():
    """메뉴 저장. id 있으면 수정, 없으면 신규."""
    data = _request_data()
    raw_id = data.get('id')
    try:
        item_id = int(raw_id) if raw_id not in (None, '') else None
    except (TypeError, ValueError):
        raise MenuValidationError("잘못된 메뉴 id입니다.")
    if item_id is not None:
        fields = {k: data.get(k) for k in ('name', 'link', 'category', 'display_order', 'is_active') if k in data}
        item = menu_service.update_nav_menu_item(item_id, fields)
    else:
        item = menu_service.add_nav_menu_item(data)
    logger.info("admin %s saved nav menu id=%s", current_user.id, item.id)
    return jsonify({"success": True, "message": "저장되었습니다.", "id": item.id, "item": item.to_dict()})


@admin_bp.route('/delete/<int:item_id>', methods=['POST'])
@admin_required
def admin_nav_menu_delete(item_id):
    menu_service.delete_nav_menu_item(item_id)
    return jsonify({"success": True, "message": "삭제되었습니다."})


@admin_bp.route('/delete-group', methods=['POST'])
@admin_required
def admin_nav_menu_delete_group():
    """자동 그룹(부모 없는 카테고리) 삭제 = 그 카테고리의 하위 메뉴 전부 삭제"""
    count = menu_service.delete_implicit_group(_request_data().get('category'))
    return jsonify({"success": True, "message": f"{count}개 메뉴가 삭제되었습니다.", "deleted": count})


@admin_bp.route('/toggle/<int:item_id>', methods=['POST'])
@admin_required
def admin_nav_menu_toggle(item_id):
    item = menu_service.toggle_nav_menu_item(item_id)
    return jsonify({"success": True, "is_active": bool(item.is_active)})


def register_admin_routes(app):
    """create_app()에서 호출. 이미 등록된 경우 중복 등록 방지."""
    if 'admin' in app.blueprints:
        return
    app.register_blueprint(admin_bp)
