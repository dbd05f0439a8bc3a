# --------------------------------------------------------------------------------
# 전체메뉴 화면 (모바일: 아코디언 / PC: 4단 그리드)
# --------------------------------------------------------------------------------
from urllib.parse import quote

from flask import render_template_string

from menu_grouping import coerce_entries, find_parent_entry

VARIANTS = ('mobile', 'desktop')


def product_href(item_name):
    """2차 메뉴 클릭 시 이동할 상품 목록 주소"""
    return '/products?category=' + quote(item_name or '', safe='')


def serialize_groups(groups, entries):
    """
    그룹 목록 → JSON용 dict 목록.
    하위 메뉴가 없는 그룹은 같은 이름의 1차 메뉴 link를 fallback_link로 넣는다 (없으면 None).
    """
    entries = coerce_entries(entries)
    out = []
    for g in groups:
        fallback = None
        if not g.items:
            parent = find_parent_entry(entries, g.name)
            fallback = parent.link if parent and parent.link else None
        out.append({
            'name': g.name,
            'display_order': g.display_order,
            'items': [
                {'id': i.id, 'name': i.name, 'link': i.link, 'href': product_href(i.name)}
                for i in g.items
            ],
            'fallback_link': fallback,
        })
    return out


def format_menu_tree(groups, entries):
    """점검용 텍스트 트리. 부모 없는 자동 그룹은 (자동) 표시, 빈 그룹은 바로가기 링크 표시."""
    entries = coerce_entries(entries)
    lines = []
    for g in groups:
        parent = find_parent_entry(entries, g.name)
        lines.append(f"[{g.display_order}] {g.name}" + ("" if parent else " (자동)"))
        if not g.items:
            lines.append("    → 바로가기 " + (parent.link if parent and parent.link else "(링크 없음)"))
        for i in g.items:
            lines.append(f"    - [{i.display_order}] {i.name}")
    return lines


FULL_MENU_HTML = """
<div id="full-menu" data-variant="{{ variant }}" class="{% if variant == 'mobile' %}fixed inset-0 z-50{% else %}w-full z-50{% endif %}">
  {% if variant == 'mobile' %}
  <div class="absolute inset-0 bg-black/50" onclick="document.getElementById('full-menu').remove()"></div>
  {% endif %}
  <div class="bg-white flex flex-col h-full {% if variant == 'mobile' %}absolute right-0 w-[85%] max-w-sm shadow-2xl{% else %}w-full border-t border-slate-200 shadow-xl max-h-[70vh]{% endif %}">
    {% if variant == 'mobile' %}
    <div class="flex justify-between items-center p-5 border-b border-gray-100 bg-white sticky top-0 z-10">
      <img src="/static/logo.png" alt="행사어때" class="h-5 object-contain">
    </div>
    <div class="px-5 py-6 bg-slate-50">
      <div class="bg-white p-6 rounded-2xl shadow-sm border border-gray-100 text-center">
        {% if current_user and current_user.is_authenticated %}
        <h3 class="font-bold text-lg text-slate-800 mb-1">{{ current_user.name or '사용자' }}님, 안녕하세요!</h3>
        <p class="text-sm text-slate-500 mb-4">행사어때와 함께 멋진 행사를 기획해보세요.</p>
        <a href="/logout" class="block py-3 rounded-xl border border-slate-200 text-slate-500 font-bold text-sm">로그아웃</a>
        {% else %}
        <h3 class="font-bold text-lg text-slate-800 mb-1">환영합니다!</h3>
        <p class="text-sm text-slate-500 mb-4">로그인하고 더 많은 혜택을 받아보세요.</p>
        <a href="/login" class="block py-3 rounded-xl bg-[#FF5B60] text-white font-bold text-sm">로그인</a>
        {% endif %}
      </div>
    </div>
    {% endif %}
    <div class="flex-1 overflow-y-auto {% if variant == 'desktop' %}p-8{% endif %}">
      <div class="{% if variant == 'mobile' %}space-y-2 pb-10 px-5{% else %}grid grid-cols-1 md:grid-cols-4 gap-8{% endif %}">
        {% for g in groups %}
        <div class="menu-group {% if variant == 'mobile' %}border-b border-gray-50 last:border-0{% endif %}" data-group="{{ g.name }}">
          {% if variant == 'mobile' %}
          <button type="button" class="menu-toggle w-full flex items-center justify-between py-4 text-left" onclick="this.nextElementSibling.classList.toggle('hidden')">
            <span class="text-base font-bold text-slate-800">{{ g.name }}</span>
            <i class="fas fa-chevron-right text-slate-400"></i>
          </button>
          {% else %}
          <h3 class="text-lg font-bold text-slate-900 border-b border-slate-200 pb-2 mb-4">{{ g.name }}</h3>
          {% endif %}
          <div class="{% if variant == 'mobile' %}hidden pb-4{% else %}block{% endif %}">
            <ul class="{% if variant == 'mobile' %}bg-slate-50/50 rounded-xl p-3 space-y-1{% else %}space-y-3{% endif %}">
              {% for item in g['items'] %}
              <li><a href="{{ item.href }}" class="block text-sm text-slate-600 font-medium hover:text-[#FF5B60]">{{ item.name }}</a></li>
              {% else %}
              {% if g.fallback_link %}
              <li><a href="{{ g.fallback_link }}" class="menu-fallback block p-3 text-sm text-slate-600 font-medium hover:text-[#FF5B60]">바로가기</a></li>
              {% endif %}
              {% endfor %}
            </ul>
          </div>
        </div>
        {% endfor %}
      </div>
    </div>
  </div>
</div>
"""


def render_full_menu(groups, entries, variant='mobile'):
    """전체메뉴 HTML 조각. 알 수 없는 variant는 mobile로 처리."""
    if variant not in VARIANTS:
        variant = 'mobile'
    return render_template_string(FULL_MENU_HTML, groups=serialize_groups(groups, entries), variant=variant)


PAGE_HTML = """<!DOCTYPE html>
<html lang="ko">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>{{ title }} | 행사어때</title>
<script src="https://cdn.tailwindcss.com"></script>
<link rel="stylesheet" href="https://cdnjs.cloudflare.com/ajax/libs/font-awesome/6.5.1/css/all.min.css">
</head>
<body class="bg-white text-slate-800">
{% with messages = get_flashed_messages() %}{% if messages %}
<div class="max-w-xl mx-auto mt-6 px-4">{% for m in messages %}<p class="flash bg-red-50 text-red-600 text-sm font-bold rounded-xl p-3 mb-2">{{ m }}</p>{% endfor %}</div>
{% endif %}{% endwith %}
{{ body|safe }}
</body>
</html>"""


def render_page(title, body):
    """공통 페이지 틀 (flash 메시지 포함)"""
    return render_template_string(PAGE_HTML, title=title, body=body)
