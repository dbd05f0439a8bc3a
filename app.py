import logging
import os
from datetime import timedelta
from urllib.parse import urlparse

from flask import Blueprint, Flask, flash, jsonify, redirect, request, session
from flask_login import LoginManager, login_user, logout_user
from werkzeug.middleware.proxy_fix import ProxyFix
from werkzeug.security import check_password_hash, generate_password_hash

import config
from admin_routes import register_admin_routes
from menu_grouping import grouped_menu
from menu_render import render_full_menu, render_page, serialize_groups
from menu_source import load_menu_entries
from models import User, db

logger = logging.getLogger(__name__)

# --------------------------------------------------------------------------------
# 1. 공개 페이지·API (전체메뉴)
# --------------------------------------------------------------------------------
main_bp = Blueprint('main', __name__)

login_manager = LoginManager()
login_manager.login_view = 'main.login'
login_manager.login_message = "로그인이 필요합니다."


@login_manager.user_loader
def load_user(user_id):
    try:
        return db.session.get(User, int(user_id))
    except (TypeError, ValueError):
        return None


@main_bp.route('/healthz')
def healthz():
    return jsonify({"ok": True})


@main_bp.route('/api/nav-menu')
def api_nav_menu_all():
    """전체 메뉴 항목 (비활성 포함). 화면에서 그룹핑할 때 부모 숨김/고아 판별에 필요."""
    return jsonify([e.to_dict() for e in load_menu_entries()])


@main_bp.route('/api/nav-menu/active')
def api_nav_menu_active():
    return jsonify([e.to_dict() for e in load_menu_entries(active_only=True)])


@main_bp.route('/api/nav-menu/groups')
def api_nav_menu_groups():
    """그룹핑된 전체메뉴. 하위 메뉴가 없는 그룹은 fallback_link(1차 메뉴 link)를 함께 반환."""
    entries = load_menu_entries()
    return jsonify(serialize_groups(grouped_menu(entries), entries))


@main_bp.route('/menu')
def full_menu():
    variant = request.args.get('variant', 'mobile')
    entries = load_menu_entries()
    body = render_full_menu(grouped_menu(entries), entries, variant=variant)
    return render_page("전체메뉴", body)


LOGIN_HTML = """
<div class="max-w-md mx-auto py-20 px-6">
  <h2 class="text-2xl font-black mb-8 text-[#FF5B60]">관리자 로그인</h2>
  <form method="POST" class="bg-white p-8 rounded-3xl shadow-xl space-y-4">
    <input name="email" type="email" placeholder="이메일" class="border border-gray-100 p-4 rounded-2xl w-full text-sm" required>
    <input name="password" type="password" placeholder="비밀번호" class="border border-gray-100 p-4 rounded-2xl w-full text-sm" required>
    <button class="w-full bg-[#FF5B60] text-white py-4 rounded-2xl font-black">로그인</button>
  </form>
</div>
"""


def _safe_next(next_url):
    """로그인 후 이동할 주소. 같은 사이트의 상대 경로만 허용 (브라우저는 '\\'를 '/'로 읽음)."""
    next_url = (next_url or '').strip()
    normalized = next_url.replace('\\', '/')
    parsed = urlparse(normalized)
    if not normalized.startswith('/') or normalized.startswith('//') or parsed.scheme or parsed.netloc:
        return '/admin/nav-menu'
    return next_url


@main_bp.route('/login', methods=['GET', 'POST'])
def login():
    """로그인 라우트"""
    if request.method == 'POST':
        email = (request.form.get('email') or '').strip()
        user = User.query.filter_by(email=email).first()
        if user and user.password and check_password_hash(user.password, request.form.get('password') or ''):
            session.permanent = True
            login_user(user)
            logger.info("login ok user_id=%s", user.id)
            return redirect(_safe_next(request.args.get('next')))
        logger.warning("login failed email=%r", email)
        flash("로그인 정보를 다시 한 번 확인해주세요.")
    return render_page("로그인", LOGIN_HTML)


@main_bp.route('/logout')
def logout():
    logout_user()
    return redirect('/menu')


# --------------------------------------------------------------------------------
# 2. 앱 생성
# --------------------------------------------------------------------------------
def _configure_logging(app):
    level = getattr(logging, app.config.get('LOG_LEVEL') or 'INFO', logging.INFO)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    app.logger.setLevel(level)


def create_app(config_overrides=None):
    app = Flask(__name__)
    # 프록시(Render, nginx 등) 뒤에서 https·실도메인으로 redirect 되도록
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_prefix=1)
    app.secret_key = config.FLASK_SECRET_KEY
    app.config['PERMANENT_SESSION_LIFETIME'] = timedelta(minutes=config.SESSION_MINUTES)
    app.config['SQLALCHEMY_DATABASE_URI'] = config.DATABASE_URL
    app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False
    app.config['LOG_LEVEL'] = config.LOG_LEVEL
    if config_overrides:
        app.config.update(config_overrides)

    _configure_logging(app)
    db.init_app(app)
    login_manager.init_app(app)
    app.register_blueprint(main_bp)
    register_admin_routes(app)
    return app


def init_db(app):
    """테이블 생성 및 최초 관리자 계정 생성 (ADMIN_EMAIL·ADMIN_PASSWORD 설정 시)"""
    with app.app_context():
        db.create_all()
        if config.ADMIN_EMAIL and config.ADMIN_PASSWORD:
            if not User.query.filter_by(email=config.ADMIN_EMAIL).first():
                db.session.add(User(
                    email=config.ADMIN_EMAIL,
                    password=generate_password_hash(config.ADMIN_PASSWORD),
                    name='관리자',
                    is_admin=True,
                ))
                db.session.commit()
                logger.info("admin account created: %s", config.ADMIN_EMAIL)


# gunicorn: gunicorn -c gunicorn_config.py app:app
app = create_app()


if __name__ == '__main__':
    init_db(app)
    # 로컬 테스트 및 Render 배포 호환 포트 설정 (기본 5000)
    port = int(os.environ.get("PORT", 5000))
    app.run(host="0.0.0.0", port=port, debug=True)
