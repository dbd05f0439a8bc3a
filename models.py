# --------------------------------------------------------------------------------
# 데이터베이스 모델
# --------------------------------------------------------------------------------
from datetime import datetime

from flask_login import UserMixin
from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()


class User(db.Model, UserMixin):
    """관리자 로그인 계정"""
    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(120), unique=True, nullable=False)
    password = db.Column(db.String(200), nullable=True)
    name = db.Column(db.String(50))
    is_admin = db.Column(db.Boolean, default=False)
    created_at = db.Column(db.DateTime, default=datetime.now)


class NavMenuItem(db.Model):
    """전체메뉴(사이트맵) 항목. category가 비어 있으면 1차 메뉴, 있으면 해당 이름의 1차 메뉴 아래 2차 메뉴."""
    __tablename__ = "nav_menu_items"
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    link = db.Column(db.String(500), default='#')
    category = db.Column(db.String(100), nullable=True, index=True)  # 부모 1차 메뉴의 name
    display_order = db.Column(db.Integer, default=0)
    is_active = db.Column(db.Boolean, default=True)
    created_at = db.Column(db.DateTime, default=datetime.now)

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'link': self.link or '',
            'category': self.category,
            'display_order': self.display_order or 0,
            'is_active': bool(self.is_active),
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }
