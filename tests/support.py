from __future__ import annotations

import unittest
from unittest.mock import patch

from werkzeug.security import generate_password_hash

import config
from app import create_app
from menu_grouping import clear_grouping_cache
from models import NavMenuItem, User, db


class AppTestCase(unittest.TestCase):
    """In-memory SQLite app with the local menu source."""

    def setUp(self) -> None:
        for name, value in (("SUPABASE_URL", ""), ("SUPABASE_ANON_KEY", "")):
            patcher = patch.object(config, name, value)
            patcher.start()
            self.addCleanup(patcher.stop)

        self.app = create_app({
            "TESTING": True,
            "SQLALCHEMY_DATABASE_URI": "sqlite://",
            "LOG_LEVEL": "WARNING",
        })
        self.ctx = self.app.app_context()
        self.ctx.push()
        db.create_all()
        clear_grouping_cache()
        self.client = self.app.test_client()

    def tearDown(self) -> None:
        db.session.remove()
        db.drop_all()
        self.ctx.pop()

    def add_item(self, name, category=None, display_order=0, is_active=True, link="#") -> NavMenuItem:
        item = NavMenuItem(
            name=name,
            category=category,
            display_order=display_order,
            is_active=is_active,
            link=link,
        )
        db.session.add(item)
        db.session.commit()
        return item

    def add_user(self, email="admin@example.com", password="pw1234", is_admin=True) -> User:
        user = User(email=email, password=generate_password_hash(password), name="관리자", is_admin=is_admin)
        db.session.add(user)
        db.session.commit()
        return user

    def login(self, email="admin@example.com", password="pw1234"):
        return self.client.post("/login", data={"email": email, "password": password})

    def reload(self, item_id):
        db.session.expire_all()
        return db.session.get(NavMenuItem, item_id)
