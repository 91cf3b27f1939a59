"""
User Model

Local accounts for the auth provider. Each user's documents are
scoped by the user's ``uid``.
"""

import uuid

from werkzeug.security import generate_password_hash, check_password_hash

from .base import db


class User(db.Model):
    """Bakery owner account."""
    id = db.Column(db.Integer, primary_key=True)
    uid = db.Column(db.String(32), unique=True, nullable=False, index=True,
                    default=lambda: uuid.uuid4().hex)
    email = db.Column(db.String(254), unique=True, nullable=False, index=True)
    display_name = db.Column(db.String(100), default='')
    password_hash = db.Column(db.String(256), nullable=False)

    def set_password(self, password):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        return check_password_hash(self.password_hash, password)

    def to_dict(self):
        return {
            'uid': self.uid,
            'email': self.email,
            'displayName': self.display_name,
        }
