"""
User model for organizer accounts
"""

from datetime import datetime
from peewee import CharField, DateTimeField
from flask_login import UserMixin
from werkzeug.security import generate_password_hash, check_password_hash
from scene.models import BaseModel, new_id


class User(UserMixin, BaseModel):
    """Organizer account authenticated by email and password"""
    id = CharField(primary_key=True, default=new_id)
    email = CharField(unique=True)
    password_hash = CharField()
    name = CharField()
    created_at = DateTimeField(default=datetime.now)

    class Meta:
        table_name = 'users'

    def __str__(self):
        return f"User({self.name} - {self.email})"

    def __repr__(self):
        return f"<User: {self.id}>"

    def set_password(self, password):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        return check_password_hash(self.password_hash, password)

    def to_dict(self):
        return {
            'id': self.id,
            'email': self.email,
            'name': self.name,
        }
