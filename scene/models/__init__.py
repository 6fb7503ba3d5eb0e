"""
Base model for all database models
"""

import uuid

from peewee import Model
from scene.database import database


def new_id():
    """Generate a fresh primary key for uuid-keyed tables"""
    return str(uuid.uuid4())


class BaseModel(Model):
    """Base model class that all models should inherit from"""

    class Meta:
        database = database
