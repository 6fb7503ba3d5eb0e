"""
Message board entries posted on an event page
"""

from datetime import datetime
from peewee import CharField, TextField, DateTimeField, ForeignKeyField
from scene.models import BaseModel, new_id
from scene.models.event import Event


class Message(BaseModel):
    id = CharField(primary_key=True, default=new_id)
    event = ForeignKeyField(Event, backref='messages')
    sender_name = CharField()
    sender_email = CharField(null=True)
    message = TextField()
    created_at = DateTimeField(default=datetime.now)

    class Meta:
        table_name = 'messages'

    def to_dict(self):
        return {
            'id': self.id,
            'event_id': self.event_id,
            'sender_name': self.sender_name,
            'sender_email': self.sender_email,
            'message': self.message,
            'created_at': self.created_at.isoformat(),
        }
