from datetime import datetime
from peewee import CharField, DateTimeField, ForeignKeyField
from scene.models import BaseModel, new_id
from scene.models.event import Event


class RecapPhoto(BaseModel):
    """Photo shared after an event took place"""
    id = CharField(primary_key=True, default=new_id)
    event = ForeignKeyField(Event, backref='recap_photos')
    photo_url = CharField()
    uploaded_by = CharField(null=True)
    created_at = DateTimeField(default=datetime.now)

    class Meta:
        table_name = 'recap_photos'

    def to_dict(self):
        return {
            'id': self.id,
            'event_id': self.event_id,
            'photo_url': self.photo_url,
            'uploaded_by': self.uploaded_by,
            'created_at': self.created_at.isoformat(),
        }
