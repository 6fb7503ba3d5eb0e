from datetime import datetime
from peewee import CharField, DateTimeField, ForeignKeyField
from scene.models import BaseModel, new_id
from scene.models.event import Event


class PromoContent(BaseModel):
    """Promotional asset (flyer, social card) generated for an event"""
    id = CharField(primary_key=True, default=new_id)
    event = ForeignKeyField(Event, backref='promo_content')
    content_url = CharField()
    style_variant = CharField(null=True)
    created_at = DateTimeField(default=datetime.now)

    class Meta:
        table_name = 'promo_content'

    def to_dict(self):
        return {
            'id': self.id,
            'event_id': self.event_id,
            'content_url': self.content_url,
            'style_variant': self.style_variant,
            'created_at': self.created_at.isoformat(),
        }
