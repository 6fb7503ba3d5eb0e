"""
Attendee model for event RSVPs
"""

import json
from datetime import datetime
from peewee import CharField, TextField, DateTimeField, ForeignKeyField
from scene.models import BaseModel, new_id
from scene.models.event import Event

STATUS_UNPAID = 'unpaid'
STATUS_PAID = 'paid'
STATUS_CONFIRMED = 'confirmed'
STATUS_WAITLIST = 'waitlist'


class Attendee(BaseModel):
    """Guest registered for an event"""
    id = CharField(primary_key=True, default=new_id)
    event = ForeignKeyField(Event, backref='attendees', index=True)
    name = CharField()
    email = CharField()

    status = CharField(default=STATUS_UNPAID, choices=[
        (STATUS_UNPAID, 'Awaiting payment'),
        (STATUS_PAID, 'Paid'),
        (STATUS_CONFIRMED, 'Confirmed'),
        (STATUS_WAITLIST, 'Waitlisted'),
    ])
    payment_id = CharField(null=True)  # Reference handed back by the payment gateway

    custom_answers = TextField(null=True)  # JSON object of question id -> answer
    rsvp_date = DateTimeField(default=datetime.now)

    class Meta:
        table_name = 'attendees'

    def __str__(self):
        return f"{self.name} - {self.event_id} ({self.status})"

    def get_answers(self):
        """Get answers as a dictionary of question id -> answer"""
        if not self.custom_answers:
            return {}
        try:
            answers = json.loads(self.custom_answers)
        except (json.JSONDecodeError, TypeError):
            return {}
        return answers if isinstance(answers, dict) else {}

    def set_answers(self, answers):
        self.custom_answers = json.dumps(answers or {})

    def to_dict(self):
        return {
            'id': self.id,
            'event_id': self.event_id,
            'name': self.name,
            'email': self.email,
            'status': self.status,
            'payment_id': self.payment_id,
            'custom_answers': self.get_answers(),
            'rsvp_date': self.rsvp_date.isoformat(),
        }
