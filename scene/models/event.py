"""
Event model for organizer-created events
"""

import json
from datetime import datetime
from decimal import Decimal
from peewee import (CharField, TextField, DateTimeField, BooleanField, ForeignKeyField,
                    IntegerField, DecimalField)
from scene.models import BaseModel, new_id
from scene.models.user import User


class Event(BaseModel):
    """Event with a fixed capacity and an optional ticket price"""
    id = CharField(primary_key=True, default=new_id)
    organizer = ForeignKeyField(User, backref='events')
    name = CharField()
    description = TextField(null=True)
    location = CharField(null=True)
    date_time = DateTimeField()

    # Admission settings
    capacity = IntegerField()
    is_paid = BooleanField(default=False)
    ticket_price = DecimalField(max_digits=10, decimal_places=2, auto_round=True, default=0)
    payment_method = CharField(default='none')
    payment_instructions = TextField(null=True)

    # Organizer-defined RSVP form, stored as a JSON array of question specs
    custom_questions = TextField(null=True)

    image_url = CharField(null=True)
    created_at = DateTimeField(default=datetime.now)

    class Meta:
        table_name = 'events'

    def __str__(self):
        return f"{self.name} - {self.date_time.strftime('%Y-%m-%d')}"

    def get_custom_questions(self):
        """Get the question specs as a list of dicts"""
        if not self.custom_questions:
            return []
        try:
            questions = json.loads(self.custom_questions)
        except (json.JSONDecodeError, TypeError):
            return []
        return questions if isinstance(questions, list) else []

    def set_custom_questions(self, questions):
        """
        Store question specs, assigning positional ids (q1, q2, ...) to
        questions that arrive without one.
        """
        normalized = []
        for index, question in enumerate(questions or [], start=1):
            if isinstance(question, str):
                question = {'question': question}
            entry = dict(question)
            entry.setdefault('id', f'q{index}')
            entry['id'] = str(entry['id'])
            entry['required'] = bool(entry.get('required', False))
            normalized.append(entry)
        self.custom_questions = json.dumps(normalized)

    @property
    def effective_price(self):
        """Ticket price that applies to attendees; free events always cost 0"""
        if not self.is_paid:
            return Decimal('0')
        return Decimal(self.ticket_price or 0)

    def to_dict(self):
        return {
            'id': self.id,
            'organizer_id': self.organizer_id,
            'name': self.name,
            'description': self.description,
            'location': self.location,
            'date_time': self.date_time.isoformat(),
            'capacity': self.capacity,
            'is_paid': self.is_paid,
            'ticket_price': float(self.effective_price),
            'payment_method': self.payment_method,
            'payment_instructions': self.payment_instructions,
            'custom_questions': self.get_custom_questions(),
            'image_url': self.image_url,
            'created_at': self.created_at.isoformat(),
        }
