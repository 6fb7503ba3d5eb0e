"""
Promotional content and recap photo endpoints

Both are append-only lists of URLs attached to an event. Files themselves are
hosted elsewhere; only their URLs are stored.
"""

from flask import Blueprint, jsonify
from flask_login import login_required, current_user

from scene.admission import get_event_or_404
from scene.decorators import event_owner_required
from scene.errors import ValidationFailure
from scene.models.promo_content import PromoContent
from scene.models.recap_photo import RecapPhoto
from scene.utils import get_json_body, get_str

bp = Blueprint('media', __name__, url_prefix='/events')


def _require_url(data, key):
    url = get_str(data, key)
    if not url.startswith(('http://', 'https://', '/')):
        raise ValidationFailure(f'{key} must be an absolute URL or path')
    return url


@bp.route('/<event_id>/promo-content', methods=['GET'])
@event_owner_required
def list_promo_content(event):
    items = PromoContent.select().where(PromoContent.event == event).order_by(PromoContent.created_at)
    return jsonify([item.to_dict() for item in items])


@bp.route('/<event_id>/promo-content', methods=['POST'])
@event_owner_required
def add_promo_content(event):
    data = get_json_body()
    promo = PromoContent.create(
        event=event,
        content_url=_require_url(data, 'contentUrl'),
        style_variant=get_str(data, 'styleVariant') or None,
    )
    return jsonify({'promoId': promo.id, 'message': 'Promo content saved'})


@bp.route('/<event_id>/recap-photos', methods=['GET'])
def list_recap_photos(event_id):
    event = get_event_or_404(event_id)
    photos = RecapPhoto.select().where(RecapPhoto.event == event).order_by(RecapPhoto.created_at)
    return jsonify([photo.to_dict() for photo in photos])


@bp.route('/<event_id>/recap-photos', methods=['POST'])
@login_required
def add_recap_photo(event_id):
    event = get_event_or_404(event_id)
    data = get_json_body()
    photo = RecapPhoto.create(
        event=event,
        photo_url=_require_url(data, 'photoUrl'),
        uploaded_by=get_str(data, 'uploadedBy') or current_user.name,
    )
    return jsonify({'photoId': photo.id, 'message': 'Photo added'})
