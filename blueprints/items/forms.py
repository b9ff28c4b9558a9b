"""
Item Forms
"""
import base64
import binascii
import re

from flask import current_app
from wtforms.validators import DataRequired, Length, Optional, ValidationError

from blueprints.auth.forms import ApiForm, JsonStringField, JsonTextAreaField


DATA_URL_RE = re.compile(r'^data:image/[a-zA-Z0-9.+-]+;base64,(?P<payload>[A-Za-z0-9+/=\s]*)$')


class ItemForm(ApiForm):
    """New item body: name and room are required"""
    name = JsonStringField('Name', validators=[
        DataRequired(message='Name and room are required'),
        Length(max=100, message='Name must be at most 100 characters')
    ])
    room = JsonStringField('Room', validators=[
        DataRequired(message='Name and room are required'),
        Length(max=50, message='Room must be at most 50 characters')
    ])
    category = JsonStringField('Category', validators=[
        Optional(),
        Length(max=50, message='Category must be at most 50 characters')
    ])
    notes = JsonTextAreaField('Notes', validators=[
        Optional(),
        Length(max=500, message='Notes must be at most 500 characters')
    ])
    image = JsonStringField('Image', validators=[Optional()])

    def validate_image(self, field):
        value = (field.data or '').strip()
        if not value:
            return
        if value.startswith(('http://', 'https://')):
            return
        match = DATA_URL_RE.match(value)
        if match is None:
            raise ValidationError('Image must be an image data URL or an http(s) URL')
        try:
            raw = base64.b64decode(match.group('payload'), validate=False)
        except (binascii.Error, ValueError):
            raise ValidationError('Image data is not valid base64')
        if len(raw) > current_app.config.get('MAX_IMAGE_BYTES', 2 * 1024 * 1024):
            raise ValidationError('Image is too large')
