"""
Family Forms
"""
from wtforms.validators import DataRequired

from blueprints.auth.forms import ApiForm, JsonStringField


class JoinHomeForm(ApiForm):
    """Join body: the invite code, with or without dashes"""
    invite_code = JsonStringField('Invite code', validators=[
        DataRequired(message='Invite code is required')
    ])
