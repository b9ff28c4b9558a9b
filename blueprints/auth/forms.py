"""
Authentication Forms
JSON request bodies validated through WTForms. CSRF is off: the API is
authenticated by bearer token, never by cookie.
"""
from flask import abort, request
from flask_wtf import FlaskForm
from werkzeug.datastructures import ImmutableMultiDict
from wtforms import StringField, PasswordField, TextAreaField
from wtforms.validators import DataRequired, Email, Length, Optional, ValidationError
import re


class ApiForm(FlaskForm):
    """Base form for JSON API bodies"""

    class Meta(FlaskForm.Meta):
        csrf = False

        def wrap_formdata(self, form, formdata):
            if request.is_json and not hasattr(formdata, 'getlist'):
                body = request.get_json(silent=True)
                if not isinstance(body, dict):
                    abort(400, description='Request body must be a JSON object')
                # One value per key: a JSON array stays a single (rejected) value
                return ImmutableMultiDict(list(body.items()))
            return super().wrap_formdata(form, formdata)

    def first_error(self):
        """Return the first validation message, in field order."""
        for field in self:
            if field.errors:
                return field.errors[0]
        return 'Invalid request'


class JsonStringMixin:
    """Reject JSON numbers, booleans, arrays and objects where text is expected"""

    def process_formdata(self, valuelist):
        if valuelist and valuelist[0] is not None and not isinstance(valuelist[0], str):
            self.data = None
            raise ValueError(f'{self.label.text} must be a string')
        super().process_formdata(valuelist)


class JsonStringField(JsonStringMixin, StringField):
    pass


class JsonPasswordField(JsonStringMixin, PasswordField):
    pass


class JsonTextAreaField(JsonStringMixin, TextAreaField):
    pass


class LoginForm(ApiForm):
    """Login form"""
    email = JsonStringField('Email', validators=[
        DataRequired(message='Email and password are required'),
    ])
    password = JsonPasswordField('Password', validators=[
        DataRequired(message='Email and password are required')
    ])


class RegisterForm(ApiForm):
    """Account registration form"""
    email = JsonStringField('Email', validators=[
        DataRequired(message='Email and password are required'),
        Email(message='Invalid email address', check_deliverability=False)
    ])
    password = JsonPasswordField('Password', validators=[
        DataRequired(message='Email and password are required'),
    ])
    name = JsonStringField('Your Name', validators=[
        Optional(),
        Length(max=100, message='Name must be at most 100 characters')
    ])

    def validate_password(self, field):
        is_valid, error_msg = validate_password_strength(field.data or '')
        if not is_valid:
            raise ValidationError(error_msg)


def validate_password_strength(password):
    """
    Validate password meets security requirements
    Returns: (is_valid, error_message)
    """
    from flask import current_app

    min_length = current_app.config.get('PASSWORD_MIN_LENGTH', 6)
    require_uppercase = current_app.config.get('PASSWORD_REQUIRE_UPPERCASE', False)
    require_lowercase = current_app.config.get('PASSWORD_REQUIRE_LOWERCASE', False)
    require_digit = current_app.config.get('PASSWORD_REQUIRE_DIGIT', False)
    require_special = current_app.config.get('PASSWORD_REQUIRE_SPECIAL', False)

    if len(password) < min_length:
        return False, f"Password must be at least {min_length} characters"

    errors = []

    if require_uppercase and not re.search(r'[A-Z]', password):
        errors.append("an uppercase letter")

    if require_lowercase and not re.search(r'[a-z]', password):
        errors.append("a lowercase letter")

    if require_digit and not re.search(r'\d', password):
        errors.append("a number")

    if require_special and not re.search(r'[!@#$%^&*(),.?":{}|<>]', password):
        errors.append("a special character (!@#$%^&*(),.?\":{}|<>)")

    if errors:
        return False, f"Password must contain {', '.join(errors)}"

    return True, None
