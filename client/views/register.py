import re

from client.routes import Path
from client.views.base import View


EMAIL_RE = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')
MIN_PASSWORD_LENGTH = 6


class RegisterView(View):
    template = 'views/register.html'

    def markup(self):
        return super().markup(email='', min_password_length=MIN_PASSWORD_LENGTH)

    def validate(self, email, password, confirm):
        if not email:
            return self.invalid('register-email', 'Please enter your email')
        if not EMAIL_RE.match(email):
            return self.invalid('register-email', 'Please enter a valid email address')
        if len(password) < MIN_PASSWORD_LENGTH:
            return self.invalid('register-password',
                                f'Password must be at least {MIN_PASSWORD_LENGTH} characters')
        if password != confirm:
            return self.invalid('register-password-confirm', 'Passwords do not match')
        return True

    def submit(self):
        self.clear_errors()
        email = self.value('register-email')
        password = self.value('register-password', strip=False)
        confirm = self.value('register-password-confirm', strip=False)

        if not self.validate(email, password, confirm):
            return False

        result = self.session.register(email, password)
        if not result['success']:
            self.toaster.error(result['error'])
            return False

        self.toaster.show('Account created!')
        self.router.navigate(Path.HOME)
        return True
