from client.routes import Path
from client.views.base import View


class LoginView(View):
    template = 'views/login.html'

    def markup(self):
        return super().markup(email='')

    def submit(self):
        """Sign in with the values typed into the form. Returns True on success."""
        self.clear_errors()
        email = self.value('login-email')
        password = self.value('login-password', strip=False)

        if not email:
            return self.invalid('login-email', 'Please enter your email')
        if not password:
            return self.invalid('login-password', 'Please enter your password')

        result = self.session.login(email, password)
        if not result['success']:
            self.toaster.error(result['error'])
            return False

        self.toaster.show('Welcome back!')
        self.router.navigate(Path.HOME)
        return True
