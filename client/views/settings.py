from client.views.base import View


class SettingsView(View):
    template = 'views/settings.html'

    def markup(self):
        return super().markup(user=self.session.get_current_user(), version=self.app.version)

    def logout(self):
        self.app.header.logout()
