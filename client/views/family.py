"""
Family screen: the shared home, its members and invite codes.

Owners see the invite code box and can remove members; anyone can join
another home with a code, and members can leave.
"""
import logging
import re

from client import templating
from client.api import ApiError
from client.dom import set_inner_html, set_value
from client.views.base import View


logger = logging.getLogger(__name__)

CODE_LENGTH = 16
CODE_GROUP = 4


def format_code_input(raw):
    """Uppercase, keep letters and digits, group as ``XXXX-XXXX-XXXX-XXXX``."""
    chars = re.sub(r'[^A-Z0-9]', '', (raw or '').upper())[:CODE_LENGTH]
    return '-'.join(chars[i:i + CODE_GROUP] for i in range(0, len(chars), CODE_GROUP))


class FamilyView(View):
    template = 'views/family.html'

    def __init__(self, app):
        super().__init__(app)
        self.data = None
        self.verified = None

    def markup(self):
        self.verified = None
        try:
            self.data = self.api.get('/family/home')
        except ApiError as e:
            logger.warning('Could not load family: %s', e.message)
            self.data = None
            return templating.render('views/family_error.html', message=e.message)

        home = self.data.get('home') or {}
        return super().markup(
            home=home,
            members=self.data.get('members', []),
            is_owner=self.data.get('isOwner', False),
            invite_code=home.get('invite_code'),
        )

    def refresh(self):
        if self.container is not None:
            set_inner_html(self.container, self.markup())

    @property
    def is_owner(self):
        return bool(self.data and self.data.get('isOwner'))

    # ── Owner actions ────────────────────────────────────────────────────

    def generate_code(self):
        """Issue a new invite code; the previous one stops working."""
        try:
            data = self.api.post('/family/invite-code')
        except ApiError as e:
            self.toaster.error(e.message)
            return None
        code = data['invite_code']
        box = self.field('invite-code-box')
        if box is not None:
            set_inner_html(box, templating.render('views/invite_code.html', invite_code=code))
        self.toaster.show('New invite code generated')
        return code

    def remove_member(self, member_id):
        try:
            data = self.api.delete(f'/family/members/{member_id}')
        except ApiError as e:
            self.toaster.error(e.message)
            return False
        self.toaster.show(data.get('message', 'Member removed'))
        self.refresh()
        return True

    # ── Joining ──────────────────────────────────────────────────────────

    def _show_join(self, visible):
        modal = self.field('join-modal')
        if modal is None:
            return
        if visible:
            modal.attrs.pop('style', None)
        else:
            modal['style'] = 'display: none;'

    def open_join(self):
        self._show_join(True)

    def close_join(self):
        self.verified = None
        input_ = self.field('join-code-input')
        if input_ is not None:
            set_value(input_, '')
        self._show_verify_result(None)
        self._show_join(False)

    def _show_verify_result(self, message, ok=False):
        result = self.field('join-verify-result')
        confirm = self.field('join-confirm-btn')
        if result is not None:
            if message is None:
                result.string = ''
                result['style'] = 'display: none;'
            else:
                result.string = message
                result.attrs.pop('style', None)
                result['class'] = ['family__verify-result',
                                   'family__verify-result--' + ('ok' if ok else 'error')]
        if confirm is not None:
            if ok:
                confirm.attrs.pop('disabled', None)
            else:
                confirm['disabled'] = ''

    def enter_code(self, raw):
        """Format what was typed; verify once a full code is present."""
        code = format_code_input(raw)
        input_ = self.field('join-code-input')
        if input_ is not None:
            set_value(input_, code)
        self.verified = None
        if len(code.replace('-', '')) == CODE_LENGTH:
            self.verify_code(code)
        else:
            self._show_verify_result(None)
        return code

    def verify_code(self, code):
        try:
            data = self.api.get(f'/family/verify-code/{code}')
        except ApiError as e:
            self._show_verify_result(e.message)
            return None
        if not data.get('valid'):
            self._show_verify_result('Invalid or expired invite code')
        elif data.get('is_current_home'):
            self._show_verify_result('You are already a member of this home')
        else:
            self.verified = code
            self._show_verify_result(f'Join {data["home_name"]}', ok=True)
        return data

    def join(self):
        """Join the home behind the verified code. Returns True on success."""
        code = self.verified or format_code_input(self.value('join-code-input'))
        if len(code.replace('-', '')) != CODE_LENGTH:
            return self.invalid('join-code-input', 'Please enter the full invite code')
        try:
            data = self.api.post('/family/join', json={'invite_code': code})
        except ApiError as e:
            self.toaster.error(e.message)
            return False
        self.toaster.show(data.get('message', 'Joined home'))
        self.close_join()
        self.refresh()
        return True

    def leave(self):
        try:
            data = self.api.post('/family/leave')
        except ApiError as e:
            self.toaster.error(e.message)
            return False
        self.toaster.show(data.get('message', 'You left the home'))
        self.refresh()
        return True
