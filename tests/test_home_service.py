"""
Tests for HomeService: personal homes, invite codes and membership moves.
"""
from datetime import datetime, timedelta

import pytest

from extensions import db
from models.home import Home, format_invite_code, normalize_invite_code
from models.items import Item
from models.users import ROLE_MEMBER, ROLE_OWNER
from services.home_service import HomeService, HomeServiceError


class TestInviteCodeFormat:
    def test_normalize_strips_dashes_and_spaces(self):
        assert normalize_invite_code(' abcd-efgh ijkl-mnop ') == 'ABCDEFGHIJKLMNOP'

    def test_normalize_none(self):
        assert normalize_invite_code(None) == ''

    def test_format_groups_of_four(self):
        assert format_invite_code('ABCDEFGHIJKLMNOP') == 'ABCD-EFGH-IJKL-MNOP'


class TestRotateInviteCode:
    def test_rotate_sets_code_and_expiry(self, app, home):
        code = HomeService.rotate_invite_code(home)

        assert len(code) == 16
        assert home.invite_code == code
        expected = datetime.utcnow() + app.config['INVITE_CODE_LIFETIME']
        assert abs((home.invite_code_expires_at - expected).total_seconds()) < 60
        assert home.has_valid_invite_code

    def test_new_home_has_no_code(self, app, home):
        assert home.invite_code is None
        assert home.has_valid_invite_code is False
        assert home.to_dict(include_code=True)['invite_code'] is None


class TestFindHomeByCode:
    def test_finds_by_formatted_code(self, app, home):
        code = HomeService.rotate_invite_code(home)

        assert HomeService.find_home_by_code(format_invite_code(code)).id == home.id

    def test_wrong_length_is_none(self, app, home):
        HomeService.rotate_invite_code(home)

        assert HomeService.find_home_by_code('ABC') is None

    def test_expired_is_none(self, app, home):
        code = HomeService.rotate_invite_code(home)
        home.invite_code_expires_at = datetime.utcnow() - timedelta(seconds=1)
        db.session.commit()

        assert HomeService.find_home_by_code(code) is None


class TestJoinHome:
    def test_joiner_becomes_member(self, app, user, other_user):
        code = HomeService.rotate_invite_code(user.home)

        target = HomeService.join_home(other_user, code)

        assert target.id == user.home_id
        assert other_user.home_id == user.home_id
        assert other_user.role == ROLE_MEMBER

    def test_empty_previous_home_is_dissolved_with_items_moved(self, app, user, other_user):
        old_home_id = other_user.home_id
        db.session.add(Item(home_id=old_home_id, name='Desk', room='Office'))
        db.session.commit()
        code = HomeService.rotate_invite_code(user.home)

        HomeService.join_home(other_user, code)

        assert db.session.get(Home, old_home_id) is None
        assert [i.name for i in Item.query.filter_by(home_id=user.home_id)] == ['Desk']

    def test_invalid_code_raises_404(self, app, other_user):
        with pytest.raises(HomeServiceError) as exc:
            HomeService.join_home(other_user, 'ZZZZ-ZZZZ-ZZZZ-ZZZZ')

        assert exc.value.status_code == 404

    def test_blank_code_raises_400(self, app, other_user):
        with pytest.raises(HomeServiceError) as exc:
            HomeService.join_home(other_user, ' - ')

        assert exc.value.status_code == 400


class TestLeaveAndRemove:
    @pytest.fixture
    def member(self, app, user, other_user):
        HomeService.join_home(other_user, HomeService.rotate_invite_code(user.home))
        return other_user

    def test_leave_gives_personal_home(self, app, user, member):
        home = HomeService.leave_home(member)

        assert home.id != user.home_id
        assert member.role == ROLE_OWNER
        assert home.owner.id == member.id

    def test_owner_cannot_leave(self, app, user):
        with pytest.raises(HomeServiceError) as exc:
            HomeService.leave_home(user)

        assert exc.value.status_code == 400

    def test_remove_member(self, app, user, member):
        removed = HomeService.remove_member(user, member.id)

        assert removed.id == member.id
        assert member.home_id != user.home_id
        assert user.home.members.count() == 1

    def test_remove_self_raises_400(self, app, user):
        with pytest.raises(HomeServiceError) as exc:
            HomeService.remove_member(user, user.id)

        assert exc.value.status_code == 400

    def test_remove_stranger_raises_404(self, app, user, make_user):
        stranger = make_user('stranger@myhome.io', 'Stan Stranger')

        with pytest.raises(HomeServiceError) as exc:
            HomeService.remove_member(user, stranger.id)

        assert exc.value.status_code == 404
