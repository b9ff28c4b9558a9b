"""
Create the MyHome database tables, optionally with a first account.
Run from project root: python init_db.py [--with-owner]
"""
import getpass
import sys

from app import create_app
from extensions import db
from models.users import User
from blueprints.auth.forms import validate_password_strength
from services.home_service import HomeService


def create_owner():
    """Prompt for an account and give it a personal home"""
    email = input("Email: ").strip().lower()
    name = input("Name: ").strip() or email.split('@')[0]

    while True:
        password = getpass.getpass("Password: ")
        is_valid, error_msg = validate_password_strength(password)
        if not is_valid:
            print(f"❌ {error_msg}\n")
            continue
        if password != getpass.getpass("Confirm Password: "):
            print("❌ Passwords don't match. Try again.\n")
            continue
        break

    if User.query.filter_by(email=email).first():
        print(f"⚠️  {email} already exists, nothing created")
        return None

    user = User(email=email, name=name, is_active=True)
    user.set_password(password)
    db.session.add(user)
    db.session.flush()
    home = HomeService.create_personal_home(user)
    db.session.commit()
    print(f"✓ Created {email} owning \"{home.name}\"")
    return user


def init_db(with_owner=False):
    """Create every table known to the models"""
    app = create_app('development')

    with app.app_context():
        print("Creating database tables...")
        db.create_all()
        print(f"✓ Tables ready in {app.config['SQLALCHEMY_DATABASE_URI']}")
        for table in db.metadata.sorted_tables:
            print(f"  - {table.name}")
        print(f"{User.query.count()} existing account(s)")

        if with_owner:
            print("\n=== First account ===")
            create_owner()


if __name__ == '__main__':
    init_db(with_owner='--with-owner' in sys.argv[1:])
