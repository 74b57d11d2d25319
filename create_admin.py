"""
Create a CMS admin, or reset an existing one's password and re-activate it.
Run: python create_admin.py admin@example.com
     or: python create_admin.py admin@example.com "YourPassword" --name "Site Admin"
"""
import argparse
import getpass


def create_admin(email, password, name=None):
    """Create or reset the user and its active admin_users row"""
    from app import create_app
    from models import db
    from models.admin import AdminUser
    from models.user import User

    app = create_app()
    with app.app_context():
        email = email.strip().lower()
        user = User.query.filter_by(email=email).first()
        if user:
            print("[INFO] User exists, resetting password.")
        else:
            user = User(email=email, is_active=True)
            db.session.add(user)
        user.set_password(password)
        user.is_active = True
        db.session.flush()

        admin = AdminUser.query.filter_by(user_id=user.id).first()
        if not admin:
            admin = AdminUser(user_id=user.id, email=email)
            db.session.add(admin)
        if name:
            admin.name = name
        admin.is_active = True

        try:
            db.session.commit()
        except Exception as e:
            db.session.rollback()
            print("[ERROR]", e)
            return False

        print("[SUCCESS] Admin ready.")
        print("  Email:", email)
        print("  Login: POST /login, then open", app.config["CMS_ROUTE_PREFIX"])
        return True


def main():
    parser = argparse.ArgumentParser(description="Create or reset a CMS admin")
    parser.add_argument("email")
    parser.add_argument("password", nargs="?")
    parser.add_argument("--name")
    args = parser.parse_args()

    password = args.password
    if not password:
        password = getpass.getpass("Password: ")
        if password != getpass.getpass("Confirm password: "):
            print("Passwords do not match. Aborted.")
            return
    if len(password) < 8:
        print("Password must be at least 8 characters. Aborted.")
        return

    create_admin(args.email, password, name=args.name)


if __name__ == '__main__':
    main()
