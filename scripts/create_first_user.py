import sys
import os
from sqlmodel import Session

# Add current directory to path
sys.path.append(os.getcwd())

from crm.auth.identity import IdentityProvider
from crm.auth.profiles import ProfileResolver
from crm.core.exceptions import AccountExists
from crm.db.session import engine, init_db
from crm.db.store import DocumentStore
from crm.schemas.session import Role

def create_initial_user():
    print("--- Initial Admin Creation ---")

    email = os.environ.get("ADMIN_EMAIL", "admin@example.com")
    password = os.environ.get("ADMIN_PASSWORD", "adminpassword")
    display_name = "Super Admin"
    role = Role(id="super_admin", name="Super Admin")

    init_db()
    with Session(engine) as session:
        store = DocumentStore(session)
        try:
            identity = IdentityProvider(store).register(email, password, display_name)
        except AccountExists:
            print(f"Account with email {email} already exists.")
            return

        ProfileResolver(store).create_profile(identity, role=role)
        print("Initial admin created successfully!")
        print(f"Email: {email}")
        print(f"UID: {identity.uid}")
        print(f"Role: {role.name}")

if __name__ == "__main__":
    create_initial_user()
