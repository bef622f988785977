"""Script to create an initial HR account."""
import argparse

from assetverse.config import settings
from assetverse.database import SessionLocal, engine, Base
from assetverse.models.user import User, UserRole
from assetverse.services.payments import ensure_default_packages


def create_hr(email: str, name: str, company_name: str):
    """Create an HR account on the default package if it does not exist."""
    # Create tables
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        ensure_default_packages(db)

        existing = db.query(User).filter(User.email == email).first()
        if existing:
            print(f"User already exists: {existing.email} ({existing.role.value})")
            return

        hr_user = User(
            email=email,
            name=name,
            role=UserRole.HR,
            company_name=company_name,
            subscription=settings.DEFAULT_PACKAGE,
            package_limit=settings.DEFAULT_PACKAGE_LIMIT,
            current_employees=0,
        )
        db.add(hr_user)
        db.commit()
        print("HR user created successfully!")
        print(f"Email: {email}")
        print(f"Company: {company_name}")
        print(f"Package: {settings.DEFAULT_PACKAGE} ({settings.DEFAULT_PACKAGE_LIMIT} employees)")

    finally:
        db.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("email")
    parser.add_argument("company_name")
    parser.add_argument("--name", default="HR Manager")
    args = parser.parse_args()
    create_hr(args.email, args.name, args.company_name)
