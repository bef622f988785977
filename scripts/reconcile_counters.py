"""Script to repair HR employee counters from the affiliation rows."""
from assetverse.database import SessionLocal, engine, Base
from assetverse.models.user import User, UserRole
from assetverse.services.affiliations import reconcile_employee_count


def reconcile_all() -> int:
    """Recompute ``current_employees`` for every HR. Returns how many were fixed."""
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        fixed = 0
        for hr in db.query(User).filter(User.role == UserRole.HR).all():
            stored = hr.current_employees
            if reconcile_employee_count(db, hr) != stored:
                fixed += 1
                print(f"{hr.email}: {stored} -> {hr.current_employees}")
        print(f"Reconciled {fixed} HR account(s)")
        return fixed
    finally:
        db.close()


if __name__ == "__main__":
    reconcile_all()
