"""
Crée les tables de la base et, optionnellement, le premier administrateur.

Usage :
    python create_tables.py
    python create_tables.py --admin admin@ecole.es motdepasse "Admin"
"""

import argparse

from sqlalchemy import select

from cncclass.database import Base, SessionLocal, engine
from cncclass.models import Profile
from cncclass.services.auth_service import hash_password


def create_tables() -> None:
    print("Création des tables...")
    Base.metadata.create_all(bind=engine)
    print("Tables créées : profiles, classes, class_participants, assignments, student_responses")


def create_admin(email: str, password: str, display_name: str) -> None:
    """Crée un profil administrateur, ou promeut le profil existant."""
    db = SessionLocal()
    try:
        profile = db.execute(select(Profile).where(Profile.email == email.lower())).scalar_one_or_none()
        if profile is None:
            profile = Profile(
                email=email.lower(),
                display_name=display_name,
                password_hash=hash_password(password),
            )
            db.add(profile)
        profile.role = "admin"
        db.commit()
        print(f"Administrateur prêt : {profile.email}")
    finally:
        db.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--admin", nargs=3, metavar=("EMAIL", "PASSWORD", "NAME"))
    args = parser.parse_args()

    create_tables()
    if args.admin:
        create_admin(*args.admin)
