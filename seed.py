import logging

from app.core.db import SessionLocal, engine, Base
from app.services.seed_service import SeedService

logging.basicConfig(level=logging.INFO)

def seed_database():
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()

    try:
        event = SeedService.seed_demo_data(db)
        if event is None:
            print("Database already has data, nothing to seed.")
            return

        alice = event.guests[0]
        print(f"Event created: {event.name} (code: {event.event_code})")
        print(f"Demo guest: {alice.name}, booking ref {alice.booking_ref}")
        print(f"Portal token: {alice.access_token}")

    except Exception as e:
        print(f"Seeding failed: {e}")
        db.rollback()
        raise
    finally:
        db.close()

if __name__ == "__main__":
    seed_database()
