import logging

from app.config import settings
from app.database import SessionLocal
from app.models.faq import Faq
from app.models.user import User
from app.services.auth_service import hash_password

logger = logging.getLogger(__name__)

DEFAULT_FAQS = [
    {
        "question": "How do I list my bicycle for sale?",
        "answer": "Sign in, open 'Sell your cycle', fill in the details and upload up to five photos.",
        "category": "Selling",
        "order": 1,
    },
    {
        "question": "Why do I need to verify my Aadhaar?",
        "answer": "Verified sellers build trust with buyers. Upload your Aadhaar number with front and back images once.",
        "category": "Verification",
        "order": 2,
    },
    {
        "question": "How long does Aadhaar verification take?",
        "answer": "Submissions stay pending until our team reviews them, usually within two working days.",
        "category": "Verification",
        "order": 3,
    },
    {
        "question": "Can I search for bicycles near me?",
        "answer": "Yes. Share your location and we show listings within 50 km by default.",
        "category": "Buying",
        "order": 4,
    },
]


def seed_admin(db):
    if db.query(User).count() > 0:
        logger.info("Users already present, skipping admin seeding.")
        return
    email = settings.SEED_ADMIN_EMAIL
    admin_user = User(
        username=email,
        password=hash_password(settings.SEED_ADMIN_PASSWORD),
        first_name="Site",
        last_name="Admin",
        email=email,
        mobile="0000000000",
        city="Mumbai",
        sub_city="Andheri",
        cycling_proficiency="expert",
        type="admin",
        is_admin=True,
    )
    db.add(admin_user)
    db.commit()
    logger.info("Default admin user %s seeded", email)


def seed_faqs(db):
    if db.query(Faq).count() > 0:
        logger.info("FAQs already present, skipping FAQ seeding.")
        return
    for config in DEFAULT_FAQS:
        db.add(Faq(**config, is_active=True))
    db.commit()
    logger.info("Seeded %s default FAQs", len(DEFAULT_FAQS))


def run_seed():
    db = SessionLocal()
    try:
        seed_admin(db)
        seed_faqs(db)
    except Exception:
        db.rollback()
        logger.exception("Seeding error")
    finally:
        db.close()


if __name__ == "__main__":
    logging.basicConfig(level=settings.LOG_LEVEL)
    run_seed()
