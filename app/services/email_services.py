import logging
import smtplib
from email.mime.text import MIMEText

from app.config import settings

logger = logging.getLogger(__name__)


def send_email_otp(to_email: str, otp: str):
    if not settings.SMTP_HOST:
        if settings.is_production:
            raise RuntimeError("SMTP not configured: set SMTP_HOST, SMTP_PORT, SMTP_USER and SMTP_PASS")
        logger.warning("SMTP not configured; registration OTP email to %s was not sent", to_email)
        return

    msg = MIMEText(f"Your OTP is: {otp}\nIt expires in {settings.OTP_EXPIRE_MINUTES} minutes.")
    msg["Subject"] = "Your OTP for Registration"
    msg["From"] = settings.FROM_EMAIL
    msg["To"] = to_email

    with smtplib.SMTP(settings.SMTP_HOST, settings.SMTP_PORT, timeout=20) as server:
        server.starttls()
        if settings.SMTP_USER:
            server.login(settings.SMTP_USER, settings.SMTP_PASS)
        server.send_message(msg)
    logger.info("Registration OTP email sent to %s", to_email)
