import logging
from smtplib import SMTPException

import requests
from celery import shared_task
from django.conf import settings
from django.core.mail import send_mail

from notifications.models import TelegramSubscriber

logger = logging.getLogger(__name__)


@shared_task(
    bind=True,
    autoretry_for=(requests.RequestException,),
    retry_kwargs={"max_retries": 3, "countdown": 10},
)
def send_telegram_notification(self, message: str):
    """
    Send notification message to all subscribed Telegram staff
    """
    token = settings.TELEGRAM_BOT_TOKEN
    if not token:
        logger.warning("TELEGRAM_BOT_TOKEN is missing; notification dropped")
        return "skipped"

    url = f"https://api.telegram.org/bot{token}/sendMessage"

    subscribers = TelegramSubscriber.objects.all()

    for subscriber in subscribers:
        payload = {
            "chat_id": subscriber.chat_id,
            "text": message,
        }

        response = requests.post(url, json=payload, timeout=5)
        response.raise_for_status()

    return f"Sent to {len(subscribers)} subscribers"


@shared_task(
    bind=True,
    autoretry_for=(SMTPException, ConnectionError),
    retry_kwargs={"max_retries": 3, "countdown": 30},
)
def send_customer_email(self, recipient: str, subject: str, body: str):
    send_mail(subject, body, settings.DEFAULT_FROM_EMAIL, [recipient])
    return f"E-mail sent to {recipient}"
