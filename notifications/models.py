from django.db import models


class TelegramSubscriber(models.Model):
    chat_id = models.BigIntegerField(unique=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ("created_at",)

    def __str__(self):
        return str(self.chat_id)


def subscribe_chat(chat_id: int) -> bool:
    """Register a chat for staff alerts. Returns True for a new subscriber."""
    _, created = TelegramSubscriber.objects.get_or_create(chat_id=chat_id)
    return created


def unsubscribe_chat(chat_id: int) -> bool:
    deleted, _ = TelegramSubscriber.objects.filter(chat_id=chat_id).delete()
    return deleted > 0
