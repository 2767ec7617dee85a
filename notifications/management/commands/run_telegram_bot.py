import asyncio

from aiogram import Bot, Dispatcher
from aiogram.filters import Command as CommandFilter
from aiogram.filters import CommandStart
from aiogram.types import Message
from asgiref.sync import sync_to_async
from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from notifications.models import subscribe_chat, unsubscribe_chat


class Command(BaseCommand):
    help = "Run the Telegram bot that subscribes staff chats to hotel alerts"

    def handle(self, *args, **options):
        token = settings.TELEGRAM_BOT_TOKEN
        if not token:
            raise CommandError("TELEGRAM_BOT_TOKEN is not configured")

        asyncio.run(self.run_bot(token))

    async def run_bot(self, token):
        bot = Bot(token=token)
        dp = Dispatcher()

        @dp.message(CommandStart())
        async def start_handler(message: Message):
            created = await sync_to_async(subscribe_chat)(message.chat.id)
            await message.answer(
                "✅ You are subscribed to hotel notifications!"
                if created else "You are already subscribed."
            )

        @dp.message(CommandFilter("stop"))
        async def stop_handler(message: Message):
            await sync_to_async(unsubscribe_chat)(message.chat.id)
            await message.answer("🔕 You will no longer receive notifications.")

        self.stdout.write(self.style.SUCCESS("🤖 Telegram bot started"))
        await dp.start_polling(bot)
