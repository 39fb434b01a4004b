# app/bot/handlers/__init__.py
"""
🤖 BOT HANDLERS (обработчики команд)

/start, /stats, /orders - всё в commands.py
"""

from .commands import COMMANDS, handle_telegram_update

__all__ = ["COMMANDS", "handle_telegram_update"]
