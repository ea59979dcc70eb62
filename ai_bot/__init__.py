"""Telegram AI bot: group jokes and sales advice."""
