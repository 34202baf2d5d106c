from .messages import MESSAGES, get_message, resolve_lang, request_lang

__all__ = ["MESSAGES", "get_message", "resolve_lang", "request_lang"]
