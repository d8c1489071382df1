from .message_types import LiqiMessage, MessageType
from .parser import Parser

__all__ = ["LiqiMessage", "MessageType", "Parser"]
