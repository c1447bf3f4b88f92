from .user import User
from .trade import Trade, OPTION_TYPES

__all__ = ['User', 'Trade', 'OPTION_TYPES']
