from .organization import Branch, Partner
from .auth import User, SessionToken
from .security import SecurityEvent
from .catalog import Product
from .barter import BarterTransaction, BarterLine

__all__ = [
    'Branch', 'Partner',
    'User', 'SessionToken',
    'SecurityEvent',
    'Product',
    'BarterTransaction', 'BarterLine',
]
