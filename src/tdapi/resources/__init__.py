"""Resource models for TeamDynamix records.

Each module defines a Pydantic model for one record type together with the
operations that act on a single record. Collection-level operations live on
:class:`tdapi.client.TDAPIClient`.
"""

from .account import Account
from .article import Article
from .asset import Asset
from .base import Resource, UnboundResourceError
from .location import Location
from .ticket import Ticket
from .user import User

__all__ = [
    "Account",
    "Article",
    "Asset",
    "Location",
    "Resource",
    "Ticket",
    "UnboundResourceError",
    "User",
]
