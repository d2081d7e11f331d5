"""
Clients package for reading roster snapshots from external stores.
"""

from .db_client import DBClient
from .roster_client import JsonRosterClient, MongoRosterClient, RosterClient

__all__ = [
    "DBClient",
    "JsonRosterClient",
    "MongoRosterClient",
    "RosterClient",
]
