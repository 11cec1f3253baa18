"""CLI command modules."""

from .database import db
from .mood import checkin, week
from .serve import serve

__all__ = ["db", "serve", "checkin", "week"]
