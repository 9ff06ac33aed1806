# Feedback Collector Models
from feedback_collector.models.account import Account
from feedback_collector.models.base import BaseModel
from feedback_collector.models.feedback import Feedback
from feedback_collector.models.room import Room

__all__ = [
    "Account",
    "BaseModel",
    "Feedback",
    "Room",
]
