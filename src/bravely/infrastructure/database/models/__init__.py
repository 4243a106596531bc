"""
Database ORM models package.
"""

from bravely.infrastructure.database.models.user_model import UserModel
from bravely.infrastructure.database.models.session_model import ExposureSessionModel
from bravely.infrastructure.database.models.content_model import (
    CbtTipModel,
    MotivationalQuoteModel,
)

__all__ = [
    "UserModel",
    "ExposureSessionModel",
    "MotivationalQuoteModel",
    "CbtTipModel",
]
