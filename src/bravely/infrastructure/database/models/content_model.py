"""
Supportive Content Database Models

Corpus tables for motivational quotes and CBT tips.
"""

from typing import Optional

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from bravely.infrastructure.database.connection import Base


class MotivationalQuoteModel(Base):
    """Table: motivational_quotes"""

    __tablename__ = "motivational_quotes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    quote: Mapped[str] = mapped_column(Text, nullable=False)
    author: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)


class CbtTipModel(Base):
    """Table: cbt_tips"""

    __tablename__ = "cbt_tips"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(String(50), nullable=False)
