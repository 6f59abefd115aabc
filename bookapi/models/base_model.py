#!/usr/bin/env python3
"""
Shared SQLAlchemy base for the Book API models.

- Integer primary key assigned by the database on first flush
- Ordering by id gives the stable default order used for pagination
- Persistence goes through an explicit DBStorage handle; models never reach
  for a global storage object
"""

from __future__ import annotations

from sqlalchemy import Column, Integer
from sqlalchemy.orm import declarative_base

# Declarative base for all models
Base = declarative_base()

# Largest value an Integer primary key can hold (signed 64-bit)
MAX_ID = 2 ** 63 - 1


class BaseModel:
    """
    Base mixin for all persistent models.

    id is None until the owning session is flushed.
    """

    id = Column(Integer, primary_key=True, autoincrement=True)

    def __init__(self, *args, **kwargs):
        """Allow attribute initialization via kwargs."""
        for key, value in kwargs.items():
            if key != "__class__":
                setattr(self, key, value)

    def __str__(self) -> str:
        """Human-friendly representation including id and fields."""
        fields = {k: v for k, v in self.__dict__.items() if k != "_sa_instance_state"}
        return f"[{self.__class__.__name__}] ({self.id}) {fields}"

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} id={self.id}>"
