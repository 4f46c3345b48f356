"""Shared base for domain entities"""

import uuid
from sqlmodel import SQLModel


def generate_uuid() -> str:
    """Primary key factory for all entities"""
    return str(uuid.uuid4())


class BaseModel(SQLModel):
    """Base class for all SQLModel entities"""
    pass
