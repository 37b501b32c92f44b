"""Declarative base shared by every model and by Alembic's target_metadata."""
from sqlalchemy.orm import declarative_base

Base = declarative_base()
