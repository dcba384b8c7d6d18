"""Data layer - ORM models, mappers, repositories and Unit of Work."""

from .uow import UnitOfWork, create_uow

__all__ = ["UnitOfWork", "create_uow"]
