"""Data access for engine inputs."""

from staffops_engine.repositories.base import OperationsRepository, SubjectNotFoundError
from staffops_engine.repositories.sqlalchemy_repository import SqlAlchemyOperationsRepository

__all__ = [
    "OperationsRepository",
    "SqlAlchemyOperationsRepository",
    "SubjectNotFoundError",
]
