"""
Source CRUD operations.

Dependencies: sqlalchemy, docchat.boundary.db.models
System role: Parent source persistence
"""

from docchat.boundary.db.CRUD.base_crud import BaseCRUD
from docchat.boundary.db.models.source_model import SourceModel


class SourceCRUD(BaseCRUD[SourceModel]):
    """CRUD operations for SourceModel."""

    def __init__(self) -> None:
        super().__init__(SourceModel)


source_crud = SourceCRUD()
