"""
DreamRate CRUD
Queries and mutations over the dreams and reviews tables.
"""

from dreamrate.crud.dream import DreamCRUD
from dreamrate.crud.review import ReviewCRUD

__all__ = ["DreamCRUD", "ReviewCRUD"]
