"""
Database utilities and common operations to reduce code duplication
"""
import math
from typing import Type, TypeVar, Any, Dict
from sqlalchemy.orm import Session
from fastapi import HTTPException, status

T = TypeVar('T')


class DatabaseUtils:
    """Utility class for common database operations"""

    @staticmethod
    def get_by_id_or_404(db: Session, model_class: Type[T], obj_id: Any) -> T:
        """Fetch a row by primary key, or raise 404 naming the model."""
        obj = db.query(model_class).filter(model_class.id == obj_id).first()
        if not obj:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"{model_class.__name__} not found"
            )
        return obj

    @staticmethod
    def paginate_query(
        query,
        page: int = 1,
        limit: int = 10,
        max_limit: int = 100
    ) -> Dict[str, Any]:
        """
        Page-number pagination of a SQLAlchemy query

        Args:
            query: SQLAlchemy query object (already ordered)
            page: Page number (1-based)
            limit: Items per page
            max_limit: Maximum items per page

        Returns:
            Dictionary with the page items and pagination info
        """
        # Limit page size to prevent abuse
        limit = max(1, min(limit, max_limit))
        page = max(1, page)

        total = query.order_by(None).count()
        items = query.offset((page - 1) * limit).limit(limit).all()

        return {
            'items': items,
            'pagination': {
                'total': total,
                'page': page,
                'limit': limit,
                'total_pages': math.ceil(total / limit) if total else 0,
            }
        }
