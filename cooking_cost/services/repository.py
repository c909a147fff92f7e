"""Generic data access: lookup, filtering, sorting and pagination.

One Repository instance per ORM model. Entity-specific behaviour is supplied
as data (model class, sort allow-list, label) rather than by subclassing.
"""
import math
from dataclasses import dataclass, field
from typing import Any, Generic, Iterable, Optional, TypeVar

from sqlalchemy import func
from sqlalchemy.orm import Session

from cooking_cost.constants import (
    DEFAULT_PAGE_SIZE,
    DEFAULT_SORT_FIELD,
    DEFAULT_SORT_ORDER,
    MAX_PAGE_SIZE,
)
from cooking_cost.exceptions import NotFoundError, ValidationError

ModelT = TypeVar("ModelT")


# ============================================================================
# Filter helpers (None values are skipped by Repository.search)
# ============================================================================


def contains(column, value: Optional[str]):
    """Case-insensitive substring match."""
    if not value:
        return None
    escaped = value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return column.ilike(f"%{escaped}%", escape="\\")


def equals(column, value):
    if value is None or value == "":
        return None
    return column == value


def at_least(column, value):
    if value is None:
        return None
    return column >= value


def at_most(column, value):
    if value is None:
        return None
    return column <= value


# ============================================================================
# Page
# ============================================================================


@dataclass
class Page(Generic[ModelT]):
    """One page of results plus the total row count for the same filters."""

    items: list[ModelT] = field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE
    offset: int = 0

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_prev(self) -> bool:
        return self.offset > 0

    @property
    def pagination(self) -> dict[str, Any]:
        return {
            "page": self.page,
            "limit": self.limit,
            "total": self.total,
            "totalPages": self.total_pages,
            "hasNext": self.has_next,
            "hasPrev": self.has_prev,
        }


# ============================================================================
# Repository
# ============================================================================


class Repository(Generic[ModelT]):
    """Shared CRUD queries for one model."""

    def __init__(self, model: type[ModelT], sort_fields: Iterable[str], label: Optional[str] = None):
        self.model = model
        self.sort_fields = list(sort_fields)
        self.label = label or model.__name__

    def get(self, db: Session, entity_id: int) -> Optional[ModelT]:
        return db.get(self.model, entity_id)

    def get_or_404(self, db: Session, entity_id: int) -> ModelT:
        entity = self.get(db, entity_id)
        if entity is None:
            raise NotFoundError(f"{self.label} with ID {entity_id} not found")
        return entity

    def count(self, db: Session, *filters) -> int:
        query = db.query(func.count(self.model.id))
        active = [f for f in filters if f is not None]
        if active:
            query = query.filter(*active)
        return query.scalar() or 0

    def order_by(self, sort_by: Optional[str] = None, sort_order: Optional[str] = None):
        """Build ORDER BY clauses from the allow-list; id breaks ties."""
        sort_by = sort_by or DEFAULT_SORT_FIELD
        sort_order = (sort_order or DEFAULT_SORT_ORDER).upper()

        if sort_by not in self.sort_fields:
            raise ValidationError(
                f"Invalid sort field '{sort_by}'",
                details=[{"field": "sortBy", "message": f"Must be one of: {', '.join(self.sort_fields)}"}],
            )
        if sort_order not in ("ASC", "DESC"):
            raise ValidationError(
                f"Invalid sort order '{sort_order}'",
                details=[{"field": "sortOrder", "message": "Must be ASC or DESC"}],
            )

        column = getattr(self.model, sort_by)
        if sort_order == "ASC":
            return [column.asc(), self.model.id.asc()]
        return [column.desc(), self.model.id.desc()]

    def search(
        self,
        db: Session,
        filters: Iterable = (),
        sort_by: Optional[str] = None,
        sort_order: Optional[str] = None,
        page: Optional[int] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> Page[ModelT]:
        """
        Filtered, sorted, paginated listing.

        When offset is given it wins over page, and page is derived from it.
        """
        active = [f for f in filters if f is not None]
        ordering = self.order_by(sort_by, sort_order)

        limit = DEFAULT_PAGE_SIZE if limit is None else limit
        if limit < 1 or limit > MAX_PAGE_SIZE:
            raise ValidationError(
                f"limit must be between 1 and {MAX_PAGE_SIZE}",
                details=[{"field": "limit", "message": f"Must be between 1 and {MAX_PAGE_SIZE}"}],
            )
        if offset is not None:
            if offset < 0:
                raise ValidationError(
                    "offset must not be negative",
                    details=[{"field": "offset", "message": "Must be >= 0"}],
                )
            page = offset // limit + 1
        else:
            page = 1 if page is None else page
            if page < 1:
                raise ValidationError(
                    "page must be at least 1",
                    details=[{"field": "page", "message": "Must be >= 1"}],
                )
            offset = (page - 1) * limit

        query = db.query(self.model)
        if active:
            query = query.filter(*active)
        items = query.order_by(*ordering).limit(limit).offset(offset).all()
        total = self.count(db, *active)

        return Page(items=items, total=total, page=page, limit=limit, offset=offset)
