from __future__ import annotations

import logging

from sqlalchemy import and_, false, func, or_, true
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.sql.elements import ColumnElement

from storefront.core.errors import ConflictError, InfrastructureError
from storefront.models.models import Category, ProductRow
from storefront.services.predicates import AllOf, AnyOf, Contains, GreaterThan, Predicate


logger = logging.getLogger(__name__)


TEXT_FIELDS = {
    "master_code": ProductRow.master_code,
    "item_code": ProductRow.item_code,
    "item_name": ProductRow.item_name,
    "kind_name": ProductRow.kind_name,
    "group_name": ProductRow.group_name,
    "category": ProductRow.category,
    "description": ProductRow.description,
    "color": ProductRow.color,
    "size": ProductRow.size,
}

NUMERIC_FIELDS = {
    "cur_qty": ProductRow.cur_qty,
    "out_price": ProductRow.out_price,
    "stor_id": ProductRow.stor_id,
    "type_id": ProductRow.type_id,
}


def compile_predicate(predicate: Predicate) -> ColumnElement[bool]:
    """Translate a predicate tree into a SQLAlchemy boolean expression."""
    if isinstance(predicate, Contains):
        column = TEXT_FIELDS.get(predicate.field)
        if column is None:
            raise ValueError(f"Unknown text field: {predicate.field}")
        return func.lower(column).contains(predicate.value.lower(), autoescape=True)

    if isinstance(predicate, GreaterThan):
        column = NUMERIC_FIELDS.get(predicate.field)
        if column is None:
            raise ValueError(f"Unknown numeric field: {predicate.field}")
        return column > predicate.value

    if isinstance(predicate, AnyOf):
        if not predicate.clauses:
            return false()
        return or_(*(compile_predicate(clause) for clause in predicate.clauses))

    if isinstance(predicate, AllOf):
        if not predicate.clauses:
            return true()
        return and_(*(compile_predicate(clause) for clause in predicate.clauses))

    raise TypeError(f"Unsupported predicate: {predicate!r}")


class RowStore:
    """Access to the ``products`` and ``categories`` tables.

    Database failures are reported as ``InfrastructureError``; a duplicate
    ``unique_id`` on insert is reported as ``ConflictError``.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    def fetch_rows(self, predicate: Predicate) -> list[ProductRow]:
        """Rows matching ``predicate``, ordered by item name (stable on id)."""
        condition = compile_predicate(predicate)
        try:
            return (
                self.db.query(ProductRow)
                .filter(condition)
                .order_by(ProductRow.item_name.asc(), ProductRow.id.asc())
                .all()
            )
        except SQLAlchemyError as exc:
            logger.exception("Failed to fetch product rows")
            raise InfrastructureError("Failed to fetch product rows") from exc

    def fetch_categories(self) -> list[Category]:
        try:
            return self.db.query(Category).order_by(Category.name.asc(), Category.id.asc()).all()
        except SQLAlchemyError as exc:
            logger.exception("Failed to fetch categories")
            raise InfrastructureError("Failed to fetch categories") from exc

    def fetch_category(self, category_id: int) -> Category | None:
        try:
            return self.db.query(Category).filter(Category.id == category_id).first()
        except SQLAlchemyError as exc:
            logger.exception("Failed to fetch category id=%s", category_id)
            raise InfrastructureError("Failed to fetch category") from exc

    def fetch_row_by_unique_id(self, unique_id: str) -> ProductRow | None:
        try:
            return self.db.query(ProductRow).filter(ProductRow.unique_id == unique_id).first()
        except SQLAlchemyError as exc:
            logger.exception("Failed to fetch product row unique_id=%s", unique_id)
            raise InfrastructureError("Failed to fetch product row") from exc

    def insert_row(self, row: ProductRow) -> ProductRow:
        """Insert a single row, relying on the unique constraint for ``unique_id``."""
        try:
            self.db.add(row)
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            # Only a row already holding this unique_id is a conflict; any
            # other constraint failure is a storage problem.
            if self.fetch_row_by_unique_id(row.unique_id) is not None:
                raise ConflictError(f"Product {row.unique_id} already exists") from exc
            logger.exception("Integrity error inserting product row unique_id=%s", row.unique_id)
            raise InfrastructureError("Failed to insert product row") from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Failed to insert product row unique_id=%s", row.unique_id)
            raise InfrastructureError("Failed to insert product row") from exc

        self.db.refresh(row)
        return row
