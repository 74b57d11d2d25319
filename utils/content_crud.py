"""
Generic content CRUD.

Every content table is described by a TableDescriptor; EntityCRUD runs the
same pipeline for all of them:

    assert_admin -> shape/validate payload -> one row write + commit -> invalidate

Nothing is written before the gate passes, and invalidation only runs after
the commit succeeded.
"""
import copy
import logging
from dataclasses import dataclass, field
from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError

from models import db
from utils.auth_utils import assert_admin
from utils.errors import NotFound, StorageFailure, ValidationFailed
from utils.invalidation import CREATE, DELETE, REORDER, UPDATE, invalidate

logger = logging.getLogger(__name__)


@dataclass
class TableDescriptor:
    """How one content table is written and which routes depend on it"""
    content_type: str
    model: type
    fields: tuple
    label: str = None
    required: tuple = ()
    defaults: dict = field(default_factory=dict)
    # input field name -> model attribute, where they differ
    column_map: dict = field(default_factory=dict)
    # input field name -> callable returning the stored value; raise ValueError to reject
    coercers: dict = field(default_factory=dict)
    # validator(values, existing_row) raises ValidationFailed
    validator: object = None
    lookup_field: str = 'id'
    immutable: tuple = ()
    parent_field: str = None
    order_field: str = None

    def __post_init__(self):
        if self.label is None:
            self.label = self.content_type.replace('_', ' ')

    def attribute(self, name):
        return self.column_map.get(name, name)


class EntityCRUD:
    """Create/update/delete/reorder for one TableDescriptor"""

    def __init__(self, descriptor):
        self.descriptor = descriptor

    @property
    def model(self):
        return self.descriptor.model

    def serialize(self, row):
        """Row dict that carries both column names and the input field names"""
        data = row.to_dict()
        for name, attr in self.descriptor.column_map.items():
            if name not in data:
                data[name] = getattr(row, attr)
        return data

    def _shape(self, data, partial):
        d = self.descriptor
        if not isinstance(data, dict):
            raise ValidationFailed('Expected an object')

        unknown = sorted(set(data) - set(d.fields))
        if unknown:
            raise ValidationFailed(f"Unknown field(s): {', '.join(unknown)}")

        if partial:
            locked = sorted(set(data) & set(d.immutable))
            if locked:
                raise ValidationFailed(f"Field(s) cannot be changed: {', '.join(locked)}")
            values = dict(data)
        else:
            values = copy.deepcopy(d.defaults)
            values.update(data)
            missing = [name for name in d.required if values.get(name) in (None, '')]
            if missing:
                raise ValidationFailed(', '.join(f'{name}: Required' for name in missing))

        for name, coerce in d.coercers.items():
            if values.get(name) is not None:
                try:
                    values[name] = coerce(values[name])
                except (TypeError, ValueError) as e:
                    raise ValidationFailed(f'{name}: {e}')
        return values

    def _find(self, key):
        return self.model.query.filter_by(**{self.descriptor.lookup_field: key}).first()

    def _get_or_404(self, key):
        try:
            row = self._find(key)
        except SQLAlchemyError as e:
            db.session.rollback()
            raise StorageFailure(f'Failed to load {self.descriptor.label}: {e}')
        if row is None:
            raise NotFound(f'{self.descriptor.label.capitalize()} {key} not found')
        return row

    def _apply(self, row, values, principal):
        for name, value in values.items():
            setattr(row, self.descriptor.attribute(name), value)
        row.updated_at = datetime.utcnow()
        if hasattr(row, 'updated_by'):
            row.updated_by = principal.user_id

    def _commit(self, action):
        try:
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error("Failed to %s %s: %s", action, self.descriptor.label, e, exc_info=True)
            raise StorageFailure(f'Failed to {action} {self.descriptor.label}: {e}')

    def get(self, ctx, key):
        assert_admin(ctx)
        return self.serialize(self._get_or_404(key))

    def list(self, ctx, **filters):
        assert_admin(ctx)
        d = self.descriptor
        unknown = sorted(name for name in filters if not hasattr(self.model, name))
        if unknown:
            raise ValidationFailed(f"Unknown filter(s): {', '.join(unknown)}")
        query = self.model.query.filter_by(**filters)
        if d.order_field:
            query = query.order_by(getattr(self.model, d.order_field).asc())
        elif hasattr(self.model, 'created_at'):
            query = query.order_by(self.model.created_at.desc())
        try:
            return [self.serialize(row) for row in query.all()]
        except SQLAlchemyError as e:
            db.session.rollback()
            raise StorageFailure(f'Failed to list {d.label}: {e}')

    def create(self, ctx, data):
        """Insert one row; returns its id"""
        principal = assert_admin(ctx)
        values = self._shape(data, partial=False)
        if self.descriptor.validator:
            self.descriptor.validator(values, None)

        row = self.model()
        self._apply(row, values, principal)
        if hasattr(row, 'created_by'):
            row.created_by = principal.user_id
        db.session.add(row)
        self._commit('create')

        snapshot = self.serialize(row)
        logger.info("Created %s %s", self.descriptor.label, row.id)
        invalidate(self.descriptor.content_type, snapshot, CREATE)
        return row.id

    def update(self, ctx, key, data):
        """Write only the fields present in data; returns the updated row"""
        principal = assert_admin(ctx)
        values = self._shape(data, partial=True)
        row = self._get_or_404(key)
        if self.descriptor.validator:
            self.descriptor.validator(values, row)

        previous = self.serialize(row)
        self._apply(row, values, principal)
        self._commit('update')

        current = self.serialize(row)
        logger.info("Updated %s %s (%s)", self.descriptor.label, key, ', '.join(sorted(values)) or 'timestamp only')
        invalidate(self.descriptor.content_type, current, UPDATE, previous=previous)
        return current

    def delete(self, ctx, key):
        """
        Delete one row. The row is read first only to work out which routes to
        invalidate; a failed read does not stop the delete.
        """
        principal = assert_admin(ctx)
        d = self.descriptor
        snapshot = {d.lookup_field: key}
        row = None
        try:
            row = self._find(key)
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.warning("Could not read %s %s before delete: %s", d.label, key, e)

        if row is not None:
            snapshot = self.serialize(row)
            if hasattr(row, 'updated_by'):
                row.updated_by = principal.user_id
            db.session.delete(row)
        else:
            try:
                deleted = self.model.query.filter_by(**{d.lookup_field: key}).delete(synchronize_session=False)
            except SQLAlchemyError as e:
                db.session.rollback()
                raise StorageFailure(f'Failed to delete {d.label}: {e}')
            if not deleted:
                logger.info("Delete of %s %s matched no row", d.label, key)
        self._commit('delete')

        logger.info("Deleted %s %s", d.label, key)
        invalidate(d.content_type, snapshot, DELETE)

    def upsert(self, ctx, key, data):
        """Create or update the row addressed by lookup_field=key"""
        principal = assert_admin(ctx)
        d = self.descriptor
        if not isinstance(data, dict):
            raise ValidationFailed('Expected an object')
        values = self._shape({**data, d.lookup_field: key}, partial=False)
        if d.validator:
            d.validator(values, None)

        try:
            row = self._find(key)
        except SQLAlchemyError as e:
            db.session.rollback()
            raise StorageFailure(f'Failed to load {d.label}: {e}')
        change_kind = UPDATE if row is not None else CREATE
        if row is None:
            row = self.model()
            db.session.add(row)
        self._apply(row, values, principal)
        self._commit('update' if change_kind == UPDATE else 'create')

        current = self.serialize(row)
        invalidate(d.content_type, current, change_kind)
        return current

    def reorder(self, ctx, parent_id, child_ids):
        """
        Set each child's position to its index in child_ids, scoped to children
        of parent_id. All positions are written in one transaction: either every
        child moves or none does. Ids that are not children of parent_id are
        skipped. Returns {child_id: position} for the rows that were moved.
        """
        principal = assert_admin(ctx)
        d = self.descriptor
        if not d.parent_field or not d.order_field:
            raise ValidationFailed(f'{d.label.capitalize()} cannot be reordered')
        if not isinstance(child_ids, (list, tuple)):
            raise ValidationFailed('Expected a list of ids')
        if not all(isinstance(child_id, str) for child_id in child_ids):
            raise ValidationFailed('ids must be strings')
        if len(set(child_ids)) != len(child_ids):
            raise ValidationFailed('Duplicate ids in ordering')

        parent_column = getattr(self.model, d.parent_field)
        try:
            rows = self.model.query.filter(
                self.model.id.in_(child_ids),
                parent_column == parent_id,
            ).all()
        except SQLAlchemyError as e:
            db.session.rollback()
            raise StorageFailure(f'Failed to load {d.label} for reorder: {e}')
        by_id = {row.id: row for row in rows}

        positions = {}
        for index, child_id in enumerate(child_ids):
            row = by_id.get(child_id)
            if row is None:
                logger.warning("Reorder skipped %s %s: not a child of %s", d.label, child_id, parent_id)
                continue
            self._apply(row, {d.order_field: index}, principal)
            positions[child_id] = index
        self._commit('reorder')

        invalidate(d.content_type, {d.parent_field: parent_id}, REORDER)
        return positions
