"""
Document Store Service

Per-user document collections backed by the ``document`` table.
Records come back as plain dicts with their ``id`` merged in; every
write commits on its own, with no multi-document transactions.
"""

import logging
import uuid

from sqlalchemy.exc import SQLAlchemyError

from constants import COLLECTIONS
from models import db, Document

logger = logging.getLogger(__name__)


def new_document_id():
    return uuid.uuid4().hex


class DocumentStore:
    """CRUD over one user's ``ingredients``, ``menu`` and ``orders`` collections."""

    def __init__(self, owner_uid):
        if not owner_uid:
            raise ValueError('A document store needs an owner uid')
        self.owner_uid = owner_uid

    def _check_collection(self, collection):
        if collection not in COLLECTIONS:
            raise ValueError(f'Unknown collection: {collection}')

    def _row(self, collection, doc_id):
        return Document.query.filter_by(
            owner_uid=self.owner_uid, collection=collection, doc_id=doc_id
        ).first()

    def _commit(self, action, collection, doc_id):
        try:
            db.session.commit()
        except SQLAlchemyError:
            db.session.rollback()
            logger.exception('Failed to %s %s/%s', action, collection, doc_id)
            raise

    def list_all(self, collection):
        """All records of a collection, oldest first."""
        self._check_collection(collection)
        rows = Document.query.filter_by(
            owner_uid=self.owner_uid, collection=collection
        ).order_by(Document.id).all()
        return [{**row.data, 'id': row.doc_id} for row in rows]

    def get(self, collection, doc_id):
        """One record, or None when it does not exist."""
        self._check_collection(collection)
        row = self._row(collection, doc_id)
        if row is None:
            return None
        return {**row.data, 'id': row.doc_id}

    def put(self, collection, doc_id, fields, merge=False):
        """
        Write a document.

        Args:
            collection: Collection name
            doc_id: Existing or chosen id; None assigns a new id
            fields: Field dict to store
            merge: Update only the given fields instead of replacing the body

        Returns:
            The document id
        """
        self._check_collection(collection)
        fields = {k: v for k, v in dict(fields).items() if k != 'id'}
        if doc_id is None:
            doc_id = new_document_id()

        row = self._row(collection, doc_id)
        if row is None:
            row = Document(owner_uid=self.owner_uid, collection=collection,
                           doc_id=doc_id, data=fields)
            db.session.add(row)
        elif merge:
            row.data = {**row.data, **fields}
        else:
            row.data = fields

        self._commit('write', collection, doc_id)
        logger.info('Stored %s/%s for %s (merge=%s)', collection, doc_id, self.owner_uid, merge)
        return doc_id

    def delete(self, collection, doc_id):
        """Delete a document. Returns False if it did not exist."""
        self._check_collection(collection)
        row = self._row(collection, doc_id)
        if row is None:
            return False
        db.session.delete(row)
        self._commit('delete', collection, doc_id)
        logger.info('Deleted %s/%s for %s', collection, doc_id, self.owner_uid)
        return True
