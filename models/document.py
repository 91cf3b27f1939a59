"""
Document Model

Generic document row backing the per-user collections
(ingredients, menu, orders). The document body is stored as JSON.
"""

from datetime import datetime, timezone

from .base import db


def _utcnow():
    return datetime.now(timezone.utc)


class Document(db.Model):
    """One document in a user's collection, addressed by (owner, collection, doc_id)."""
    __table_args__ = (
        db.UniqueConstraint('owner_uid', 'collection', 'doc_id', name='uq_document_address'),
    )

    id = db.Column(db.Integer, primary_key=True)
    owner_uid = db.Column(db.String(32), db.ForeignKey('user.uid', ondelete='CASCADE'), nullable=False, index=True)
    collection = db.Column(db.String(50), nullable=False, index=True)
    doc_id = db.Column(db.String(64), nullable=False)
    data = db.Column(db.JSON, nullable=False, default=dict)
    created_at = db.Column(db.DateTime(timezone=True), default=_utcnow)
    updated_at = db.Column(db.DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)
