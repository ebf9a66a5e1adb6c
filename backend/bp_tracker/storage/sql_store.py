"""
Relational reading store backed by Flask-SQLAlchemy.
"""
import logging
from bp_tracker import db
from bp_tracker.models.entry import Entry
from bp_tracker.storage.base import EntryStore

logger = logging.getLogger(__name__)


class SqlEntryStore(EntryStore):
    """Stores readings in the ``entries`` table. Requires an app context."""

    def list_all(self):
        entries = Entry.query.order_by(Entry.date_time.desc(), Entry.id.desc()).all()
        return [entry.to_reading() for entry in entries]

    def create(self, reading):
        entry = Entry.from_reading(reading)
        db.session.add(entry)
        try:
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise
        return entry.to_reading()

    def get_by_id(self, entry_id):
        entry = db.session.get(Entry, entry_id)
        return entry.to_reading() if entry else None

    def delete_by_id(self, entry_id):
        try:
            count = Entry.query.filter_by(id=entry_id).delete()
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise
        return count
