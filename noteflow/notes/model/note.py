"""
Contains the ``Note`` class, which represents a single note, whether freshly written or loaded from SQLite.
"""

from __future__ import annotations

from datetime import datetime
from typing import Mapping

from noteflow.helpers import DateUtil


class Note:
    """
    Represents a note. A note has no ``id`` until it is persisted; the id is then assigned by the store and never
    changes. Edits do not mutate a note, they produce a new one via :py:meth:`copy_with`.
    """

    #: Columns of the ``notes`` table, in order.
    COLUMNS = ('id', 'title', 'content', 'created_at', 'updated_at')

    def __init__(self,
                 title: str,
                 content: str,
                 created_date: datetime,
                 updated_date: datetime,
                 note_id: int | None = None):
        """
        Create a new note.

        :param title: the title of the note.
        :param content: the body of the note, may be empty.
        :param created_date: creation date of the note.
        :param updated_date: modification date of the note (same as creation date for a new note).
        :param note_id: the id assigned by the store, or None if this note has not been saved.
        """
        self.id: int | None = note_id
        self.title: str = title
        self.content: str = content
        self.created_date: datetime = created_date
        self.updated_date: datetime = updated_date

    @staticmethod
    def create(title: str, content: str) -> Note:
        """
        Creates a new, unsaved note stamped with the current time.

        :param title: the title of the note.
        :param content: the body of the note.
        :return: a Note with no id and identical creation and modification dates.
        """
        now = DateUtil.now()
        return Note(title=title, content=content, created_date=now, updated_date=now)

    @staticmethod
    def from_row(row: Mapping) -> Note:
        """
        Creates a Note from a row of the ``notes`` table.

        :param row: a mapping (e.g. ``sqlite3.Row``) with the columns in :py:attr:`COLUMNS`.
        :return: a Note instance representing the row.
        """
        return Note(
            note_id=row['id'],
            title=row['title'] or '',
            content=row['content'] or '',
            created_date=DateUtil.from_epoch_ms(row['created_at']),
            updated_date=DateUtil.from_epoch_ms(row['updated_at']))

    def to_row(self) -> dict:
        """
        Converts this note to a row of the ``notes`` table, with dates as epoch milliseconds.

        :return: a dictionary keyed by column name.
        """
        return {
            'id': self.id,
            'title': self.title,
            'content': self.content,
            'created_at': DateUtil.to_epoch_ms(self.created_date) if self.created_date is not None else None,
            'updated_at': DateUtil.to_epoch_ms(self.updated_date) if self.updated_date is not None else None,
        }

    def copy_with(self, **changes) -> Note:
        """
        Returns a copy of this note with the given fields replaced. Accepts ``note_id``, ``title``, ``content``,
        ``created_date`` and ``updated_date``.

        :return: the new Note.
        """
        fields = {
            'note_id': self.id,
            'title': self.title,
            'content': self.content,
            'created_date': self.created_date,
            'updated_date': self.updated_date,
        }
        unknown = set(changes) - set(fields)
        if unknown:
            raise TypeError('Unknown note fields: {}'.format(', '.join(sorted(unknown))))
        fields.update(changes)
        return Note(**fields)

    def missing_fields(self) -> list[str]:
        """
        Get the names of required fields that have not been set.

        :return: a list of field names, empty if the note can be stored.
        """
        required = ('title', 'content', 'created_date', 'updated_date')
        return [name for name in required if getattr(self, name) is None]

    def matches(self, query: str) -> bool:
        """
        Case-insensitive substring test against the title and content of this note.

        :param query: the text to look for.
        :return: True if the query is empty, or appears in the title or content.
        """
        needle = query.lower()
        return needle in self.title.lower() or needle in self.content.lower()

    def preview(self, max_lines: int = 3) -> str:
        """
        Get the first lines of this note's content, as shown in the note list.

        :param max_lines: the number of lines to keep.
        :return: the preview text, with an ellipsis if lines were dropped.
        """
        lines = self.content.splitlines()
        if len(lines) <= max_lines:
            return '\n'.join(lines)
        return '\n'.join(lines[:max_lines]) + '…'

    def display_date(self) -> str:
        return DateUtil.display(self.updated_date)

    def __eq__(self, other):
        if not isinstance(other, Note):
            return NotImplemented
        return self.to_row() == other.to_row()

    # Notes are mutable, so they are compared by value and never hashed.
    __hash__ = None

    def __repr__(self):
        return 'Note(id={0!r}, title={1!r})'.format(self.id, self.title)

    def __str__(self):
        return self.title
