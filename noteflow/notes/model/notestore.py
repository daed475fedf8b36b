"""
Contains the ``NoteStore`` class, which persists notes to a local SQLite database file.
"""

from __future__ import annotations

import logging
import sqlite3
import threading
from contextlib import closing
from pathlib import Path
from typing import List

from noteflow.notes.model.note import Note


class NoteStore:
    """
    Gateway to the SQLite database holding the ``notes`` table. A single connection is opened lazily the first time
    the store is used and kept until :py:meth:`close` is called.

    Every method returns a ``(success, data)`` tuple, where ``data`` is either the result or an error message.
    """

    #: Value stored in ``PRAGMA user_version`` once the schema is created.
    SCHEMA_VERSION: int = 1

    #: Columns returned by queries, in order.
    _SELECT_COLUMNS = "id, title, content, created_at, updated_at"

    #: Most recently modified first; id breaks ties so repeated calls agree.
    _ORDER_BY = "ORDER BY updated_at DESC, id DESC"

    def __init__(self, db_path: Path | str):
        """
        Create a new store. No file is opened until the first operation.

        :param db_path: path to the SQLite database file. Created if it does not exist.
        """
        self.db_path: Path = Path(db_path)
        self._connection: sqlite3.Connection | None = None
        self._init_lock: threading.Lock = threading.Lock()

    def _connect(self) -> sqlite3.Connection:
        with self._init_lock:
            if self._connection is None:
                self.db_path.parent.mkdir(parents=True, exist_ok=True)
                connection = sqlite3.connect(self.db_path, check_same_thread=False)
                connection.row_factory = sqlite3.Row
                try:
                    NoteStore._create_schema(connection)
                except sqlite3.Error:
                    connection.close()
                    raise
                self._connection = connection
                logging.debug('Opened note database {}'.format(self.db_path))
            return self._connection

    @staticmethod
    def _create_schema(connection: sqlite3.Connection) -> None:
        with closing(connection.cursor()) as cursor:
            sql_create_note_table = """CREATE TABLE IF NOT EXISTS notes (
                                id INTEGER PRIMARY KEY AUTOINCREMENT,
                                title TEXT NOT NULL,
                                content TEXT NOT NULL,
                                created_at INTEGER NOT NULL,
                                updated_at INTEGER NOT NULL
                                );"""
            cursor.execute(sql_create_note_table)
            cursor.execute("PRAGMA user_version")
            if cursor.fetchone()[0] == 0:
                cursor.execute("PRAGMA user_version = {}".format(int(NoteStore.SCHEMA_VERSION)))
            connection.commit()

    def initialize(self) -> tuple[bool, str]:
        """
        Opens the database file, creating it and the ``notes`` table if needed. Safe to call any number of times.

        :returns:

            -success (:py:class:`bool`) - true if the store is ready for use.

            -data (:py:class:`str`) - error message on failure, or success message.

        """
        try:
            self._connect()
        except sqlite3.Error as e:
            return False, repr(e)
        return True, 'notes table ready in {}'.format(self.db_path)

    def close(self) -> None:
        """
        Closes the underlying connection, if open. The next operation will re-open it.
        """
        with self._init_lock:
            if self._connection is not None:
                self._connection.close()
                self._connection = None
                logging.debug('Closed note database {}'.format(self.db_path))

    def insert(self, note: Note) -> tuple[bool, str] | tuple[bool, int]:
        """
        Inserts a new note. Any id already set on the note is ignored.

        :param note: the note to insert.

        :returns:

            -success (:py:class:`bool`) - true if the note is successfully inserted.

            -data (:py:class:`str` | :py:class:`int`) - error message on failure, or the id assigned to the note.

        """
        missing = note.missing_fields()
        if missing:
            return False, 'Note is missing required fields: {}'.format(', '.join(missing))

        row = note.to_row()
        try:
            connection = self._connect()
            with closing(connection.cursor()) as cursor:
                sql_insert_note = """INSERT INTO notes(title, content, created_at, updated_at)
                                VALUES (?, ?, ?, ?)"""
                cursor.execute(sql_insert_note, (row['title'], row['content'], row['created_at'], row['updated_at']))
                connection.commit()
                note_id = cursor.lastrowid
        except sqlite3.Error as e:
            return False, repr(e)
        logging.debug('Inserted note {0} with id {1}'.format(note.title, note_id))
        return True, note_id

    def list_all(self) -> tuple[bool, str] | tuple[bool, List[Note]]:
        """
        Get every stored note, most recently modified first.

        :returns:

            -success (:py:class:`bool`) - true if the notes are successfully retrieved.

            -data (:py:class:`str` | :py:class:`List[Note]`) - error message on failure, or the list of notes.

        """
        try:
            connection = self._connect()
            with closing(connection.cursor()) as cursor:
                cursor.execute("SELECT {0} FROM notes {1}".format(NoteStore._SELECT_COLUMNS, NoteStore._ORDER_BY))
                notes = [Note.from_row(row) for row in cursor.fetchall()]
        except (sqlite3.Error, ValueError, OverflowError, OSError) as e:
            return False, repr(e)
        return True, notes

    def search(self, substring: str) -> tuple[bool, str] | tuple[bool, List[Note]]:
        """
        Get the notes whose title or content contains ``substring``, most recently modified first. Matching uses
        SQLite's ``LIKE``, so it ignores case for ASCII letters. Wildcard characters in ``substring`` match literally.

        :param substring: the text to look for.

        :returns:

            -success (:py:class:`bool`) - true if the search is successfully carried out.

            -data (:py:class:`str` | :py:class:`List[Note]`) - error message on failure, or the matching notes.

        """
        escaped = substring.replace('\\', '\\\\').replace('%', '\\%').replace('_', '\\_')
        pattern = '%{}%'.format(escaped)
        try:
            connection = self._connect()
            with closing(connection.cursor()) as cursor:
                sql_search_notes = """SELECT {0} FROM notes
                                WHERE title LIKE ? ESCAPE '\\' OR content LIKE ? ESCAPE '\\'
                                {1}""".format(NoteStore._SELECT_COLUMNS, NoteStore._ORDER_BY)
                cursor.execute(sql_search_notes, (pattern, pattern))
                notes = [Note.from_row(row) for row in cursor.fetchall()]
        except (sqlite3.Error, ValueError, OverflowError, OSError) as e:
            return False, repr(e)
        return True, notes

    def update(self, note: Note) -> tuple[bool, str] | tuple[bool, int]:
        """
        Overwrites the title, content and modification date of a stored note.

        :param note: the edited note. Its id selects the row to update.

        :returns:

            -success (:py:class:`bool`) - true if the statement ran, even if no row matched.

            -data (:py:class:`str` | :py:class:`int`) - error message on failure, or the number of rows updated.

        """
        if note.id is None:
            return False, 'Cannot update note {} as it has not been saved.'.format(note.title)
        missing = note.missing_fields()
        if missing:
            return False, 'Note is missing required fields: {}'.format(', '.join(missing))

        row = note.to_row()
        try:
            connection = self._connect()
            with closing(connection.cursor()) as cursor:
                sql_update_note = "UPDATE notes SET title = ?, content = ?, updated_at = ? WHERE id = ?"
                cursor.execute(sql_update_note, (row['title'], row['content'], row['updated_at'], note.id))
                connection.commit()
                count = cursor.rowcount
        except sqlite3.Error as e:
            return False, repr(e)
        if count == 0:
            logging.debug('No stored note with id {} to update.'.format(note.id))
        return True, count

    def delete(self, note_id: int) -> tuple[bool, str] | tuple[bool, int]:
        """
        Permanently deletes a stored note.

        :param note_id: the id of the note to delete.

        :returns:

            -success (:py:class:`bool`) - true if the statement ran, even if no row matched.

            -data (:py:class:`str` | :py:class:`int`) - error message on failure, or the number of rows deleted.

        """
        try:
            connection = self._connect()
            with closing(connection.cursor()) as cursor:
                cursor.execute("DELETE FROM notes WHERE id = ?", (note_id,))
                connection.commit()
                count = cursor.rowcount
        except sqlite3.Error as e:
            return False, repr(e)
        if count == 0:
            logging.debug('No stored note with id {} to delete.'.format(note_id))
        return True, count

    def __str__(self):
        return 'Note Store: {}'.format(self.db_path)
