"""
Contains the ``NoteListState`` class, which holds the notes loaded from the store and the filtered view displayed by
the GUI, and the ``Subscription`` class returned to anything listening for changes to it.
"""

from __future__ import annotations

import logging
from typing import Callable, List

from noteflow import helpers
from noteflow.notes.model.note import Note
from noteflow.notes.model.notestore import NoteStore


class Subscription:
    """
    A registration for state-change events. Events stop being delivered once :py:meth:`cancel` is called, or when the
    ``with`` block the subscription was used in exits.
    """

    def __init__(self, state: NoteListState, callback: Callable[[str, NoteListState], None]):
        self.state: NoteListState = state
        self.callback: Callable[[str, NoteListState], None] = callback

    @property
    def active(self) -> bool:
        return self in self.state._subscriptions

    def cancel(self) -> None:
        """
        Stop receiving events. Does nothing if already cancelled.
        """
        if self.active:
            self.state._subscriptions.remove(self)

    def __enter__(self) -> Subscription:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.cancel()


class NoteListState:
    """
    In-memory view of the note collection. All mutations go through the store and are followed by a reload, so
    ``all_notes`` always reflects the database after a successful operation. ``visible_notes`` is ``all_notes``
    narrowed by the current ``query``.
    """

    #: Loading has started.
    EVENT_LOADING: str = 'loading'
    #: Notes were reloaded from the store.
    EVENT_LOADED: str = 'loaded'
    #: Reloading failed; previous notes are kept.
    EVENT_LOAD_FAILED: str = 'load_failed'
    #: The filter query changed.
    EVENT_FILTERED: str = 'filtered'

    def __init__(self, store: NoteStore):
        """
        Create an empty note list. Call :py:meth:`reload` to populate it.

        :param store: the store notes are read from and written to.
        """
        self.store: NoteStore = store
        self.all_notes: List[Note] = []
        self.visible_notes: List[Note] = []
        self.query: str = ''
        self.loading: bool = False
        self._subscriptions: List[Subscription] = []

    # SUBSCRIPTIONS ----------------------------------------------------------------------------------------------------

    def subscribe(self, callback: Callable[[str, NoteListState], None]) -> Subscription:
        """
        Register a callback for state-change events. The callback is called with the event name (one of the
        ``EVENT_*`` constants) and this state.

        :param callback: function to call on every change.
        :return: the subscription, used to stop receiving events.
        """
        subscription = Subscription(self, callback)
        self._subscriptions.append(subscription)
        return subscription

    def _notify(self, event: str) -> None:
        for subscription in list(self._subscriptions):
            try:
                subscription.callback(event, self)
            except Exception as e:
                logging.critical('Subscriber failed handling {0} event: {1}'.format(event, repr(e)))

    # QUERIES ----------------------------------------------------------------------------------------------------------

    def get(self, note_id: int) -> Note | None:
        """
        Get a loaded note by id.

        :param note_id: the id of the note.
        :return: the note, or None if no loaded note has this id.
        """
        return next((note for note in self.all_notes if note.id == note_id), None)

    def _apply_filter(self) -> None:
        if self.query == '':
            self.visible_notes = list(self.all_notes)
        else:
            self.visible_notes = [note for note in self.all_notes if note.matches(self.query)]

    # OPERATIONS -------------------------------------------------------------------------------------------------------

    def reload(self) -> tuple[bool, str]:
        """
        Reload all notes from the store. The current filter query is re-applied to the fresh notes.

        :returns:

            -success (:py:class:`bool`) - true if the notes are successfully reloaded.

            -data (:py:class:`str`) - error message on failure, or success message.

        """
        self.loading = True
        self._notify(NoteListState.EVENT_LOADING)

        success, data = self.store.list_all()
        if not success:
            error = 'Failed to load notes: {}'.format(data)
            logging.critical(error)
            self.loading = False
            self._notify(NoteListState.EVENT_LOAD_FAILED)
            return False, error

        self.all_notes = data
        self._apply_filter()
        self.loading = False
        self._notify(NoteListState.EVENT_LOADED)
        debug_msg = 'Loaded {} notes.'.format(len(self.all_notes))
        logging.debug(debug_msg)
        return True, debug_msg

    def create(self, title: str, content: str) -> tuple[bool, str]:
        """
        Create and store a new note, then reload.

        :param title: the title of the note. Must not be empty.
        :param content: the body of the note.

        :returns:

            -success (:py:class:`bool`) - true if the note is successfully created.

            -data (:py:class:`str`) - user-visible error message on failure, or success message.

        """
        valid, title = helpers.validate_title(title)
        if not valid:
            return False, title

        note = Note.create(title, (content or '').strip())
        success, data = self.store.insert(note)
        if not success:
            error = 'Failed to create note {0}: {1}'.format(title, data)
            logging.critical(error)
            return False, error
        logging.info('Created note {0} with id {1}'.format(title, data))
        return self.reload()

    def edit(self, note_id: int, title: str, content: str) -> tuple[bool, str]:
        """
        Change the title and content of a loaded note, then reload. The creation date is kept and the modification
        date is refreshed.

        :param note_id: the id of a loaded note.
        :param title: the new title. Must not be empty.
        :param content: the new body.

        :raises LookupError: if no loaded note has this id.

        :returns:

            -success (:py:class:`bool`) - true if the note is successfully updated.

            -data (:py:class:`str`) - user-visible error message on failure, or success message.

        """
        valid, title = helpers.validate_title(title)
        if not valid:
            return False, title

        existing = self.get(note_id)
        if existing is None:
            raise LookupError('No loaded note with id {}'.format(note_id))
        updated = existing.copy_with(
            title=title,
            content=(content or '').strip(),
            updated_date=max(helpers.DateUtil.now(), existing.updated_date))

        success, data = self.store.update(updated)
        if not success:
            error = 'Failed to update note {0}: {1}'.format(existing.title, data)
            logging.critical(error)
            return False, error
        logging.info('Updated note {0} with id {1}'.format(title, note_id))
        return self.reload()

    def remove(self, note_id: int) -> tuple[bool, str]:
        """
        Delete a note, then reload.

        :param note_id: the id of the note to delete.

        :returns:

            -success (:py:class:`bool`) - true if the note is successfully deleted, or was already gone.

            -data (:py:class:`str`) - error message on failure, or success message.

        """
        success, data = self.store.delete(note_id)
        if not success:
            error = 'Failed to delete note {0}: {1}'.format(note_id, data)
            logging.critical(error)
            return False, error
        logging.info('Deleted note with id {}'.format(note_id))
        return self.reload()

    def filter(self, query: str) -> None:
        """
        Narrow ``visible_notes`` to the loaded notes whose title or content contains ``query``, ignoring case. An
        empty query shows every note.

        :param query: the text to filter by.
        """
        self.query = query or ''
        self._apply_filter()
        self._notify(NoteListState.EVENT_FILTERED)

    def clear_filter(self) -> None:
        """
        Show every loaded note.
        """
        self.filter('')
