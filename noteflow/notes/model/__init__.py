"""
This is the model of NoteFlow. Here, you'll find the following:

- ``note.py`` - Contains the ``Note`` class that represents a single note.
- ``notestore.py`` - Contains the ``NoteStore`` class which persists notes in a local SQLite database.
- ``notelist.py`` - Contains the ``NoteListState`` class which holds the loaded notes, the filtered view of them and
  notifies subscribers when either changes.

"""

from . import note, notestore, notelist

__all__ = ['note', 'notestore', 'notelist', ]
