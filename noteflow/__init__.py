"""
This is the main package for NoteFlow.

- ``notes`` - the note model: the ``Note`` entity, the SQLite store and the in-memory note list.
- ``gui`` - the NoteFlow GUI.
- ``helpers`` - helpers used by both the note model and the GUI.

"""

from . import helpers

__all__ = ['helpers', ]
