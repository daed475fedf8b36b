"""
This is the note-taking part of NoteFlow.

- ``model`` - the note model and its persistence.

"""

from . import model

__all__ = ['model', ]
