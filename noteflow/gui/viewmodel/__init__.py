"""
This is the view model package for the GUI. Here, you'll find the following:

- ``mainwindow.py`` - Subclasses ``QMainWindow`` to set up the widgets of the main window.
- ``noteflowapp.py`` - Contains the ``NoteFlowApp`` class - the main view controller for the main window.
- ``noteeditor.py`` - Contains the ``NoteEditor`` dialog used to write and edit notes.
- ``threadedtasks.py`` - Contains the logging thread and the worker that runs note operations off the GUI thread.
"""
