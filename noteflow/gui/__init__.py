"""
This is the GUI package for NoteFlow.

- ``app.py`` - The application entry point.
- ``viewmodel`` - The main window, the note editor and the worker threads behind them.

"""
