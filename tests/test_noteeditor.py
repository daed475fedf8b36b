import datetime
from unittest import mock

import pytest
from decouple import config

from noteflow.notes.model.note import Note

TEST_ENV = config('TEST_ENV', default='remote')


@pytest.mark.skipif(TEST_ENV != 'local', reason="Requires a display")
class TestNoteEditor:
    APP = None

    @classmethod
    def setup_class(cls):
        from PyQt6.QtWidgets import QApplication
        TestNoteEditor.APP = QApplication.instance() or QApplication([])

    def test_new_note(self):
        from noteflow.gui.viewmodel.noteeditor import NoteEditor
        editor = NoteEditor()
        assert editor.windowTitle() == "New Note"
        assert editor.title() == ""

        editor.txt_title.setText("  Groceries ")
        editor.txt_content.setPlainText("Milk, eggs\n")
        editor.save()
        assert editor.result() == editor.DialogCode.Accepted.value
        assert editor.title() == "Groceries"
        assert editor.content() == "Milk, eggs"

    def test_edit_note(self):
        from noteflow.gui.viewmodel.noteeditor import NoteEditor
        now = datetime.datetime(2024, 5, 24, 9, 0)
        editor = NoteEditor(Note("Alpha", "x", now, now, note_id=1))
        assert editor.windowTitle() == "Edit Note"
        assert editor.title() == "Alpha"
        assert editor.content() == "x"

    def test_empty_title(self):
        from noteflow.gui.viewmodel.noteeditor import NoteEditor
        editor = NoteEditor()
        editor.txt_title.setText("   ")
        with mock.patch('noteflow.gui.viewmodel.noteeditor.QMessageBox') as mock_box:
            editor.save()
            mock_box.return_value.setText.assert_called_with("Note title cannot be empty.")
        assert editor.result() != editor.DialogCode.Accepted.value
