"""
Contains the ``NoteEditor`` class, the dialog used to write a new note or edit an existing one.
"""

from __future__ import annotations

from PyQt6.QtWidgets import (QDialog, QDialogButtonBox, QLabel, QLineEdit, QMessageBox, QPlainTextEdit,
                             QVBoxLayout, QWidget)

from noteflow import helpers
from noteflow.notes.model.note import Note


class NoteEditor(QDialog):
    """
    A dialog with a title field and a content editor. The dialog refuses to close with *Save* while the title is
    empty.
    """

    def __init__(self, note: Note | None = None, parent: QWidget | None = None):
        """
        Initialises the editor.

        :param note: the note to edit, or None to write a new note.
        :param parent: the parent widget.
        """
        super().__init__(parent)
        self.note: Note | None = note
        self.setWindowTitle("Edit Note" if note else "New Note")
        self.resize(560, 480)

        layout = QVBoxLayout(self)
        layout.addWidget(QLabel("Title"))
        self.txt_title = QLineEdit()
        self.txt_title.setObjectName("txt_title")
        self.txt_title.setPlaceholderText("Note title...")
        layout.addWidget(self.txt_title)

        layout.addWidget(QLabel("Content"))
        self.txt_content = QPlainTextEdit()
        self.txt_content.setObjectName("txt_content")
        self.txt_content.setPlaceholderText("Write your note here...")
        layout.addWidget(self.txt_content)

        self.btn_box = QDialogButtonBox(QDialogButtonBox.StandardButton.Save | QDialogButtonBox.StandardButton.Cancel)
        self.btn_box.accepted.connect(self.save)
        self.btn_box.rejected.connect(self.reject)
        layout.addWidget(self.btn_box)

        if note:
            self.txt_title.setText(note.title)
            self.txt_content.setPlainText(note.content)

    def title(self) -> str:
        return self.txt_title.text().strip()

    def content(self) -> str:
        return self.txt_content.toPlainText().strip()

    def save(self) -> None:
        """
        Accepts the dialog if the title is valid, otherwise tells the user why it cannot be saved.
        """
        valid, data = helpers.validate_title(self.txt_title.text())
        if not valid:
            msg = QMessageBox(self)
            msg.setIcon(QMessageBox.Icon.Warning)
            msg.setWindowTitle("Cannot Save Note")
            msg.setText(data)
            msg.setStandardButtons(QMessageBox.StandardButton.Ok)
            msg.exec()
            self.txt_title.setFocus()
            return
        self.accept()
