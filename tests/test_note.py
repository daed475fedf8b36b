import datetime
from unittest import mock

import pytest

from noteflow.helpers import DateUtil
from noteflow.notes.model.note import Note


class TestNote:
    CREATED = datetime.datetime(2024, 5, 24, 9, 54, 59, 123000)
    UPDATED = datetime.datetime(2024, 5, 25, 18, 30, 0, 456000)

    @staticmethod
    def _create_note(note_id: int | None = 7) -> Note:
        return Note(title="Groceries",
                    content="Milk, eggs",
                    created_date=TestNote.CREATED,
                    updated_date=TestNote.UPDATED,
                    note_id=note_id)

    def test_create(self):
        now = datetime.datetime(2024, 5, 24, 9, 54, 59, 123000)
        with mock.patch.object(DateUtil, 'now', return_value=now):
            note = Note.create("Groceries", "Milk, eggs")
        assert note.id is None
        assert note.title == "Groceries"
        assert note.content == "Milk, eggs"
        assert note.created_date == now
        assert note.updated_date == now

    def test_to_row(self):
        note = TestNote._create_note()
        row = note.to_row()
        assert row['id'] == 7
        assert row['title'] == "Groceries"
        assert row['content'] == "Milk, eggs"
        assert row['created_at'] == DateUtil.to_epoch_ms(TestNote.CREATED)
        assert row['updated_at'] == DateUtil.to_epoch_ms(TestNote.UPDATED)
        assert isinstance(row['created_at'], int)

        unsaved = TestNote._create_note(None)
        assert unsaved.to_row()['id'] is None

    def test_from_row(self):
        row = {
            'id': 3,
            'title': "Alpha",
            'content': None,
            'created_at': DateUtil.to_epoch_ms(TestNote.CREATED),
            'updated_at': DateUtil.to_epoch_ms(TestNote.UPDATED),
        }
        note = Note.from_row(row)
        assert note.id == 3
        assert note.title == "Alpha"
        assert note.content == ""
        assert note.created_date == TestNote.CREATED
        assert note.updated_date == TestNote.UPDATED

        # Converting back gives the same row, apart from the missing content
        assert Note.from_row(note.to_row()) == note

    def test_copy_with(self):
        note = TestNote._create_note()
        edited = note.copy_with(title="Groceries (weekend)", updated_date=TestNote.UPDATED + datetime.timedelta(1))
        assert edited is not note
        assert edited.id == note.id
        assert edited.created_date == note.created_date
        assert edited.title == "Groceries (weekend)"
        assert edited.content == note.content
        assert note.title == "Groceries"

        with pytest.raises(TypeError):
            note.copy_with(colour="red")

    def test_missing_fields(self):
        assert TestNote._create_note().missing_fields() == []
        note = Note(title=None, content="x", created_date=TestNote.CREATED, updated_date=None)
        assert note.missing_fields() == ['title', 'updated_date']

    def test_matches(self):
        note = Note("Alpha", "Quarterly Report", TestNote.CREATED, TestNote.UPDATED)
        assert note.matches("") is True
        assert note.matches("alp") is True
        assert note.matches("ALPHA") is True
        assert note.matches("report") is True
        assert note.matches("beta") is False

    def test_preview(self):
        note = TestNote._create_note()
        assert note.preview() == "Milk, eggs"

        note = note.copy_with(content="one\ntwo\nthree\nfour")
        assert note.preview() == "one\ntwo\nthree…"
        assert note.preview(max_lines=1) == "one…"
        assert note.copy_with(content="").preview() == ""

    def test_display_date(self):
        assert TestNote._create_note().display_date() == "25 May 2024, 18:30"

    def test_equality(self):
        assert TestNote._create_note() == TestNote._create_note()
        assert TestNote._create_note() != TestNote._create_note(8)
        assert TestNote._create_note() != "Groceries"
        with pytest.raises(TypeError):
            hash(TestNote._create_note())

    def test___str(self):
        note = TestNote._create_note()
        assert note.__str__() == "Groceries"
        assert repr(note) == "Note(id=7, title='Groceries')"
