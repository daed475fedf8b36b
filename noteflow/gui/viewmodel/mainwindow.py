"""
Contains the ``MainWindow`` class.
"""

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QAction, QCloseEvent
from PyQt6.QtWidgets import (QAbstractItemView, QHBoxLayout, QHeaderView, QLabel, QLineEdit, QMainWindow,
                             QPushButton, QSplitter, QStackedWidget, QTableWidget, QTextEdit, QVBoxLayout, QWidget)


class MainWindow(QMainWindow):
    """
    Sets up the widgets of the main window: a search box, the note table (or an empty-state page in its place), the
    note action buttons and a log view.
    """

    #: Columns of the note table.
    NOTE_COLUMNS = ['Title', 'Preview', 'Updated']

    #: Emitted when the window is closed.
    closed_signal = pyqtSignal()

    def __init__(self, *args, **kwargs):
        super(MainWindow, self).__init__(*args, **kwargs)
        self.setupUi()

    def closeEvent(self, event: QCloseEvent) -> None:
        self.closed_signal.emit()
        super().closeEvent(event)

    def setupUi(self) -> None:
        """
        Creates the widgets and lays them out.
        """
        self.setObjectName("MainWindow")
        self.setWindowTitle("NoteFlow")
        self.resize(860, 620)

        # Menu
        self.actionNew_Note = QAction("New Note", self)
        self.actionNew_Note.setShortcut("Ctrl+N")
        self.actionRefresh = QAction("Refresh", self)
        self.actionRefresh.setShortcut("F5")
        self.actionToggle_Log = QAction("Show Log", self)
        self.actionToggle_Log.setCheckable(True)
        self.actionQuit_NoteFlow = QAction("Quit NoteFlow", self)
        self.actionQuit_NoteFlow.setShortcut("Ctrl+Q")
        mnu_file = self.menuBar().addMenu("&File")
        mnu_file.addAction(self.actionNew_Note)
        mnu_file.addAction(self.actionRefresh)
        mnu_file.addSeparator()
        mnu_file.addAction(self.actionQuit_NoteFlow)
        mnu_view = self.menuBar().addMenu("&View")
        mnu_view.addAction(self.actionToggle_Log)

        central = QWidget(self)
        layout = QVBoxLayout(central)

        self.lbl_heading = QLabel("My Notes")
        self.lbl_heading.setObjectName("lbl_heading")
        layout.addWidget(self.lbl_heading)

        self.txt_search = QLineEdit()
        self.txt_search.setObjectName("txt_search")
        self.txt_search.setPlaceholderText("Search notes...")
        self.txt_search.setClearButtonEnabled(True)
        layout.addWidget(self.txt_search)

        # Notes table, or the empty state when there is nothing to show
        self.stk_notes = QStackedWidget()
        self.tbl_notes = QTableWidget(0, len(MainWindow.NOTE_COLUMNS))
        self.tbl_notes.setObjectName("tbl_notes")
        self.tbl_notes.setHorizontalHeaderLabels(MainWindow.NOTE_COLUMNS)
        self.tbl_notes.setSelectionBehavior(QAbstractItemView.SelectionBehavior.SelectRows)
        self.tbl_notes.setSelectionMode(QAbstractItemView.SelectionMode.SingleSelection)
        self.tbl_notes.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        self.tbl_notes.setWordWrap(True)
        self.tbl_notes.verticalHeader().setVisible(False)
        header = self.tbl_notes.horizontalHeader()
        header.setSectionResizeMode(0, QHeaderView.ResizeMode.ResizeToContents)
        header.setSectionResizeMode(1, QHeaderView.ResizeMode.Stretch)
        header.setSectionResizeMode(2, QHeaderView.ResizeMode.ResizeToContents)
        self.stk_notes.addWidget(self.tbl_notes)

        empty_page = QWidget()
        empty_layout = QVBoxLayout(empty_page)
        empty_layout.addStretch()
        self.lbl_empty_title = QLabel()
        self.lbl_empty_title.setObjectName("lbl_empty_title")
        self.lbl_empty_title.setAlignment(Qt.AlignmentFlag.AlignCenter)
        empty_layout.addWidget(self.lbl_empty_title)
        self.lbl_empty_hint = QLabel()
        self.lbl_empty_hint.setObjectName("lbl_empty_hint")
        self.lbl_empty_hint.setAlignment(Qt.AlignmentFlag.AlignCenter)
        empty_layout.addWidget(self.lbl_empty_hint)
        empty_layout.addStretch()
        self.stk_notes.addWidget(empty_page)

        self.txt_log_display = QTextEdit()
        self.txt_log_display.setObjectName("txt_log_display")
        self.txt_log_display.setReadOnly(True)
        self.txt_log_display.setVisible(False)

        splitter = QSplitter(Qt.Orientation.Vertical)
        splitter.addWidget(self.stk_notes)
        splitter.addWidget(self.txt_log_display)
        splitter.setStretchFactor(0, 3)
        splitter.setStretchFactor(1, 1)
        layout.addWidget(splitter)

        buttons = QHBoxLayout()
        self.btn_note_new = QPushButton("New Note")
        self.btn_note_new.setObjectName("btn_note_new")
        self.btn_note_edit = QPushButton("Edit")
        self.btn_note_edit.setObjectName("btn_note_edit")
        self.btn_note_delete = QPushButton("Delete")
        self.btn_note_delete.setObjectName("btn_note_delete")
        buttons.addWidget(self.btn_note_edit)
        buttons.addWidget(self.btn_note_delete)
        buttons.addStretch()
        buttons.addWidget(self.btn_note_new)
        layout.addLayout(buttons)

        self.setCentralWidget(central)
        self.statusBar().showMessage("Ready.")
