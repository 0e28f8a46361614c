#!/usr/bin/env python3
"""
TapCalc - a touch-style calculator with a running expression and history
Supports a full infix expression mode and a one-operation accumulator mode.
"""

import logging
import sys

from PyQt6.QtWidgets import (
    QApplication, QMainWindow, QWidget, QVBoxLayout, QHBoxLayout,
    QGridLayout, QPushButton, QLabel, QDialog, QDialogButtonBox,
    QCheckBox, QFontDialog, QScrollArea, QFrame, QSizePolicy
)
from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QFont, QKeyEvent, QAction
import qdarktheme

from tapcalc import config as settings
from tapcalc.parser import ADD, SUBTRACT, MULTIPLY, DIVIDE
from tapcalc.session import CalculatorSession
from tapcalc.strategies import get_strategy

logger = logging.getLogger(__name__)

BUTTON_STYLE = """
    QPushButton {
        border: 1px solid #a0a0a0;
        border-radius: 22px;
        font-size: 16pt;
    }
"""

# Button definitions (text, row, col, action)
BUTTONS = [
    ("AC", 0, 0, "clear"), ("( )", 0, 1, "parenthesis"), ("⌫", 0, 2, "backspace"), (DIVIDE, 0, 3, DIVIDE),
    ("7", 1, 0, "7"), ("8", 1, 1, "8"), ("9", 1, 2, "9"), (MULTIPLY, 1, 3, MULTIPLY),
    ("4", 2, 0, "4"), ("5", 2, 1, "5"), ("6", 2, 2, "6"), (SUBTRACT, 2, 3, SUBTRACT),
    ("1", 3, 0, "1"), ("2", 3, 1, "2"), ("3", 3, 2, "3"), (ADD, 3, 3, ADD),
    ("⏱", 4, 0, "history"), ("0", 4, 1, "0"), (".", 4, 2, "."), ("=", 4, 3, "equals"),
]

KEY_OPERATORS = {
    Qt.Key.Key_Plus: ADD,
    Qt.Key.Key_Minus: SUBTRACT,
    Qt.Key.Key_Asterisk: MULTIPLY,
    Qt.Key.Key_Slash: DIVIDE,
}




class SettingsDialog(QDialog):
    """Settings dialog for calculator preferences"""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Settings")
        self.setModal(True)
        self.resize(300, 130)

        layout = QVBoxLayout()

        self.accumulator_check = QCheckBox("One operation at a time (no parentheses)")
        self.accumulator_check.setChecked(parent.config.get("mode") == "accumulator")
        layout.addWidget(self.accumulator_check)

        # Font selection
        font_layout = QHBoxLayout()
        font_label = QLabel("Display Font:")
        self.font_button = QPushButton("Choose Font...")
        self.font_button.clicked.connect(self.choose_font)
        font_layout.addWidget(font_label)
        font_layout.addWidget(self.font_button)
        font_layout.addStretch()
        layout.addLayout(font_layout)

        layout.addStretch()

        button_box = QDialogButtonBox(
            QDialogButtonBox.StandardButton.Ok |
            QDialogButtonBox.StandardButton.Cancel
        )
        button_box.accepted.connect(self.accept)
        button_box.rejected.connect(self.reject)
        layout.addWidget(button_box)

        self.setLayout(layout)
        self.selected_font = None

    def choose_font(self):
        """Open font dialog"""
        current_font = self.parent().display.font()
        font, ok = QFontDialog.getFont(current_font, self)
        if ok:
            self.selected_font = font

    @property
    def mode(self):
        return "accumulator" if self.accumulator_check.isChecked() else "expression"


class HistoryRow(QLabel):
    """A history line that can be clicked to reuse its result"""

    clicked = pyqtSignal(int)

    def __init__(self, index, text, parent=None):
        super().__init__(text, parent)
        self.index = index
        self.setWordWrap(True)
        self.setCursor(Qt.CursorShape.PointingHandCursor)
        self.setStyleSheet("padding: 6px; background-color: #101010; border-radius: 3px;")

    def mousePressEvent(self, event):
        if event.button() == Qt.MouseButton.LeftButton:
            self.clicked.emit(self.index)
        super().mousePressEvent(event)


class HistoryPanel(QFrame):
    """History panel showing previous calculations, oldest first"""

    entry_selected = pyqtSignal(int)
    clear_requested = pyqtSignal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setFrameStyle(QFrame.Shape.StyledPanel | QFrame.Shadow.Sunken)

        layout = QVBoxLayout()
        layout.setContentsMargins(8, 8, 8, 8)

        # Title + Clear
        header = QHBoxLayout()
        title = QLabel("History")
        title_font = QFont()
        title_font.setBold(True)
        title.setFont(title_font)
        header.addWidget(title)
        header.addStretch()
        self.clear_button = QPushButton("Clear")
        self.clear_button.clicked.connect(self.clear_requested.emit)
        header.addWidget(self.clear_button)
        layout.addLayout(header)

        self.scroll = QScrollArea()
        self.scroll.setWidgetResizable(True)
        self.scroll.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)

        self.history_widget = QWidget()
        self.history_layout = QVBoxLayout()
        self.history_layout.setSpacing(4)
        self.history_layout.addStretch()
        self.history_widget.setLayout(self.history_layout)

        self.scroll.setWidget(self.history_widget)
        layout.addWidget(self.scroll)

        self.setLayout(layout)
        self.history_items = []

    def add_entry(self, text):
        """Add a history row below the existing ones"""
        row = HistoryRow(len(self.history_items), text)
        row.clicked.connect(self.entry_selected.emit)
        font = QFont()
        font.setPointSize(11)
        row.setFont(font)

        # Insert before the stretch
        self.history_layout.insertWidget(self.history_layout.count() - 1, row)
        self.history_items.append(row)

        bar = self.scroll.verticalScrollBar()
        bar.setValue(bar.maximum())

    def set_entries(self, rows):
        """Make the panel show exactly the given rows"""
        shown = [label.text() for label in self.history_items]
        if shown == rows[:len(shown)]:
            for text in rows[len(shown):]:
                self.add_entry(text)
            return

        self.clear_history()
        for text in rows:
            self.add_entry(text)

    def clear_history(self):
        """Clear all history rows"""
        for label in self.history_items:
            self.history_layout.removeWidget(label)
            label.deleteLater()
        self.history_items.clear()

    def rows(self):
        return [label.text() for label in self.history_items]


class CalculatorWindow(QMainWindow):
    """Main calculator window"""

    def __init__(self, config=None, config_file=None):
        super().__init__()

        self.config_file = config_file
        if config is None:
            config = settings.load_settings(config_file)
        self.config = dict(settings.DEFAULTS, **config)

        self.session = CalculatorSession(get_strategy(self.config["mode"]))

        self.init_ui()
        self.apply_font()
        self.set_history_visible(self.config.get("show_history", False))
        self.refresh()

    def init_ui(self):
        """Initialize the user interface"""
        self.setWindowTitle("TapCalc")

        central = QWidget()
        self.setCentralWidget(central)
        main_layout = QVBoxLayout()
        main_layout.setSpacing(8)

        # History panel above the display, hidden until toggled
        self.history_panel = HistoryPanel()
        self.history_panel.entry_selected.connect(self.recall_entry)
        self.history_panel.clear_requested.connect(self.clear_history)
        main_layout.addWidget(self.history_panel, 3)

        # Display area
        display_frame = QFrame()
        display_frame.setFrameStyle(QFrame.Shape.StyledPanel | QFrame.Shadow.Sunken)
        display_layout = QVBoxLayout()
        display_layout.setContentsMargins(8, 8, 8, 8)

        # Top info row (Mode + Expression / Pending Op)
        info_layout = QHBoxLayout()

        self.mode_label = QLabel("")
        mode_font = QFont()
        mode_font.setBold(True)
        mode_font.setPointSize(9)
        self.mode_label.setFont(mode_font)
        self.mode_label.setStyleSheet("color: #0066cc;")
        info_layout.addWidget(self.mode_label)

        info_layout.addStretch()

        self.op_label = QLabel("")
        op_font = QFont("Consolas", 14)
        self.op_label.setFont(op_font)
        self.op_label.setStyleSheet("color: #ffa500;")
        info_layout.addWidget(self.op_label)

        display_layout.addLayout(info_layout)

        # Main display
        self.display = QLabel("0")
        self.display.setAlignment(Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignBottom)
        self.display.setFont(QFont("Consolas", 32))
        self.display.setMinimumHeight(80)
        self.display.setWordWrap(True)
        self.display.setTextInteractionFlags(Qt.TextInteractionFlag.TextSelectableByMouse)
        display_layout.addWidget(self.display)

        display_frame.setLayout(display_layout)
        main_layout.addWidget(display_frame, 1)

        # Button grid
        button_layout = QGridLayout()
        button_layout.setSpacing(6)

        self.buttons = {}
        for text, row, col, action in BUTTONS:
            btn = QPushButton(text)
            btn.setMinimumSize(64, 56)
            btn.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
            btn.setFocusPolicy(Qt.FocusPolicy.NoFocus)
            btn.setStyleSheet(BUTTON_STYLE)

            if len(action) == 1 and action in "0123456789.":
                btn.clicked.connect(lambda checked, a=action: self.digit_pressed(a))
            elif action in (ADD, SUBTRACT, MULTIPLY, DIVIDE):
                btn.clicked.connect(lambda checked, a=action: self.operation_pressed(a))
                btn.setStyleSheet(BUTTON_STYLE + "QPushButton { background-color: #243036; }")
            elif action == "equals":
                btn.clicked.connect(self.equals_pressed)
                btn.setStyleSheet(BUTTON_STYLE + "QPushButton { background-color: #1f2b27; font-weight: bold; }")
            elif action == "clear":
                btn.clicked.connect(self.clear_all)
                btn.setStyleSheet(BUTTON_STYLE + "QPushButton { background-color: #3b2020; }")
            elif action == "backspace":
                btn.clicked.connect(self.backspace_pressed)
                btn.setStyleSheet(BUTTON_STYLE + "QPushButton { background-color: #3b3020; }")
            elif action == "parenthesis":
                btn.clicked.connect(self.parenthesis_pressed)
                btn.setStyleSheet(BUTTON_STYLE + "QPushButton { background-color: #243036; }")
            elif action == "history":
                btn.clicked.connect(self.toggle_history)
                btn.setStyleSheet(BUTTON_STYLE + "QPushButton { background-color: #3b3020; }")

            self.buttons[action] = btn
            button_layout.addWidget(btn, row, col)

        main_layout.addLayout(button_layout, 3)
        central.setLayout(main_layout)

        # Menu bar
        menubar = self.menuBar()

        edit_menu = menubar.addMenu("&Edit")

        copy_action = QAction("&Copy", self)
        copy_action.setShortcut("Ctrl+C")
        copy_action.triggered.connect(self.copy_to_clipboard)
        edit_menu.addAction(copy_action)

        edit_menu.addSeparator()
        clear_history_action = QAction("Clear &History", self)
        clear_history_action.triggered.connect(self.clear_history)
        edit_menu.addAction(clear_history_action)

        edit_menu.addSeparator()

        settings_action = QAction("&Settings...", self)
        settings_action.triggered.connect(self.show_settings)
        edit_menu.addAction(settings_action)

        self.resize(380, 620)
        self.setMinimumSize(320, 480)

    def copy_to_clipboard(self):
        """Copy the display text"""
        QApplication.clipboard().setText(self.session.display)

    def apply_font(self):
        font_str = self.config.get("display_font")
        if font_str:
            font = QFont()
            if font.fromString(font_str):
                self.display.setFont(font)

    def save_settings(self):
        """Save settings to JSON file"""
        self.config["display_font"] = self.display.font().toString()
        self.config["mode"] = self.session.mode
        self.config["show_history"] = self.show_history
        settings.save_settings(self.config, self.config_file)

    def show_settings(self):
        """Show settings dialog"""
        dialog = SettingsDialog(self)
        if dialog.exec() == QDialog.DialogCode.Accepted:
            self.set_mode(dialog.mode)
            if dialog.selected_font:
                self.display.setFont(dialog.selected_font)

    def set_mode(self, mode):
        """Switch between expression and accumulator mode"""
        self.config["mode"] = mode
        self.session.switch_strategy(get_strategy(mode))
        self.refresh()

    # --- Input events ---
    def digit_pressed(self, token):
        self.session.press_digit(token)
        self.refresh()

    def operation_pressed(self, op):
        self.session.press_operator(op)
        self.refresh()

    def parenthesis_pressed(self):
        self.session.press_parenthesis()
        self.refresh()

    def backspace_pressed(self):
        self.session.backspace()
        self.refresh()

    def equals_pressed(self):
        self.session.evaluate()
        self.refresh()

    def clear_all(self):
        """All clear, history is kept"""
        self.session.clear()
        self.refresh()

    def recall_entry(self, index):
        self.session.recall(index)
        self.refresh()

    def clear_history(self):
        self.session.clear_history()
        self.refresh()

    def toggle_history(self):
        self.set_history_visible(not self.show_history)

    def set_history_visible(self, visible):
        # isVisible() stays False until the window itself is shown
        self.show_history = bool(visible)
        self.history_panel.setVisible(self.show_history)

    def keyPressEvent(self, event: QKeyEvent):
        """Handle keyboard input"""
        key = event.key()
        text = event.text()

        if text and text in "0123456789.":
            self.digit_pressed(text)
        elif key in KEY_OPERATORS:
            self.operation_pressed(KEY_OPERATORS[key])
        elif text in ("(", ")"):
            self.parenthesis_pressed()
        elif key in [Qt.Key.Key_Return, Qt.Key.Key_Enter, Qt.Key.Key_Equal]:
            self.equals_pressed()
        elif key == Qt.Key.Key_Backspace:
            self.backspace_pressed()
        elif key in [Qt.Key.Key_Escape, Qt.Key.Key_Delete]:
            self.clear_all()
        elif key == Qt.Key.Key_H:
            self.toggle_history()
        else:
            super().keyPressEvent(event)

    def refresh(self):
        """Update the display labels, buttons and history rows"""
        self.display.setText(self.session.display)
        self.op_label.setText(self.session.expression)
        self.mode_label.setText("EXPR" if self.session.mode == "expression" else "ACC")
        self.buttons["parenthesis"].setEnabled(self.session.strategy.supports_parentheses)
        self.history_panel.set_entries(self.session.history.rows())

    def closeEvent(self, event):
        """Handle window close"""
        self.save_settings()
        event.accept()


def main():
    settings.setup_logging()
    config = settings.load_settings()

    app = QApplication(sys.argv)
    qdarktheme.setup_theme(config["theme"])

    window = CalculatorWindow(config)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
