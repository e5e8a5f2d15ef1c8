from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QGroupBox, QCheckBox, QScrollArea
)
from PySide6.QtCore import Signal
from typing import Dict, Type
from enum import Enum


class DebugControlWidget(QWidget):
    """Checkbox per debug image the identifier can produce."""
    options_changed = Signal()

    def __init__(self, debug_type: Type[Enum], parent=None):
        super().__init__(parent)
        self.states: Dict[Enum, bool] = {}
        self.checkboxes: Dict[Enum, QCheckBox] = {}

        self.init_ui(debug_type)
        self.setWindowTitle("Debug Controls")
        self.setMinimumSize(300, 240)

    def init_ui(self, debug_type: Type[Enum]):
        layout = QVBoxLayout()
        scroll = QScrollArea()
        content = QWidget()
        scroll.setWidget(content)
        scroll.setWidgetResizable(True)

        main_layout = QVBoxLayout(content)

        group = QGroupBox("Identifier Debug Images")
        group_layout = QVBoxLayout()
        for opt in debug_type:
            checkbox = QCheckBox(opt.value)
            checkbox.stateChanged.connect(self._handle_change)
            self.states[opt] = False
            self.checkboxes[opt] = checkbox
            group_layout.addWidget(checkbox)
        group.setLayout(group_layout)

        main_layout.addWidget(group)
        layout.addWidget(scroll)
        self.setLayout(layout)

    def _handle_change(self, state):
        checkbox = self.sender()
        if checkbox:
            opt = next(
                opt for opt in self.states if opt.value == checkbox.text()
            )
            self.states[opt] = checkbox.isChecked()
            self.options_changed.emit()

    def set_states(self, states: Dict[Enum, bool]):
        for opt, enabled in states.items():
            self.states[opt] = enabled
            if opt in self.checkboxes:
                self.checkboxes[opt].setChecked(enabled)

    def get_states(self) -> Dict[Enum, bool]:
        return self.states.copy()
