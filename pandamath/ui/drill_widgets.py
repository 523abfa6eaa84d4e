"""Drill screen widgets: question label, keypad, achievement list and confetti."""

from __future__ import annotations

import random
from typing import List, Optional

from PySide6.QtCore import Qt, QTimer, Signal
from PySide6.QtGui import QColor, QPainter
from PySide6.QtWidgets import (
    QFrame,
    QGridLayout,
    QLabel,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from pandamath.ui.colors import CARD_BG, blend_hex, tone_color
from pandamath.ui.models import NO_ACHIEVEMENTS_TEXT, AchievementRow


class QuestionLabel(QLabel):
    """Large problem text that can flash green or red in fast mode."""

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setAlignment(Qt.AlignCenter)
        self.setMinimumHeight(110)
        self._base_color = "#1a3a3a"
        self._flash_tone: Optional[str] = None
        self._apply_style()

    def set_base_color(self, color: str) -> None:
        self._base_color = color
        self._apply_style()

    def flash(self, tone: str) -> None:
        self._flash_tone = tone
        self._apply_style()

    def clear_flash(self) -> None:
        self._flash_tone = None
        self._apply_style()

    def _apply_style(self) -> None:
        if self._flash_tone is None:
            background = "transparent"
            color = self._base_color
        else:
            accent = tone_color(self._flash_tone)
            background = blend_hex("#FFFFFF", accent, 0.25)
            color = accent
        self.setStyleSheet(
            f"""
            QLabel {{
                background: {background};
                color: {color};
                border-radius: 18px;
                font-size: 44px;
                font-weight: 800;
            }}
            """
        )


class Keypad(QWidget):
    """On-screen number pad. Emits digits, clear and submit."""

    digit_pressed = Signal(str)
    clear_pressed = Signal()
    submit_pressed = Signal()

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        grid = QGridLayout(self)
        grid.setSpacing(8)
        self._buttons: List[QPushButton] = []

        for i, digit in enumerate("123456789"):
            btn = self._make_button(digit)
            btn.clicked.connect(lambda _=False, d=digit: self.digit_pressed.emit(d))
            grid.addWidget(btn, i // 3, i % 3)

        clear_btn = self._make_button("C")
        clear_btn.clicked.connect(lambda _=False: self.clear_pressed.emit())
        zero_btn = self._make_button("0")
        zero_btn.clicked.connect(lambda _=False: self.digit_pressed.emit("0"))
        submit_btn = self._make_button("✓")
        submit_btn.clicked.connect(lambda _=False: self.submit_pressed.emit())
        grid.addWidget(clear_btn, 3, 0)
        grid.addWidget(zero_btn, 3, 1)
        grid.addWidget(submit_btn, 3, 2)

    def set_enabled(self, enabled: bool) -> None:
        for btn in self._buttons:
            btn.setEnabled(enabled)

    def _make_button(self, text: str) -> QPushButton:
        btn = QPushButton(text)
        btn.setMinimumSize(64, 52)
        btn.setFocusPolicy(Qt.NoFocus)
        btn.setStyleSheet("QPushButton { font-size: 22px; font-weight: 700; border-radius: 12px; }")
        self._buttons.append(btn)
        return btn


class AchievementList(QFrame):
    """Vertical list of unlocked achievements, newest on top."""

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setStyleSheet(f"QFrame {{ background: {CARD_BG}; border-radius: 16px; }}")
        self._layout = QVBoxLayout(self)
        self._layout.setContentsMargins(16, 12, 16, 12)
        self._layout.setSpacing(6)
        title = QLabel("🏆 Achievements")
        title.setStyleSheet("font-size: 18px; font-weight: 800;")
        self._layout.addWidget(title)
        self._rows: List[QWidget] = []

    def set_rows(self, rows: List[AchievementRow]) -> None:
        for widget in self._rows:
            self._layout.removeWidget(widget)
            widget.deleteLater()
        self._rows = []

        if not rows:
            self._add_label(NO_ACHIEVEMENTS_TEXT, "color: #78909c; font-style: italic;")
            return
        for row in rows:
            self._add_label(row.headline, "font-weight: 700;")
            self._add_label(row.date_text, "color: #78909c; font-size: 11px;")

    def _add_label(self, text: str, style: str) -> None:
        label = QLabel(text)
        label.setStyleSheet(style)
        self._layout.addWidget(label)
        self._rows.append(label)


class ConfettiOverlay(QWidget):
    """Transparent overlay that rains colored dots for a moment."""

    COLORS = ["#ff8a65", "#ffb74d", "#69f0ae", "#b39ddb", "#4fc3f7", "#f06292"]

    def __init__(self, parent: Optional[QWidget] = None, duration_ms: int = 1800) -> None:
        super().__init__(parent)
        self.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents, True)
        self._duration_ms = duration_ms
        self._pieces: list[list[float]] = []
        self._elapsed = 0
        self._timer = QTimer(self)
        self._timer.setInterval(30)
        self._timer.timeout.connect(self._tick)
        self.hide()

    def burst(self, count: int = 80) -> None:
        width = max(1, self.width())
        self._pieces = [
            [random.uniform(0, width), random.uniform(-200, 0), random.uniform(2, 6), i % len(self.COLORS)]
            for i in range(count)
        ]
        self._elapsed = 0
        self.raise_()
        self.show()
        self._timer.start()

    def _tick(self) -> None:
        self._elapsed += self._timer.interval()
        for piece in self._pieces:
            piece[1] += piece[2]
        if self._elapsed >= self._duration_ms:
            self._timer.stop()
            self._pieces = []
            self.hide()
        self.update()

    def paintEvent(self, event) -> None:
        super().paintEvent(event)
        if not self._pieces:
            return
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing, True)
        painter.setPen(Qt.NoPen)
        for x, y, _speed, color_index in self._pieces:
            painter.setBrush(QColor(self.COLORS[int(color_index)]))
            painter.drawEllipse(int(x), int(y), 8, 8)
