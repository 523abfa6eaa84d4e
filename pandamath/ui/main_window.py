from __future__ import annotations

from typing import Iterable, Optional

from PySide6.QtCore import Qt, QTimer
from PySide6.QtWidgets import (
    QApplication,
    QCheckBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMainWindow,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from pandamath.core.achievements import AchievementStore
from pandamath.core.problems import Mode
from pandamath.core.session import DrillSession, Effect, EffectKind, Feedback, Outcome
from pandamath.core.themes import Theme
from pandamath.ui.colors import palette_for, tone_color
from pandamath.ui.drill_widgets import AchievementList, ConfettiOverlay, Keypad, QuestionLabel
from pandamath.ui.models import ScoreBoard, build_achievement_rows


class MainWindow(QMainWindow):
    """Single-screen drill window.

    All game rules live in :class:`DrillSession`; this window renders its
    state and executes the effects it returns, scheduling delayed ones with
    ``QTimer.singleShot``.
    """

    def __init__(self, session: DrillSession, store: AchievementStore) -> None:
        super().__init__()
        self._session = session
        self._store = store
        self._awaiting_advance = False
        self._mode_buttons: dict[Mode, QPushButton] = {}
        self._theme_buttons: dict[Theme, QPushButton] = {}

        self._build_ui()
        self._apply_theme()
        self._refresh_achievements()
        self._render_problem()

    def _build_ui(self) -> None:
        central = QWidget()
        self.setCentralWidget(central)
        root = QVBoxLayout(central)
        root.setContentsMargins(24, 18, 24, 18)
        root.setSpacing(12)

        self._title_label = QLabel()
        self._title_label.setAlignment(Qt.AlignCenter)
        root.addWidget(self._title_label)

        theme_row = QHBoxLayout()
        for theme in Theme:
            btn = QPushButton(theme.title.replace(" Math Practice", ""))
            btn.setCheckable(True)
            btn.clicked.connect(lambda _=False, t=theme: self._switch_theme(t))
            theme_row.addWidget(btn)
            self._theme_buttons[theme] = btn
        root.addLayout(theme_row)

        mode_row = QHBoxLayout()
        for mode in Mode:
            btn = QPushButton(mode.label)
            btn.setCheckable(True)
            btn.clicked.connect(lambda _=False, m=mode: self._switch_mode(m))
            mode_row.addWidget(btn)
            self._mode_buttons[mode] = btn
        self._fast_toggle = QCheckBox("⚡ Fast mode")
        self._fast_toggle.setChecked(self._session.state.fast_mode)
        self._fast_toggle.toggled.connect(self._toggle_fast_mode)
        mode_row.addWidget(self._fast_toggle)
        root.addLayout(mode_row)

        self._question_label = QuestionLabel()
        root.addWidget(self._question_label)

        self._queued_label = QLabel()
        self._queued_label.setAlignment(Qt.AlignCenter)
        self._queued_label.setStyleSheet("color: #78909c; font-size: 16px;")
        root.addWidget(self._queued_label)

        input_row = QHBoxLayout()
        self._answer_input = QLineEdit()
        self._answer_input.setPlaceholderText("Your answer")
        self._answer_input.setAlignment(Qt.AlignCenter)
        self._answer_input.setStyleSheet("font-size: 24px; padding: 6px;")
        self._answer_input.returnPressed.connect(self._submit)
        self._submit_button = QPushButton("Check")
        self._submit_button.clicked.connect(self._submit)
        input_row.addWidget(self._answer_input, 1)
        input_row.addWidget(self._submit_button)
        root.addLayout(input_row)

        self._feedback_label = QLabel()
        self._feedback_label.setAlignment(Qt.AlignCenter)
        self._feedback_label.setMinimumHeight(32)
        root.addWidget(self._feedback_label)

        self._motivation_label = QLabel()
        self._motivation_label.setAlignment(Qt.AlignCenter)
        self._motivation_label.setStyleSheet("font-size: 20px; font-weight: 800;")
        self._motivation_label.hide()
        root.addWidget(self._motivation_label)

        self._keypad = Keypad()
        self._keypad.digit_pressed.connect(lambda d: self._answer_input.setText(self._answer_input.text() + d))
        self._keypad.clear_pressed.connect(self._answer_input.clear)
        self._keypad.submit_pressed.connect(self._submit)
        root.addWidget(self._keypad)

        self._score_label = QLabel()
        self._score_label.setAlignment(Qt.AlignCenter)
        self._score_label.setStyleSheet("font-size: 16px; font-weight: 700;")
        root.addWidget(self._score_label)

        self._achievement_list = AchievementList()
        root.addWidget(self._achievement_list)

        self._confetti = ConfettiOverlay(central)

    # -- user actions -----------------------------------------------------

    def _switch_theme(self, theme: Theme) -> None:
        self._session.switch_theme(theme)
        self._apply_theme()

    def _switch_mode(self, mode: Mode) -> None:
        # A pending ADVANCE goes stale here; the new problem takes input right away.
        self._session.switch_mode(mode)
        self._awaiting_advance = False
        self._set_input_enabled(True)
        self._render_problem()

    def _toggle_fast_mode(self, enabled: bool) -> None:
        self._session.set_fast_mode(enabled)
        self._render_queued()

    def _submit(self) -> None:
        if self._awaiting_advance:
            return
        result = self._session.submit_answer(self._answer_input.text())
        if result.outcome is not Outcome.INVALID_INPUT:
            self._awaiting_advance = True
            self._set_input_enabled(False)
        self._render_score()
        self._run_effects(result.effects)

    # -- effects ----------------------------------------------------------

    def _run_effects(self, effects: Iterable[Effect]) -> None:
        for effect in effects:
            if effect.delay_ms > 0:
                QTimer.singleShot(effect.delay_ms, lambda e=effect: self._apply_effect(e))
            else:
                self._apply_effect(effect)

    def _apply_effect(self, effect: Effect) -> None:
        kind = effect.kind
        if kind is EffectKind.PLAY_CHIME:
            QApplication.beep()
        elif kind is EffectKind.SHOW_FEEDBACK:
            self._show_feedback(effect.payload)
        elif kind is EffectKind.FLASH:
            self._question_label.flash(effect.payload)
        elif kind is EffectKind.CLEAR_FLASH:
            self._question_label.clear_flash()
        elif kind is EffectKind.SHOW_MOTIVATION:
            self._motivation_label.setText(effect.payload)
            self._motivation_label.show()
        elif kind is EffectKind.HIDE_MOTIVATION:
            self._motivation_label.hide()
        elif kind is EffectKind.CELEBRATE:
            self._confetti.setGeometry(self.centralWidget().rect())
            self._confetti.burst()
        elif kind is EffectKind.ACHIEVEMENT_UNLOCKED:
            self._refresh_achievements()
        elif kind is EffectKind.ADVANCE:
            self._advance(effect.payload)

    def _advance(self, token: int) -> None:
        if self._session.advance(token) is None:
            return
        self._awaiting_advance = False
        self._set_input_enabled(True)
        self._render_problem()

    # -- rendering --------------------------------------------------------

    def _render_problem(self) -> None:
        state = self._session.state
        self._question_label.setText(state.current_problem.display_text)
        self._answer_input.clear()
        self._answer_input.setFocus()
        self._show_feedback(state.feedback)
        for mode, btn in self._mode_buttons.items():
            btn.setChecked(mode is state.mode)
        self._render_queued()
        self._render_score()

    def _render_queued(self) -> None:
        queued = self._session.state.queued_problem
        if queued is None:
            self._queued_label.hide()
        else:
            self._queued_label.setText(f"Next: {queued.display_text}")
            self._queued_label.show()

    def _render_score(self) -> None:
        state = self._session.state
        board = ScoreBoard(correct=state.correct_count, total=state.total_count)
        self._score_label.setText(f"Correct: {board.correct} / {board.total}  ({board.accuracy}%)")

    def _show_feedback(self, feedback: Optional[Feedback]) -> None:
        if feedback is None:
            self._feedback_label.setText("")
            return
        self._feedback_label.setText(feedback.text)
        self._feedback_label.setStyleSheet(
            f"color: {tone_color(feedback.tone)}; font-size: 18px; font-weight: 700;"
        )

    def _refresh_achievements(self) -> None:
        self._achievement_list.set_rows(build_achievement_rows(self._store.records))

    def _apply_theme(self) -> None:
        theme = self._session.state.theme
        colors = palette_for(theme)
        self._title_label.setText(theme.title)
        self._title_label.setStyleSheet(
            f"color: {colors.PRIMARY}; font-size: 28px; font-weight: 900;"
        )
        self.setWindowTitle(theme.title)
        self.setStyleSheet(
            f"QMainWindow {{ background: qlineargradient(x1:0, y1:0, x2:0, y2:1,"
            f" stop:0 {colors.BG_TOP}, stop:1 {colors.BG_BOTTOM}); }}"
        )
        self._question_label.set_base_color(colors.TEXT_PRIMARY)
        for t, btn in self._theme_buttons.items():
            btn.setChecked(t is theme)

    def _set_input_enabled(self, enabled: bool) -> None:
        self._answer_input.setEnabled(enabled)
        self._submit_button.setEnabled(enabled)
        self._keypad.set_enabled(enabled)
        if enabled:
            self._answer_input.setFocus()

