"""Reopen menu: one action per recent file, newest first."""

from PySide6.QtCore import Signal
from PySide6.QtGui import QAction
from PySide6.QtWidgets import QMenu

from drawctl.application.recent_files import RecentFiles

EMPTY_TEXT = "(empty)"


class RecentFilesMenu(QMenu):
    """
    Renders a RecentFiles list as menu actions (path as text, index as data).
    Triggering an action activates that entry on the list, which notifies every
    selection listener; fileSelected is emitted as one of those listeners.

    Actions are created once (max_files of them) and only relabelled/hidden on
    rebuild, so a listener may rebuild the menu while an action is being triggered.
    """

    fileSelected = Signal(str)

    def __init__(self, recent: RecentFiles, parent=None):
        super().__init__(recent.label, parent)
        self._recent = recent
        self._entry_actions = []
        for _ in range(recent.max_files()):
            action = QAction(self)
            action.setVisible(False)
            self.addAction(action)
            self._entry_actions.append(action)
        self._empty_action = self.addAction(EMPTY_TEXT)
        self._empty_action.setEnabled(False)
        listener = self.fileSelected.emit
        recent.add_selection_listener(listener)
        # Must not reference self: the wrapper is gone by the time destroyed fires.
        self.destroyed.connect(lambda *_: recent.remove_selection_listener(listener))
        self.triggered.connect(self._on_triggered)
        self.aboutToShow.connect(self.rebuild)
        self.rebuild()

    @property
    def recent(self) -> RecentFiles:
        return self._recent

    def entry_actions(self):
        """Visible actions, one per recent file, in list order."""
        return [a for a in self._entry_actions if a.isVisible()]

    def rebuild(self):
        files = self._recent.files()
        for index, action in enumerate(self._entry_actions):
            if index < len(files):
                action.setText(files[index].replace("&", "&&"))
                action.setToolTip(files[index])
                action.setData(index)
                action.setVisible(True)
            else:
                action.setData(None)
                action.setVisible(False)
        self._empty_action.setVisible(not files)
        self.setEnabled(bool(files))

    def _on_triggered(self, action):
        if action not in self._entry_actions:
            return
        index = action.data()
        if not isinstance(index, int):
            return
        self._recent.activate(index)
