"""Native audio file selection dialog backed by tkinter."""

from __future__ import annotations

import logging
import tkinter as tk
from tkinter import filedialog
from typing import Optional

AUDIO_FILE_TYPES: tuple[tuple[str, str], ...] = (
    ("Audio", "*.mp3 *.wav *.ogg"),
)


class TkAudioFilePicker:
    """Opens a native open-file dialog filtered to mp3, wav, and ogg files.

    Must be called from the thread that owns the tick loop; the dialog blocks
    that thread until it is closed.
    """

    def __init__(
        self,
        *,
        title: str = "Select alarm sound",
        logger: Optional[logging.Logger] = None,
    ):
        self._title = title
        self._logger = logger or logging.getLogger("runtime.file_picker")

    def pick_audio_file(self) -> Optional[str]:
        try:
            root = tk.Tk()
        except tk.TclError as error:
            self._logger.warning("File dialog unavailable: %s", error)
            return None

        try:
            root.withdraw()
            root.attributes("-topmost", True)
            selected = filedialog.askopenfilename(
                parent=root,
                title=self._title,
                filetypes=AUDIO_FILE_TYPES,
            )
        finally:
            root.destroy()

        return selected or None
