"""Progress banner for long-running report loads."""

from __future__ import annotations

import streamlit as st


class ProgressReporter:
    """Banner + progress bar driven by ReportService progress callbacks."""

    def __init__(self, title: str):
        self._container = st.container()
        self._container.info(title)
        self._message = self._container.empty()
        self._bar = self._container.progress(0.0)
        self._done = False

    def callback(self, message: str, current: int | None = None, total: int | None = None) -> None:
        if self._done:
            return
        if current is not None and total:
            ratio = min(max(current / total, 0.0), 1.0)
            self._message.write(f"{message} ({current}/{total})")
            self._bar.progress(ratio)
        else:
            self._message.write(message)
            self._bar.progress(0.0)

    def complete(self, message: str, *, warning: str | None = None) -> None:
        if self._done:
            return
        self._bar.progress(1.0)
        self._container.success(message)
        if warning:
            self._container.warning(warning)
        self._done = True

    def error(self, message: str) -> None:
        if self._done:
            return
        self._container.error(message)
        self._done = True
