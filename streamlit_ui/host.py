# host.py
"""Streamlit implementations of the capabilities the views are given."""
import streamlit as st

from receipt_admin.config import EXPORT_MIME
from receipt_admin.views import RecordListView, StatsView


class ToastNotifier:
    """Queues messages during a run; flush() shows them as toasts."""

    def __init__(self):
        self.pending = []

    def success(self, message):
        self.pending.append(("✅", message))

    def error(self, message):
        self.pending.append(("❌", message))

    def flush(self):
        for icon, message in self.pending:
            st.toast(message, icon=icon)
        self.pending.clear()


class SessionDownloader:
    """Keeps the last export in memory and offers it via a download button."""

    def __init__(self):
        self.content = None
        self.filename = None

    def save(self, content, filename):
        self.content = content
        self.filename = filename

    def render(self, key):
        if self.content is None:
            return
        st.download_button(
            f"💾 {self.filename}",
            data=self.content,
            file_name=self.filename,
            mime=EXPORT_MIME,
            key=key,
        )


def build_views(client, notifier):
    # one downloader per view so each page only offers its own export
    return {
        "Dashboard": StatsView(client, notifier, SessionDownloader()),
        "Fişler": RecordListView(client, notifier, SessionDownloader()),
    }
