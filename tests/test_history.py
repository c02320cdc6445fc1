"""Tests for history rendering."""

from io import StringIO

from rich.console import Console

from gvt.core.history import HistoryView, format_history, format_version
from gvt.core.models import HistoryEntry, StatusReport, VersionInfo


def make_view(style="plain"):
    output = StringIO()
    console = Console(file=output, width=120, color_system=None)
    return HistoryView(console=console, style=style), output


ENTRIES = [HistoryEntry(2, "update"), HistoryEntry(1, "[bold]literal[/bold] :smile:"), HistoryEntry(0, "GVT initialized.")]


class TestFormatting:
    """Test plain text formatting helpers."""

    def test_format_history(self):
        assert format_history(ENTRIES[:1] + ENTRIES[2:]) == "2: update\n0: GVT initialized.\n"
        assert format_history([]) == ""

    def test_format_version(self):
        assert format_version(VersionInfo(2, "update\nmore")) == "Version: 2\nupdate\nmore"


class TestHistoryView:
    """Test cases for HistoryView."""

    def test_plain_history_is_printed_verbatim(self):
        view, output = make_view()

        view.show_history(ENTRIES)

        assert output.getvalue() == (
            "2: update\n1: [bold]literal[/bold] :smile:\n0: GVT initialized.\n"
        )

    def test_plain_history_does_not_wrap(self):
        view, output = make_view()
        long_summary = "x" * 300

        view.show_history([HistoryEntry(1, long_summary)])

        assert output.getvalue() == f"1: {long_summary}\n"

    def test_table_history(self):
        view, output = make_view(style="table")

        view.show_history(ENTRIES)

        rendered = output.getvalue()
        assert "Version" in rendered
        assert "update" in rendered
        assert "[bold]literal[/bold]" in rendered
        assert rendered.index("update") < rendered.index("GVT initialized.")

    def test_table_history_empty(self):
        view, output = make_view(style="table")

        view.show_history([])

        assert "No versions to show." in output.getvalue()

    def test_status(self):
        view, output = make_view()

        view.show_status(StatusReport(head=3, tracked=["a.txt", "b.txt"], head_message="update"))

        rendered = output.getvalue()
        assert "HEAD: 3" in rendered
        assert "Last entry: update" in rendered
        assert "Tracked files (2):" in rendered
        assert "  a.txt" in rendered

    def test_status_without_tracked_files(self):
        view, output = make_view()

        view.show_status(StatusReport(head=0, head_message="GVT initialized."))

        assert "No tracked files." in output.getvalue()
