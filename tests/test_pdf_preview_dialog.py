from __future__ import annotations

import pytest
from PyQt6.QtWidgets import QDialogButtonBox

from mdpdf.services.ui.pdf_preview_dialog import PdfPreviewDialog

pytestmark = pytest.mark.usefixtures("qapp")


@pytest.fixture()
def real_artifact(export_service):
    return export_service.export("# Preview\n\nbody", filename="preview.pdf")


def test_dialog_shows_summary_and_title(real_artifact):
    dlg = PdfPreviewDialog(real_artifact)
    assert "preview.pdf" in dlg.windowTitle()
    assert dlg.summary.text().startswith("1 page(s)")
    assert dlg.isModal()
    assert dlg.released is False
    dlg.reject()


def test_save_button_calls_back(real_artifact):
    calls = []
    dlg = PdfPreviewDialog(real_artifact, on_save=lambda: calls.append(1))
    save = dlg.buttons.button(QDialogButtonBox.StandardButton.Save)
    assert save.isEnabled()
    save.click()
    assert calls == [1]
    dlg.reject()


def test_save_disabled_without_callback(real_artifact):
    dlg = PdfPreviewDialog(real_artifact)
    assert not dlg.buttons.button(QDialogButtonBox.StandardButton.Save).isEnabled()
    dlg.reject()


def test_closing_releases_buffer(real_artifact):
    dlg = PdfPreviewDialog(real_artifact)
    dlg.done(0)
    assert dlg.released is True
