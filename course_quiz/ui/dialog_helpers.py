"""Helper functions for common dialog patterns in the student UI."""

from __future__ import annotations

from PySide6.QtWidgets import QMessageBox, QWidget


def confirm_retake(parent: QWidget, quiz_title: str) -> bool:
    """Ask before discarding a graded attempt.

    Args:
        parent: Parent widget for the dialog
        quiz_title: Title of the quiz being retaken

    Returns:
        True if user confirmed, False otherwise
    """
    reply = QMessageBox.question(
        parent,
        "Retake Assessment",
        f"Start a new attempt at '{quiz_title}'? Your current answers will be cleared.",
        QMessageBox.Yes | QMessageBox.No,
        QMessageBox.Yes
    )
    return reply == QMessageBox.Yes


def show_error(parent: QWidget, title: str, message: str) -> None:
    """Show error dialog.

    Args:
        parent: Parent widget for the dialog
        title: Dialog title
        message: Error message
    """
    QMessageBox.critical(parent, title, message)
