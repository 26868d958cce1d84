"""Shared test fixtures."""

import logging

import pytest


class FakeCommentService:
    """Records comments instead of posting them."""

    def __init__(self):
        self.deleted = False
        self.comments = []

    def delete_comments(self) -> None:
        self.deleted = True

    def add_comment(self, path, body, status) -> None:
        self.comments.append((path, body, status))


@pytest.fixture
def comment_service():
    return FakeCommentService()


@pytest.fixture
def write_config(tmp_path):
    """Write an aicr.yaml into a temp directory and return its path."""

    def _write(content: str):
        path = tmp_path / "aicr.yaml"
        path.write_text(content)
        return path

    return _write


@pytest.fixture(autouse=True)
def restore_root_logger():
    """setup_logging() replaces root handlers; put them back after each test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
