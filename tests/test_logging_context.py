"""Tests for logging context propagation."""

import threading

import pytest

from hookdispatch.logging.context import (
    clear_log_context,
    get_log_context,
    log_context,
    pop_log_context,
    push_log_context,
)


@pytest.fixture(autouse=True)
def clean_context():
    """Clear logging context before and after each test."""
    clear_log_context()
    yield
    clear_log_context()


def test_empty_context():
    """Test that context starts empty."""
    assert get_log_context() == {}


def test_push_and_pop():
    """Test pushing several fields and restoring."""
    token = push_log_context(commit_id="abc123", repository_uri="git@example.com:org/repo")
    assert get_log_context() == {
        "commit_id": "abc123",
        "repository_uri": "git@example.com:org/repo",
    }
    pop_log_context(token)
    assert get_log_context() == {}


def test_context_override():
    """Test that pushing the same key overwrites previous value."""
    token1 = push_log_context(job_id="a")
    token2 = push_log_context(job_id="b")
    assert get_log_context() == {"job_id": "b"}

    pop_log_context(token2)
    assert get_log_context() == {"job_id": "a"}
    pop_log_context(token1)


def test_context_manager_nested():
    """Test nested context managers."""
    with log_context(dispatch_id="d1"):
        with log_context(commit_id="abc123"):
            assert get_log_context() == {"dispatch_id": "d1", "commit_id": "abc123"}
        assert get_log_context() == {"dispatch_id": "d1"}

    assert get_log_context() == {}


def test_context_manager_exception():
    """Test that context is restored even when exception occurs."""
    with pytest.raises(ValueError):
        with log_context(commit_id="abc123"):
            raise ValueError("Test exception")

    assert get_log_context() == {}


def test_context_isolation():
    """Test that get_log_context returns a copy, not the actual dict."""
    with log_context(commit_id="abc123"):
        context = get_log_context()
        context["job_id"] = "modified"
        assert get_log_context() == {"commit_id": "abc123"}


def test_context_is_thread_local():
    """Test fields pushed on one thread are invisible on another."""
    seen = {}
    pushed = threading.Event()

    def worker():
        pushed.wait(timeout=5)
        seen["context"] = get_log_context()

    thread = threading.Thread(target=worker)
    thread.start()
    with log_context(commit_id="abc123"):
        pushed.set()
        thread.join(timeout=5)

    assert seen["context"] == {}
