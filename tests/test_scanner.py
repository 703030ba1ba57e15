"""Tests for the registry scan."""

import logging

import pytest

from hookdispatch.domain.models import JobCandidate, PushEvent, Remote, ScmKind, ScmSource
from hookdispatch.registry import RegistryUnavailableError
from hookdispatch.registry.base import JobRegistryView
from hookdispatch.scanning import JobScanner, ScanStats
from hookdispatch.security import ANONYMOUS, SYSTEM
from tests.helpers import make_job, make_registry

EVENT = PushEvent(commit_id="abc123", repository_uri="https://example.com/org/repo.git")


def scan(registry, event=EVENT, identity=SYSTEM):
    stats = ScanStats()
    entries = list(JobScanner().scan(registry, event, identity, stats))
    return entries, stats


class TestJobScanner:
    """Test JobScanner.scan."""

    def test_yields_matching_jobs_in_registry_order(self):
        """Test only matching jobs are yielded, in order."""
        registry = make_registry(
            make_job("b", ["git@example.com:org/repo.git"]),
            make_job("other", ["https://example.com/org/other.git"]),
            make_job("a", ["https://example.com/org/repo"]),
        )
        entries, stats = scan(registry)

        assert [e.job.job_id for e in entries] == ["b", "a"]
        assert stats.jobs_seen == 3
        assert stats.scm_capable_jobs == 3
        assert stats.matched_repository_count == 2

    def test_non_git_jobs_are_ignored(self):
        """Test jobs without a Git source are neither counted nor yielded."""
        registry = make_registry(
            make_job("svn", ["https://example.com/org/repo"], scm_kind=ScmKind.SUBVERSION),
            make_job("freestyle"),
        )
        entries, stats = scan(registry)

        assert entries == []
        assert stats.jobs_seen == 2
        assert stats.scm_capable_jobs == 0
        assert not stats.scm_capable_jobs_found

    def test_remote_counted_once_for_several_matching_urls(self):
        """Test a remote with two matching URLs counts as one match."""
        registry = make_registry(
            make_job("a", ["https://example.com/org/repo", "git@example.com:org/repo.git"])
        )
        entries, stats = scan(registry)

        assert stats.matched_repository_count == 1
        assert len(entries[0].matched_remotes) == 1
        assert entries[0].matched_remotes[0].url == "https://example.com/org/repo"

    def test_every_matching_remote_is_recorded(self):
        """Test several matching remotes are kept in configuration order."""
        job = JobCandidate(
            job_id="multi",
            scms=[
                ScmSource(
                    ignore_notify_commit=True,
                    remotes=[Remote(name="upstream", urls=["https://example.com/org/repo"])],
                ),
                ScmSource(remotes=[Remote(name="origin", urls=["git@example.com:org/repo"])]),
            ],
        )
        entries, stats = scan(make_registry(job))

        assert stats.matched_repository_count == 2
        remotes = entries[0].matched_remotes
        assert [r.remote_name for r in remotes] == ["upstream", "origin"]
        assert remotes[0].ignore_notify_commit is True
        assert entries[0].notifiable_remote.remote_name == "origin"

    def test_scan_respects_identity(self):
        """Test unelevated scans only see readable jobs."""
        registry = make_registry(make_job("hidden", ["https://example.com/org/repo"]))

        entries, stats = scan(registry, identity=ANONYMOUS)
        assert entries == []
        assert stats.jobs_seen == 0

        entries, _ = scan(registry, identity=SYSTEM)
        assert len(entries) == 1

    def test_unparsable_event_uri_matches_nothing(self, caplog):
        """Test an unparsable event URI is logged and matches nothing."""
        registry = make_registry(make_job("a", ["https://example.com/org/repo"]))
        event = PushEvent(commit_id="abc123", repository_uri="not a uri")

        with caplog.at_level(logging.DEBUG):
            entries, stats = scan(registry, event=event)

        assert entries == []
        assert stats.scm_capable_jobs == 1
        assert stats.matched_repository_count == 0
        assert any("could not be parsed" in r.message for r in caplog.records)

    def test_scan_is_lazy(self):
        """Test the registry is only read as the sequence is consumed."""
        registry = make_registry(
            make_job("a", ["https://example.com/org/repo"]),
            make_job("b", ["https://example.com/org/repo"]),
        )
        stats = ScanStats()
        iterator = JobScanner().scan(registry, EVENT, SYSTEM, stats)
        assert stats.jobs_seen == 0

        next(iterator)
        assert stats.jobs_seen == 1

    def test_registry_errors_propagate(self):
        """Test RegistryUnavailableError surfaces from the scan."""

        class BrokenRegistry(JobRegistryView):
            def _load_jobs(self):
                raise RegistryUnavailableError("not ready")

        with pytest.raises(RegistryUnavailableError):
            scan(BrokenRegistry())
