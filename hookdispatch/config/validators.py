"""Soft checks on raw configuration that warrant a warning, not an error."""

import warnings
from typing import Any, Dict, List


def _git_urls(job: Dict[str, Any]) -> List[str]:
    urls = []
    for scm in job.get("scms") or []:
        if not isinstance(scm, dict) or scm.get("kind", "git") != "git":
            continue
        for remote in scm.get("remotes") or []:
            if isinstance(remote, dict):
                urls.extend(u for u in remote.get("urls") or [] if isinstance(u, str))
    return urls


def check_for_warnings(config_dict: Dict[str, Any]) -> List[str]:
    """
    Inspect configuration for setups that are valid but probably unintended.

    Args:
        config_dict: Raw configuration dictionary

    Returns:
        List of warning messages
    """
    warning_messages = []

    jobs = config_dict.get("jobs") or []
    if not isinstance(jobs, list):
        return warning_messages

    global_settings = config_dict.get("global_settings") or {}
    auto_all = isinstance(global_settings, dict) and bool(
        global_settings.get("auto_trigger_all_jobs", False)
    )

    if not jobs:
        warning_messages.append("No jobs configured; every push will report 'No Git jobs found'")

    for job in jobs:
        if not isinstance(job, dict):
            continue
        job_id = job.get("id", "Unknown")

        if job.get("disabled", False):
            warning_messages.append(f"Job '{job_id}' is disabled and will never be triggered")

        scms = job.get("scms") or []
        if scms and not _git_urls(job):
            warning_messages.append(
                f"Job '{job_id}' has no Git remotes and cannot match push events"
            )

        triggers = [t for t in job.get("triggers") or [] if isinstance(t, dict)]
        if not triggers and not auto_all:
            warning_messages.append(
                f"Job '{job_id}' has no triggers and global auto-trigger is off; "
                "matching pushes will be ignored"
            )

    return warning_messages


def emit_warnings(warning_messages: List[str]) -> None:
    """Emit each message as a UserWarning."""
    for message in warning_messages:
        warnings.warn(message, UserWarning, stacklevel=2)
