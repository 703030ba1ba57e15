"""Job registry implementations backed by memory or a YAML file."""

from pathlib import Path
from typing import Iterable, List

import yaml
from pydantic import ValidationError

from hookdispatch.config.models import AppConfig
from hookdispatch.domain.models import JobCandidate
from hookdispatch.logging import get_logger

from .base import JobRegistryView
from .exceptions import RegistryUnavailableError

logger = get_logger(__name__, component="registry")


class InMemoryJobRegistry(JobRegistryView):
    """Registry over a fixed list of jobs."""

    def __init__(self, jobs: Iterable[JobCandidate]):
        self._jobs = list(jobs)

    @classmethod
    def from_config(cls, app_config: AppConfig) -> "InMemoryJobRegistry":
        return cls(job.to_candidate() for job in app_config.jobs)

    def _load_jobs(self) -> List[JobCandidate]:
        return list(self._jobs)


class FileJobRegistry(JobRegistryView):
    """Registry that re-reads the ``jobs`` section of a YAML file on every scan.

    Edits to the file are picked up by the next dispatch without a restart.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def _load_jobs(self) -> List[JobCandidate]:
        try:
            with open(self.path, "r") as f:
                document = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise RegistryUnavailableError(f"Cannot read job registry {self.path}: {e}") from e

        if not isinstance(document, dict):
            raise RegistryUnavailableError(
                f"Job registry {self.path} must contain a mapping at the top level"
            )

        try:
            jobs = AppConfig.model_validate(document).jobs
        except ValidationError as e:
            raise RegistryUnavailableError(
                f"Job registry {self.path} failed validation: {e.error_count()} error(s)"
            ) from e

        logger.debug(
            f"Loaded {len(jobs)} jobs from {self.path}",
            extra={"event": "registry.loaded", "job_count": len(jobs)},
        )
        return [job.to_candidate() for job in jobs]
