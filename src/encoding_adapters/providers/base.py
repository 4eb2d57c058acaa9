from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from ..types import Capabilities, Job, JobStatus, Preset


class TranscodingProvider(ABC):
    """Uniform contract every remote encoding service adapter implements."""

    name: str

    def __init__(self, name: str) -> None:
        self.name = name

    @abstractmethod
    def capabilities(self) -> Capabilities:
        """Formats and destinations this provider supports."""

    @abstractmethod
    def create_preset(self, preset: Preset) -> str:
        """Register a preset remotely and return its provider handle."""

    @abstractmethod
    def get_preset(self, preset_id: str) -> Any:
        """Fetch a registered preset in the provider's native shape."""

    @abstractmethod
    def delete_preset(self, preset_id: str) -> None:
        """Remove a registered preset."""

    @abstractmethod
    def transcode(self, job: Job) -> str:
        """Submit a job and return the provider's job id."""

    @abstractmethod
    def job_status(self, provider_job_id: str) -> JobStatus:
        """Map the remote job state to a canonical status."""

    @abstractmethod
    def cancel_job(self, provider_job_id: str) -> None:
        """Stop a job. Canceling a job that already ended is not an error."""

    @abstractmethod
    def healthcheck(self) -> None:
        """Raise if the remote service is unreachable or unhealthy."""

    def close(self) -> None:
        """Release any transport resources held by the provider."""
