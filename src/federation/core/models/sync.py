"""Bulk synchronization result model."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class SyncStatus(str, Enum):
    SUCCESS = "success"
    FAILED = "failed"
    CANCELLED = "cancelled"


class SyncResult(BaseModel):
    """Aggregate counters of a synchronization run.

    A run that did not commit reports zero ``added`` accounts: nothing from it
    is durable.
    """

    added: int = Field(default=0, description="Accounts created by this run")
    existing: int = Field(
        default=0, description="Registry entries that already had a local account"
    )
    updated: int = Field(default=0, description="Accounts changed by this run")
    removed: int = Field(default=0, description="Accounts removed by this run")
    failed: int = Field(default=0, description="Entries that could not be provisioned")
    status: SyncStatus = Field(default=SyncStatus.SUCCESS)
    error: str | None = Field(default=None, description="Why the run was rolled back")

    def increase_added(self, delta: int = 1) -> None:
        self.added += delta

    def increase_existing(self, delta: int = 1) -> None:
        self.existing += delta

    @property
    def ok(self) -> bool:
        return self.status == SyncStatus.SUCCESS

    @classmethod
    def failure(cls, message: str, failed: int = 1) -> SyncResult:
        return cls(status=SyncStatus.FAILED, failed=failed, error=message)

    @classmethod
    def cancelled(cls, message: str) -> SyncResult:
        return cls(status=SyncStatus.CANCELLED, error=message)

    def __str__(self) -> str:
        summary = (
            f"{self.status.value}: added={self.added} existing={self.existing} "
            f"updated={self.updated} removed={self.removed} failed={self.failed}"
        )
        if self.error:
            summary += f" ({self.error})"
        return summary
