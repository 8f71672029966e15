from __future__ import annotations


class ScheduleSyncError(RuntimeError):
    pass


class ConfigurationIncompleteError(ScheduleSyncError):
    pass


class SourceFetchError(ScheduleSyncError):
    def __init__(self, status_code: int | None, message: str) -> None:
        self.status_code = status_code
        self.message = str(message or "unknown error")
        if status_code is None:
            super().__init__(f"Notion API request failed: {self.message}")
        else:
            super().__init__(f"Notion API {status_code}: {self.message}")


class DestinationUnreachableError(ScheduleSyncError):
    def __init__(self, thread_id, reason: str = "") -> None:
        self.thread_id = thread_id
        self.reason = reason
        text = f"Thread not found or no access: {thread_id}"
        if reason:
            text = f"{text} ({reason})"
        super().__init__(text)
