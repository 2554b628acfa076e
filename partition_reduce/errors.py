"""
Exceptions raised when a reduce task cannot complete.
"""


class ReduceTaskError(Exception):
    """Base class for failures that abort a whole reduce task"""


class MissingShardError(ReduceTaskError):
    """A required shard file could not be opened or read"""

    def __init__(self, path: str, map_task: int, reason: str = ''):
        self.path = path
        self.map_task = map_task
        self.reason = reason
        message = f"Shard from map task {map_task} unavailable: {path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class MalformedRecordError(ReduceTaskError):
    """A shard contains a record that does not decode to a key/value pair"""

    def __init__(self, path: str, line_number: int, reason: str):
        self.path = path
        self.line_number = line_number
        self.reason = reason
        super().__init__(f"Malformed record in {path} at line {line_number}: {reason}")


class OutputWriteError(ReduceTaskError):
    """The output artifact could not be created, written or closed"""

    def __init__(self, path: str, reason: str = ''):
        self.path = path
        self.reason = reason
        message = f"Failed to write reduce output: {path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
