"""
Key/value record encoding for shard and output files.

Each record is a single JSON object on its own line:

    {"Key":"apple","Value":"1"}

The map phase writes shards this way and the output merger reads reduce
output this way, so both directions must stay byte-compatible.
"""

import json
from dataclasses import dataclass
from typing import IO, Iterable, Iterator, List, Tuple

from .errors import MalformedRecordError


@dataclass(frozen=True)
class KeyValue:
    """A single intermediate or output record"""

    key: str
    value: str


def encode_record(record: KeyValue) -> str:
    """Encode one record as a newline-terminated JSON line"""
    payload = {'Key': record.key, 'Value': record.value}
    return json.dumps(payload, ensure_ascii=False, separators=(',', ':')) + '\n'


def write_records(stream: IO[str], records: Iterable[KeyValue]) -> int:
    """
    Write records to an open text stream

    Returns:
        Number of records written
    """
    count = 0
    for record in records:
        stream.write(encode_record(record))
        count += 1
    return count


def decode_records(stream: Iterable, path: str = '<stream>') -> Iterator[KeyValue]:
    """
    Decode records from an iterable of lines (bytes or str)

    Blank lines are ignored. Anything else that is not a JSON object with
    string "Key" and "Value" fields raises MalformedRecordError; decoding
    never skips a bad record.

    Args:
        stream: Open file or any iterable of lines
        path: Name used in error messages

    Yields:
        KeyValue records in stream order
    """
    for _, record in enumerate_records(stream, path):
        yield record


def enumerate_records(stream: Iterable, path: str = '<stream>') -> Iterator[Tuple[int, KeyValue]]:
    """Like decode_records, but yields (line_number, record) pairs"""
    for line_number, raw in enumerate(stream, start=1):
        if isinstance(raw, bytes):
            try:
                line = raw.decode('utf-8')
            except UnicodeDecodeError as e:
                raise MalformedRecordError(path, line_number, f"invalid UTF-8: {e.reason}") from e
        else:
            line = raw

        line = line.strip()
        if not line:
            continue

        try:
            record = json.loads(line)
        except json.JSONDecodeError as e:
            raise MalformedRecordError(path, line_number, e.msg) from e

        if not isinstance(record, dict):
            raise MalformedRecordError(path, line_number, "expected a JSON object")

        try:
            key = record['Key']
            value = record['Value']
        except KeyError as e:
            raise MalformedRecordError(path, line_number, f"missing field {e.args[0]!r}") from e

        if not isinstance(key, str) or not isinstance(value, str):
            raise MalformedRecordError(path, line_number, "Key and Value must be strings")

        try:
            key.encode('utf-8')
            value.encode('utf-8')
        except UnicodeEncodeError as e:
            raise MalformedRecordError(path, line_number, "lone surrogate") from e

        yield line_number, KeyValue(key, value)


def read_records(path: str) -> List[KeyValue]:
    """Read every record from a shard or output file"""
    with open(path, 'rb') as f:
        return list(decode_records(f, path))
