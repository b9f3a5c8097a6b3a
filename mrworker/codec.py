"""
Record codec for intermediate and output files.

A record stream is a sequence of JSON objects, one per line:

    {"key": "apple", "value": "1"}
    {"key": "banana", "value": "1"}

There is no enclosing array, so streams can be written and read one
record at a time.
"""

import io
import json
from typing import BinaryIO, Iterable, Iterator, List, NamedTuple

from mrworker.errors import EncodingError


class KeyValue(NamedTuple):
    key: str
    value: str


def encode_record(key: str, value: str) -> bytes:
    """
    Encode one key-value pair as a newline-terminated record

    Raises:
        EncodingError: If key or value is not text
    """
    if not isinstance(key, str):
        raise EncodingError(f"record key must be str, got {type(key).__name__}")
    if not isinstance(value, str):
        raise EncodingError(f"value for key {key!r} must be str, got {type(value).__name__}")
    return (json.dumps({'key': key, 'value': value}) + '\n').encode('utf-8')


def encode(records: Iterable) -> bytes:
    """Encode a sequence of (key, value) pairs into a record stream"""
    return b''.join(encode_record(key, value) for key, value in records)


def write_records(stream: BinaryIO, records: Iterable) -> int:
    """
    Write records to a binary stream

    Returns:
        Number of records written
    """
    count = 0
    for key, value in records:
        stream.write(encode_record(key, value))
        count += 1
    return count


def _decode_line(line: bytes, line_num: int) -> KeyValue:
    if not line.endswith(b'\n'):
        raise EncodingError(f"truncated record at line {line_num}")
    try:
        record = json.loads(line.decode('utf-8'))
    except UnicodeDecodeError as e:
        raise EncodingError(f"invalid UTF-8 at line {line_num}: {e}") from e
    except json.JSONDecodeError as e:
        raise EncodingError(f"malformed record at line {line_num}: {e}") from e

    if not isinstance(record, dict) or set(record) != {'key', 'value'}:
        raise EncodingError(f"line {line_num} is not a key/value record")
    key, value = record['key'], record['value']
    if not isinstance(key, str) or not isinstance(value, str):
        raise EncodingError(f"line {line_num} has a non-text key or value")
    return KeyValue(key, value)


def iter_records(stream: BinaryIO) -> Iterator[KeyValue]:
    """
    Decode records from a binary stream until end of stream

    Blank lines between records are skipped. A malformed record, or a
    final record missing its newline, raises EncodingError; nothing is
    skipped or guessed.

    Yields:
        KeyValue records in stored order
    """
    for line_num, line in enumerate(stream, start=1):
        if not line.strip():
            continue
        yield _decode_line(line, line_num)


def decode(data: bytes) -> List[KeyValue]:
    """Decode a complete record stream held in memory"""
    return list(iter_records(io.BytesIO(data)))


def read_records(path: str) -> List[KeyValue]:
    """Read every record of a shard or merge file"""
    with open(path, 'rb') as f:
        return list(iter_records(f))
