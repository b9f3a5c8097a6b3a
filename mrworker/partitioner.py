"""
Hash partitioning of intermediate keys across reduce shards
"""

FNV_OFFSET_BASIS_32 = 0x811C9DC5
FNV_PRIME_32 = 0x01000193


def fnv1a_32(data: bytes) -> int:
    """32-bit FNV-1a hash of a byte string"""
    h = FNV_OFFSET_BASIS_32
    for byte in data:
        h ^= byte
        h = (h * FNV_PRIME_32) & 0xFFFFFFFF
    return h


def partition(key, shard_count: int) -> int:
    """
    Pick the reduce shard for a key.

    The result depends only on the key's bytes, so a retried map task
    assigns every key to the same shard as the first attempt. The builtin
    hash() is salted per process and must not be used here.

    Args:
        key: Intermediate key (str, hashed as UTF-8, or bytes)
        shard_count: Number of reduce shards, must be positive

    Returns:
        Shard index in [0, shard_count)

    Raises:
        ValueError: If shard_count is not a positive integer
        TypeError: If key is neither str nor bytes
    """
    if isinstance(shard_count, bool) or not isinstance(shard_count, int) or shard_count <= 0:
        raise ValueError(f"shard_count must be a positive integer, got {shard_count!r}")
    if isinstance(key, str):
        data = key.encode('utf-8')
    elif isinstance(key, bytes):
        data = key
    else:
        raise TypeError(f"key must be str or bytes, got {type(key).__name__}")
    return fnv1a_32(data) % shard_count
