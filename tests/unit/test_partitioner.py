"""
Unit tests for hash partitioning
"""

import pytest

from mrworker.partitioner import fnv1a_32, partition


class TestFnvHash:
    """Tests for the FNV-1a hash"""

    def test_known_vectors(self):
        """Test published FNV-1a 32-bit test vectors"""
        assert fnv1a_32(b"") == 0x811C9DC5
        assert fnv1a_32(b"a") == 0xE40C292C
        assert fnv1a_32(b"foobar") == 0xBF9CF968

    def test_result_fits_in_32_bits(self):
        assert 0 <= fnv1a_32(b"x" * 1000) < 2 ** 32


class TestPartition:
    """Tests for shard selection"""

    def test_same_key_goes_to_same_partition(self):
        """Test that same key always hashes to same partition"""
        assert partition("test_key", 4) == partition("test_key", 4)

    def test_matches_hash_modulo_shard_count(self):
        assert partition("foobar", 7) == 0xBF9CF968 % 7
        assert partition("a", 10) == 0xE40C292C % 10

    def test_str_hashed_as_utf8(self):
        assert partition("héllo", 13) == partition("héllo".encode('utf-8'), 13)

    def test_result_in_range(self):
        for shard_count in (1, 2, 3, 10):
            for key in ("", "a", "apple", "zebra", "日本"):
                assert 0 <= partition(key, shard_count) < shard_count

    def test_single_shard_takes_everything(self):
        assert {partition(k, 1) for k in ("a", "b", "c")} == {0}

    def test_keys_spread_across_partitions(self):
        """Test that keys are distributed across partitions"""
        used = {partition(f"key-{i}", 4) for i in range(100)}
        assert used == {0, 1, 2, 3}

    @pytest.mark.parametrize("shard_count", [0, -1, 2.0, True, None])
    def test_rejects_invalid_shard_count(self, shard_count):
        with pytest.raises(ValueError):
            partition("key", shard_count)

    def test_rejects_non_text_key(self):
        with pytest.raises(TypeError):
            partition(42, 3)
