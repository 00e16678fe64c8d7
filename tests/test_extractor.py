"""
Tests for key extractors and the pre-screen stages.
"""
import hashlib
from unittest import mock
import pytest
from dedupkit.core.extractor import HashKeyExtractor, NameKeyExtractor, get_key_extractor
from dedupkit.core.stages import SizeStage, FrontHashStage
from dedupkit.core.grouper import DuplicateGrouper
from dedupkit.core.hasher import FRONT_CHUNK_SIZE
from dedupkit.core.models import FileCandidate, KeyStrategy
from dedupkit.core.walker import TreeWalkerImpl


class TestKeyExtractors:

    def test_factory_returns_matching_extractor(self):
        assert isinstance(get_key_extractor(KeyStrategy.HASH), HashKeyExtractor)
        assert isinstance(get_key_extractor(KeyStrategy.NAME), NameKeyExtractor)
        assert isinstance(get_key_extractor("name"), NameKeyExtractor)

    def test_factory_rejects_unknown_strategy(self):
        with pytest.raises(ValueError):
            get_key_extractor("size")

    def test_hash_key_is_sha256_hex(self, temp_dir):
        f = temp_dir / "x.txt"
        f.write_bytes(b"X")
        key = HashKeyExtractor().compute_key(FileCandidate(path=str(f), size=1))
        assert key == hashlib.sha256(b"X").hexdigest()

    def test_name_key_is_basename_with_extension(self, temp_dir):
        key = NameKeyExtractor().compute_key(FileCandidate(path=str(temp_dir / "dir1" / "img.jpg"), size=0))
        assert key == "img.jpg"

    def test_name_key_never_opens_the_file(self):
        with mock.patch("builtins.open") as mock_open:
            key = NameKeyExtractor().compute_key(FileCandidate(path="/does/not/exist/report.pdf", size=10))
        assert key == "report.pdf"
        mock_open.assert_not_called()


class TestPreScreenStages:

    def _candidates(self, root):
        return list(TreeWalkerImpl().walk(str(root), recursive=True))

    def test_size_stage_drops_unique_sizes_and_keeps_walk_order(self, temp_dir):
        (temp_dir / "a").write_bytes(b"12")
        (temp_dir / "b").write_bytes(b"123")
        (temp_dir / "c").write_bytes(b"34")

        survivors = SizeStage(DuplicateGrouper()).process(self._candidates(temp_dir))

        assert [c.path for c in survivors] == [str(temp_dir / "a"), str(temp_dir / "c")]

    def test_front_hash_stage_drops_different_heads(self, temp_dir):
        (temp_dir / "a").write_bytes(b"AAAA")
        (temp_dir / "b").write_bytes(b"BBBB")
        (temp_dir / "c").write_bytes(b"AAAA")

        survivors = FrontHashStage(DuplicateGrouper()).process(self._candidates(temp_dir))

        assert [c.path for c in survivors] == [str(temp_dir / "a"), str(temp_dir / "c")]

    def test_front_hash_stage_keeps_same_head_different_tail(self, temp_dir):
        """Equal heads pass the pre-screen; the full hash decides later."""
        head = b"H" * FRONT_CHUNK_SIZE
        (temp_dir / "a").write_bytes(head + b"1")
        (temp_dir / "b").write_bytes(head + b"2")

        survivors = FrontHashStage(DuplicateGrouper()).process(self._candidates(temp_dir))

        assert len(survivors) == 2

    def test_front_hash_stage_does_not_mix_sizes(self, temp_dir):
        """Files with equal heads but different sizes can never be duplicates."""
        head = b"H" * FRONT_CHUNK_SIZE
        (temp_dir / "a").write_bytes(head + b"1")
        (temp_dir / "b").write_bytes(head + b"22")

        assert FrontHashStage(DuplicateGrouper()).process(self._candidates(temp_dir)) == []

    def test_stages_report_progress(self, temp_dir):
        (temp_dir / "a").write_bytes(b"1")
        (temp_dir / "b").write_bytes(b"1")
        events = []

        candidates = self._candidates(temp_dir)
        SizeStage(DuplicateGrouper()).process(candidates, lambda *e: events.append(e))
        FrontHashStage(DuplicateGrouper()).process(candidates, lambda *e: events.append(e))

        assert ("Size grouping", 2, 2) in events
        assert ("Front-chunk Hash", 2, 2) in events
