import pytest

from arm_telemetry.link.scanner import FrameScanner, extract_frame, find_sync


class TestFindSync:
    @pytest.mark.parametrize("count", [0, 1, 7, 50])
    def test_returns_noise_length(self, noise_factory, count):
        buffer = noise_factory(count, seed=count) + bytes([0xAA, 0x55])
        assert find_sync(buffer, 0) == count

    def test_respects_start(self):
        buffer = bytes([0xAA, 0x55, 0x00, 0xAA, 0x55])
        assert find_sync(buffer, 0) == 0
        assert find_sync(buffer, 1) == 3

    def test_not_found(self):
        assert find_sync(b"", 0) is None
        assert find_sync(bytes([0x55, 0xAA]), 0) is None
        assert find_sync(bytes([0x01, 0x02, 0x03]), 0) is None

    def test_lone_trailing_sync_high(self):
        assert find_sync(bytes([0x00, 0x00, 0xAA]), 0) is None

    def test_start_past_end(self):
        assert find_sync(bytes([0xAA, 0x55]), 5) is None

    def test_split_marker(self):
        buffer = bytes([0xAA, 0xAA, 0x55])
        assert find_sync(buffer, 0) == 1


class TestExtractFrame:
    def test_full_frame(self, frame_factory):
        frame = frame_factory(sequence=42)
        buffer = b"\x01\x02" + frame.pack()
        assert extract_frame(buffer, 2) == frame

    @pytest.mark.parametrize("available", [2, 20, 38])
    def test_insufficient_data(self, frame_factory, available):
        buffer = frame_factory().pack()[:available]
        assert extract_frame(buffer, 0) is None

    def test_extra_bytes_ignored(self, frame_factory):
        frame = frame_factory(sequence=3)
        assert extract_frame(frame.pack() + b"\xAA", 0) == frame


class TestFrameScanner:
    def test_empty_buffer(self):
        scanner = FrameScanner(b"")
        assert list(scanner) == []
        assert scanner.noise_bytes == 0

    def test_noise_only(self, noise_factory):
        scanner = FrameScanner(noise_factory(25))
        assert list(scanner) == []
        assert scanner.noise_bytes == 25
        assert scanner.exhausted

    def test_frames_with_filler(self, frame_factory, noise_factory):
        buffer = (
            noise_factory(4, seed=1)
            + frame_factory(sequence=1).pack()
            + frame_factory(sequence=2).pack()
            + noise_factory(9, seed=2)
            + frame_factory(sequence=3).pack()
            + noise_factory(5, seed=3)
        )
        scanner = FrameScanner(buffer)
        scanned = list(scanner)
        assert [s.frame.sequence for s in scanned] == [1, 2, 3]
        assert [s.offset for s in scanned] == [4, 43, 91]
        assert [s.noise_before for s in scanned] == [4, 0, 9]
        assert scanner.noise_bytes == 18
        assert len(buffer) == scanner.noise_bytes + 39 * len(scanned)

    def test_truncated_trailing_frame_is_noise(self, frame_factory):
        buffer = frame_factory(sequence=7).pack() + frame_factory(sequence=8).pack()[:20]
        scanner = FrameScanner(buffer)
        scanned = list(scanner)
        assert len(scanned) == 1
        assert scanner.noise_bytes == 20
        assert scanner.cursor == len(buffer)

    def test_next_frame_after_exhaustion(self, frame_factory):
        scanner = FrameScanner(frame_factory().pack())
        assert scanner.next_frame() is not None
        assert scanner.next_frame() is None
        assert scanner.next_frame() is None
        assert scanner.noise_bytes == 0

    def test_frame_consumes_embedded_sync_bytes(self, frame_factory):
        # a sync pattern inside a frame body never starts a new frame
        frame = frame_factory(sequence=0xAA, position=0x55AA)
        buffer = frame.pack() + frame_factory(sequence=1).pack()
        scanned = list(FrameScanner(buffer))
        assert [s.offset for s in scanned] == [0, 39]
