import pytest
import shutil
import subprocess
from pathlib import Path

from inflio.core.common.enums import ImageFormat
from inflio.core.exceptions import FrameCaptureError
from inflio.core.shared_types import MediaFile
from inflio.features.frame_capture.data.ffmpeg_adapter import FFmpegFrameExtractor
from inflio.features.frame_capture.domain.interfaces import IFrameExtractor
from inflio.features.frame_capture.domain.models import FrameRequest
from inflio.features.frame_capture.service.api import capture_frame, capture_thumbnail

FFMPEG_AVAILABLE = shutil.which("ffmpeg") is not None

JPEG_MAGIC = b"\xff\xd8"
PNG_MAGIC = b"\x89PNG"

@pytest.fixture
def fake_video(tmp_path):
    p = tmp_path / "placeholder.mp4"
    p.write_bytes(b"FAKE_VIDEO")
    return p

@pytest.fixture(scope="module")
def real_video(tmp_path_factory):
    """2-second synthetic clip with a visual counter."""
    if not FFMPEG_AVAILABLE:
        pytest.skip("ffmpeg not installed")
    p = tmp_path_factory.mktemp("frames") / "src_frame_test.mp4"
    cmd = [
        "ffmpeg", "-y",
        "-f", "lavfi", "-i", "testsrc=duration=2:size=320x240:rate=30",
        "-c:v", "mpeg4",
        str(p)
    ]
    subprocess.run(cmd, check=True, capture_output=True)
    return p

# --- DOMAIN ---

def test_request_validation(fake_video):
    source = MediaFile(fake_video)
    with pytest.raises(ValueError):
        FrameRequest(source, timestamp=-1.0)
    with pytest.raises(ValueError):
        FrameRequest(source, timestamp=0.0, quality=40)

def test_missing_source_is_rejected(tmp_path):
    with pytest.raises(FileNotFoundError):
        capture_frame(str(tmp_path / "nope.mp4"), 1.0)

# --- ADAPTER (subprocess stubbed) ---

def test_command_streams_single_frame(fake_video):
    cmd = FFmpegFrameExtractor("ffmpeg")._build_command(FrameRequest(MediaFile(fake_video), 2.5))
    assert cmd[0] == "ffmpeg"
    assert cmd[cmd.index("-ss") + 1] == "2.5"
    assert cmd[cmd.index("-frames:v") + 1] == "1"
    assert cmd[cmd.index("-vcodec") + 1] == "mjpeg"
    assert cmd[-1] == "pipe:1"

def test_empty_output_falls_back_to_first_frame(fake_video, monkeypatch):
    seen = []

    def fake_run(cmd, **kwargs):
        ts = float(cmd[cmd.index("-ss") + 1])
        seen.append(ts)
        out = b"" if ts > 0 else JPEG_MAGIC + b"frame"
        return subprocess.CompletedProcess(cmd, 0, stdout=out, stderr=b"")

    monkeypatch.setattr(subprocess, "run", fake_run)
    data = FFmpegFrameExtractor("ffmpeg").capture(FrameRequest(MediaFile(fake_video), 99.0))

    assert data.startswith(JPEG_MAGIC)
    assert seen == [99.0, 0.0]

def test_ffmpeg_failure_is_wrapped(fake_video, monkeypatch):
    def fake_run(cmd, **kwargs):
        raise subprocess.CalledProcessError(1, cmd, stderr=b"moov atom not found")

    monkeypatch.setattr(subprocess, "run", fake_run)
    with pytest.raises(FrameCaptureError, match="moov atom not found"):
        FFmpegFrameExtractor("ffmpeg").capture(FrameRequest(MediaFile(fake_video), 0.0))

def test_missing_binary_is_wrapped(fake_video):
    extractor = FFmpegFrameExtractor("/definitely/not/ffmpeg")
    with pytest.raises(FrameCaptureError):
        extractor.capture(FrameRequest(MediaFile(fake_video), 0.0))

def test_service_accepts_injected_extractor(fake_video):
    class StubExtractor(IFrameExtractor):
        def __init__(self):
            self.requests = []

        def capture(self, request):
            self.requests.append(request)
            return b"img"

    stub = StubExtractor()
    assert capture_thumbnail(str(fake_video), extractor=stub) == b"img"
    assert stub.requests[0].timestamp == 5.0
    assert stub.requests[0].image_format == ImageFormat.JPEG

# --- INTEGRATION (real ffmpeg) ---

def test_capture_jpeg_frame(real_video):
    data = capture_frame(str(real_video), 1.0)
    assert data.startswith(JPEG_MAGIC)

def test_capture_png_frame(real_video):
    data = capture_frame(str(real_video), 0.5, ImageFormat.PNG)
    assert data.startswith(PNG_MAGIC)

def test_thumbnail_beyond_end_uses_first_frame(real_video):
    # Clip is 2 seconds long, default seek is 5 seconds
    data = capture_thumbnail(str(real_video))
    assert data.startswith(JPEG_MAGIC)
