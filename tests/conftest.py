import os
from typing import Any, Dict, List, Optional

import pytest
from httpx import ASGITransport, AsyncClient

from video_downloader.api import deps
from video_downloader.core.exceptions import ToolProcessError
from video_downloader.main import app
from video_downloader.services.batch import BatchCoordinator
from video_downloader.services.download import DownloadOrchestrator
from video_downloader.services.info import MetadataExtractor
from video_downloader.services.probe import ToolAvailabilityProbe
from video_downloader.services.scratch import ScratchSpace


class FakeTool:
    """In-memory stand-in for yt-dlp"""

    def __init__(self):
        self.available = True
        self.documents: Dict[str, Any] = {}
        self.payload: Optional[bytes] = b"fake video bytes"
        self.download_error: Optional[ToolProcessError] = None
        self.version_calls = 0
        self.metadata_calls: List[str] = []
        self.downloads: List[Dict[str, Any]] = []

    async def version(self) -> str:
        self.version_calls += 1
        if not self.available:
            raise ToolProcessError("No such file or directory: 'yt-dlp'")
        return "2025.01.15"

    async def dump_metadata(self, url: str, timeout: float) -> Dict[str, Any]:
        self.metadata_calls.append(url)
        doc = self.documents.get(url)
        if isinstance(doc, ToolProcessError):
            raise doc
        if doc is None:
            raise ToolProcessError(f"ERROR: Unsupported URL: {url}", returncode=1)
        return doc

    async def materialize(self, url: str, format_str: str, output_path: str, timeout: float) -> None:
        self.downloads.append({"url": url, "format": format_str, "path": output_path, "timeout": timeout})
        if self.download_error is not None:
            with open(output_path, "wb") as f:
                f.write(b"partial")
            raise self.download_error
        if self.payload is not None:
            with open(output_path, "wb") as f:
                f.write(self.payload)


@pytest.fixture
def fake_tool():
    return FakeTool()


@pytest.fixture
def scratch(tmp_path):
    return ScratchSpace(os.path.join(str(tmp_path), "scratch"))


@pytest.fixture
def probe(fake_tool):
    return ToolAvailabilityProbe(fake_tool)


@pytest.fixture
def extractor(fake_tool, probe):
    return MetadataExtractor(fake_tool, probe)


@pytest.fixture
def orchestrator(fake_tool, probe, scratch):
    return DownloadOrchestrator(fake_tool, probe, scratch)


@pytest.fixture
def coordinator(extractor, probe):
    return BatchCoordinator(extractor, probe)


@pytest.fixture
async def client(extractor, orchestrator, coordinator):
    app.dependency_overrides[deps.get_extractor] = lambda: extractor
    app.dependency_overrides[deps.get_orchestrator] = lambda: orchestrator
    app.dependency_overrides[deps.get_batch_coordinator] = lambda: coordinator
    try:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()


def youtube_document(**overrides):
    doc = {
        "title": "Never Gonna Give You Up",
        "thumbnail": "https://i.ytimg.com/vi/dQw4w9WgXcQ/maxresdefault.jpg",
        "duration": 212,
        "formats": [
            {"format_id": "18", "ext": "mp4", "height": 360, "filesize": 1000},
            {"format_id": "22", "ext": "mp4", "height": 720, "filesize": 5000},
            {"format_id": "137", "ext": "mp4", "height": 1080, "filesize": 9000},
            {"format_id": "136", "ext": "webm", "height": 720, "filesize": 7000},
            {"format_id": "140", "ext": "m4a", "acodec": "mp4a.40.2", "vcodec": "none"},
        ],
    }
    doc.update(overrides)
    return doc
