import asyncio
import json
import os
import stat
import sys
import time

import pytest
from httpx import ASGITransport, AsyncClient

from video_downloader.api import deps
from video_downloader.config.settings import config
from video_downloader.core.exceptions import ToolProcessError
from video_downloader.main import app
from video_downloader.services.batch import BatchCoordinator
from video_downloader.services.info import MetadataExtractor
from video_downloader.services.probe import ToolAvailabilityProbe
from video_downloader.services.ytdlp import SubprocessExecutor, YTDLPCommandBuilder, YtDlpTool

pytestmark = pytest.mark.skipif(sys.platform == "win32", reason="uses a POSIX shell script as yt-dlp")

DOCUMENT = {"title": "Clip", "duration": 3, "formats": [{"format_id": "1", "height": 240, "ext": "mp4"}]}


@pytest.fixture
def fake_binary(tmp_path, monkeypatch):
    """Install a shell script that mimics the yt-dlp command line"""
    def install(body):
        script = tmp_path / "yt-dlp"
        script.write_text("#!/bin/sh\n" + body)
        script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        monkeypatch.setattr(config.ytdlp, "binary", str(script))
        return script
    return install


def test_command_builder_uses_single_item_mode():
    info = YTDLPCommandBuilder.build_info_command("https://vimeo.com/1")
    assert info[1:] == ["--dump-json", "--no-playlist", "--", "https://vimeo.com/1"]

    download = YTDLPCommandBuilder.build_download_command("https://vimeo.com/1", "best", "/tmp/x.mp4")
    assert download[download.index("-f") + 1] == "best"
    assert download[download.index("-o") + 1] == "/tmp/x.mp4"
    assert "--no-playlist" in download
    assert download[-2:] == ["--", "https://vimeo.com/1"]


@pytest.mark.asyncio
async def test_executor_kills_on_timeout():
    started = time.monotonic()
    with pytest.raises(asyncio.TimeoutError):
        await SubprocessExecutor.run([sys.executable, "-c", "import time; time.sleep(10)"], timeout=0.3)
    assert time.monotonic() - started < 5


@pytest.mark.asyncio
async def test_dump_metadata_parses_json(fake_binary):
    fake_binary(f"echo '{json.dumps(DOCUMENT)}'\n")
    info = await YtDlpTool().dump_metadata("https://vimeo.com/1", timeout=10)
    assert info["title"] == "Clip"


@pytest.mark.asyncio
async def test_dump_metadata_nonzero_exit(fake_binary):
    fake_binary("echo 'ERROR: Unsupported URL' >&2\nexit 1\n")
    with pytest.raises(ToolProcessError) as exc_info:
        await YtDlpTool().dump_metadata("https://example.org", timeout=10)
    assert "Unsupported URL" in exc_info.value.message
    assert exc_info.value.returncode == 1
    assert exc_info.value.timed_out is False


@pytest.mark.asyncio
async def test_dump_metadata_unparseable(fake_binary):
    fake_binary("echo 'not json'\n")
    with pytest.raises(ToolProcessError) as exc_info:
        await YtDlpTool().dump_metadata("https://vimeo.com/1", timeout=10)
    assert exc_info.value.message == "Failed to parse yt-dlp output"


@pytest.mark.asyncio
async def test_dump_metadata_timeout(fake_binary):
    fake_binary("exec sleep 10\n")
    started = time.monotonic()
    with pytest.raises(ToolProcessError) as exc_info:
        await YtDlpTool().dump_metadata("https://vimeo.com/1", timeout=0.3)
    assert exc_info.value.timed_out is True
    assert "timed out" in exc_info.value.message
    assert time.monotonic() - started < 5


@pytest.mark.asyncio
async def test_materialize_writes_to_output_path(fake_binary, tmp_path):
    # -f <sel> -o <path> --no-playlist --no-progress -- <url>
    fake_binary('printf data > "$4"\n')
    output = tmp_path / "out.mp4"
    await YtDlpTool().materialize("https://vimeo.com/1", "best", str(output), timeout=10)
    assert output.read_bytes() == b"data"


@pytest.mark.asyncio
async def test_probe_reports_version(fake_binary):
    fake_binary("echo 2025.01.15\n")
    assert await ToolAvailabilityProbe(YtDlpTool()).is_available() is True


@pytest.mark.asyncio
async def test_probe_missing_binary(monkeypatch, tmp_path):
    monkeypatch.setattr(config.ytdlp, "binary", os.path.join(str(tmp_path), "does-not-exist"))
    assert await ToolAvailabilityProbe(YtDlpTool()).is_available() is False


@pytest.mark.asyncio
async def test_probe_nonzero_exit(fake_binary):
    fake_binary("exit 2\n")
    assert await ToolAvailabilityProbe(YtDlpTool()).is_available() is False


# Mimics yt-dlp option parsing: options are honoured until "--"
OPTION_AWARE_SCRIPT = """\
for arg in "$@"; do
  case "$arg" in
    --version) echo 2025.01.15; exit 0 ;;
    --) break ;;
    --batch-file=*) cat "${arg#--batch-file=}" >&2; exit 1 ;;
  esac
done
echo "ERROR: [generic] not a valid URL" >&2
exit 1
"""


@pytest.fixture
def secret_file(tmp_path):
    path = tmp_path / "secret.txt"
    path.write_text("TOPSECRET-db-password\n")
    return path


@pytest.fixture
async def real_tool_client(fake_binary):
    fake_binary(OPTION_AWARE_SCRIPT)
    tool = YtDlpTool()
    probe = ToolAvailabilityProbe(tool)
    extractor = MetadataExtractor(tool, probe)
    app.dependency_overrides[deps.get_extractor] = lambda: extractor
    app.dependency_overrides[deps.get_batch_coordinator] = lambda: BatchCoordinator(extractor, probe)
    try:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()


@pytest.mark.asyncio
async def test_url_is_passed_after_end_of_options(fake_binary, tmp_path):
    argv_file = tmp_path / "argv.txt"
    fake_binary(f'printf "%s\\n" "$@" > "{argv_file}"\necho \'{json.dumps(DOCUMENT)}\'\n')

    await YtDlpTool().dump_metadata("--batch-file=/etc/passwd", timeout=10)
    argv = argv_file.read_text().splitlines()
    assert argv[-2:] == ["--", "--batch-file=/etc/passwd"]

    output = tmp_path / "out.mp4"
    await YtDlpTool().materialize("--config-location=/tmp/x", "best", str(output), timeout=10)
    argv = argv_file.read_text().splitlines()
    assert argv[-2:] == ["--", "--config-location=/tmp/x"]


@pytest.mark.asyncio
async def test_option_like_url_cannot_read_local_files(real_tool_client, secret_file):
    response = await real_tool_client.post("/api/download/info", json={"url": f"--batch-file={secret_file}"})
    assert response.status_code == 500
    assert "not a valid URL" in response.json()["error"]
    assert "TOPSECRET" not in response.text


@pytest.mark.asyncio
async def test_option_like_url_in_batch_fails_per_item(real_tool_client, secret_file):
    response = await real_tool_client.post(
        "/api/download/batch", json={"urls": [f"--batch-file={secret_file}"]}
    )
    assert response.status_code == 200
    [result] = response.json()["results"]
    assert result["success"] is False
    assert "TOPSECRET" not in response.text
