from typing import Any, Dict, List, NamedTuple, Protocol
import asyncio
import json
import logging
from video_downloader.config.settings import config
from video_downloader.core.exceptions import ToolProcessError

logger = logging.getLogger(__name__)

STDERR_MAX_CHARS = 500

class CompletedProcess(NamedTuple):
    """Subprocess result"""
    returncode: int
    stdout: bytes
    stderr: bytes

class SubprocessExecutor:
    """Execute subprocess with consistent error handling"""

    @staticmethod
    async def run(
        cmd: List[str],
        timeout: float,
        capture_stderr: bool = True
    ) -> CompletedProcess:
        """
        Run subprocess with timeout and proper cleanup.
        Prevents process leaks and ensures consistent error handling.
        """
        process = await asyncio.create_subprocess_exec(
            *cmd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE if capture_stderr else asyncio.subprocess.DEVNULL,
            stdin=asyncio.subprocess.DEVNULL
        )

        try:
            stdout, stderr = await asyncio.wait_for(
                process.communicate(),
                timeout=timeout
            )

            return CompletedProcess(
                returncode=process.returncode,
                stdout=stdout,
                stderr=stderr if capture_stderr else b""
            )

        except asyncio.TimeoutError:
            process.kill()
            await process.wait()
            raise
        except Exception:
            if process.returncode is None:
                process.kill()
                await process.wait()
            raise

class YTDLPCommandBuilder:
    """Build yt-dlp commands. The url always follows '--' so it is never read as an option."""

    @staticmethod
    def build_version_command() -> List[str]:
        return [config.ytdlp.binary, '--version']

    @staticmethod
    def build_info_command(url: str) -> List[str]:
        """Build command for fetching video info"""
        return [
            config.ytdlp.binary,
            '--dump-json',
            '--no-playlist',
            '--',
            url,
        ]

    @staticmethod
    def build_download_command(url: str, format_str: str, output_path: str) -> List[str]:
        """Build command for downloading to a fixed output path"""
        return [
            config.ytdlp.binary,
            '-f', format_str,
            '-o', output_path,
            '--no-playlist',
            '--no-progress',
            '--',
            url,
        ]

def _stderr_text(result: CompletedProcess) -> str:
    text = result.stderr.decode(errors="ignore").strip()
    return text[:STDERR_MAX_CHARS] or f"yt-dlp exited with code {result.returncode}"

class ExtractionTool(Protocol):
    """Narrow interface over the external extraction tool"""

    async def version(self) -> str: ...

    async def dump_metadata(self, url: str, timeout: float) -> Dict[str, Any]: ...

    async def materialize(self, url: str, format_str: str, output_path: str, timeout: float) -> None: ...

class YtDlpTool:
    """ExtractionTool backed by the yt-dlp executable"""

    async def version(self) -> str:
        cmd = YTDLPCommandBuilder.build_version_command()
        try:
            result = await SubprocessExecutor.run(cmd, timeout=config.ytdlp.probe_timeout_seconds)
        except asyncio.TimeoutError:
            raise ToolProcessError("yt-dlp --version timed out", timed_out=True)
        except OSError as e:
            raise ToolProcessError(str(e))

        if result.returncode != 0:
            raise ToolProcessError(_stderr_text(result), returncode=result.returncode)
        return result.stdout.decode(errors="ignore").strip()

    async def dump_metadata(self, url: str, timeout: float) -> Dict[str, Any]:
        cmd = YTDLPCommandBuilder.build_info_command(url)
        try:
            result = await SubprocessExecutor.run(cmd, timeout=timeout)
        except asyncio.TimeoutError:
            raise ToolProcessError(f"yt-dlp timed out after {timeout:g}s", timed_out=True)
        except OSError as e:
            raise ToolProcessError(str(e))

        if result.returncode != 0:
            raise ToolProcessError(_stderr_text(result), returncode=result.returncode)

        try:
            info = json.loads(result.stdout.decode(errors="ignore"))
        except json.JSONDecodeError:
            raise ToolProcessError("Failed to parse yt-dlp output", returncode=result.returncode)

        if not isinstance(info, dict):
            raise ToolProcessError("Failed to parse yt-dlp output", returncode=result.returncode)
        return info

    async def materialize(self, url: str, format_str: str, output_path: str, timeout: float) -> None:
        cmd = YTDLPCommandBuilder.build_download_command(url, format_str, output_path)
        try:
            result = await SubprocessExecutor.run(cmd, timeout=timeout)
        except asyncio.TimeoutError:
            raise ToolProcessError(f"yt-dlp timed out after {timeout:g}s", timed_out=True)
        except OSError as e:
            raise ToolProcessError(str(e))

        if result.returncode != 0:
            raise ToolProcessError(_stderr_text(result), returncode=result.returncode)

ytdlp_tool = YtDlpTool()
