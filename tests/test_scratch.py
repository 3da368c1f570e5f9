import asyncio
import os
import time

import pytest

from video_downloader.config.settings import config
from video_downloader.services.scratch import ScratchSpace, run_sweeper, start_sweeper, stop_sweeper


def touch(path, age=0.0):
    with open(path, "wb") as f:
        f.write(b"x")
    if age:
        past = time.time() - age
        os.utime(path, (past, past))


def test_allocate_creates_directory_and_unique_names(tmp_path):
    scratch = ScratchSpace(str(tmp_path / "nested" / "scratch"))
    paths = {scratch.allocate("mp4") for _ in range(100)}
    assert len(paths) == 100
    assert os.path.isdir(scratch.root)
    assert all(p.endswith(".mp4") for p in paths)


def test_delete_is_quiet_for_missing_file(tmp_path):
    scratch = ScratchSpace(str(tmp_path))
    assert scratch.delete(str(tmp_path / "missing.mp4")) is False


def test_delete_logs_instead_of_raising(tmp_path, caplog):
    scratch = ScratchSpace(str(tmp_path))
    directory = tmp_path / "not-a-file"
    directory.mkdir()
    assert scratch.delete(str(directory)) is False
    assert "Error cleaning up" in caplog.text


def test_sweep_only_removes_old_files(tmp_path):
    scratch = ScratchSpace(str(tmp_path))
    old = tmp_path / "video_old.mp4"
    fresh = tmp_path / "video_fresh.mp4"
    touch(old, age=7200)
    touch(fresh)

    assert scratch.sweep(max_age_seconds=3600) == 1
    assert not old.exists()
    assert fresh.exists()


def test_sweep_missing_root(tmp_path):
    assert ScratchSpace(str(tmp_path / "absent")).sweep(max_age_seconds=1) == 0


async def wait_until_gone(path, attempts=200):
    for _ in range(attempts):
        if not path.exists():
            return
        await asyncio.sleep(0.01)


@pytest.mark.asyncio
async def test_started_sweeper_removes_stale_files(tmp_path, monkeypatch):
    monkeypatch.setattr(config.download, "sweep_interval_seconds", 0.01)
    monkeypatch.setattr(config.download, "scratch_max_age_seconds", 3600)
    scratch = ScratchSpace(str(tmp_path))
    stale = tmp_path / "video_stale.mp4"
    touch(stale, age=7200)

    task = start_sweeper(scratch)
    await wait_until_gone(stale)
    await stop_sweeper(task)

    assert not stale.exists()
    assert task.cancelled()


@pytest.mark.asyncio
async def test_sweeper_keeps_running_after_failure(tmp_path, monkeypatch, caplog):
    scratch = ScratchSpace(str(tmp_path))
    real_sweep = scratch.sweep
    calls = []

    def flaky_sweep(max_age_seconds):
        calls.append(max_age_seconds)
        if len(calls) == 1:
            raise RuntimeError("scandir exploded")
        return real_sweep(max_age_seconds)

    monkeypatch.setattr(scratch, "sweep", flaky_sweep)
    stale = tmp_path / "video_stale.mp4"
    touch(stale, age=7200)

    task = asyncio.create_task(run_sweeper(scratch, interval=0.01, max_age=3600))
    await wait_until_gone(stale)
    await stop_sweeper(task)

    assert len(calls) >= 2
    assert not stale.exists()
    assert "Scratch sweep failed" in caplog.text


@pytest.mark.asyncio
async def test_stop_sweeper_without_task():
    await stop_sweeper(None)
