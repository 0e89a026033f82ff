from __future__ import annotations

import datetime as dt
import os
import shutil
from pathlib import Path

from .errors import CopyError, FolderCreateError, OpenError, WalkError, WriteError
from .utils import file_mtime, month_name


def month_folder_name(value: dt.datetime) -> str:
    return f"{value.month:02d}-{month_name(value)}"


def destination_for(name: str, value: dt.datetime, destination_root: Path) -> Path:
    folder = Path(destination_root) / f"{value.year:04d}" / month_folder_name(value)
    return folder / f"{value.hour:02d}_{name}"


def copy_file(source: Path, target: Path) -> None:
    try:
        src = source.open("rb")
    except OSError as exc:
        raise OpenError(source, exc) from exc
    with src:
        try:
            dst = target.open("wb")
        except OSError as exc:
            raise WriteError(target, exc) from exc
        with dst:
            try:
                shutil.copyfileobj(src, dst)
            except OSError as exc:
                raise CopyError(source, exc) from exc


def walk_files(source_root: Path, skip: Path):
    def on_error(exc: OSError) -> None:
        raise WalkError(Path(exc.filename or source_root), exc) from exc

    if not source_root.is_dir():
        raise WalkError(source_root, "not a directory")
    skip_resolved = skip.resolve()
    for current, dirs, files in os.walk(source_root, onerror=on_error):
        current_path = Path(current)
        dirs[:] = [name for name in dirs if (current_path / name).resolve() != skip_resolved]
        for name in files:
            path = current_path / name
            # FIFOs, sockets and device nodes are left alone.
            if path.is_file():
                yield path


def organize_files(source_root: Path, destination_root: Path) -> list[Path]:
    """Copy every file under ``source_root`` into dated folders.

    Each file lands in ``destination_root/YYYY/MM-MonthName/HH_name`` based on
    its modification time. The first failure stops the whole walk.
    """
    source_root = Path(source_root)
    destination_root = Path(destination_root)
    copied = []
    for path in walk_files(source_root, destination_root):
        target = destination_for(path.name, file_mtime(path), destination_root)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise FolderCreateError(target.parent, exc) from exc
        copy_file(path, target)
        print(f"Moved {path} to {target}")
        copied.append(target)
    return copied
