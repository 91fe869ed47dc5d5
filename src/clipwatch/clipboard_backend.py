#!/usr/bin/env python3
"""Local clipboard tool detection.

Local clipboard access goes through the platform's command-line tools
rather than a windowing-system library, so the same code runs on macOS,
Wayland, X11, WSL and Windows. This module picks the tool set for the
current environment:

- macOS: pbcopy / pbpaste
- Wayland (WAYLAND_DISPLAY): wl-copy / wl-paste
- X11 (DISPLAY): xclip, falling back to xsel
- WSL (clip.exe on PATH): clip.exe / PowerShell Get-Clipboard
- Windows: clip / PowerShell Get-Clipboard

Detection runs once per process; get_backend() returns the cached result.
"""

from __future__ import annotations

import functools
import os
import shutil
import sys
from dataclasses import dataclass, field
from enum import Enum


class BackendKind(str, Enum):
    """Known clipboard tool sets."""

    DARWIN = "darwin-pasteboard"
    WAYLAND = "wayland-wl-copy"
    X11 = "x11-xclip"
    WSL = "wsl-clip"
    WINDOWS = "windows-clip"
    UNKNOWN = "unknown"


@dataclass
class Backend:
    """Commands used to read and write the local clipboard.

    Attributes:
        kind: Which tool set was detected.
        copy_cmd: Command that reads stdin into the clipboard.
        paste_cmd: Command that writes the clipboard to stdout.
        clear_cmd: Command that empties the clipboard; when empty, clearing
            runs copy_cmd with no input.
        missing: Required tools not found on PATH.
        notes: Free-form remark shown by `clipwatch doctor`.
        env_source: Environment variable that selected this backend, if any.
    """

    kind: BackendKind
    copy_cmd: list[str] = field(default_factory=list)
    paste_cmd: list[str] = field(default_factory=list)
    clear_cmd: list[str] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)
    notes: str = ""
    env_source: str = ""

    @property
    def usable(self) -> bool:
        """True if the backend is known and has all its tools."""
        return self.kind != BackendKind.UNKNOWN and not self.missing


_INSTALL_HINTS: dict[BackendKind, str] = {
    BackendKind.WAYLAND: (
        "Install wl-clipboard: sudo apt install wl-clipboard (Debian/Ubuntu) "
        "or sudo dnf install wl-clipboard (Fedora)"
    ),
    BackendKind.X11: (
        "Install xclip: sudo apt install xclip (Debian/Ubuntu) "
        "or sudo dnf install xclip (Fedora)"
    ),
    BackendKind.DARWIN: "pbcopy/pbpaste should be available by default on macOS",
    BackendKind.WSL: "Ensure clip.exe and powershell.exe are in your PATH",
    BackendKind.WINDOWS: "Ensure clip.exe and powershell.exe are in your PATH",
}


def has_cmd(name: str) -> bool:
    """Return True if an executable called name is on PATH."""
    return shutil.which(name) is not None


def install_hint(kind: BackendKind) -> str:
    """Return an installation hint for the given backend kind."""
    return _INSTALL_HINTS.get(kind, "Run 'clipwatch doctor' for more information")


def missing_tools_message(backend: Backend) -> str:
    """Describe the missing tools of a backend together with a hint."""
    return (
        f"backend {backend.kind.value} is missing required tools: "
        f"{', '.join(backend.missing)}\n       Hint: {install_hint(backend.kind)}"
    )


def detect_darwin() -> Backend:
    """Build the macOS pasteboard backend."""
    missing = [cmd for cmd in ("pbcopy", "pbpaste") if not has_cmd(cmd)]
    return Backend(
        kind=BackendKind.DARWIN,
        copy_cmd=["pbcopy"],
        paste_cmd=["pbpaste"],
        missing=missing,
    )


def detect_wayland() -> Backend | None:
    """Build the Wayland backend, or None outside a Wayland session."""
    if not os.environ.get("WAYLAND_DISPLAY"):
        return None
    missing = [cmd for cmd in ("wl-copy", "wl-paste") if not has_cmd(cmd)]
    return Backend(
        kind=BackendKind.WAYLAND,
        copy_cmd=["wl-copy"],
        paste_cmd=["wl-paste", "--no-newline"],
        clear_cmd=["wl-copy", "--clear"],
        missing=missing,
        env_source="WAYLAND_DISPLAY",
    )


def detect_x11() -> Backend | None:
    """Build the X11 backend, or None without a DISPLAY.

    Prefers xclip; uses xsel when only xsel is installed.
    """
    if not os.environ.get("DISPLAY"):
        return None
    copy_cmd = ["xclip", "-selection", "clipboard"]
    paste_cmd = ["xclip", "-selection", "clipboard", "-o"]
    missing: list[str] = []
    if not has_cmd("xclip"):
        if has_cmd("xsel"):
            copy_cmd = ["xsel", "--clipboard", "--input"]
            paste_cmd = ["xsel", "--clipboard", "--output"]
        else:
            missing.append("xclip/xsel")
    return Backend(
        kind=BackendKind.X11,
        copy_cmd=copy_cmd,
        paste_cmd=paste_cmd,
        missing=missing,
        env_source="DISPLAY",
    )


def detect_wsl() -> Backend | None:
    """Build the WSL backend, or None when clip.exe is not on PATH."""
    if not has_cmd("clip.exe"):
        return None
    missing = [] if has_cmd("powershell.exe") else ["powershell.exe"]
    return Backend(
        kind=BackendKind.WSL,
        copy_cmd=["clip.exe"],
        paste_cmd=["powershell.exe", "-NoProfile", "-Command", "Get-Clipboard"],
        missing=missing,
        notes="WSL detection based on clip.exe in PATH.",
    )


def detect_windows() -> Backend:
    """Build the native Windows backend."""
    missing: list[str] = []
    if not has_cmd("clip") and not has_cmd("clip.exe"):
        missing.append("clip.exe")
    if not has_cmd("powershell.exe") and not has_cmd("powershell"):
        missing.append("powershell.exe")

    ps_cmd = "powershell" if not has_cmd("powershell.exe") and has_cmd("powershell") else "powershell.exe"
    copy_cmd = ["clip"] if not has_cmd("clip.exe") and has_cmd("clip") else ["clip.exe"]
    return Backend(
        kind=BackendKind.WINDOWS,
        copy_cmd=copy_cmd,
        paste_cmd=[ps_cmd, "-NoProfile", "-Command", "Get-Clipboard"],
        missing=missing,
    )


def detect_backend(platform: str | None = None) -> Backend:
    """Detect the clipboard backend for a platform.

    On Linux, Wayland, X11 and WSL are tried in that order and the first
    one with all of its tools present wins.

    Args:
        platform: Value in the style of sys.platform; defaults to the
            running interpreter's.

    Returns:
        The detected Backend, with kind UNKNOWN if nothing usable exists.
    """
    platform = platform or sys.platform
    if platform == "darwin":
        return detect_darwin()
    if platform.startswith("win"):
        return detect_windows()
    for detect in (detect_wayland, detect_x11, detect_wsl):
        backend = detect()
        if backend is not None and not backend.missing:
            return backend
    return Backend(
        kind=BackendKind.UNKNOWN,
        notes=(
            "No Wayland/X11/WSL clipboard command found. "
            "Install wl-clipboard or xclip/xsel, or configure clip.exe for WSL."
        ),
    )


@functools.lru_cache(maxsize=1)
def get_backend() -> Backend:
    """Return the backend for this process, detecting it on first call."""
    return detect_backend()
