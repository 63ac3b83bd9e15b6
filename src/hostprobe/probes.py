"""Single-shot host accessors: CPU, distro, desktop, device, GPU, packages, uptime."""

import glob
import logging
import os
import re
import subprocess
import time
from pathlib import Path

import psutil

from hostprobe.errors import MalformedValue, NotFound, SourceUnavailable
from hostprobe.reader import StatusLineReader, field_value

logger = logging.getLogger(__name__)

CPUINFO_PATH = "/proc/cpuinfo"
THERMAL_PATH = "/sys/class/thermal/thermal_zone0/temp"
DMI_PRODUCT_PATH = "/sys/devices/virtual/dmi/id/product_name"
DEVICETREE_MODEL_PATH = "/sys/firmware/devicetree/base/model"
OS_RELEASE_PATHS = ("/bedrock/etc/os-release", "/etc/os-release", "/usr/lib/os-release")
HOSTNAME_PATH = "/etc/hostname"
OSRELEASE_PATH = "/proc/sys/kernel/osrelease"
PORTAGE_WORLD_PATH = "/var/lib/portage/world"
PORTAGE_DB_GLOB = "/var/db/pkg/*/*/"

DESKTOP_VARIABLES = ("XDG_DESKTOP_SESSION", "XDG_CURRENT_DESKTOP", "DESKTOP_SESSION")

# Package manager -> (command, header lines to discount)
PACKAGE_COMMANDS: dict[str, tuple[list[str], int]] = {
    "apk": (["apk", "info"], 0),
    "apt": (["apt", "list", "--installed"], 1),  # "Listing..."
    "dnf": (["dnf", "list", "installed"], 0),
    "dpkg": (["dpkg-query", "-f", "${binary:Package}\n", "-W"], 0),
    "eopkg": (["eopkg", "list-installed"], 0),
    "pacman": (["pacman", "-Q", "-q"], 0),
    "pip": (["pip", "list"], 2),  # column titles and rule
    "rpm": (["rpm", "-q", "-a"], 0),
    "xbps": (["xbps-query", "list-installed"], 0),
}

_reader = StatusLineReader()


def _clean(text: str) -> str:
    return text.replace("\x00", "").replace("\n", "").strip()


def _run(args: list[str]) -> str:
    """Run a command and return its stdout."""
    try:
        result = subprocess.run(args, capture_output=True, text=True, check=False)
    except OSError as exc:
        raise SourceUnavailable(f"Could not run {args[0]}: {exc.strerror or exc}") from exc
    return result.stdout


def format_cpu_model(info: str) -> str:
    """Strip trademark markers and padding from a CPU model string."""
    info = info.replace("(TM)", "").replace("(R)", "")
    return re.sub(r" {2,}", " ", info).strip()


def cpu() -> str:
    """Return the CPU model name."""
    for label in ("model name", "Model", "Hardware"):
        try:
            return format_cpu_model(field_value(_reader.find_line(CPUINFO_PATH, label)))
        except NotFound:
            continue
    raise NotFound(f"No CPU model found in {CPUINFO_PATH}")


def temp() -> str:
    """Return the CPU temperature in degrees Celsius."""
    raw = _reader.read_all(THERMAL_PATH).strip()
    try:
        millidegrees = float(raw)
    except ValueError as exc:
        raise MalformedValue(f"Bad temperature {raw!r} in {THERMAL_PATH}") from exc
    return f"{millidegrees / 1000.0:g}"


def device() -> str:
    """Return the product name of the machine."""
    try:
        return _clean(_reader.read_all(DMI_PRODUCT_PATH))
    except SourceUnavailable:
        return _clean(_reader.read_all(DEVICETREE_MODEL_PATH))


def distro() -> str:
    """Return the distribution name from the first readable os-release file."""
    last_error: SourceUnavailable | None = None
    for path in OS_RELEASE_PATHS:
        try:
            line = _reader.find_line(path, "NAME=")
        except SourceUnavailable as exc:
            last_error = exc
            continue
        return line.partition("=")[2].strip().strip('"').strip("'")
    raise SourceUnavailable(f"No readable os-release in {', '.join(OS_RELEASE_PATHS)}") from last_error


def env(var: str) -> str:
    """Return an environment variable, or a placeholder when unset."""
    return os.environ.get(var, f"N/A (could not read ${var}, are you sure it's set?)")


def window_manager() -> str:
    """Return the window manager started from ``$HOME/.xinitrc``."""
    xinitrc = Path(os.environ.get("HOME", "~")).expanduser() / ".xinitrc"
    try:
        lines = _reader.read_all(xinitrc).strip().splitlines()
    except SourceUnavailable:
        return "N/A (could not open $HOME/.xinitrc)"
    if not lines:
        return "N/A (could not open $HOME/.xinitrc)"
    return lines[-1].split(" ")[-1]


def environment() -> str:
    """Return the desktop environment, or the window manager when there is none."""
    for var in DESKTOP_VARIABLES:
        value = os.environ.get(var)
        if value:
            return value
    return window_manager()


def parse_gpu(lspci_output: str) -> str:
    """Extract the GPU name from ``lspci`` output."""
    for line in lspci_output.splitlines():
        device_class, separator, model = line.partition(" ")[2].partition(": ")
        if not separator or not re.search(r"VGA|Display|3D", device_class):
            continue
        model = model.strip()
        if model.startswith("Advanced Micro Devices, Inc."):
            bracketed = re.search(r"\[([^\]]+)\]\s*(?:\(rev [0-9a-f]+\))?$", model)
            if bracketed:
                return bracketed.group(1)
            return model.split(".", 1)[1].replace("[", "").replace("]", "").strip()
        return model
    raise NotFound("No display controller listed by lspci")


def gpu() -> str:
    """Return the name of the first display controller."""
    return parse_gpu(_run(["lspci"]))


def hostname() -> str:
    return _reader.read_all(HOSTNAME_PATH).strip()


def kernel() -> str:
    return _clean(_reader.read_all(OSRELEASE_PATH))


def count_lines(output: str) -> int:
    """Count newline-terminated records in command output."""
    return len(output.split("\n")) - 1


def packages(manager: str) -> str:
    """
    Return the number of installed packages for ``manager``.

    Unsupported managers produce a placeholder message instead of an error.
    """
    if manager == "portage":
        world = _reader.read_all(PORTAGE_WORLD_PATH)
        installed = glob.glob(PORTAGE_DB_GLOB)
        return f"{count_lines(world)} (explicit), {len(installed)} (total)"

    if manager not in PACKAGE_COMMANDS:
        return f"N/A ({manager} is not supported, please file a bug to get it added!)"

    args, header_lines = PACKAGE_COMMANDS[manager]
    count = max(0, count_lines(_run(args)) - header_lines)
    logger.debug("%s reports %d packages", manager, count)
    return str(count)


def format_duration(seconds: float) -> str:
    """
    Format an uptime as ``"<d>d <h>h <m>m"``.

    Each part only appears once the uptime exceeds one unit of it.
    """
    parts = []
    if seconds > 86400:
        parts.append(f"{int(seconds // 86400)}d")
    if seconds > 3600:
        parts.append(f"{int(seconds // 3600) % 24}h")
    if seconds > 60:
        parts.append(f"{int(seconds // 60) % 60}m")
    return " ".join(parts)


def uptime() -> str:
    """Return the time since boot."""
    return format_duration(time.time() - psutil.boot_time())
