"""
Decorators for CLI and resource tracking.
"""

import functools
import inspect
import logging
import os
import re
import subprocess
import sys
import threading
import time
from dataclasses import MISSING, fields
from functools import wraps
from typing import Annotated, get_origin

import psutil
import pyfiglet

logger = logging.getLogger("scgOpt")


def process_cpu_time(proc: psutil.Process):
    """Calculate total CPU time for a process."""
    cpu_times = proc.cpu_times()
    return cpu_times.user + cpu_times.system


def _format_duration(seconds: float) -> str:
    if seconds < 60:
        return f"{seconds:.2f} seconds"
    elif seconds < 3600:
        return f"{seconds / 60:.2f} minutes"
    return f"{seconds / 3600:.2f} hours"


def track_resource_usage(func):
    """
    Decorator to track resource usage during function execution.
    Logs memory usage, CPU time, and wall clock time at the end of the function.
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        process = psutil.Process(os.getpid())

        peak_memory = 0
        cpu_percent_samples = []
        stop_event = threading.Event()

        def resource_monitor():
            nonlocal peak_memory
            while not stop_event.is_set():
                try:
                    current_memory = process.memory_info().rss / (1024 * 1024)
                    peak_memory = max(peak_memory, current_memory)

                    cpu_percent = process.cpu_percent(interval=None)
                    if cpu_percent > 0:  # Skip initial zero readings
                        cpu_percent_samples.append(cpu_percent)
                except psutil.Error:
                    break
                stop_event.wait(0.5)

        monitor_thread = threading.Thread(target=resource_monitor, daemon=True)
        monitor_thread.start()

        start_wall_time = time.time()
        start_cpu_time = process_cpu_time(process)

        try:
            return func(*args, **kwargs)
        finally:
            stop_event.set()
            monitor_thread.join(timeout=1.0)

            wall_time = time.time() - start_wall_time
            cpu_time = process_cpu_time(process) - start_cpu_time

            avg_cpu_percent = (
                sum(cpu_percent_samples) / len(cpu_percent_samples) if cpu_percent_samples else 0
            )

            if sys.platform == "darwin":
                factor = macos_timebase_factor()
                cpu_time *= factor
                avg_cpu_percent *= factor

            if peak_memory < 1024:
                memory_str = f"{peak_memory:.2f} MB"
            else:
                memory_str = f"{peak_memory / 1024:.2f} GB"

            logger.info("Resource usage summary:")
            logger.info(f"  • Wall clock time: {_format_duration(wall_time)}")
            logger.info(f"  • CPU time: {_format_duration(cpu_time)}")
            logger.info(f"  • Average CPU utilization: {avg_cpu_percent:.1f}%")
            logger.info(f"  • Peak memory usage: {memory_str}")

    return wrapper


def show_banner(command_name: str, version: str):
    """Display scgOpt banner and version information."""
    command_name = command_name.replace("_", " ")
    logo = pyfiglet.figlet_format(
        "scgOpt",
        font="doom",
        width=80,
        justify="center",
    ).rstrip()
    print(logo, flush=True)
    print(("Version: " + version).center(80), flush=True)
    print("=" * 80, flush=True)
    logger.info(f"Running {command_name}...")
    logger.info(f"Started at: {time.strftime('%Y-%m-%d %H:%M:%S')}")


def dataclass_typer(func):
    """
    Decorator to convert a function that takes a dataclass config
    into a Typer command with individual CLI options.
    """
    sig = inspect.signature(func)

    # Get the dataclass type from the function signature
    config_param = list(sig.parameters.values())[0]
    config_class = config_param.annotation

    @wraps(func)
    @track_resource_usage
    def wrapper(**kwargs):
        try:
            from scgOpt import __version__
            version = __version__
        except ImportError:
            version = "development"
        show_banner(func.__name__, version)

        config = config_class(**kwargs)
        result = func(config)

        logger.info(f"Finished at: {time.strftime('%Y-%m-%d %H:%M:%S')}")
        return result

    params = []
    for field in fields(config_class):
        # Only fields with Annotated type hints become CLI options
        if get_origin(field.type) != Annotated:
            continue

        if field.default is not MISSING:
            default_value = field.default
        elif field.default_factory is not MISSING:
            default_value = field.default_factory()
        else:
            default_value = inspect.Parameter.empty

        params.append(
            inspect.Parameter(
                field.name,
                inspect.Parameter.KEYWORD_ONLY,
                annotation=field.type,  # Keep the full Annotated type
                default=default_value,
            )
        )

    wrapper.__signature__ = inspect.Signature(params)
    wrapper.__doc__ = func.__doc__

    return wrapper


@functools.cache
def macos_timebase_factor():
    """
    On MacOS, `psutil.Process.cpu_times()` is not accurate, check activity monitor instead.
    see: https://github.com/giampaolo/psutil/issues/2411#issuecomment-2274682289
    """
    default_factor = 1

    try:
        result = subprocess.run(
            ["ioreg", "-p", "IODeviceTree", "-c", "IOPlatformDevice"],
            capture_output=True,
            text=True,
            check=True,
        )
    except (subprocess.CalledProcessError, FileNotFoundError) as e:
        logger.debug(f"Command failed: {e}")
        return default_factor

    for line in result.stdout.splitlines():
        if "timebase-frequency" in line:
            match = re.search(r"<([0-9a-fA-F]+)>", line)
            if not match:
                return default_factor
            byte_data = bytes.fromhex(match.group(1))
            timebase_freq = int.from_bytes(byte_data, byteorder="little")
            return pow(10, 9) / timebase_freq
    return default_factor
