"""Command-line interface for arfocus.

Provides the main entry point for running a headless focus session,
inspecting and exporting the session log, and testing the camera.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import signal
import sys
from pathlib import Path

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="arfocus",
        description="Camera-assisted focus timer",
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        default=None,
        help="Path to YAML configuration file (default: config/arfocus.yaml)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    run_parser = subparsers.add_parser("run", help="Run a focus session")
    run_parser.add_argument("--work", type=int, default=None, help="Work minutes (5-120)")
    run_parser.add_argument("--break", dest="break_minutes", type=int, default=None, help="Break minutes (3-60)")
    run_parser.add_argument("--mode", choices=["alpha", "beta"], default=None)
    run_parser.add_argument(
        "--minutes", type=float, default=None,
        help="Stop after this many minutes (default: until Ctrl-C)",
    )
    run_parser.add_argument("--no-camera", action="store_true", help="Run without presence detection")
    run_parser.add_argument("--no-save", action="store_true", help="Discard the session instead of saving it")
    run_parser.add_argument(
        "--status-every", type=int, default=10,
        help="Print a status line every N seconds",
    )

    sessions_parser = subparsers.add_parser("sessions", help="List saved sessions")
    sessions_parser.add_argument("-n", "--limit", type=int, default=10)

    export_parser = subparsers.add_parser("export", help="Export the session log as CSV")
    export_parser.add_argument(
        "-o", "--output", type=Path, default=None,
        help="Output file (default: stdout)",
    )

    summary_parser = subparsers.add_parser("summary", help="Per-day focus minutes")
    summary_parser.add_argument("--days", type=int, default=7)

    subparsers.add_parser("capture-test", help="Capture one frame and check for a face")

    return parser.parse_args(argv)


def _build_store(settings):
    from arfocus.storage.json_store import JsonFileSessionStore

    return JsonFileSessionStore(settings.storage.path, key=settings.storage.key)


def _format_status(snapshot) -> str:
    from arfocus.reporting.export import format_mmss

    return (
        f"[{snapshot.phase.value:<5}] {format_mmss(snapshot.seconds_left)} "
        f"({snapshot.progress * 100:3.0f}%) | HP {snapshot.hp:5.1f} | "
        f"{snapshot.attention.value:<10} | focus {format_mmss(snapshot.focus_sec)} "
        f"distract {format_mmss(snapshot.distract_sec)}"
    )


async def _run_session(settings, args) -> None:
    """Build the timer and drivers, run until done, then save or discard."""
    from arfocus.core.timer import FocusTimer
    from arfocus.runtime.loop import FocusLoop

    if args.work is not None:
        settings.timer.work_minutes = args.work
    if args.break_minutes is not None:
        settings.timer.break_minutes = args.break_minutes
    if args.mode is not None:
        settings.timer.mode = args.mode
    if args.no_camera:
        settings.capture.camera_enabled = False

    timer = FocusTimer.from_settings(settings, _build_store(settings))

    capture = classifier = None
    if settings.capture.camera_enabled:
        from arfocus.capture.webcam import WebcamCapture
        from arfocus.detection.haar import HaarPresenceClassifier

        resolution = None
        if settings.capture.resolution_width and settings.capture.resolution_height:
            resolution = (settings.capture.resolution_width, settings.capture.resolution_height)
        capture = WebcamCapture(device_index=settings.capture.device_index, resolution=resolution)
        det = settings.detection
        classifier = HaarPresenceClassifier(
            cascade_path=det.cascade_path,
            scale_factor=det.scale_factor,
            min_neighbors=det.min_neighbors,
            min_face_size=det.min_face_size,
        )

    every = max(1, args.status_every)

    def on_tick(snapshot, flipped: bool) -> None:
        if flipped:
            print(f"\n*** {snapshot.phase.value.upper()} phase started ***")
        if flipped or (snapshot.focus_sec + snapshot.distract_sec) % every == 0:
            print(_format_status(snapshot))

    loop = FocusLoop(
        timer=timer,
        capture=capture,
        classifier=classifier,
        tick_interval=settings.timer.tick_interval,
        sample_interval_ms=settings.attention.sample_interval_ms,
        frame_interval=settings.capture.frame_interval,
        on_tick=on_tick,
    )

    try:
        asyncio.get_running_loop().add_signal_handler(signal.SIGINT, loop.stop)
    except (NotImplementedError, RuntimeError):
        logger.debug("SIGINT handler not supported here, relying on KeyboardInterrupt")

    print(f"Session started: {timer.work_minutes}m work / {timer.break_minutes}m break, mode {timer.mode}")
    print("Press Ctrl-C to finish.\n")
    timer.start()
    duration = args.minutes * 60 if args.minutes else None
    await loop.run(duration=duration)

    if args.no_save:
        timer.reset()
        print("\nSession discarded.")
        return

    result = timer.save()
    entry = result.entry
    print(f"\nSaved session {entry.id}: {entry.focus_sec}s focused, "
          f"{entry.distract_sec}s distracted, HP {entry.hp_start:.1f} -> {entry.hp_end:.1f}")
    if not result.persisted:
        print("WARNING: the session log could not be written to disk.")


def _list_sessions(settings, limit: int) -> None:
    from arfocus.reporting.export import format_mmss

    sessions = _build_store(settings).load()
    if not sessions:
        print("No saved sessions.")
        return
    for s in sessions[:limit]:
        print(f"{s.started_at:%Y-%m-%d %H:%M}  {format_mmss(s.duration_sec)}  "
              f"focus {format_mmss(s.focus_sec)}  distract {format_mmss(s.distract_sec)}  "
              f"HP {s.hp_start:5.1f} -> {s.hp_end:5.1f}  [{s.mode}]")
    if len(sessions) > limit:
        print(f"... {len(sessions) - limit} more")


def _export(settings, output: Path | None) -> None:
    from arfocus.reporting.export import write_csv

    sessions = _build_store(settings).load()
    if output is None:
        write_csv(sessions, sys.stdout)
        return
    with open(output, "w", newline="", encoding="utf-8") as f:
        count = write_csv(sessions, f)
    print(f"Exported {count} sessions to {output}")


def _summary(settings, days: int) -> None:
    from arfocus.reporting.export import daily_totals

    totals = daily_totals(_build_store(settings).load(), days=days)
    if not totals:
        print("No saved sessions.")
        return
    print(f"{'date':<12}{'focus min':>10}{'distract min':>14}")
    for t in totals:
        print(f"{t.date:<12}{t.focus_minutes:>10.1f}{t.distract_minutes:>14.1f}")


async def _capture_test(settings) -> None:
    """Capture a single frame, save it and report whether a face is present."""
    from arfocus.capture.webcam import WebcamCapture
    from arfocus.detection.haar import HaarPresenceClassifier
    import cv2

    capture = WebcamCapture(device_index=settings.capture.device_index)
    classifier = HaarPresenceClassifier(cascade_path=settings.detection.cascade_path)
    await classifier.load()

    async with capture:
        frame = await capture.capture_frame()
    outfile = "capture_test.png"
    cv2.imwrite(outfile, frame.image)
    print(f"Saved frame to {outfile} ({frame.image.shape[1]}x{frame.image.shape[0]})")
    present = await classifier.sample(frame)
    print(f"Face present: {'yes' if present else 'no'}")


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the arfocus CLI."""
    args = parse_args(argv)

    if args.command is None:
        parse_args(["--help"])
        return

    from arfocus.config.settings import load_settings
    from arfocus.utils.logging import setup_logging

    settings = load_settings(args.config)

    if args.verbose:
        settings.logging.level = "DEBUG"

    setup_logging(settings.logging)

    if args.command == "run":
        logger.info("Starting focus session")
        asyncio.run(_run_session(settings, args))

    elif args.command == "sessions":
        _list_sessions(settings, args.limit)

    elif args.command == "export":
        _export(settings, args.output)

    elif args.command == "summary":
        _summary(settings, args.days)

    elif args.command == "capture-test":
        logger.info("Running capture test")
        asyncio.run(_capture_test(settings))


if __name__ == "__main__":
    main()
