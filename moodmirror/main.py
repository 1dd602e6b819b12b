"""Main Application Entry Point

Command line entry point for MoodMirror:

    moodmirror serve              run the emotion detection HTTP API
    moodmirror record --seconds 5 record from the microphone and detect the emotion
"""

import argparse
import asyncio
import logging
import signal
import sys
from pathlib import Path
from typing import List, Optional

from moodmirror.config.config_loader import config


logger = logging.getLogger(__name__)


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging to stdout and the configured log file.

    Args:
        level: Log level name, 'logging.level' from configuration if None
    """
    level = level or config.get('logging.level', 'INFO')
    log_file = Path(config.get('logging.file', 'logs/moodmirror.log'))
    log_file.parent.mkdir(parents=True, exist_ok=True)

    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler(log_file),
            logging.StreamHandler(sys.stdout)
        ]
    )


def serve(host: Optional[str] = None, port: Optional[int] = None) -> None:
    """Run the HTTP API under uvicorn."""
    import uvicorn
    from moodmirror.api.routes import create_app

    host = host or config.get('api.host', '0.0.0.0')
    port = port or config.get('api.port', 8000)

    logger.info(f"Starting emotion API on {host}:{port}")
    uvicorn.run(create_app(), host=host, port=port, log_config=None)


async def wait_or_interrupt(seconds: float) -> None:
    """Sleep for the given time, returning early on SIGINT or SIGTERM."""
    stop_requested = asyncio.Event()
    loop = asyncio.get_running_loop()
    installed = []
    for signum in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(signum, stop_requested.set)
            installed.append(signum)
        except (NotImplementedError, RuntimeError):
            # Windows event loops and non-main threads cannot install handlers
            pass

    try:
        await asyncio.wait_for(stop_requested.wait(), timeout=seconds)
        logger.info("Recording stopped early by signal")
    except asyncio.TimeoutError:
        pass
    finally:
        for signum in installed:
            loop.remove_signal_handler(signum)


async def record(seconds: int, device_id: Optional[str] = None) -> int:
    """Record one clip from the microphone and print the detected emotion.

    Args:
        seconds: Recording length in seconds
        device_id: sounddevice input device, default device if None

    Returns:
        Process exit code
    """
    from moodmirror.analysis.insights import describe
    from moodmirror.session.lifecycle import RecordingSession, SessionError
    from moodmirror.session.microphone import MicrophoneCaptureDevice
    from moodmirror.analysis.detector import DetectionError

    device = MicrophoneCaptureDevice(int(device_id) if device_id and device_id.isdigit() else device_id)

    async with RecordingSession(device) as session:
        try:
            await session.start()
        except SessionError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

        print(f"Recording for {seconds}s... speak now")
        await wait_or_interrupt(seconds)

        print("Analyzing your emotion...")
        try:
            result = await session.stop()
        except DetectionError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

    insight = describe(result.emotion)
    print(f"\nEmotion:    {result.emotion.value}")
    print(f"Confidence: {result.confidence:.0%}")
    print(f"Duration:   {result.audio_duration:.0f}s")
    print(f"Severity:   {insight.severity.value}")
    print(f"\n{insight.description}")
    for recommendation in insight.recommendations:
        print(f"  - {recommendation}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="moodmirror", description="Voice emotion detection")
    parser.add_argument("--log-level", default=None, help="Override the configured log level")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve_parser = subparsers.add_parser("serve", help="Run the emotion detection API")
    serve_parser.add_argument("--host", default=None)
    serve_parser.add_argument("--port", type=int, default=None)

    record_parser = subparsers.add_parser("record", help="Record from the microphone")
    record_parser.add_argument("--seconds", type=int, default=5,
                               help="Recording length in seconds (default: 5)")
    record_parser.add_argument("--device", default=None,
                               help="Input device index or name")

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    try:
        config.validate()
    except ValueError as e:
        logger.error(f"Invalid configuration in {config.config_path}: {e}")
        sys.exit(1)

    try:
        if args.command == "serve":
            serve(args.host, args.port)
        elif args.command == "record":
            if args.seconds <= 0:
                print("Error: --seconds must be positive", file=sys.stderr)
                sys.exit(2)
            sys.exit(asyncio.run(record(args.seconds, args.device)))

    except KeyboardInterrupt:
        logger.info("Application terminated by user")


if __name__ == "__main__":
    main()
