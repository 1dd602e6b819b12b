"""
Emotion Detection API - FastAPI Application.

HTTP entry point to the emotion detector. Each caller's speaker baseline is
kept in memory, keyed by userId; callers without a userId share one baseline.
"""

import asyncio
import logging
import math
from collections import OrderedDict
from contextlib import asynccontextmanager
from typing import Dict, Optional

from fastapi import FastAPI, File, Form, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from moodmirror.analysis.detector import EmotionDetector, EmptyInputError
from moodmirror.models.samples import EmotionSample
from moodmirror.models.state import UserBaseline
from moodmirror.config.config_loader import config


logger = logging.getLogger(__name__)

ANONYMOUS = "anonymous"


class BaselineStore:
    """In-memory speaker baselines keyed by user id.

    Holds at most ``max_users`` baselines, dropping the least recently seen
    user first. ``hold(user_id)`` serializes the read-analyze-write cycle for
    one user so concurrent requests never overwrite each other's update.
    """

    def __init__(self, max_users: Optional[int] = None):
        self.max_users = max_users or config.get('api.max_tracked_users', 10000)
        assert self.max_users > 0, "max_users must be positive"
        self._baselines: "OrderedDict[str, UserBaseline]" = OrderedDict()
        self._locks: Dict[str, asyncio.Lock] = {}
        self._holders: Dict[str, int] = {}

    def get(self, user_id: Optional[str]) -> UserBaseline:
        key = user_id or ANONYMOUS
        if key in self._baselines:
            self._baselines.move_to_end(key)
            return self._baselines[key]
        return UserBaseline()

    def put(self, user_id: Optional[str], baseline: UserBaseline) -> None:
        key = user_id or ANONYMOUS
        self._baselines[key] = baseline
        self._baselines.move_to_end(key)
        while len(self._baselines) > self.max_users:
            evicted, _ = self._baselines.popitem(last=False)
            logger.debug(f"Dropped baseline for {evicted}")

    @asynccontextmanager
    async def hold(self, user_id: Optional[str]):
        """Exclusive access to one user's baseline for the duration of the block."""
        key = user_id or ANONYMOUS
        lock = self._locks.setdefault(key, asyncio.Lock())
        self._holders[key] = self._holders.get(key, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._holders[key] -= 1
            if self._holders[key] == 0:
                # No waiters left
                del self._holders[key]
                del self._locks[key]

    def __contains__(self, user_id: Optional[str]) -> bool:
        return (user_id or ANONYMOUS) in self._baselines

    def __len__(self) -> int:
        return len(self._baselines)


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def create_app(detector: Optional[EmotionDetector] = None) -> FastAPI:
    """Build the API application.

    Args:
        detector: Emotion detector to serve, built from configuration if None

    Returns:
        FastAPI application with the /api/emotion routes
    """
    if detector is None:
        detector = EmotionDetector(simulated_latency=config.get('api.simulated_latency', 1.0))

    version = str(config.get('api.version', '1.0.0'))
    supported_emotions = list(config.get('api.supported_emotions', []))
    max_upload_bytes = int(config.get('api.max_upload_mb', 10) * 1024 * 1024)

    app = FastAPI(
        title="MoodMirror Emotion Detection API",
        description="Detects the speaker's emotion in a recorded voice clip.",
        version=version,
    )
    app.state.detector = detector
    app.state.baselines = BaselineStore()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.get('api.cors_origins', ["http://localhost:3000", "http://localhost:8501"]),
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    @app.post("/api/emotion")
    async def detect_emotion(
        audio: Optional[UploadFile] = File(None),
        userId: Optional[str] = Form(None),
        duration: Optional[float] = Form(None),
    ):
        """Detect the emotion in an uploaded audio clip."""
        if audio is None:
            return error_response(400, "No audio data provided")

        try:
            payload = await audio.read()

            if len(payload) > max_upload_bytes:
                return error_response(413, "Audio data too large")
            if duration is not None and (not math.isfinite(duration) or duration < 0):
                return error_response(400, "Duration must be a finite non-negative number")

            sample = EmotionSample(
                audio=payload,
                duration=duration or 0.0,
                mime_type=audio.content_type or "application/octet-stream",
            )

            baselines: BaselineStore = app.state.baselines
            async with baselines.hold(userId):
                result, baseline = await app.state.detector.analyze(
                    sample, baselines.get(userId), user_id=userId or None
                )
                baselines.put(userId, baseline)

            logger.info(f"Detected {result.emotion.value} for {userId or ANONYMOUS}")
            return {"success": True, "data": result.to_dict()}

        except EmptyInputError:
            return error_response(400, "No audio data provided")
        except Exception as e:
            logger.error(f"Error processing emotion detection: {e}", exc_info=True)
            return error_response(500, "Failed to process emotion detection")

    @app.get("/api/emotion")
    async def describe_api():
        """Report API status and the advertised emotions."""
        return {
            "message": "Emotion detection API is running",
            "version": version,
            "supportedEmotions": supported_emotions,
        }

    logger.info(f"Emotion API created (version {version})")
    return app
