"""Enumerations for emotions, detector models and session states"""

from enum import Enum


class EmotionType(Enum):
    """Closed set of emotions the detector can emit"""
    HAPPY = "happy"
    SAD = "sad"
    ANGRY = "angry"
    CALM = "calm"
    EXCITED = "excited"
    ANXIOUS = "anxious"
    NEUTRAL = "neutral"
    SURPRISED = "surprised"
    DISGUSTED = "disgusted"
    FEARFUL = "fearful"


class DetectorModel(Enum):
    """Detection model tiers"""
    BASIC = "basic"
    ADVANCED = "advanced"
    CUSTOM = "custom"


class SpeakerCount(Enum):
    """Number of speakers heard in a sample"""
    SINGLE = "single"
    MULTIPLE = "multiple"


class Severity(Enum):
    """How much attention an emotion warrants"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class MoodTrend(Enum):
    """Direction of confidence over a session"""
    IMPROVING = "improving"
    DECLINING = "declining"
    STABLE = "stable"


class SessionState(Enum):
    """Recording session states"""
    IDLE = "idle"
    RECORDING = "recording"
    ANALYZING = "analyzing"
    DEVICE_UNAVAILABLE = "device_unavailable"
