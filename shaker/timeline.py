"""
In-memory editing timeline: project -> tracks -> events -> pan/crop keyframes.

Mirrors the parts of a host editor's object model the shake touches, and
round-trips through plain dicts for the JSON API.
"""
import copy
import logging
from typing import List, Optional

from .errors import InputValidationError
from .geometry import Rectangle
from .parameters import parse_checkbox

logger = logging.getLogger(__name__)


class Keyframe:
    """A pan/crop keyframe: the visible bounds at a given frame."""

    def __init__(self, frame: int, bounds: Rectangle):
        self.frame = frame
        self.bounds = bounds

    def scale_by(self, scale_x: float, scale_y: float):
        self.bounds = self.bounds.scale_by(scale_x, scale_y)

    def move_by(self, dx: float, dy: float):
        self.bounds = self.bounds.move_by(dx, dy)

    def to_dict(self) -> dict:
        return {"frame": self.frame, "bounds": self.bounds.to_dict()}

    @classmethod
    def from_dict(cls, data: dict) -> "Keyframe":
        return cls(frame=int(data["frame"]), bounds=Rectangle.from_dict(data["bounds"]))

    def __repr__(self) -> str:
        return f"Keyframe(frame={self.frame}, bounds={self.bounds!r})"


class VideoEvent:
    """A clip placed on a video track."""

    def __init__(
        self,
        name: str,
        length: int,
        width: int,
        height: int,
        selected: bool = False,
        keyframes: Optional[List[Keyframe]] = None,
    ):
        """
        Initialize event.

        Args:
            name: Display name of the clip
            length: Duration in frames
            width: Native media width in pixels
            height: Native media height in pixels
            selected: Whether the clip is selected on the timeline
            keyframes: Pan/crop keyframes (a full-frame keyframe at 0 if empty)
        """
        self.name = name
        self.length = length
        self.width = width
        self.height = height
        self.selected = selected
        self.keyframes = sorted(keyframes or [], key=lambda key: key.frame)
        if not self.keyframes:
            self.keyframes = [Keyframe(0, self.full_frame())]

    def full_frame(self) -> Rectangle:
        return Rectangle.full_frame(self.width, self.height)

    def clear_keyframes(self):
        """Remove every keyframe except the first one."""
        self.keyframes = self.keyframes[:1]

    def reset_pan(self):
        """Restore the first keyframe to the default (full frame) zoom."""
        self.keyframes[0].bounds = self.full_frame()

    def populate(self):
        """One keyframe per frame, each starting from the first keyframe's bounds."""
        first = self.keyframes[0]
        first.frame = 0
        self.keyframes = [first] + [
            Keyframe(frame, first.bounds) for frame in range(1, self.length)
        ]
        logger.debug(f"[TIMELINE] '{self.name}' populated with {len(self.keyframes)} keyframes")

    def snapshot(self) -> List[Keyframe]:
        return copy.deepcopy(self.keyframes)

    def restore(self, keyframes: List[Keyframe]):
        self.keyframes = keyframes

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "length": self.length,
            "width": self.width,
            "height": self.height,
            "selected": self.selected,
            "keyframes": [key.to_dict() for key in self.keyframes],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "VideoEvent":
        length = int(data["length"])
        width = int(data["width"])
        height = int(data["height"])
        if length <= 0 or width <= 0 or height <= 0:
            raise ValueError("length, width and height must be positive")
        return cls(
            name=str(data.get("name", "")),
            length=length,
            width=width,
            height=height,
            selected=parse_checkbox("selected", data.get("selected", False)),
            keyframes=[Keyframe.from_dict(key) for key in data.get("keyframes", [])],
        )


class Track:
    """A timeline track holding events of one kind."""

    VIDEO = "video"
    AUDIO = "audio"

    def __init__(self, name: str = "", kind: str = VIDEO, events: Optional[List[VideoEvent]] = None):
        self.name = name
        self.kind = kind
        self.events = events or []

    def is_video(self) -> bool:
        return self.kind == self.VIDEO

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "kind": self.kind,
            "events": [
                event.to_dict() if isinstance(event, VideoEvent) else event
                for event in self.events
            ],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Track":
        kind = data.get("kind", cls.VIDEO)
        if kind not in (cls.VIDEO, cls.AUDIO):
            raise ValueError(f"unknown track kind '{kind}'")
        events = list(data.get("events", []))
        if kind == cls.VIDEO:
            events = [VideoEvent.from_dict(event) for event in events]
        return cls(name=str(data.get("name", "")), kind=kind, events=events)


class Project:
    """An editing project: an ordered list of tracks."""

    def __init__(self, tracks: Optional[List[Track]] = None):
        self.tracks = tracks or []

    def find_selected_video_event(self) -> Optional[VideoEvent]:
        """First selected event on a video track, in track order."""
        for track in self.tracks:
            if not track.is_video():
                continue
            for event in track.events:
                if event.selected:
                    return event
        return None

    def to_dict(self) -> dict:
        return {"tracks": [track.to_dict() for track in self.tracks]}

    @classmethod
    def from_dict(cls, data) -> "Project":
        """
        Build a project from its JSON form.

        Raises:
            InputValidationError: If the payload is malformed
        """
        if not isinstance(data, dict):
            raise InputValidationError("Invalid project: expected an object with 'tracks'")
        try:
            return cls(tracks=[Track.from_dict(track) for track in data.get("tracks", [])])
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise InputValidationError(f"Invalid project: {e}") from e
