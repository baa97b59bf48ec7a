import logging

from .errors import DegenerateGeometryError, NoSelectionError
from .geometry import Rectangle
from .motion import ShakeSequence, compute_scale_margin, compute_translation, generate, is_degenerate
from .parameters import ShakeParameters
from .timeline import Project, VideoEvent

logger = logging.getLogger(__name__)


class ClipShaker:
    """Applies the camera shake to a clip's pan/crop keyframes."""

    def shake_project(self, project: Project, parameters: ShakeParameters) -> VideoEvent:
        """
        Shake the selected video event of a project.

        Args:
            project: Timeline holding the clip
            parameters: Confirmed shake settings

        Returns:
            The event that was shaken

        Raises:
            NoSelectionError: If no video event is selected
            DegenerateGeometryError: If the margin would invert a keyframe
        """
        event = project.find_selected_video_event()
        if event is None:
            logger.warning("[SHAKE] No video event selected")
            raise NoSelectionError("No video event selected!")
        return self.shake_event(event, parameters)

    def shake_event(self, event: VideoEvent, parameters: ShakeParameters) -> VideoEvent:
        """
        Shake one event in place.

        Either every keyframe is shaken or, on error, the event is left
        exactly as it was.
        """
        original = event.snapshot()
        try:
            self._apply(event, parameters)
        except Exception:
            event.restore(original)
            raise
        return event

    def _apply(self, event: VideoEvent, parameters: ShakeParameters):
        if parameters.clear_existing_keyframes:
            event.clear_keyframes()
            if parameters.reset_pan_on_first_frame:
                event.reset_pan()
            event.populate()

        for key in event.keyframes:
            if is_degenerate(key.bounds, parameters):
                raise DegenerateGeometryError(
                    f"Keyframe at frame {key.frame} is {key.bounds.width:g}x{key.bounds.height:g} px, "
                    f"too small for a {parameters.horizontal_amplitude:g}x{parameters.amplitude:g} px margin"
                )

        logger.info(
            f"[SHAKE] Shaking '{event.name}' - keyframes: {len(event.keyframes)}, "
            f"speed: {parameters.speed}, sync: {parameters.sync_factor}, "
            f"amplitude: {parameters.amplitude}, ratio: {parameters.xy_ratio}"
        )

        # n counts keyframes visited, which matches frame numbers only after populate()
        for n, key in enumerate(event.keyframes):
            scale_x, scale_y = compute_scale_margin(key.bounds, parameters.amplitude, parameters.xy_ratio)
            key.scale_by(scale_x, scale_y)
            dx, dy = compute_translation(n, parameters)
            key.move_by(dx, dy)

    def transforms_for(
        self,
        frame_count: int,
        parameters: ShakeParameters,
        rectangle: Rectangle,
    ) -> ShakeSequence:
        """Per-frame transforms without a timeline."""
        if is_degenerate(rectangle, parameters):
            raise DegenerateGeometryError(
                f"Bounds {rectangle.width:g}x{rectangle.height:g} px are too small for a "
                f"{parameters.horizontal_amplitude:g}x{parameters.amplitude:g} px margin"
            )
        return generate(frame_count, parameters, rectangle)
