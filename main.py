#!/usr/bin/env python3
"""
Headless hand tracking runner: camera or video file -> two-stage pipeline -> log.
"""

import signal
import sys

import cv2

from camera import FrameProcessor
from config.settings import Settings
from detection import InferenceError, ModelLoader, TwoStageInferenceEngine
from utils import DebugLogger, FPSCounter, parse_args


def open_video_source(source, width, height, fps):
    """Open a camera index or a video file with OpenCV."""
    cap = cv2.VideoCapture(int(source) if source.isdigit() else source)
    if source.isdigit():
        cap.set(cv2.CAP_PROP_FRAME_WIDTH, width)
        cap.set(cv2.CAP_PROP_FRAME_HEIGHT, height)
        cap.set(cv2.CAP_PROP_FPS, fps)
        cap.set(cv2.CAP_PROP_BUFFERSIZE, 1)
    return cap


class HandTrackingApp:
    """Hand tracking application wiring capture, models and the engine."""

    def __init__(self, args=None):
        self.args = args if args is not None else parse_args()
        self.log = DebugLogger(
            level=DebugLogger.LEVEL_DEBUG if self.args.debug else DebugLogger.LEVEL_INFO,
            log_to_file=self.args.log_file is not None,
            filename=self.args.log_file or "hand_tracking_debug.log",
        )

        self.palm_model = ModelLoader(self.args.palm_model, name='palm_detection').load_model()
        self.landmark_model = ModelLoader(self.args.landmark_model, name='hand_landmark').load_model()
        self.engine = TwoStageInferenceEngine(
            self.palm_model, self.landmark_model,
            palm_smoothing_frames=self.args.palm_smoothing,
            landmark_smoothing_frames=self.args.landmark_smoothing,
        )

        self.frame_processor = FrameProcessor(target_size=Settings.get_input_size())

        width, height = Settings.get_resolution_as_tuple(self.args.res)
        self.camera = open_video_source(self.args.source, width, height, self.args.fps)

        self.fps_counter = FPSCounter(window_size=30)
        self.frame_count = 0
        self.running = True

        signal.signal(signal.SIGINT, self.stop)
        signal.signal(signal.SIGTERM, self.stop)

    def stop(self, signum=None, frame=None):
        self.running = False

    def run_detection_loop(self):
        """Process frames until the source ends, max_frames is reached or a signal arrives."""
        if not self.camera.isOpened():
            self.log.error(f"Could not open video source: {self.args.source}")
            return 1

        self.log.info("Starting hand tracking")
        try:
            while self.running:
                ret, frame = self.camera.read()
                if not ret or frame is None:
                    self.log.info("Video source exhausted")
                    break

                image = self.frame_processor.preprocess(frame)
                try:
                    result = self.engine.process(image)
                except InferenceError as e:
                    self.log.error(f"Tick aborted: {e}")
                    return 1

                self.fps_counter.update()
                self.frame_count += 1
                self.report(result)

                if self.args.max_frames and self.frame_count >= self.args.max_frames:
                    break
        finally:
            self.cleanup()
        return 0

    def report(self, result):
        if result.hand_present:
            wrist_x, wrist_y = result.wrist
            self.log.debug(
                f"Wrist: ({wrist_x:.1f}, {wrist_y:.1f}) flag={result.hand_flag:.2f} "
                f"angle={result.hand_roi.angle:+.2f} open={result.is_open_hand}"
            )
        else:
            self.log.trace(f"No hand (flag={result.hand_flag:.2f})")

        if self.frame_count % Settings.STATUS_INTERVAL_FRAMES == 0:
            status = "DETECTED" if result.hand_present else "NOT DETECTED"
            self.log.info(f"[STATUS] Hand: {status}, FPS: {self.fps_counter.get_fps():.1f}")

    def cleanup(self):
        """Clean up resources."""
        for name, stats in self.engine.performance.get_stats().items():
            self.log.log_performance(name, stats['avg_ms'])

        self.camera.release()
        self.engine.close()
        self.log.info(f"Shut down after {self.frame_count} frames")


def main(argv=None):
    app = HandTrackingApp(parse_args(argv))
    return app.run_detection_loop()


if __name__ == "__main__":
    sys.exit(main())
