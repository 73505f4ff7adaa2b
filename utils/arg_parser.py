"""
Command line argument parsing utilities.
"""

import argparse
from config.settings import Settings


def parse_args(argv=None):
    """Parse command line arguments for the hand tracking runner."""
    parser = argparse.ArgumentParser(description="Two-stage palm detection and hand landmark tracking")

    # Source settings
    parser.add_argument('--source', type=str, default=Settings.DEFAULT_SOURCE,
                       help=f'Camera index or video file path (default: {Settings.DEFAULT_SOURCE})')
    parser.add_argument('--res', type=str, default=Settings.DEFAULT_RESOLUTION,
                       help=f'Camera resolution WxH (e.g., 640x480, 320x240, default: {Settings.DEFAULT_RESOLUTION})')
    parser.add_argument('--fps', type=int, default=Settings.DEFAULT_FPS,
                       help=f'Camera framerate (default: {Settings.DEFAULT_FPS})')

    # Model settings
    parser.add_argument('--palm_model', type=str, default=Settings.DEFAULT_PALM_MODEL_PATH,
                       help=f'Path to TFLite palm detection model (default: {Settings.DEFAULT_PALM_MODEL_PATH})')
    parser.add_argument('--landmark_model', type=str, default=Settings.DEFAULT_LANDMARK_MODEL_PATH,
                       help=f'Path to TFLite hand landmark model (default: {Settings.DEFAULT_LANDMARK_MODEL_PATH})')

    # Smoothing settings
    parser.add_argument('--palm_smoothing', type=int, default=Settings.DEFAULT_PALM_SMOOTHING_FRAMES,
                       help=f'Frames averaged for palm box/keypoints (default: {Settings.DEFAULT_PALM_SMOOTHING_FRAMES})')
    parser.add_argument('--landmark_smoothing', type=int, default=Settings.DEFAULT_LANDMARK_SMOOTHING_FRAMES,
                       help=f'Frames averaged for hand landmarks (default: {Settings.DEFAULT_LANDMARK_SMOOTHING_FRAMES})')

    # Run settings
    parser.add_argument('--max_frames', type=int, default=0,
                       help='Stop after N frames (default: 0, run until the source ends)')
    parser.add_argument('--debug', action='store_true',
                       help='Enable debug output')
    parser.add_argument('--log_file', type=str, default=None,
                       help='Also write log output to this file')

    return parser.parse_args(argv)
