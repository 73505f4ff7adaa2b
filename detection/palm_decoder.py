"""
Palm detection output decoding.

Turns raw per-anchor scores and regressions into a single palm box and seven
palm keypoints. Overlapping candidates are merged by a score-weighted average
around the best candidate instead of being suppressed.
"""

import numpy as np

from config.settings import Settings
from utils.debug_logger import get_logger
from utils.math_utils import sigmoid

logger = get_logger(__name__)


def overlap_similarity(reference, boxes):
    """Intersection over union of one [x, y, w, h] box against an (N, 4) array.

    Disjoint boxes and zero-area unions score 0.
    """
    ref_x, ref_y, ref_w, ref_h = reference
    x, y, w, h = boxes[:, 0], boxes[:, 1], boxes[:, 2], boxes[:, 3]

    min_x = np.maximum(ref_x, x)
    max_x = np.minimum(ref_x + ref_w, x + w)
    min_y = np.maximum(ref_y, y)
    max_y = np.minimum(ref_y + ref_h, y + h)

    intersection = (max_x - min_x) * (max_y - min_y)
    normalization = ref_w * ref_h + w * h - intersection
    empty = (min_x > max_x) | (min_y > max_y) | (normalization == 0.0)

    with np.errstate(divide='ignore', invalid='ignore'):
        similarity = intersection / normalization
    return np.where(empty, 0.0, similarity)


class PalmDetectorDecoder:
    """Decodes palm detector outputs into one aggregated palm box and keypoints.

    The decoder keeps the last aggregate. When no candidate survives a tick,
    `palm_box` and `palm_keypoints` keep their previous values; they are not
    reset to zero.
    """

    def __init__(self, num_keypoints=Settings.PALM_NUM_KEYPOINTS,
                 score_threshold=Settings.PALM_SCORE_THRESHOLD,
                 suppression_threshold=Settings.PALM_SUPPRESSION_THRESHOLD,
                 score_clipping=Settings.PALM_SCORE_CLIPPING,
                 decode_scale=Settings.PALM_DECODE_SCALE):
        self.num_keypoints = num_keypoints
        self.score_threshold = score_threshold
        self.suppression_threshold = suppression_threshold
        self.score_clipping = score_clipping
        self.decode_scale = decode_scale

        self.palm_box = np.zeros(4, dtype=np.float64)
        self.palm_keypoints = np.zeros((num_keypoints, 2), dtype=np.float64)

        # Best candidate of the latest tick that had one
        self.reference_box = np.zeros(4, dtype=np.float64)
        self.max_score = -1.0

    @property
    def num_coords(self):
        return Settings.PALM_BOX_COORDS + self.num_keypoints * 2

    def decode_candidates(self, raw_scores, raw_boxes, anchors):
        """Threshold and decode every anchor.

        Returns:
            tuple: (indices, scores, boxes, keypoints) of the surviving anchors;
                   boxes are (K, 4) [min_x, min_y, w, h], keypoints (K, 7, 2)
        """
        scores = np.asarray(raw_scores, dtype=np.float64).reshape(-1)
        regressors = np.asarray(raw_boxes, dtype=np.float64).reshape(len(scores), self.num_coords)

        scores = sigmoid(np.clip(scores, -self.score_clipping, self.score_clipping))
        indices = np.flatnonzero(scores >= self.score_threshold)

        deltas = regressors[indices]
        anchor = np.asarray(anchors, dtype=np.float64)[indices]
        anchor_x, anchor_y = anchor[:, 0], anchor[:, 1]
        scale_w, scale_h = anchor[:, 2], anchor[:, 3]

        center_x = deltas[:, 0] / self.decode_scale * scale_w + anchor_x
        center_y = deltas[:, 1] / self.decode_scale * scale_h + anchor_y
        w = deltas[:, 2] / self.decode_scale * scale_w
        h = deltas[:, 3] / self.decode_scale * scale_h

        min_x, max_x = center_x - w * 0.5, center_x + w * 0.5
        min_y, max_y = center_y - h * 0.5, center_y + h * 0.5
        boxes = np.stack([min_x, min_y, max_x - min_x, max_y - min_y], axis=1)

        offset = Settings.PALM_BOX_COORDS
        keypoints = deltas[:, offset:offset + self.num_keypoints * 2].reshape(-1, self.num_keypoints, 2)
        keypoints = np.stack([
            keypoints[:, :, 0] / self.decode_scale * scale_w[:, np.newaxis] + anchor_x[:, np.newaxis],
            keypoints[:, :, 1] / self.decode_scale * scale_h[:, np.newaxis] + anchor_y[:, np.newaxis],
        ], axis=2)

        return indices, scores[indices], boxes, keypoints

    def decode(self, raw_scores, raw_boxes, anchors):
        """Decode one palm detector output into (palm_box, palm_keypoints).

        Args:
            raw_scores: Classificator logits, NumBoxes values
            raw_boxes: Regressors, NumBoxes x (4 + 2 * num_keypoints) values
            anchors: (NumBoxes, 4) anchor table in model output order

        Returns:
            tuple: (palm_box (4,), palm_keypoints (num_keypoints, 2)), normalized
        """
        _, scores, boxes, keypoints = self.decode_candidates(raw_scores, raw_boxes, anchors)

        self.max_score = -1.0
        if len(scores) == 0:
            logger.debug("No palm candidate above %.2f", self.score_threshold)
            return self.palm_box, self.palm_keypoints

        # Ties go to the later anchor
        best = len(scores) - 1 - int(np.argmax(scores[::-1]))
        self.max_score = float(scores[best])
        self.reference_box = boxes[best].copy()

        similarity = overlap_similarity(self.reference_box, boxes)
        keep = similarity >= self.suppression_threshold

        total_score = scores[keep].sum()
        if total_score == 0.0:
            return self.palm_box, self.palm_keypoints

        weights = scores[keep] / total_score
        self.palm_box = weights @ boxes[keep]
        self.palm_keypoints = np.tensordot(weights, keypoints[keep], axes=1)

        logger.debug("Palm: score=%.3f merged=%d box=%s", self.max_score, int(keep.sum()),
                     np.round(self.palm_box, 4).tolist())
        return self.palm_box, self.palm_keypoints

    def reset(self):
        self.palm_box = np.zeros(4, dtype=np.float64)
        self.palm_keypoints = np.zeros((self.num_keypoints, 2), dtype=np.float64)
        self.reference_box = np.zeros(4, dtype=np.float64)
        self.max_score = -1.0
