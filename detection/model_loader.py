"""
TensorFlow Lite model loading and execution for the two pipeline stages.
"""

import os
import numpy as np

from utils.debug_logger import get_logger
from .exceptions import InferenceError

logger = get_logger(__name__)


def _default_interpreter_factory(model_path):
    try:
        from tflite_runtime.interpreter import Interpreter
    except ImportError:
        from tensorflow.lite.python.interpreter import Interpreter
    return Interpreter(model_path=model_path)


class ModelLoader:
    """TensorFlow Lite model wrapper exposing set_input / invoke / get_output."""

    def __init__(self, model_path, name=None, interpreter_factory=None):
        """Initialize model loader.

        Args:
            model_path: Path to the .tflite file
            name: Label used in log messages (defaults to the file name)
            interpreter_factory: Callable(model_path) -> interpreter; defaults to
                tflite_runtime, falling back to tensorflow.lite
        """
        self.model_path = model_path
        self.name = name or os.path.basename(model_path)
        self.interpreter_factory = interpreter_factory or _default_interpreter_factory
        self.interpreter = None
        self.input_details = None
        self.output_details = None
        self.input_shape = None

    def load_model(self):
        """Load the model and allocate its tensors."""
        if not os.path.exists(self.model_path):
            raise FileNotFoundError(f"Model file not found: {self.model_path}")

        self.interpreter = self.interpreter_factory(self.model_path)
        self.interpreter.allocate_tensors()

        self.input_details = self.interpreter.get_input_details()
        self.output_details = self.interpreter.get_output_details()
        self.input_shape = tuple(self.input_details[0]['shape'][1:3])  # (height, width)

        logger.info("Model loaded: %s (%s)", self.name, self.model_path)
        for detail in self.input_details:
            logger.info("  input  %-24s shape=%s dtype=%s", detail.get('name', ''),
                        list(detail['shape']), np.dtype(detail['dtype']).name)
        for detail in self.output_details:
            logger.info("  output %-24s shape=%s dtype=%s", detail.get('name', ''),
                        list(detail['shape']), np.dtype(detail['dtype']).name)
        return self

    def _require_loaded(self):
        if self.interpreter is None:
            raise RuntimeError(f"Model {self.name} not loaded. Call load_model() first.")

    def get_input_shape(self):
        """Get the required input shape (height, width)."""
        self._require_loaded()
        return self.input_shape

    def get_output_shape(self, index):
        self._require_loaded()
        return tuple(int(d) for d in self.output_details[index]['shape'])

    def set_input(self, tensor):
        """Set the input tensor, adding the batch dimension if missing."""
        self._require_loaded()
        detail = self.input_details[0]
        tensor = np.asarray(tensor, dtype=detail['dtype'])
        if tensor.ndim == 3:
            tensor = np.expand_dims(tensor, axis=0)
        self.interpreter.set_tensor(detail['index'], tensor)

    def invoke(self):
        """Run the model; backend failures surface as InferenceError."""
        self._require_loaded()
        try:
            self.interpreter.invoke()
        except (RuntimeError, ValueError) as e:
            raise InferenceError(f"{self.name} inference failed: {e}") from e

    def get_output(self, index):
        """Copy of output tensor index."""
        self._require_loaded()
        return np.array(self.interpreter.get_tensor(self.output_details[index]['index']))

    def close(self):
        """Release the interpreter."""
        self.interpreter = None
        self.input_details = None
        self.output_details = None
