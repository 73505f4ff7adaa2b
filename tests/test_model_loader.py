"""Tests for the TFLite model wrapper using a fake interpreter."""

import numpy as np
import pytest

from detection.exceptions import InferenceError
from detection.model_loader import ModelLoader


class FakeInterpreter:
    """Mimics the subset of tflite Interpreter used by ModelLoader."""

    def __init__(self, model_path):
        self.model_path = model_path
        self.allocated = False
        self.tensors = {2: np.arange(6, dtype=np.float32).reshape(1, 6), 3: np.array([[0.5]], dtype=np.float32)}
        self.error = None

    def allocate_tensors(self):
        self.allocated = True

    def get_input_details(self):
        return [{'name': 'input_1', 'index': 0, 'shape': np.array([1, 256, 224, 3]), 'dtype': np.float32}]

    def get_output_details(self):
        return [
            {'name': 'landmarks', 'index': 2, 'shape': np.array([1, 6]), 'dtype': np.float32},
            {'name': 'flag', 'index': 3, 'shape': np.array([1, 1]), 'dtype': np.float32},
        ]

    def set_tensor(self, index, tensor):
        self.tensors[index] = tensor

    def invoke(self):
        if self.error is not None:
            raise self.error

    def get_tensor(self, index):
        return self.tensors[index]


@pytest.fixture
def model_file(tmp_path):
    path = tmp_path / "hand_landmark.tflite"
    path.write_bytes(b"\x00")
    return str(path)


@pytest.fixture
def loader(model_file):
    return ModelLoader(model_file, interpreter_factory=FakeInterpreter).load_model()


class TestModelLoader:
    """Tests for ModelLoader."""

    def test_missing_file(self, tmp_path):
        loader = ModelLoader(str(tmp_path / "missing.tflite"), interpreter_factory=FakeInterpreter)
        with pytest.raises(FileNotFoundError):
            loader.load_model()

    def test_load_allocates_tensors(self, loader, model_file):
        assert loader.interpreter.allocated
        assert loader.interpreter.model_path == model_file
        assert loader.name == "hand_landmark.tflite"

    def test_shapes(self, loader):
        assert loader.get_input_shape() == (256, 224)
        assert loader.get_output_shape(0) == (1, 6)
        assert loader.get_output_shape(1) == (1, 1)

    def test_set_input_adds_batch_and_casts(self, loader):
        loader.set_input(np.zeros((256, 224, 3), dtype=np.float64))
        tensor = loader.interpreter.tensors[0]
        assert tensor.shape == (1, 256, 224, 3)
        assert tensor.dtype == np.float32

    def test_get_output_returns_copy(self, loader):
        output = loader.get_output(0)
        output[:] = -1.0
        np.testing.assert_array_equal(loader.get_output(0), np.arange(6).reshape(1, 6))

    def test_backend_error_becomes_inference_error(self, loader):
        loader.interpreter.error = RuntimeError("tensor allocation failed")
        with pytest.raises(InferenceError) as excinfo:
            loader.invoke()
        assert isinstance(excinfo.value.__cause__, RuntimeError)

    def test_use_before_load(self, model_file):
        loader = ModelLoader(model_file, interpreter_factory=FakeInterpreter)
        with pytest.raises(RuntimeError, match="not loaded"):
            loader.invoke()

    def test_close(self, loader):
        loader.close()
        with pytest.raises(RuntimeError):
            loader.get_output(0)
