"""Tests for the PyTorch paths of quaternion helpers and point application."""

import pytest

# Skip all tests if PyTorch is not available
pytest.importorskip("torch")

import numpy as np  # noqa: E402
import torch  # noqa: E402

from hyperiso import Isometry, apply_isometry  # noqa: E402
from hyperiso.shared.rotation import (  # noqa: E402
    axis_angle_to_quaternion,
    inverse_rotate_vector,
    normalize_quaternion,
    quaternion_conjugate,
    quaternion_identity,
    quaternion_multiply,
    quaternion_to_rotation_matrix,
    rotate_vector,
)


@pytest.fixture
def device():
    return "cuda" if torch.cuda.is_available() else "cpu"


@pytest.fixture
def quats():
    """Two normalized quaternions as NumPy arrays."""
    rng = np.random.default_rng(7)
    q = rng.normal(size=(2, 4))
    return q / np.linalg.norm(q, axis=1, keepdims=True)


class TestRotationParity:
    """Test torch results match NumPy results."""

    def test_multiply(self, quats, device):
        """Test Hamilton product on tensors."""
        q1 = torch.tensor(quats[0], dtype=torch.float64, device=device)
        q2 = torch.tensor(quats[1], dtype=torch.float64, device=device)
        result = quaternion_multiply(q1, q2).cpu().numpy()
        np.testing.assert_allclose(result, quaternion_multiply(quats[0], quats[1]), atol=1e-12)

    def test_multiply_batch(self, quats, device):
        """Test batched Hamilton product keeps the batch dimension."""
        q = torch.tensor(quats, dtype=torch.float64, device=device)
        result = quaternion_multiply(q, q)
        assert result.shape == (2, 4)

    def test_conjugate(self, quats):
        """Test conjugate negates the vector part."""
        q = torch.tensor(quats[0], dtype=torch.float64)
        result = quaternion_conjugate(q).numpy()
        np.testing.assert_allclose(result, quaternion_conjugate(quats[0]))

    def test_rotation_matrix(self, quats):
        """Test quaternion to matrix conversion."""
        q = torch.tensor(quats[0], dtype=torch.float64)
        result = quaternion_to_rotation_matrix(q).numpy()
        np.testing.assert_allclose(result, quaternion_to_rotation_matrix(quats[0]), atol=1e-12)

    def test_axis_angle(self):
        """Test rotation vector conversion."""
        v = np.array([0.3, -0.2, 0.9])
        result = axis_angle_to_quaternion(torch.tensor(v, dtype=torch.float64)).numpy()
        np.testing.assert_allclose(result, axis_angle_to_quaternion(v), atol=1e-12)

    def test_rotate_vector(self, quats, device):
        """Test rotating tensors with a NumPy quaternion."""
        v = torch.tensor([[1.0, 0.0, 0.0], [0.0, 2.0, -1.0]], dtype=torch.float64, device=device)
        result = rotate_vector(quats[0], v).cpu().numpy()
        np.testing.assert_allclose(result, rotate_vector(quats[0], v.cpu().numpy()), atol=1e-12)

        back = inverse_rotate_vector(quats[0], rotate_vector(quats[0], v))
        torch.testing.assert_close(back, v)

    def test_normalize_and_identity(self, device):
        """Test normalize and identity on tensors."""
        q = normalize_quaternion(torch.tensor([2.0, 0.0, 0.0, 0.0]))
        torch.testing.assert_close(q, torch.tensor([1.0, 0.0, 0.0, 0.0]))

        identity = quaternion_identity(dtype=torch.float32, device=device)
        assert identity.device.type == torch.device(device).type
        assert identity.dtype == torch.float32


class TestApplyTorch:
    """Test applying isometries to tensors."""

    def test_matches_numpy(self, device):
        """Test the tensor path agrees with the Numba path."""
        iso = Isometry.from_translation(0.2, 0.1, -0.3) * Isometry.from_axis_angle([0, 1, 0], 1.1)
        points = np.array([[0.0, 0.0, 0.0, 1.0], [0.4, -0.1, 0.2, 1.0]])
        tensor = torch.tensor(points, dtype=torch.float64, device=device)

        result = apply_isometry(iso, tensor)
        assert isinstance(result, torch.Tensor)
        assert result.device == tensor.device
        np.testing.assert_allclose(result.cpu().numpy(), apply_isometry(iso, points), atol=1e-12)

    def test_operator_dispatch(self, device):
        """Test isometry * tensor returns a tensor of the same dtype."""
        iso = Isometry.from_translation(0.5, 0.0, 0.0)
        tensor = torch.tensor([[0.0, 0.0, 0.0, 1.0]], dtype=torch.float32, device=device)
        result = iso * tensor
        assert isinstance(result, torch.Tensor)
        assert result.dtype == torch.float32
        assert result.shape == (1, 4)
