"""
Affine transformation helpers.

Transforms are plain 4x4 numpy arrays acting on homogeneous column vectors.
Points pick up the translation column, direction vectors do not, and surface
normals are carried by the inverse transpose of the linear block so they stay
perpendicular under non-uniform scaling.
"""

import numpy as np
from scipy.spatial import transform


def identity_affine() -> np.ndarray:
    return np.eye(4)


def translation_affine(vector) -> np.ndarray:
    """Create a 4x4 translation matrix"""
    dx, dy, dz = np.asarray(vector, dtype='float64')
    return np.array([
        [1, 0, 0, dx],
        [0, 1, 0, dy],
        [0, 0, 1, dz],
        [0, 0, 0, 1]
    ], dtype='float64')


def rotation_affine(angles, seq: str = "xyz", degrees: bool = False) -> np.ndarray:
    """
    Create a 4x4 rotation matrix from Euler angles.

    seq follows scipy conventions: lowercase for extrinsic rotations,
    uppercase for intrinsic ones.
    """
    rotation = transform.Rotation.from_euler(seq, angles, degrees=degrees)
    affine = np.eye(4)
    affine[:3, :3] = rotation.as_matrix()
    return affine


def axis_angle_affine(axis, angle: float, degrees: bool = False) -> np.ndarray:
    """Create a 4x4 rotation of `angle` about `axis` through the origin"""
    axis = np.asarray(axis, dtype='float64')
    norm = np.linalg.norm(axis)
    if norm < 1e-12:
        raise ValueError("Rotation axis is too small")
    if degrees:
        angle = np.radians(angle)
    rotation = transform.Rotation.from_rotvec(axis / norm * angle)
    affine = np.eye(4)
    affine[:3, :3] = rotation.as_matrix()
    return affine


def scaling_affine(scale) -> np.ndarray:
    """Create a 4x4 scaling matrix; a scalar scales uniformly"""
    sx, sy, sz = np.broadcast_to(np.asarray(scale, dtype='float64'), (3,))
    return np.diag([sx, sy, sz, 1.0])


def compose(*affines) -> np.ndarray:
    """
    Compose transforms so that the first argument is applied first.

    compose(A, B, C) == C @ B @ A
    """
    result = np.eye(4)
    for affine in affines:
        result = as_affine(affine) @ result
    return result


def as_affine(affine) -> np.ndarray:
    matrix = np.asarray(affine, dtype='float64')
    if matrix.shape != (4, 4):
        raise ValueError(f"Affine transformation must be 4x4, got shape {matrix.shape}")
    return matrix


def apply_point(affine, point) -> np.ndarray:
    matrix = as_affine(affine)
    return matrix[:3, :3] @ np.asarray(point, dtype='float64') + matrix[:3, 3]


def apply_vector(affine, vector) -> np.ndarray:
    matrix = as_affine(affine)
    return matrix[:3, :3] @ np.asarray(vector, dtype='float64')


def apply_normal(affine, normal) -> np.ndarray:
    """Transform a surface normal and renormalize it"""
    matrix = as_affine(affine)
    linear = matrix[:3, :3]
    out = np.linalg.inv(linear).T @ np.asarray(normal, dtype='float64')
    norm = np.linalg.norm(out)
    if norm > 0:
        out = out / norm
    return out
