import math

import pytest

from ndtslam.types import (
    PointCloud,
    Pose2,
    SubVoxel,
    TimedPose2,
    Voxel,
    voxel_index_hash,
)


def test_identity_leaves_point_unchanged():
    assert Pose2.identity().apply((1.5, -2.25)) == pytest.approx((1.5, -2.25))


def test_translation_property():
    assert Pose2(3.0, -4.0, 0.7).translation == (3.0, -4.0)


def test_quarter_turn_rotates_x_axis_onto_y_axis():
    pose = Pose2(0.0, 0.0, math.pi / 2)
    assert pose.apply((1.0, 0.0)) == pytest.approx((0.0, 1.0), abs=1e-12)


def test_compose_matches_sequential_application():
    a = Pose2(1.0, 2.0, 0.3)
    b = Pose2(-0.5, 0.25, -1.1)
    point = (0.7, -0.2)
    assert a.compose(b).apply(point) == pytest.approx(a.apply(b.apply(point)))


def test_mul_with_pose_composes():
    a = Pose2(1.0, 0.0, 0.5)
    b = Pose2(0.0, 1.0, 0.2)
    assert (a * b) == a.compose(b)


def test_mul_with_point_applies():
    pose = Pose2(2.0, -1.0, 1.2)
    assert pose * (0.3, 0.4) == pytest.approx(pose.apply((0.3, 0.4)))


def test_mul_with_unsupported_operand_raises():
    with pytest.raises(TypeError):
        Pose2.identity() * "oops"


def test_inverse_composes_to_identity():
    pose = Pose2(1.3, -0.7, 2.1)
    result = pose.compose(pose.inverse())
    assert (result.x, result.y, result.theta) == pytest.approx((0.0, 0.0, 0.0), abs=1e-12)


def test_timed_pose_defaults_to_identity():
    timed = TimedPose2()
    assert timed.time == 0.0
    assert timed.pose == Pose2.identity()


def test_point_cloud_data_not_shared():
    a = PointCloud()
    b = PointCloud()
    a.data.append((1.0, 1.0))
    assert b.data == []


def test_voxel_defaults():
    voxel = Voxel()
    assert voxel.count == 0
    assert voxel.is_valid is False
    assert voxel.is_planar is False
    other = Voxel()
    voxel.sub_voxels[1] = SubVoxel(count=3)
    assert other.sub_voxels == {}


def test_sub_voxel_defaults():
    sub = SubVoxel()
    assert sub.count == 0
    assert sub.depth == 0
    assert sub.sum == (0.0, 0.0)


def test_hash_of_origin_is_zero():
    assert voxel_index_hash((0, 0)) == 0


def test_hash_is_injective_and_non_negative_on_grid():
    values = [voxel_index_hash((x, y)) for x in range(-20, 21) for y in range(-20, 21)]
    assert all(v >= 0 for v in values)
    assert len(set(values)) == len(values)