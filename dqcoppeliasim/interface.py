"""Object poses and joint states of a CoppeliaSim scene."""

from __future__ import annotations

from typing import Iterable, List, Sequence

from .connection import CoppeliaSimConnection
from .dualquaternion import DualQuaternion, is_unit
from .names import check_sizes

# The dual unit E, with E * E == 0.
_E = DualQuaternion(0, 0, 0, 0, 1)


class CoppeliaSimInterface(CoppeliaSimConnection):
    """Reads and writes object poses and joint states in a connected scene.

    Positions, rotations and poses are expressed with respect to the
    absolute (world) frame. Objects are addressed by name; their handles
    are looked up once and cached.
    """

    # ------------------------------------------------------------ by handle

    def _get_object_translation(self, handle: int) -> DualQuaternion:
        self._check_client()
        position = self._sim.getObjectPosition(handle, self._sim.handle_world)
        return DualQuaternion(0, position[0], position[1], position[2])

    def _set_object_translation(self, handle: int, t: DualQuaternion) -> None:
        position = list(t.vec3())
        self._check_client()
        self._sim.setObjectPosition(handle, position, self._sim.handle_world)

    def _get_object_rotation(self, handle: int) -> DualQuaternion:
        self._check_client()
        rotation = self._sim.getObjectQuaternion(
            handle + self._sim.handleflag_wxyzquat, self._sim.handle_world
        )
        # Some engines return quaternions whose norm drifts from one.
        return DualQuaternion(rotation[0], rotation[1], rotation[2], rotation[3]).normalize()

    def _set_object_rotation(self, handle: int, r: DualQuaternion) -> None:
        rotation = list(r.vec4())
        self._check_client()
        self._sim.setObjectQuaternion(
            handle + self._sim.handleflag_wxyzquat, rotation, self._sim.handle_world
        )

    def _get_object_pose(self, handle: int) -> DualQuaternion:
        t = self._get_object_translation(handle)
        r = self._get_object_rotation(handle)
        return r + 0.5 * _E * t * r

    def _set_object_pose(self, handle: int, h: DualQuaternion) -> None:
        rotation = list(h.primary().vec4())
        position = list(h.translation().vec3())
        self._check_client()
        self._sim.setObjectPose(
            handle + self._sim.handleflag_wxyzquat,
            position + rotation,
            self._sim.handle_world,
        )

    def _get_joint_position(self, handle: int) -> float:
        self._check_client()
        return float(self._sim.getJointPosition(handle))

    def _set_joint_position(self, handle: int, angle_rad: float) -> None:
        self._check_client()
        self._sim.setJointPosition(handle, angle_rad)

    def _set_joint_target_position(self, handle: int, angle_rad: float) -> None:
        self._check_client()
        self._sim.setJointTargetPosition(handle, angle_rad)

    def _get_joint_velocity(self, handle: int) -> float:
        self._check_client()
        return float(
            self._sim.getObjectFloatParam(handle, self._sim.jointfloatparam_velocity)
        )

    def _set_joint_target_velocity(self, handle: int, angle_rad_dot: float) -> None:
        self._check_client()
        self._sim.setJointTargetVelocity(handle, angle_rad_dot)

    def _set_joint_torque(self, handle: int, torque: float) -> None:
        self._check_client()
        self._sim.setJointTargetForce(handle, torque, True)

    def _get_joint_torque(self, handle: int) -> float:
        self._check_client()
        # The simulator reports the force from the joint's own perspective,
        # which has the opposite sign of the one used to set it.
        return -float(self._sim.getJointForce(handle))

    def _handles_for(self, names: Iterable[str]) -> List[int]:
        return [self._get_handle_from_map(name) for name in names]

    # ------------------------------------------------------------ objects

    def get_object_translation(self, objectname: str) -> DualQuaternion:
        """The position of the object as a pure quaternion."""
        return self._get_object_translation(self._get_handle_from_map(objectname))

    def set_object_translation(self, objectname: str, t: DualQuaternion) -> None:
        """Move the object to the position given as a pure quaternion."""
        self._set_object_translation(self._get_handle_from_map(objectname), t)

    def get_object_rotation(self, objectname: str) -> DualQuaternion:
        """The rotation of the object as a unit quaternion."""
        return self._get_object_rotation(self._get_handle_from_map(objectname))

    def set_object_rotation(self, objectname: str, r: DualQuaternion) -> None:
        """Rotate the object to the unit quaternion ``r``."""
        self._set_object_rotation(self._get_handle_from_map(objectname), r)

    def get_object_pose(self, objectname: str) -> DualQuaternion:
        """The pose of the object as a unit dual quaternion."""
        return self._get_object_pose(self._get_handle_from_map(objectname))

    def set_object_pose(self, objectname: str, h: DualQuaternion) -> None:
        """Place the object at the pose ``h``, which must be a unit dual quaternion."""
        if not is_unit(h):
            self._throw_runtime_error(
                "CoppeliaSimInterface.set_object_pose. "
                "The pose must be a unit dual quaternion!"
            )
        self._set_object_pose(self._get_handle_from_map(objectname), h)

    # ------------------------------------------------------------ joints

    def get_joint_positions(self, jointnames: Iterable[str]) -> List[float]:
        """The positions of the named joints, in order."""
        return [self._get_joint_position(h) for h in self._handles_for(jointnames)]

    def set_joint_positions(self, jointnames: Sequence[str], angles_rad: Sequence[float]) -> None:
        """Set the positions of the named joints."""
        check_sizes(
            jointnames,
            angles_rad,
            "Error in CoppeliaSimInterface.set_joint_positions: "
            "jointnames and angles_rad have incompatible sizes",
        )
        for name, angle in zip(jointnames, angles_rad):
            self._set_joint_position(self._get_handle_from_map(name), angle)

    def set_joint_target_positions(
        self, jointnames: Sequence[str], angles_rad: Sequence[float]
    ) -> None:
        """Set the target positions of joints in dynamic, position-controlled mode."""
        check_sizes(
            jointnames,
            angles_rad,
            "Error in CoppeliaSimInterface.set_joint_target_positions: "
            "jointnames and angles_rad have incompatible sizes",
        )
        for name, angle in zip(jointnames, angles_rad):
            self._set_joint_target_position(self._get_handle_from_map(name), angle)

    def get_joint_velocities(self, jointnames: Iterable[str]) -> List[float]:
        """The velocities of the named joints, in order."""
        return [self._get_joint_velocity(h) for h in self._handles_for(jointnames)]

    def set_joint_target_velocities(
        self, jointnames: Sequence[str], angles_rad_dot: Sequence[float]
    ) -> None:
        """Set the target velocities of joints in dynamic, velocity-controlled mode."""
        check_sizes(
            jointnames,
            angles_rad_dot,
            "Error in CoppeliaSimInterface.set_joint_target_velocities: "
            "jointnames and angles_rad_dot have incompatible sizes",
        )
        for name, velocity in zip(jointnames, angles_rad_dot):
            self._set_joint_target_velocity(self._get_handle_from_map(name), velocity)

    def set_joint_torques(self, jointnames: Sequence[str], torques: Sequence[float]) -> None:
        """Set the torques of joints in dynamic, force-controlled mode."""
        check_sizes(
            jointnames,
            torques,
            "Error in CoppeliaSimInterface.set_joint_torques: "
            "jointnames and torques have incompatible sizes",
        )
        for name, torque in zip(jointnames, torques):
            self._set_joint_torque(self._get_handle_from_map(name), torque)

    def get_joint_torques(self, jointnames: Iterable[str]) -> List[float]:
        """The torques applied to the named joints, in the sense used to set them."""
        return [self._get_joint_torque(h) for h in self._handles_for(jointnames)]