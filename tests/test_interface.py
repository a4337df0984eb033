import math

import pytest

from dqcoppeliasim.connection import CoppeliaSimError
from dqcoppeliasim.dualquaternion import DualQuaternion
from dqcoppeliasim.interface import CoppeliaSimInterface


class FakeSim:
    handle_world = -1
    handleflag_wxyzquat = 1000
    jointfloatparam_velocity = 2012
    verbosity_warnings = 300
    verbosity_undecorated = 0x0f000

    def __init__(self):
        self.objects = {"/cube": 1, "/joint1": 2, "/joint2": 3}
        self.positions = {}
        self.quaternions = {}
        self.joint_positions = {}
        self.target_positions = {}
        self.target_velocities = {}
        self.velocities = {}
        self.forces = {}
        self.calls = []
        self.stopped = False
        self.lookups = 0

    def addLog(self, verbosity, message):
        self.calls.append(("addLog", verbosity, message))

    def startSimulation(self):
        self.stopped = False

    def stopSimulation(self):
        self.stopped = True

    def getObject(self, name):
        self.lookups += 1
        if name not in self.objects:
            raise RuntimeError("object does not exist")
        return self.objects[name]

    def getObjectPosition(self, handle, relative):
        assert relative == self.handle_world
        return list(self.positions.get(handle, [0.0, 0.0, 0.0]))

    def setObjectPosition(self, handle, position, relative):
        assert relative == self.handle_world
        self.positions[handle] = list(position)

    def getObjectQuaternion(self, flagged, relative):
        assert relative == self.handle_world
        handle = flagged - self.handleflag_wxyzquat
        return list(self.quaternions.get(handle, [1.0, 0.0, 0.0, 0.0]))

    def setObjectQuaternion(self, flagged, quaternion, relative):
        self.calls.append(("setObjectQuaternion", flagged))
        self.quaternions[flagged - self.handleflag_wxyzquat] = list(quaternion)

    def setObjectPose(self, flagged, pose, relative):
        self.calls.append(("setObjectPose", flagged, list(pose)))
        handle = flagged - self.handleflag_wxyzquat
        self.positions[handle] = list(pose[:3])
        self.quaternions[handle] = list(pose[3:])

    def getJointPosition(self, handle):
        return self.joint_positions.get(handle, 0.0)

    def setJointPosition(self, handle, angle):
        self.joint_positions[handle] = angle

    def setJointTargetPosition(self, handle, angle):
        self.target_positions[handle] = angle

    def getObjectFloatParam(self, handle, param):
        assert param == self.jointfloatparam_velocity
        return self.velocities.get(handle, 0.0)

    def setJointTargetVelocity(self, handle, velocity):
        self.target_velocities[handle] = velocity

    def setJointTargetForce(self, handle, force, signed):
        assert signed is True
        self.forces[handle] = force

    def getJointForce(self, handle):
        # Joint perspective: opposite sign of the target force.
        return -self.forces.get(handle, 0.0)


@pytest.fixture
def sim():
    return FakeSim()


@pytest.fixture
def iface(sim):
    interface = CoppeliaSimInterface(lambda host, rpc, cnt, verbose: sim)
    assert interface.connect("localhost", 23000, 2000) is True
    return interface


def _rotation(angle):
    return DualQuaternion(math.cos(angle / 2), 0, 0, math.sin(angle / 2))


def test_translation_round_trip(iface):
    t = DualQuaternion(0, 0.1, -0.2, 0.3)
    iface.set_object_translation("/cube", t)
    assert iface.get_object_translation("/cube") == t


def test_translation_without_slash_uses_same_object(iface, sim):
    t = DualQuaternion(0, 1, 2, 3)
    iface.set_object_translation("cube", t)
    assert sim.positions[1] == [1.0, 2.0, 3.0]
    assert iface.get_object_translation("/cube") == t


def test_requires_connection(sim):
    interface = CoppeliaSimInterface(lambda host, rpc, cnt, verbose: sim)
    with pytest.raises(CoppeliaSimError):
        interface.get_object_translation("/cube")


def test_rotation_round_trip(iface):
    r = _rotation(0.7)
    iface.set_object_rotation("/cube", r)
    assert iface.get_object_rotation("/cube") == r


def test_rotation_is_normalized(iface, sim):
    sim.quaternions[1] = [2.0, 0.0, 0.0, 0.0]
    assert iface.get_object_rotation("/cube") == DualQuaternion(1)


def test_rotation_uses_flagged_handle(iface, sim):
    r = _rotation(0.3)
    iface.set_object_rotation("/cube", r)
    assert ("setObjectQuaternion", 1 + sim.handleflag_wxyzquat) in sim.calls
    assert iface.get_object_rotation("cube") == r


def test_pose_round_trip(iface, sim):
    r = _rotation(1.1)
    t = DualQuaternion(0, 0.5, -0.25, 1.0)
    h = r + 0.5 * DualQuaternion(0, 0, 0, 0, 1) * t * r
    iface.set_object_pose("/cube", h)
    name, flagged, pose = [c for c in sim.calls if c[0] == "setObjectPose"][0]
    assert flagged == 1 + sim.handleflag_wxyzquat
    assert pose[:3] == pytest.approx([0.5, -0.25, 1.0])
    assert pose[3:] == pytest.approx(list(r.vec4()))
    assert iface.get_object_pose("/cube") == h
    assert iface.get_object_translation("/cube") == t


def test_pose_must_be_unit(iface, sim):
    with pytest.raises(CoppeliaSimError, match="unit dual quaternion"):
        iface.set_object_pose("/cube", DualQuaternion(2))
    assert sim.stopped is True


def test_unknown_object_raises(iface, sim):
    with pytest.raises(CoppeliaSimError, match="missing"):
        iface.get_object_translation("/missing")
    assert sim.stopped is True


def test_handles_are_cached(iface, sim):
    sim.positions[1] = [0.25, 0.5, 0.75]
    first = iface.get_object_translation("/cube")
    second = iface.get_object_translation("/cube")
    rotation = iface.get_object_rotation("/cube")
    assert first == DualQuaternion(0, 0.25, 0.5, 0.75)
    assert second == first
    assert rotation == DualQuaternion(1)
    assert sim.lookups == 1


def test_joint_positions_round_trip(iface):
    names = ["/joint1", "/joint2"]
    iface.set_joint_positions(names, [0.5, -1.25])
    assert iface.get_joint_positions(names) == [0.5, -1.25]


def test_joint_positions_size_mismatch(iface):
    with pytest.raises(ValueError, match="incompatible sizes"):
        iface.set_joint_positions(["/joint1", "/joint2"], [0.5])


def test_joint_target_positions(iface, sim):
    iface.set_joint_target_positions(["/joint1", "/joint2"], [0.1, 0.2])
    assert sim.target_positions == {2: 0.1, 3: 0.2}
    with pytest.raises(ValueError):
        iface.set_joint_target_positions(["/joint1"], [0.1, 0.2])


def test_joint_velocities(iface, sim):
    sim.velocities = {2: 1.5, 3: -0.5}
    assert iface.get_joint_velocities(["/joint1", "/joint2"]) == [1.5, -0.5]
    iface.set_joint_target_velocities(["/joint2"], [0.75])
    assert sim.target_velocities == {3: 0.75}
    with pytest.raises(ValueError):
        iface.set_joint_target_velocities(["/joint1", "/joint2"], [])


def test_joint_torques_round_trip(iface, sim):
    names = ["/joint1", "/joint2"]
    iface.set_joint_torques(names, [3.0, -2.0])
    assert sim.forces == {2: 3.0, 3: -2.0}
    assert iface.get_joint_torques(names) == [3.0, -2.0]


def test_joint_torque_sign_is_inverted(iface, sim):
    sim.forces[2] = -4.0  # getJointForce then reports 4.0
    assert iface.get_joint_torques(["/joint1"]) == [-4.0]
    with pytest.raises(ValueError):
        iface.set_joint_torques(["/joint1"], [1.0, 2.0])