"""Enumerations for scene, joint and physics settings, and simulation states."""

from __future__ import annotations

from enum import Enum, IntEnum, auto
from types import MappingProxyType
from typing import Mapping


class Reference(Enum):
    """The frame in which a quantity is expressed."""

    BODY_FRAME = auto()
    ABSOLUTE_FRAME = auto()


class JointMode(Enum):
    """How a joint is driven by the simulator."""

    KINEMATIC = auto()
    DYNAMIC = auto()
    DEPENDENT = auto()


class Engine(IntEnum):
    """Physics engines, valued by the simulator's engine code."""

    BULLET = 0
    ODE = 1
    VORTEX = 2
    NEWTON = 3
    MUJOCO = 4


class JointControlMode(Enum):
    """The control loop used by a dynamic joint."""

    FREE = auto()
    FORCE = auto()
    VELOCITY = auto()
    POSITION = auto()
    SPRING = auto()
    CUSTOM = auto()
    TORQUE = auto()


class Primitive(Enum):
    """Primitive shapes that can be added to a scene."""

    PLANE = auto()
    DISC = auto()
    CUBOID = auto()
    SPHEROID = auto()
    CYLINDER = auto()
    CONE = auto()
    CAPSULE = auto()


class ShapeType(Enum):
    """Which shapes to select when listing the shapes under an object."""

    DYNAMIC = auto()
    STATIC = auto()
    ANY = auto()


SIMULATION_STATES: Mapping[int, str] = MappingProxyType(
    {
        0: "simulation stopped",
        8: "simulation paused",
        17: "simulation advancing running",
        22: "simulation advancing last before stop",
        19: "simulation advancing last before pause",
        16: "simulation advancing first after stop or simulation advancing",
        20: "simulation advancing first after pause",
        21: "simulation advancing about to stop",
    }
)


def describe_simulation_state(state: int) -> str:
    """A readable description of a simulation state code.

    Raises ``ValueError`` for a code the simulator does not define.
    """
    try:
        return SIMULATION_STATES[state]
    except KeyError:
        raise ValueError(f"unknown simulation state {state!r}") from None


def engine_from_code(code: int) -> Engine:
    """The engine identified by the simulator's engine code.

    Raises ``ValueError`` for an unknown code.
    """
    try:
        return Engine(code)
    except ValueError:
        raise ValueError(f"unknown physics engine code {code!r}") from None