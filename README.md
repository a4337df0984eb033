# dqcoppeliasim

A small Python library for working with a CoppeliaSim scene. Positions,
rotations and poses are given as dual quaternions, and joint states are
given as plain lists of floats. It has no dependencies outside the
standard library.

## Modules

- `dqcoppeliasim.dualquaternion`
  - `DualQuaternion` is an immutable dual quaternion. You build it from up to
    eight real coefficients, or from one iterable of them. Missing
    coefficients are zero.
  - It supports `+`, `-`, unary `-` and `*`, both with another dual
    quaternion and with real numbers, and division by a real number.
  - Equality is tested coefficient by coefficient, to within 1e-12.
  - It offers `primary()`, `dual()`, `conj()`, `norm()`, `normalize()`,
    `translation()` (for unit dual quaternions only), `is_unit()` and the
    coefficient views `vec3()`, `vec4()` and `vec8()`.
  - `normalize()` raises `ValueError` when the primary part is zero.
    `translation()` raises `ValueError` when the value is not unit.
  - The module-level `is_unit(dq)` is the same as `dq.is_unit()`.
- `dqcoppeliasim.names` holds the helpers for object paths:
  - `starts_with_slash(name)` and `remove_first_slash(name)`.
  - `standard_name(name, compatibility)` adds a leading `/` when
    `compatibility` is true.
  - `check_sizes(first, second, error_message)` raises `ValueError` when the
    lengths differ, and otherwise returns the length.
- `dqcoppeliasim.enums`
  - The enumerations `Reference`, `JointMode`, `Engine` (an `IntEnum` valued
    by the simulator's engine codes 0 to 4), `JointControlMode`, `Primitive`
    and `ShapeType`.
  - `describe_simulation_state(state)` returns the text for a simulation
    state code. `engine_from_code(code)` returns the matching `Engine`. Both
    raise `ValueError` for unknown codes.
  - The mapping `SIMULATION_STATES` lists the known state codes.
- `dqcoppeliasim.connection`
  - `CoppeliaSimConnection` manages the session. It handles connecting,
    `start_simulation()`, `stop_simulation()`, `set_stepping_mode(flag)`,
    `trigger_next_simulation_step()`, `get_object_handle(s)` and
    `get_object_name(s)`. It caches object handles by name.
  - Failures raise `CoppeliaSimError`, which is a subclass of `RuntimeError`.
    When an object cannot be found, the simulation is stopped before the
    error is raised.
  - `legacy_port_to_zmq(port)` maps the old ports 19997 to 20000 to 23000.
- `dqcoppeliasim.interface`
  - `CoppeliaSimInterface` extends the connection. It gets and sets object
    translations, rotations and poses, all in the world frame.
  - For joints, it has:
    - `get_joint_positions`, `set_joint_positions` and
      `set_joint_target_positions`.
    - `get_joint_velocities` and `set_joint_target_velocities`.
    - `get_joint_torques` and `set_joint_torques`.
  - Setters raise `ValueError` when the names and values differ in length.
  - `set_object_pose` raises `CoppeliaSimError` when the pose is not a unit
    dual quaternion.
- `dqcoppeliasim.robot`
  - `CoppeliaSimRobot` is an abstract base class for robots in a scene. It
    declares the joint-name and configuration-space methods, which a
    subclass must implement.

## Connecting

You build a connection from a client factory. The factory is called as
`client_factory(host, rpc_port, cnt_port, verbose)` and must return an
object exposing the simulator's remote API.

That object needs these methods:

- `startSimulation`, `stopSimulation`, `setStepping`, `step`
- `addLog`
- `getObject`, `getObjectAlias`
- `getObjectPosition`, `setObjectPosition`
- `getObjectQuaternion`, `setObjectQuaternion`, `setObjectPose`
- `getJointPosition`, `setJointPosition`, `setJointTargetPosition`
- `getObjectFloatParam`, `setJointTargetVelocity`
- `setJointTargetForce`, `getJointForce`

It also needs these constants:

- `handle_world`
- `handleflag_wxyzquat`
- `jointfloatparam_velocity`
- `verbosity_warnings`
- `verbosity_undecorated`

```python
from dqcoppeliasim.interface import CoppeliaSimInterface
from dqcoppeliasim.dualquaternion import DualQuaternion

sim = CoppeliaSimInterface(make_client)   # make_client(host, rpc_port, cnt_port, verbose)
sim.connect("localhost", 23000, 300)
sim.start_simulation()

pose = sim.get_object_pose("/Frame")
sim.set_object_translation("/Frame", DualQuaternion(0, 0.1, 0.2, 0.3))
q = sim.get_joint_positions(["/joint1", "/joint2"])
sim.stop_simulation()
```

`connect` runs the factory in a background thread.

- If the factory does not return within the timeout, `connect` reports the
  problem on standard error and raises `CoppeliaSimError`.
- If the factory raises a `RuntimeError` or an `OSError`, `connect` prints
  the error and returns `False`.

Object names without a leading slash are completed to `/name`. To turn this
off, set `enable_deprecated_name_compatibility` to `False`.

The following calls are kept for compatibility and emit a
`DeprecationWarning`:

- `connect` with a `max_try_count` argument, or with a port number in place
  of the host. This form also maps the legacy ports.
- `disconnect()` and `disconnect_all()`, which do nothing.
- `set_synchronous(flag)`, which is the same as `set_stepping_mode(flag)`.
- `wait_for_simulation_step_to_end()`, which always returns 0.

## What it does not do

The package does not contain a remote API client. You must supply the
factory that talks to the simulator.

There are no ready-made robot classes; `CoppeliaSimRobot` only defines the
interface.

The package does not yet offer operations that use the enumerations in
`dqcoppeliasim.enums`, such as:

- plotting frames, planes, lines or other shapes;
- loading models or scenes;
- changing physics engine or joint mode settings.

There is no command-line tool.

## Tests

```
pip install -e .[test]
pytest
```