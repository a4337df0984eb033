"""Abstract base for robots driven through a CoppeliaSim scene."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Sequence


class CoppeliaSimRobot(ABC):
    """A robot in a CoppeliaSim scene, addressed by its name and joint names."""

    def __init__(self, robot_name: str):
        self.robot_name: str = robot_name
        self.jointnames: List[str] = []
        self.base_frame_name: str = ""

    @abstractmethod
    def get_joint_names(self) -> List[str]:
        """The names of the robot's joints."""

    @abstractmethod
    def set_configuration_space(self, q: Sequence[float]) -> None:
        """Set the joint positions."""

    @abstractmethod
    def get_configuration_space(self) -> List[float]:
        """The joint positions."""

    @abstractmethod
    def set_target_configuration_space(self, q_target: Sequence[float]) -> None:
        """Set the target joint positions."""

    @abstractmethod
    def get_configuration_space_velocities(self) -> List[float]:
        """The joint velocities."""

    @abstractmethod
    def set_target_configuration_space_velocities(self, v_target: Sequence[float]) -> None:
        """Set the target joint velocities."""

    @abstractmethod
    def set_configuration_space_torques(self, t: Sequence[float]) -> None:
        """Set the joint torques."""

    @abstractmethod
    def get_configuration_space_torques(self) -> List[float]:
        """The joint torques."""