from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class Prior:
    """
    Normal prior shared by every component mean.

    Attributes:
        m0: Prior mean of each component mean.
        tau0: Prior precision of each component mean.
    """

    m0: float = 0.0
    tau0: float = 0.1

    def __post_init__(self):
        if not self.tau0 > 0:
            raise ValueError(f"tau0 must be positive, got {self.tau0}")


@dataclass
class State:
    """
    Represents the state of the Gibbs sampler.

    Attributes:
        z: Cluster assignments for each data point.
        pi: Mixture weights for each component.
        mu: Mean parameters for each component.
    """

    z: np.ndarray
    pi: np.ndarray
    mu: np.ndarray

    def relabel(self) -> "State":
        """
        Relabel the state by sorting components by their means.

        Returns:
            Relabeled state with components sorted by mean.
        """
        order = np.argsort(self.mu)
        inv = np.empty_like(order)
        inv[order] = np.arange(len(order))
        return State(inv[self.z], self.pi[order], self.mu[order])


@dataclass
class Trajectory:
    """
    Every iterate of one Gibbs chain.

    Row 0 holds the initial state, row i the state after iteration i.

    Attributes:
        mu: Component means, shape (n_iter, K).
        pi: Mixture weights, shape (n_iter, K).
        z: Cluster assignments, shape (n_iter, n).
        runtime: Wall-clock time of the chain in seconds.
    """

    mu: np.ndarray
    pi: np.ndarray
    z: np.ndarray
    runtime: float = 0.0

    @classmethod
    def empty(cls, n_iter: int, K: int, n: int) -> "Trajectory":
        """Allocate a trajectory for n_iter iterations of K components and n points."""
        return cls(
            mu=np.empty((n_iter, K)),
            pi=np.empty((n_iter, K)),
            z=np.empty((n_iter, n), dtype=np.int64),
        )

    @property
    def n_iter(self) -> int:
        return self.mu.shape[0]

    @property
    def K(self) -> int:  # pylint: disable=invalid-name
        return self.mu.shape[1]

    def record(self, it: int, state: State):
        """Store state as iteration it."""
        self.mu[it] = state.mu
        self.pi[it] = state.pi
        self.z[it] = state.z

    def state(self, it: int) -> State:
        return State(self.z[it].copy(), self.pi[it].copy(), self.mu[it].copy())

    def discard(self, burn: int) -> "Trajectory":
        """
        Drop the first burn iterations.

        Args:
            burn: Number of burn-in iterations to discard.

        Returns:
            Trajectory holding the remaining iterations.

        Raises:
            ValueError: If burn leaves no iteration.
        """
        if not 0 <= burn < self.n_iter:
            raise ValueError(f"burn must be in [0, {self.n_iter}), got {burn}")
        return Trajectory(
            self.mu[burn:].copy(),
            self.pi[burn:].copy(),
            self.z[burn:].copy(),
            self.runtime,
        )

    def relabel(self) -> "Trajectory":
        """
        Sort the components of every iteration by their means.

        The sampler has no ordering constraint, so labels may switch along
        the chain; summaries of individual components are taken on the
        relabeled trajectory.
        """
        order = np.argsort(self.mu, axis=1)
        inv = np.argsort(order, axis=1)
        return Trajectory(
            np.take_along_axis(self.mu, order, axis=1),
            np.take_along_axis(self.pi, order, axis=1),
            np.take_along_axis(inv, self.z, axis=1),
            self.runtime,
        )
