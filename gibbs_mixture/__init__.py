"""Gibbs sampling for a univariate normal mixture with known unit variance."""

from gibbs_mixture.samplers import (
    gibbs_step,
    initialize_state,
    posterior_mu_params,
    run_chain,
    run_chains,
    sample_mu,
    sample_pi,
    sample_z,
)
from gibbs_mixture.state import Prior, State, Trajectory

__version__ = "0.1.0"
