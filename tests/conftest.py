"""Pytest configuration and shared fixtures."""

import random

import numpy as np
import pytest

from recurneat.run.config import Config
from recurneat.genotype   import ConnectionGene, Genome, NodeKey


@pytest.fixture(autouse=True)
def set_random_seeds():
    """Set random seeds for reproducibility."""
    np.random.seed(42)
    random.seed(42)
    yield
    np.random.seed(None)
    random.seed(None)


@pytest.fixture
def config():
    """Default config: 2 inputs (3 slots), 1 output (2 slots), small population."""
    config = Config(None)
    config.population_size = 10
    config.num_inputs      = 2
    config.num_outputs     = 1
    config.max_inputs      = 3
    config.max_outputs     = 2
    return config


@pytest.fixture
def keys():
    """Node keys of a genome built from the 'config' fixture."""
    return {
        'bias': NodeKey(0),
        'in1' : NodeKey(1),
        'in2' : NodeKey(2),
        'out' : NodeKey(4),     # max_inputs + 1
    }


def _connect(genome: Genome, source: NodeKey, destination: NodeKey, weight: float, innovation: int, **kwargs):
    conn = ConnectionGene(source, destination, weight, innovation, genome._config, **kwargs)
    genome.conn_genes[innovation] = conn
    return conn


@pytest.fixture
def connect():
    """Add a connection gene to a genome by hand (the caller refreshes the genome)."""
    return _connect
